"""Minimal HTTP request-dispatch daemon with a uniform JSON envelope."""

__version__ = "0.1.0"
