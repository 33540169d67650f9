from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Tuple

from httpdaemon.library.exceptions import DuplicateRouteError, InvalidRouteError

logger = logging.getLogger(__name__)

# handler(request) -> (body, message, code)
Handler = Callable[[Any], Tuple[Any, str, int]]


@dataclass(frozen=True)
class RouteBinding:
    """A request path and HTTP method bound to the handler that serves them."""

    path: str
    method: str
    handler: Handler

    @property
    def description(self) -> str:
        doc = getattr(self.handler, '__doc__', None)
        return doc.strip() if doc else "No description"


class RouteRegistry:
    """
    Insertion-ordered collection of route bindings.

    Registrations are serialized by a lock and replace the stored tuple
    wholesale, so `lookup` can scan the current tuple without locking.

    Example:
        registry = RouteRegistry()
        registry.register('/ping', 'GET', handle_ping)
        binding = registry.lookup('/ping', 'GET')
    """

    def __init__(self) -> None:
        self._bindings: Tuple[RouteBinding, ...] = ()
        self._lock = threading.Lock()

    def register(self, path: str, method: str, handler: Handler) -> None:
        self.add(RouteBinding(path=path, method=method, handler=handler))

    def add(self, binding: RouteBinding) -> None:
        """
        Append `binding` to the registry.

        Raises:
            InvalidRouteError: If the path or method is empty.
            TypeError: If the handler is not callable.
            DuplicateRouteError: If the (path, method) pair is already bound.
        """
        if not binding.path or not binding.method:
            raise InvalidRouteError(f"route needs a path and a method, got {binding.path!r} {binding.method!r}")
        if not callable(binding.handler):
            raise TypeError('handler must be callable')

        with self._lock:
            for existing in self._bindings:
                if existing.path == binding.path and existing.method == binding.method:
                    raise DuplicateRouteError(binding.path, binding.method)
            logger.info("add route: %s %s", binding.path, binding.method)
            self._bindings = self._bindings + (binding,)

    def lookup(self, path: str, method: str) -> Optional[RouteBinding]:
        for binding in self._bindings:
            if binding.path != path:
                continue
            if binding.method != method:
                continue
            return binding
        return None

    def __iter__(self) -> Iterator[RouteBinding]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)
