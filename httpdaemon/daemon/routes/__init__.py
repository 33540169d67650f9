import importlib
import logging
import pkgutil

logger = logging.getLogger(__name__)


def discover_routes() -> list:
    """
    Import every module in this package and collect the (path, method, handler)
    entries from their `ROUTES` lists, in module order.
    """
    discovered = []
    for _, module_name, _ in sorted(pkgutil.iter_modules(__path__), key=lambda m: m[1]):
        module = importlib.import_module(f'{__name__}.{module_name}')
        routes = getattr(module, 'ROUTES', None)
        if isinstance(routes, list):
            discovered.extend(routes)
    return discovered


def register_routes(registry) -> None:
    """Register all built-in routes with `registry`."""
    for path, method, handler in discover_routes():
        registry.register(path, method, handler)
    logger.debug(f'{len(registry)} routes registered')
