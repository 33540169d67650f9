import logging
import threading

from httpdaemon.daemon.dispatcher import Dispatcher
from httpdaemon.daemon.registry import RouteRegistry

logger = logging.getLogger(__name__)


class DaemonController:
    """
    Central controller object for the daemon.
    Tracks runtime state, configuration, and owns the route registry
    and the dispatcher that serves it.
    """

    def __init__(self, registry: RouteRegistry = None):
        self.running = False
        self.config_store = {}
        self.registry = registry if registry is not None else RouteRegistry()
        self.dispatcher = Dispatcher(self.registry)
        self.started = threading.Event()
        self.server_address = None

    def stop(self):
        """Signal the daemon to shut down."""
        logger.info("Stopping daemon...")
        self.running = False

    def set_config(self, config: dict, scope: str = 'default') -> None:
        """
        Store a configuration dictionary under a named scope.

        Args:
            config (dict): Configuration data to store.
            scope (str): Namespace under which to store the config.
        """
        self.config_store[scope] = config

    def get_config(self, scope: str = 'default') -> dict:
        """
        Retrieve stored configuration for a given scope.

        Args:
            scope (str): Namespace to retrieve config from.

        Returns:
            dict: The configuration dictionary (empty if not set).
        """
        return self.config_store.get(scope, {})
