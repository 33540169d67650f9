#!/usr/bin/env python
import sys
import argparse
import logging
import threading
import signal

from httpdaemon.constants import (
    FNAME_APPLICATION_SCHEMA,
    KEY_APPLICATION_SCHEMA,
    LOG_LEVEL,
    MAX_PORT,
    MIN_PORT,
    PATH_APP_CONFIG,
)
from httpdaemon.daemon.config_loader import load_configuration
from httpdaemon.daemon.controller import DaemonController
from httpdaemon.daemon.daemon import daemon_loop
from httpdaemon.library.system_utils import resolve_config_file
from httpdaemon.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def port_number(value: str) -> int:
    """argparse type for TCP ports, bounded like `daemon_http_port` in the schema."""
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not MIN_PORT <= port <= MAX_PORT:
        raise argparse.ArgumentTypeError(f"port must be within {MIN_PORT}-{MAX_PORT}, got {port}")
    return port


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="HTTP request-dispatch daemon")
    parser.add_argument("-d", "--daemon", action="store_true",
                        help="Run in daemon mode (use system-wide config)")

    parser.add_argument("-c", "--config", type=str, default=None,
                        help="Path to application configuration yaml file")

    parser.add_argument("-p", "--port", type=port_number, default=None,
                        help="Port for the daemon API (overrides the configuration file)")

    parser.add_argument(
        "-l", "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging output level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    root_logger = setup_logging(args.log_level or LOG_LEVEL)
    controller = DaemonController()

    # Register our signal handlers
    signal.signal(signal.SIGINT, lambda s, f: controller.stop())
    signal.signal(signal.SIGTERM, lambda s, f: controller.stop())

    file_app_config = resolve_config_file(args.config, daemon=args.daemon)

    file_app_schema = PATH_APP_CONFIG / FNAME_APPLICATION_SCHEMA

    try:
        app_configuration = load_configuration(file_app_config, file_app_schema, KEY_APPLICATION_SCHEMA)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f'Failed to load configuration: {e}')
        return 1

    # set to configuration file logging level if not set on the command line
    if args.log_level:
        app_configuration['log_level'] = args.log_level
    else:
        root_logger.setLevel(app_configuration.get('log_level') or LOG_LEVEL)

    if args.port is not None:
        app_configuration['daemon_http_port'] = args.port

    controller.set_config(app_configuration, scope='app')

    # Start the daemon loop in a dedicated thread after setting config
    daemon_thread = threading.Thread(target=daemon_loop, args=(controller,), daemon=True)
    daemon_thread.start()
    while daemon_thread.is_alive():
        daemon_thread.join(timeout=0.5)

    logger.info('Cleaning up...')
    if not controller.started.is_set():
        logger.error('Daemon failed to start')
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
