from httpdaemon.constants import BIND_ADDRESS, DAEMON_HTTP_PORT, SOCKET_TIMEOUT
from httpdaemon.daemon.controller import DaemonController
from httpdaemon.daemon.http_server import start_http_server
from httpdaemon.daemon.routes import register_routes

import logging
import select

logger = logging.getLogger(__name__)

def daemon_loop(controller: DaemonController) -> None:
    """
    Basic daemon loop with HTTP server. Keeps running until controller.running is False.
    """
    logger.info("Starting daemon loop")

    register_routes(controller.registry)

    app_config = controller.get_config('app')
    port = app_config.get('daemon_http_port', DAEMON_HTTP_PORT)
    host = app_config.get('bind_address', BIND_ADDRESS)
    timeout = app_config.get('socket_timeout', SOCKET_TIMEOUT)

    try:
        httpd = start_http_server(port=port, controller=controller, host=host)
    except OSError as e:
        logger.error(f"Failed to start HTTP server on {host}:{port}: {e}")
        controller.stop()
        return
    httpd.socket.settimeout(timeout)  # Avoid blocking forever on request

    controller.server_address = httpd.server_address
    controller.running = True
    controller.started.set()

    try:
        while controller.running:
            rlist, _, _ = select.select([httpd.socket], [], [], timeout)
            if rlist:
                httpd.handle_request()
    finally:
        httpd.server_close()

    logger.info("Daemon loop stopped")
