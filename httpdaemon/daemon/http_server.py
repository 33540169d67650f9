from http.server import ThreadingHTTPServer
import logging

from httpdaemon.constants import BIND_ADDRESS, DAEMON_HTTP_PORT
from httpdaemon.daemon.http_handler import RootHandler

logger = logging.getLogger(__name__)

def start_http_server(port: int = DAEMON_HTTP_PORT, controller=None, host: str = BIND_ADDRESS) -> ThreadingHTTPServer:
    server_address = (host, port)
    logger.debug(f'Starting API at: {server_address}')
    httpd = ThreadingHTTPServer(server_address, RootHandler)
    httpd.controller = controller
    httpd.dispatcher = controller.dispatcher
    logger.info(f"HTTP server running on port {httpd.server_address[1]}")
    return httpd
