import io
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler
from urllib.parse import unquote, urlsplit

from httpdaemon.daemon.dispatcher import RequestContext

"""
HTTP handler for the daemon API.

Defines the RootHandler class, which turns every inbound HTTP request into a
RequestContext and hands it to the Dispatcher attached to the server.
"""

logger = logging.getLogger(__name__)


class RootHandler(BaseHTTPRequestHandler):
    """
    HTTP request handler for the daemon API.

    All methods share one code path. The handler reaches the Dispatcher via
    `self.server.dispatcher` and the DaemonController via
    `self.server.controller`, both attached during server setup.
    """

    def _read_body(self) -> bytes:
        try:
            length = int(self.headers.get('Content-Length', '0'))
        except ValueError:
            length = 0
        return self.rfile.read(length) if length > 0 else b''

    def _handle(self):
        """
        Dispatch the request and send the envelope with a 200 status line.

        The envelope carries the outcome; when it could not be serialized the
        response body is whatever the sink holds, usually nothing.
        """
        target = urlsplit(self.path)
        sink = io.BytesIO()
        request = RequestContext(
            path=unquote(target.path),
            method=self.command,
            query=target.query,
            body=self._read_body(),
            content_type=self.headers.get('Content-Type', ''),
            remote_addr=f"{self.client_address[0]}:{self.client_address[1]}",
            sink=sink,
            controller=getattr(self.server, 'controller', None),
        )

        self.server.dispatcher.dispatch(request)

        payload = sink.getvalue()
        self.send_response(HTTPStatus.OK)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(payload)))
        self.end_headers()
        if self.command != 'HEAD':
            self.wfile.write(payload)

    do_GET = _handle
    do_POST = _handle
    do_PUT = _handle
    do_PATCH = _handle
    do_DELETE = _handle
    do_HEAD = _handle

    def log_message(self, format, *args):
        """
        Override BaseHTTPRequestHandler logging to avoid AttributeError when
        parse_request fails before setting self.command/self.path.
        """
        command = getattr(self, 'command', '-')
        logger.debug(f"HTTP {command}: {format % args}")
