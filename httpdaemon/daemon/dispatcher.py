"""
Request dispatch for the daemon API.

The Dispatcher parses request parameters, resolves the route binding for the
request path and method, runs its handler and writes the envelope produced
from the handler's ``(body, message, code)`` result.
"""
import io
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import unquote_plus

from httpdaemon.constants import (
    CODE_HANDLER_ERROR,
    CODE_MISSING_PARAMETER,
    CODE_PARSE_ERROR,
    CODE_ROUTE_NOT_FOUND,
    FORM_BODY_METHODS,
    FORM_CONTENT_TYPE,
)
from httpdaemon.daemon.envelope import Envelope, encode
from httpdaemon.daemon.registry import RouteBinding, RouteRegistry
from httpdaemon.library.exceptions import (
    MissingParameterError,
    ParseFormError,
    RouteNotFoundError,
    SerializationError,
)

logger = logging.getLogger(__name__)

Params = Dict[str, List[str]]

# a '%' that does not start a two digit hex escape
_BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')


@dataclass
class RequestContext:
    """
    Everything a route handler sees of an inbound request.

    `sink` receives the raw response bytes; `params` is filled in by the
    Dispatcher before the handler runs.
    """

    path: str
    method: str
    query: str = ''
    body: bytes = b''
    content_type: str = ''
    remote_addr: str = '-'
    sink: Any = field(default_factory=io.BytesIO)
    controller: Any = None
    params: Params = field(default_factory=dict)

    def param(self, key: str, default: Optional[str] = None) -> Optional[str]:
        values = self.params.get(key)
        return values[0] if values else default


def _parse_encoded(data: str, params: Params) -> None:
    for item in data.split('&'):
        if not item:
            continue
        if ';' in item:
            raise ParseFormError("invalid semicolon separator in query")
        if _BAD_ESCAPE.search(item):
            raise ParseFormError(f"invalid URL escape in {item!r}")
        key, _, value = item.partition('=')
        try:
            key = unquote_plus(key, errors='strict')
            value = unquote_plus(value, errors='strict')
        except UnicodeDecodeError as e:
            raise ParseFormError(f"invalid UTF-8 in {item!r}: {e}") from e
        params.setdefault(key, []).append(value)


def parse_params(request: RequestContext) -> Params:
    """
    Collect the form-encoded body (for POST, PUT and PATCH) and the query
    string of `request` into a mapping of name to values. Body values come
    before query values for a repeated name.

    Raises:
        ParseFormError: If either source is not valid form encoding.
    """
    params: Params = {}

    media_type = request.content_type.split(';', 1)[0].strip().lower()
    if request.method in FORM_BODY_METHODS and media_type == FORM_CONTENT_TYPE and request.body:
        try:
            body = request.body.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseFormError(f"form body is not valid UTF-8: {e}") from e
        _parse_encoded(body, params)

    _parse_encoded(request.query, params)
    return params


def validate_params(required_keys: Iterable[str], params: Params) -> None:
    """
    Check that every key in `required_keys` has a non-empty first value.

    Args:
        required_keys (Iterable[str]): Parameter names, checked in order.
        params (dict): Parsed request parameters.

    Raises:
        MissingParameterError: Naming the first key that is absent or empty.
    """
    for key in required_keys:
        values = params.get(key)
        if not values or values[0] == '':
            raise MissingParameterError(key)


class Dispatcher:
    """Routes requests to the bindings held in a RouteRegistry."""

    def __init__(self, registry: RouteRegistry):
        self.registry = registry

    def resolve(self, path: str, method: str) -> RouteBinding:
        binding = self.registry.lookup(path, method)
        if binding is None:
            raise RouteNotFoundError(path, method)
        return binding

    def dispatch(self, request: RequestContext) -> Optional[Envelope]:
        """
        Serve one request and write its envelope to `request.sink`.

        Request-scoped failures are turned into negative-code envelopes and
        never raised.

        Returns:
            Envelope: The envelope written, or None if it could not be serialized.
        """
        logger.debug("request %s %s -> %s?%s [%s]", request.remote_addr, request.method,
                     request.path, request.query, request.path)

        try:
            request.params = parse_params(request)
        except ParseFormError as e:
            logger.warning(f"fail to parse form {request.path}?{request.query}: {e}")
            return self.respond(request, {}, str(e), CODE_PARSE_ERROR)

        try:
            binding = self.resolve(request.path, request.method)
        except RouteNotFoundError as e:
            logger.info(str(e))
            return self.respond(request, {}, str(e), CODE_ROUTE_NOT_FOUND)

        try:
            body, message, code = binding.handler(request)
        except MissingParameterError as e:
            logger.info(f"{request.method} {request.path}: {e}")
            return self.respond(request, {}, str(e), CODE_MISSING_PARAMETER)
        except Exception as e:
            logger.exception("Exception during route dispatch: %s", e)
            return self.respond(request, {}, f"handler error: {e}", CODE_HANDLER_ERROR)

        return self.respond(request, body, message, code)

    def respond(self, request: RequestContext, body: Any, message: str, code: int) -> Optional[Envelope]:
        try:
            data = encode(code, message, body)
        except SerializationError as e:
            logger.error(f"fail to response {request.method} {request.path}: {e}")
            return None
        request.sink.write(data)
        return Envelope(code=code, message=message, body=body)
