"""
Envelope codec for the daemon API.

Every response is wrapped as ``{"code": <int>, "msg": <str>, "body": <any>}``.
`decode` also accepts responses from peers that report their message under
``error`` instead of ``msg``.
"""
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict

from httpdaemon.library.exceptions import InvalidEnvelopeError, SerializationError

logger = logging.getLogger(__name__)


@dataclass
class Envelope:
    code: int
    message: str
    body: Any = None

    def as_dict(self) -> Dict[str, Any]:
        return {'code': self.code, 'msg': self.message, 'body': self.body}


def encode(code: int, message: str, body: Any) -> bytes:
    """
    Serialize an envelope to UTF-8 JSON bytes.

    Args:
        code (int): Outcome code, 0 for success and negative for failures.
        message (str): Human readable message.
        body (Any): JSON serializable payload.

    Returns:
        bytes: The serialized envelope.

    Raises:
        SerializationError: If `body` cannot be represented as strict JSON
            (unsupported types, NaN or infinite floats, circular or too deep nesting).
    """
    try:
        return json.dumps({'code': code, 'msg': message, 'body': body}, allow_nan=False).encode('utf-8')
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(f"envelope is not serializable: {e}") from e


def parse_raw(data: bytes) -> Dict[str, Any]:
    """
    Best-effort parse of `data` into a mapping. Never raises; anything that is
    not a JSON object comes back as an empty dict.
    """
    try:
        parsed = json.loads(data)
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug(f"could not parse envelope bytes: {e}")
        return {}
    if not isinstance(parsed, dict):
        return {}
    return parsed


def decode(data: bytes) -> Envelope:
    """
    Decode a serialized envelope, tolerating peers that use ``error``
    in place of ``msg`` and that omit ``body``.

    Raises:
        InvalidEnvelopeError: If ``code`` is missing or not numeric, or if
            neither ``msg`` nor ``error`` holds a string.
    """
    raw = parse_raw(data)

    if 'code' not in raw:
        raise InvalidEnvelopeError("invalid api response: missing 'code'")
    code = raw['code']
    if isinstance(code, bool) or not isinstance(code, (int, float)):
        raise InvalidEnvelopeError(f"invalid api response: 'code' must be numeric, got {type(code).__name__}")
    if isinstance(code, float) and not math.isfinite(code):
        raise InvalidEnvelopeError(f"invalid api response: 'code' must be finite, got {code}")

    if 'msg' in raw:
        message = raw['msg']
    elif 'error' in raw:
        message = raw['error']
    else:
        raise InvalidEnvelopeError("invalid api response: missing 'msg' or 'error'")
    if not isinstance(message, str):
        raise InvalidEnvelopeError(f"invalid api response: message must be a string, got {type(message).__name__}")

    return Envelope(code=int(code), message=message, body=raw.get('body'))
