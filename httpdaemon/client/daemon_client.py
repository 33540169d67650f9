import logging
from typing import Optional

import httpx

from httpdaemon.client.settings import get_settings
from httpdaemon.daemon.envelope import Envelope, decode

logger = logging.getLogger(__name__)


class DaemonClient:
    """
    Tiny async wrapper for calling a daemon API and unwrapping its envelopes.

    Responses are decoded leniently: peers may report their message under
    ``error`` and may omit ``body``. Anything without a numeric ``code`` raises
    InvalidEnvelopeError.
    """
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = get_settings()
        self.base = (base_url or settings.daemon_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base, timeout=self.timeout, transport=self.transport)

    async def request(self, path: str, method: str = "GET", params: Optional[dict] = None) -> Envelope:
        async with self._client() as c:
            if method in ("POST", "PUT", "PATCH"):
                r = await c.request(method, path, data=params or {})
            else:
                r = await c.request(method, path, params=params or {})
            r.raise_for_status()
        envelope = decode(r.content)
        logger.debug(f"{method} {self.base}{path} -> code={envelope.code}")
        return envelope

    async def get(self, path: str, **params) -> Envelope:
        return await self.request(path, "GET", params)

    async def post(self, path: str, **params) -> Envelope:
        return await self.request(path, "POST", params)

    async def status(self) -> dict:
        return (await self.get("/status")).body
