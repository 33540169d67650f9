import json
import os
import unittest
from unittest.mock import patch

import httpx

from httpdaemon.client.daemon_client import DaemonClient
from httpdaemon.client.settings import ClientSettings
from httpdaemon.daemon.envelope import Envelope
from httpdaemon.library.exceptions import InvalidEnvelopeError


def mock_transport(payload: bytes, status_code: int = 200, seen: list = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, content=payload)
    return httpx.MockTransport(handler)


class TestDaemonClient(unittest.IsolatedAsyncioTestCase):

    async def test_get_decodes_envelope(self):
        seen = []
        client = DaemonClient('http://daemon.test/', transport=mock_transport(
            b'{"code": 0, "msg": "", "body": {"ok": true}}', seen=seen))

        envelope = await client.get('/ping', name='x')

        self.assertEqual(envelope, Envelope(0, '', {'ok': True}))
        self.assertEqual(seen[0].method, 'GET')
        self.assertEqual(str(seen[0].url), 'http://daemon.test/ping?name=x')

    async def test_post_sends_form(self):
        seen = []
        client = DaemonClient('http://daemon.test', transport=mock_transport(
            b'{"code": 0, "msg": "ok"}', seen=seen))

        envelope = await client.post('/echo', msg='hello')

        self.assertEqual(envelope.message, 'ok')
        self.assertIsNone(envelope.body)
        self.assertEqual(seen[0].method, 'POST')
        self.assertEqual(seen[0].headers['content-type'], 'application/x-www-form-urlencoded')
        self.assertEqual(seen[0].content, b'msg=hello')

    async def test_peer_error_field(self):
        client = DaemonClient('http://daemon.test', transport=mock_transport(b'{"code": -9, "error": "boom"}'))
        envelope = await client.get('/x')
        self.assertEqual((envelope.code, envelope.message), (-9, 'boom'))

    async def test_invalid_envelope(self):
        client = DaemonClient('http://daemon.test', transport=mock_transport(b'{"error": "boom"}'))
        with self.assertRaises(InvalidEnvelopeError):
            await client.get('/x')

    async def test_http_error_status(self):
        client = DaemonClient('http://daemon.test', transport=mock_transport(b'oops', status_code=500))
        with self.assertRaises(httpx.HTTPStatusError):
            await client.get('/x')

    async def test_status(self):
        payload = json.dumps({'code': 0, 'msg': '', 'body': {'running': True, 'routes': 3}}).encode()
        client = DaemonClient('http://daemon.test', transport=mock_transport(payload))
        self.assertEqual(await client.status(), {'running': True, 'routes': 3})


class TestClientSettings(unittest.TestCase):

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = ClientSettings()
        self.assertEqual(settings.daemon_url, 'http://localhost:2822')
        self.assertEqual(settings.timeout, 5.0)

    def test_environment_override(self):
        with patch.dict(os.environ, {'HTTPDAEMON_DAEMON_URL': 'http://peer:9000', 'HTTPDAEMON_TIMEOUT': '2.5'}):
            client = DaemonClient()
        self.assertEqual(client.base, 'http://peer:9000')
        self.assertEqual(client.timeout, 2.5)


if __name__ == '__main__':
    unittest.main()
