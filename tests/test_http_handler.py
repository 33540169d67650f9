import http.client
import threading
import unittest

import httpx

from httpdaemon.daemon.controller import DaemonController
from httpdaemon.daemon.envelope import decode
from httpdaemon.daemon.http_server import start_http_server
from httpdaemon.daemon.routes import register_routes


def handle_ping(request):
    """Answer a ping."""
    return {'ok': True}, '', 0


def handle_unserializable(request):
    return {'x': object()}, '', 0


class TestRootHandler(unittest.TestCase):
    """Exercise the dispatcher through a real server on an ephemeral port."""

    @classmethod
    def setUpClass(cls):
        cls.controller = DaemonController()
        cls.controller.running = True
        register_routes(cls.controller.registry)
        cls.controller.registry.register('/ping', 'GET', handle_ping)
        cls.controller.registry.register('/unserializable', 'GET', handle_unserializable)

        cls.httpd = start_http_server(port=0, controller=cls.controller, host='127.0.0.1')
        cls.thread = threading.Thread(target=cls.httpd.serve_forever, daemon=True)
        cls.thread.start()

        host, port = cls.httpd.server_address
        cls.client = httpx.Client(base_url=f'http://{host}:{port}', timeout=5.0)

    @classmethod
    def tearDownClass(cls):
        cls.client.close()
        cls.httpd.shutdown()
        cls.httpd.server_close()
        cls.thread.join(timeout=5)

    def test_ping(self):
        r = self.client.get('/ping')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.headers['content-type'], 'application/json')
        self.assertEqual(r.json(), {'code': 0, 'msg': '', 'body': {'ok': True}})

    def test_unknown_route_is_still_200(self):
        r = self.client.post('/ping')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {'code': -4, 'msg': 'invalid request /ping / POST', 'body': {}})

    def test_query_string_not_part_of_path(self):
        r = self.client.get('/ping', params={'x': '1'})
        self.assertEqual(r.json()['code'], 0)

    def test_malformed_query(self):
        # sent raw so the client library does not re-escape the query
        host, port = self.httpd.server_address
        conn = http.client.HTTPConnection(host, port, timeout=5)
        try:
            conn.request("GET", "/ping?a=%zz")
            envelope = decode(conn.getresponse().read())
        finally:
            conn.close()
        self.assertEqual(envelope.code, -1)
        self.assertEqual(envelope.body, {})

    def test_unserializable_body_sends_empty_response(self):
        r = self.client.get('/unserializable')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.content, b'')

    def test_status_route(self):
        envelope = decode(self.client.get('/status').content)
        self.assertEqual(envelope.code, 0)
        self.assertTrue(envelope.body['running'])
        self.assertEqual(envelope.body['routes'], len(self.controller.registry))

    def test_help_route_lists_routes_in_order(self):
        body = decode(self.client.get('/help').content).body
        listed = [(entry['path'], entry['method']) for entry in body]
        self.assertEqual(listed, [(b.path, b.method) for b in self.controller.registry])
        ping = next(entry for entry in body if entry['path'] == '/ping')
        self.assertEqual(ping['description'], 'Answer a ping.')

    def test_echo_route_get(self):
        envelope = decode(self.client.get('/echo', params={'msg': 'hi', 'tag': ['a', 'b']}).content)
        self.assertEqual(envelope.code, 0)
        self.assertEqual(envelope.body['msg'], 'hi')
        self.assertEqual(envelope.body['params']['tag'], ['a', 'b'])

    def test_echo_route_form_post(self):
        r = self.client.post('/echo', data={'msg': 'from form'})
        envelope = decode(r.content)
        self.assertEqual(envelope.code, 0)
        self.assertEqual(envelope.body['msg'], 'from form')

    def test_echo_route_missing_parameter(self):
        envelope = decode(self.client.get('/echo', params={'msg': ''}).content)
        self.assertEqual(envelope.code, -2)
        self.assertIn("'msg'", envelope.message)

    def test_head_sends_no_body(self):
        r = self.client.head('/ping')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.content, b'')
        self.assertGreater(int(r.headers['content-length']), 0)

    def test_concurrent_requests(self):
        results = []

        def call():
            with httpx.Client(base_url=self.client.base_url, timeout=5.0) as c:
                results.append(c.get('/ping').json()['code'])

        threads = [threading.Thread(target=call) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(results, [0] * 10)


if __name__ == '__main__':
    unittest.main()
