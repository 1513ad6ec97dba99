#!/usr/bin/env python3
"""
Test suite for the smoke client (HTTP session mocked)
"""

import unittest
from unittest.mock import MagicMock

from config import TEMPLATE_URI
from mcp_client import CalculatorHttpClient, McpError


def _response(payload, status=200, content_type="application/json"):
    resp = MagicMock()
    resp.status_code = status
    resp.headers = {"content-type": content_type}
    resp.json.return_value = payload
    return resp


class TestCalculatorHttpClient(unittest.TestCase):
    """Test request building and envelope handling"""

    def setUp(self):
        self.session = MagicMock()
        self.client = CalculatorHttpClient("http://calc.local:3000/", session=self.session)

    def test_open_calculator_request(self):
        self.session.post.return_value = _response({
            "jsonrpc": "2.0", "id": 1, "result": {"content": [{"type": "text", "text": "Calculator opened."}]},
        })
        result = self.client.open_calculator("5")

        self.assertEqual(result["content"][0]["text"], "Calculator opened.")
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "http://calc.local:3000/mcp")
        self.assertEqual(kwargs["json"], {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "tools/call",
            "params": {"name": "open_calculator", "arguments": {"initial_value": "5"}},
        })

    def test_request_ids_increment(self):
        self.session.post.return_value = _response({"jsonrpc": "2.0", "id": 1, "result": {}})
        self.client.rpc("tools/call", {"name": "open_calculator"})
        self.client.rpc("tools/call", {"name": "open_calculator"})
        ids = [c.kwargs["json"]["id"] for c in self.session.post.call_args_list]
        self.assertEqual(ids, [1, 2])

    def test_read_template(self):
        self.session.post.return_value = _response({
            "jsonrpc": "2.0", "id": 1, "result": {"contents": [{"uri": TEMPLATE_URI, "text": "<html/>"}]},
        })
        resource = self.client.read_template()
        self.assertEqual(resource["uri"], TEMPLATE_URI)
        self.assertEqual(self.session.post.call_args.kwargs["json"]["params"], {"uri": TEMPLATE_URI})

    def test_error_envelope_raises(self):
        self.session.post.return_value = _response({
            "jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "Method not found"},
        })
        with self.assertRaises(McpError) as ctx:
            self.client.rpc("tools/list")
        self.assertEqual(ctx.exception.code, -32601)
        self.assertNotIn("params", self.session.post.call_args.kwargs["json"])

    def test_internal_error_raises(self):
        self.session.post.return_value = _response(
            {"jsonrpc": "2.0", "id": 1, "error": {"code": -32603, "message": "Internal server error"}},
            status=500,
        )
        with self.assertRaises(McpError) as ctx:
            self.client.open_calculator()
        self.assertEqual(ctx.exception.code, -32603)

    def test_health(self):
        self.session.get.return_value = _response({"status": "ok"})
        self.assertEqual(self.client.health(), {"status": "ok"})
        self.assertEqual(self.session.get.call_args.args[0], "http://calc.local:3000/health")


if __name__ == "__main__":
    unittest.main()
