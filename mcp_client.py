from __future__ import annotations

import argparse
import asyncio
import itertools
import json
from typing import Any, Dict, Optional

import requests

from fastmcp import Client
from fastmcp.client.transports import StreamableHttpTransport

from calculator_tools import TOOL_NAME
from config import TEMPLATE_URI
from keypad import Keypad


class McpError(Exception):
    def __init__(self, code: int, message: str):
        super().__init__(f"MCP error {code}: {message}")
        self.code = code
        self.message = message


# ---------- HTTP shim client ----------

class CalculatorHttpClient:
    """
    Talks to backend_api over plain HTTP.
    Exposes:
      - health() / info() / widget_html()
      - rpc(method, params) against POST /mcp
      - read_template() / open_calculator(initial_value)
    """

    def __init__(self, base_url: str = "http://localhost:3000", timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._ids = itertools.count(1)

    def health(self) -> Dict[str, Any]:
        return self._get("/health").json()

    def info(self) -> Dict[str, Any]:
        return self._get("/info").json()

    def widget_html(self) -> str:
        return self._get("/calculator").text

    def rpc(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Send one JSON-RPC request and return its "result".
        Error envelopes (including HTTP 500 internal errors) raise McpError.
        """
        request: Dict[str, Any] = {"jsonrpc": "2.0", "id": next(self._ids), "method": method}
        if params is not None:
            request["params"] = params

        resp = self._session.post(
            f"{self.base_url}/mcp",
            json=request,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=self._timeout,
        )
        if "application/json" not in resp.headers.get("content-type", ""):
            resp.raise_for_status()
        data = resp.json()
        if "error" in data:
            err = data["error"] or {}
            raise McpError(err.get("code", 0), err.get("message", "Unknown error"))
        return data.get("result") or {}

    def read_template(self) -> Dict[str, Any]:
        contents = self.rpc("resources/read", {"uri": TEMPLATE_URI}).get("contents") or []
        if not contents:
            raise McpError(0, f"No contents returned for {TEMPLATE_URI}")
        return contents[0]

    def open_calculator(self, initial_value: Optional[str] = None) -> Dict[str, Any]:
        arguments = {} if initial_value is None else {"initial_value": initial_value}
        return self.rpc("tools/call", {"name": TOOL_NAME, "arguments": arguments})

    def _get(self, path: str) -> requests.Response:
        resp = self._session.get(f"{self.base_url}{path}", timeout=self._timeout)
        resp.raise_for_status()
        return resp


# ---------- Native MCP client ----------

async def open_calculator_native(
    url: str,
    initial_value: Optional[str] = None,
    *,
    timeout: Optional[float] = 30.0,
) -> Dict[str, Any]:
    """
    Call open_calculator on the native server (server.py --transport http).

    Returns a dict with:
      - "content_text": first text block (if present)
      - "structured_content": structured JSON (kept on this path)
    """
    arguments = {} if initial_value is None else {"initial_value": initial_value}
    async with Client(StreamableHttpTransport(url=url), timeout=timeout) as client:
        result = await client.call_tool(TOOL_NAME, arguments)

    content_text = None
    for c in getattr(result, "content", []) or []:
        if hasattr(c, "text") and c.text:
            content_text = c.text
            break

    return {
        "content_text": content_text,
        "structured_content": getattr(result, "structured_content", None),
    }


# ---------- Simple CLI ----------

def _dump(value: Any) -> None:
    print(json.dumps(value, indent=2, default=str))


def main():
    parser = argparse.ArgumentParser(description="Smoke client for the calculator MCP server")
    parser.add_argument("--base-url", default="http://localhost:3000", help="HTTP shim base URL")
    parser.add_argument("--timeout", type=float, default=30.0, help="Per-request timeout seconds")

    parser.add_argument("--health", action="store_true", help="GET /health")
    parser.add_argument("--info", action="store_true", help="GET /info")
    parser.add_argument("--read-widget", action="store_true", help="resources/read the widget template")
    parser.add_argument("--open", nargs="?", const="", default=None, metavar="VALUE",
                        help="tools/call open_calculator, optionally with an initial value")
    parser.add_argument("--native", metavar="URL", help="Call open_calculator on a native MCP endpoint instead")
    parser.add_argument("--keys", metavar="SEQUENCE", help="Replay key presses (e.g. '2+3*4=') and print the display")

    args = parser.parse_args()
    client = CalculatorHttpClient(args.base_url, timeout=args.timeout)
    initial_value = args.open or None

    if args.health:
        _dump(client.health())

    if args.info:
        _dump(client.info())

    if args.read_widget:
        resource = client.read_template()
        print(f"{resource.get('uri')} ({resource.get('mimeType')}): {len(resource.get('text', ''))} chars")

    if args.open is not None:
        if args.native:
            _dump(asyncio.run(open_calculator_native(args.native, initial_value, timeout=args.timeout)))
        else:
            result = client.open_calculator(initial_value)
            for block in result.get("content", []):
                if block.get("type") == "text":
                    print(block["text"])
                elif block.get("type") == "resource":
                    print(f"[resource] {block['resource'].get('uri')}")

    if args.keys:
        pad = Keypad()
        print(pad.press_sequence(args.keys))


if __name__ == "__main__":
    main()
