"""
JSON-RPC dispatch for the HTTP ``/mcp`` endpoint.

Only two MCP methods are served here, ``resources/read`` and ``tools/call``.
Everything else, including a known method pointed at a URI or tool name the
registry does not hold, is answered with "Method not found" (-32601). Any
exception raised while producing a result becomes "Internal server error"
(-32603) with HTTP status 500.

Tool results lose their ``structuredContent`` on this path; only
``content`` is returned. The native MCP server (server.py) keeps it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from registry import Registry

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"

METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class RpcMethod(str, Enum):
    RESOURCES_READ = "resources/read"
    TOOLS_CALL = "tools/call"

    @classmethod
    def parse(cls, method: Any) -> Optional["RpcMethod"]:
        try:
            return cls(method)
        except (ValueError, TypeError):
            return None


class JsonRpcError(Exception):
    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def method_not_found() -> JsonRpcError:
    return JsonRpcError(METHOD_NOT_FOUND, "Method not found")


def internal_error() -> JsonRpcError:
    return JsonRpcError(INTERNAL_ERROR, "Internal server error")


# ---------- Envelopes ----------

def success_envelope(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_envelope(request_id: Any, error: JsonRpcError) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": error.code, "message": error.message},
    }


@dataclass
class DispatchResult:
    status_code: int
    body: Dict[str, Any]


# ---------- Method handlers ----------

async def _resources_read(params: Dict[str, Any], registry: Registry) -> Dict[str, Any]:
    descriptor = registry.get_resource(params.get("uri"))
    if descriptor is None:
        raise method_not_found()
    resource = await descriptor.factory()
    return {"contents": [resource]}


async def _tools_call(params: Dict[str, Any], registry: Registry) -> Dict[str, Any]:
    descriptor = registry.get_tool(params.get("name"))
    if descriptor is None:
        raise method_not_found()
    arguments = params.get("arguments") or {}
    result = await descriptor.handler(arguments)
    return {"content": (result.content if result else None) or []}


_HANDLERS = {
    RpcMethod.RESOURCES_READ: _resources_read,
    RpcMethod.TOOLS_CALL: _tools_call,
}


# ---------- Entry point ----------

async def dispatch(request: Any, registry: Registry) -> DispatchResult:
    """
    Turn one JSON-RPC request object into one response envelope.

    Never raises: handler failures are logged and reported as -32603/500.
    """
    request_id = None
    try:
        if not isinstance(request, dict):
            logger.info("Rejecting non-object JSON-RPC payload")
            return DispatchResult(200, error_envelope(None, method_not_found()))

        # A request without "id" is still answered, with "id": null.
        request_id = request.get("id")
        method = RpcMethod.parse(request.get("method"))
        if method is None:
            logger.info("Method not found: %r", request.get("method"))
            return DispatchResult(200, error_envelope(request_id, method_not_found()))

        params = request.get("params")
        if not isinstance(params, dict):
            params = {}

        result = await _HANDLERS[method](params, registry)
        return DispatchResult(200, success_envelope(request_id, result))

    except JsonRpcError as e:
        logger.info("%s failed: %s (%d)", request.get("method"), e.message, e.code)
        return DispatchResult(200, error_envelope(request_id, e))
    except Exception:
        logger.exception("MCP request error")
        return DispatchResult(500, error_envelope(request_id, internal_error()))
