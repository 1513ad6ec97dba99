"""
Builders for MCP-UI embedded resources.

Blocks are built by ``mcp_ui_server.create_ui_resource`` (``ui://`` check,
text/blob encoding, ``_meta``). Hosts that understand the Apps SDK adapter
convention additionally expect the ``text/html+skybridge`` mime type and the
adapter config in ``_meta``; that layer is applied here on top.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mcp_ui_server import create_ui_resource as _build_ui_resource

HTML_MIME_TYPE = "text/html"
APPS_SDK_MIME_TYPE = "text/html+skybridge"

ADAPTERS_META_KEY = "mcpui.dev/adapters"


def _apps_sdk_enabled(adapters: Optional[Dict[str, Any]]) -> bool:
    apps_sdk = (adapters or {}).get("appsSdk") or {}
    return bool(apps_sdk.get("enabled"))


def create_ui_resource(
    uri: str,
    html: str,
    *,
    encoding: str = "text",
    adapters: Optional[Dict[str, Any]] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a ``{"type": "resource", "resource": {...}}`` content block.

    Args:
        uri: Resource URI; must use the ``ui://`` scheme.
        html: The HTML document to embed. Never rewritten.
        encoding: "text" embeds the HTML as-is, "blob" base64-encodes it.
        adapters: e.g. ``{"appsSdk": {"enabled": True, "config": {...}}}``.
        metadata: Extra ``_meta`` entries (presentation hints).

    Raises:
        mcp_ui_server.exceptions.InvalidURIError: on a non-``ui://`` URI.
        pydantic.ValidationError: on an unknown encoding.
    """
    apps_sdk = _apps_sdk_enabled(adapters)

    meta: Dict[str, Any] = {}
    if apps_sdk:
        meta[ADAPTERS_META_KEY] = {
            "appsSdk": dict(adapters["appsSdk"].get("config") or {}),
        }
    if metadata:
        meta.update(metadata)

    options: Dict[str, Any] = {
        "uri": uri,
        "content": {"type": "rawHtml", "htmlString": html},
        "encoding": encoding,
    }
    if meta:
        options["metadata"] = meta

    block = _build_ui_resource(options).model_dump(mode="json", by_alias=True, exclude_none=True)

    if apps_sdk:
        block["resource"]["mimeType"] = APPS_SDK_MIME_TYPE

    return block
