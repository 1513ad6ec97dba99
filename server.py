import argparse
import logging
from typing import Annotated, Any, Dict, Optional

from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from mcp.types import EmbeddedResource, TextContent
from pydantic import Field

from calculator_tools import TOOL_NAME, build_registry
from config import SERVICE_NAME, TEMPLATE_URI, setup_logging
from registry import Registry

logger = logging.getLogger(__name__)


def _to_content_block(block: Dict[str, Any]):
    if block.get("type") == "text":
        return TextContent(type="text", text=block["text"])
    if block.get("type") == "resource":
        return EmbeddedResource.model_validate(block)
    raise ValueError(f"Unsupported content block type: {block.get('type')!r}")


def create_mcp_server(registry: Registry) -> FastMCP:
    """
    Native MCP server over the same registry the HTTP shim uses.

    Unlike the /mcp shim, tool results keep their structured content here.
    """
    mcp = FastMCP(name=SERVICE_NAME)

    template = registry.get_resource(TEMPLATE_URI)
    tool = registry.get_tool(TOOL_NAME)
    if template is None or tool is None:
        raise RuntimeError("Registry is missing the calculator tool or template resource")

    # ---- Resources ----

    @mcp.resource(
        template.uri,
        name=template.name,
        description=template.description,
        mime_type=template.mime_type,
        meta=template.meta,
    )
    async def calculator_template() -> str:
        resource = await template.factory()
        return resource["text"]

    # ---- Tools ----

    @mcp.tool(
        name=tool.name,
        description=tool.description,
        annotations={"title": "Open Calculator", "readOnlyHint": True, "idempotentHint": False, "openWorldHint": False},
        meta=tool.meta,
    )
    async def open_calculator(
        initial_value: Annotated[Optional[str], Field(description="Initial value to display")] = None,
    ) -> ToolResult:
        arguments = {} if initial_value is None else {"initial_value": initial_value}
        result = await tool.handler(arguments)
        return ToolResult(
            content=[_to_content_block(block) for block in result.content],
            structured_content=result.structured_content,
        )

    return mcp


mcp = create_mcp_server(build_registry())


# ---- Entrypoint ----

def main():
    parser = argparse.ArgumentParser(description="Calculator MCP server (native MCP transports)")
    parser.add_argument("--transport", choices=["stdio", "http"], default="stdio", help="MCP transport")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for --transport http")
    parser.add_argument("--port", type=int, default=8000, help="Port for --transport http")
    args = parser.parse_args()

    setup_logging()

    if args.transport == "http":
        # Exposes the MCP endpoint at /mcp/ using Streamable HTTP transport.
        logger.info("%s running at http://%s:%d/mcp/  (Streamable HTTP)", SERVICE_NAME, args.host, args.port)
        mcp.run(transport="http", host=args.host, port=args.port)
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
