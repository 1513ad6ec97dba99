from __future__ import annotations

import json
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from calculator_tools import build_registry
from config import (
    SERVICE_DESCRIPTION,
    SERVICE_NAME,
    SERVICE_VERSION,
    get_host,
    get_port,
    iso_timestamp,
    setup_logging,
)
from dispatcher import DispatchResult, dispatch, error_envelope, internal_error
from registry import Registry
from widget import render_calculator_widget

logger = logging.getLogger(__name__)


def create_app(registry: Registry | None = None) -> FastAPI:
    """
    HTTP shim exposing the calculator to Apps SDK hosts.

    Args:
        registry: Tools and resources to serve. Defaults to build_registry().
    """
    registry = registry or build_registry()

    app = FastAPI(title=SERVICE_NAME, description=SERVICE_DESCRIPTION, version=SERVICE_VERSION)
    app.state.registry = registry

    # Browser-hosted callers (ChatGPT widgets) are cross-origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "mcp-session-id"],
        expose_headers=["mcp-session-id"],
    )

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "timestamp": iso_timestamp(),
        }

    @app.get("/info")
    async def info():
        return {
            "name": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "description": SERVICE_DESCRIPTION,
            "tools": registry.tool_names(),
            "resources": registry.resource_uris(),
        }

    @app.get("/calculator", response_class=HTMLResponse)
    async def calculator():
        return HTMLResponse(render_calculator_widget())

    @app.post("/mcp")
    async def mcp_endpoint(request: Request):
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.exception("MCP request error")
            outcome = DispatchResult(500, error_envelope(None, internal_error()))
        else:
            outcome = await dispatch(payload, registry)
        return JSONResponse(outcome.body, status_code=outcome.status_code)

    return app


app = create_app()


def _startup_banner(port: int) -> str:
    return "\n".join([
        "MCP-UI Calculator Server Started",
        f"  Server:            http://localhost:{port}",
        f"  Health Check:      http://localhost:{port}/health",
        f"  Server Info:       http://localhost:{port}/info",
        f"  Calculator Widget: http://localhost:{port}/calculator",
        f"  MCP Endpoint:      POST http://localhost:{port}/mcp",
        "  Available tool:    open_calculator",
    ])


def run():
    import uvicorn

    setup_logging()
    host, port = get_host(), get_port()
    logger.info(_startup_banner(port))
    uvicorn.run(app, host=host, port=port, log_level="warning")


if __name__ == "__main__":
    run()
