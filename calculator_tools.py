from __future__ import annotations

import time
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from config import TEMPLATE_URI
from registry import Registry, ResourceDescriptor, ToolDescriptor, ToolResult
from ui_resource import APPS_SDK_MIME_TYPE, create_ui_resource
from widget import render_calculator_widget

TOOL_NAME = "open_calculator"
TOOL_DESCRIPTION = "Opens an interactive calculator widget"

# Presentation hints read by Apps SDK hosts when embedding the template.
WIDGET_META: Dict[str, Any] = {
    "openai/widgetDescription": "An interactive calculator widget for performing arithmetic operations",
    "openai/widgetCSP": {
        "connect_domains": [],
        "resource_domains": [],
    },
    "openai/widgetPrefersBorder": True,
    "openai/widgetAccessible": True,
}

TOOL_META: Dict[str, Any] = {
    "openai/outputTemplate": TEMPLATE_URI,
    "openai/toolInvocation/invoking": "Opening calculator…",
    "openai/toolInvocation/invoked": "Calculator ready",
    "openai/widgetAccessible": True,
}

APPS_SDK_ADAPTERS: Dict[str, Any] = {
    "appsSdk": {
        "enabled": True,
        "config": {"intentHandling": "prompt"},
    },
}


class OpenCalculatorArgs(BaseModel):
    initial_value: Optional[str] = Field(default=None, description="Initial value to display")


# ---- Resource ----

def create_apps_sdk_template() -> Dict[str, Any]:
    """The Apps SDK flavoured template block served at TEMPLATE_URI."""
    return create_ui_resource(
        TEMPLATE_URI,
        render_calculator_widget(),
        encoding="text",
        adapters=APPS_SDK_ADAPTERS,
        metadata=WIDGET_META,
    )


async def read_calculator_template() -> Dict[str, Any]:
    return create_apps_sdk_template()["resource"]


# ---- Tool ----

def _instance_uri() -> str:
    return f"{TEMPLATE_URI}/{int(time.time() * 1000)}"


async def open_calculator(arguments: Dict[str, Any]) -> ToolResult:
    """
    Open the calculator.

    Returns a short text block followed by a fresh embedded copy of the
    widget (plain MCP-UI, no Apps SDK adapter) under a per-call URI, plus
    structured content describing the calculator state.
    """
    args = OpenCalculatorArgs.model_validate(arguments or {})
    initial_value = args.initial_value

    suffix = f" with initial value: {initial_value}" if initial_value else ""
    embedded = create_ui_resource(_instance_uri(), render_calculator_widget(), encoding="text")

    return ToolResult(
        content=[
            {
                "type": "text",
                "text": f"Calculator opened{suffix}. Use the buttons to perform calculations.",
            },
            embedded,
        ],
        structured_content={
            "calculator": {
                "status": "ready",
                "initialValue": initial_value or "0",
            },
        },
    )


# ---- Registry ----

def build_registry() -> Registry:
    """The one tool and one resource this server exposes, frozen."""
    registry = Registry()
    registry.register_resource(
        ResourceDescriptor(
            uri=TEMPLATE_URI,
            factory=read_calculator_template,
            name="calculator-widget",
            description=WIDGET_META["openai/widgetDescription"],
            mime_type=APPS_SDK_MIME_TYPE,
            meta=dict(WIDGET_META),
        )
    )
    registry.register_tool(
        ToolDescriptor(
            name=TOOL_NAME,
            description=TOOL_DESCRIPTION,
            input_model=OpenCalculatorArgs,
            handler=open_calculator,
            meta=dict(TOOL_META),
        )
    )
    return registry.freeze()
