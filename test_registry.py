#!/usr/bin/env python3
"""
Test suite for the registry and the calculator tool/resource
"""

import unittest
from unittest.mock import AsyncMock, patch

from pydantic import BaseModel, ValidationError

from calculator_tools import (
    TOOL_NAME,
    OpenCalculatorArgs,
    build_registry,
    open_calculator,
    read_calculator_template,
)
from config import TEMPLATE_URI
from registry import Registry, ResourceDescriptor, ToolDescriptor, ToolResult
from ui_resource import APPS_SDK_MIME_TYPE, HTML_MIME_TYPE
from widget import render_calculator_widget


class _NoArgs(BaseModel):
    pass


def _tool(name, description="test tool"):
    return ToolDescriptor(
        name=name,
        description=description,
        input_model=_NoArgs,
        handler=AsyncMock(return_value=ToolResult(content=[])),
    )


class TestRegistry(unittest.TestCase):
    """Test registration and lookup"""

    def setUp(self):
        self.registry = Registry()

    def test_lookup_missing_returns_none(self):
        self.assertIsNone(self.registry.get_tool("nope"))
        self.assertIsNone(self.registry.get_resource("ui://nope"))
        self.assertIsNone(self.registry.get_tool(None))
        self.assertIsNone(self.registry.get_resource(["ui://nope"]))

    def test_last_registration_wins(self):
        self.registry.register_tool(_tool("t", "first"))
        self.registry.register_tool(_tool("t", "second"))
        self.assertEqual(self.registry.get_tool("t").description, "second")
        self.assertEqual(self.registry.tool_names(), ["t"])

    def test_register_resource(self):
        factory = AsyncMock(return_value={"uri": "ui://a"})
        self.registry.register_resource(ResourceDescriptor(uri="ui://a", factory=factory))
        self.assertIs(self.registry.get_resource("ui://a").factory, factory)
        self.assertEqual(self.registry.resource_uris(), ["ui://a"])

    def test_frozen_registry_rejects_writes(self):
        self.registry.freeze()
        self.assertTrue(self.registry.frozen)
        with self.assertRaises(RuntimeError):
            self.registry.register_tool(_tool("t"))
        with self.assertRaises(RuntimeError):
            self.registry.register_resource(ResourceDescriptor(uri="ui://a", factory=AsyncMock()))

    def test_input_schema_from_model(self):
        descriptor = ToolDescriptor(
            name=TOOL_NAME,
            description="d",
            input_model=OpenCalculatorArgs,
            handler=open_calculator,
        )
        schema = descriptor.input_schema
        self.assertIn("initial_value", schema["properties"])
        self.assertNotIn("required", schema)


class TestBuildRegistry(unittest.TestCase):
    """Test the startup registry"""

    def test_contents(self):
        registry = build_registry()
        self.assertTrue(registry.frozen)
        self.assertEqual(registry.tool_names(), [TOOL_NAME])
        self.assertEqual(registry.resource_uris(), [TEMPLATE_URI])

        tool = registry.get_tool(TOOL_NAME)
        self.assertEqual(tool.meta["openai/outputTemplate"], TEMPLATE_URI)
        self.assertTrue(tool.meta["openai/widgetAccessible"])

        resource = registry.get_resource(TEMPLATE_URI)
        self.assertEqual(resource.mime_type, APPS_SDK_MIME_TYPE)
        self.assertEqual(resource.meta["openai/widgetCSP"], {"connect_domains": [], "resource_domains": []})


class TestCalculatorHandlers(unittest.IsolatedAsyncioTestCase):
    """Test the tool handler and the template factory"""

    async def test_template_resource(self):
        resource = await read_calculator_template()
        self.assertEqual(resource["uri"], TEMPLATE_URI)
        self.assertEqual(resource["mimeType"], APPS_SDK_MIME_TYPE)
        self.assertEqual(resource["text"], render_calculator_widget())
        meta = resource["_meta"]
        self.assertEqual(meta["mcpui.dev/adapters"], {"appsSdk": {"intentHandling": "prompt"}})
        self.assertTrue(meta["openai/widgetPrefersBorder"])
        self.assertTrue(meta["openai/widgetAccessible"])

    async def test_open_calculator_with_initial_value(self):
        result = await open_calculator({"initial_value": "42"})
        text, embedded = result.content
        self.assertEqual(text["type"], "text")
        self.assertEqual(
            text["text"],
            "Calculator opened with initial value: 42. Use the buttons to perform calculations.",
        )
        self.assertEqual(embedded["type"], "resource")
        self.assertEqual(embedded["resource"]["mimeType"], HTML_MIME_TYPE)
        self.assertEqual(embedded["resource"]["text"], render_calculator_widget())
        self.assertEqual(result.structured_content, {"calculator": {"status": "ready", "initialValue": "42"}})

    async def test_open_calculator_without_arguments(self):
        result = await open_calculator({})
        self.assertEqual(result.content[0]["text"], "Calculator opened. Use the buttons to perform calculations.")
        self.assertEqual(result.structured_content["calculator"]["initialValue"], "0")

    async def test_instance_uri_is_timestamped(self):
        with patch("calculator_tools.time.time", return_value=1700000000.5):
            result = await open_calculator({})
        self.assertEqual(result.content[1]["resource"]["uri"], f"{TEMPLATE_URI}/1700000000500")

    async def test_rejects_non_string_initial_value(self):
        with self.assertRaises(ValidationError):
            await open_calculator({"initial_value": {"nested": True}})


if __name__ == "__main__":
    unittest.main()
