from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel


# ---------- Data models ----------

@dataclass
class ToolResult:
    content: List[Dict[str, Any]]                       # text / resource content blocks
    structured_content: Optional[Dict[str, Any]] = None


ToolHandler = Callable[[Dict[str, Any]], Awaitable[ToolResult]]
ResourceFactory = Callable[[], Awaitable[Dict[str, Any]]]


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_model: Type[BaseModel]          # validates the "arguments" mapping
    handler: ToolHandler
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema()


@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    factory: ResourceFactory              # returns the resource body ({uri, mimeType, text, ...})
    name: Optional[str] = None
    description: Optional[str] = None
    mime_type: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)


# ---------- Registry ----------

class Registry:
    """
    Tools keyed by name and resources keyed by URI.

    Populated once at startup, then frozen; request handling only reads it.
    Registering an existing key replaces the previous entry.
    """

    def __init__(self):
        self._tools: Dict[str, ToolDescriptor] = {}
        self._resources: Dict[str, ResourceDescriptor] = {}
        self._frozen = False

    def register_tool(self, descriptor: ToolDescriptor) -> None:
        self._check_writable()
        self._tools[descriptor.name] = descriptor

    def register_resource(self, descriptor: ResourceDescriptor) -> None:
        self._check_writable()
        self._resources[descriptor.uri] = descriptor

    def get_tool(self, name: Any) -> Optional[ToolDescriptor]:
        if not isinstance(name, str):
            return None
        return self._tools.get(name)

    def get_resource(self, uri: Any) -> Optional[ResourceDescriptor]:
        if not isinstance(uri, str):
            return None
        return self._resources.get(uri)

    def tool_names(self) -> List[str]:
        return list(self._tools)

    def resource_uris(self) -> List[str]:
        return list(self._resources)

    def freeze(self) -> "Registry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise RuntimeError("Registry is frozen; register tools and resources at startup")
