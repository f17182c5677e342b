"""
Tool descriptors and the catalog that holds them.

A ``ToolDescriptor`` bundles everything the server knows about one tool: its
name, description, pydantic input/output models, advisory annotations and the
async handler that implements it. ``ToolCatalog`` is the name-keyed registry
the dispatcher routes through.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterator,
    List,
    Literal,
    Optional,
    Type,
)

from mcp import types
from pydantic import BaseModel

from toolkit_mcp.core.callbacks import ClientChannel, UnavailableClientChannel
from toolkit_mcp.core.result import Result
from toolkit_mcp.providers.base import ProviderSet

Capability = Literal["text", "search", "weather", "sampling", "elicitation", "local"]

# Capabilities whose handlers wait on the connected client
CALLBACK_CAPABILITIES = ("sampling", "elicitation")


@dataclass(frozen=True)
class ToolDependencies:
    """
    Everything a handler may touch, passed explicitly on every call.

    Attributes:
        providers: The process-wide provider set (read-only)
        channel: Outward request channel to the calling client
    """

    providers: ProviderSet
    channel: ClientChannel = field(default_factory=UnavailableClientChannel)


ToolHandler = Callable[[Any, ToolDependencies], Awaitable[Result[Any, str]]]


@dataclass(frozen=True)
class ToolAnnotationSet:
    """
    Advisory behaviour hints advertised to clients.

    The dispatcher never enforces these.

    Attributes:
        read_only: Tool has no external side effect
        idempotent: Repeat calls with the same input are equivalent
        destructive: Tool may require confirmation
        open_world: Tool reaches an uncontrolled external system
    """

    read_only: bool = True
    idempotent: bool = True
    destructive: bool = False
    open_world: bool = False

    def to_mcp(self, title: Optional[str] = None) -> types.ToolAnnotations:
        return types.ToolAnnotations(
            title=title,
            readOnlyHint=self.read_only,
            idempotentHint=self.idempotent,
            destructiveHint=self.destructive,
            openWorldHint=self.open_world,
        )


@dataclass(frozen=True)
class ToolDescriptor:
    """
    Metadata and implementation for a single tool.

    Attributes:
        name: Unique tool identifier
        description: Human-readable description
        input_model: Pydantic model validating the raw arguments
        handler: ``async (params, deps) -> Result``
        output_model: Model describing ``structuredContent`` (None = text-only)
        title: Display title
        annotations: Advisory behaviour hints
        capability: Which backend or callback the tool relies on
    """

    name: str
    description: str
    input_model: Type[BaseModel]
    handler: ToolHandler
    output_model: Optional[Type[BaseModel]] = None
    title: Optional[str] = None
    annotations: ToolAnnotationSet = field(default_factory=ToolAnnotationSet)
    capability: Capability = "local"

    @property
    def has_output_schema(self) -> bool:
        return self.output_model is not None

    @property
    def awaits_client(self) -> bool:
        """True when the handler makes a sampling or elicitation round trip."""
        return self.capability in CALLBACK_CAPABILITIES

    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema for the tool arguments, using wire (camelCase) names."""
        return self.input_model.model_json_schema(by_alias=True)

    def output_schema(self) -> Optional[Dict[str, Any]]:
        if self.output_model is None:
            return None
        return self.output_model.model_json_schema()

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_schema(),
            outputSchema=self.output_schema(),
            annotations=self.annotations.to_mcp(self.title),
        )

    def to_summary(self) -> Dict[str, Any]:
        """Compact dict for catalog listings."""
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "category": self.capability,
            "structured_output": self.has_output_schema,
        }


class ToolCatalog:
    """
    Name-keyed registry of tool descriptors.

    Example:
        >>> catalog = ToolCatalog()
        >>> catalog.register(descriptor)
        >>> catalog.get("summarize")
    """

    def __init__(self, descriptors: Optional[List[ToolDescriptor]] = None) -> None:
        self._tools: Dict[str, ToolDescriptor] = {}
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: ToolDescriptor) -> None:
        """
        Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if descriptor.name in self._tools:
            raise ValueError(f"Tool '{descriptor.name}' already registered")
        self._tools[descriptor.name] = descriptor

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self, *, category: Optional[str] = None) -> List[ToolDescriptor]:
        tools = list(self._tools.values())
        if category:
            tools = [t for t in tools if t.capability == category]
        return tools

    def categories(self) -> Dict[str, List[str]]:
        """Map each capability tag to the tools that use it."""
        grouped: Dict[str, List[str]] = {}
        for descriptor in self._tools.values():
            grouped.setdefault(descriptor.capability, []).append(descriptor.name)
        return grouped

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
