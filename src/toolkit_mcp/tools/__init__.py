"""Tool catalog, input/output schemas and handlers."""

from toolkit_mcp.tools.catalog import build_catalog, default_descriptors
from toolkit_mcp.tools.registry import (
    ToolAnnotationSet,
    ToolCatalog,
    ToolDependencies,
    ToolDescriptor,
)

__all__ = [
    "build_catalog",
    "default_descriptors",
    "ToolAnnotationSet",
    "ToolCatalog",
    "ToolDependencies",
    "ToolDescriptor",
]
