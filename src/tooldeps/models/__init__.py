"""Graph data models."""

from tooldeps.models.tool import DependencyEdge, ToolNode, ToolType, stub_type_for

__all__ = [
    "DependencyEdge",
    "ToolNode",
    "ToolType",
    "stub_type_for",
]
