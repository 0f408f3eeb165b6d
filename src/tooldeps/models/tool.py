"""Tool and DependencyEdge models for dependency graph nodes.

Tools are the registered units of the ecosystem (CLIs, MCP servers,
libraries, ...). Dependency edges point from the consumer to the provider.
"""

from dataclasses import dataclass
from enum import Enum


class ToolType(str, Enum):
    """Kinds of tools tracked in the dependency graph."""

    CLI = "cli"
    MCP = "mcp"  # Live-integration server
    SKILL = "skill"
    LIBRARY = "library"
    SERVICE = "service"


# Dependency edge kinds that map onto a tool kind when a stub is synthesized.
# Anything else (npm, database, implicit, runtime ...) becomes a library stub.
STUB_TYPE_BY_DEPENDENCY_TYPE: dict[str, ToolType] = {
    "cli": ToolType.CLI,
    "mcp": ToolType.MCP,
    "library": ToolType.LIBRARY,
}


@dataclass(frozen=True)
class ToolNode:
    """A registered tool (node in the dependency graph)."""

    id: str
    name: str
    type: ToolType
    reliability: float = 0.95
    debt_score: int = 0
    stub: bool = False
    version: str | None = None


@dataclass(frozen=True)
class DependencyEdge:
    """A directed "consumer depends on provider" relationship.

    The edge type is informational only; no algorithm branches on it.
    """

    consumer_id: str
    provider_id: str
    type: str = "runtime"
    version_constraint: str | None = None
    optional: bool = False

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the edge within a graph snapshot."""
        return (self.consumer_id, self.provider_id)


def stub_type_for(dependency_type: str) -> ToolType:
    """Tool type used for a stub created from an edge of the given type."""
    return STUB_TYPE_BY_DEPENDENCY_TYPE.get(dependency_type, ToolType.LIBRARY)
