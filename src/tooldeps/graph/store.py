"""In-memory dependency graph snapshot.

Holds tool nodes, dependency edges and two adjacency indexes built once at
construction time:

- forward:  consumer id -> {provider id: edge}   (what a tool depends on)
- backward: provider id -> {consumer id: edge}   (what depends on a tool)

Edges whose endpoints are not registered tools are kept in the indexes but
never surface as nodes, so every traversal skips them.
"""

from datetime import datetime, timezone
from typing import Any, Iterable

from tooldeps.common.config import Settings, get_settings
from tooldeps.graph import cycles, paths, traversal
from tooldeps.graph.paths import PathResult
from tooldeps.graph.traversal import Direction, TraversalNode, TraversalResult
from tooldeps.models.tool import DependencyEdge, ToolNode
from tooldeps.schemas.graph import (
    DependencyEdgeSchema,
    GraphJSON,
    GraphMetadata,
    ToolNodeSchema,
)


class DependencyGraph:
    """Immutable dependency graph snapshot.

    Build instances with :func:`tooldeps.graph.loader.load_graph`. All
    queries are read-only; unknown ids produce empty results.
    """

    def __init__(
        self,
        nodes: Iterable[ToolNode],
        edges: Iterable[DependencyEdge],
        loaded_at: datetime | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._nodes: dict[str, ToolNode] = {node.id: node for node in nodes}
        self._edges: dict[tuple[str, str], DependencyEdge] = {
            edge.key: edge for edge in edges
        }
        self._forward: dict[str, dict[str, DependencyEdge]] = {}
        self._backward: dict[str, dict[str, DependencyEdge]] = {}

        for edge in self._edges.values():
            self._forward.setdefault(edge.consumer_id, {})[edge.provider_id] = edge
            self._backward.setdefault(edge.provider_id, {})[edge.consumer_id] = edge

        self._dangling = sum(
            1 for consumer_id, provider_id in self._edges
            if consumer_id not in self._nodes or provider_id not in self._nodes
        )
        self.loaded_at = loaded_at or datetime.now(timezone.utc)
        # Query defaults (path limit, focus depth) for this snapshot
        self.settings = settings or get_settings()

    # ========== Node access ==========

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> ToolNode | None:
        return self._nodes.get(node_id)

    def get_all_nodes(self) -> list[ToolNode]:
        return list(self._nodes.values())

    def node_ids(self) -> list[str]:
        return list(self._nodes)

    # ========== Edge access ==========

    def get_edge(self, consumer_id: str, provider_id: str) -> DependencyEdge | None:
        return self._edges.get((consumer_id, provider_id))

    def get_all_edges(self) -> list[DependencyEdge]:
        return list(self._edges.values())

    def get_dependency_edges(self, node_id: str) -> list[DependencyEdge]:
        """Edges where the tool is the consumer."""
        return list(self._forward.get(node_id, {}).values())

    def get_dependent_edges(self, node_id: str) -> list[DependencyEdge]:
        """Edges where the tool is the provider."""
        return list(self._backward.get(node_id, {}).values())

    # ========== Adjacency ==========

    def provider_ids(self, node_id: str) -> list[str]:
        """Ids of registered tools that ``node_id`` directly depends on."""
        return [pid for pid in self._forward.get(node_id, ()) if pid in self._nodes]

    def consumer_ids(self, node_id: str) -> list[str]:
        """Ids of registered tools that directly depend on ``node_id``."""
        return [cid for cid in self._backward.get(node_id, ()) if cid in self._nodes]

    def get_dependencies(self, node_id: str) -> list[ToolNode]:
        """Direct dependencies of a tool."""
        return [self._nodes[pid] for pid in self.provider_ids(node_id)]

    def get_dependents(self, node_id: str) -> list[ToolNode]:
        """Tools that directly depend on a tool."""
        return [self._nodes[cid] for cid in self.consumer_ids(node_id)]

    # ========== Transitive queries ==========

    def traverse(
        self,
        node_id: str,
        direction: Direction,
        max_depth: int | None = None,
    ) -> TraversalResult:
        return traversal.breadth_first(self, node_id, direction, max_depth)

    def get_transitive_dependencies(
        self, node_id: str, max_depth: int | None = None
    ) -> list[TraversalNode]:
        """Everything a tool needs, each at its minimum depth."""
        return self.traverse(node_id, Direction.DEPENDENCIES, max_depth).nodes

    def get_transitive_dependents(
        self, node_id: str, max_depth: int | None = None
    ) -> list[TraversalNode]:
        """Everything that breaks if a tool changes, each at its minimum depth."""
        return self.traverse(node_id, Direction.DEPENDENTS, max_depth).nodes

    def neighborhood(self, node_id: str, max_depth: int) -> set[str]:
        return traversal.neighborhood(self, node_id, max_depth)

    # ========== Paths ==========

    def find_path(self, from_id: str, to_id: str) -> PathResult:
        return paths.find_path(self, from_id, to_id)

    def find_all_paths(self, from_id: str, to_id: str, limit: int | None = None) -> list[list[str]]:
        return paths.find_all_paths(self, from_id, to_id, limit)

    # ========== Cycles and ordering ==========

    def find_cycles(self) -> list[list[str]]:
        return cycles.find_cycles(self)

    def has_cycle(self) -> bool:
        return cycles.has_cycle(self)

    def topological_sort(self) -> list[str]:
        return cycles.topological_sort(self)

    # ========== Stats ==========

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def dangling_edge_count(self) -> int:
        """Number of edges with at least one unregistered endpoint."""
        return self._dangling

    # ========== Serialization ==========

    def to_schema(self) -> GraphJSON:
        return GraphJSON(
            nodes=[ToolNodeSchema.from_node(node) for node in self._nodes.values()],
            edges=[DependencyEdgeSchema.from_edge(edge) for edge in self._edges.values()],
            metadata=GraphMetadata(
                node_count=self.node_count(),
                edge_count=self.edge_count(),
                loaded_at=self.loaded_at,
            ),
        )

    def to_json(self) -> dict[str, Any]:
        """Serialize to ``{nodes, edges, metadata}`` with camelCase keys."""
        return self.to_schema().model_dump(mode="json", by_alias=True)

    def __repr__(self) -> str:
        return f"<DependencyGraph nodes={self.node_count()} edges={self.edge_count()}>"
