"""Breadth-first traversal of the dependency graph.

Provides dependency (outward) and dependent (inward) traversal over the
snapshot's adjacency indexes. Each reachable tool is reported once, at
the hop count where it was first reached, which is its minimum depth.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from tooldeps.common.exceptions import InvalidQueryError
from tooldeps.common.logging import get_logger
from tooldeps.common.metrics import GRAPH_TRAVERSAL_DURATION, GRAPH_TRAVERSAL_NODES
from tooldeps.models.tool import ToolNode, ToolType

if TYPE_CHECKING:
    from tooldeps.graph.store import DependencyGraph

logger = get_logger(__name__)


class Direction(str, Enum):
    """Traversal direction."""

    DEPENDENCIES = "dependencies"  # what the root depends on
    DEPENDENTS = "dependents"  # what depends on the root


@dataclass
class TraversalNode:
    """A node in the traversal result."""

    node: ToolNode
    depth: int

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def type(self) -> ToolType:
        return self.node.type

    @property
    def reliability(self) -> float:
        return self.node.reliability

    @property
    def debt_score(self) -> int:
        return self.node.debt_score


@dataclass
class TraversalResult:
    """Result of a graph traversal."""

    root_id: str
    direction: Direction
    nodes: list[TraversalNode] = field(default_factory=list)

    @property
    def max_depth(self) -> int:
        return max((n.depth for n in self.nodes), default=0)

    @property
    def total_nodes(self) -> int:
        return len(self.nodes)

    def depths(self) -> dict[str, int]:
        return {n.id: n.depth for n in self.nodes}


def neighbor_ids(graph: "DependencyGraph", node_id: str, direction: Direction) -> list[str]:
    """Direct neighbors of a node in the given direction."""
    if direction is Direction.DEPENDENCIES:
        return graph.provider_ids(node_id)
    return graph.consumer_ids(node_id)


def validate_max_depth(max_depth: int | None) -> None:
    """Reject depth bounds that are not positive integers."""
    if max_depth is None:
        return
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise InvalidQueryError(
            f"Depth limit must be a positive integer, got {max_depth!r}",
            details={"max_depth": max_depth},
        )


def breadth_first(
    graph: "DependencyGraph",
    root_id: str,
    direction: Direction,
    max_depth: int | None = None,
) -> TraversalResult:
    """Collect every tool reachable from ``root_id`` with its minimum depth.

    The root itself is never part of the result, which also keeps cycles
    that lead back to it from reappearing.

    Args:
        graph: Graph snapshot.
        root_id: Starting tool id.
        direction: Follow dependencies or dependents.
        max_depth: Stop expanding tools at this many hops. Unbounded if None.

    Returns:
        Traversal result ordered by depth, then name.

    Raises:
        InvalidQueryError: If ``max_depth`` is not a positive integer.
    """
    validate_max_depth(max_depth)
    result = TraversalResult(root_id=root_id, direction=direction)
    if not graph.has_node(root_id):
        return result

    with GRAPH_TRAVERSAL_DURATION.labels(operation=direction.value).time():
        depths: dict[str, int] = {}
        queue: deque[str] = deque()

        for neighbor in neighbor_ids(graph, root_id, direction):
            if neighbor != root_id and neighbor not in depths:
                depths[neighbor] = 1
                queue.append(neighbor)

        while queue:
            current = queue.popleft()
            if max_depth is not None and depths[current] >= max_depth:
                continue
            for neighbor in neighbor_ids(graph, current, direction):
                if neighbor != root_id and neighbor not in depths:
                    depths[neighbor] = depths[current] + 1
                    queue.append(neighbor)

        nodes = [TraversalNode(node=graph.get_node(nid), depth=depth) for nid, depth in depths.items()]
        nodes.sort(key=lambda n: (n.depth, n.name, n.id))
        result.nodes = nodes

    GRAPH_TRAVERSAL_NODES.labels(operation=direction.value).observe(len(nodes))
    logger.debug(
        "Traversal complete",
        root=root_id,
        direction=direction.value,
        visited=len(nodes),
        max_depth=result.max_depth,
    )
    return result


def neighborhood(graph: "DependencyGraph", focus_id: str, max_depth: int) -> set[str]:
    """Ids within ``max_depth`` hops of a tool in either direction.

    The focus tool is included. Unknown focus ids yield an empty set.
    """
    if not graph.has_node(focus_id):
        return set()

    found = {focus_id}
    for direction in Direction:
        visited = {focus_id}
        queue: deque[tuple[str, int]] = deque([(focus_id, 0)])
        while queue:
            current, depth = queue.popleft()
            if depth >= max_depth:
                continue
            for neighbor in neighbor_ids(graph, current, direction):
                if neighbor not in visited:
                    visited.add(neighbor)
                    found.add(neighbor)
                    queue.append((neighbor, depth + 1))
    return found
