"""Cycle detection and topological ordering.

Cycles are expected data, not errors: tools evolve independently and
their declared dependencies are maintained by hand. Detection uses an
iterative depth-first search with explicit node states so deep graphs
never hit the interpreter's recursion limit.
"""

from collections import deque
from collections.abc import Iterator
from enum import Enum
from typing import TYPE_CHECKING

from tooldeps.common.logging import get_logger
from tooldeps.common.metrics import CYCLES_DETECTED, GRAPH_TRAVERSAL_DURATION

if TYPE_CHECKING:
    from tooldeps.graph.store import DependencyGraph

logger = get_logger(__name__)


class NodeState(Enum):
    """DFS visitation state."""

    UNVISITED = 0
    ON_STACK = 1
    DONE = 2


def _back_edges(graph: "DependencyGraph") -> Iterator[list[str]]:
    """Yield the stack slice closed by every back edge found by DFS.

    A back edge to a node still on the stack closes a cycle running from
    that node to the top of the stack. Self-loops yield one-element slices.
    """
    state: dict[str, NodeState] = {}

    for root in graph.node_ids():
        if state.get(root, NodeState.UNVISITED) is not NodeState.UNVISITED:
            continue

        path: list[str] = [root]
        position: dict[str, int] = {root: 0}
        stack = [(root, iter(graph.provider_ids(root)))]
        state[root] = NodeState.ON_STACK

        while stack:
            node, neighbors = stack[-1]
            descended = False

            for neighbor in neighbors:
                neighbor_state = state.get(neighbor, NodeState.UNVISITED)
                if neighbor_state is NodeState.UNVISITED:
                    state[neighbor] = NodeState.ON_STACK
                    position[neighbor] = len(path)
                    path.append(neighbor)
                    stack.append((neighbor, iter(graph.provider_ids(neighbor))))
                    descended = True
                    break
                if neighbor_state is NodeState.ON_STACK:
                    yield path[position[neighbor]:]

            if not descended:
                stack.pop()
                path.pop()
                del position[node]
                state[node] = NodeState.DONE


def find_cycles(graph: "DependencyGraph") -> list[list[str]]:
    """Find dependency cycles.

    Each cycle is listed once, in dependency order, without repeating its
    first node. A tool appears in at most one reported cycle per run: a
    later cycle sharing a tool with an earlier one is not reported.

    Returns:
        List of cycles, each a list of tool ids.
    """
    cycles: list[list[str]] = []
    reported: set[str] = set()

    with GRAPH_TRAVERSAL_DURATION.labels(operation="find_cycles").time():
        for cycle in _back_edges(graph):
            if reported.isdisjoint(cycle):
                cycles.append(cycle)
                reported.update(cycle)

    if cycles:
        CYCLES_DETECTED.inc(len(cycles))
        logger.info("Dependency cycles detected", count=len(cycles))

    return cycles


def has_cycle(graph: "DependencyGraph") -> bool:
    """Check whether the graph contains at least one cycle."""
    return next(_back_edges(graph), None) is not None


def topological_sort(graph: "DependencyGraph") -> list[str]:
    """Order tools so that dependencies come before their dependents.

    Kahn's algorithm: a tool's in-degree is the number of its dependencies
    not yet emitted. Tools on a cycle, and everything depending on them,
    never reach zero and are left out, so the result is a partial order
    whenever the graph is cyclic. Use :func:`has_cycle` to tell the cases
    apart.

    Returns:
        Tool ids in build order.
    """
    with GRAPH_TRAVERSAL_DURATION.labels(operation="topological_sort").time():
        in_degree = {node_id: len(graph.provider_ids(node_id)) for node_id in graph.node_ids()}
        queue: deque[str] = deque(node_id for node_id, degree in in_degree.items() if degree == 0)
        order: list[str] = []

        while queue:
            node_id = queue.popleft()
            order.append(node_id)
            for dependent in graph.consumer_ids(node_id):
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    queue.append(dependent)

    excluded = len(in_degree) - len(order)
    if excluded:
        logger.debug("Topological order is partial", excluded=excluded)

    return order
