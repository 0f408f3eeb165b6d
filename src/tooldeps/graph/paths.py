"""Path finding between tools.

Paths follow the "depends on" direction: a path from A to B exists when
A needs B, directly or through intermediate tools.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tooldeps.common.config import Settings
from tooldeps.common.exceptions import InvalidQueryError
from tooldeps.common.logging import get_logger
from tooldeps.common.metrics import GRAPH_TRAVERSAL_DURATION
from tooldeps.schemas.analysis import AllPathsQueryResult, PathQueryResult

if TYPE_CHECKING:
    from tooldeps.graph.store import DependencyGraph

logger = get_logger(__name__)


@dataclass
class PathResult:
    """Outcome of a shortest-path query."""

    from_id: str
    to_id: str
    found: bool
    path: list[str] = field(default_factory=list)

    @property
    def length(self) -> int | None:
        """Number of hops, or None when no path exists."""
        return len(self.path) - 1 if self.found else None


def find_path(graph: "DependencyGraph", from_id: str, to_id: str) -> PathResult:
    """Find the shortest dependency path using BFS with parent pointers.

    Args:
        graph: Graph snapshot.
        from_id: Consumer end of the path.
        to_id: Provider end of the path.

    Returns:
        Path result; ``found`` is False for unknown tools or when
        ``to_id`` is unreachable.
    """
    if not graph.has_node(from_id) or not graph.has_node(to_id):
        return PathResult(from_id, to_id, found=False)

    if from_id == to_id:
        return PathResult(from_id, to_id, found=True, path=[from_id])

    parent: dict[str, str] = {}
    visited = {from_id}
    queue: deque[str] = deque([from_id])

    with GRAPH_TRAVERSAL_DURATION.labels(operation="find_path").time():
        while queue:
            current = queue.popleft()
            for neighbor in graph.provider_ids(current):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                parent[neighbor] = current

                if neighbor == to_id:
                    path = [to_id]
                    while path[-1] != from_id:
                        path.append(parent[path[-1]])
                    path.reverse()
                    return PathResult(from_id, to_id, found=True, path=path)

                queue.append(neighbor)

    return PathResult(from_id, to_id, found=False)


def find_all_paths(
    graph: "DependencyGraph",
    from_id: str,
    to_id: str,
    limit: int | None = None,
    settings: Settings | None = None,
) -> list[list[str]]:
    """Enumerate simple dependency paths using DFS with backtracking.

    No tool repeats within a path, so cycles cannot trap the search.
    Enumeration stops once ``limit`` paths have been collected.

    Args:
        graph: Graph snapshot.
        from_id: Consumer end of the paths.
        to_id: Provider end of the paths.
        limit: Maximum number of paths. Defaults to the configured limit.
        settings: Settings supplying the default limit. Uses the graph's if not provided.

    Returns:
        Paths as lists of tool ids, each starting at ``from_id`` and
        ending at ``to_id``. Empty when there is none.

    Raises:
        InvalidQueryError: If ``limit`` is not a positive integer.
    """
    if limit is None:
        limit = (settings or graph.settings).graph.default_path_limit
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidQueryError(
            f"Path limit must be a positive integer, got {limit!r}",
            details={"limit": limit},
        )

    if not graph.has_node(from_id) or not graph.has_node(to_id):
        return []

    if from_id == to_id:
        return [[from_id]]

    found: list[list[str]] = []
    path = [from_id]
    on_path = {from_id}
    stack = [iter(graph.provider_ids(from_id))]

    with GRAPH_TRAVERSAL_DURATION.labels(operation="find_all_paths").time():
        while stack and len(found) < limit:
            neighbor = next(stack[-1], None)

            if neighbor is None:
                stack.pop()
                on_path.discard(path.pop())
                continue

            if neighbor in on_path:
                continue

            if neighbor == to_id:
                found.append([*path, to_id])
                continue

            path.append(neighbor)
            on_path.add(neighbor)
            stack.append(iter(graph.provider_ids(neighbor)))

    if len(found) == limit:
        logger.debug("Path enumeration hit limit", source=from_id, target=to_id, limit=limit)

    return found


def path_summary(result: PathResult) -> dict:
    """JSON payload for a shortest-path query."""
    return PathQueryResult(
        success=result.found,
        from_=result.from_id,
        to=result.to_id,
        path=result.path if result.found else None,
        length=result.length,
    ).model_dump(by_alias=True, exclude_none=True)


def all_paths_summary(from_id: str, to_id: str, found: list[list[str]]) -> dict:
    """JSON payload for an all-paths query, with shortest and longest hop counts."""
    lengths = [len(path) - 1 for path in found]
    return AllPathsQueryResult(
        success=bool(found),
        from_=from_id,
        to=to_id,
        paths=found,
        count=len(found),
        min_length=min(lengths, default=None),
        max_length=max(lengths, default=None),
    ).model_dump(by_alias=True, exclude_none=True)
