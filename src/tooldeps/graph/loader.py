"""Graph loader.

Turns the flat tool and dependency records supplied by the persistence
layer into an immutable :class:`DependencyGraph` snapshot.
"""

import time
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tooldeps.common.config import Settings, get_settings
from tooldeps.common.exceptions import InvalidToolDataError
from tooldeps.common.logging import get_logger
from tooldeps.common.metrics import (
    GRAPH_DANGLING_EDGES,
    GRAPH_EDGES,
    GRAPH_LOAD_DURATION,
    GRAPH_LOADS,
    GRAPH_NODES,
    STUBS_CREATED,
)
from tooldeps.graph.store import DependencyGraph
from tooldeps.models.tool import DependencyEdge, ToolNode, stub_type_for
from tooldeps.schemas.tool import DependencyRecord, ToolRecord

logger = get_logger(__name__)

ToolInput = ToolNode | ToolRecord | Mapping[str, Any]
DependencyInput = DependencyEdge | DependencyRecord | Mapping[str, Any]


def to_node(record: ToolInput, default_reliability: float) -> ToolNode:
    """Convert a tool record into a graph node.

    Raises:
        InvalidToolDataError: If the record fails validation.
    """
    if isinstance(record, ToolNode):
        return record

    try:
        if not isinstance(record, ToolRecord):
            record = ToolRecord.model_validate(record)
    except PydanticValidationError as e:
        raise InvalidToolDataError(
            "Invalid tool record",
            details={"errors": e.errors(include_url=False, include_context=False)},
            cause=e,
        ) from e

    return ToolNode(
        id=record.id,
        name=record.name or record.id,
        type=record.type,
        reliability=record.reliability if record.reliability is not None else default_reliability,
        debt_score=record.debt_score,
        stub=record.stub,
        version=record.version,
    )


def to_edge(record: DependencyInput) -> DependencyEdge:
    """Convert a dependency record into a graph edge.

    Raises:
        InvalidToolDataError: If the record fails validation.
    """
    if isinstance(record, DependencyEdge):
        return record

    try:
        if not isinstance(record, DependencyRecord):
            record = DependencyRecord.model_validate(record)
    except PydanticValidationError as e:
        raise InvalidToolDataError(
            "Invalid dependency record",
            details={"errors": e.errors(include_url=False, include_context=False)},
            cause=e,
        ) from e

    return DependencyEdge(
        consumer_id=record.consumer_id,
        provider_id=record.provider_id,
        type=record.type,
        version_constraint=record.version_constraint,
        optional=record.optional,
    )


def load_graph(
    tools: Iterable[ToolInput],
    dependencies: Iterable[DependencyInput],
    create_stubs: bool = False,
    settings: Settings | None = None,
) -> DependencyGraph:
    """Build a graph snapshot from tool and dependency records.

    No edge is rejected. An edge naming an unregistered tool is kept but
    ignored by every traversal, unless ``create_stubs`` is set, in which
    case a stub node is synthesized for a missing provider. Edges from an
    unregistered consumer always stay dangling.

    Args:
        tools: Tool records (pydantic records, dicts or ToolNodes).
        dependencies: Dependency records (pydantic records, dicts or edges).
        create_stubs: Synthesize stub nodes for unregistered providers.
        settings: Application settings. Uses global settings if not provided.

    Returns:
        Immutable dependency graph.

    Raises:
        InvalidToolDataError: If any record fails validation.
    """
    settings = settings or get_settings()
    default_reliability = settings.graph.default_reliability
    started = time.perf_counter()

    nodes: dict[str, ToolNode] = {}
    for record in tools:
        node = to_node(record, default_reliability)
        nodes[node.id] = node

    edges = [to_edge(record) for record in dependencies]

    if create_stubs:
        for edge in edges:
            if edge.provider_id in nodes:
                continue
            nodes[edge.provider_id] = ToolNode(
                id=edge.provider_id,
                name=edge.provider_id,
                type=stub_type_for(edge.type),
                reliability=default_reliability,
                stub=True,
            )
            STUBS_CREATED.inc()
            logger.info("Created stub for unregistered dependency", tool_id=edge.provider_id)

    graph = DependencyGraph(nodes.values(), edges, settings=settings)

    GRAPH_LOADS.inc()
    GRAPH_LOAD_DURATION.observe(time.perf_counter() - started)
    GRAPH_NODES.set(graph.node_count())
    GRAPH_EDGES.set(graph.edge_count())
    GRAPH_DANGLING_EDGES.set(graph.dangling_edge_count())

    if graph.dangling_edge_count():
        logger.warning(
            "Dependency edges reference unregistered tools",
            dangling_edges=graph.dangling_edge_count(),
        )

    logger.debug(
        "Graph loaded",
        nodes=graph.node_count(),
        edges=graph.edge_count(),
    )
    return graph
