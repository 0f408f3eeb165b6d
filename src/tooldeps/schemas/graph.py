"""Pydantic schemas for the graph JSON export.

Field names and presence are a compatibility contract with the
commands' ``--json`` output, so every field is always serialized.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tooldeps.models.tool import DependencyEdge, ToolNode, ToolType


class ToolNodeSchema(BaseModel):
    """Serialized tool node."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    type: ToolType
    version: str | None = None
    reliability: float
    debt_score: int = Field(alias="debtScore")
    stub: bool

    @classmethod
    def from_node(cls, node: ToolNode) -> "ToolNodeSchema":
        return cls(
            id=node.id,
            name=node.name,
            type=node.type,
            version=node.version,
            reliability=node.reliability,
            debt_score=node.debt_score,
            stub=node.stub,
        )


class DependencyEdgeSchema(BaseModel):
    """Serialized dependency edge."""

    model_config = ConfigDict(populate_by_name=True)

    consumer_id: str = Field(alias="from")
    provider_id: str = Field(alias="to")
    type: str
    version_constraint: str | None = Field(None, alias="versionConstraint")
    optional: bool

    @classmethod
    def from_edge(cls, edge: DependencyEdge) -> "DependencyEdgeSchema":
        return cls(
            consumer_id=edge.consumer_id,
            provider_id=edge.provider_id,
            type=edge.type,
            version_constraint=edge.version_constraint,
            optional=edge.optional,
        )


class GraphMetadata(BaseModel):
    """Snapshot metadata."""

    model_config = ConfigDict(populate_by_name=True)

    node_count: int = Field(alias="nodeCount")
    edge_count: int = Field(alias="edgeCount")
    loaded_at: datetime = Field(alias="loadedAt")


class GraphJSON(BaseModel):
    """Complete graph export."""

    nodes: list[ToolNodeSchema]
    edges: list[DependencyEdgeSchema]
    metadata: GraphMetadata
