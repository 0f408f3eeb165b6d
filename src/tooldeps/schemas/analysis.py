"""Pydantic schemas for analysis results.

Commands marshal these directly into their ``--json`` output, using the
same camelCase keys as the graph export.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serializing field names in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AffectedTool(CamelModel):
    """Tool reached by a dependents traversal."""

    id: str
    name: str
    type: str
    reliability: float
    debt_score: int
    depth: int = Field(..., ge=1)


class ImpactAnalysisResult(CamelModel):
    """Result of an ``affected`` query."""

    success: bool = True
    tool: str
    direct: bool
    affected: list[AffectedTool]
    count: int
    max_depth: int


class ImpactCounts(CamelModel):
    """Blast radius size."""

    direct_count: int
    transitive_count: int
    total_count: int
    max_depth: int


class RiskAssessment(CamelModel):
    """Risk score and the inputs that produced it."""

    score: float
    level: str
    chain_reliability: float
    avg_debt_score: float
    critical_count: int


class TypeImpact(CamelModel):
    """Affected tools of one type."""

    type: str
    count: int
    critical: bool


class DepthCount(CamelModel):
    """Affected tools at one depth."""

    depth: int
    count: int


class BlastRadiusAnalysis(CamelModel):
    """Full blast radius report."""

    tool: str
    impact: ImpactCounts
    risk: RiskAssessment
    by_type: list[TypeImpact]
    by_depth: list[DepthCount]
    affected_tools: list[AffectedTool]
    rollback_strategy: list[str]


class BlastRadiusResult(CamelModel):
    """Result of a ``blast-radius`` query."""

    success: bool = True
    analysis: BlastRadiusAnalysis


class ChainReliabilityResult(CamelModel):
    """Compound reliability for one tool."""

    id: str
    name: str
    reliability: float
    compound: float
    chain_length: int
    chain: list[str]


class ChainReliabilityReport(CamelModel):
    """Result of a ``chain-reliability`` query."""

    success: bool
    results: list[ChainReliabilityResult]
    threshold: float
    below_threshold: list[ChainReliabilityResult] | None = None


class PathQueryResult(CamelModel):
    """Result of a ``path`` query."""

    success: bool
    from_: str = Field(alias="from")
    to: str
    path: list[str] | None = None
    length: int | None = None


class AllPathsQueryResult(CamelModel):
    """Result of an ``allpaths`` query."""

    success: bool
    from_: str = Field(alias="from")
    to: str
    paths: list[list[str]]
    count: int
    min_length: int | None = None
    max_length: int | None = None
