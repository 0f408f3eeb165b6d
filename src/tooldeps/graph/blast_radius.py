"""Blast radius calculation for the dependency graph.

Calculates the "blast radius" of a change - every tool that transitively
depends on the changed tool - and turns it into a risk score with
rollback guidance.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tooldeps.common.config import ImpactSettings, Settings, get_settings
from tooldeps.common.logging import get_logger
from tooldeps.graph.impact import AffectedTool, ImpactAnalyzer
from tooldeps.graph.store import DependencyGraph
from tooldeps.schemas import analysis as schemas

logger = get_logger(__name__)


class RiskLevel(str, Enum):
    """Risk buckets for a blast radius score."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


@dataclass
class RiskAssessment:
    """Risk score and the inputs that produced it."""

    score: float
    level: RiskLevel
    chain_reliability: float
    avg_debt_score: float
    critical_count: int


@dataclass
class TypeImpact:
    """Number of affected tools of one type."""

    type: str
    count: int
    critical: bool


@dataclass
class BlastRadius:
    """Complete blast radius of a change to one tool."""

    tool_id: str
    affected_tools: list[AffectedTool]
    direct_count: int
    transitive_count: int
    total_count: int
    max_depth: int
    risk: RiskAssessment
    type_impacts: list[TypeImpact]
    depth_distribution: dict[int, int]  # depth -> count, ascending
    rollback_strategy: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        analysis = schemas.BlastRadiusAnalysis(
            tool=self.tool_id,
            impact=schemas.ImpactCounts(
                direct_count=self.direct_count,
                transitive_count=self.transitive_count,
                total_count=self.total_count,
                max_depth=self.max_depth,
            ),
            risk=schemas.RiskAssessment(
                score=self.risk.score,
                level=self.risk.level.value,
                chain_reliability=self.risk.chain_reliability,
                avg_debt_score=self.risk.avg_debt_score,
                critical_count=self.risk.critical_count,
            ),
            by_type=[
                schemas.TypeImpact(type=t.type, count=t.count, critical=t.critical)
                for t in self.type_impacts
            ],
            by_depth=[
                schemas.DepthCount(depth=depth, count=count)
                for depth, count in self.depth_distribution.items()
            ],
            affected_tools=[t.to_schema() for t in self.affected_tools],
            rollback_strategy=self.rollback_strategy,
        )
        return schemas.BlastRadiusResult(analysis=analysis).model_dump(by_alias=True)


class BlastRadiusCalculator:
    """Calculates blast radius and change risk for a tool.

    The score grows with the number of affected tools, their average
    architectural debt and the number of critical-type tools among them,
    and is penalized by low chain reliability:

        score = n * (1 + avg_debt / 10) * (1 / max(chain_reliability, floor))
                + critical_count * critical_weight

    where chain_reliability = start_reliability * avg_reliability ** min(max_depth, cap)
    approximates compound reliability out to the farthest affected tool.
    """

    def __init__(
        self,
        analyzer: ImpactAnalyzer | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize calculator.

        Args:
            analyzer: Impact analyzer used to find affected tools.
            settings: Application settings. Uses global settings if not provided.
        """
        self._analyzer = analyzer or ImpactAnalyzer()
        self._settings = settings or get_settings()

    @property
    def _impact(self) -> ImpactSettings:
        return self._settings.impact

    def calculate(self, graph: DependencyGraph, tool_id: str) -> BlastRadius:
        """Calculate blast radius for a tool.

        Args:
            graph: Graph snapshot.
            tool_id: Tool being changed.

        Returns:
            Blast radius report; an unknown tool has an empty, LOW-risk one.
        """
        affected = self._analyzer.analyze(graph, tool_id).affected

        direct_count = sum(1 for t in affected if t.depth == 1)
        max_depth = max((t.depth for t in affected), default=0)

        risk = self._assess_risk(graph, tool_id, affected, max_depth)
        type_impacts = self._type_impacts(affected)
        depth_distribution = dict(sorted(Counter(t.depth for t in affected).items()))
        rollback = self._rollback_strategy(affected, type_impacts, risk, max_depth)

        logger.info(
            "Blast radius calculated",
            tool_id=tool_id,
            total=len(affected),
            risk_score=risk.score,
            risk_level=risk.level.value,
        )

        return BlastRadius(
            tool_id=tool_id,
            affected_tools=affected,
            direct_count=direct_count,
            transitive_count=len(affected) - direct_count,
            total_count=len(affected),
            max_depth=max_depth,
            risk=risk,
            type_impacts=type_impacts,
            depth_distribution=depth_distribution,
            rollback_strategy=rollback,
        )

    def is_critical_type(self, tool_type: str) -> bool:
        return any(critical in tool_type for critical in self._impact.critical_types)

    def risk_level(self, score: float) -> RiskLevel:
        """Bucket a risk score."""
        if score <= self._impact.risk_low:
            return RiskLevel.LOW
        if score <= self._impact.risk_medium:
            return RiskLevel.MEDIUM
        if score <= self._impact.risk_high:
            return RiskLevel.HIGH
        return RiskLevel.CRITICAL

    def _assess_risk(
        self,
        graph: DependencyGraph,
        tool_id: str,
        affected: list[AffectedTool],
        max_depth: int,
    ) -> RiskAssessment:
        if not affected:
            return RiskAssessment(
                score=0.0,
                level=RiskLevel.LOW,
                chain_reliability=1.0,
                avg_debt_score=0.0,
                critical_count=0,
            )

        count = len(affected)
        critical_count = sum(1 for t in affected if self.is_critical_type(t.type))
        avg_debt = sum(t.debt_score for t in affected) / count
        avg_reliability = sum(t.reliability for t in affected) / count

        start = graph.get_node(tool_id)
        start_reliability = (
            start.reliability if start else self._settings.graph.default_reliability
        )
        chain_reliability = start_reliability * avg_reliability ** min(
            max_depth, self._impact.depth_exponent_cap
        )

        score = (
            count
            * (1 + avg_debt / 10)
            * (1 / max(chain_reliability, self._impact.reliability_floor))
            + critical_count * self._impact.critical_weight
        )

        return RiskAssessment(
            score=round(score, 1),
            level=self.risk_level(score),
            chain_reliability=round(chain_reliability, 3),
            avg_debt_score=round(avg_debt, 1),
            critical_count=critical_count,
        )

    def _type_impacts(self, affected: list[AffectedTool]) -> list[TypeImpact]:
        counts = Counter(t.type for t in affected)
        impacts = [
            TypeImpact(type=tool_type, count=count, critical=self.is_critical_type(tool_type))
            for tool_type, count in counts.items()
        ]
        # Critical types first, then largest groups
        impacts.sort(key=lambda t: (not t.critical, -t.count))
        return impacts

    def _rollback_strategy(
        self,
        affected: list[AffectedTool],
        type_impacts: list[TypeImpact],
        risk: RiskAssessment,
        max_depth: int,
    ) -> list[str]:
        """Generate ordered rollback and verification steps."""
        if not affected:
            return ["No affected tools - changes are isolated"]

        strategy: list[str] = []

        critical = [t for t in type_impacts if t.critical]
        if critical:
            types = ", ".join(t.type for t in critical)
            strategy.append(
                f"1. Test affected {types} tools first (live integrations at risk)"
            )

        direct_count = sum(1 for t in affected if t.depth == 1)
        if direct_count:
            strategy.append(f"2. Verify {direct_count} direct dependent(s) before deployment")

        high_debt = [t for t in affected if t.debt_score > self._impact.high_debt_threshold]
        if high_debt:
            ids = ", ".join(t.id for t in high_debt)
            strategy.append(f"3. Extra attention on {len(high_debt)} high-debt tool(s): {ids}")

        if risk.level in (RiskLevel.HIGH, RiskLevel.CRITICAL):
            strategy.append("4. Consider feature flag for gradual rollout")

        if risk.chain_reliability < self._impact.low_reliability_warning:
            strategy.append(
                f"5. Warning: Chain reliability is {risk.chain_reliability * 100:.1f}% "
                "- add error boundaries"
            )

        if max_depth > 1:
            strategy.append(f"6. Test from innermost (depth 1) to outermost (depth {max_depth})")

        return strategy
