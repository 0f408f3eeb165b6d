"""Impact analysis for the dependency graph.

Answers "what needs retesting if I change this tool?" by walking the
graph towards dependents.
"""

from dataclasses import dataclass, field
from typing import Any

from tooldeps.common.logging import get_logger
from tooldeps.graph.store import DependencyGraph
from tooldeps.graph.traversal import Direction, validate_max_depth
from tooldeps.schemas import analysis as schemas

logger = get_logger(__name__)


@dataclass
class AffectedTool:
    """A tool impacted by a change."""

    id: str
    name: str
    type: str
    reliability: float
    debt_score: int
    depth: int  # Hops from the changed tool

    def to_schema(self) -> schemas.AffectedTool:
        return schemas.AffectedTool(
            id=self.id,
            name=self.name,
            type=self.type,
            reliability=self.reliability,
            debt_score=self.debt_score,
            depth=self.depth,
        )


@dataclass
class ImpactAnalysis:
    """Result of impact analysis."""

    tool_id: str
    direct_only: bool
    affected: list[AffectedTool] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.affected)

    @property
    def max_depth(self) -> int:
        return max((t.depth for t in self.affected), default=0)

    @property
    def direct(self) -> list[AffectedTool]:
        return [t for t in self.affected if t.depth == 1]

    @property
    def transitive(self) -> list[AffectedTool]:
        return [t for t in self.affected if t.depth > 1]

    def to_dict(self) -> dict[str, Any]:
        return schemas.ImpactAnalysisResult(
            tool=self.tool_id,
            direct=self.direct_only,
            affected=[t.to_schema() for t in self.affected],
            count=self.count,
            max_depth=self.max_depth,
        ).model_dump(by_alias=True)


class ImpactAnalyzer:
    """Determines which tools are affected when a tool changes.

    Transitive by default; ``direct_only`` restricts the result to the
    tools that declare a dependency on the changed tool themselves.
    """

    def analyze(
        self,
        graph: DependencyGraph,
        tool_id: str,
        direct_only: bool = False,
        max_depth: int | None = None,
    ) -> ImpactAnalysis:
        """Analyze the impact of changing a tool.

        Args:
            graph: Graph snapshot.
            tool_id: Tool being changed.
            direct_only: Only report immediate dependents.
            max_depth: Only report dependents within this many hops.

        Returns:
            Impact analysis; empty for unknown tools.

        Raises:
            InvalidQueryError: If ``max_depth`` is not a positive integer.
        """
        validate_max_depth(max_depth)
        analysis = ImpactAnalysis(tool_id=tool_id, direct_only=direct_only)

        if direct_only:
            dependents = sorted(graph.get_dependents(tool_id), key=lambda n: (n.name, n.id))
            analysis.affected = [
                AffectedTool(
                    id=node.id,
                    name=node.name,
                    type=node.type.value,
                    reliability=node.reliability,
                    debt_score=node.debt_score,
                    depth=1,
                )
                for node in dependents
                if node.id != tool_id
            ]
            return analysis

        result = graph.traverse(tool_id, Direction.DEPENDENTS, max_depth)
        analysis.affected = [
            AffectedTool(
                id=n.id,
                name=n.name,
                type=n.type.value,
                reliability=n.reliability,
                debt_score=n.debt_score,
                depth=n.depth,
            )
            for n in result.nodes
        ]

        logger.debug(
            "Impact analysis complete",
            tool_id=tool_id,
            affected=analysis.count,
            max_depth=analysis.max_depth,
        )
        return analysis
