"""Compound reliability of dependency chains.

A tool is only available when it and everything it needs are available,
so its compound reliability is its own reliability times that of every
unique transitive dependency. Five tools at 95% each compound to 77.4%.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from tooldeps.common.config import Settings, get_settings
from tooldeps.common.exceptions import InvalidQueryError
from tooldeps.common.logging import LoggerMixin
from tooldeps.graph.store import DependencyGraph
from tooldeps.schemas import analysis as schemas


@dataclass
class ChainReliability:
    """Compound reliability of one tool's dependency chain."""

    id: str
    name: str
    reliability: float
    compound: float
    chain: list[str]
    threshold: float

    @property
    def chain_length(self) -> int:
        return len(self.chain)

    @property
    def below_threshold(self) -> bool:
        return self.compound < self.threshold

    def to_schema(self) -> schemas.ChainReliabilityResult:
        return schemas.ChainReliabilityResult(
            id=self.id,
            name=self.name,
            reliability=self.reliability,
            compound=self.compound,
            chain_length=self.chain_length,
            chain=self.chain,
        )


@dataclass
class ReliabilityReport:
    """Chain reliability for a set of tools, weakest first."""

    threshold: float
    results: list[ChainReliability] = field(default_factory=list)

    @property
    def below_threshold(self) -> list[ChainReliability]:
        return [r for r in self.results if r.below_threshold]

    @property
    def ok(self) -> bool:
        return not self.below_threshold

    def to_dict(self) -> dict[str, Any]:
        below = self.below_threshold
        return schemas.ChainReliabilityReport(
            success=not below,
            results=[r.to_schema() for r in self.results],
            threshold=self.threshold,
            below_threshold=[r.to_schema() for r in below] or None,
        ).model_dump(by_alias=True, exclude_none=True)


class ReliabilityCalculator(LoggerMixin):
    """Calculates compound reliability over deduplicated dependency sets.

    Shared dependencies in a diamond are counted once: the transitive
    traversal reports each tool a single time regardless of how many
    paths reach it.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def _threshold(self, threshold: float | None) -> float:
        if threshold is None:
            return self._settings.reliability.min_threshold
        if not 0.0 <= threshold <= 1.0:
            raise InvalidQueryError(
                f"Reliability threshold must be between 0 and 1, got {threshold}",
                details={"threshold": threshold},
            )
        return threshold

    def chain_reliability(
        self,
        graph: DependencyGraph,
        tool_id: str,
        threshold: float | None = None,
    ) -> ChainReliability | None:
        """Compound reliability for one tool.

        Args:
            graph: Graph snapshot.
            tool_id: Tool to evaluate.
            threshold: Minimum acceptable compound reliability.

        Returns:
            Chain reliability, or None if the tool is unknown.
        """
        threshold = self._threshold(threshold)
        node = graph.get_node(tool_id)
        if node is None:
            return None

        dependencies = graph.get_transitive_dependencies(tool_id)

        compound = node.reliability
        for dep in dependencies:
            compound *= dep.reliability

        return ChainReliability(
            id=node.id,
            name=node.name,
            reliability=node.reliability,
            compound=compound,
            chain=[node.id, *(dep.id for dep in dependencies)],
            threshold=threshold,
        )

    def report(
        self,
        graph: DependencyGraph,
        tool_ids: Iterable[str] | None = None,
        threshold: float | None = None,
    ) -> ReliabilityReport:
        """Chain reliability for several tools, sorted weakest first.

        Args:
            graph: Graph snapshot.
            tool_ids: Tools to evaluate. Defaults to every tool in the graph.
            threshold: Minimum acceptable compound reliability.

        Returns:
            Report; unknown ids are skipped.
        """
        threshold = self._threshold(threshold)
        ids = graph.node_ids() if tool_ids is None else tool_ids

        results = [
            result
            for result in (self.chain_reliability(graph, tool_id, threshold) for tool_id in ids)
            if result is not None
        ]
        results.sort(key=lambda r: r.compound)

        report = ReliabilityReport(threshold=threshold, results=results)
        if not report.ok:
            self.logger.warning(
                "Tools below reliability threshold",
                threshold=threshold,
                count=len(report.below_threshold),
            )
        return report
