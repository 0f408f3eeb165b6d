"""Graph algorithms - traversal, cycles, paths, impact, blast radius, reliability.

This module provides the in-memory dependency graph engine. A snapshot is
loaded once from flat tool and dependency records; every analysis is a
read-only function over it.
"""

from tooldeps.graph.blast_radius import (
    BlastRadius,
    BlastRadiusCalculator,
    RiskAssessment,
    RiskLevel,
    TypeImpact,
)
from tooldeps.graph.dot import generate_dot
from tooldeps.graph.impact import AffectedTool, ImpactAnalysis, ImpactAnalyzer
from tooldeps.graph.loader import load_graph
from tooldeps.graph.paths import PathResult
from tooldeps.graph.reliability import ChainReliability, ReliabilityCalculator, ReliabilityReport
from tooldeps.graph.store import DependencyGraph
from tooldeps.graph.traversal import Direction, TraversalNode, TraversalResult

__all__ = [
    # Store
    "DependencyGraph",
    "load_graph",
    # Traversal
    "Direction",
    "TraversalNode",
    "TraversalResult",
    "PathResult",
    # Impact
    "ImpactAnalyzer",
    "ImpactAnalysis",
    "AffectedTool",
    # Blast Radius
    "BlastRadiusCalculator",
    "BlastRadius",
    "RiskAssessment",
    "RiskLevel",
    "TypeImpact",
    # Reliability
    "ReliabilityCalculator",
    "ChainReliability",
    "ReliabilityReport",
    # Export
    "generate_dot",
]
