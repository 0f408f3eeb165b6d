"""Pytest configuration and fixtures for tooldeps tests."""

from collections.abc import Callable, Iterable

import pytest

from tooldeps.common.config import Settings
from tooldeps.common.logging import setup_logging
from tooldeps.graph import DependencyGraph, load_graph


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Get test settings with defaults independent of the environment."""
    return Settings(
        environment="ci",
        logging={"level": "WARNING", "format": "console"},
    )


@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings) -> None:
    """Configure structured logging once for the test session."""
    setup_logging(test_settings.logging)


GraphFactory = Callable[..., DependencyGraph]


@pytest.fixture
def make_graph(test_settings: Settings) -> GraphFactory:
    """Build a graph from ``(consumer, provider)`` pairs.

    Every id mentioned in an edge, or listed in ``extra``, becomes a
    registered tool. Per-tool attributes can be overridden with the
    ``reliability``, ``types`` and ``debt`` mappings.
    """

    def _make(
        edges: Iterable[tuple[str, str]] = (),
        extra: Iterable[str] = (),
        reliability: dict[str, float] | None = None,
        types: dict[str, str] | None = None,
        debt: dict[str, int] | None = None,
    ) -> DependencyGraph:
        edges = list(edges)
        ids: list[str] = []
        for consumer, provider in edges:
            for tool_id in (consumer, provider):
                if tool_id not in ids:
                    ids.append(tool_id)
        for tool_id in extra:
            if tool_id not in ids:
                ids.append(tool_id)

        reliability = reliability or {}
        types = types or {}
        debt = debt or {}

        tools = [
            {
                "id": tool_id,
                "name": tool_id,
                "type": types.get(tool_id, "cli"),
                "reliability": reliability.get(tool_id, 0.95),
                "debtScore": debt.get(tool_id, 0),
            }
            for tool_id in ids
        ]
        dependencies = [
            {"consumerId": consumer, "providerId": provider, "type": "runtime"}
            for consumer, provider in edges
        ]
        return load_graph(tools, dependencies, settings=test_settings)

    return _make


@pytest.fixture
def chain_graph(make_graph: GraphFactory) -> DependencyGraph:
    """Linear chain a -> b -> c -> d."""
    return make_graph([("a", "b"), ("b", "c"), ("c", "d")])


@pytest.fixture
def diamond_graph(make_graph: GraphFactory) -> DependencyGraph:
    """Diamond a -> b -> d, a -> c -> d."""
    return make_graph(
        [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")],
        reliability={"a": 0.95, "b": 0.90, "c": 0.85, "d": 0.80},
    )


@pytest.fixture
def cycle_graph(make_graph: GraphFactory) -> DependencyGraph:
    """Three-cycle a -> b -> c -> a."""
    return make_graph([("a", "b"), ("b", "c"), ("c", "a")])


@pytest.fixture
def ecosystem_graph(make_graph: GraphFactory) -> DependencyGraph:
    """Small tool ecosystem around a shared ``core`` library.

    core <- email (cli) <- mail-mcp (mcp)
    core <- calendar (cli) <- agenda-mcp (mcp) <- assistant (skill)
    core <- reporter (library, high debt)
    """
    return make_graph(
        [
            ("email", "core"),
            ("calendar", "core"),
            ("reporter", "core"),
            ("mail-mcp", "email"),
            ("agenda-mcp", "calendar"),
            ("assistant", "agenda-mcp"),
        ],
        types={
            "core": "library",
            "reporter": "library",
            "mail-mcp": "mcp",
            "agenda-mcp": "mcp",
            "assistant": "skill",
        },
        debt={"reporter": 8, "email": 2},
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "slow: Slow tests")
