"""Unit tests for settings, errors, logging helpers and tool models."""

import pytest

from tooldeps.common.config import Settings, get_settings
from tooldeps.common.exceptions import (
    ConfigurationError,
    InvalidQueryError,
    ToolDepsError,
    ToolNotFoundError,
)
from tooldeps.common.logging import add_service_context
from tooldeps.graph import ReliabilityCalculator
from tooldeps.models import ToolType
from tooldeps.models.tool import stub_type_for


@pytest.mark.unit
class TestSettings:
    """Test cases for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test the documented defaults."""
        monkeypatch.delenv("TOOLDEPS_GRAPH__DEFAULT_RELIABILITY", raising=False)
        settings = Settings(_env_file=None)

        assert settings.graph.default_reliability == 0.95
        assert settings.graph.default_path_limit == 10
        assert settings.impact.critical_types == ["mcp"]
        assert settings.reliability.min_threshold == 0.8

    def test_nested_env_override(self, monkeypatch):
        """Test overriding a nested value through the environment."""
        monkeypatch.setenv("TOOLDEPS_GRAPH__DEFAULT_PATH_LIMIT", "25")
        monkeypatch.setenv("TOOLDEPS_IMPACT__CRITICAL_TYPES", '["mcp", "service"]')

        settings = Settings(_env_file=None)

        assert settings.graph.default_path_limit == 25
        assert settings.impact.critical_types == ["mcp", "service"]


@pytest.mark.unit
class TestGetSettings:
    """Test cases for the cached settings accessor."""

    @pytest.fixture(autouse=True)
    def fresh_cache(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_cached(self):
        """Test that settings are built once."""
        assert get_settings() is get_settings()

    def test_invalid_environment_raises(self, monkeypatch):
        """Test that bad environment values surface as a configuration error."""
        monkeypatch.setenv("TOOLDEPS_GRAPH__DEFAULT_PATH_LIMIT", "0")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.error_code == "CONFIGURATION_ERROR"
        assert exc_info.value.details["errors"]


@pytest.mark.unit
class TestExceptions:
    """Test cases for the error hierarchy."""

    def test_to_dict(self):
        """Test the JSON error payload."""
        error = ToolNotFoundError("Tool 'x' not found", details={"tool_id": "x"})

        assert isinstance(error, ToolDepsError)
        assert error.to_dict() == {
            "success": False,
            "error": "TOOL_NOT_FOUND",
            "message": "Tool 'x' not found",
            "details": {"tool_id": "x"},
        }

    def test_default_message_and_exit_code(self):
        """Test class-level defaults."""
        error = InvalidQueryError()

        assert error.message == "Invalid query parameters"
        assert error.exit_code == 2
        assert "details" not in error.to_dict()


@pytest.mark.unit
class TestStubTypes:
    """Test cases for stub type inference."""

    @pytest.mark.parametrize("dependency_type,expected", [
        ("cli", ToolType.CLI),
        ("mcp", ToolType.MCP),
        ("library", ToolType.LIBRARY),
        ("npm", ToolType.LIBRARY),
        ("runtime", ToolType.LIBRARY),
    ])
    def test_stub_type_for(self, dependency_type, expected):
        """Test that edge kinds map onto tool kinds."""
        assert stub_type_for(dependency_type) is expected


@pytest.mark.unit
class TestLogging:
    """Test cases for structured logging helpers."""

    def test_service_context(self):
        """Test that every entry is tagged with the application identity."""
        event = add_service_context(None, "info", {"event": "Graph loaded"})

        assert event["service"] == "tooldeps"
        assert event["event"] == "Graph loaded"
        assert {"version", "environment"} <= set(event)

    def test_logger_mixin(self):
        """Test that the mixin caches one logger per instance."""
        calculator = ReliabilityCalculator()

        assert calculator.logger is calculator.logger
