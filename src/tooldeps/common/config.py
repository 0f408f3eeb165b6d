"""Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env files.
Each analysis component reads its own section of the shared settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tooldeps.common.exceptions import ConfigurationError


class GraphSettings(BaseSettings):
    """Graph loading and query defaults."""

    model_config = SettingsConfigDict(env_prefix="GRAPH_")

    # Reliability assumed for tools that do not declare one
    default_reliability: float = Field(default=0.95, ge=0.0, le=1.0)

    # Path enumeration
    default_path_limit: int = Field(default=10, ge=1, le=10000)

    # Focus subgraph depth for DOT export
    default_focus_depth: int = Field(default=3, ge=0, le=50)


class ImpactSettings(BaseSettings):
    """Blast radius and risk scoring configuration."""

    model_config = SettingsConfigDict(env_prefix="IMPACT_")

    # Tool types treated as high-priority when affected
    critical_types: list[str] = Field(default_factory=lambda: ["mcp"])

    # Debt score above which a dependent gets flagged
    high_debt_threshold: int = Field(default=5, ge=0)

    # Risk level upper bounds (inclusive)
    risk_low: float = Field(default=20.0, ge=0)
    risk_medium: float = Field(default=50.0, ge=0)
    risk_high: float = Field(default=100.0, ge=0)

    # Chain reliability approximation
    reliability_floor: float = Field(default=0.1, gt=0.0, le=1.0)
    depth_exponent_cap: int = Field(default=3, ge=1)
    critical_weight: float = Field(default=5.0, ge=0)

    # Rollback hint when chain reliability drops below this value
    low_reliability_warning: float = Field(default=0.8, ge=0.0, le=1.0)

    @field_validator("risk_high")
    @classmethod
    def validate_thresholds(cls, v: float, info) -> float:
        """Ensure risk thresholds are ascending."""
        low = info.data.get("risk_low", 0)
        medium = info.data.get("risk_medium", 0)
        if not low <= medium <= v:
            raise ValueError("risk thresholds must satisfy low <= medium <= high")
        return v


class ReliabilitySettings(BaseSettings):
    """Chain reliability configuration."""

    model_config = SettingsConfigDict(env_prefix="RELIABILITY_")

    min_threshold: float = Field(default=0.8, ge=0.0, le=1.0)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"
    include_timestamp: bool = True
    include_caller: bool = False


class Settings(BaseSettings):
    """Main application settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLDEPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application info
    app_name: str = "tooldeps"
    app_version: str = "0.1.0"
    environment: Literal["development", "ci", "production"] = "development"

    # Sub-configurations
    graph: GraphSettings = Field(default_factory=GraphSettings)
    impact: ImpactSettings = Field(default_factory=ImpactSettings)
    reliability: ReliabilitySettings = Field(default_factory=ReliabilitySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings singleton.

    Raises:
        ConfigurationError: If the environment or .env file holds invalid values.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid tooldeps configuration",
            details={"errors": e.errors(include_url=False, include_context=False)},
            cause=e,
        ) from e
