"""Pydantic schemas for tool and dependency records.

These validate the flat records handed over by the persistence layer
before they are turned into graph nodes and edges. Both snake_case and
the camelCase keys used in JSON exports are accepted.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tooldeps.models.tool import ToolType


class ToolRecord(BaseModel):
    """A registered tool as stored by the persistence layer."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    id: str = Field(..., min_length=1, max_length=255)
    name: str | None = Field(None, max_length=255)
    type: ToolType
    version: str | None = Field(None, max_length=100)
    reliability: float | None = Field(None, ge=0.0, le=1.0)
    debt_score: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("debt_score", "debtScore"),
    )
    stub: bool = False


class DependencyRecord(BaseModel):
    """A dependency edge as stored by the persistence layer."""

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    consumer_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("consumer_id", "consumerId", "from"),
    )
    provider_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("provider_id", "providerId", "to"),
    )
    type: str = Field("runtime", max_length=50)
    version_constraint: str | None = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices("version_constraint", "versionConstraint", "version"),
    )
    optional: bool = False
