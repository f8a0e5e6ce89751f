"""Criteria and configuration models consumed by the ordering engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SessionType = Literal["routine", "extra", "all"]


class CriterionKind(str, Enum):
    """Value type a criterion reads from each sample."""

    NUMERIC = "numeric"
    DATE = "date"
    ENUM = "enum"
    BOOLEAN = "boolean"


class SortDirection(str, Enum):
    """Whether the normalized score is used as-is or inverted."""

    ASC = "asc"
    DESC = "desc"


class _WireModel(BaseModel):
    """Frozen model that accepts both camelCase and snake_case field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class NormalizationConfig(_WireModel):
    """Optional bounds and fallback used when normalizing a raw value."""

    model_config = ConfigDict(allow_inf_nan=False)

    min: float | None = None
    max: float | None = None
    default_value: float | None = None


class Criterion(_WireModel):
    """One weighted, typed scoring rule with a direction and a data path.

    ``weight`` is not range-checked here; the validator reports
    out-of-range weights as ``InvalidWeightError``.
    """

    id: str
    name: str = ""
    description: str = ""
    kind: CriterionKind = Field(validation_alias=AliasChoices("kind", "type"))
    weight: int
    direction: SortDirection = SortDirection.ASC
    is_active: bool = True
    options: tuple[str, ...] = ()
    data_path: str
    normalization_config: NormalizationConfig | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderingConfiguration(_WireModel):
    """Named collection of criteria used for one ranking run."""

    id: str
    name: str = ""
    description: str = ""
    criteria: tuple[Criterion, ...] = ()
    is_default: bool = False
    session_type: SessionType | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def active_criteria(self) -> tuple[Criterion, ...]:
        """Return criteria flagged as active, in declaration order."""
        return tuple(criterion for criterion in self.criteria if criterion.is_active)
