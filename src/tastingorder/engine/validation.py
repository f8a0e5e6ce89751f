"""Structural checks run before any sample is scored."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .errors import (
    EmptyInputError,
    InvalidConfigurationError,
    InvalidWeightError,
    NoActiveCriteriaError,
)
from .models import Criterion, OrderingConfiguration


class ConfigurationValidator:
    """Reject a run up front so scoring never aborts half-way."""

    def __init__(self, min_weight: int = 1, max_weight: int = 100) -> None:
        if min_weight > max_weight:
            raise ValueError("min_weight cannot exceed max_weight.")
        self.min_weight = min_weight
        self.max_weight = max_weight

    def validate(
        self,
        items: Sequence[Any],
        configuration: OrderingConfiguration | None,
    ) -> tuple[Criterion, ...]:
        """Check the run in order and return the active criteria."""
        if not items:
            raise EmptyInputError("Sample list cannot be empty.")

        if configuration is None or not configuration.criteria:
            raise InvalidConfigurationError("Ordering configuration must define at least one criterion.")

        active = configuration.active_criteria
        if not active or sum(criterion.weight for criterion in active) <= 0:
            raise NoActiveCriteriaError("At least one criterion must be active with a weight > 0.")

        offending = [
            criterion.id
            for criterion in active
            if not (self.min_weight <= criterion.weight <= self.max_weight)
        ]
        if offending:
            raise InvalidWeightError(offending, self.min_weight, self.max_weight)

        return active
