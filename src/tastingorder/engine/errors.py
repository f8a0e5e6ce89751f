"""Error taxonomy for ordering runs.

All errors are structural and deterministic: the same inputs always fail
the same way, so none of them is worth retrying.
"""

from __future__ import annotations

from collections.abc import Sequence


class OrderingError(ValueError):
    """Base class for every error raised by the ordering engine."""


class EmptyInputError(OrderingError):
    """Raised when there are no samples to order."""


class InvalidConfigurationError(OrderingError):
    """Raised when the configuration is missing or has no criteria."""


class NoActiveCriteriaError(OrderingError):
    """Raised when no active criterion carries a positive weight."""


class InvalidWeightError(OrderingError):
    """Raised when an active criterion's weight falls outside the allowed range."""

    def __init__(self, criterion_ids: Sequence[str], min_weight: int, max_weight: int) -> None:
        self.criterion_ids = tuple(criterion_ids)
        self.min_weight = min_weight
        self.max_weight = max_weight
        joined = ", ".join(self.criterion_ids)
        super().__init__(
            f"Weights must be between {min_weight} and {max_weight}; offending criteria: {joined}"
        )


class ConfigurationNotFoundError(OrderingError, LookupError):
    """Raised when no configuration matches a preset id or session type."""
