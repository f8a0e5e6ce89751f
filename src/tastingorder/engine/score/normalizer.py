"""Per-kind normalization of raw sample values to a 0-100 score."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import numpy as np
import pandas as pd

from tastingorder.engine.extract import ABSENT
from tastingorder.engine.models import Criterion, CriterionKind, SortDirection

logger = logging.getLogger(__name__)

SCORE_MIN = 0.0
SCORE_MAX = 100.0

Strategy = Callable[[Any, Criterion, pd.Timestamp], float]


def clamp_score(value: float) -> float:
    """Clamp a score into the [0, 100] range; NaN maps to 0."""
    number = float(value)
    if np.isnan(number):
        return SCORE_MIN
    return float(np.clip(number, SCORE_MIN, SCORE_MAX))


def to_utc_timestamp(value: Any) -> pd.Timestamp | None:
    """Parse a date-like value into a UTC timestamp, or None if unparseable.

    Numbers are read as epoch seconds; naive values are taken to be UTC.
    """
    try:
        if isinstance(value, (int, float, np.number)) and not isinstance(value, bool):
            stamp = pd.Timestamp(float(value), unit="s")
        else:
            stamp = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError):
        return None

    if stamp is pd.NaT:
        return None
    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


class CriterionNormalizer:
    """Convert a raw value plus its criterion into a desirability score."""

    def __init__(self, date_window_days: int = 30, equal_range_score: float = 50.0) -> None:
        if date_window_days <= 0:
            raise ValueError("date_window_days must be > 0.")
        if not (SCORE_MIN <= equal_range_score <= SCORE_MAX):
            raise ValueError("equal_range_score must be between 0 and 100.")

        self.date_window_days = date_window_days
        self.equal_range_score = float(equal_range_score)
        self._strategies: dict[CriterionKind, Strategy] = {
            CriterionKind.NUMERIC: self._normalize_numeric,
            CriterionKind.DATE: self._normalize_date,
            CriterionKind.ENUM: self._normalize_enum,
            CriterionKind.BOOLEAN: self._normalize_boolean,
        }

    def normalize(self, raw_value: Any, criterion: Criterion, now: datetime | None = None) -> float:
        """Return the post-direction score for ``raw_value``.

        Absent values short-circuit to the criterion's default (or 0) and
        are not direction-adjusted.
        """
        if raw_value is ABSENT or raw_value is None:
            return self.default_score(criterion)

        reference = to_utc_timestamp(now) if now is not None else None
        if reference is None:
            reference = pd.Timestamp.now(tz="UTC")

        score = self._strategies[criterion.kind](raw_value, criterion, reference)
        return self.apply_direction(score, criterion.direction)

    @staticmethod
    def apply_direction(score: float, direction: SortDirection) -> float:
        """Invert the score for descending criteria."""
        if direction is SortDirection.DESC:
            return SCORE_MAX - score
        return score

    @staticmethod
    def default_score(criterion: Criterion) -> float:
        """Score used when the sample has no value at the criterion's path."""
        config = criterion.normalization_config
        if config is None or config.default_value is None:
            return SCORE_MIN
        return clamp_score(config.default_value)

    def _normalize_numeric(self, raw_value: Any, criterion: Criterion, now: pd.Timestamp) -> float:
        try:
            number = float(raw_value)
        except OverflowError:
            number = np.inf if raw_value > 0 else -np.inf
        except (TypeError, ValueError):
            return SCORE_MIN
        if np.isnan(number):
            return SCORE_MIN

        config = criterion.normalization_config
        if config is None or config.min is None or config.max is None:
            # Value is assumed to already be on the 0-100 scale.
            return clamp_score(number)

        if config.max == config.min:
            return self.equal_range_score

        return clamp_score((number - config.min) / (config.max - config.min) * SCORE_MAX)

    def _normalize_date(self, raw_value: Any, criterion: Criterion, now: pd.Timestamp) -> float:
        stamp = to_utc_timestamp(raw_value)
        if stamp is None:
            logger.debug("Unparseable date %r for criterion %s", raw_value, criterion.id)
            return SCORE_MIN

        config = criterion.normalization_config
        window = float(self.date_window_days)
        if config is not None and config.max is not None and config.max > 0:
            window = float(config.max)

        try:
            days_old = (now - stamp) // pd.Timedelta(days=1)
        except (OverflowError, ValueError):
            # Age outside the representable timedelta range.
            return SCORE_MAX if stamp > now else SCORE_MIN
        if days_old <= 0:
            return SCORE_MAX
        if days_old >= window:
            return SCORE_MIN

        return clamp_score(SCORE_MAX - (days_old / window) * SCORE_MAX)

    @staticmethod
    def _normalize_enum(raw_value: Any, criterion: Criterion, now: pd.Timestamp) -> float:
        options = criterion.options
        if raw_value not in options:
            return SCORE_MIN
        if len(options) == 1:
            return SCORE_MAX

        return options.index(raw_value) / (len(options) - 1) * SCORE_MAX

    @staticmethod
    def _normalize_boolean(raw_value: Any, criterion: Criterion, now: pd.Timestamp) -> float:
        return SCORE_MAX if raw_value else SCORE_MIN
