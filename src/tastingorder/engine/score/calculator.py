"""Weighted per-criterion scoring and per-sample aggregation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tastingorder.engine.extract import ABSENT, extract_value
from tastingorder.engine.models import Criterion

from .normalizer import CriterionNormalizer, clamp_score


@dataclass(frozen=True)
class CriterionScore:
    """Audit record of one criterion applied to one sample."""

    criterion_id: str
    raw_value: Any
    normalized_value: float
    weighted_score: float


@dataclass(frozen=True)
class SampleScore:
    """Total score of one sample with its per-criterion breakdown."""

    sample_id: Any
    input_index: int
    total_score: float
    criteria_scores: tuple[CriterionScore, ...]
    final_position: int = 0


class CriterionScorer:
    """Compute weighted = normalized * weight / total_active_weight."""

    def __init__(self, normalizer: CriterionNormalizer | None = None, path_separator: str = ".") -> None:
        self.normalizer = normalizer or CriterionNormalizer()
        self.path_separator = path_separator

    def score(
        self,
        item: Any,
        criterion: Criterion,
        total_active_weight: float,
        now: datetime | None = None,
    ) -> CriterionScore:
        """Score a single criterion against a single sample."""
        raw_value = extract_value(item, criterion.data_path, self.path_separator)
        normalized = self.normalizer.normalize(raw_value, criterion, now=now)
        weighted = normalized * criterion.weight / total_active_weight

        return CriterionScore(
            criterion_id=criterion.id,
            raw_value=None if raw_value is ABSENT else raw_value,
            normalized_value=normalized,
            weighted_score=weighted,
        )


class ScoreAggregator:
    """Sum weighted criterion scores into one total per sample."""

    def __init__(self, scorer: CriterionScorer | None = None, id_path: str = "id") -> None:
        self.scorer = scorer or CriterionScorer()
        self.id_path = id_path

    def aggregate(
        self,
        item: Any,
        index: int,
        active_criteria: Sequence[Criterion],
        now: datetime | None = None,
        total_active_weight: float | None = None,
    ) -> SampleScore:
        """Return the sample's score; ``final_position`` is left for the ranker."""
        if total_active_weight is None:
            total_active_weight = sum(criterion.weight for criterion in active_criteria)

        breakdown = tuple(
            self.scorer.score(item, criterion, total_active_weight, now=now)
            for criterion in active_criteria
        )
        # Contributions sum to at most 100; clamp absorbs float drift.
        total_score = clamp_score(sum(entry.weighted_score for entry in breakdown))

        return SampleScore(
            sample_id=self._sample_id(item, index),
            input_index=index,
            total_score=total_score,
            criteria_scores=breakdown,
        )

    def aggregate_all(
        self,
        items: Sequence[Any],
        active_criteria: Sequence[Criterion],
        now: datetime | None = None,
    ) -> list[SampleScore]:
        """Score every sample against the same active criteria."""
        total_active_weight = sum(criterion.weight for criterion in active_criteria)
        return [
            self.aggregate(
                item,
                index,
                active_criteria,
                now=now,
                total_active_weight=total_active_weight,
            )
            for index, item in enumerate(items)
        ]

    def _sample_id(self, item: Any, index: int) -> Any:
        sample_id = extract_value(item, self.id_path, self.scorer.path_separator)
        return index if sample_id is ABSENT else sample_id
