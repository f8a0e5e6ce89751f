"""Sample ordering engine: strict ``rank`` and lenient ``preview`` entry points."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import pandas as pd

from tastingorder.config.schema import EngineConfig

from .models import Criterion, OrderingConfiguration
from .ranker import SampleRanker
from .score import CriterionNormalizer, CriterionScorer, SampleScore, ScoreAggregator
from .validation import ConfigurationValidator

logger = logging.getLogger(__name__)

PREVIEW_CONFIGURATION_ID = "preview"
PREVIEW_SCOPE_ID = "preview"
SYSTEM_ACTOR_ID = "system"

BREAKDOWN_COLUMNS = [
    "position",
    "sample_id",
    "total_score",
    "criterion_id",
    "raw_value",
    "normalized_value",
    "weighted_score",
]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderingResult:
    """Output of one ranking run."""

    configuration_id: str
    scope_id: str | None
    ordered_items: tuple[Any, ...]
    scores: tuple[SampleScore, ...]
    applied_at: datetime
    generated_by: str | None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-ready mapping using the UI's camelCase keys."""
        return {
            "configurationId": self.configuration_id,
            "scopeId": self.scope_id,
            "orderedItems": list(self.ordered_items),
            "scores": [
                {
                    "sampleId": score.sample_id,
                    "totalScore": score.total_score,
                    "finalPosition": score.final_position,
                    "criteriaScores": [
                        {
                            "criterionId": entry.criterion_id,
                            "rawValue": entry.raw_value,
                            "normalizedValue": entry.normalized_value,
                            "weightedScore": entry.weighted_score,
                        }
                        for entry in score.criteria_scores
                    ],
                }
                for score in self.scores
            ],
            "appliedAt": self.applied_at.isoformat(),
            "generatedBy": self.generated_by,
        }

    def to_frame(self) -> pd.DataFrame:
        """Flatten the score breakdown into one row per (sample, criterion)."""
        rows = [
            {
                "position": score.final_position,
                "sample_id": score.sample_id,
                "total_score": score.total_score,
                "criterion_id": entry.criterion_id,
                "raw_value": entry.raw_value,
                "normalized_value": entry.normalized_value,
                "weighted_score": entry.weighted_score,
            }
            for score in self.scores
            for entry in score.criteria_scores
        ]
        return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)


@dataclass(frozen=True)
class PreviewEntry:
    """One row of a live preview."""

    item: Any
    score: float
    position: int


class SampleOrderingEngine:
    """Stateless facade over validation, scoring and ranking."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.clock = clock or utc_now

        normalizer = CriterionNormalizer(
            date_window_days=self.config.date_window_days,
            equal_range_score=self.config.equal_range_score,
        )
        scorer = CriterionScorer(normalizer, path_separator=self.config.path_separator)
        self.validator = ConfigurationValidator(
            min_weight=self.config.min_weight,
            max_weight=self.config.max_weight,
        )
        self.aggregator = ScoreAggregator(scorer, id_path=self.config.id_path)
        self.ranker = SampleRanker()

    def rank(
        self,
        items: Iterable[Any],
        configuration: OrderingConfiguration | None,
        scope_id: str | None = None,
        actor_id: str | None = None,
    ) -> OrderingResult:
        """Order samples by configuration; validation errors propagate unchanged."""
        samples = list(items) if items is not None else []
        active_criteria = self.validator.validate(samples, configuration)

        applied_at = self.clock()
        logger.debug(
            "Ordering %d samples with configuration %s (%d active criteria)",
            len(samples),
            configuration.id,
            len(active_criteria),
        )

        scores = self.aggregator.aggregate_all(samples, active_criteria, now=applied_at)
        ordered_items, ranked_scores = self.ranker.rank(scores, samples)

        return OrderingResult(
            configuration_id=configuration.id,
            scope_id=scope_id,
            ordered_items=tuple(ordered_items),
            scores=tuple(ranked_scores),
            applied_at=applied_at,
            generated_by=actor_id,
        )

    def preview(
        self,
        items: Iterable[Any],
        criteria: Iterable[Criterion | Mapping[str, Any]] | None,
    ) -> list[PreviewEntry]:
        """Order samples for a live editor without ever raising.

        On any failure the samples come back in input order with a score
        of 0 and position equal to their input index + 1.
        """
        samples: list[Any] = []
        try:
            samples = list(items) if items is not None else []
            configuration = OrderingConfiguration.model_validate(
                {
                    "id": PREVIEW_CONFIGURATION_ID,
                    "name": "Preview",
                    "description": "Temporary preview configuration",
                    "criteria": tuple(criteria),
                    "is_default": False,
                    "created_by": SYSTEM_ACTOR_ID,
                }
            )
            result = self.rank(samples, configuration, PREVIEW_SCOPE_ID, SYSTEM_ACTOR_ID)
        except Exception:
            logger.warning("Preview ordering failed; keeping input order", exc_info=True)
            return [
                PreviewEntry(item=item, score=0.0, position=index + 1)
                for index, item in enumerate(samples)
            ]

        return [
            PreviewEntry(item=item, score=score.total_score, position=score.final_position)
            for item, score in zip(result.ordered_items, result.scores)
        ]
