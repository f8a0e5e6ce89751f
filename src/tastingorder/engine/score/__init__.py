"""Score calculation modules."""

from .calculator import CriterionScore, CriterionScorer, SampleScore, ScoreAggregator
from .normalizer import CriterionNormalizer, clamp_score, to_utc_timestamp

__all__ = [
    "CriterionNormalizer",
    "CriterionScore",
    "CriterionScorer",
    "SampleScore",
    "ScoreAggregator",
    "clamp_score",
    "to_utc_timestamp",
]
