"""Ranking of scored samples."""

from .ranking import SampleRanker

__all__ = ["SampleRanker"]
