"""Stable descending ranking of scored samples."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

import numpy as np

from tastingorder.engine.score.calculator import SampleScore


class SampleRanker:
    """Sort by total_score descending and assign dense 1-based positions.

    Ties keep their input order.
    """

    def rank(
        self,
        scores: Sequence[SampleScore],
        items: Sequence[Any],
    ) -> tuple[list[Any], list[SampleScore]]:
        """Return (ordered items, scores with final_position) in ranked order."""
        if len(scores) != len(items):
            raise ValueError("scores and items must have the same length.")
        if not scores:
            return [], []

        by_input = sorted(scores, key=lambda score: score.input_index)
        totals = np.array([score.total_score for score in by_input], dtype=np.float64)
        order = np.argsort(-totals, kind="stable")

        ranked = [
            replace(by_input[int(source)], final_position=position)
            for position, source in enumerate(order, start=1)
        ]
        ordered_items = [items[score.input_index] for score in ranked]
        return ordered_items, ranked
