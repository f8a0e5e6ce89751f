"""Nested field lookup on opaque sample records."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)


class _Absent:
    """Marker for a field that could not be resolved."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def extract_value(item: Any, path: str, separator: str = ".") -> Any:
    """Resolve ``path`` on ``item`` and return the value or ``ABSENT``.

    Mappings are walked by key, sequences by integer segment and anything
    else by attribute. A missing segment, a ``None`` along the way or a
    segment that does not fit the current value's shape all yield
    ``ABSENT``; this function never raises.
    """
    if not path:
        return ABSENT

    current = item
    for segment in path.split(separator):
        if current is None:
            return ABSENT
        current = _step(current, segment)
        if current is ABSENT:
            return ABSENT

    return ABSENT if current is None else current


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(segment, ABSENT)

    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        try:
            return current[int(segment)]
        except (ValueError, IndexError):
            return ABSENT

    if not segment or segment.startswith("_"):
        return ABSENT
    try:
        return getattr(current, segment, ABSENT)
    except Exception:
        logger.debug("Attribute %r raised during lookup", segment, exc_info=True)
        return ABSENT
