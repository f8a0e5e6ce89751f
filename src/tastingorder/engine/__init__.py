"""Sample ordering engine."""

from .errors import (
    ConfigurationNotFoundError,
    EmptyInputError,
    InvalidConfigurationError,
    InvalidWeightError,
    NoActiveCriteriaError,
    OrderingError,
)
from .extract import ABSENT, extract_value
from .models import (
    Criterion,
    CriterionKind,
    NormalizationConfig,
    OrderingConfiguration,
    SortDirection,
)
from .ordering import OrderingResult, PreviewEntry, SampleOrderingEngine
from .validation import ConfigurationValidator

__all__ = [
    "ABSENT",
    "ConfigurationNotFoundError",
    "ConfigurationValidator",
    "Criterion",
    "CriterionKind",
    "EmptyInputError",
    "InvalidConfigurationError",
    "InvalidWeightError",
    "NoActiveCriteriaError",
    "NormalizationConfig",
    "OrderingConfiguration",
    "OrderingError",
    "OrderingResult",
    "PreviewEntry",
    "SampleOrderingEngine",
    "SortDirection",
    "extract_value",
]
