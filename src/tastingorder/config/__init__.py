"""Config loading and schema."""

from .loader import ConfigLoadError, load_config, load_configuration, load_items
from .schema import EngineConfig

__all__ = [
    "ConfigLoadError",
    "EngineConfig",
    "load_config",
    "load_configuration",
    "load_items",
]
