"""
Startup configuration with typed Pydantic models.

load_config runs the whole pipeline: read, decode, structural validation,
watch policy checks, per-podcast normalization and short name uniqueness.
"""

from yt2pod.config.errors import (
    ConfigError,
    DecodeError,
    DuplicateKeyError,
    NormalizationError,
    SanityError,
    StorageError,
    ValidationError,
)
from yt2pod.config.loader import load_config, load_document
from yt2pod.config.settings import (
    DEFAULT_MIN_FEEDS,
    Configuration,
    FeedDefinition,
    WatchPolicy,
)

__all__ = [
    "DEFAULT_MIN_FEEDS",
    "ConfigError",
    "Configuration",
    "DecodeError",
    "DuplicateKeyError",
    "FeedDefinition",
    "NormalizationError",
    "SanityError",
    "StorageError",
    "ValidationError",
    "WatchPolicy",
    "load_config",
    "load_document",
]
