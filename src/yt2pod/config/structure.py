"""
Structural validation of the decoded configuration document.

Each rule is a plain function raising ValidationError with the rule and the
offending field. Rules run in a fixed order and the first violation aborts
the load.
"""

from collections.abc import Sized

from yt2pod.config.document import RawConfig
from yt2pod.config.errors import ValidationError
from yt2pod.config.settings import DEFAULT_MIN_FEEDS

_PATH_SEPARATORS = ("/", "\\")


def require_non_empty(value: str, field: str) -> None:
    """Rule ``required``: the string must not be empty."""
    if not value:
        raise ValidationError(field, "required", "cannot be blank")


def require_min_length(value: Sized, field: str, minimum: int) -> None:
    """Rule ``length``: the sequence must hold at least ``minimum`` items."""
    if len(value) < minimum:
        msg = f"must contain at least {minimum} entries, got {len(value)}"
        raise ValidationError(field, "length", msg)


def require_path_safe(value: str, field: str) -> None:
    """Rule ``path_safe``: the string must be usable as a single file name component."""
    if value in (".", "..") or any(sep in value for sep in _PATH_SEPARATORS):
        msg = f"must be usable as a file name, got: {value!r}"
        raise ValidationError(field, "path_safe", msg)


def validate_structure(raw: RawConfig, min_feeds: int = DEFAULT_MIN_FEEDS) -> None:
    """
    Apply the declarative rules to a decoded document.

    Args:
        raw: Decoded configuration document.
        min_feeds: Lower bound on the number of podcasts.

    Raises:
        ValidationError: On the first violated rule.
    """
    require_non_empty(raw.yt_data_api_key, "yt_data_api_key")
    require_min_length(raw.podcasts, "podcasts", min_feeds)

    # Short names end up in file paths and act as primary key.
    for i, podcast in enumerate(raw.podcasts):
        field = f"podcasts[{i}].short_name"
        require_non_empty(podcast.short_name, field)
        require_path_safe(podcast.short_name, field)
