"""
Business-rule checks and normalization of raw configuration values.

The watch policy gates run first, in a fixed order, and the first failing
gate aborts the load. Feed entries are then normalized one at a time: the
epoch string becomes a datetime and the title filter becomes a compiled,
case-insensitive pattern.
"""

import re
from datetime import datetime, timezone
from pathlib import Path

from yt2pod.config.document import RawConfig, RawPodcast
from yt2pod.config.errors import NormalizationError, SanityError
from yt2pod.config.settings import FeedDefinition, WatchPolicy

MIN_CHECK_INTERVAL_MINUTES = 1

EPOCH_FORMAT = "%Y-%m-%d"
_EPOCH_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def check_watch_policy(raw: RawConfig) -> WatchPolicy:
    """
    Check the watch policy fields and build the normalized policy.

    Args:
        raw: Structurally valid configuration document.

    Returns:
        WatchPolicy with the file extension stripped of leading dots.

    Raises:
        SanityError: On the first violated rule.
    """
    if raw.check_interval_minutes < MIN_CHECK_INTERVAL_MINUTES:
        msg = f"check interval must be >= {MIN_CHECK_INTERVAL_MINUTES} minute"
        raise SanityError(msg)
    if not raw.ytdl_fmt_selector:
        raise SanityError("missing format selector")
    if not raw.ytdl_write_ext:
        raise SanityError("missing file extension")
    if not raw.serve_host:
        raise SanityError("missing host")
    if raw.serve_port == 0:
        raise SanityError("missing port")

    # ".m4a" and "m4a" mean the same
    extension = raw.ytdl_write_ext.lstrip(".")
    if not extension:
        raise SanityError("missing file extension")

    return WatchPolicy(
        check_interval_minutes=raw.check_interval_minutes,
        download_format_selector=raw.ytdl_fmt_selector,
        download_file_extension=extension,
        serve_host=raw.serve_host,
        serve_port=raw.serve_port,
        serve_directory_listings=raw.serve_directory_listings,
    )


def parse_epoch(entry: str, epoch_str: str) -> datetime | None:
    """
    Parse an epoch string of the exact form YYYY-MM-DD.

    Args:
        entry: Short name of the feed, for error reporting.
        epoch_str: Raw epoch string, may be empty.

    Returns:
        Midnight UTC of that day, or None when the string is empty.

    Raises:
        NormalizationError: If the string is not a valid YYYY-MM-DD date.
    """
    if not epoch_str:
        return None
    if not _EPOCH_SHAPE.fullmatch(epoch_str):
        raise NormalizationError(entry, "epoch", f"expected YYYY-MM-DD, got {epoch_str!r}")
    try:
        parsed = datetime.strptime(epoch_str, EPOCH_FORMAT)
    except ValueError as e:
        raise NormalizationError(entry, "epoch", str(e)) from e
    return parsed.replace(tzinfo=timezone.utc)


def compile_title_filter(entry: str, pattern: str) -> re.Pattern[str]:
    """
    Compile a title filter for case-insensitive matching.

    An empty pattern matches every title. The pattern is compiled with
    re.IGNORECASE rather than wrapped in "(?i:...)", so an unbalanced pattern
    such as "a)(b" is rejected instead of compiling to a different expression.

    Raises:
        NormalizationError: If the pattern is not a valid regular expression.
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise NormalizationError(entry, "title_filter", str(e)) from e


def normalize_feed(raw: RawPodcast) -> FeedDefinition:
    """
    Turn one raw podcast entry into a FeedDefinition.

    The epoch is parsed before the title filter is compiled, so an entry
    with both fields broken reports the epoch.
    """
    entry = raw.short_name
    epoch = parse_epoch(entry, raw.epoch)
    title_filter = compile_title_filter(entry, raw.title_filter)

    return FeedDefinition(
        channel_ref=raw.yt_channel,
        name=raw.name,
        short_name=raw.short_name,
        description=raw.description,
        title_filter_pattern=raw.title_filter,
        title_filter=title_filter,
        epoch_str=raw.epoch,
        epoch=epoch,
        vidya=raw.vidya,
        custom_image_path=Path(raw.custom_image) if raw.custom_image else None,
    )
