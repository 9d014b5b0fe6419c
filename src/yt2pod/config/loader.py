"""
Configuration loading pipeline.

Reads the configuration file once, decodes it, validates its structure,
checks the watch policy rules and normalizes every podcast entry while
checking short names for collisions. Any failure aborts the load; callers
get either a complete Configuration or a ConfigError.

Supports environment variable interpolation in the API key, serve host and
format selector.
"""

import json
import os
import re
from pathlib import Path
from typing import Any

import pydantic
import yaml

from yt2pod.config.document import RawConfig, RawPodcast
from yt2pod.config.errors import ConfigError, DecodeError, StorageError
from yt2pod.config.sanity import check_watch_policy, normalize_feed
from yt2pod.config.settings import DEFAULT_MIN_FEEDS, Configuration, FeedDefinition
from yt2pod.config.structure import validate_structure
from yt2pod.config.uniqueness import ShortNameRegistry
from yt2pod.utils.logging import get_logger, log_context

log = get_logger(__name__)

JSON_SUFFIXES = frozenset({".json"})

# Only these top-level values may reference the environment; patterns and
# display text are taken literally.
INTERPOLATED_KEYS = ("yt_data_api_key", "serve_host", "ytdl_fmt_selector")


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(data: dict[str, Any]) -> dict[str, Any]:
    """Interpolate env vars in the top-level keys that allow it."""
    result = dict(data)
    for key in INTERPOLATED_KEYS:
        value = result.get(key)
        if isinstance(value, str):
            result[key] = _interpolate_env_vars(value)
    return result


def _parse_text(text: str, path: Path) -> Any:
    """Parse JSON for .json files, YAML (a JSON superset) for anything else."""
    if path.suffix.lower() in JSON_SUFFIXES:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"invalid JSON in {path}: {e}"
            raise DecodeError(msg) from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {path}: {e}"
        raise DecodeError(msg) from e


def load_document(path: Path) -> RawConfig:
    """
    Read and decode a configuration file into its raw document shape.

    Args:
        path: Path to the configuration file.

    Returns:
        Decoded, type-checked document. No business rules are applied yet.

    Raises:
        StorageError: If the file cannot be read.
        DecodeError: If the content is not a well-formed configuration document.
    """
    try:
        buf = path.read_bytes()
    except OSError as e:
        raise StorageError(str(path), e.strerror or str(e)) from e

    try:
        text = buf.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        msg = f"{path} is not UTF-8 text: {e}"
        raise DecodeError(msg) from e

    data = _parse_text(text, path)
    if data is None:
        msg = f"{path} is empty"
        raise DecodeError(msg)
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level, got {type(data).__name__}"
        raise DecodeError(msg)

    try:
        return RawConfig.model_validate(_process_config_values(data))
    except pydantic.ValidationError as e:
        msg = f"malformed configuration in {path}: {e}"
        raise DecodeError(msg) from e


def _normalize_feeds(podcasts: list[RawPodcast]) -> tuple[FeedDefinition, ...]:
    """Normalize podcast entries in document order, rejecting short name collisions."""
    short_names = ShortNameRegistry()
    feeds: list[FeedDefinition] = []
    for podcast in podcasts:
        feed = normalize_feed(podcast)
        short_names.claim(feed.short_name)
        feeds.append(feed)
        log.debug(
            "Podcast normalized",
            podcast=str(feed),
            epoch=feed.epoch_str or None,
            title_filter=feed.title_filter_pattern or None,
        )
    return tuple(feeds)


def load_config(
    config_path: Path | str,
    *,
    min_feeds: int = DEFAULT_MIN_FEEDS,
) -> Configuration:
    """
    Load the process configuration from a JSON or YAML file.

    Args:
        config_path: Path to the configuration file.
        min_feeds: Minimum number of podcasts the file must define.

    Returns:
        Fully validated, immutable Configuration.

    Raises:
        ConfigError: Subclass describing the first problem found.
    """
    path = Path(config_path)

    with log_context(config_path=str(path)):
        try:
            raw = load_document(path)
            log.debug("Configuration decoded", podcasts=len(raw.podcasts))

            validate_structure(raw, min_feeds)
            watch_policy = check_watch_policy(raw)
            feeds = _normalize_feeds(raw.podcasts)
        except ConfigError as e:
            log.error("Configuration rejected", error_type=type(e).__name__, error=str(e))
            raise

        config = Configuration(
            api_key=raw.yt_data_api_key,
            watch_policy=watch_policy,
            feeds=feeds,
        )
        log.info(
            "Configuration loaded",
            podcasts=len(config.feeds),
            check_interval_minutes=watch_policy.check_interval_minutes,
        )

    return config
