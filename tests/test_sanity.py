"""Tests for watch policy checks and podcast normalization."""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from yt2pod.config.document import RawConfig, RawPodcast
from yt2pod.config.errors import NormalizationError, SanityError
from yt2pod.config.sanity import (
    check_watch_policy,
    compile_title_filter,
    normalize_feed,
    parse_epoch,
)


class TestCheckWatchPolicy:
    """Tests for the watch policy sanity gates."""

    def test_valid_policy(self, valid_document: dict[str, Any]) -> None:
        """Test a valid policy is converted."""
        policy = check_watch_policy(RawConfig.model_validate(valid_document))

        assert policy.check_interval_minutes == 15
        assert policy.download_file_extension == "m4a"
        assert policy.serve_directory_listings is True

    @pytest.mark.parametrize(
        ("key", "value", "message"),
        [
            ("check_interval_minutes", 0, "check interval must be >= 1 minute"),
            ("check_interval_minutes", -5, "check interval must be >= 1 minute"),
            ("ytdl_fmt_selector", "", "missing format selector"),
            ("ytdl_write_ext", "", "missing file extension"),
            ("serve_host", "", "missing host"),
            ("serve_port", 0, "missing port"),
        ],
    )
    def test_gates(
        self, valid_document: dict[str, Any], key: str, value: Any, message: str
    ) -> None:
        """Test each gate reports its own message."""
        valid_document[key] = value

        with pytest.raises(SanityError) as exc_info:
            check_watch_policy(RawConfig.model_validate(valid_document))
        assert str(exc_info.value) == message

    def test_first_failure_wins(self, valid_document: dict[str, Any]) -> None:
        """Test that gates run in order and the first failure is reported."""
        valid_document["check_interval_minutes"] = 0
        valid_document["serve_host"] = ""
        valid_document["serve_port"] = 0

        with pytest.raises(SanityError, match="check interval"):
            check_watch_policy(RawConfig.model_validate(valid_document))

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("m4a", "m4a"), (".m4a", "m4a"), ("..opus", "opus")],
    )
    def test_extension_leading_dots_stripped(
        self, valid_document: dict[str, Any], raw: str, expected: str
    ) -> None:
        """Test extension normalization."""
        valid_document["ytdl_write_ext"] = raw
        policy = check_watch_policy(RawConfig.model_validate(valid_document))
        assert policy.download_file_extension == expected

    def test_extension_only_dots(self, valid_document: dict[str, Any]) -> None:
        """Test that an extension made only of dots counts as missing."""
        valid_document["ytdl_write_ext"] = "..."

        with pytest.raises(SanityError, match="missing file extension"):
            check_watch_policy(RawConfig.model_validate(valid_document))

    def test_nonzero_port_kept(self, valid_document: dict[str, Any]) -> None:
        """Test that any nonzero port passes."""
        valid_document["serve_port"] = 443
        assert check_watch_policy(RawConfig.model_validate(valid_document)).serve_port == 443


class TestParseEpoch:
    """Tests for epoch parsing."""

    def test_valid_date(self) -> None:
        """Test a valid date becomes midnight UTC."""
        assert parse_epoch("cats", "2020-01-15") == datetime(2020, 1, 15, tzinfo=timezone.utc)

    def test_empty_means_no_epoch(self) -> None:
        """Test an empty string yields no epoch."""
        assert parse_epoch("cats", "") is None

    @pytest.mark.parametrize(
        "value",
        [
            "2020-1-15",
            "2020-01-5",
            "20200115",
            "2020-02-30",
            "2020-13-01",
            "2020-01-15T00:00",
            "15.01.2020",
        ],
    )
    def test_invalid_dates(self, value: str) -> None:
        """Test that only exact YYYY-MM-DD calendar dates are accepted."""
        with pytest.raises(NormalizationError) as exc_info:
            parse_epoch("cats", value)
        assert exc_info.value.entry == "cats"
        assert exc_info.value.field == "epoch"


class TestCompileTitleFilter:
    """Tests for title filter compilation."""

    def test_case_insensitive(self) -> None:
        """Test compiled filters ignore case."""
        pattern = compile_title_filter("cats", "cat")
        assert pattern.search("CATalog")
        assert pattern.flags & re.IGNORECASE

    def test_empty_matches_everything(self) -> None:
        """Test the empty filter."""
        assert compile_title_filter("cats", "").search("Anything")

    def test_unbalanced_pattern_rejected(self) -> None:
        """Test that a pattern cannot close the case-insensitive scope."""
        with pytest.raises(NormalizationError) as exc_info:
            compile_title_filter("cats", "a)(b")
        assert exc_info.value.field == "title_filter"

    def test_invalid_pattern(self) -> None:
        """Test a pattern that does not compile."""
        with pytest.raises(NormalizationError, match="podcast 'cats': invalid title_filter"):
            compile_title_filter("cats", "[unclosed")


class TestNormalizeFeed:
    """Tests for single podcast normalization."""

    def test_full_entry(self) -> None:
        """Test every raw field is carried over."""
        raw = RawPodcast(
            yt_channel="@cats",
            name="Cats",
            short_name="cats",
            description="Cat videos",
            title_filter="cat",
            epoch="2020-01-15",
            vidya=True,
            custom_image="art/cats.png",
        )
        feed = normalize_feed(raw)

        assert feed.channel_ref == "@cats"
        assert feed.name == "Cats"
        assert feed.description == "Cat videos"
        assert feed.title_filter_pattern == "cat"
        assert feed.epoch == datetime(2020, 1, 15, tzinfo=timezone.utc)
        assert feed.vidya is True
        assert feed.custom_image_path == Path("art/cats.png")
        assert feed.channel_id is None

    def test_epoch_checked_before_title_filter(self) -> None:
        """Test that an entry with two broken fields reports the epoch."""
        raw = RawPodcast(short_name="cats", epoch="bad", title_filter="(")

        with pytest.raises(NormalizationError) as exc_info:
            normalize_feed(raw)
        assert exc_info.value.field == "epoch"
