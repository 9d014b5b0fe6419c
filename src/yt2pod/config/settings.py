"""
Typed runtime configuration models using Pydantic.

These models represent a fully validated configuration. They are frozen:
once the loader hands a Configuration to the watcher, feed generator and
file server, nothing writes to it again.
"""

import re
from datetime import datetime, timedelta
from pathlib import Path, PurePath

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Generated feed documents and artwork live here, relative to the data root.
METADATA_SUBDIR = Path("metadata")

DEFAULT_MIN_FEEDS = 3


class WatchPolicy(BaseModel):
    """Polling cadence, download parameters and serving address."""

    model_config = ConfigDict(frozen=True)

    check_interval_minutes: int = Field(ge=1, description="Minutes between channel checks")
    download_format_selector: str = Field(
        min_length=1, description="Format selector passed to the download tool"
    )
    download_file_extension: str = Field(
        min_length=1, description="Extension of downloaded files, without leading dot"
    )
    serve_host: str = Field(min_length=1, description="Host name the files are served on")
    serve_port: int = Field(description="Port the files are served on")
    serve_directory_listings: bool = Field(default=False)

    @field_validator("download_file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Reject extensions that still carry a leading dot."""
        if v.startswith("."):
            msg = f"extension must not start with '.', got: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("serve_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Port 0 means "unset" and is never valid."""
        if v == 0:
            msg = "serve_port must be nonzero"
            raise ValueError(msg)
        return v

    @property
    def check_interval(self) -> timedelta:
        """Check interval as a timedelta."""
        return timedelta(minutes=self.check_interval_minutes)

    def url_for(self, path: str | PurePath) -> str:
        """
        Build the absolute URL a served file is reachable at.

        The port is left out of the URL only when it is 80.

        Args:
            path: File path relative to the served directory.

        Returns:
            URL of the form http://host[:port]/path.
        """
        if isinstance(path, PurePath):
            path = path.as_posix()
        port_part = "" if self.serve_port == 80 else f":{self.serve_port}"
        return f"http://{self.serve_host}{port_part}/{path}"


class FeedDefinition(BaseModel):
    """One podcast feed generated from a channel."""

    model_config = ConfigDict(frozen=True)

    channel_ref: str = Field(description="Channel ID or handle as written in the file")
    # Filled in by the channel resolver after loading.
    channel_id: str | None = None
    channel_readable_name: str | None = None

    name: str = ""
    short_name: str = Field(min_length=1, description="Primary key, used in file names")
    description: str = ""

    title_filter_pattern: str = ""
    title_filter: re.Pattern[str]

    epoch_str: str = ""
    epoch: datetime | None = Field(
        default=None, description="Earliest eligible upload time, None for no limit"
    )

    vidya: bool = False
    custom_image_path: Path | None = None

    def __str__(self) -> str:
        return self.short_name

    @property
    def feed_path(self) -> Path:
        """Path of the generated feed document."""
        return METADATA_SUBDIR / f"{self.short_name}.xml"

    @property
    def art_path(self) -> Path:
        """Path of the feed artwork."""
        return METADATA_SUBDIR / f"{self.short_name}.jpg"

    @property
    def is_resolved(self) -> bool:
        """Whether the channel resolver has filled in the channel identity."""
        return self.channel_id is not None

    def with_resolved_channel(self, channel_id: str, readable_name: str) -> "FeedDefinition":
        """
        Return a copy carrying the resolved channel identity.

        Args:
            channel_id: Canonical channel ID.
            readable_name: Channel display name.

        Returns:
            New FeedDefinition; this instance is left unchanged.
        """
        return self.model_copy(
            update={"channel_id": channel_id, "channel_readable_name": readable_name}
        )

    def matches_title(self, title: str) -> bool:
        """Whether an upload title passes the (case-insensitive) title filter."""
        return self.title_filter.search(title) is not None

    def is_eligible(self, title: str, published: datetime) -> bool:
        """
        Whether an upload belongs in this feed.

        Args:
            title: Upload title.
            published: Timezone-aware upload time.

        Returns:
            True if the title matches and the upload is not older than the epoch.
        """
        if self.epoch is not None and published < self.epoch:
            return False
        return self.matches_title(title)


class Configuration(BaseModel):
    """Complete, validated process configuration.

    The watch policy fields are embedded at the top level of the file, the
    feeds come from the ``podcasts`` list in document order.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, repr=False, description="YouTube Data API key")
    watch_policy: WatchPolicy
    feeds: tuple[FeedDefinition, ...]

    def feed(self, short_name: str) -> FeedDefinition:
        """Look up a feed by its short name."""
        for feed in self.feeds:
            if feed.short_name == short_name:
                return feed
        raise KeyError(short_name)

    @property
    def short_names(self) -> list[str]:
        """Short names of all feeds, in document order."""
        return [feed.short_name for feed in self.feeds]

    def feed_url(self, feed: FeedDefinition) -> str:
        """Public URL of a feed document."""
        return self.watch_policy.url_for(feed.feed_path)

    def art_url(self, feed: FeedDefinition) -> str:
        """Public URL of a feed's artwork."""
        return self.watch_policy.url_for(feed.art_path)
