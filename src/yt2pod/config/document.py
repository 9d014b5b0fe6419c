"""
Raw configuration document shape.

Mirrors the on-disk keys one to one. Values are only type-checked here:
missing keys take their zero values and unknown keys are ignored, so that
every business rule is left to the validation stages that follow.
"""

from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)


def _drop_nulls(data: Any) -> Any:
    """Treat explicit nulls (``key:`` with no value in YAML) as missing keys."""
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if v is not None}
    return data


class RawPodcast(BaseModel):
    """One entry of the ``podcasts`` list, as written in the file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    yt_channel: StrictStr = ""
    name: StrictStr = ""
    short_name: StrictStr = ""
    description: StrictStr = ""
    title_filter: StrictStr = ""
    epoch: StrictStr = ""
    vidya: StrictBool = False
    custom_image: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return _drop_nulls(data)

    @field_validator("epoch", mode="before")
    @classmethod
    def unparse_yaml_date(cls, v: Any) -> Any:
        """YAML turns unquoted dates into date objects; keep the raw string."""
        if isinstance(v, date):
            return v.isoformat()
        return v


class RawConfig(BaseModel):
    """Top-level configuration document, as written in the file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    yt_data_api_key: StrictStr = ""

    check_interval_minutes: StrictInt = 0
    ytdl_fmt_selector: StrictStr = ""
    ytdl_write_ext: StrictStr = ""
    serve_host: StrictStr = ""
    serve_port: StrictInt = 0
    serve_directory_listings: StrictBool = False

    podcasts: list[RawPodcast] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return _drop_nulls(data)
