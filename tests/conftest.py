"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml

WriteConfig = Callable[..., Path]


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def valid_document() -> dict[str, Any]:
    """Create a complete, valid configuration document."""
    return {
        "yt_data_api_key": "AIzaTestKey",
        "check_interval_minutes": 15,
        "ytdl_fmt_selector": "bestaudio[ext=m4a]",
        "ytdl_write_ext": ".m4a",
        "serve_host": "pods.example.com",
        "serve_port": 8080,
        "serve_directory_listings": True,
        "podcasts": [
            {
                "yt_channel": "UCcatsAndMoreCats",
                "name": "Cat Videos",
                "short_name": "cats",
                "description": "Everything about cats",
                "title_filter": "cat",
                "epoch": "2020-01-15",
                "vidya": False,
                "custom_image": "",
            },
            {
                "yt_channel": "@dogchannel",
                "name": "Dog Videos",
                "short_name": "dogs",
                "description": "",
                "title_filter": "",
                "epoch": "",
                "vidya": False,
                "custom_image": "",
            },
            {
                "yt_channel": "UCgames",
                "name": "Let's Plays",
                "short_name": "games",
                "description": "Long-form gameplay",
                "title_filter": "part \\d+",
                "epoch": "",
                "vidya": True,
                "custom_image": "art/games.png",
            },
        ],
    }


@pytest.fixture
def write_config(tmp_path: Path) -> WriteConfig:
    """Return a helper writing a document to a config file in tmp_path."""

    def _write(document: Any, name: str = "yt2pod.json") -> Path:
        path = tmp_path / name
        if path.suffix == ".json":
            path.write_text(json.dumps(document), encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(document), encoding="utf-8")
        return path

    return _write
