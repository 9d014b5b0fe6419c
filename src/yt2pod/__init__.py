"""
yt2pod: YouTube channels as podcast feeds.

This package provides the startup configuration core: loading, validating
and normalizing the configuration document consumed by the channel watcher,
feed generator and file server.
"""

from importlib.metadata import version

__version__ = version("yt2pod")

__all__ = ["__version__"]
