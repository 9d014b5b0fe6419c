"""
Configuration error taxonomy.

Every failure while loading the configuration surfaces as a subclass of
ConfigError. Nothing is recovered inside the loader: the first error aborts
the load and propagates to the caller.
"""


class ConfigError(Exception):
    """Base class for all configuration loading failures."""


class StorageError(ConfigError):
    """The configuration file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read config file {path}: {reason}")


class DecodeError(ConfigError):
    """The configuration file is not a well-formed configuration document."""


class ValidationError(ConfigError):
    """A declarative field rule was violated."""

    def __init__(self, field: str, rule: str, message: str) -> None:
        self.field = field
        self.rule = rule
        super().__init__(f"{field}: {message}")


class SanityError(ConfigError):
    """A business rule on the watch policy was violated."""


class NormalizationError(ConfigError):
    """A feed entry field could not be turned into its runtime value."""

    def __init__(self, entry: str, field: str, message: str) -> None:
        self.entry = entry
        self.field = field
        super().__init__(f"podcast {entry!r}: invalid {field}: {message}")


class DuplicateKeyError(ConfigError):
    """Two feed entries share a short name."""

    def __init__(self, short_name: str) -> None:
        self.short_name = short_name
        super().__init__(f'multiple podcasts using shortname "{short_name}"')
