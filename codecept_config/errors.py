# ABOUTME: Exception types raised while loading a runner configuration
# ABOUTME: Every error carries the dotted path of the offending field


class ConfigError(ValueError):
    """Base class for configuration load failures."""

    def __init__(self, field_path: str, message: str):
        self.field_path = field_path
        self.message = message
        super().__init__(f"{field_path}: {message}")


class SchemaError(ConfigError):
    """A field is missing, has the wrong type, or holds an invalid value."""


class ConfigReferenceError(ConfigError):
    """A referenced file does not exist."""


class PatternError(ConfigError):
    """A step name pattern is not a valid regular expression."""
