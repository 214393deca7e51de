# ABOUTME: Loader and validator for Codecept-style end-to-end runner configs
# ABOUTME: Re-exports the document type, load functions and error classes

from .config import ConfigDocument, GherkinConfig, get_config, load, save_config, to_dict
from .errors import ConfigError, ConfigReferenceError, PatternError, SchemaError
from .timeouts import StepTimeoutOverride, resolve_step_timeout

__all__ = [
    "ConfigDocument",
    "GherkinConfig",
    "get_config",
    "load",
    "save_config",
    "to_dict",
    "ConfigError",
    "ConfigReferenceError",
    "PatternError",
    "SchemaError",
    "StepTimeoutOverride",
    "resolve_step_timeout",
]
