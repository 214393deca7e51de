# ABOUTME: Plugin configuration variants keyed by plugin name
# ABOUTME: Every plugin has an enabled flag; unknown plugins pass through

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Tuple, Union

from .fields import (
    build_record,
    check_bool,
    check_duration,
    check_int,
    check_mapping,
    check_number,
    check_str_sequence,
    dump_value,
    empty_mapping,
    freeze,
    option,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScreenshotOnFailPlugin:
    __hash__ = None

    enabled: bool = option("enabled", check_bool, default=False)
    unique_screenshot_names: bool = option(
        "uniqueScreenshotNames", check_bool, default=False
    )
    full_page_screenshots: bool = option("fullPageScreenshots", check_bool, default=False)
    disable_screenshots: bool = option("disableScreenshots", check_bool, default=False)
    extra: Mapping[str, Any] = field(default_factory=empty_mapping)


@dataclass(frozen=True)
class WdioPlugin:
    """Starts WebDriver services (e.g. selenium-standalone) around the run."""

    __hash__ = None

    enabled: bool = option("enabled", check_bool, default=False)
    services: Tuple[str, ...] = option("services", check_str_sequence, default=())
    extra: Mapping[str, Any] = field(default_factory=empty_mapping)


@dataclass(frozen=True)
class RetryFailedStepPlugin:
    __hash__ = None

    enabled: bool = option("enabled", check_bool, default=False)
    retries: int = option("retries", check_int, default=3)
    min_timeout: Any = option("minTimeout", check_duration, default=1000)
    factor: Any = option("factor", check_number, default=1.5)
    ignored_steps: Tuple[str, ...] = option("ignoredSteps", check_str_sequence, default=())
    extra: Mapping[str, Any] = field(default_factory=empty_mapping)


@dataclass(frozen=True)
class PassthroughPlugin:
    """A plugin this package has no schema for; options are kept verbatim."""

    __hash__ = None

    name: str
    enabled: bool = False
    options: Mapping[str, Any] = field(default_factory=empty_mapping)

    def __post_init__(self):
        object.__setattr__(self, "options", freeze(self.options))

    def to_dict(self) -> Dict[str, Any]:
        return dump_value(self.options)


PluginConfig = Union[
    ScreenshotOnFailPlugin, WdioPlugin, RetryFailedStepPlugin, PassthroughPlugin
]

KNOWN_PLUGINS = {
    "screenshotOnFail": ScreenshotOnFailPlugin,
    "wdio": WdioPlugin,
    "retryFailedStep": RetryFailedStepPlugin,
}


def parse_plugin(name: str, options: Any, path: str) -> PluginConfig:
    plugin_cls = KNOWN_PLUGINS.get(name)
    if plugin_cls is None:
        options = check_mapping(options, path)
        enabled = check_bool(options.get("enabled", False), f"{path}.enabled")
        logger.warning(f"No schema for plugin '{name}', passing options through")
        return PassthroughPlugin(name=name, enabled=enabled, options=options)
    return build_record(plugin_cls, options, path)


def check_plugins(value: Any, path: str) -> Mapping[str, PluginConfig]:
    return MappingProxyType(
        {
            name: parse_plugin(name, options, f"{path}.{name}")
            for name, options in check_mapping(value, path).items()
        }
    )
