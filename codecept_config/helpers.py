# ABOUTME: Helper configuration variants keyed by helper name
# ABOUTME: Known helpers get typed fields and defaults, others pass through

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Optional, Union

from .fields import (
    build_record,
    check_bool,
    check_duration,
    check_int,
    check_mapping,
    check_nonempty_str,
    check_optional_str,
    check_str,
    dump_value,
    empty_mapping,
    freeze,
    option,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebDriverHelper:
    """Browser automation over the WebDriver protocol."""

    __hash__ = None

    url: str = option("url", check_nonempty_str)
    browser: str = option("browser", check_nonempty_str)
    host: str = option("host", check_str, default="localhost")
    port: int = option("port", check_int, default=4444)
    path: str = option("path", check_str, default="/wd/hub")
    window_size: Optional[str] = option("windowSize", check_optional_str, default=None)
    wait_for_timeout: Any = option("waitForTimeout", check_duration, default=1000)
    smart_wait: Any = option("smartWait", check_duration, default=0)
    restart: bool = option("restart", check_bool, default=True)
    keep_cookies: bool = option("keepCookies", check_bool, default=False)
    keep_browser_state: bool = option("keepBrowserState", check_bool, default=False)
    desired_capabilities: Mapping[str, Any] = option(
        "desiredCapabilities", check_mapping, default_factory=empty_mapping
    )
    extra: Mapping[str, Any] = field(default_factory=empty_mapping)


@dataclass(frozen=True)
class PlaywrightHelper:
    """Browser automation through Playwright."""

    __hash__ = None

    url: str = option("url", check_nonempty_str)
    browser: str = option("browser", check_nonempty_str, default="chromium")
    show: bool = option("show", check_bool, default=False)
    window_size: Optional[str] = option("windowSize", check_optional_str, default=None)
    wait_for_timeout: Any = option("waitForTimeout", check_duration, default=1000)
    restart: bool = option("restart", check_bool, default=True)
    keep_cookies: bool = option("keepCookies", check_bool, default=False)
    keep_browser_state: bool = option("keepBrowserState", check_bool, default=False)
    extra: Mapping[str, Any] = field(default_factory=empty_mapping)


@dataclass(frozen=True)
class PassthroughHelper:
    """A helper this package has no schema for; options are kept verbatim."""

    __hash__ = None

    name: str
    options: Mapping[str, Any] = field(default_factory=empty_mapping)

    def __post_init__(self):
        object.__setattr__(self, "options", freeze(self.options))

    def to_dict(self) -> Dict[str, Any]:
        return dump_value(self.options)


HelperConfig = Union[WebDriverHelper, PlaywrightHelper, PassthroughHelper]

KNOWN_HELPERS = {
    "WebDriver": WebDriverHelper,
    "Playwright": PlaywrightHelper,
}


def parse_helper(name: str, options: Any, path: str) -> HelperConfig:
    helper_cls = KNOWN_HELPERS.get(name)
    if helper_cls is None:
        logger.warning(f"No schema for helper '{name}', passing options through")
        return PassthroughHelper(name=name, options=check_mapping(options, path))
    return build_record(helper_cls, options, path)


def check_helpers(value: Any, path: str) -> Mapping[str, HelperConfig]:
    helpers = check_mapping(value, path)
    if not helpers:
        logger.warning("No helpers configured; the runner will have no backend")
    return MappingProxyType(
        {
            name: parse_helper(name, options, f"{path}.{name}")
            for name, options in helpers.items()
        }
    )
