# ABOUTME: Tests for helper and plugin configuration variants
# ABOUTME: Verifies defaults for known kinds and passthrough for unknown ones

import logging

import pytest

from codecept_config import SchemaError, load
from codecept_config.helpers import PassthroughHelper, PlaywrightHelper, WebDriverHelper
from codecept_config.plugins import (
    PassthroughPlugin,
    RetryFailedStepPlugin,
    ScreenshotOnFailPlugin,
    WdioPlugin,
)


def test_webdriver_defaults(config_data, project_dir):
    """Test that WebDriver options absent from the file get defaults."""
    config = load(config_data, base_dir=project_dir)
    helper = config.helpers["WebDriver"]

    assert isinstance(helper, WebDriverHelper)
    assert helper.host == "localhost"
    assert helper.port == 4444
    assert helper.path == "/wd/hub"
    assert helper.window_size is None
    assert helper.wait_for_timeout == 1000
    assert helper.smart_wait == 0
    assert helper.restart is True
    assert helper.keep_cookies is False
    assert helper.keep_browser_state is False
    assert helper.desired_capabilities == {}
    assert helper.extra == {}


def test_webdriver_requires_url(config_data, project_dir):
    del config_data["helpers"]["WebDriver"]["url"]

    with pytest.raises(SchemaError) as exc_info:
        load(config_data, base_dir=project_dir)

    assert exc_info.value.field_path == "helpers.WebDriver.url"


def test_webdriver_keeps_unknown_options(config_data, project_dir):
    config_data["helpers"]["WebDriver"]["timeouts"] = {"script": 60000}

    config = load(config_data, base_dir=project_dir)

    assert config.helpers["WebDriver"].extra == {"timeouts": {"script": 60000}}


def test_playwright_helper(config_data, project_dir):
    config_data["helpers"] = {
        "Playwright": {"url": "http://localhost:3000", "show": True, "windowSize": "1200x900"}
    }

    helper = load(config_data, base_dir=project_dir).helpers["Playwright"]

    assert isinstance(helper, PlaywrightHelper)
    assert helper.browser == "chromium"
    assert helper.show is True
    assert helper.window_size == "1200x900"


def test_unknown_helper_passes_through(config_data, project_dir, caplog):
    """Test that helpers without a schema keep their options verbatim."""
    config_data["helpers"]["ApiDataFactory"] = {"endpoint": "http://api", "factories": {}}

    with caplog.at_level(logging.WARNING):
        config = load(config_data, base_dir=project_dir)

    helper = config.helpers["ApiDataFactory"]
    assert helper == PassthroughHelper(
        name="ApiDataFactory", options={"endpoint": "http://api", "factories": {}}
    )
    assert "ApiDataFactory" in caplog.text


def test_empty_helpers_warns(config_data, project_dir, caplog):
    config_data["helpers"] = {}

    with caplog.at_level(logging.WARNING):
        config = load(config_data, base_dir=project_dir)

    assert config.helpers == {}
    assert "No helpers configured" in caplog.text


def test_screenshot_on_fail_defaults(config_data, project_dir):
    """Test that an enabled flag alone is enough for screenshotOnFail."""
    config_data["plugins"] = {"screenshotOnFail": {"enabled": True}}

    plugin = load(config_data, base_dir=project_dir).plugins["screenshotOnFail"]

    assert plugin == ScreenshotOnFailPlugin(
        enabled=True,
        unique_screenshot_names=False,
        full_page_screenshots=False,
        disable_screenshots=False,
    )


def test_wdio_services(config_data, project_dir):
    plugin = load(config_data, base_dir=project_dir).plugins["wdio"]

    assert isinstance(plugin, WdioPlugin)
    assert plugin.enabled is True
    assert plugin.services == ("selenium-standalone",)


def test_wdio_keeps_service_options(config_data, project_dir):
    config_data["plugins"]["wdio"]["seleniumArgs"] = {"version": "3.141.59"}

    plugin = load(config_data, base_dir=project_dir).plugins["wdio"]

    assert plugin.extra == {"seleniumArgs": {"version": "3.141.59"}}


def test_retry_failed_step_defaults(config_data, project_dir):
    config_data["plugins"]["retryFailedStep"] = {"enabled": True, "retries": 5}

    plugin = load(config_data, base_dir=project_dir).plugins["retryFailedStep"]

    assert isinstance(plugin, RetryFailedStepPlugin)
    assert plugin.retries == 5
    assert plugin.min_timeout == 1000
    assert plugin.factor == 1.5
    assert plugin.ignored_steps == ()


def test_plugin_enabled_defaults_to_false(config_data, project_dir):
    config_data["plugins"]["retryFailedStep"] = {}

    config = load(config_data, base_dir=project_dir)

    assert config.plugins["retryFailedStep"].enabled is False
    assert config.enabled_plugins() == ["screenshotOnFail", "wdio"]


def test_plugin_enabled_must_be_bool(config_data, project_dir):
    config_data["plugins"]["screenshotOnFail"]["enabled"] = "yes"

    with pytest.raises(SchemaError) as exc_info:
        load(config_data, base_dir=project_dir)

    assert exc_info.value.field_path == "plugins.screenshotOnFail.enabled"


def test_unknown_plugin_passes_through(config_data, project_dir):
    """Test that plugins without a schema are accepted as-is."""
    config_data["plugins"]["allure"] = {"enabled": True, "outputDir": "./allure"}

    config = load(config_data, base_dir=project_dir)

    assert config.plugins["allure"] == PassthroughPlugin(
        name="allure", enabled=True, options={"enabled": True, "outputDir": "./allure"}
    )
    assert "allure" in config.enabled_plugins()
