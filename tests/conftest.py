# ABOUTME: Shared fixtures for config loader tests
# ABOUTME: Builds a project directory with step files and feature files

import pytest
import yaml


@pytest.fixture
def project_dir(tmp_path):
    """Project layout referenced by the sample config."""
    (tmp_path / "steps_file.js").write_text("module.exports = function() {};\n")
    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "acceptAllCookies.js").write_text("module.exports = {};\n")
    (tmp_path / "step_definitions").mkdir()
    (tmp_path / "step_definitions" / "steps.js").write_text("const { I } = inject();\n")
    (tmp_path / "features").mkdir()
    (tmp_path / "features" / "home.feature").write_text("Feature: Home\n")
    (tmp_path / "features" / "login.feature").write_text("Feature: Login\n")
    (tmp_path / "features" / "notes.txt").write_text("not a feature\n")
    (tmp_path / "smoke_test.js").write_text("Feature('smoke');\n")
    return tmp_path


@pytest.fixture
def config_data():
    """A complete config as a runner project would declare it."""
    return {
        "output": "./output",
        "helpers": {"WebDriver": {"url": "https://showme.fit/", "browser": "chrome"}},
        "include": {
            "I": "./steps_file.js",
            "acceptAllCookies": "./pages/acceptAllCookies.js",
        },
        "mocha": {},
        "bootstrap": None,
        "timeout": None,
        "teardown": None,
        "hooks": [],
        "gherkin": {
            "features": "./features/*.feature",
            "steps": ["./step_definitions/steps.js"],
        },
        "plugins": {
            "screenshotOnFail": {"enabled": True},
            "wdio": {"enabled": True, "services": ["selenium-standalone"]},
        },
        "stepTimeout": 0,
        "stepTimeoutOverride": [
            {"pattern": "wait.*", "timeout": 0},
            {"pattern": "amOnPage", "timeout": 0},
        ],
        "tests": "./*_test.js",
        "name": "IamHome",
    }


@pytest.fixture
def write_config(project_dir):
    """Write a mapping as codecept.conf.yaml in the project directory."""

    def _write(data, filename="codecept.conf.yaml"):
        config_file = project_dir / filename
        with open(config_file, "w") as f:
            yaml.dump(data, f)
        return config_file

    return _write
