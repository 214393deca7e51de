# ABOUTME: Configuration document for a Codecept-style end-to-end runner
# ABOUTME: Loads, validates and saves YAML/JSON config with sensible defaults

import glob
import logging
import os
import shutil
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .errors import ConfigReferenceError, SchemaError
from .fields import (
    build_record,
    check_duration,
    check_mapping,
    check_nonempty_str,
    check_optional_duration,
    check_optional_str,
    check_str,
    check_str_mapping,
    check_str_sequence,
    empty_mapping,
    option,
    record_to_dict,
)
from .helpers import HelperConfig, check_helpers
from .plugins import PluginConfig, check_plugins
from .timeouts import StepTimeoutOverride, check_overrides, resolve_step_timeout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GherkinConfig:
    """Location of feature files and the step definitions implementing them."""

    __hash__ = None

    features: str = option("features", check_nonempty_str)
    steps: Tuple[str, ...] = option("steps", check_str_sequence, default=())
    extra: Mapping[str, Any] = field(default_factory=empty_mapping)


def check_gherkin(value: Any, path: str) -> Optional[GherkinConfig]:
    if value is None:
        return None
    return build_record(GherkinConfig, value, path)


@dataclass(frozen=True, kw_only=True)
class ConfigDocument:
    """
    Validated runner configuration.

    Built once per run by ``load`` and never mutated afterwards. Relative
    paths are resolved against ``base_dir``, the directory of the config file.
    """

    # Mapping fields are read-only views, which cannot be hashed
    __hash__ = None

    output: str = option("output", check_str, default="./output")
    helpers: Mapping[str, HelperConfig] = option("helpers", check_helpers)
    include: Mapping[str, str] = option(
        "include", check_str_mapping, default_factory=empty_mapping
    )
    mocha: Mapping[str, Any] = option(
        "mocha", check_mapping, default_factory=empty_mapping
    )
    bootstrap: Optional[str] = option("bootstrap", check_optional_str, default=None)
    timeout: Any = option("timeout", check_optional_duration, default=None)
    teardown: Optional[str] = option("teardown", check_optional_str, default=None)
    hooks: Tuple[str, ...] = option("hooks", check_str_sequence, default=())
    gherkin: Optional[GherkinConfig] = option("gherkin", check_gherkin, default=None)
    plugins: Mapping[str, PluginConfig] = option(
        "plugins", check_plugins, default_factory=empty_mapping
    )
    step_timeout: Any = option("stepTimeout", check_duration, default=0)
    step_timeout_override: Tuple[StepTimeoutOverride, ...] = option(
        "stepTimeoutOverride", check_overrides, default=()
    )
    tests: str = option("tests", check_str, default="")
    name: str = option("name", check_nonempty_str)
    extra: Mapping[str, Any] = field(default_factory=empty_mapping)
    base_dir: Path = field(default=Path("."), compare=False, repr=False)

    @property
    def output_dir(self) -> Path:
        return self.base_dir / self.output

    def step_timeout_for(self, step_name: str):
        """Effective timeout for a step; 0 means no timeout."""
        return resolve_step_timeout(
            step_name, self.step_timeout, self.step_timeout_override
        )

    def enabled_plugins(self) -> List[str]:
        return [name for name, plugin in self.plugins.items() if plugin.enabled]

    def feature_files(self) -> List[Path]:
        if self.gherkin is None:
            return []
        return self._expand(self.gherkin.features)

    def test_files(self) -> List[Path]:
        if not self.tests:
            return []
        return self._expand(self.tests)

    def _expand(self, pattern: str) -> List[Path]:
        matches = glob.glob(pattern, root_dir=self.base_dir, recursive=True)
        paths = (self.base_dir / match for match in matches)
        return sorted(path for path in paths if path.is_file())


def _read_source(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigReferenceError("<source>", f"config file not found: {config_path}")
    except UnicodeDecodeError as e:
        raise SchemaError("<source>", f"{config_path} is not valid UTF-8: {e}")
    except OSError as e:
        raise ConfigReferenceError("<source>", f"cannot read {config_path}: {e}")
    except yaml.YAMLError as e:
        raise SchemaError("<source>", f"invalid YAML in {config_path}: {e}")


def _check_test_sources(document: ConfigDocument):
    if not document.tests and document.gherkin is None:
        raise SchemaError("tests", "either tests or gherkin.features must be set")


def _check_references(document: ConfigDocument):
    for alias, include_path in document.include.items():
        if not (document.base_dir / include_path).is_file():
            raise ConfigReferenceError(
                f"include.{alias}", f"file not found: {include_path}"
            )

    if document.gherkin is not None:
        for index, steps_path in enumerate(document.gherkin.steps):
            if not (document.base_dir / steps_path).is_file():
                raise ConfigReferenceError(
                    f"gherkin.steps[{index}]", f"file not found: {steps_path}"
                )


def load(
    source: Union[str, os.PathLike, Mapping[str, Any]],
    base_dir: Optional[Union[str, os.PathLike]] = None,
) -> ConfigDocument:
    """
    Load and validate a runner configuration.

    Args:
        source: Path to a YAML/JSON config file, or an already parsed mapping
        base_dir: Directory relative paths resolve against. Defaults to the
            config file's directory, or the current directory for a mapping.

    Returns:
        ConfigDocument with defaults applied for absent optional fields

    Raises:
        SchemaError: If a field is missing, mistyped or out of range
        ConfigReferenceError: If the config file or a referenced file is missing
        PatternError: If a step timeout override pattern is not a valid regex
    """
    if isinstance(source, Mapping):
        data = source
        label = "<mapping>"
        root = Path(base_dir).resolve() if base_dir is not None else Path.cwd()
    else:
        config_path = Path(source)
        data = _read_source(config_path)
        label = str(config_path)
        if base_dir is not None:
            root = Path(base_dir).resolve()
        else:
            root = config_path.resolve().parent

    data = check_mapping(data, "<root>")
    document = build_record(ConfigDocument, data, "", base_dir=root)
    _check_test_sources(document)
    _check_references(document)

    defaulted = [
        doc_field.metadata["key"]
        for doc_field in fields(ConfigDocument)
        if "key" in doc_field.metadata and doc_field.metadata["key"] not in data
    ]
    if defaulted:
        logger.debug(f"Using defaults for: {', '.join(defaulted)}")
    if document.extra:
        logger.debug(f"Keeping unrecognized keys: {', '.join(document.extra)}")
    logger.info(f"Loaded config '{document.name}' from {label}")
    return document


def get_config(config_path: str = "codecept.conf.yaml") -> ConfigDocument:
    """Load the config file at ``config_path``."""
    return load(config_path)


def to_dict(document: ConfigDocument) -> Dict[str, Any]:
    """Serialize a document back to the plain record the file format uses."""
    return record_to_dict(document)


def save_config(document: ConfigDocument, config_path: str = "codecept.conf.yaml"):
    """
    Save a configuration document to a YAML file.

    The file is written to a temporary file first and then moved into place.

    Args:
        document: Document to save
        config_path: Destination path

    Raises:
        OSError: If the file cannot be written. No partial file is left behind.
    """
    target = Path(config_path)
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", dir=target.parent, delete=False
        ) as tmp_file:
            tmp_path = tmp_file.name
            yaml.dump(to_dict(document), tmp_file, sort_keys=False)

        shutil.move(tmp_path, target)
    except Exception:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    logger.info(f"Saved config '{document.name}' to {target}")
