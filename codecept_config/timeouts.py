# ABOUTME: Per-step timeout overrides and their first-match-wins resolution
# ABOUTME: Override patterns are regular expressions searched in the step name

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, Tuple

from .errors import PatternError
from .fields import (
    build_record,
    check_duration,
    check_sequence,
    check_str,
    empty_mapping,
    option,
)


def check_pattern(value: Any, path: str) -> str:
    value = check_str(value, path)
    try:
        re.compile(value)
    except re.error as e:
        raise PatternError(path, f"invalid regular expression {value!r}: {e}")
    return value


@dataclass(frozen=True)
class StepTimeoutOverride:
    __hash__ = None

    pattern: str = option("pattern", check_pattern)
    timeout: Any = option("timeout", check_duration)
    extra: Mapping[str, Any] = field(default_factory=empty_mapping)

    def matches(self, step_name: str) -> bool:
        return re.search(self.pattern, step_name) is not None


def check_overrides(value: Any, path: str) -> Tuple[StepTimeoutOverride, ...]:
    return tuple(
        build_record(StepTimeoutOverride, item, f"{path}[{index}]")
        for index, item in enumerate(check_sequence(value, path))
    )


def resolve_step_timeout(
    step_name: str, step_timeout, overrides: Iterable[StepTimeoutOverride]
):
    """
    Find the timeout that applies to a step.

    Overrides are scanned in listed order and the first whose pattern matches
    the step name wins. Without a match the default step timeout applies.

    Args:
        step_name: Name of the step being executed, e.g. "waitForVisible"
        step_timeout: Default per-step timeout, 0 when disabled
        overrides: Ordered step timeout overrides

    Returns:
        Effective timeout; 0 means the step runs without a timeout
    """
    for override in overrides:
        if override.matches(step_name):
            return override.timeout
    return step_timeout
