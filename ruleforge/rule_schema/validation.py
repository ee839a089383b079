"""
Parameter Validation - Per-kind value checks.

Checks that a resolved parameter value:
1. Is present when the parameter is required
2. Has the right shape for its kind (number, boolean, text, ...)
3. Respects the kind's constraints (min/max, select options)

Color, sprite and sound values are only checked for presence.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math
from numbers import Real
from typing import Any, Callable

from .parameters import (
    ParameterType,
    RuleParameter,
    NumberParameter,
    SelectParameter,
)


@dataclass
class ValidationResult:
    """Result of validating a configuration."""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


REQUIRED_MISSING = "Required parameter missing"


def _check_number(param: NumberParameter, value: Any) -> str | None:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        return "Must be a number"
    if param.min is not None and value < param.min:
        return f"Must be at least {param.min}"
    if param.max is not None and value > param.max:
        return f"Must be at most {param.max}"
    return None


def _check_boolean(param: RuleParameter, value: Any) -> str | None:
    if value is not True and value is not False:
        return "Must be true or false"
    return None


def _check_select(param: SelectParameter, value: Any) -> str | None:
    if param.options and value not in param.option_values:
        return "Invalid option selected"
    return None


def _check_text(param: RuleParameter, value: Any) -> str | None:
    if not isinstance(value, str):
        return "Must be text"
    return None


def _check_presence_only(param: RuleParameter, value: Any) -> str | None:
    return None


_CHECKERS: dict[ParameterType, Callable[[Any, Any], str | None]] = {
    ParameterType.NUMBER: _check_number,
    ParameterType.BOOLEAN: _check_boolean,
    ParameterType.SELECT: _check_select,
    ParameterType.TEXT: _check_text,
    ParameterType.COLOR: _check_presence_only,
    ParameterType.SPRITE: _check_presence_only,
    ParameterType.SOUND: _check_presence_only,
}

assert set(_CHECKERS) == set(ParameterType), "Parameter kind without a checker"


def check_parameter_value(param: RuleParameter, value: Any) -> str | None:
    """
    Check one resolved value against its parameter definition.

    Returns a human-readable reason when the value is invalid, None otherwise.
    A missing value only fails when the parameter is required.
    """
    if value is None:
        return REQUIRED_MISSING if param.required else None
    return _CHECKERS[param.type](param, value)
