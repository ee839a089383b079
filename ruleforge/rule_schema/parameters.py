"""
Rule Parameters - Typed, tweakable values exposed by a rule.

Each parameter kind is its own class so consumers can dispatch on the
class (or its `type` tag) instead of probing a loose constraints dict:

- NumberParameter:  numeric value with optional min/max/step
- BooleanParameter: on/off toggle
- SelectParameter:  one value out of a fixed option list
- TextParameter:    free text
- ColorParameter / SpriteParameter / SoundParameter: asset-like values,
  only checked for presence

Parameters are definitions. The value a configuration actually uses lives
in the configuration's overrides and is resolved by the engine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class ParameterType(Enum):
    """Kinds of rule parameters."""
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"
    COLOR = "color"
    SPRITE = "sprite"
    SOUND = "sound"
    TEXT = "text"


_UNSET = object()


@dataclass
class RuleParameter:
    """
    Fields shared by every parameter kind.

    `value` is the value shown in editors before any override exists;
    it defaults to `default_value`.
    """
    type: ClassVar[ParameterType]

    key: str  # Unique within the owning rule
    name: str
    default_value: Any = None
    description: str = ""
    value: Any = _UNSET
    required: bool = False
    category: str = ""  # Free-form grouping tag for editors
    live_preview: bool = False

    def __post_init__(self):
        if self.value is _UNSET:
            self.value = self.default_value


@dataclass
class NumberParameter(RuleParameter):
    type: ClassVar[ParameterType] = ParameterType.NUMBER

    min: float | None = None
    max: float | None = None
    step: float | None = None


@dataclass
class BooleanParameter(RuleParameter):
    type: ClassVar[ParameterType] = ParameterType.BOOLEAN


@dataclass
class SelectOption:
    value: Any
    label: str


@dataclass
class SelectParameter(RuleParameter):
    type: ClassVar[ParameterType] = ParameterType.SELECT

    options: list[SelectOption] = field(default_factory=list)

    @property
    def option_values(self) -> list[Any]:
        return [option.value for option in self.options]


@dataclass
class TextParameter(RuleParameter):
    type: ClassVar[ParameterType] = ParameterType.TEXT


@dataclass
class ColorParameter(RuleParameter):
    type: ClassVar[ParameterType] = ParameterType.COLOR


@dataclass
class SpriteParameter(RuleParameter):
    type: ClassVar[ParameterType] = ParameterType.SPRITE


@dataclass
class SoundParameter(RuleParameter):
    type: ClassVar[ParameterType] = ParameterType.SOUND


PARAMETER_CLASSES: dict[ParameterType, type[RuleParameter]] = {
    cls.type: cls
    for cls in (
        NumberParameter,
        BooleanParameter,
        SelectParameter,
        TextParameter,
        ColorParameter,
        SpriteParameter,
        SoundParameter,
    )
}

assert set(PARAMETER_CLASSES) == set(ParameterType), "Parameter kind without a class"


def options(*pairs: tuple[Any, str]) -> list[SelectOption]:
    """Build a select option list from (value, label) pairs."""
    return [SelectOption(value=value, label=label) for value, label in pairs]
