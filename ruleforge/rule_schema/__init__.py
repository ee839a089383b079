"""Rule schema - game-agnostic definitions of rules, configurations and mods."""

from .parameters import (
    ParameterType,
    RuleParameter,
    NumberParameter,
    BooleanParameter,
    SelectParameter,
    SelectOption,
    TextParameter,
    ColorParameter,
    SpriteParameter,
    SoundParameter,
    PARAMETER_CLASSES,
    options,
)
from .game_rule import GameRule, RuleCategory, DEFAULT_TAG
from .configuration import (
    GameConfiguration,
    ConfigurationMetadata,
    CustomAsset,
    AssetType,
    utc_timestamp,
)
from .modification import GameModification, ModifiedRule, ModificationMetadata
from .validation import ValidationResult, check_parameter_value

__all__ = [
    "ParameterType",
    "RuleParameter",
    "NumberParameter",
    "BooleanParameter",
    "SelectParameter",
    "SelectOption",
    "TextParameter",
    "ColorParameter",
    "SpriteParameter",
    "SoundParameter",
    "PARAMETER_CLASSES",
    "options",
    "GameRule",
    "RuleCategory",
    "DEFAULT_TAG",
    "GameConfiguration",
    "ConfigurationMetadata",
    "CustomAsset",
    "AssetType",
    "utc_timestamp",
    "GameModification",
    "ModifiedRule",
    "ModificationMetadata",
    "ValidationResult",
    "check_parameter_value",
]
