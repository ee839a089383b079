"""
Game Rule - A named, versioned unit of customizable behavior.

A rule groups typed parameters and declares how it relates to other
rules of the same game:
- dependencies: rules that must also be active
- conflicts: rules that must not be active at the same time

Rules are registered once with the engine and treated as immutable;
re-registering the same id replaces the definition.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .parameters import RuleParameter


class RuleCategory(str, Enum):
    """Closed set of rule categories."""
    MOVEMENT = "movement"
    PHYSICS = "physics"
    SCORING = "scoring"
    AI = "ai"
    VISUAL = "visual"
    AUDIO = "audio"
    GAMEPLAY = "gameplay"
    WIN_CONDITIONS = "win-conditions"
    BOARD = "board"
    PLAYERS = "players"
    TOURNAMENT = "tournament"
    ACCESSIBILITY = "accessibility"
    POWERUPS = "powerups"
    RULES = "rules"
    CHARACTER = "character"
    ENEMIES = "enemies"
    LEVEL = "level"


DEFAULT_TAG = "default"


@dataclass
class GameRule:
    """
    Definition of a rule.

    Attributes:
        id: Globally unique identifier (e.g., "chess-board-size")
        game_type: Tag grouping the rules of one game (e.g., "chess")
        priority: Tie-break hint for consumers, unused by validation
        tags: Free-form tags; "default" marks rules active in new configurations
    """
    id: str
    name: str
    category: RuleCategory
    game_type: str
    description: str = ""
    parameters: list[RuleParameter] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    priority: int = 0
    tags: list[str] = field(default_factory=list)
    version: str = "1.0.0"
    author: str | None = None

    def __post_init__(self):
        self.category = RuleCategory(self.category)

        seen = set()
        for param in self.parameters:
            if param.key in seen:
                raise ValueError(
                    f"Rule '{self.id}' defines parameter '{param.key}' more than once"
                )
            seen.add(param.key)

    @property
    def is_default(self) -> bool:
        return DEFAULT_TAG in self.tags

    def get_parameter(self, key: str) -> RuleParameter | None:
        """Get a parameter definition by key."""
        for param in self.parameters:
            if param.key == key:
                return param
        return None

    def parameter_keys(self) -> list[str]:
        return [param.key for param in self.parameters]
