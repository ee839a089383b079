"""
Game Modification - A portable, diff-style snapshot of a configuration.

A modification ("mod") lists only the rules that were active, each with
the parameter keys that were overridden. It is detached from any
configuration id so it can be shared and applied elsewhere.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .configuration import CustomAsset


@dataclass
class ModifiedRule:
    rule_id: str
    enabled: bool = True
    parameters: dict[str, Any] = field(default_factory=dict)  # Overridden keys only


@dataclass
class ModificationMetadata:
    author: str = "User"
    version: str = "1.0.0"
    created: str = ""
    downloads: int = 0
    rating: float = 0
    tags: list[str] = field(default_factory=list)


@dataclass
class GameModification:
    id: str
    name: str
    base_game_id: str
    description: str = ""
    rules: list[ModifiedRule] = field(default_factory=list)
    assets: list[CustomAsset] = field(default_factory=list)
    levels: list[Any] | None = None  # Game-specific level data, carried as-is
    metadata: ModificationMetadata = field(default_factory=ModificationMetadata)

    def enabled_rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in self.rules if rule.enabled]
