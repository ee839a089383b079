"""
Game Configuration - A user's selection of active rules and overrides.

A configuration is created for one base game, starts with that game's
default rules active, and is then mutated in place by the engine:
- active_rules: ordered, duplicate-free list of rule ids
- rule_overrides: rule id -> parameter key -> value replacing the default

The engine never deletes a configuration on its own.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
import uuid


class AssetType(str, Enum):
    """Kinds of custom assets bundled with a configuration."""
    SPRITE = "sprite"
    SOUND = "sound"
    ANIMATION = "animation"
    TILESET = "tileset"


@dataclass
class CustomAsset:
    """
    An opaque asset blob. `data` is a base64 payload or a URL.
    """
    id: str
    name: str
    type: AssetType
    data: str
    metadata: dict[str, Any] | None = None

    def __post_init__(self):
        self.type = AssetType(self.type)


@dataclass
class ConfigurationMetadata:
    version: str = "1.0.0"
    author: str = "User"
    created: str = ""
    modified: str = ""
    tags: list[str] = field(default_factory=list)
    featured: bool | None = None


@dataclass
class GameConfiguration:
    game_id: str
    name: str
    base_game: str
    description: str = ""
    active_rules: list[str] = field(default_factory=list)
    rule_overrides: dict[str, dict[str, Any]] = field(default_factory=dict)
    custom_assets: list[CustomAsset] = field(default_factory=list)
    metadata: ConfigurationMetadata = field(default_factory=ConfigurationMetadata)

    def is_active(self, rule_id: str) -> bool:
        return rule_id in self.active_rules

    def has_override(self, rule_id: str, key: str) -> bool:
        return key in self.rule_overrides.get(rule_id, {})


def utc_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-01T12:00:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_id(prefix: str) -> str:
    """Fresh unique id such as "config-1f2e3d4c5b6a"."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
