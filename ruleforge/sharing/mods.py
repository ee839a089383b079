"""
Mod Applier - Converts configurations to and from modifications.

A modification carries only the active rules and, for each, the
overridden parameter keys. Applying one builds a fresh configuration, so
the round trip reproduces active rules and overrides exactly while never
touching the source configuration.
"""

from __future__ import annotations
from copy import deepcopy
import logging
from typing import TYPE_CHECKING

from ..rule_schema import (
    ConfigurationMetadata,
    GameConfiguration,
    GameModification,
    ModificationMetadata,
    ModifiedRule,
)
from ..rule_schema.configuration import new_id

if TYPE_CHECKING:
    from ..engine_core.store import ConfigurationStore

logger = logging.getLogger(__name__)


def create_modification(config: GameConfiguration, created: str) -> GameModification:
    """Snapshot the active rules of a configuration as a modification."""
    return GameModification(
        id=new_id("mod"),
        name=config.name,
        description=config.description,
        base_game_id=config.base_game,
        rules=[
            ModifiedRule(
                rule_id=rule_id,
                enabled=True,
                parameters=deepcopy(config.rule_overrides.get(rule_id, {})),
            )
            for rule_id in config.active_rules
        ],
        assets=deepcopy(config.custom_assets),
        metadata=ModificationMetadata(
            author=config.metadata.author,
            version=config.metadata.version,
            created=created,
            downloads=0,
            rating=0,
            tags=list(config.metadata.tags),
        ),
    )


def apply_modification(store: ConfigurationStore, mod: GameModification) -> GameConfiguration:
    """Build and store a new configuration from a modification."""
    config = store.create_configuration(mod.base_game_id, mod.name, mod.description)

    with store.lock:
        config.active_rules = list(dict.fromkeys(mod.enabled_rule_ids()))
        config.rule_overrides = {
            rule.rule_id: deepcopy(rule.parameters)
            for rule in mod.rules
            if rule.enabled and rule.parameters
        }
        config.custom_assets = deepcopy(mod.assets)
        config.metadata = ConfigurationMetadata(
            version=mod.metadata.version,
            author=mod.metadata.author,
            created=config.metadata.created,
            modified=config.metadata.modified,
            tags=list(mod.metadata.tags),
            featured=config.metadata.featured,
        )

    logger.info(f"Applied modification '{mod.id}' as configuration '{config.game_id}'")
    return config
