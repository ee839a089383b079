"""
Game Rule Engine - The single stateful service hosts talk to.

The engine composes:
- RuleRegistry: rule definitions (read-mostly, written at startup)
- ConfigurationStore: configurations and parameter resolution
- ConfigurationValidator: cached dependency/conflict/parameter checks
- ChangeNotifier: per-configuration subscriptions

There is no module-level instance. Build one at the composition root and
pass it to every consumer:

    engine = GameRuleEngine()
    install_builtin_rules(engine)
    config = engine.create_configuration("chess", "Blitz", "Fast games")
    engine.set_rule_parameter(config.game_id, "chess-time-control", "timePerPlayer", 3)
    result = engine.validate_configuration(config.game_id)
"""

from __future__ import annotations
import logging
from typing import Any, Mapping

from ..rule_schema import (
    GameConfiguration,
    GameModification,
    GameRule,
    RuleCategory,
    ValidationResult,
)
from ..rule_schema.configuration import new_id
from ..sharing import mods, serializer
from .notifier import ChangeCallback, ChangeNotifier, Subscription
from .registry import RuleRegistry
from .store import Clock, ConfigurationNotFoundError, ConfigurationStore
from .validator import ConfigurationValidator

logger = logging.getLogger(__name__)


class GameRuleEngine:
    def __init__(self, registry: RuleRegistry | None = None, clock: Clock | None = None):
        self.registry = registry or RuleRegistry()
        self.store = ConfigurationStore(self.registry, clock=clock)
        self.validator = ConfigurationValidator(self.registry, self.store)
        self.notifier = ChangeNotifier()

        # Any rule may be referenced by any configuration
        self.registry.on_register(lambda rule: self.validator.invalidate())
        # Invalidate before notifying so listeners that validate see fresh results
        self.store.on_change(lambda config: self.validator.invalidate(config.game_id))
        self.store.on_change(self.notifier.publish)

    # =========================================================================
    # Rules
    # =========================================================================

    def register_rule(self, rule: GameRule):
        self.registry.register_rule(rule)
        logger.debug(f"Registered rule '{rule.id}' for {rule.game_type}")

    def register_rules(self, rules: list[GameRule]):
        for rule in rules:
            self.register_rule(rule)

    def get_rule(self, rule_id: str) -> GameRule | None:
        return self.registry.get_rule(rule_id)

    def get_rules_for_game(self, game_type: str) -> list[GameRule]:
        return self.registry.get_rules_for_game(game_type)

    def get_rules_by_category(
        self, game_type: str, category: RuleCategory | str
    ) -> list[GameRule]:
        return self.registry.get_rules_by_category(game_type, category)

    # =========================================================================
    # Configurations
    # =========================================================================

    def create_configuration(
        self, base_game: str, name: str, description: str = ""
    ) -> GameConfiguration:
        return self.store.create_configuration(base_game, name, description)

    def get_configuration(self, config_id: str) -> GameConfiguration | None:
        return self.store.get_configuration(config_id)

    def list_configurations(self) -> list[GameConfiguration]:
        return self.store.list_configurations()

    def delete_configuration(self, config_id: str) -> bool:
        """Forget a configuration along with its cached result and subscribers."""
        with self.store.lock:
            removed = self.store.delete_configuration(config_id)
            self.validator.invalidate(config_id)
        self.notifier.clear(config_id)
        return removed

    def update_configuration(self, config_id: str, updates: Mapping[str, Any]):
        self.store.update_configuration(config_id, updates)

    def enable_rule(self, config_id: str, rule_id: str):
        self.store.enable_rule(config_id, rule_id)

    def disable_rule(self, config_id: str, rule_id: str):
        self.store.disable_rule(config_id, rule_id)

    def set_rule_parameter(self, config_id: str, rule_id: str, key: str, value: Any):
        self.store.set_rule_parameter(config_id, rule_id, key, value)

    def reset_rule_parameter(self, config_id: str, rule_id: str, key: str):
        self.store.reset_rule_parameter(config_id, rule_id, key)

    def get_rule_parameter_value(self, config_id: str, rule_id: str, key: str) -> Any:
        return self.store.get_rule_parameter_value(config_id, rule_id, key)

    def get_rule_parameters(self, config_id: str, rule_id: str) -> dict[str, Any]:
        return self.store.get_rule_parameters(config_id, rule_id)

    def get_active_rule_values(self, config_id: str) -> dict[str, dict[str, Any]]:
        return self.store.get_active_rule_values(config_id)

    # =========================================================================
    # Validation and change events
    # =========================================================================

    def validate_configuration(self, config_id: str) -> ValidationResult:
        return self.validator.validate_configuration(config_id)

    def on_configuration_change(
        self, config_id: str, callback: ChangeCallback
    ) -> Subscription:
        return self.notifier.subscribe(config_id, callback)

    def unsubscribe(self, subscription: Subscription):
        subscription.cancel()

    # =========================================================================
    # Export / import and modifications
    # =========================================================================

    def _require(self, config_id: str) -> GameConfiguration:
        config = self.store.get_configuration(config_id)
        if config is None:
            raise ConfigurationNotFoundError(config_id)
        return config

    def export_configuration(self, config_id: str) -> str:
        with self.store.lock:
            return serializer.dump_configuration(self._require(config_id))

    def import_configuration(self, data: str | bytes) -> str:
        """Store a parsed configuration under a new id and return that id."""
        config = serializer.load_configuration(data)
        config.game_id = new_id("imported")
        timestamp = self.store.now()
        config.metadata.created = timestamp
        config.metadata.modified = timestamp
        self.store.add_configuration(config)
        logger.info(f"Imported configuration '{config.name}' as '{config.game_id}'")
        return config.game_id

    def create_game_modification(self, config_id: str) -> GameModification:
        with self.store.lock:
            return mods.create_modification(self._require(config_id), self.store.now())

    def apply_game_modification(self, modification: GameModification) -> str:
        return mods.apply_modification(self.store, modification).game_id

    def export_modification(self, modification: GameModification) -> str:
        return serializer.dump_modification(modification)

    def import_modification(self, data: str | bytes) -> GameModification:
        return serializer.load_modification(data)
