"""
Configuration Store - Creates, mutates and resolves configurations.

All mutations go through `update_configuration`, which stamps the
modification time and then runs the change hooks (cache invalidation,
subscriber notification) once the configuration is fully updated.

Mutations on an unknown configuration id are silent no-ops; callers that
need to know should check `get_configuration` first.
"""

from __future__ import annotations
from dataclasses import fields, replace
from datetime import datetime, timezone
import logging
import threading
from typing import Any, Callable, Mapping


from ..rule_schema import GameConfiguration, ConfigurationMetadata, utc_timestamp
from ..rule_schema.configuration import new_id
from .registry import RuleRegistry

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_UPDATABLE_FIELDS = frozenset(f.name for f in fields(GameConfiguration)) - {"game_id"}


class ConfigurationNotFoundError(KeyError):
    """Raised by operations that cannot return a sensible result for an unknown id."""

    def __init__(self, config_id: str):
        self.config_id = config_id
        super().__init__(f"Configuration not found: {config_id}")

    def __str__(self):
        return self.args[0]


class ConfigurationStore:
    """
    In-memory configurations keyed by game_id.

    The store's lock also serializes validation, so readers never observe
    a half-applied mutation.
    """

    def __init__(self, registry: RuleRegistry, clock: Clock | None = None):
        self.registry = registry
        self.lock = threading.RLock()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._configurations: dict[str, GameConfiguration] = {}
        self._change_hooks: list[Callable[[GameConfiguration], None]] = []

    def on_change(self, hook: Callable[[GameConfiguration], None]):
        self._change_hooks.append(hook)

    def now(self) -> str:
        return utc_timestamp(self._clock())

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def create_configuration(
        self, base_game: str, name: str, description: str = ""
    ) -> GameConfiguration:
        """Create a configuration with the base game's default rules active."""
        timestamp = self.now()
        config = GameConfiguration(
            game_id=new_id("config"),
            name=name,
            description=description,
            base_game=base_game,
            active_rules=self.registry.default_rule_ids(base_game),
            metadata=ConfigurationMetadata(created=timestamp, modified=timestamp),
        )
        self.add_configuration(config)
        logger.debug(f"Created configuration '{config.game_id}' for {base_game}")
        return config

    def add_configuration(self, config: GameConfiguration):
        """Store an already-built configuration (import, mod application)."""
        with self.lock:
            self._configurations[config.game_id] = config

    def get_configuration(self, config_id: str) -> GameConfiguration | None:
        return self._configurations.get(config_id)

    def list_configurations(self) -> list[GameConfiguration]:
        with self.lock:
            return list(self._configurations.values())

    def delete_configuration(self, config_id: str) -> bool:
        with self.lock:
            return self._configurations.pop(config_id, None) is not None

    # =========================================================================
    # Mutations
    # =========================================================================

    def update_configuration(self, config_id: str, updates: Mapping[str, Any]):
        """
        Shallow-merge `updates` into a configuration and notify.

        A `metadata` mapping is merged into the current metadata instead of
        replacing it.

        Raises ValueError for unknown field names or an attempt to change game_id.
        """
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update configuration fields: {sorted(unknown)}")

        with self.lock:
            config = self._configurations.get(config_id)
            if config is None:
                return

            for name, value in updates.items():
                if name == "metadata" and isinstance(value, Mapping):
                    # Partial metadata merges into the current values
                    value = replace(config.metadata, **value)
                setattr(config, name, value)
            config.metadata.modified = self.now()

            for hook in self._change_hooks:
                hook(config)

    def enable_rule(self, config_id: str, rule_id: str):
        with self.lock:
            config = self._configurations.get(config_id)
            if config is None or rule_id in config.active_rules:
                return
            self.update_configuration(
                config_id, {"active_rules": config.active_rules + [rule_id]}
            )

    def disable_rule(self, config_id: str, rule_id: str):
        """Deactivate a rule and drop its overrides."""
        with self.lock:
            config = self._configurations.get(config_id)
            if config is None:
                return
            config.rule_overrides.pop(rule_id, None)
            self.update_configuration(config_id, {
                "active_rules": [r for r in config.active_rules if r != rule_id],
                "rule_overrides": config.rule_overrides,
            })

    def set_rule_parameter(self, config_id: str, rule_id: str, key: str, value: Any):
        """Store an override verbatim. Values are only checked by validation."""
        with self.lock:
            config = self._configurations.get(config_id)
            if config is None:
                return
            config.rule_overrides.setdefault(rule_id, {})[key] = value
            self.update_configuration(config_id, {"rule_overrides": config.rule_overrides})

    def reset_rule_parameter(self, config_id: str, rule_id: str, key: str):
        """Drop one override so the parameter falls back to its default."""
        with self.lock:
            config = self._configurations.get(config_id)
            if config is None or not config.has_override(rule_id, key):
                return
            overrides = config.rule_overrides[rule_id]
            del overrides[key]
            if not overrides:
                del config.rule_overrides[rule_id]
            self.update_configuration(config_id, {"rule_overrides": config.rule_overrides})

    # =========================================================================
    # Resolution
    # =========================================================================

    def get_rule_parameter_value(self, config_id: str, rule_id: str, key: str) -> Any:
        """
        Effective value of a parameter.

        An override wins whenever one is stored, even a falsy one;
        otherwise the rule's default applies. Unknown ids give None.
        """
        config = self._configurations.get(config_id)
        rule = self.registry.get_rule(rule_id)
        if config is None or rule is None:
            return None

        overrides = config.rule_overrides.get(rule_id, {})
        if key in overrides:
            return overrides[key]

        param = rule.get_parameter(key)
        return param.default_value if param is not None else None

    def get_rule_parameters(self, config_id: str, rule_id: str) -> dict[str, Any]:
        """Effective values of every parameter of one rule."""
        rule = self.registry.get_rule(rule_id)
        if rule is None or config_id not in self._configurations:
            return {}
        return {
            param.key: self.get_rule_parameter_value(config_id, rule_id, param.key)
            for param in rule.parameters
        }

    def get_active_rule_values(self, config_id: str) -> dict[str, dict[str, Any]]:
        """Effective parameter values of every registered active rule."""
        config = self._configurations.get(config_id)
        if config is None:
            return {}
        return {
            rule_id: self.get_rule_parameters(config_id, rule_id)
            for rule_id in config.active_rules
            if rule_id in self.registry
        }
