"""
Configuration Validator - Checks a configuration against the rule graph.

Validates that:
1. Every active rule is registered
2. Every dependency of an active rule is also active
3. No conflict of an active rule is also active
4. Every parameter's effective value fits its kind and constraints

Problems are reported as data in a ValidationResult, never raised.
Results are cached per configuration until a rule is registered (whole
cache) or the configuration changes (its entry only).
"""

from __future__ import annotations
import logging

from ..rule_schema import (
    GameConfiguration,
    GameRule,
    ValidationResult,
    check_parameter_value,
)
from .registry import RuleRegistry
from .store import ConfigurationStore

logger = logging.getLogger(__name__)


class ConfigurationValidator:
    def __init__(self, registry: RuleRegistry, store: ConfigurationStore):
        self.registry = registry
        self.store = store
        self._cache: dict[str, ValidationResult] = {}

    def invalidate(self, config_id: str | None = None):
        """Drop one cached result, or all of them when no id is given."""
        with self.store.lock:
            if config_id is None:
                self._cache.clear()
            else:
                self._cache.pop(config_id, None)

    def is_cached(self, config_id: str) -> bool:
        return config_id in self._cache

    def validate_configuration(self, config_id: str) -> ValidationResult:
        with self.store.lock:
            cached = self._cache.get(config_id)
            if cached is not None:
                return cached

            config = self.store.get_configuration(config_id)
            if config is None:
                return ValidationResult(errors=["Configuration not found"])

            result = self._perform_validation(config)
            self._cache[config_id] = result
            logger.debug(
                f"Validated '{config_id}': {len(result.errors)} error(s), "
                f"{len(result.warnings)} warning(s)"
            )
            return result

    def _perform_validation(self, config: GameConfiguration) -> ValidationResult:
        errors: list[str] = []
        warnings: list[str] = []

        active_ids = set(config.active_rules)
        active_slots = [False] * len(self.registry)
        for rule_id in active_ids:
            slot = self.registry.index_of(rule_id)
            if slot is not None and slot < len(active_slots):
                active_slots[slot] = True

        def is_active(rule_id: str) -> bool:
            slot = self.registry.index_of(rule_id)
            if slot is None or slot >= len(active_slots):
                # Unregistered ids can still be listed as active
                return rule_id in active_ids
            return active_slots[slot]

        for rule_id in config.active_rules:
            rule = self.registry.get_rule(rule_id)
            if rule is None:
                errors.append(f"Unknown rule: {rule_id}")
                continue

            if rule.game_type != config.base_game:
                warnings.append(
                    f"Rule {self._label(rule_id)} belongs to '{rule.game_type}', "
                    f"not '{config.base_game}'"
                )

            for dep_id in rule.dependencies:
                if not is_active(dep_id):
                    errors.append(
                        f"Rule {self._label(rule_id)} requires {self._label(dep_id)} to be enabled"
                    )

            for conflict_id in rule.conflicts:
                if is_active(conflict_id):
                    errors.append(
                        f"Rule {self._label(rule_id)} conflicts with {self._label(conflict_id)}"
                    )

            errors.extend(self._validate_parameters(config, rule))
            warnings.extend(self._unused_overrides(config, rule))

        suggestions = [] if errors else self._suggest(config, is_active)
        return ValidationResult(errors=errors, warnings=warnings, suggestions=suggestions)

    def _validate_parameters(self, config: GameConfiguration, rule: GameRule) -> list[str]:
        errors = []
        for param in rule.parameters:
            value = self.store.get_rule_parameter_value(config.game_id, rule.id, param.key)
            reason = check_parameter_value(param, value)
            if reason:
                errors.append(
                    f"Invalid parameter '{param.name}' in rule '{rule.name}': {reason}"
                )
        return errors

    def _unused_overrides(self, config: GameConfiguration, rule: GameRule) -> list[str]:
        known = set(rule.parameter_keys())
        return [
            f"Override '{key}' is not a parameter of rule {self._label(rule.id)}"
            for key in config.rule_overrides.get(rule.id, {})
            if key not in known
        ]

    def _suggest(self, config: GameConfiguration, is_active) -> list[str]:
        """Inactive default rules of the base game that could be enabled cleanly."""
        suggestions = []
        for rule in self.registry.get_rules_for_game(config.base_game):
            if not rule.is_default or is_active(rule.id):
                continue
            if all(is_active(d) for d in rule.dependencies) and not any(
                is_active(c) for c in rule.conflicts
            ):
                suggestions.append(f"Consider enabling {self._label(rule.id)}")
        return suggestions

    def _label(self, rule_id: str) -> str:
        """Quote a rule by display name and id, or by id alone when unknown."""
        rule = self.registry.get_rule(rule_id)
        if rule is None or rule.name == rule_id:
            return f"'{rule_id}'"
        return f"'{rule.name}' ({rule_id})"
