"""
Rule Registry - Holds rule definitions for every game.

Each registered rule gets a dense integer slot the first time its id is
seen. Re-registering an id replaces the definition in the same slot, so
slots stay stable for the lifetime of the registry. The validator uses
slots to turn dependency/conflict checks into list indexing.
"""

from __future__ import annotations
import logging
import threading
from typing import Callable

from ..rule_schema import GameRule, RuleCategory

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Process-wide store of rule definitions.

    Usage:
        registry = RuleRegistry()
        registry.register_rule(rule)
        registry.get_rules_for_game("chess")
    """

    def __init__(self):
        self._rules: list[GameRule] = []
        self._slots: dict[str, int] = {}
        self._lock = threading.RLock()
        self._listeners: list[Callable[[GameRule], None]] = []

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: str) -> bool:
        return rule_id in self._slots

    def on_register(self, callback: Callable[[GameRule], None]):
        """Call `callback` after every registration (used for cache invalidation)."""
        self._listeners.append(callback)

    def register_rule(self, rule: GameRule):
        """Store a rule, replacing any rule with the same id."""
        with self._lock:
            slot = self._slots.get(rule.id)
            if slot is None:
                self._slots[rule.id] = len(self._rules)
                self._rules.append(rule)
            else:
                self._rules[slot] = rule
                logger.debug(f"Replaced rule definition '{rule.id}'")

        for callback in self._listeners:
            callback(rule)

    def get_rule(self, rule_id: str) -> GameRule | None:
        slot = self._slots.get(rule_id)
        return self._rules[slot] if slot is not None else None

    def index_of(self, rule_id: str) -> int | None:
        """Dense slot of a registered rule, None if unknown."""
        return self._slots.get(rule_id)

    def rule_at(self, slot: int) -> GameRule:
        return self._rules[slot]

    def get_rules_for_game(self, game_type: str) -> list[GameRule]:
        """All rules of one game, in registration order."""
        with self._lock:
            return [rule for rule in self._rules if rule.game_type == game_type]

    def get_rules_by_category(
        self, game_type: str, category: RuleCategory | str
    ) -> list[GameRule]:
        try:
            category = RuleCategory(category)
        except ValueError:
            return []
        return [
            rule for rule in self.get_rules_for_game(game_type)
            if rule.category == category
        ]

    def default_rule_ids(self, game_type: str) -> list[str]:
        """Ids of the rules tagged "default" for a game."""
        return [rule.id for rule in self.get_rules_for_game(game_type) if rule.is_default]

    def categories_for_game(self, game_type: str) -> list[RuleCategory]:
        """Distinct categories used by a game, in first-seen order."""
        categories: list[RuleCategory] = []
        for rule in self.get_rules_for_game(game_type):
            if rule.category not in categories:
                categories.append(rule.category)
        return categories

    def list_game_types(self) -> list[str]:
        with self._lock:
            game_types: list[str] = []
            for rule in self._rules:
                if rule.game_type not in game_types:
                    game_types.append(rule.game_type)
            return game_types
