"""
Engine Core - Registry, configuration store, validator and change events.

The core is in-memory and synchronous. It never renders, persists or
talks to the network; hosts wrap it (see `ruleforge.api`, `ruleforge.cli`).
"""

from .registry import RuleRegistry
from .store import ConfigurationStore, ConfigurationNotFoundError
from .notifier import ChangeNotifier, Subscription
from .validator import ConfigurationValidator
from .engine import GameRuleEngine

__all__ = [
    "RuleRegistry",
    "ConfigurationStore",
    "ConfigurationNotFoundError",
    "ChangeNotifier",
    "Subscription",
    "ConfigurationValidator",
    "GameRuleEngine",
]
