"""
RuleForge - Game Rule Configuration Engine

An in-memory engine that lets players customize simulated games. It provides:
- A registry of typed, tweakable rules per game
- Configurations: active rules plus parameter overrides
- Cached validation of dependencies, conflicts and parameter values
- Change subscriptions per configuration
- JSON export/import and shareable modifications
"""

__version__ = "0.1.0"

from .engine_core import GameRuleEngine, ConfigurationNotFoundError
from .sharing import ConfigurationParseError

__all__ = [
    "__version__",
    "GameRuleEngine",
    "ConfigurationNotFoundError",
    "ConfigurationParseError",
]
