"""
Games module - Built-in rule packs.

Each pack is a list of GameRule definitions plus an installer that
registers them with an engine:
- chess: board size, piece movement, special moves, win conditions, ...
- tictactoe: board setup, win lines, players, power-ups, tournament, ...
- platformer: physics, movement, jumps, enemies, level design, ...
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Callable, Iterable

from ..rule_schema import GameRule
from .chess import CHESS_RULES, install_chess_rules, create_standard_chess
from .tictactoe import TICTACTOE_RULES, install_tictactoe_rules
from .platformer import PLATFORMER_RULES, install_platformer_rules

if TYPE_CHECKING:
    from ..engine_core import GameRuleEngine

logger = logging.getLogger(__name__)

BUILTIN_RULE_PACKS: dict[str, list[GameRule]] = {
    "chess": CHESS_RULES,
    "tictactoe": TICTACTOE_RULES,
    "platformer": PLATFORMER_RULES,
}

_INSTALLERS: dict[str, Callable[["GameRuleEngine"], object]] = {
    "chess": install_chess_rules,
    "tictactoe": install_tictactoe_rules,
    "platformer": install_platformer_rules,
}


def install_builtin_rules(engine: GameRuleEngine, names: Iterable[str] | None = None) -> list[str]:
    """
    Install built-in rule packs into an engine.

    Args:
        engine: Target engine
        names: Pack names to install (all packs if None)

    Returns:
        The installed pack names, in installation order

    Raises:
        ValueError: If a name is not a built-in pack
    """
    selected = list(BUILTIN_RULE_PACKS) if names is None else list(names)
    unknown = [name for name in selected if name not in _INSTALLERS]
    if unknown:
        raise ValueError(
            f"Unknown rule pack(s): {', '.join(unknown)}. "
            f"Available: {', '.join(BUILTIN_RULE_PACKS)}"
        )

    for name in selected:
        _INSTALLERS[name](engine)
        logger.debug(f"Installed rule pack '{name}'")
    return selected


__all__ = [
    "BUILTIN_RULE_PACKS",
    "install_builtin_rules",
    "CHESS_RULES",
    "TICTACTOE_RULES",
    "PLATFORMER_RULES",
    "install_chess_rules",
    "create_standard_chess",
    "install_tictactoe_rules",
    "install_platformer_rules",
]
