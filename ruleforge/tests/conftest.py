"""
Pytest fixtures for RuleForge tests.
"""

from datetime import datetime, timezone

import pytest

from ..engine_core import GameRuleEngine
from ..games import install_chess_rules
from ..rule_schema import (
    GameRule,
    RuleCategory,
    NumberParameter,
    BooleanParameter,
    SelectParameter,
    TextParameter,
    options,
)

FIXED_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine() -> GameRuleEngine:
    """Empty engine with a frozen clock."""
    return GameRuleEngine(clock=lambda: FIXED_TIME)


@pytest.fixture
def chess_engine(engine: GameRuleEngine) -> GameRuleEngine:
    """Engine with the chess rules installed."""
    install_chess_rules(engine)
    return engine


@pytest.fixture
def demo_rules() -> list[GameRule]:
    """
    Small rule graph for the "demo" game:
        r1 (default) requires r2
        r3 conflicts with r1
        r4 (default) has one parameter of every checked kind
    """
    return [
        GameRule(
            id="r1",
            name="R1",
            category=RuleCategory.GAMEPLAY,
            game_type="demo",
            parameters=[
                NumberParameter(key="x", name="X", default_value=50, min=0, max=100),
            ],
            dependencies=["r2"],
            tags=["default"],
        ),
        GameRule(
            id="r2",
            name="R2",
            category=RuleCategory.PHYSICS,
            game_type="demo",
        ),
        GameRule(
            id="r3",
            name="R3",
            category=RuleCategory.GAMEPLAY,
            game_type="demo",
            conflicts=["r1"],
        ),
        GameRule(
            id="r4",
            name="Settings",
            category=RuleCategory.VISUAL,
            game_type="demo",
            parameters=[
                BooleanParameter(key="flag", name="Flag", default_value=False),
                SelectParameter(
                    key="mode", name="Mode", default_value="a",
                    options=options(("a", "A"), ("b", "B")),
                ),
                TextParameter(key="title", name="Title", default_value="Hello"),
            ],
            tags=["default"],
        ),
    ]


@pytest.fixture
def demo_engine(engine: GameRuleEngine, demo_rules: list[GameRule]) -> GameRuleEngine:
    """Engine with the demo rule graph registered."""
    engine.register_rules(demo_rules)
    return engine


@pytest.fixture
def demo_config(demo_engine: GameRuleEngine):
    """Fresh demo configuration (r1 and r4 active)."""
    return demo_engine.create_configuration("demo", "Demo", "A demo configuration")
