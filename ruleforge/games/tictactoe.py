"""
Tic-Tac-Toe Rules

Board size and shape, win lines, players, alternative mechanics,
power-ups, theme, tournament scoring and accessibility.

Dependency chain:
    board-setup <- win-conditions, mechanics <- powerups
    players <- tournament
    visual-theme <- accessibility
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..rule_schema import (
    GameRule,
    RuleCategory,
    NumberParameter,
    BooleanParameter,
    SelectParameter,
    ColorParameter,
    options,
)

if TYPE_CHECKING:
    from ..engine_core import GameRuleEngine
    from ..rule_schema import GameConfiguration

GAME_TYPE = "tictactoe"

SPEED_OPTIONS = options(
    ("instant", "Instant"),
    ("fast", "Fast"),
    ("normal", "Normal"),
    ("slow", "Slow"),
    ("dramatic", "Dramatic"),
)

TICTACTOE_RULES: list[GameRule] = [
    GameRule(
        id="tictactoe-board-setup",
        name="Board Configuration",
        description="Customize the game board size and layout",
        category=RuleCategory.BOARD,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(
                key="boardSize", name="Board Size", default_value=3,
                description="Size of the game board (3 = 3x3, 4 = 4x4, etc.)",
                min=3, max=10, step=1,
            ),
            SelectParameter(
                key="boardShape", name="Board Shape", default_value="square",
                options=options(
                    ("square", "Square"),
                    ("rectangle", "Rectangle"),
                    ("circle", "Circle"),
                    ("diamond", "Diamond"),
                ),
            ),
            NumberParameter(
                key="rectangleWidth", name="Rectangle Width", default_value=4, min=3, max=8, step=1,
            ),
            NumberParameter(
                key="rectangleHeight", name="Rectangle Height", default_value=3, min=3, max=8, step=1,
            ),
            BooleanParameter(key="cellAnimation", name="Cell Animation", default_value=True),
        ],
        tags=["core", "board", "default"],
    ),
    GameRule(
        id="tictactoe-win-conditions",
        name="Win Conditions",
        description="Define how players can win the game",
        category=RuleCategory.RULES,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(
                key="winLength", name="Win Length", default_value=3,
                description="Number of marks in a row needed to win",
                min=3, max=10, step=1,
            ),
            BooleanParameter(key="allowDiagonal", name="Diagonal Wins", default_value=True),
            BooleanParameter(key="allowVertical", name="Vertical Wins", default_value=True),
            BooleanParameter(key="allowHorizontal", name="Horizontal Wins", default_value=True),
            BooleanParameter(key="multipleWins", name="Multiple Win Lines", default_value=False),
            BooleanParameter(key="cornerWin", name="Corner Win", default_value=False),
            BooleanParameter(key="centerWin", name="Center Control Win", default_value=False),
        ],
        dependencies=["tictactoe-board-setup"],
        tags=["core", "winning", "default"],
    ),
    GameRule(
        id="tictactoe-players",
        name="Player Configuration",
        description="Configure number of players and their symbols",
        category=RuleCategory.PLAYERS,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(key="numPlayers", name="Number of Players", default_value=2, min=2, max=6, step=1),
            SelectParameter(
                key="playerSymbols", name="Player Symbols", default_value="classic",
                options=options(
                    ("classic", "X and O"),
                    ("shapes", "Geometric Shapes"),
                    ("colors", "Colored Dots"),
                    ("numbers", "Numbers"),
                    ("letters", "Letters"),
                    ("emojis", "Emojis"),
                    ("custom", "Custom Symbols"),
                ),
            ),
            NumberParameter(
                key="turnTimer", name="Turn Timer", default_value=0,
                description="Time limit per turn in seconds (0 = no limit)",
                min=0, max=60, step=5,
            ),
            BooleanParameter(key="aiOpponent", name="AI Opponent", default_value=False),
            SelectParameter(
                key="aiDifficulty", name="AI Difficulty", default_value="normal",
                options=options(
                    ("easy", "Easy"),
                    ("normal", "Normal"),
                    ("hard", "Hard"),
                    ("impossible", "Impossible"),
                ),
            ),
        ],
        tags=["core", "players", "default"],
    ),
    GameRule(
        id="tictactoe-mechanics",
        name="Game Mechanics",
        description="Alternative placement and movement mechanics",
        category=RuleCategory.GAMEPLAY,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="gravityMode", name="Gravity Mode", default_value=False),
            BooleanParameter(key="slideMode", name="Sliding Pieces", default_value=False),
            BooleanParameter(key="stackMode", name="Piece Stacking", default_value=False),
            BooleanParameter(key="rotatingBoard", name="Rotating Board", default_value=False),
            BooleanParameter(key="limitedPieces", name="Limited Pieces", default_value=False),
            NumberParameter(key="pieceLimit", name="Piece Limit", default_value=3, min=2, max=9, step=1),
            BooleanParameter(
                key="misereMode", name="Misère Mode", default_value=False,
                description="Getting three in a row loses",
            ),
        ],
        dependencies=["tictactoe-board-setup"],
        tags=["advanced", "mechanics"],
    ),
    GameRule(
        id="tictactoe-powerups",
        name="Power-ups & Special Moves",
        description="Special abilities that appear during play",
        category=RuleCategory.POWERUPS,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="enablePowerups", name="Enable Power-ups", default_value=False),
            BooleanParameter(key="bombPowerup", name="Bomb Power-up", default_value=False),
            BooleanParameter(key="blockPowerup", name="Block Power-up", default_value=False),
            BooleanParameter(key="swapPowerup", name="Swap Power-up", default_value=False),
            BooleanParameter(key="extraTurnPowerup", name="Extra Turn Power-up", default_value=False),
            BooleanParameter(key="wildcardPowerup", name="Wildcard Power-up", default_value=False),
            SelectParameter(
                key="powerupFrequency", name="Power-up Frequency", default_value="normal",
                options=options(("rare", "Rare"), ("normal", "Normal"), ("frequent", "Frequent")),
            ),
        ],
        dependencies=["tictactoe-mechanics"],
        tags=["powerups", "special"],
    ),
    GameRule(
        id="tictactoe-visual-theme",
        name="Visual Theme",
        description="Board look, colors and effects",
        category=RuleCategory.VISUAL,
        game_type=GAME_TYPE,
        parameters=[
            SelectParameter(
                key="boardTheme", name="Board Theme", default_value="classic",
                options=options(
                    ("classic", "Classic Lines"),
                    ("modern", "Modern Flat"),
                    ("neon", "Neon Glow"),
                    ("wooden", "Wooden Board"),
                    ("space", "Space Theme"),
                    ("paper", "Paper & Pencil"),
                    ("digital", "Digital Grid"),
                ),
            ),
            ColorParameter(key="gridColor", name="Grid Color", default_value="#333333"),
            ColorParameter(key="backgroundColor", name="Background Color", default_value="#ffffff"),
            SelectParameter(
                key="animationSpeed", name="Animation Speed", default_value="normal",
                options=SPEED_OPTIONS,
            ),
            BooleanParameter(key="particleEffects", name="Particle Effects", default_value=True),
            BooleanParameter(key="soundEffects", name="Sound Effects", default_value=True),
        ],
        tags=["visual", "theme"],
    ),
    GameRule(
        id="tictactoe-tournament",
        name="Tournament Mode",
        description="Series play and scoring",
        category=RuleCategory.TOURNAMENT,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="enableTournament", name="Tournament Mode", default_value=False),
            NumberParameter(key="bestOf", name="Best Of Games", default_value=3, min=1, max=21, step=2),
            SelectParameter(
                key="scoringSystem", name="Scoring System", default_value="standard",
                options=options(
                    ("standard", "Win/Loss/Draw"),
                    ("points", "Point System"),
                    ("speed", "Speed Bonus"),
                    ("style", "Style Points"),
                ),
            ),
            NumberParameter(key="winPoints", name="Points for Win", default_value=3, min=1, max=10, step=1),
            NumberParameter(key="drawPoints", name="Points for Draw", default_value=1, min=0, max=5, step=1),
            NumberParameter(key="lossPoints", name="Points for Loss", default_value=0, min=0, max=3, step=1),
        ],
        dependencies=["tictactoe-players"],
        tags=["tournament", "scoring"],
    ),
    GameRule(
        id="tictactoe-accessibility",
        name="Accessibility Options",
        description="Contrast, navigation and motion settings",
        category=RuleCategory.ACCESSIBILITY,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="highContrast", name="High Contrast Mode", default_value=False),
            BooleanParameter(key="largeSymbols", name="Large Symbols", default_value=False),
            BooleanParameter(key="keyboardNav", name="Keyboard Navigation", default_value=True),
            BooleanParameter(key="screenReader", name="Screen Reader Support", default_value=True),
            BooleanParameter(key="colorBlind", name="Color Blind Friendly", default_value=False),
            BooleanParameter(key="reduceMotion", name="Reduce Motion", default_value=False),
        ],
        dependencies=["tictactoe-visual-theme"],
        tags=["accessibility", "inclusive"],
    ),
]


def install_tictactoe_rules(engine: GameRuleEngine) -> GameConfiguration:
    """
    Register the tic-tac-toe rules and create the classic configuration.

    Every rule tagged "core" is enabled in the returned configuration.
    """
    engine.register_rules(TICTACTOE_RULES)

    config = engine.create_configuration(
        GAME_TYPE, "Classic Tic Tac Toe", "Traditional 3x3 tic-tac-toe experience"
    )
    for rule in TICTACTOE_RULES:
        if "core" in rule.tags:
            engine.enable_rule(config.game_id, rule.id)
    return config
