"""
Chess Rules

Tweakable chess mechanics: board size, piece movement, special moves,
win conditions, time control, AI opponent, visual theme and assistance.
Rules tagged "default" are active in every new chess configuration.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..rule_schema import (
    GameRule,
    RuleCategory,
    NumberParameter,
    BooleanParameter,
    SelectParameter,
    TextParameter,
    options,
)

if TYPE_CHECKING:
    from ..engine_core import GameRuleEngine

GAME_TYPE = "chess"

CHESS_RULES: list[GameRule] = [
    GameRule(
        id="chess-board-size",
        name="Board Size",
        description="Configure the chess board dimensions",
        category=RuleCategory.GAMEPLAY,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(
                key="width", name="Board Width", default_value=8,
                description="Number of squares horizontally",
                min=4, max=12, step=1, live_preview=True, category="board",
            ),
            NumberParameter(
                key="height", name="Board Height", default_value=8,
                description="Number of squares vertically",
                min=4, max=12, step=1, live_preview=True, category="board",
            ),
        ],
        tags=["default", "board"],
        priority=1,
    ),
    GameRule(
        id="chess-piece-movement",
        name="Piece Movement",
        description="Modify how chess pieces move",
        category=RuleCategory.MOVEMENT,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(
                key="pawnDoubleMove", name="Pawn Double Move", default_value=True,
                description="Allow pawns to move two squares on first move", category="pawn",
            ),
            BooleanParameter(
                key="pawnBackward", name="Pawn Backward Movement", default_value=False,
                description="Allow pawns to move backward", category="pawn",
            ),
            SelectParameter(
                key="knightDistance", name="Knight Move Distance", default_value="normal",
                description="Modify knight L-shape distance", category="knight",
                options=options(
                    ("normal", "Normal (2+1)"),
                    ("extended", "Extended (3+1)"),
                    ("short", "Short (1+1)"),
                    ("super", "Super Knight (2+2)"),
                ),
            ),
            NumberParameter(
                key="bishopMaxDistance", name="Bishop Max Distance", default_value=8,
                description="Maximum squares bishop can move in one turn",
                min=1, max=12, step=1, category="bishop",
            ),
            NumberParameter(
                key="rookMaxDistance", name="Rook Max Distance", default_value=8,
                description="Maximum squares rook can move in one turn",
                min=1, max=12, step=1, category="rook",
            ),
            SelectParameter(
                key="queenPowerLevel", name="Queen Power Level", default_value="normal",
                description="Modify queen movement capabilities", category="queen",
                options=options(
                    ("weak", "Weak Queen (King movement)"),
                    ("normal", "Normal Queen"),
                    ("super", "Super Queen (+ Knight moves)"),
                    ("ultimate", "Ultimate Queen (Teleport)"),
                ),
            ),
        ],
        tags=["default", "movement"],
        priority=2,
    ),
    GameRule(
        id="chess-special-moves",
        name="Special Moves",
        description="Castling, en passant and promotion",
        category=RuleCategory.MOVEMENT,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="castling", name="Castling", default_value=True, category="special"),
            BooleanParameter(key="enPassant", name="En Passant", default_value=True, category="special"),
            BooleanParameter(
                key="pawnPromotion", name="Pawn Promotion", default_value=True, category="special",
            ),
            SelectParameter(
                key="promotionPieces", name="Promotion Options", default_value="traditional",
                category="special",
                options=options(
                    ("queen-only", "Queen Only"),
                    ("traditional", "Queen, Rook, Bishop, Knight"),
                    ("any", "Any Piece (except King)"),
                    ("super", "Including Super Pieces"),
                ),
            ),
        ],
        tags=["default", "special-moves"],
        priority=3,
    ),
    GameRule(
        id="chess-win-conditions",
        name="Win Conditions",
        description="How a chess game is won or drawn",
        category=RuleCategory.WIN_CONDITIONS,
        game_type=GAME_TYPE,
        parameters=[
            SelectParameter(
                key="winCondition", name="Victory Condition", default_value="checkmate",
                category="victory",
                options=options(
                    ("checkmate", "Traditional Checkmate"),
                    ("capture-king", "Capture Enemy King"),
                    ("king-of-hill", "King of the Hill"),
                    ("capture-all", "Capture All Pieces"),
                    ("time-based", "Time-Based Points"),
                    ("territory", "Territory Control"),
                ),
            ),
            TextParameter(
                key="hillPosition", name="Hill Position", default_value="center",
                description="Target squares for King of the Hill", category="victory",
            ),
            BooleanParameter(key="allowDraw", name="Allow Draws", default_value=True, category="victory"),
            NumberParameter(
                key="moveLimit", name="Move Limit", default_value=0,
                description="Maximum moves before a draw (0 = unlimited)",
                min=0, max=200, step=10, category="victory",
            ),
        ],
        tags=["default", "win-conditions"],
        priority=4,
    ),
    GameRule(
        id="chess-time-control",
        name="Time Control",
        description="Clocks and per-move limits",
        category=RuleCategory.GAMEPLAY,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="timeEnabled", name="Enable Timer", default_value=False, category="time"),
            NumberParameter(
                key="timePerPlayer", name="Time per Player (minutes)", default_value=10,
                min=1, max=60, step=1, category="time",
            ),
            NumberParameter(
                key="timeIncrement", name="Time Increment (seconds)", default_value=0,
                min=0, max=30, step=1, category="time",
            ),
            NumberParameter(
                key="moveTimeLimit", name="Move Time Limit (seconds)", default_value=0,
                min=0, max=300, step=5, category="time",
            ),
        ],
        tags=["time-control"],
        priority=5,
    ),
    GameRule(
        id="chess-ai-behavior",
        name="AI Opponent",
        description="Strength and style of the computer opponent",
        category=RuleCategory.AI,
        game_type=GAME_TYPE,
        parameters=[
            SelectParameter(
                key="difficulty", name="AI Difficulty", default_value="medium", category="ai",
                options=options(
                    ("beginner", "Beginner"),
                    ("easy", "Easy"),
                    ("medium", "Medium"),
                    ("hard", "Hard"),
                    ("expert", "Expert"),
                    ("random", "Random Moves"),
                ),
            ),
            NumberParameter(
                key="thinkTime", name="AI Think Time (seconds)", default_value=1,
                min=0.1, max=10, step=0.1, category="ai",
            ),
            SelectParameter(
                key="aiPersonality", name="AI Playing Style", default_value="balanced", category="ai",
                options=options(
                    ("aggressive", "Aggressive Attacker"),
                    ("defensive", "Defensive Player"),
                    ("balanced", "Balanced"),
                    ("tactical", "Tactical Player"),
                    ("positional", "Positional Player"),
                    ("chaotic", "Chaotic/Unpredictable"),
                ),
            ),
        ],
        tags=["ai", "opponent"],
        priority=6,
    ),
    GameRule(
        id="chess-visual-theme",
        name="Visual Theme",
        description="Board and piece appearance",
        category=RuleCategory.VISUAL,
        game_type=GAME_TYPE,
        parameters=[
            SelectParameter(
                key="boardStyle", name="Board Style", default_value="classic", category="appearance",
                options=options(
                    ("classic", "Classic Wood"),
                    ("modern", "Modern Minimalist"),
                    ("marble", "Marble Luxury"),
                    ("neon", "Neon Cyberpunk"),
                    ("medieval", "Medieval Stone"),
                    ("space", "Space Theme"),
                ),
            ),
            SelectParameter(
                key="pieceSet", name="Piece Set", default_value="traditional", category="appearance",
                options=options(
                    ("traditional", "Traditional Staunton"),
                    ("modern", "Modern Geometric"),
                    ("fantasy", "Fantasy Characters"),
                    ("animals", "Animal Kingdom"),
                    ("robots", "Robot Warriors"),
                    ("medieval", "Medieval Army"),
                ),
            ),
            SelectParameter(
                key="boardFlipped", name="Board Orientation", default_value="white-bottom",
                category="layout",
                options=options(
                    ("white-bottom", "White at Bottom"),
                    ("black-bottom", "Black at Bottom"),
                    ("auto-flip", "Auto-flip for Current Player"),
                ),
            ),
            BooleanParameter(
                key="showCoordinates", name="Show Coordinates", default_value=True, category="layout",
            ),
            BooleanParameter(
                key="highlightMoves", name="Highlight Legal Moves", default_value=True,
                category="assistance",
            ),
            SelectParameter(
                key="animationSpeed", name="Animation Speed", default_value="normal",
                category="animation",
                options=options(
                    ("instant", "Instant (No Animation)"),
                    ("fast", "Fast"),
                    ("normal", "Normal"),
                    ("slow", "Slow"),
                    ("dramatic", "Dramatic"),
                ),
            ),
        ],
        tags=["visual", "theme"],
        priority=7,
    ),
    GameRule(
        id="chess-assistance",
        name="Player Assistance",
        description="Hints, takebacks and analysis",
        category=RuleCategory.GAMEPLAY,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="showHints", name="Show Move Hints", default_value=False, category="help"),
            BooleanParameter(
                key="preventBlunders", name="Blunder Prevention", default_value=False, category="help",
            ),
            BooleanParameter(
                key="allowTakebacks", name="Allow Takebacks", default_value=False, category="help",
            ),
            NumberParameter(
                key="maxTakebacks", name="Max Takebacks per Game", default_value=1,
                min=1, max=10, step=1, category="help",
            ),
            BooleanParameter(
                key="analysisMode", name="Post-Game Analysis", default_value=True, category="analysis",
            ),
        ],
        tags=["assistance", "learning"],
        priority=8,
    ),
]


def install_chess_rules(engine: GameRuleEngine):
    """Register every chess rule with an engine."""
    engine.register_rules(CHESS_RULES)


def create_standard_chess(engine: GameRuleEngine):
    """A configuration with the default chess rules."""
    return engine.create_configuration(
        GAME_TYPE, "Standard Chess", "Traditional chess with standard rules"
    )
