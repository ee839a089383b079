"""
Platformer Rules

Side-scrolling platformer tuning: physics, movement and jump feel,
abilities, enemies, level generation, collectibles, effects, audio
and difficulty. Only the jump rule depends on another rule (gravity).
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..rule_schema import (
    GameRule,
    RuleCategory,
    NumberParameter,
    BooleanParameter,
    SelectParameter,
    options,
)

if TYPE_CHECKING:
    from ..engine_core import GameRuleEngine
    from ..rule_schema import GameConfiguration

GAME_TYPE = "platformer"

PLATFORMER_RULES: list[GameRule] = [
    GameRule(
        id="platformer-gravity",
        name="Gravity & Physics",
        description="Gravity, friction and falling speed",
        category=RuleCategory.PHYSICS,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(
                key="gravity", name="Gravity Strength", default_value=0.8,
                description="How strongly characters are pulled down",
                min=0.1, max=3.0, step=0.1, live_preview=True,
            ),
            NumberParameter(
                key="friction", name="Ground Friction", default_value=0.85,
                min=0.1, max=1.0, step=0.05, live_preview=True,
            ),
            NumberParameter(
                key="airResistance", name="Air Resistance", default_value=0.98,
                min=0.8, max=1.0, step=0.01,
            ),
            NumberParameter(
                key="terminalVelocity", name="Terminal Velocity", default_value=15,
                description="Maximum falling speed",
                min=5, max=30, step=1,
            ),
        ],
        tags=["core", "physics"],
    ),
    GameRule(
        id="platformer-character-movement",
        name="Character Movement",
        description="Walking, running and wall interaction",
        category=RuleCategory.CHARACTER,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(key="walkSpeed", name="Walking Speed", default_value=4, min=1, max=12, step=0.5),
            NumberParameter(key="runSpeed", name="Running Speed", default_value=7, min=2, max=20, step=0.5),
            NumberParameter(key="acceleration", name="Acceleration", default_value=0.5, min=0.1, max=2.0, step=0.1),
            NumberParameter(key="deceleration", name="Deceleration", default_value=0.8, min=0.1, max=2.0, step=0.1),
            BooleanParameter(key="doubleJump", name="Double Jump", default_value=True),
            BooleanParameter(key="wallJump", name="Wall Jump", default_value=False),
            BooleanParameter(key="wallSlide", name="Wall Slide", default_value=False),
        ],
        tags=["core", "character"],
    ),
    GameRule(
        id="platformer-jump-mechanics",
        name="Jump Mechanics",
        description="Jump height and forgiveness windows",
        category=RuleCategory.CHARACTER,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(key="jumpHeight", name="Jump Height", default_value=12, min=5, max=25, step=1),
            BooleanParameter(
                key="jumpVariableHeight", name="Variable Jump Height", default_value=True,
                description="Holding the button jumps higher",
            ),
            NumberParameter(
                key="coyoteTime", name="Coyote Time", default_value=0.15,
                description="Seconds after leaving a ledge during which a jump still counts",
                min=0, max=0.5, step=0.05,
            ),
            NumberParameter(key="jumpBuffer", name="Jump Buffer", default_value=0.1, min=0, max=0.3, step=0.05),
            BooleanParameter(key="floatyJump", name="Floaty Jump", default_value=False),
        ],
        dependencies=["platformer-gravity"],
        tags=["core", "feel"],
    ),
    GameRule(
        id="platformer-powerups",
        name="Power-ups & Abilities",
        description="Dash, ground pound, glide and swim",
        category=RuleCategory.GAMEPLAY,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="dashAbility", name="Dash Ability", default_value=False),
            NumberParameter(key="dashDistance", name="Dash Distance", default_value=8, min=3, max=20, step=1),
            NumberParameter(key="dashCooldown", name="Dash Cooldown", default_value=1.0, min=0.2, max=5.0, step=0.2),
            BooleanParameter(key="groundPound", name="Ground Pound", default_value=False),
            BooleanParameter(key="glideAbility", name="Glide Ability", default_value=False),
            BooleanParameter(key="swimAbility", name="Swimming", default_value=True),
        ],
        tags=["abilities", "powerups"],
    ),
    GameRule(
        id="platformer-enemies",
        name="Enemy Behavior",
        description="How enemies move and respawn",
        category=RuleCategory.ENEMIES,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(key="enemySpeed", name="Enemy Movement Speed", default_value=2, min=0.5, max=8, step=0.5),
            SelectParameter(
                key="enemyAggression", name="Enemy Aggression", default_value="normal",
                options=options(
                    ("passive", "Passive"),
                    ("normal", "Normal"),
                    ("aggressive", "Aggressive"),
                    ("hostile", "Hostile"),
                ),
            ),
            BooleanParameter(key="enemyRespawn", name="Enemy Respawn", default_value=True),
            BooleanParameter(key="enemyVariants", name="Enemy Variants", default_value=False),
        ],
        tags=["enemies", "difficulty"],
    ),
    GameRule(
        id="platformer-level-design",
        name="Level Design",
        description="Level size, layout density and scrolling",
        category=RuleCategory.LEVEL,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(key="levelWidth", name="Level Width", default_value=200, min=50, max=500, step=10),
            NumberParameter(key="levelHeight", name="Level Height", default_value=15, min=10, max=30, step=1),
            SelectParameter(
                key="platformDensity", name="Platform Density", default_value="normal",
                options=options(
                    ("sparse", "Sparse"),
                    ("normal", "Normal"),
                    ("dense", "Dense"),
                    ("maze", "Maze-like"),
                ),
            ),
            NumberParameter(
                key="scrollingSpeed", name="Auto-scroll Speed", default_value=0,
                description="0 disables auto-scrolling",
                min=0, max=5, step=0.2,
            ),
            BooleanParameter(key="parallaxLayers", name="Parallax Layers", default_value=True),
        ],
        tags=["level", "generation"],
    ),
    GameRule(
        id="platformer-collectibles",
        name="Collectibles & Scoring",
        description="Coins, extra lives and secrets",
        category=RuleCategory.SCORING,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(key="coinValue", name="Coin Value", default_value=100, min=10, max=1000, step=10),
            SelectParameter(
                key="coinDensity", name="Coin Density", default_value="normal",
                options=options(
                    ("rare", "Rare"),
                    ("normal", "Normal"),
                    ("abundant", "Abundant"),
                    ("everywhere", "Everywhere"),
                ),
            ),
            NumberParameter(
                key="extraLife", name="Extra Life Threshold", default_value=10000,
                min=1000, max=50000, step=1000,
            ),
            BooleanParameter(key="secretAreas", name="Secret Areas", default_value=True),
            SelectParameter(
                key="powerUpFrequency", name="Power-up Frequency", default_value="normal",
                options=options(
                    ("never", "Never"),
                    ("rare", "Rare"),
                    ("normal", "Normal"),
                    ("frequent", "Frequent"),
                ),
            ),
        ],
        tags=["scoring", "collectibles"],
    ),
    GameRule(
        id="platformer-visual-effects",
        name="Visual Effects",
        description="Particles, screen shake, theme and weather",
        category=RuleCategory.VISUAL,
        game_type=GAME_TYPE,
        parameters=[
            BooleanParameter(key="particleEffects", name="Particle Effects", default_value=True),
            BooleanParameter(key="screenShake", name="Screen Shake", default_value=True),
            SelectParameter(
                key="animationSpeed", name="Animation Speed", default_value="normal",
                options=options(
                    ("slow", "Slow Motion"),
                    ("normal", "Normal"),
                    ("fast", "Fast"),
                    ("turbo", "Turbo"),
                ),
            ),
            SelectParameter(
                key="visualTheme", name="Visual Theme", default_value="classic",
                options=options(
                    ("classic", "Classic"),
                    ("modern", "Modern"),
                    ("retro", "Retro Pixel"),
                    ("neon", "Neon Cyber"),
                    ("nature", "Forest Theme"),
                    ("space", "Space Theme"),
                ),
            ),
            SelectParameter(
                key="weatherEffects", name="Weather Effects", default_value="none",
                options=options(
                    ("none", "None"),
                    ("rain", "Rain"),
                    ("snow", "Snow"),
                    ("wind", "Wind"),
                    ("storm", "Storm"),
                ),
            ),
        ],
        tags=["visual", "effects"],
    ),
    GameRule(
        id="platformer-audio",
        name="Audio Settings",
        description="Music theme and volume levels",
        category=RuleCategory.AUDIO,
        game_type=GAME_TYPE,
        parameters=[
            SelectParameter(
                key="musicTheme", name="Music Theme", default_value="upbeat",
                options=options(
                    ("classic", "Classic Chiptune"),
                    ("upbeat", "Upbeat Adventure"),
                    ("atmospheric", "Atmospheric"),
                    ("electronic", "Electronic"),
                    ("orchestral", "Orchestral"),
                ),
            ),
            NumberParameter(
                key="soundEffectVolume", name="Sound Effect Volume", default_value=0.8,
                min=0, max=1.0, step=0.1,
            ),
            NumberParameter(key="musicVolume", name="Music Volume", default_value=0.6, min=0, max=1.0, step=0.1),
            BooleanParameter(key="dynamicMusic", name="Dynamic Music", default_value=True),
        ],
        tags=["audio", "music"],
    ),
    GameRule(
        id="platformer-difficulty",
        name="Difficulty Settings",
        description="Lives, checkpoints, damage and time limit",
        category=RuleCategory.GAMEPLAY,
        game_type=GAME_TYPE,
        parameters=[
            NumberParameter(key="lives", name="Starting Lives", default_value=3, min=1, max=10, step=1),
            SelectParameter(
                key="checkpoints", name="Checkpoint Frequency", default_value="normal",
                options=options(
                    ("none", "No Checkpoints"),
                    ("rare", "Rare"),
                    ("normal", "Normal"),
                    ("frequent", "Frequent"),
                ),
            ),
            SelectParameter(
                key="damageMode", name="Damage Mode", default_value="traditional",
                options=options(
                    ("invincible", "Invincible"),
                    ("traditional", "Traditional (Shrink)"),
                    ("health", "Health Bar"),
                    ("one-hit", "One Hit Death"),
                ),
            ),
            NumberParameter(
                key="timeLimit", name="Level Time Limit", default_value=300,
                description="Seconds per level",
                min=60, max=999, step=30,
            ),
        ],
        tags=["difficulty", "challenge"],
    ),
]


def install_platformer_rules(engine: GameRuleEngine) -> GameConfiguration:
    """Register the platformer rules and create a configuration with the core ones enabled."""
    engine.register_rules(PLATFORMER_RULES)

    config = engine.create_configuration(
        GAME_TYPE, "Default Platformer", "Classic 2D platformer experience"
    )
    for rule in PLATFORMER_RULES:
        if "core" in rule.tags:
            engine.enable_rule(config.game_id, rule.id)
    return config
