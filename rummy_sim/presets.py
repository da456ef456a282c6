"""
Preset configurations for Rummy simulation.
Allows easy setup of different modes and player line-ups.
"""

from dataclasses import dataclass, field
from typing import Optional
from enum import Enum


class StrategyType(Enum):
    BASIC = "basic"   # Random draws and discards
    SMART = "smart"   # Card-keep heuristic with discard selection


@dataclass
class Preset:
    """A complete preset configuration for a game."""
    name: str
    description: str
    mode: str = "classic"
    strategies: tuple[StrategyType, StrategyType] = (StrategyType.SMART, StrategyType.SMART)
    config_overrides: dict = field(default_factory=dict)


# Built-in presets
PRESETS = {
    "classic": Preset(
        name="Classic",
        description="Classic Rummy, 13 cards, two smart players",
        mode="classic",
    ),

    "classic_random": Preset(
        name="Classic vs Random",
        description="Smart player 0 against a random player 1",
        mode="classic",
        strategies=(StrategyType.SMART, StrategyType.BASIC),
    ),

    "classic_short": Preset(
        name="Classic Short Hands",
        description="Classic Rummy dealt 7 cards each",
        mode="classic",
        config_overrides={"starting_cards": 7},
    ),

    "gin": Preset(
        name="Gin",
        description="Gin Rummy, 10 cards, knock at 7 or less",
        mode="gin",
    ),

    "gin_random": Preset(
        name="Gin vs Random",
        description="Smart player 0 against a random player 1 at Gin",
        mode="gin",
        strategies=(StrategyType.SMART, StrategyType.BASIC),
    ),

    "gin_bonus": Preset(
        name="Gin with Bonuses",
        description="Gin Rummy paying 25 for gin and 25 for an undercut",
        mode="gin",
        config_overrides={"gin_bonus": 25, "undercut_bonus": 25},
    ),

    "gin_low_knock": Preset(
        name="Gin Low Knock",
        description="Gin Rummy where knocking needs 3 or less deadwood",
        mode="gin",
        config_overrides={"knock_threshold": 3},
    ),
}


def get_preset(name: str) -> Optional[Preset]:
    """Get a preset by name."""
    return PRESETS.get(name.lower().replace(" ", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())


def get_preset_info(name: str) -> Optional[dict]:
    """Get info about a preset."""
    preset = get_preset(name)
    if preset:
        return {
            "name": preset.name,
            "description": preset.description,
            "mode": preset.mode,
            "strategies": [s.value for s in preset.strategies],
            "config_overrides": dict(preset.config_overrides),
        }
    return None
