# src/bloom/garden/rewards.py

from __future__ import annotations

from .models import FlowerType

FLOWER_BY_DIFFICULTY: dict[int, FlowerType] = {
    1: FlowerType.DAISY,
    2: FlowerType.TULIP,
    3: FlowerType.ROSE,
}

FLOWER_GLYPHS: dict[FlowerType, str] = {
    FlowerType.DAISY: "🌼",
    FlowerType.TULIP: "🌷",
    FlowerType.ROSE: "🌹",
}

LEGEND = "Daisy = easy, Tulip = medium, Rose = challenging."


def flower_for_difficulty(difficulty: int) -> FlowerType:
    try:
        return FLOWER_BY_DIFFICULTY[difficulty]
    except KeyError:
        raise ValueError(f"difficulty must be 1, 2 or 3, got {difficulty!r}") from None
