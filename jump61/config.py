"""Session configuration and named presets."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict


MIN_BOARD_SIZE = 2
MAX_BOARD_SIZE = 10
MAX_SEARCH_DEPTH = 6


def _clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


@dataclass(frozen=True)
class GameConfig:
    board_size: int = 6
    search_depth: int = 3
    evaluator: str = "material"

    def clamp(self) -> "GameConfig":
        return replace(
            self,
            board_size=_clamp(int(self.board_size), MIN_BOARD_SIZE, MAX_BOARD_SIZE),
            search_depth=_clamp(int(self.search_depth), 1, MAX_SEARCH_DEPTH),
        )


class ConfigRegistry:
    PRESETS: Dict[str, GameConfig] = {
        "fast": GameConfig(search_depth=2),
        "balanced": GameConfig(),
        "deep": GameConfig(search_depth=4),
    }

    @classmethod
    def resolve(cls, preset: str) -> GameConfig:
        if preset not in cls.PRESETS:
            raise ValueError(f"Unknown preset '{preset}'")
        return cls.PRESETS[preset].clamp()


__all__ = ["ConfigRegistry", "GameConfig"]
