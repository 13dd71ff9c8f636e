"""Public package interface for Jump61."""

from .board import Board, Color
from .config import ConfigRegistry, GameConfig
from .game import Game, GameError
from .players import AIPlayer, HumanPlayer, Player
from .search import (
    EVALUATORS,
    MinimaxSearcher,
    Move,
    WIN_SCORE,
    material_difference,
)

__all__ = [
    "AIPlayer",
    "Board",
    "Color",
    "ConfigRegistry",
    "EVALUATORS",
    "Game",
    "GameConfig",
    "GameError",
    "HumanPlayer",
    "MinimaxSearcher",
    "Move",
    "Player",
    "WIN_SCORE",
    "material_difference",
]
