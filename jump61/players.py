"""Players: the two ways a color can choose its moves."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from .board import Board, Color
from .search import MinimaxSearcher, resolve_evaluator

if TYPE_CHECKING:
    from .game import Game


class Player(ABC):
    """A source of moves for one color of a :class:`~jump61.game.Game`."""

    def __init__(self, game: "Game", color: Color) -> None:
        self.game = game
        self.color = color

    @property
    def board(self) -> Board:
        return self.game.board

    @abstractmethod
    def make_move(self) -> bool:
        """Try to make one move on the game board; return ``True`` if one was made."""
        ...


class HumanPlayer(Player):
    """Plays whatever move was last entered for the game."""

    def make_move(self) -> bool:
        if self.board.whose_move() is not self.color:
            return False
        move = self.game.get_move()
        if move is None:
            return False
        r, c = move
        self.game.make_move(r, c)
        return True


class AIPlayer(Player):
    """Chooses moves with :class:`MinimaxSearcher` on a private copy of the board."""

    def __init__(
        self,
        game: "Game",
        color: Color,
        *,
        searcher: Optional[MinimaxSearcher] = None,
    ) -> None:
        super().__init__(game, color)
        if searcher is None:
            config = game.config
            searcher = MinimaxSearcher(
                config.search_depth,
                evaluator=resolve_evaluator(config.evaluator),
                logger=game._log_debug,
            )
        self.searcher = searcher

    def make_move(self) -> bool:
        board = self.board
        if board.whose_move() is not self.color or not board.can_move(self.color):
            return False
        best = self.searcher.best_move(self.color, board.copy())
        if best is None:
            return False
        self.game.message(
            f"{self.color.capitalized()} moves {board.row(best.index)} {board.col(best.index)}."
        )
        self.game.make_move(best.index)
        return True


__all__ = ["AIPlayer", "HumanPlayer", "Player"]
