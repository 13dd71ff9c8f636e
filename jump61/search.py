"""Game-tree search for the Jump61 automated player.

:class:`MinimaxSearcher` explores moves by mutating a private board and
undoing each step, scoring positions from the point of view of the side to
move (negamax). Pruning uses a single bound handed down by the caller: once a
level finds a reply at least as good as that bound the remaining siblings are
skipped.

The searcher must only ever be given a board that nobody else is using;
:class:`jump61.players.AIPlayer` hands it a fresh copy for every move.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .board import Board, Color


WIN_SCORE = 2**31 - 1

Evaluator = Callable[[Color, Board], int]


@dataclass(frozen=True)
class Move:
    """A candidate move and its score for the player who would make it."""

    index: int
    score: int


def material_difference(color: Color, board: Board) -> int:
    """Static evaluation: spots owned by ``color`` minus the opponent's."""

    return board.material(color) - board.material(color.opposite())


EVALUATORS: Dict[str, Evaluator] = {
    "material": material_difference,
}


def resolve_evaluator(name: str) -> Evaluator:
    if name not in EVALUATORS:
        raise ValueError(f"Unknown evaluator '{name}'")
    return EVALUATORS[name]


class MinimaxSearcher:
    """Depth-bounded negamax searcher.

    Parameters
    ----------
    depth:
        Default search horizon in plies, used when a call does not supply one.
    evaluator:
        Static scoring function applied at the horizon.
    logger:
        Optional sink for one-line search summaries.
    """

    def __init__(
        self,
        depth: int = 3,
        *,
        evaluator: Evaluator = material_difference,
        logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        if depth < 0:
            raise ValueError("search depth must be non-negative")
        self.depth = depth
        self.evaluator = evaluator
        self._logger = logger or (lambda *_: None)
        self.nodes = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def best_moves(self, color: Color, board: Board, depth: Optional[int] = None) -> List[Move]:
        """Return the scored candidates examined at the root, in board order.

        Every legal move visited is listed, including those seen before a
        cutoff; nothing is filtered out. The list is empty if ``color`` has no
        legal move or the game is already decided.
        """

        if depth is None:
            depth = self.depth
        if depth < 0:
            raise ValueError("search depth must be non-negative")
        self.nodes = 0
        moves: List[Move] = []
        self.minmax(color, board, depth, WIN_SCORE, moves)
        return moves

    def best_move(self, color: Color, board: Board, depth: Optional[int] = None) -> Optional[Move]:
        """Return the highest-scoring root move; earlier moves win ties."""

        moves = self.best_moves(color, board, depth)
        if not moves:
            return None
        best = moves[0]
        for move in moves:
            if move.score > best.score:
                best = move
        self._logger(
            f"search {color} depth={self.depth if depth is None else depth} nodes={self.nodes} "
            f"best={board.row(best.index)} {board.col(best.index)} score={best.score}"
        )
        return best

    # ------------------------------------------------------------------
    # Core recursion
    # ------------------------------------------------------------------
    def minmax(self, color: Color, board: Board, depth: int, cutoff: int, moves: List[Move]) -> int:
        """Return the negamax value of ``board`` for ``color``.

        Scored root candidates are appended to ``moves``. ``board`` is left
        exactly as it was found.
        """

        self.nodes += 1
        winner = board.winner()
        if winner is color:
            return WIN_SCORE
        if winner is color.opposite():
            return -WIN_SCORE
        if depth == 0:
            return self.evaluator(color, board)

        best_so_far = -WIN_SCORE
        for n in range(board.size * board.size):
            if not board.is_legal(color, n):
                continue
            with board.simulate(color, n):
                response = self.minmax(color.opposite(), board, depth - 1, -best_so_far, [])
            moves.append(Move(n, -response))
            if -response > best_so_far:
                best_so_far = -response
                if best_so_far >= cutoff:
                    break
        return best_so_far


__all__ = [
    "EVALUATORS",
    "MinimaxSearcher",
    "Move",
    "WIN_SCORE",
    "material_difference",
    "resolve_evaluator",
]
