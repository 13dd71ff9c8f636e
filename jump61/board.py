"""Board model for Jump61.

The :class:`Board` keeps every mutation on an explicit log so that the search
can push a move, look ahead and pop it again without copying the grid. The
log stores the previous state of each cell a move touched, which makes
:meth:`Board.undo` an exact inverse of :meth:`Board.add_spot` regardless of
how far the cascade spread.
"""
from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class Color(Enum):
    RED = "red"
    BLUE = "blue"

    def opposite(self) -> "Color":
        return Color.BLUE if self is Color.RED else Color.RED

    def capitalized(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: str) -> "Color":
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown color '{text}'") from None

    def __str__(self) -> str:
        return self.capitalized()


# (moves before the call, {cell index: (owner, spots)} before the call)
_LogEntry = Tuple[int, Dict[int, Tuple[Optional[Color], int]]]


class Board:
    """Mutable N x N Jump61 board.

    Cells are addressed either by row-major index ``0 .. N*N - 1`` or by
    1-based ``(row, col)`` pairs, the latter being what players type.
    """

    def __init__(self, size: int = 6) -> None:
        self._size = 0
        self._owners: List[Optional[Color]] = []
        self._spots: List[int] = []
        self._neighbors: List[Tuple[int, ...]] = []
        self._cell_counts: Dict[Color, int] = {}
        self._spot_totals: Dict[Color, int] = {}
        self._log: List[_LogEntry] = []
        self.moves = 0
        self.clear(size)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self._size

    def index(self, r: int, c: int) -> int:
        return (r - 1) * self._size + (c - 1)

    def row(self, n: int) -> int:
        return n // self._size + 1

    def col(self, n: int) -> int:
        return n % self._size + 1

    def exists(self, r: int, c: int) -> bool:
        return 1 <= r <= self._size and 1 <= c <= self._size

    def neighbors(self, n: int) -> int:
        """Number of orthogonal neighbors of cell ``n``, which is also its capacity."""

        return len(self._neighbors[n])

    def neighbor_indices(self, n: int) -> Tuple[int, ...]:
        return self._neighbors[n]

    def _compute_neighbors(self) -> None:
        size = self._size
        self._neighbors = []
        for n in range(size * size):
            r, c = divmod(n, size)
            adjacent = []
            for dr, dc in ((-1, 0), (0, -1), (0, 1), (1, 0)):
                nr, nc = r + dr, c + dc
                if 0 <= nr < size and 0 <= nc < size:
                    adjacent.append(nr * size + nc)
            self._neighbors.append(tuple(adjacent))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def owner(self, n: int) -> Optional[Color]:
        return self._owners[n]

    def spots(self, n: int) -> int:
        return self._spots[n]

    def material(self, color: Color) -> int:
        """Total number of spots currently owned by ``color``."""

        return self._spot_totals[color]

    def cells(self, color: Color) -> int:
        """Number of cells currently owned by ``color``."""

        return self._cell_counts[color]

    def whose_move(self) -> Color:
        return Color.RED if self.moves % 2 == 0 else Color.BLUE

    def is_legal(self, color: Color, n: int, c: Optional[int] = None) -> bool:
        """Return ``True`` if ``color`` may add a spot to the cell.

        Accepts either a cell index or a ``(row, col)`` pair.
        """

        if c is not None:
            if not self.exists(n, c):
                return False
            n = self.index(n, c)
        owner = self._owners[n]
        return owner is None or owner is color

    def legal_cells(self, color: Color) -> List[int]:
        return [n for n in range(self._size * self._size) if self.is_legal(color, n)]

    def can_move(self, color: Color) -> bool:
        if self.winner() is not None:
            return False
        return any(self.is_legal(color, n) for n in range(self._size * self._size))

    def winner(self) -> Optional[Color]:
        """Return the color owning every occupied cell, if any.

        The very first move is never a win: both sides need a chance to place
        a spot before territory can be decided.
        """

        if self.moves < 2:
            return None
        red = self._cell_counts[Color.RED]
        blue = self._cell_counts[Color.BLUE]
        if red and not blue:
            return Color.RED
        if blue and not red:
            return Color.BLUE
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def _assign(self, n: int, owner: Optional[Color], spots: int) -> None:
        previous = self._owners[n]
        if previous is not None:
            self._cell_counts[previous] -= 1
            self._spot_totals[previous] -= self._spots[n]
        if spots == 0:
            owner = None
        self._owners[n] = owner
        self._spots[n] = spots
        if owner is not None:
            self._cell_counts[owner] += 1
            self._spot_totals[owner] += spots

    def add_spot(self, color: Color, n: int, c: Optional[int] = None) -> None:
        """Add a spot for ``color`` and resolve the resulting cascade."""

        if c is not None:
            n = self.index(n, c)
        if not self.is_legal(color, n):
            raise ValueError(f"illegal move for {color}: {self.row(n)} {self.col(n)}")

        touched: Dict[int, Tuple[Optional[Color], int]] = {}
        self._log.append((self.moves, touched))

        def touch(i: int) -> None:
            if i not in touched:
                touched[i] = (self._owners[i], self._spots[i])

        touch(n)
        self._assign(n, color, self._spots[n] + 1)
        self.moves += 1

        # One queue entry per spot landing on a full cell, so a cell that
        # fills again before it is popped explodes once per entry.
        pending = deque()
        if self._spots[n] >= self.neighbors(n):
            pending.append(n)
        opponent = color.opposite()
        while pending:
            i = pending.popleft()
            capacity = self.neighbors(i)
            if self._spots[i] < capacity:
                continue
            self._assign(i, color, self._spots[i] - capacity)
            for j in self._neighbors[i]:
                touch(j)
                self._assign(j, color, self._spots[j] + 1)
                if self._spots[j] >= self.neighbors(j):
                    pending.append(j)
            if self._cell_counts[opponent] == 0:
                break

    def undo(self) -> None:
        """Reverse the most recent :meth:`add_spot` still on the log."""

        if not self._log:
            raise IndexError("undo with empty move log")
        moves, touched = self._log.pop()
        for n, (owner, spots) in touched.items():
            self._assign(n, owner, spots)
        self.moves = moves

    @contextmanager
    def simulate(self, color: Color, n: int) -> Iterator["Board"]:
        """Apply ``add_spot`` for the duration of a ``with`` block."""

        self.add_spot(color, n)
        try:
            yield self
        finally:
            self.undo()

    @property
    def history_depth(self) -> int:
        return len(self._log)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def clear(self, size: Optional[int] = None) -> None:
        """Reset to an empty board, optionally resizing it, with move 1 next."""

        if size is None:
            size = self._size
        if size < 2:
            raise ValueError("board size must be at least 2")
        if size != self._size:
            self._size = size
            self._compute_neighbors()
        self._owners = [None] * (size * size)
        self._spots = [0] * (size * size)
        self._cell_counts = {Color.RED: 0, Color.BLUE: 0}
        self._spot_totals = {Color.RED: 0, Color.BLUE: 0}
        self._log = []
        self.moves = 0

    def set(self, r: int, c: int, spots: int, color: Optional[Color]) -> None:
        """Place ``spots`` spots of ``color`` on ``(r, c)``; 0 spots empties it."""

        if not self.exists(r, c):
            raise ValueError(f"square {r} {c} does not exist")
        n = self.index(r, c)
        if spots < 0 or spots >= self.neighbors(n):
            raise ValueError("spots must be less than the number of neighbors")
        if spots > 0 and color is None:
            raise ValueError("occupied squares need a color")
        self._assign(n, color, spots)
        self._log = []

    def set_moves(self, number: int) -> None:
        """Make ``number`` the number of the next move."""

        if number < 1:
            raise ValueError("move number must be positive")
        self.moves = number - 1
        self._log = []

    def copy(self) -> "Board":
        """Return an independent board with the same cells and no move log."""

        clone = Board.__new__(Board)
        clone._size = self._size
        clone._owners = list(self._owners)
        clone._spots = list(self._spots)
        clone._neighbors = self._neighbors
        clone._cell_counts = dict(self._cell_counts)
        clone._spot_totals = dict(self._spot_totals)
        clone._log = []
        clone.moves = self.moves
        return clone

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------
    def cell_text(self, n: int) -> str:
        owner = self._owners[n]
        if owner is None:
            return "--"
        return f"{self._spots[n]}{owner.value[0]}"

    def __str__(self) -> str:
        lines = ["==="]
        for r in range(self._size):
            cells = (self.cell_text(r * self._size + c) for c in range(self._size))
            lines.append("    " + " ".join(cells))
        lines.append("===")
        return "\n".join(lines) + "\n"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._size == other._size
            and self.moves == other.moves
            and self._owners == other._owners
            and self._spots == other._spots
        )

    __hash__ = None  # type: ignore[assignment]


__all__ = ["Board", "Color"]
