"""Session logic for Jump61: the command interpreter and the turn loop.

A :class:`Game` owns the single live :class:`~jump61.board.Board` of a
session together with one :class:`~jump61.players.Player` per color. Moves
typed by the user are parked as the pending move and :meth:`Game.advance`
then hands the turn from player to player until someone has to wait for
input, cannot move, or the game is won.
"""
from __future__ import annotations

import sys
from typing import Callable, Dict, List, Optional, TextIO, Tuple

from .board import Board, Color
from .config import MAX_BOARD_SIZE, MIN_BOARD_SIZE, GameConfig
from .players import AIPlayer, HumanPlayer, Player
from .utils import debug_text

VERSION = "Jump61 1.0"

HELP_TEXT = """\
Commands:
  R C               Add a spot to row R, column C (1-based).
  start             Start or resume play.
  clear             Stop play and empty the board.
  size N            Stop play and empty the board at size N x N.
  move N            Stop play and make move N the next move.
  set R C N COLOR   Stop play and put N spots of COLOR on row R, column C.
  auto COLOR        Let the computer play COLOR.
  manual COLOR      Take COLOR's moves from input.
  dump              Print the board.
  debug on|off      Toggle search tracing.
  help              Print this message.
  quit              Leave the program.
"""


class GameError(Exception):
    """A user error; it is reported and the session carries on."""


class Game:
    """A session of Jump61 reading commands from ``inp``.

    Normal output goes to ``out`` and error reports to ``err``. Prompts are
    only written when a ``prompts`` stream is given.
    """

    def __init__(
        self,
        inp: Optional[TextIO] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        *,
        prompts: Optional[TextIO] = None,
        config: Optional[GameConfig] = None,
        debug: bool = False,
    ) -> None:
        self.inp = inp if inp is not None else sys.stdin
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.prompts = prompts
        self.config = (config or GameConfig()).clamp()
        self.debug = debug

        self.board = Board(self.config.board_size)
        self.playing = False
        self.running = True
        self._pending: Optional[Tuple[int, int]] = None
        self._listeners: List[Callable[[str], None]] = []

        self.players: Dict[Color, Player] = {
            Color.RED: HumanPlayer(self, Color.RED),
            Color.BLUE: AIPlayer(self, Color.BLUE),
        }

        self.dispatch_table: Dict[str, Callable[[str], None]] = {
            "start": self.handle_start,
            "clear": self.handle_clear,
            "size": self.handle_size,
            "move": self.handle_move_number,
            "set": self.handle_set,
            "auto": self.handle_auto,
            "manual": self.handle_manual,
            "dump": self.handle_dump,
            "debug": self.handle_debug,
            "help": self.handle_help,
            "quit": self.handle_quit,
        }

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def _log_debug(self, message: str) -> None:
        if not self.debug:
            return
        for line in message.splitlines():
            print(debug_text(line), file=self.err)

    def add_listener(self, listener: Callable[[str], None]) -> None:
        """Register a callback that receives every message sent to the user."""

        self._listeners.append(listener)

    def message(self, text: str) -> None:
        print(text, file=self.out)
        for listener in self._listeners:
            listener(text)

    def report_error(self, text: str) -> None:
        print(f"Error: {text}", file=self.err)

    # ------------------------------------------------------------------
    # Session loop
    # ------------------------------------------------------------------
    def play(self) -> int:
        """Run commands until EOF or ``quit``; return the exit code."""

        print(f"Welcome to {VERSION}", file=self.out)
        while self.running:
            self._prompt()
            line = self.inp.readline()
            if not line:
                break
            try:
                self.execute(line)
            except GameError as exc:
                self.report_error(str(exc))
            finally:
                self.out.flush()
        return 0

    def _prompt(self) -> None:
        if self.prompts is None:
            return
        if self.playing:
            self.prompts.write(f"{self.board.whose_move()}> ")
        else:
            self.prompts.write("> ")
        self.prompts.flush()

    def execute(self, line: str) -> None:
        """Run one command line, raising :class:`GameError` on bad input."""

        command = line.strip()
        if not command or command.startswith("#"):
            return
        parts = command.split(None, 1)
        name = parts[0]
        args = parts[1] if len(parts) > 1 else ""
        if _is_integer(name):
            self.handle_move(command)
            return
        handler = self.dispatch_table.get(name.lower())
        if handler is None:
            raise GameError(f"bad command: '{name}'")
        handler(args)

    # ------------------------------------------------------------------
    # Turn coordination
    # ------------------------------------------------------------------
    def get_move(self) -> Optional[Tuple[int, int]]:
        """Hand out the pending entered move, if any, consuming it."""

        move = self._pending
        self._pending = None
        return move

    def submit_move(self, r: int, c: int) -> None:
        """Record an entered move for the player to move and let play continue."""

        if not self.playing:
            raise GameError("no game in progress.")
        if not self.board.exists(r, c):
            raise GameError(f"move {r} {c} out of bounds")
        self._pending = (r, c)
        try:
            self.advance()
        finally:
            self._pending = None

    def advance(self) -> None:
        """Activate players in turn until one of them does not move."""

        while self.playing and self.board.winner() is None:
            player = self.players[self.board.whose_move()]
            if not player.make_move():
                break

    def make_move(self, r: int, c: Optional[int] = None) -> None:
        """Add a spot for the side to move at ``(r, c)`` or at cell index ``r``."""

        board = self.board
        if c is None:
            r, c = board.row(r), board.col(r)
        color = board.whose_move()
        if not board.is_legal(color, r, c):
            raise GameError(f"invalid move: {r} {c}")
        board.add_spot(color, board.index(r, c))
        self._log_debug(
            f"{color} played {r} {c}; "
            f"red={board.material(Color.RED)} blue={board.material(Color.BLUE)}"
        )
        self.check_for_win()

    def check_for_win(self) -> None:
        winner = self.board.winner()
        if self.playing and winner is not None:
            self.message(f"{winner.capitalized()} wins.")
            self.playing = False

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------
    def handle_move(self, args: str) -> None:
        r, c = _parse_ints(args, 2)
        self.submit_move(r, c)

    def handle_start(self, _: str) -> None:
        self.playing = True
        self.check_for_win()
        self.advance()

    def handle_clear(self, _: str) -> None:
        self.playing = False
        self.board.clear()

    def handle_size(self, args: str) -> None:
        (size,) = _parse_ints(args, 1)
        if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            raise GameError(f"size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}")
        self.playing = False
        self.board.clear(size)

    def handle_move_number(self, args: str) -> None:
        (number,) = _parse_ints(args, 1)
        if number == 0:
            raise GameError("syntax error.")
        self.playing = False
        self.board.set_moves(number)

    def handle_set(self, args: str) -> None:
        tokens = args.split()
        if len(tokens) != 4:
            raise GameError("syntax error.")
        r, c, spots = _parse_ints(" ".join(tokens[:3]), 3)
        color = _parse_color(tokens[3])
        if not self.board.exists(r, c):
            raise GameError(f"square {r} {c} out of bounds")
        if spots >= self.board.neighbors(self.board.index(r, c)):
            raise GameError("spots must be less than the number of neighbors")
        self.playing = False
        self.board.set(r, c, spots, color)

    def handle_auto(self, args: str) -> None:
        color = _parse_color(args)
        self.playing = False
        self.players[color] = AIPlayer(self, color)
        self._log_debug(f"{color} is now played by the computer")

    def handle_manual(self, args: str) -> None:
        color = _parse_color(args)
        self.playing = False
        self.players[color] = HumanPlayer(self, color)
        self._log_debug(f"{color} now takes moves from input")

    def handle_dump(self, _: str) -> None:
        print(self.board, end="", file=self.out)

    def handle_debug(self, args: str) -> None:
        setting = args.strip().lower()
        if setting == "on":
            self.debug = True
        elif setting == "off":
            self.debug = False
        else:
            raise GameError("Invalid debug setting. Use 'on' or 'off'.")
        self._log_debug(f"Debug:{self.debug}")

    def handle_help(self, _: str) -> None:
        print(HELP_TEXT, end="", file=self.out)

    def handle_quit(self, _: str) -> None:
        self.playing = False
        self.running = False


def _is_integer(token: str) -> bool:
    return token.lstrip("-").isdigit()


def _parse_ints(args: str, count: int) -> List[int]:
    tokens = args.split()
    if len(tokens) != count or not all(_is_integer(token) for token in tokens):
        raise GameError("syntax error.")
    values = [int(token) for token in tokens]
    if any(value < 0 for value in values):
        raise GameError("syntax error.")
    return values


def _parse_color(text: str) -> Color:
    name = text.strip().lower()
    name = {"r": "red", "b": "blue"}.get(name, name)
    try:
        return Color.parse(name)
    except ValueError:
        raise GameError("syntax error.") from None


__all__ = ["Game", "GameError", "HELP_TEXT", "VERSION"]
