import io

import pytest

from jump61.board import Color
from jump61.config import GameConfig
from jump61.game import HELP_TEXT, VERSION, Game, GameError
from jump61.players import AIPlayer, HumanPlayer

RED = Color.RED
BLUE = Color.BLUE


def run_session(commands: str, *, size: int = 3, depth: int = 1, **kwargs):
    out, err = io.StringIO(), io.StringIO()
    game = Game(
        io.StringIO(commands),
        out,
        err,
        config=GameConfig(board_size=size, search_depth=depth),
        **kwargs,
    )
    code = game.play()
    return game, code, out.getvalue(), err.getvalue()


def make_game(size: int = 3, depth: int = 1) -> Game:
    return Game(
        io.StringIO(),
        io.StringIO(),
        io.StringIO(),
        config=GameConfig(board_size=size, search_depth=depth),
    )


def test_play_reports_errors_and_stops_at_quit() -> None:
    game, code, out, err = run_session(
        "# comment line\n"
        "\n"
        "set 1 1 1 red\n"
        "dump\n"
        "bogus\n"
        "1 1\n"
        "quit\n"
        "dump\n"
    )
    assert code == 0
    assert out.splitlines()[0] == f"Welcome to {VERSION}"
    assert out.count("===") == 2
    assert "    1r -- --" in out
    assert "Error: bad command: 'bogus'" in err
    assert "Error: no game in progress." in err
    assert game.running is False


def test_human_move_gets_machine_reply() -> None:
    game = make_game()
    game.execute("start")
    assert game.playing is True
    assert game.board.moves == 0

    game.execute("1 1")
    assert game.out.getvalue() == "Blue moves 1 2.\n"
    assert game.board.owner(0) is RED
    assert game.board.owner(1) is BLUE
    assert game.board.whose_move() is RED


def test_illegal_and_out_of_range_moves_do_not_advance() -> None:
    game = make_game()
    game.execute("start")
    game.execute("1 1")

    with pytest.raises(GameError, match="invalid move: 1 2"):
        game.execute("1 2")
    with pytest.raises(GameError, match="move 4 4 out of bounds"):
        game.execute("4 4")
    assert game.board.moves == 2
    assert game.board.whose_move() is RED
    assert game.get_move() is None


def test_winning_move_is_announced_and_ends_play() -> None:
    game, _, out, err = run_session(
        "size 2\n"
        "manual blue\n"
        "set 1 1 1 red\n"
        "set 1 2 1 b\n"
        "move 3\n"
        "start\n"
        "1 1\n"
        "2 2\n",
        size=2,
    )
    assert "Red wins." in out
    assert game.playing is False
    assert game.board.winner() is RED
    assert "Error: no game in progress." in err


def test_start_on_decided_board_announces_winner() -> None:
    game = make_game()
    game.execute("set 2 2 1 blue")
    game.execute("move 3")
    game.execute("start")
    assert game.out.getvalue() == "Blue wins.\n"
    assert game.playing is False


def test_machine_against_machine_plays_to_the_end() -> None:
    game, _, out, _ = run_session("auto red\nstart\ndump\n")
    winner = game.board.winner()
    assert winner is not None
    assert f"{winner.capitalized()} wins." in out
    assert "Red moves 1 1." in out
    assert game.playing is False


def test_auto_and_manual_replace_players() -> None:
    game = make_game()
    game.execute("start")
    original = game.players[RED]

    game.execute("auto RED")
    assert isinstance(game.players[RED], AIPlayer)
    assert game.players[RED] is not original
    assert game.playing is False

    game.execute("manual blue")
    assert isinstance(game.players[BLUE], HumanPlayer)


def test_board_editing_commands() -> None:
    game = make_game()
    game.execute("size 4")
    assert game.board.size == 4

    game.execute("set 2 2 3 blue")
    assert game.board.spots(game.board.index(2, 2)) == 3

    game.execute("move 2")
    assert game.board.whose_move() is BLUE

    game.execute("clear")
    assert game.board.size == 4
    assert game.board.material(BLUE) == 0


@pytest.mark.parametrize(
    "command, message",
    [
        ("size x", "syntax error."),
        ("size 1", "size must be between"),
        ("move 0", "syntax error."),
        ("set 1 1 2 red", "spots must be less than the number of neighbors"),
        ("set 9 9 1 red", "square 9 9 out of bounds"),
        ("set 1 1 1 green", "syntax error."),
        ("auto", "syntax error."),
        ("1", "syntax error."),
        ("debug maybe", "Invalid debug setting"),
    ],
)
def test_bad_arguments_raise_game_error(command: str, message: str) -> None:
    game = make_game()
    with pytest.raises(GameError, match=message):
        game.execute(command)


def test_debug_traces_search_on_error_stream() -> None:
    _, _, out, err = run_session("debug on\nstart\n2 2\n")
    assert "Blue moves" in out
    assert "search Blue depth=1 nodes=" in err
    assert "DEBUG" in err


def test_help_and_prompts() -> None:
    prompts = io.StringIO()
    _, _, out, _ = run_session("help\nstart\n", prompts=prompts)
    assert HELP_TEXT in out
    assert prompts.getvalue() == "> > Red> "


def test_listeners_receive_messages() -> None:
    game = make_game()
    received = []
    game.add_listener(received.append)
    game.execute("start")
    game.execute("3 3")
    assert received == ["Blue moves 1 1."]


def test_first_move_on_saturated_board_returns_control() -> None:
    game, _, out, err = run_session(
        "size 2\n"
        "set 1 1 1 red\n"
        "set 1 2 1 red\n"
        "set 2 1 1 red\n"
        "set 2 2 1 red\n"
        "start\n"
        "1 1\n"
        "dump\n",
        size=2,
    )
    assert err == ""
    assert "Blue moves 1 1." in out
    assert out.endswith("===\n    1b 2r\n    2r 1r\n===\n")
    assert game.board.moves == 2
    assert game.playing is True
