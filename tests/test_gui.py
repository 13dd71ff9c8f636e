import io
import sys

import pytest

pytest.importorskip("PySide6")

from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication, QLabel, QPushButton

from jump61.board import Color
from jump61.config import GameConfig
from jump61.game import Game
from jump61.gui import Jump61Window

pytestmark = pytest.mark.gui


@pytest.fixture(scope="session")
def app():
    """Provide a single QApplication for all GUI tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    app.quit()


@pytest.fixture
def window(app):
    game = Game(io.StringIO(), io.StringIO(), io.StringIO(), config=GameConfig(board_size=3, search_depth=1))
    window = Jump61Window(game, dev=True)
    window.show()
    QTest.qWait(50)
    yield window
    window.close()
    QTest.qWait(50)


def _button_with_text(window: Jump61Window, text: str) -> QPushButton:
    for button in window.findChildren(QPushButton):
        if button.text() == text:
            return button
    raise AssertionError(f"Button with text '{text}' not found")


def test_window_layout(window):
    assert window.windowTitle() == "Jump61"
    assert isinstance(window.turn_indicator, QLabel)
    assert len(window.cells) == 9
    assert window.turn_indicator.text() == "Game stopped"
    for text in ("Start", "Clear", "Dump"):
        _button_with_text(window, text)


def test_click_plays_move_and_shows_reply(window):
    _button_with_text(window, "Start").click()
    assert window.turn_indicator.text() == "Red's turn"

    window.cells[(1, 1)].click()
    board = window.game.board
    assert board.owner(0) is Color.RED
    assert board.owner(1) is Color.BLUE
    assert window.cells[(1, 2)].text() == "1"
    assert window.info_indicator.text() == "Blue moves 1 2."


def test_click_without_game_reports_error(window):
    window.cells[(2, 2)].click()
    assert window.info_indicator.text() == "no game in progress."
    assert window.game.board.moves == 0
