# GUI
import sys

from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QFont, QColor, QPalette
from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QWidget,
    QGridLayout,
    QPushButton,
    QLabel,
    QVBoxLayout,
    QHBoxLayout,
)

from . import utils
from .board import Color
from .game import Game, GameError


CELL_STYLE = {
    "empty": "#2b3038",
    Color.RED: "#c0392b",
    Color.BLUE: "#2e5fa8",
    "text": "#f5f7fb",
}


class Jump61Window(QMainWindow):
    def __init__(self, game, dev=False):
        super().__init__()
        self.game = game
        self.dev = dev
        self.cell_font = QFont("Segoe UI", 18)
        self.control_button_font = QFont("Segoe UI", 11)
        self.apply_theme()
        self.game.add_listener(self.show_message)
        print(utils.info_text("Starting Game..."))
        if self.dev:
            print(utils.debug_text("Debug Mode ENABLED"))
        self.init_ui()

    def apply_theme(self):
        app = QApplication.instance()
        if app and app.style().objectName().lower() != "fusion":
            QApplication.setStyle("Fusion")

        palette = QPalette()
        palette.setColor(QPalette.Window, QColor("#1c1f24"))
        palette.setColor(QPalette.WindowText, QColor("#f5f7fb"))
        palette.setColor(QPalette.Button, QColor("#2b3038"))
        palette.setColor(QPalette.ButtonText, QColor("#f5f7fb"))

        if app:
            app.setPalette(palette)

        self.setStyleSheet(
            """
            QMainWindow { background-color: #1c1f24; }
            QLabel#turnIndicator { font-size: 22px; font-weight: 600; letter-spacing: 0.8px; }
            QLabel#infoIndicator { color: #b0b7c3; font-size: 13px; }
            QWidget#boardContainer {
                background-color: #171a1f;
                border-radius: 16px;
                padding: 18px;
            }
            QPushButton[panel="control"] {
                background-color: #2d333c;
                color: #f5f7fb;
                border: 1px solid #3a414d;
                border-radius: 8px;
                padding: 8px 16px;
            }
            QPushButton[panel="control"]:hover { background-color: #363d48; }
            """
        )

    def style_control_button(self, button):
        button.setProperty("panel", "control")
        button.setFont(self.control_button_font)
        button.setCursor(Qt.PointingHandCursor)
        button.setFocusPolicy(Qt.NoFocus)
        button.setMinimumWidth(96)

    def init_ui(self):
        self.setWindowTitle("Jump61")
        self.setMinimumSize(480, 560)

        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(24, 24, 24, 24)
        main_layout.setSpacing(20)

        self.turn_indicator = QLabel("")
        self.turn_indicator.setObjectName("turnIndicator")
        self.turn_indicator.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(self.turn_indicator)

        self.info_indicator = QLabel("Press Start to play")
        self.info_indicator.setObjectName("infoIndicator")
        self.info_indicator.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(self.info_indicator)

        self.board_widget = QWidget()
        self.board_widget.setObjectName("boardContainer")
        self.grid_layout = QGridLayout(self.board_widget)
        self.grid_layout.setSpacing(4)
        self.grid_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.addWidget(self.board_widget)
        self.build_cells()

        button_layout = QHBoxLayout()
        button_layout.setSpacing(12)
        main_layout.addLayout(button_layout)

        for text, slot in (
            ("Start", self.start_game),
            ("Clear", self.clear_board),
            ("Dump", self.dump_board),
        ):
            button = QPushButton(text)
            button.clicked.connect(slot)
            self.style_control_button(button)
            button_layout.addWidget(button)

        self.update_board()
        utils.center_on_screen(self)

    def build_cells(self):
        while self.grid_layout.count():
            item = self.grid_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        size = self.game.board.size
        self.cells = {}
        for r in range(1, size + 1):
            for c in range(1, size + 1):
                button = QPushButton("")
                button.setFixedSize(QSize(54, 54))
                button.setFont(self.cell_font)
                button.setCursor(Qt.PointingHandCursor)
                button.setFocusPolicy(Qt.NoFocus)
                button.clicked.connect(lambda _=False, r=r, c=c: self.on_cell_clicked(r, c))
                self.grid_layout.addWidget(button, r - 1, c - 1)
                self.cells[(r, c)] = button

    def update_board(self, info_text=None):
        board = self.game.board
        if len(self.cells) != board.size * board.size:
            self.build_cells()

        for (r, c), button in self.cells.items():
            n = board.index(r, c)
            owner = board.owner(n)
            button.setText(str(board.spots(n)) if owner else "")
            button.setStyleSheet(self.get_cell_style(owner))

        winner = board.winner()
        if winner is not None:
            self.turn_indicator.setText(f"{winner} wins")
        elif self.game.playing:
            self.turn_indicator.setText(f"{board.whose_move()}'s turn")
        else:
            self.turn_indicator.setText("Game stopped")
        if info_text:
            self.info_indicator.setText(info_text)

    def get_cell_style(self, owner):
        background = CELL_STYLE[owner] if owner else CELL_STYLE["empty"]
        return (
            f"background-color: {background}; color: {CELL_STYLE['text']}; "
            f"border-radius: 10px; border: 1px solid rgba(0, 0, 0, 0.2);"
        )

    def show_message(self, text):
        self.info_indicator.setText(text)

    def on_cell_clicked(self, r, c):
        if self.dev:
            print(utils.debug_text(f"Cell {r} {c} clicked"))
        try:
            self.game.submit_move(r, c)
        except GameError as exc:
            print(utils.info_text(f"{r} {c} {utils.color_text('Invalid Move', '31')}: {exc}"))
            self.update_board(info_text=str(exc))
            return
        self.update_board()

    def start_game(self):
        print(utils.info_text("Starting play..."))
        self.game.handle_start("")
        self.update_board()

    def clear_board(self):
        print(utils.info_text("Clearing board..."))
        self.game.handle_clear("")
        self.update_board(info_text="Board cleared")

    def dump_board(self):
        self.game.handle_dump("")


def run(game, dev=False):
    app = QApplication.instance() or QApplication(sys.argv)
    window = Jump61Window(game, dev=dev)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(run(Game(), dev=True))
