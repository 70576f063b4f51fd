import logging

from ..bot import Difficulty
from ..config import BOT_DELAY_MS
from ..controller import GameController, GameMode
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QMessageBox,
    QSizePolicy, QStackedWidget
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, Slot

logger = logging.getLogger(__name__)

MODE_PAGE, GAME_PAGE = 0, 1


class TicTacToeWindow(QMainWindow):
    """
    main window: mode selection, board, status + controls
    """
    def __init__(self, controller=None, bot_delay_ms=BOT_DELAY_MS):
        """
        init controller, ui widgets, signals
        """
        super().__init__()
        self.controller = controller or GameController(bot_delay_ms=bot_delay_ms, parent=self)
        self.board_widget = BoardWidget(self.controller, parent=self)

        self._setup_ui()
        self.controller.status_changed.connect(self._update_message)
        self.controller.game_finished.connect(self._on_game_finished)
        self.board_widget.cell_clicked.connect(self.controller.play)
        self._show_mode_page()

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic-Tac-Toe")
        self.setStyleSheet("""
            QMainWindow { background-color: #111; }
            QLabel#title { color: white; }
            QPushButton#mode { background-color: #2e7d32; color: white;
                               border-radius: 10px; padding: 10px; min-width: 200px; }
            QPushButton#action { background-color: #1565c0; color: white;
                                 border-radius: 10px; padding: 8px 14px; }
            QPushButton:disabled { background-color: #444; color: #888; }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        title = QLabel("Tic-Tac-Toe"); title.setObjectName("title")
        f = QFont(); f.setPointSize(24); f.setBold(True); title.setFont(f)
        title.setAlignment(Qt.AlignCenter)
        self.main_layout.addWidget(title)

        self.pages = QStackedWidget()
        self.pages.addWidget(self._create_mode_page())
        self.pages.addWidget(self._create_game_page())
        self.main_layout.addWidget(self.pages, 1)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        self.reset_action = QAction("Reset Game", self)
        self.reset_action.triggered.connect(self.reset_game)
        self.change_mode_action = QAction("Change Mode", self)
        self.change_mode_action.triggered.connect(self.change_mode)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (self.reset_action, self.change_mode_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_mode_page(self):
        '''friend / bot buttons'''
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.addStretch(1)
        self.friend_button = QPushButton("Play with Friend"); self.friend_button.setObjectName("mode")
        self.friend_button.clicked.connect(self.start_friend_game)
        self.bot_button = QPushButton("Play with Bot"); self.bot_button.setObjectName("mode")
        self.bot_button.clicked.connect(self._choose_bot_game)
        for b in (self.friend_button, self.bot_button):
            layout.addWidget(b, alignment=Qt.AlignCenter)
        layout.addStretch(1)
        return page

    def _create_game_page(self):
        # board + status label + reset/change buttons
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.addWidget(self.board_widget, 1)
        bottom = QWidget(); hl = QHBoxLayout(bottom)
        bottom.setStyleSheet("background: transparent;")
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.reset_button = QPushButton("Reset Game"); self.reset_button.setObjectName("action")
        self.reset_button.clicked.connect(self.reset_game)
        self.change_mode_button = QPushButton("Change Mode"); self.change_mode_button.setObjectName("action")
        self.change_mode_button.clicked.connect(self.change_mode)
        hl.addWidget(self.message_label); hl.addStretch(1)
        hl.addWidget(self.reset_button); hl.addWidget(self.change_mode_button)
        layout.addWidget(bottom)
        return page

    def _show_mode_page(self):
        self.pages.setCurrentIndex(MODE_PAGE)
        self.reset_action.setEnabled(False)
        self.change_mode_action.setEnabled(False)

    def _show_game_page(self):
        self.pages.setCurrentIndex(GAME_PAGE)
        self.reset_action.setEnabled(True)
        self.change_mode_action.setEnabled(True)

    def ask_difficulty(self):
        """
        modal picker; returns Difficulty or None on cancel
        """
        box = QMessageBox(self)
        box.setWindowTitle("Select Bot Difficulty")
        box.setText("Select Bot Difficulty")
        choices = {d.label: d for d in Difficulty}
        for label in choices:
            box.addButton(label, QMessageBox.AcceptRole)
        box.addButton(QMessageBox.Cancel)
        box.exec()
        clicked = box.clickedButton()
        return choices.get(clicked.text()) if clicked is not None else None

    @Slot()
    def _choose_bot_game(self):
        difficulty = self.ask_difficulty()
        if difficulty is None:
            return  # cancelled, stay on mode page
        self.start_bot_game(difficulty)

    @Slot()
    def start_friend_game(self):
        self._show_game_page()
        self.controller.start_friend_game()

    def start_bot_game(self, difficulty):
        self._show_game_page()
        self.controller.start_bot_game(difficulty)
        self.setWindowTitle(f"Tic-Tac-Toe - {difficulty.label} Bot")

    @Slot()
    def reset_game(self):
        if self.controller.mode is None:
            return
        self.controller.reset_game()

    @Slot()
    def change_mode(self):
        self.controller.change_mode()
        self.setWindowTitle("Tic-Tac-Toe")
        self._show_mode_page()

    @Slot(str)
    def _update_message(self, text, is_success=False):
        # set message text + style
        style = "color: lime; font-weight: bold;" if is_success else "color: #eee;"
        if self.controller.is_bot_turn() and not is_success:
            style = "color: #8acaff;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)

    @Slot(object)
    def _on_game_finished(self, outcome):
        self._update_message(outcome.describe(), is_success=True)
        if self.controller.mode is GameMode.BOT:
            logger.info("bot game (%s) finished: %s", self.controller.difficulty.label, outcome.describe())

    def closeEvent(self, event):
        # drop pending bot move on close
        self.controller.shutdown()
        event.accept()
