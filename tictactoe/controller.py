import logging
from enum import Enum

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from .board import Board, IllegalMove, Mark
from .bot import select_move
from .config import BOT_DELAY_MS, DEFAULT_DIFFICULTY

logger = logging.getLogger(__name__)


class GameMode(Enum):
    FRIEND = "friend"
    BOT = "bot"


class GameController(QObject):
    """
    owns the live board, alternates turns, drives the delayed bot reply
    """
    board_changed = Signal()
    status_changed = Signal(str)
    game_finished = Signal(object)   # GameOutcome

    def __init__(self, bot_delay_ms=BOT_DELAY_MS, rng=None, parent=None):
        """
        init empty board on the mode selection screen
        """
        super().__init__(parent)
        self.board = Board()
        self.current_mark = Mark.X       # X always starts
        self.mode = None                 # None until a mode is picked
        self.difficulty = DEFAULT_DIFFICULTY
        self.bot_mark = Mark.O
        self.bot_delay_ms = bot_delay_ms
        self._rng = rng
        # bumped on every reset so a late timer can tell it is stale
        self._epoch = 0
        self._scheduled_epoch = None
        self._bot_timer = QTimer(self)
        self._bot_timer.setSingleShot(True)
        self._bot_timer.timeout.connect(self._on_bot_timer)

    # -- state queries ------------------------------------------------------

    @property
    def epoch(self):
        return self._epoch

    @property
    def outcome(self):
        return self.board.outcome()

    @property
    def game_over(self):
        return self.board.outcome().is_over

    @property
    def bot_pending(self):
        return self._scheduled_epoch is not None

    def is_bot_turn(self):
        return self.mode is GameMode.BOT and self.current_mark is self.bot_mark

    def accepts_input(self):
        """
        true when a human click may place a mark
        """
        return (self.mode is not None and not self.game_over
                and not self.bot_pending and not self.is_bot_turn())

    # -- game lifecycle -----------------------------------------------------

    @Slot()
    def start_friend_game(self):
        self.mode = GameMode.FRIEND
        logger.info("starting two-player game")
        self.reset_game()

    @Slot(object)
    def start_bot_game(self, difficulty):
        self.mode = GameMode.BOT
        self.difficulty = difficulty
        logger.info("starting game against %s bot", difficulty.label)
        self.reset_game()

    @Slot()
    def reset_game(self):
        """
        clear board, X to move, drop any pending bot move
        """
        self._cancel_bot_move()
        self.board.reset()
        self.current_mark = Mark.X
        self.board_changed.emit()
        self.status_changed.emit(self._turn_message())

    @Slot()
    def change_mode(self):
        # back to mode selection with a clean board
        self._cancel_bot_move()
        self.board.reset()
        self.current_mark = Mark.X
        self.mode = None
        logger.info("returned to mode selection")
        self.board_changed.emit()
        self.status_changed.emit("Choose a game mode")

    def shutdown(self):
        self._cancel_bot_move()

    # -- moves --------------------------------------------------------------

    @Slot(int, int)
    def play(self, row, col):
        """
        human move at (row, col); returns True if a mark was placed
        """
        if self.mode is None:
            logger.debug("click ignored: no game mode selected")
            return False
        if self.game_over:
            logger.debug("click ignored: game is over")
            return False
        if self.bot_pending or self.is_bot_turn():
            logger.debug("click ignored: waiting for bot")
            return False
        try:
            self.board.place(row, col, self.current_mark)
        except IllegalMove as e:
            logger.warning("illegal move refused: %s", e)
            return False
        logger.info("%s plays (%d, %d)", self.current_mark.value, row, col)
        self._after_move()
        return True

    def _after_move(self):
        self.board_changed.emit()
        outcome = self.board.outcome()
        if outcome.is_over:
            logger.info("game over: %s", outcome.describe())
            self.status_changed.emit(outcome.describe())
            self.game_finished.emit(outcome)
            return
        self.current_mark = self.current_mark.opposite()
        if self.is_bot_turn():
            self._schedule_bot_move()
        self.status_changed.emit(self._turn_message())

    def _turn_message(self):
        if self.mode is GameMode.BOT:
            if self.is_bot_turn():
                return "Bot is thinking..."
            return f"Your ({self.current_mark.value}) turn"
        return f"Player {self.current_mark.value}'s turn"

    # -- bot scheduling -----------------------------------------------------

    def _schedule_bot_move(self):
        self._scheduled_epoch = self._epoch
        self._bot_timer.start(self.bot_delay_ms)
        logger.debug("bot move scheduled in %d ms (epoch %d)", self.bot_delay_ms, self._epoch)

    def _cancel_bot_move(self):
        # stop the timer and invalidate anything already queued
        if self._bot_timer.isActive():
            self._bot_timer.stop()
            logger.debug("pending bot move cancelled (epoch %d)", self._epoch)
        self._scheduled_epoch = None
        self._epoch += 1

    @Slot()
    def _on_bot_timer(self):
        epoch, self._scheduled_epoch = self._scheduled_epoch, None
        self.play_bot_move(epoch)

    def play_bot_move(self, epoch):
        """
        apply the bot's reply if `epoch` still matches the live game
        """
        if epoch is None or epoch != self._epoch:
            logger.debug("discarding stale bot move (epoch %s, now %d)", epoch, self._epoch)
            return False
        self._bot_timer.stop()
        self._scheduled_epoch = None
        if not self.is_bot_turn() or self.game_over:
            return False
        move = select_move(self.board, self.difficulty, self.bot_mark, self._rng)
        if move is None:
            return False
        row, col = move
        self.board.place(row, col, self.bot_mark)
        logger.info("bot (%s) plays (%d, %d)", self.bot_mark.value, row, col)
        self._after_move()
        return True
