import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor

from tictactoe.bot import Difficulty
from tictactoe.config import LOG_FORMAT, Settings, parse_delay, parse_log_level
from tictactoe.ui.main_window import TicTacToeWindow

logger = logging.getLogger("tictactoe")

# -----------------------------------------------------------------------------
# COLOR CONSTANTS
# -----------------------------------------------------------------------------

WINDOW_COLOR = QColor(17, 17, 17)
WINDOW_TEXT_COLOR = Qt.white
BASE_COLOR = QColor(35, 35, 35)
ALT_BASE_COLOR = QColor(53, 53, 53)
TEXT_COLOR = Qt.white
BUTTON_COLOR = QColor(66, 66, 66)
BUTTON_TEXT_COLOR = Qt.white
HIGHLIGHT_COLOR = QColor(42, 130, 218)
HIGHLIGHTED_TEXT_COLOR = Qt.white

DISABLED_TEXT_COLOR = QColor(127, 127, 127)

# -----------------------------------------------------------------------------
# PALETTE SETUP
# -----------------------------------------------------------------------------

def apply_default_palette(app: QApplication):
    """
    Apply the dark palette behind the game window.
    """
    palette = QPalette()
    palette.setColor(QPalette.Window, WINDOW_COLOR)
    palette.setColor(QPalette.WindowText, WINDOW_TEXT_COLOR)
    palette.setColor(QPalette.Base, BASE_COLOR)
    palette.setColor(QPalette.AlternateBase, ALT_BASE_COLOR)
    palette.setColor(QPalette.Text, TEXT_COLOR)
    palette.setColor(QPalette.Button, BUTTON_COLOR)
    palette.setColor(QPalette.ButtonText, BUTTON_TEXT_COLOR)
    palette.setColor(QPalette.Highlight, HIGHLIGHT_COLOR)
    palette.setColor(QPalette.HighlightedText, HIGHLIGHTED_TEXT_COLOR)
    # Disabled roles
    palette.setColor(QPalette.Disabled, QPalette.Text, DISABLED_TEXT_COLOR)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, DISABLED_TEXT_COLOR)
    palette.setColor(QPalette.Disabled, QPalette.WindowText, DISABLED_TEXT_COLOR)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# COMMAND LINE
# -----------------------------------------------------------------------------

def _cli_type(parse):
    """
    wrap a config parser so argparse shows its message
    """
    def convert(text):
        try:
            return parse(text)
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e)) from None
    convert.__name__ = parse.__name__
    return convert


def build_parser():
    parser = argparse.ArgumentParser(description="Tic-Tac-Toe against a friend or the computer")
    parser.add_argument("--log-level", type=_cli_type(parse_log_level),
                        help="logging level, e.g. DEBUG or INFO")
    parser.add_argument("--bot-delay-ms", type=_cli_type(parse_delay),
                        help="pause before the bot answers (milliseconds)")
    parser.add_argument("--difficulty", type=_cli_type(Difficulty.parse),
                        help="start straight into a bot game: beginner, moderate or advanced")
    return parser


def load_settings(argv=None):
    """
    environment settings with command line flags on top
    """
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    if args.log_level is not None: settings.log_level = args.log_level
    if args.bot_delay_ms is not None: settings.bot_delay_ms = args.bot_delay_ms
    if args.difficulty is not None: settings.difficulty = args.difficulty
    # difficulty from either source starts a bot game
    return settings, settings.difficulty is not None

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def create_window(settings, start_bot=False):
    """
    game window, already in a bot game when a difficulty was configured
    """
    window = TicTacToeWindow(bot_delay_ms=settings.bot_delay_ms)
    if start_bot:
        window.start_bot_game(settings.difficulty)
    window.resize(420, 560)
    return window


def run(argv=None):
    settings, start_bot = load_settings(argv)
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logger.info("starting (bot delay %d ms)", settings.bot_delay_ms)

    app = QApplication(sys.argv[:1])
    app.setStyle('Fusion')
    apply_default_palette(app)

    window = create_window(settings, start_bot)
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(run())
