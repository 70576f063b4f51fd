import logging
import os
from dataclasses import dataclass
from typing import Optional

from .bot import Difficulty

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

BOT_DELAY_MS = 500                      # bot "thinking" pause after a human move
DEFAULT_DIFFICULTY = Difficulty.BEGINNER
LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENV_BOT_DELAY = "TICTACTOE_BOT_DELAY_MS"
ENV_DIFFICULTY = "TICTACTOE_DIFFICULTY"
ENV_LOG_LEVEL = "TICTACTOE_LOG_LEVEL"


def parse_delay(value):
    """
    non-negative int milliseconds
    """
    try:
        ms = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"bot delay must be an integer, got {value!r}") from None
    if ms < 0:
        raise ValueError(f"bot delay must be >= 0, got {ms}")
    return ms


def parse_log_level(value):
    # accept names like "debug" or numeric levels
    text = str(value).strip().upper()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text)
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {value!r}")
    return level


@dataclass
class Settings:
    """
    runtime settings; environment first, command line on top

    difficulty is None unless one was configured; a configured
    difficulty starts the app straight into a bot game.
    """
    bot_delay_ms: int = BOT_DELAY_MS
    difficulty: Optional[Difficulty] = None
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        settings = cls(log_level=parse_log_level(LOG_LEVEL))
        if env.get(ENV_BOT_DELAY):
            settings.bot_delay_ms = parse_delay(env[ENV_BOT_DELAY])
        if env.get(ENV_DIFFICULTY):
            settings.difficulty = Difficulty.parse(env[ENV_DIFFICULTY])
        if env.get(ENV_LOG_LEVEL):
            settings.log_level = parse_log_level(env[ENV_LOG_LEVEL])
        return settings
