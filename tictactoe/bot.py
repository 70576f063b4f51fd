"""
computer opponent: three difficulty tiers picking a (row, col) for the bot
"""
import logging
import random
from enum import Enum

from .board import BOARD_SIZE, Mark, find_winner, has_line

logger = logging.getLogger(__name__)

WIN_SCORE = 10


class ContractViolation(RuntimeError):
    """
    bot asked to move on a board that is already decided
    """


class Difficulty(Enum):
    BEGINNER = "beginner"
    MODERATE = "moderate"
    ADVANCED = "advanced"

    @property
    def label(self):
        return self.value.capitalize()

    @classmethod
    def parse(cls, text):
        # case-insensitive name or value
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"unknown difficulty {text!r} (choose from {choices})") from None


def _empty_indices(cells):
    return [i for i, m in enumerate(cells) if m is Mark.EMPTY]


def _to_pos(idx):
    return divmod(idx, BOARD_SIZE)


def random_move(cells, rng):
    """
    uniform pick among empty cells, None if full
    """
    empty = _empty_indices(cells)
    if not empty:
        return None
    return _to_pos(rng.choice(empty))


def winning_move(cells, mark):
    """
    first empty cell (row-major) that completes a line for mark
    """
    work = list(cells)
    for idx in _empty_indices(work):
        work[idx] = mark
        won = has_line(work, mark)
        work[idx] = Mark.EMPTY
        if won:
            return _to_pos(idx)
    return None


class _Search:
    """
    depth-adjusted minimax with alpha-beta over a private cell list
    """
    def __init__(self, cells, mark):
        self.cells = list(cells)
        self.mark = mark
        self.opponent = mark.opposite()
        self.nodes = 0

    def score(self, depth, maximizing, alpha, beta):
        self.nodes += 1
        cells = self.cells
        # terminal checks
        if has_line(cells, self.mark):
            return WIN_SCORE - depth
        if has_line(cells, self.opponent):
            return depth - WIN_SCORE
        empty = _empty_indices(cells)
        if not empty:
            return 0

        if maximizing:
            best = -WIN_SCORE - 1
            for idx in empty:
                cells[idx] = self.mark
                val = self.score(depth + 1, False, alpha, beta)
                cells[idx] = Mark.EMPTY
                best = max(best, val)
                alpha = max(alpha, val)
                if beta <= alpha:
                    break  # prune
            return best

        best = WIN_SCORE + 1
        for idx in empty:
            cells[idx] = self.opponent
            val = self.score(depth + 1, True, alpha, beta)
            cells[idx] = Mark.EMPTY
            best = min(best, val)
            beta = min(beta, val)
            if beta <= alpha:
                break  # prune
        return best

    def best_move(self):
        """
        first cell (row-major) reaching the top score
        """
        best_score, best_idx = None, None
        alpha, beta = -WIN_SCORE - 1, WIN_SCORE + 1
        for idx in _empty_indices(self.cells):
            self.cells[idx] = self.mark
            val = self.score(1, False, alpha, beta)
            self.cells[idx] = Mark.EMPTY
            # strict > keeps the first max; pruned values never beat alpha
            if best_score is None or val > best_score:
                best_score, best_idx = val, idx
                alpha = max(alpha, val)
        return best_idx, best_score


def minimax_move(cells, mark):
    """
    optimal move for mark, None if no empty cell
    """
    search = _Search(cells, mark)
    idx, score = search.best_move()
    if idx is None:
        return None
    logger.debug("minimax for %s: %d nodes, best %s scores %d",
                 mark.value, search.nodes, _to_pos(idx), score)
    return _to_pos(idx)


def select_move(board, difficulty, mark=Mark.O, rng=None):
    """
    pick the bot's move for the given tier

    board      -- Board, read only (search runs on a snapshot)
    difficulty -- Difficulty tier
    mark       -- the bot's own mark
    rng        -- random.Random for beginner/moderate picks (module random if None)

    returns (row, col) or None when the board is full.
    raises ContractViolation if the board already has a winner.
    """
    if mark is Mark.EMPTY:
        raise ValueError("bot needs X or O")
    cells = board.snapshot()
    if find_winner(cells) is not None:
        raise ContractViolation("select_move called on a finished game")
    if Mark.EMPTY not in cells:
        return None
    if rng is None:
        rng = random

    if difficulty is Difficulty.BEGINNER:
        move = random_move(cells, rng)
    elif difficulty is Difficulty.MODERATE:
        # complete own line if possible, never block
        move = winning_move(cells, mark) or random_move(cells, rng)
    elif difficulty is Difficulty.ADVANCED:
        move = minimax_move(cells, mark)
    else:
        raise ValueError(f"unknown difficulty: {difficulty!r}")

    logger.debug("%s bot (%s) picks %s", difficulty.label, mark.value, move)
    return move
