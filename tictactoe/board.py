from dataclasses import dataclass
from enum import Enum
from typing import Optional

BOARD_SIZE = 3

# 3 rows, 3 cols, 2 diagonals as flat indices (row * 3 + col)
WINNING_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class IllegalMove(ValueError):
    """
    placement on an occupied or out-of-range cell
    """


class Mark(Enum):
    EMPTY = ""
    X = "X"
    O = "O"

    def opposite(self):
        # EMPTY has no opponent
        if self is Mark.X: return Mark.O
        if self is Mark.O: return Mark.X
        raise ValueError("EMPTY has no opposite mark")

    @classmethod
    def from_symbol(cls, symbol):
        """
        'X' / 'O' or one of ' ', '.', '_', '' for empty
        """
        s = symbol.strip().upper() if symbol else ""
        if s in ("", ".", "_"):
            return cls.EMPTY
        return cls(s)


class OutcomeState(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameOutcome:
    """
    derived result of a board: in progress, win(mark) or draw
    """
    state: OutcomeState
    winner: Optional[Mark] = None

    @classmethod
    def in_progress(cls): return cls(OutcomeState.IN_PROGRESS)

    @classmethod
    def draw(cls): return cls(OutcomeState.DRAW)

    @classmethod
    def win(cls, mark): return cls(OutcomeState.WIN, mark)

    @property
    def is_over(self):
        return self.state is not OutcomeState.IN_PROGRESS

    def describe(self):
        # status line text for the ui
        if self.state is OutcomeState.WIN:
            return f"{self.winner.value} wins!"
        if self.state is OutcomeState.DRAW:
            return "It's a draw!"
        return "Game in progress"


def find_winning_line(cells):
    """
    first line holding three equal non-empty marks, or None
    """
    for line in WINNING_LINES:
        a, b, c = line
        if cells[a] is not Mark.EMPTY and cells[a] is cells[b] is cells[c]:
            return line
    return None


def find_winner(cells) -> Optional[Mark]:
    """
    mark owning a complete line in a 9-cell sequence
    """
    line = find_winning_line(cells)
    return cells[line[0]] if line else None


def has_line(cells, mark) -> bool:
    # three of `mark` on any line
    return any(cells[a] is mark and cells[b] is mark and cells[c] is mark
               for a, b, c in WINNING_LINES)


class Board:
    """
    3x3 grid of marks, row-major
    """
    def __init__(self, cells=None):
        if cells is None:
            cells = [Mark.EMPTY] * (BOARD_SIZE * BOARD_SIZE)
        cells = list(cells)
        if len(cells) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"board needs {BOARD_SIZE * BOARD_SIZE} cells, got {len(cells)}")
        self._cells = cells

    @classmethod
    def from_rows(cls, rows):
        """
        build from three strings like "XO." (' ', '.', '_' are empty)
        """
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"expected {BOARD_SIZE} rows of {BOARD_SIZE} cells")
        return cls(Mark.from_symbol(ch) for row in rows for ch in row)

    @staticmethod
    def _index(row, col):
        if not (isinstance(row, int) and isinstance(col, int)):
            raise IllegalMove(f"cell ({row!r}, {col!r}) needs integer coordinates")
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise IllegalMove(f"cell ({row}, {col}) is off the board")
        return row * BOARD_SIZE + col

    def get(self, row, col) -> Mark:
        return self._cells[self._index(row, col)]

    def __getitem__(self, pos):
        row, col = pos
        return self.get(row, col)

    def place(self, row, col, mark) -> None:
        """
        put mark on an empty cell; raises IllegalMove without touching the board
        """
        idx = self._index(row, col)
        if mark is Mark.EMPTY:
            raise IllegalMove("cannot place an empty mark")
        if self._cells[idx] is not Mark.EMPTY:
            raise IllegalMove(f"cell ({row}, {col}) already holds {self._cells[idx].value}")
        self._cells[idx] = mark

    def is_empty(self, row, col):
        # false for off-board coords too
        try:
            return self._cells[self._index(row, col)] is Mark.EMPTY
        except IllegalMove:
            return False

    def empty_cells(self):
        """
        empty (row, col) pairs in row-major order
        """
        return [divmod(i, BOARD_SIZE) for i, m in enumerate(self._cells) if m is Mark.EMPTY]

    @property
    def move_count(self):
        return sum(1 for m in self._cells if m is not Mark.EMPTY)

    def is_full(self) -> bool:
        return Mark.EMPTY not in self._cells

    def winner(self) -> Optional[Mark]:
        return find_winner(self._cells)

    def winning_line(self):
        """
        (row, col) cells of the completed line, or None
        """
        line = find_winning_line(self._cells)
        if line is None:
            return None
        return [divmod(i, BOARD_SIZE) for i in line]

    def outcome(self) -> GameOutcome:
        win = self.winner()
        if win is not None:
            return GameOutcome.win(win)
        if self.is_full():
            return GameOutcome.draw()
        return GameOutcome.in_progress()

    def reset(self):
        # back to an empty grid
        self._cells = [Mark.EMPTY] * (BOARD_SIZE * BOARD_SIZE)

    def snapshot(self):
        """
        immutable tuple of the 9 cells
        """
        return tuple(self._cells)

    def copy(self):
        return Board(self._cells)

    def rows(self):
        return [self._cells[r * BOARD_SIZE:(r + 1) * BOARD_SIZE] for r in range(BOARD_SIZE)]

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self):
        return f"Board.from_rows({[''.join(m.value or '.' for m in r) for r in self.rows()]!r})"

    def __str__(self):
        lines = [" | ".join(m.value or " " for m in r) for r in self.rows()]
        return "\n---------\n".join(lines)
