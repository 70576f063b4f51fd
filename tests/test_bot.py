import random
import unittest
from collections import Counter

from tictactoe.board import Board, GameOutcome, Mark, OutcomeState
from tictactoe.bot import ContractViolation, Difficulty, minimax_move, select_move


def play_out(first, second, rng=None):
    """
    X uses `first`, O uses `second`, until the game ends
    """
    board = Board()
    tiers = {Mark.X: first, Mark.O: second}
    mark = Mark.X
    while not board.outcome().is_over:
        row, col = select_move(board, tiers[mark], mark, rng)
        board.place(row, col, mark)
        mark = mark.opposite()
    return board.outcome()


class TestAdvanced(unittest.TestCase):
    def test_takes_immediate_win(self) -> None:
        board = Board.from_rows(["XX.", "OO.", "..."])
        self.assertEqual(select_move(board, Difficulty.ADVANCED, Mark.O), (1, 2))

    def test_blocks_opponent(self) -> None:
        board = Board.from_rows(["XX.", ".O.", "..."])
        self.assertEqual(select_move(board, Difficulty.ADVANCED, Mark.O), (0, 2))

    def test_plays_for_x_too(self) -> None:
        board = Board.from_rows(["OO.", "XX.", "..."])
        self.assertEqual(select_move(board, Difficulty.ADVANCED, Mark.X), (1, 2))

    def test_first_max_wins_on_ties(self) -> None:
        # both (0, 1) and (1, 0) win at once for O
        board = Board.from_rows(["O.O", ".XX", "OXX"])
        self.assertEqual(select_move(board, Difficulty.ADVANCED, Mark.O), (0, 1))

    def test_does_not_mutate_board(self) -> None:
        board = Board.from_rows(["X..", ".O.", "..X"])
        before = board.snapshot()
        select_move(board, Difficulty.ADVANCED, Mark.O)
        self.assertEqual(board.snapshot(), before)

    def test_advanced_vs_advanced_is_a_draw(self) -> None:
        self.assertEqual(play_out(Difficulty.ADVANCED, Difficulty.ADVANCED), GameOutcome.draw())

    def test_never_loses_to_random_play(self) -> None:
        rng = random.Random(2024)
        for _ in range(20):
            outcome = play_out(Difficulty.BEGINNER, Difficulty.ADVANCED, rng)
            self.assertNotEqual(outcome, GameOutcome.win(Mark.X))

    def test_minimax_move_on_full_board(self) -> None:
        self.assertIsNone(minimax_move(Board.from_rows(["XOX", "XOO", "OXX"]).snapshot(), Mark.O))


class TestModerate(unittest.TestCase):
    def test_completes_own_line_instead_of_blocking(self) -> None:
        board = Board.from_rows(["OO.", "XX.", "..."])
        self.assertEqual(select_move(board, Difficulty.MODERATE, Mark.O), (0, 2))

    def test_never_blocks(self) -> None:
        # X threatens (0, 2); O has no win, so the pick is random
        board = Board.from_rows(["XX.", ".O.", "..."])
        picks = {select_move(board, Difficulty.MODERATE, Mark.O, random.Random(seed))
                 for seed in range(60)}
        self.assertGreater(len(picks), 1)
        self.assertTrue(picks <= set(board.empty_cells()))

    def test_first_winning_cell_in_scan_order(self) -> None:
        board = Board.from_rows(["O.O", ".XX", "OXX"])
        self.assertEqual(select_move(board, Difficulty.MODERATE, Mark.O), (0, 1))


class TestBeginner(unittest.TestCase):
    def test_picks_only_empty_cells(self) -> None:
        board = Board.from_rows(["XO.", "XO.", "..."])
        rng = random.Random(3)
        for _ in range(100):
            self.assertIn(select_move(board, Difficulty.BEGINNER, Mark.X, rng), board.empty_cells())

    def test_roughly_uniform_on_empty_board(self) -> None:
        rng = random.Random(1234)
        board = Board()
        counts = Counter(select_move(board, Difficulty.BEGINNER, Mark.O, rng) for _ in range(9000))
        self.assertEqual(len(counts), 9)
        for cell, n in counts.items():
            self.assertTrue(800 < n < 1200, f"{cell} picked {n} times")


class TestContract(unittest.TestCase):
    def test_full_board_returns_none(self) -> None:
        board = Board.from_rows(["XOX", "XOO", "OXX"])
        self.assertEqual(board.outcome(), GameOutcome.draw())
        for tier in Difficulty:
            self.assertIsNone(select_move(board, tier, Mark.O))

    def test_decided_board_is_a_contract_violation(self) -> None:
        board = Board.from_rows(["XXX", "OO.", "..."])
        with self.assertRaises(ContractViolation):
            select_move(board, Difficulty.ADVANCED, Mark.O)

    def test_empty_mark_rejected(self) -> None:
        with self.assertRaises(ValueError):
            select_move(Board(), Difficulty.BEGINNER, Mark.EMPTY)

    def test_single_empty_cell(self) -> None:
        board = Board.from_rows(["XOX", "XOO", "OX."])
        for tier in Difficulty:
            self.assertEqual(select_move(board, tier, Mark.X), (2, 2))


class TestDifficulty(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertIs(Difficulty.parse("Advanced"), Difficulty.ADVANCED)
        self.assertIs(Difficulty.parse(" moderate "), Difficulty.MODERATE)
        with self.assertRaises(ValueError):
            Difficulty.parse("expert")

    def test_labels(self) -> None:
        self.assertEqual([d.label for d in Difficulty], ["Beginner", "Moderate", "Advanced"])


if __name__ == "__main__":
    unittest.main()
