"""
Tests for the static evaluator: streak classification, scan lines and terminal scores.
"""

import pytest
import random
import numpy as np
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pentago_config import EvaluationWeights
from pentago_eval import (
    PentagoEvaluator, classify_run, longest_run, run_length_histogram,
    DIAGONAL_LINES, ORTHOGONAL_LINES,
)
from pentago_game import PentagoGame, WHITE, BLACK, play_random_moves


def empty_board():
    return np.zeros((6, 6), dtype=np.int8)


class TestRunClassification:
    """Cumulative credit: a long run counts for every threshold it reaches."""

    @pytest.mark.unit
    @pytest.mark.parametrize("length,expected", [
        (0, set()), (1, set()), (2, set()),
        (3, {3}), (4, {3, 4}), (5, {3, 4, 5}), (6, {3, 4, 5}),
    ])
    def test_classify_run(self, length, expected):
        assert classify_run(length) == frozenset(expected)

    @pytest.mark.unit
    def test_five_run_scores_triplet_quadruplet_and_quintuplet(self):
        board = empty_board()
        board[0, 0:5] = WHITE
        evaluator = PentagoEvaluator()

        assert evaluator.orthogonal_score(board, WHITE) == 100 + 1000 + 100000
        assert evaluator.diagonal_score(board, WHITE) == 0
        assert evaluator.centre_score(board, WHITE) == 0
        assert evaluator.side_score(board, 0) == 101100
        assert evaluator.side_score(board, 1) == 0

    @pytest.mark.unit
    def test_custom_weights(self):
        board = empty_board()
        board[0, 0:5] = WHITE
        evaluator = PentagoEvaluator(EvaluationWeights(triplet=1, quadruplet=10, quintuplet=100))
        assert evaluator.orthogonal_score(board, WHITE) == 111


class TestScanLines:

    @pytest.mark.unit
    def test_line_tables(self):
        assert ORTHOGONAL_LINES.shape == (12, 6)
        assert DIAGONAL_LINES.shape == (6, 6)
        # Short diagonals end where the walk leaves the board
        assert np.count_nonzero(DIAGONAL_LINES < 0) == 4

    @pytest.mark.unit
    def test_run_at_end_of_row_is_counted(self):
        board = empty_board()
        board[2, 3:6] = BLACK
        histogram = run_length_histogram(board, BLACK, ORTHOGONAL_LINES)
        assert histogram[3] == 1
        assert PentagoEvaluator().orthogonal_score(board, BLACK) == 100

    @pytest.mark.unit
    def test_runs_do_not_carry_across_rows(self):
        board = empty_board()
        board[0, 4:6] = WHITE
        board[1, 0:2] = WHITE
        assert PentagoEvaluator().orthogonal_score(board, WHITE) == 0

    @pytest.mark.unit
    def test_opponent_piece_splits_run(self):
        board = empty_board()
        board[0] = [WHITE, WHITE, WHITE, BLACK, WHITE, WHITE]
        assert PentagoEvaluator().orthogonal_score(board, WHITE) == 100

    @pytest.mark.unit
    def test_vertical_run(self):
        board = empty_board()
        board[1:5, 5] = BLACK
        assert PentagoEvaluator().orthogonal_score(board, BLACK) == 1100

    @pytest.mark.unit
    def test_short_diagonal(self):
        board = empty_board()
        for k in range(3):
            board[k, k + 1] = WHITE
        assert PentagoEvaluator().diagonal_score(board, WHITE) == 100

    @pytest.mark.unit
    def test_anti_diagonal(self):
        board = empty_board()
        for k in range(4):
            board[1 + k, 5 - k] = BLACK
        assert PentagoEvaluator().diagonal_score(board, BLACK) == 1100

    @pytest.mark.unit
    def test_centre_score(self):
        board = empty_board()
        board[1, 1] = WHITE
        board[4, 4] = WHITE
        board[0, 0] = WHITE
        board[5, 3] = WHITE
        assert PentagoEvaluator().centre_score(board, WHITE) == 10

    @pytest.mark.unit
    def test_longest_run(self):
        board = empty_board()
        assert longest_run(board, WHITE) == 0
        board[3, 1:4] = WHITE
        board[0, 0] = WHITE
        assert longest_run(board, WHITE) == 3
        assert longest_run(board, BLACK) == 0


class TestEvaluate:

    @pytest.mark.unit
    def test_empty_board_is_even(self, empty_game):
        assert PentagoEvaluator().evaluate(empty_game) == 0

    @pytest.mark.unit
    def test_terminal_score_supersedes_heuristic(self):
        board = empty_board()
        board[0, 0:5] = WHITE
        board[5, 0:2] = BLACK
        game = PentagoGame.from_board(board, turn_player=1, turn_number=4)
        evaluator = PentagoEvaluator()

        assert game.game_over
        assert evaluator.evaluate(game, 0) == 100000
        assert evaluator.evaluate(game, 1) == -100000

    @pytest.mark.unit
    def test_draw_scores_zero(self):
        board = empty_board()
        board[0, 0:5] = WHITE
        board[5, 0:5] = BLACK
        game = PentagoGame.from_board(board)
        assert PentagoEvaluator().evaluate(game, 0) == 0

    @pytest.mark.unit
    def test_heuristic_difference(self):
        board = empty_board()
        board[1, 1:4] = WHITE   # triplet plus three centre cells
        board[5, 0] = BLACK
        game = PentagoGame.from_board(board, turn_player=1)
        assert PentagoEvaluator().evaluate(game, 0) == 100 + 3 * 5

    @pytest.mark.unit
    @pytest.mark.parametrize("seed", range(8))
    def test_antisymmetry(self, seed):
        rng = random.Random(seed)
        evaluator = PentagoEvaluator()
        game = play_random_moves(rng.randrange(4, 30), rng)
        assert evaluator.evaluate(game, 0) == -evaluator.evaluate(game, 1)
