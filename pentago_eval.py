"""
Static evaluation for Pentago positions

Scores are built from streaks (maximal runs of one colour along rows, columns
and the six long diagonals) plus occupancy of the central 4x4 block.
"""

import numpy as np
from typing import FrozenSet, List, Optional, Tuple
from numba import njit

from pentago_config import EvaluationWeights
from pentago_game import BOARD_SIZE, PentagoGame, piece_for, opponent_of

RUN_THRESHOLDS = (3, 4, 5)


def _walk(start: Tuple[int, int], step: Tuple[int, int]) -> List[int]:
    """Flat indices from start along step until the walk leaves the board"""
    (r, c), (dr, dc) = start, step
    cells = []
    while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE:
        cells.append(r * BOARD_SIZE + c)
        r += dr
        c += dc
    return cells


def _line_table(walks) -> np.ndarray:
    """Pad scan lines with -1 so they fit in one array"""
    table = np.full((len(walks), BOARD_SIZE), -1, dtype=np.int64)
    for i, (start, step) in enumerate(walks):
        cells = _walk(start, step)
        table[i, :len(cells)] = cells
    return table


ORTHOGONAL_LINES = _line_table(
    [((r, 0), (0, 1)) for r in range(BOARD_SIZE)] +
    [((0, c), (1, 0)) for c in range(BOARD_SIZE)]
)

# The only diagonals long enough to hold five in a row
DIAGONAL_LINES = _line_table([
    ((0, 0), (1, 1)), ((0, 1), (1, 1)), ((1, 0), (1, 1)),
    ((0, 5), (1, -1)), ((0, 4), (1, -1)), ((1, 5), (1, -1)),
])

ALL_LINES = np.vstack([ORTHOGONAL_LINES, DIAGONAL_LINES])


@njit(cache=True)
def _run_length_histogram(flat, lines, piece):
    histogram = np.zeros(BOARD_SIZE + 1, dtype=np.int64)
    for i in range(lines.shape[0]):
        streak = 0
        for k in range(lines.shape[1]):
            idx = lines[i, k]
            if idx < 0:
                break
            if flat[idx] == piece:
                streak += 1
            else:
                histogram[streak] += 1
                streak = 0
        # A run touching the end of the line is still a run
        histogram[streak] += 1
    return histogram


def run_length_histogram(board: np.ndarray, piece: int, lines: np.ndarray = ALL_LINES) -> np.ndarray:
    """histogram[n] = number of maximal runs of length n of piece along lines"""
    return _run_length_histogram(np.ascontiguousarray(board).ravel(), lines, piece)


def classify_run(length: int) -> FrozenSet[int]:
    """Every threshold a run meets; a 5-run counts as a 3-run and a 4-run too"""
    return frozenset(t for t in RUN_THRESHOLDS if length >= t)


def longest_run(board: np.ndarray, piece: int) -> int:
    histogram = run_length_histogram(board, piece)
    lengths = np.nonzero(histogram[1:])[0]
    return int(lengths[-1]) + 1 if len(lengths) else 0


class PentagoEvaluator:
    """Heuristic scoring of Pentago positions from a fixed side's point of view"""

    def __init__(self, weights: Optional[EvaluationWeights] = None):
        self.weights = weights or EvaluationWeights()
        threshold_weights = {
            3: self.weights.triplet,
            4: self.weights.quadruplet,
            5: self.weights.quintuplet,
        }
        self._length_weights = np.array(
            [sum(threshold_weights[t] for t in classify_run(n)) for n in range(BOARD_SIZE + 1)],
            dtype=np.int64,
        )

    def streak_score(self, board: np.ndarray, piece: int, lines: np.ndarray) -> int:
        histogram = run_length_histogram(board, piece, lines)
        return int(histogram @ self._length_weights)

    def orthogonal_score(self, board: np.ndarray, piece: int) -> int:
        """Horizontal and vertical streaks"""
        return self.streak_score(board, piece, ORTHOGONAL_LINES)

    def diagonal_score(self, board: np.ndarray, piece: int) -> int:
        return self.streak_score(board, piece, DIAGONAL_LINES)

    def centre_score(self, board: np.ndarray, piece: int) -> int:
        inner = board[1:BOARD_SIZE - 1, 1:BOARD_SIZE - 1]
        return int(np.count_nonzero(inner == piece)) * self.weights.centre

    def side_score(self, board: np.ndarray, player: int) -> int:
        piece = piece_for(player)
        return (self.orthogonal_score(board, piece)
                + self.diagonal_score(board, piece)
                + self.centre_score(board, piece))

    def terminal_score(self, game: PentagoGame, player: int) -> int:
        """Fixed win/loss value of a finished game, zero for a draw"""
        if game.winner is None:
            return 0
        return self.weights.win if game.winner == player else -self.weights.win

    def evaluate(self, game: PentagoGame, player: int = 0) -> int:
        """
        Score a position for player (positive favours player).

        Finished games get the terminal score instead of the heuristic, so the
        result is always antisymmetric: evaluate(g, 0) == -evaluate(g, 1).
        """
        if game.game_over:
            return self.terminal_score(game, player)
        board = game.board
        return self.side_score(board, player) - self.side_score(board, opponent_of(player))
