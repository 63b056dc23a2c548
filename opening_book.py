"""
Scripted openings for Pentago

The four quadrant centres are the strongest cells early on: a quadrant twist
never moves its own centre, and every long line passes next to one of them.
"""

import random
from typing import Optional, Tuple

from pentago_eval import longest_run
from pentago_game import (
    ANTICLOCKWISE, BOARD_SIZE, CLOCKWISE, EMPTY, NUM_QUADRANTS,
    Move, PentagoGame, cells_of, opponent_of, piece_for,
)

ORTHOGONAL_STEPS = ((-1, 0), (1, 0), (0, -1), (0, 1))
ALL_STEPS = ORTHOGONAL_STEPS + ((-1, -1), (-1, 1), (1, -1), (1, 1))

THREAT_LENGTH = 3


class OpeningBook:
    """Two independent opening tables: turns 0-2 and turns 3-4"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def opponent_threatens(self, game: PentagoGame, player: int) -> bool:
        """True once the opponent has any streak of three or more"""
        return longest_run(game.board, piece_for(opponent_of(player))) >= THREAT_LENGTH

    def first_three_moves(self, game: PentagoGame, player: int) -> Optional[Move]:
        """Take a free quadrant centre, else grow next to an own piece; None hands off to search"""
        if self.opponent_threatens(game, player):
            return None

        strong_cells = [(1, 1), (1, 4), (4, 1), (4, 4)]
        self.rng.shuffle(strong_cells)
        for row, col in strong_cells:
            if game.board[row, col] == EMPTY:
                return self._with_random_twist(row, col, player)

        own_cells = cells_of(game.board, piece_for(player))
        self.rng.shuffle(own_cells)
        for row, col in own_cells:
            target = self._empty_neighbour(game, row, col, ORTHOGONAL_STEPS)
            if target is not None:
                return self._with_random_twist(*target, player)
        return None

    def fourth_and_fifth_moves(self, game: PentagoGame, player: int) -> Optional[Move]:
        """Take a free quadrant centre, else extend from own centres; None hands off to search"""
        if self.opponent_threatens(game, player):
            return None

        strong_cells = [(1, 1), (1, 4), (4, 1), (4, 4)]
        self.rng.shuffle(strong_cells)
        for row, col in strong_cells:
            if game.board[row, col] == EMPTY:
                return self._with_random_twist(row, col, player)

        piece = piece_for(player)
        held = [cell for cell in strong_cells if game.board[cell] == piece]
        for row, col in held:
            target = self._line_extension(game, row, col, piece)
            if target is not None:
                return self._with_random_twist(*target, player)
        for row, col in held:
            target = self._empty_neighbour(game, row, col, ALL_STEPS)
            if target is not None:
                return self._with_random_twist(*target, player)
        return None

    def _line_extension(self, game: PentagoGame, row: int, col: int,
                        piece: int) -> Optional[Tuple[int, int]]:
        """Empty cell next to (row, col) whose opposite neighbour is already ours"""
        steps = list(ALL_STEPS)
        self.rng.shuffle(steps)
        for dr, dc in steps:
            ahead = (row + dr, col + dc)
            behind = (row - dr, col - dc)
            if not (_on_board(*ahead) and _on_board(*behind)):
                continue
            if game.board[ahead] == EMPTY and game.board[behind] == piece:
                return ahead
        return None

    def _empty_neighbour(self, game: PentagoGame, row: int, col: int,
                         steps) -> Optional[Tuple[int, int]]:
        steps = list(steps)
        self.rng.shuffle(steps)
        for dr, dc in steps:
            r, c = row + dr, col + dc
            if _on_board(r, c) and game.board[r, c] == EMPTY:
                return r, c
        return None

    def _with_random_twist(self, row: int, col: int, player: int) -> Move:
        # The twist does not change which opening cell is good
        quadrant = self.rng.randrange(NUM_QUADRANTS)
        direction = self.rng.choice((CLOCKWISE, ANTICLOCKWISE))
        return Move(int(row), int(col), quadrant, direction, player)


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE
