"""
Pentago game implementation backed by NumPy
"""
import random
import numpy as np
from typing import List, Optional, Tuple
from dataclasses import dataclass

# Constants for board representation
EMPTY = 0
WHITE = 1
BLACK = 2

BOARD_SIZE = 6
QUADRANT_SIZE = 3
NUM_QUADRANTS = 4

# Quadrant twist directions
CLOCKWISE = 0
ANTICLOCKWISE = 1

# Player ids; white always moves first
WHITE_PLAYER = 0
BLACK_PLAYER = 1

# Top-left corner of each quadrant: 0 top-left, 1 top-right, 2 bottom-left, 3 bottom-right
QUADRANT_ORIGINS = ((0, 0), (0, 3), (3, 0), (3, 3))


def piece_for(player: int) -> int:
    """Convert a player id (0 or 1) to the piece stored on the board"""
    return WHITE if player == WHITE_PLAYER else BLACK


def opponent_of(player: int) -> int:
    return 1 - player


def _five_in_a_row_windows() -> np.ndarray:
    """Flat indices of every 5-cell window along rows, columns and diagonals"""
    windows = []
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE - 4):
            windows.append([r * BOARD_SIZE + c + k for k in range(5)])
            windows.append([(c + k) * BOARD_SIZE + r for k in range(5)])
    for r in range(BOARD_SIZE - 4):
        for c in range(BOARD_SIZE - 4):
            windows.append([(r + k) * BOARD_SIZE + c + k for k in range(5)])
            windows.append([(r + k) * BOARD_SIZE + (BOARD_SIZE - 1 - c) - k for k in range(5)])
    return np.array(windows, dtype=np.intp)


WIN_WINDOWS = _five_in_a_row_windows()


@dataclass(frozen=True, order=True)
class Move:
    row: int
    col: int
    quadrant: int
    direction: int
    player: int

    def __str__(self):
        twist = 'cw' if self.direction == CLOCKWISE else 'acw'
        return f"P{self.player}({self.row},{self.col}) q{self.quadrant} {twist}"


class PentagoGame:
    """Pentago board state: a placement followed by a quadrant twist each move"""

    def __init__(self):
        self.size = BOARD_SIZE
        self.board = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        self.turn_player = WHITE_PLAYER
        self.turn_number = 0
        self.game_over = False
        self.winner = None
        self.last_move = None

    @classmethod
    def from_board(cls, board, turn_player: int = WHITE_PLAYER,
                   turn_number: int = 0) -> 'PentagoGame':
        """Build a state from a 6x6 grid of EMPTY/WHITE/BLACK values"""
        game = cls()
        grid = np.array(board, dtype=np.int8)
        if grid.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Expected a {BOARD_SIZE}x{BOARD_SIZE} board, got {grid.shape}")
        game.board = grid
        game.turn_player = turn_player
        game.turn_number = turn_number
        game._update_result()
        return game

    def copy(self) -> 'PentagoGame':
        """Fast copy of game state"""
        new_game = PentagoGame.__new__(PentagoGame)
        new_game.size = self.size
        new_game.board = self.board.copy()
        new_game.turn_player = self.turn_player
        new_game.turn_number = self.turn_number
        new_game.game_over = self.game_over
        new_game.winner = self.winner
        new_game.last_move = self.last_move
        return new_game

    clone = copy

    def is_valid_move(self, move: Move) -> bool:
        """Check if move is legal for the side to move"""
        if self.game_over or move.player != self.turn_player:
            return False
        if not (0 <= move.row < BOARD_SIZE and 0 <= move.col < BOARD_SIZE):
            return False
        if not (0 <= move.quadrant < NUM_QUADRANTS) or move.direction not in (CLOCKWISE, ANTICLOCKWISE):
            return False
        return self.board[move.row, move.col] == EMPTY

    def get_all_legal_moves(self) -> List[Move]:
        """Every empty cell combined with every quadrant twist"""
        if self.game_over:
            return []

        legal_moves = []
        for row, col in np.argwhere(self.board == EMPTY):
            for quadrant in range(NUM_QUADRANTS):
                for direction in (CLOCKWISE, ANTICLOCKWISE):
                    legal_moves.append(Move(int(row), int(col), quadrant, direction, self.turn_player))
        return legal_moves

    def random_move(self, rng: Optional[random.Random] = None) -> Move:
        """Uniformly sampled legal move"""
        rng = rng or random
        empty_positions = np.argwhere(self.board == EMPTY)
        if self.game_over or len(empty_positions) == 0:
            raise ValueError("No legal moves in a finished game")
        row, col = empty_positions[rng.randrange(len(empty_positions))]
        return Move(int(row), int(col), rng.randrange(NUM_QUADRANTS),
                    rng.choice((CLOCKWISE, ANTICLOCKWISE)), self.turn_player)

    def process_move(self, move: Move) -> None:
        """Play a move on this state in place"""
        if not self.is_valid_move(move):
            raise ValueError(f"Illegal move {move} for player {self.turn_player}")

        self.board[move.row, move.col] = piece_for(move.player)
        self._twist(move.quadrant, move.direction)

        self.last_move = move
        if self.turn_player != WHITE_PLAYER:
            self.turn_number += 1
        self.turn_player = opponent_of(self.turn_player)
        self._update_result()

    def apply_move(self, move: Move) -> 'PentagoGame':
        """Return the state after move, leaving this one untouched"""
        new_game = self.copy()
        new_game.process_move(move)
        return new_game

    def _twist(self, quadrant: int, direction: int) -> None:
        r, c = QUADRANT_ORIGINS[quadrant]
        block = self.board[r:r + QUADRANT_SIZE, c:c + QUADRANT_SIZE]
        k = -1 if direction == CLOCKWISE else 1
        self.board[r:r + QUADRANT_SIZE, c:c + QUADRANT_SIZE] = np.rot90(block, k).copy()

    def has_five(self, piece: int) -> bool:
        windows = self.board.ravel()[WIN_WINDOWS]
        return bool(np.any(np.all(windows == piece, axis=1)))

    def _update_result(self) -> None:
        white_wins = self.has_five(WHITE)
        black_wins = self.has_five(BLACK)

        if white_wins and black_wins:
            # Both lines completed by the same twist
            self.game_over = True
            self.winner = None
        elif white_wins or black_wins:
            self.game_over = True
            self.winner = WHITE_PLAYER if white_wins else BLACK_PLAYER
        elif not np.any(self.board == EMPTY):
            self.game_over = True
            self.winner = None
        else:
            self.game_over = False
            self.winner = None

    def is_draw(self) -> bool:
        return self.game_over and self.winner is None

    def __eq__(self, other):
        if not isinstance(other, PentagoGame):
            return NotImplemented
        return (np.array_equal(self.board, other.board)
                and self.turn_player == other.turn_player
                and self.turn_number == other.turn_number
                and self.game_over == other.game_over
                and self.winner == other.winner)

    def __str__(self):
        symbols = {EMPTY: '.', WHITE: 'W', BLACK: 'B'}
        rows = []
        for r in range(BOARD_SIZE):
            cells = [symbols[int(v)] for v in self.board[r]]
            rows.append(' '.join(cells[:3]) + ' | ' + ' '.join(cells[3:]))
            if r == 2:
                rows.append('------+------')
        return '\n'.join(rows)


def play_random_moves(count: int, rng: Optional[random.Random] = None) -> PentagoGame:
    """Start a game and play up to count random moves; stops early if it ends"""
    game = PentagoGame()
    for _ in range(count):
        if game.game_over:
            break
        game.process_move(game.random_move(rng))
    return game


def cells_of(board: np.ndarray, piece: int) -> List[Tuple[int, int]]:
    return [(int(r), int(c)) for r, c in np.argwhere(board == piece)]
