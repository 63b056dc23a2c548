"""Shared pytest fixtures and configuration for all tests."""

import pytest
import random
import sys
import os
import numpy as np

# Add parent directory to path so we can import modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pentago_config import EngineConfig
from pentago_eval import longest_run
from pentago_game import PentagoGame, WHITE, BLACK


@pytest.fixture
def empty_game():
    """Fixture for a fresh game, white to move."""
    return PentagoGame()

@pytest.fixture
def white_four_in_row():
    """White has four in a row on the top row and is one placement from winning."""
    board = np.zeros((6, 6), dtype=np.int8)
    board[0, 0:4] = WHITE
    board[5, 0] = BLACK
    board[5, 2] = BLACK
    board[3, 5] = BLACK
    board[2, 4] = BLACK
    return PentagoGame.from_board(board, turn_player=0, turn_number=5)

@pytest.fixture
def nearly_full_game():
    """A crowded position with only three empty cells, black to move."""
    board = np.array([
        [1, 2, 1, 2, 1, 2],
        [2, 1, 2, 1, 2, 1],
        [2, 1, 2, 1, 2, 1],
        [1, 2, 1, 2, 1, 2],
        [1, 2, 0, 0, 1, 2],
        [2, 1, 2, 1, 0, 1],
    ], dtype=np.int8)
    return PentagoGame.from_board(board, turn_player=1, turn_number=16)

@pytest.fixture
def random_seed():
    """Fixture to set random seeds for reproducibility."""
    seed = 42
    random.seed(seed)
    np.random.seed(seed)
    return seed

@pytest.fixture
def rng(random_seed):
    return random.Random(random_seed)

@pytest.fixture
def fast_config(random_seed):
    """Small budgets so full decisions finish quickly."""
    return EngineConfig(move_time_limit=1.0, sim_time_limit=0.05, top_k=8, seed=random_seed)

@pytest.fixture(scope="session", autouse=True)
def warm_up_jit():
    """Compile the numba streak scanner once so timed tests do not pay for it."""
    longest_run(np.zeros((6, 6), dtype=np.int8), WHITE)
    yield
