"""
Pentago engine - Configuration
Immutable tuning knobs shared by the evaluator, ranker, opening book and move selector
"""

from dataclasses import dataclass, field, replace
from typing import Optional


SEARCH_ALGORITHMS = ('negamax', 'alphabeta')


@dataclass(frozen=True)
class EvaluationWeights:
    """Static evaluation weights."""

    triplet: int = 100
    quadruplet: int = 1000
    quintuplet: int = 100_000
    centre: int = 5
    win: int = 100_000  # Returned for finished games, supersedes the heuristic


@dataclass(frozen=True)
class EngineConfig:
    """Decision engine configuration."""

    weights: EvaluationWeights = field(default_factory=EvaluationWeights)

    # Time budgets (seconds)
    move_time_limit: float = 1.92
    sim_time_limit: float = 0.8

    # Tree search depth grows with the turn number
    base_depth: int = 1
    depth_increase_every: int = 10
    max_depth: int = 2
    search_algorithm: str = 'negamax'

    # Monte Carlo shortlist
    top_k: int = 50
    score_floor: float = float('-inf')
    exploration_constant: float = 2.0  # c in sqrt(c * ln(N) / n)

    # Opening book turn ranges
    opening_turns: int = 3
    secondary_opening_turns: int = 5

    seed: Optional[int] = None
    verbose: bool = False

    def __post_init__(self):
        if self.move_time_limit <= 0 or self.sim_time_limit < 0:
            raise ValueError("Time limits must be positive")
        if self.base_depth < 1 or self.max_depth < self.base_depth:
            raise ValueError(f"Invalid depth range {self.base_depth}..{self.max_depth}")
        if self.depth_increase_every < 1:
            raise ValueError("depth_increase_every must be at least 1")
        if self.top_k < 1:
            raise ValueError("top_k must be at least 1")
        if self.search_algorithm not in SEARCH_ALGORITHMS:
            raise ValueError(f"Unknown search algorithm {self.search_algorithm!r}, "
                             f"expected one of {SEARCH_ALGORITHMS}")
        if not 0 <= self.opening_turns <= self.secondary_opening_turns:
            raise ValueError("Opening turn ranges must be increasing")

    def depth_for_turn(self, turn_number: int) -> int:
        """Search depth for a turn: one extra ply every depth_increase_every turns"""
        extra = max(turn_number - 1, 0) // self.depth_increase_every
        return min(self.base_depth + extra, self.max_depth)

    def with_overrides(self, **changes) -> 'EngineConfig':
        return replace(self, **changes)
