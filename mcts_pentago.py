"""
Monte Carlo move ranking for Pentago

Each candidate move gets one random playout, then an upper-confidence rule
decides which candidate to sample next until the time budget runs out.
"""
import math
import random
import time
from typing import Dict, List, Optional
from dataclasses import dataclass

from pentago_config import EngineConfig
from pentago_game import Move, PentagoGame


@dataclass
class RolloutStats:
    """Win/visit counters for one candidate move"""
    wins: int = 0
    visits: int = 0

    def record(self, won: bool):
        self.visits += 1
        if won:
            self.wins += 1

    def win_rate(self) -> float:
        if self.visits == 0:
            return 0.0
        return self.wins / self.visits

    def upper_confidence(self, total_simulations: int, exploration_constant: float = 2.0) -> float:
        """UCB1: exploitation + exploration"""
        exploration = math.sqrt(exploration_constant * math.log(total_simulations) / self.visits)
        return self.win_rate() + exploration


@dataclass
class RankerStats:
    """Statistics of the last ranking call"""
    visits: Dict[Move, int]
    win_rates: Dict[Move, float]
    shortlist: List[Move]
    total_simulations: int
    thinking_time: float


class MonteCarloRanker:
    """Random-playout ranker used to shortlist candidates before tree search"""

    def __init__(self, config: Optional[EngineConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or EngineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.stats = None  # Last ranking statistics

    def rank(self, game: PentagoGame, player: int, candidates: List[Move],
             time_budget: Optional[float] = None) -> List[Move]:
        """Return up to top_k candidates ordered by estimated win rate for player"""
        if not candidates:
            raise ValueError("Cannot rank an empty candidate list")
        if time_budget is None:
            time_budget = self.config.sim_time_limit
        start_time = time.monotonic()

        # Every candidate gets one playout before any ratio is computed
        rollouts = {}
        for move in candidates:
            stats = RolloutStats()
            stats.record(self.simulate(game, move, player))
            rollouts[move] = stats
        simulations_run = len(rollouts)

        while time.monotonic() - start_time <= time_budget:
            move = self._select(rollouts, simulations_run)
            rollouts[move].record(self.simulate(game, move, player))
            simulations_run += 1

        shortlist = self._shortlist(rollouts)

        self.stats = RankerStats(
            visits={move: stats.visits for move, stats in rollouts.items()},
            win_rates={move: stats.win_rate() for move, stats in rollouts.items()},
            shortlist=shortlist,
            total_simulations=simulations_run,
            thinking_time=time.monotonic() - start_time,
        )
        if self.config.verbose:
            print(f"Monte Carlo: {simulations_run} playouts over {len(rollouts)} moves "
                  f"in {self.stats.thinking_time:.3f}s, kept {len(shortlist)}")
        return shortlist

    def _select(self, rollouts: Dict[Move, RolloutStats], total_simulations: int) -> Move:
        """Candidate with the highest upper-confidence score; first one wins ties"""
        best_value = -float('inf')
        best_move = None
        for move, stats in rollouts.items():
            value = stats.upper_confidence(total_simulations, self.config.exploration_constant)
            if value > best_value:
                best_value = value
                best_move = move
        return best_move

    def _shortlist(self, rollouts: Dict[Move, RolloutStats]) -> List[Move]:
        ranked = sorted(rollouts, key=lambda move: -rollouts[move].win_rate())
        kept = [move for move in ranked if rollouts[move].win_rate() > self.config.score_floor]
        return kept[:self.config.top_k]

    def simulate(self, game: PentagoGame, move: Move, player: int) -> bool:
        """Play move then random moves to the end; True if player won"""
        playout = game.clone()
        playout.process_move(move)
        while not playout.game_over:
            playout.process_move(playout.random_move(self.rng))
        return playout.winner == player

    def get_stats(self) -> Optional[RankerStats]:
        """Get statistics from last ranking"""
        return self.stats
