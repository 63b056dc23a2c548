"""
Pentago move selection

Turns 0-4 are played from the opening book. Afterwards the legal moves go
through a one-ply loss filter, a Monte Carlo shortlist and a depth-limited
tree search, all inside a per-move time budget.
"""
import random
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from mcts_pentago import MonteCarloRanker
from opening_book import OpeningBook
from pentago_config import EngineConfig
from pentago_eval import PentagoEvaluator
from pentago_game import Move, PentagoGame, WHITE_PLAYER
from pentago_search import TreeSearch, filter_obvious_losses, rank_scores


@dataclass
class DecisionStats:
    """How the last move was chosen"""
    stage: str
    move: Optional[Move]
    candidates: int = 0
    depth: int = 0
    scores: Dict[Move, float] = field(default_factory=dict)
    nodes: int = 0
    thinking_time: float = 0.0


class PentagoAI:
    """Pentago player: opening book, loss filter, Monte Carlo shortlist, then tree search"""

    def __init__(self, config: Optional[EngineConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or EngineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.evaluator = PentagoEvaluator(self.config.weights)
        self.search = TreeSearch(self.evaluator)
        self.ranker = MonteCarloRanker(self.config, self.rng)
        self.opening_book = OpeningBook(self.rng)
        self.stats = None

    def choose_move(self, game: PentagoGame) -> Optional[Move]:
        """Pick a move for the side to move; None if the game is already over"""
        return self.select_move(game, game.turn_player, game.turn_number)

    def select_move(self, game: PentagoGame, player: int, turn_number: int) -> Optional[Move]:
        start_time = time.monotonic()

        legal_moves = game.get_all_legal_moves()
        if not legal_moves:
            return self._finish('no_moves', None, start_time)
        if len(legal_moves) == 1:
            return self._finish('single_move', legal_moves[0], start_time, candidates=1)

        if turn_number < self.config.opening_turns:
            move = self.opening_book.first_three_moves(game, player)
            if move is not None:
                return self._finish('opening', move, start_time)
        elif turn_number < self.config.secondary_opening_turns:
            move = self.opening_book.fourth_and_fifth_moves(game, player)
            if move is not None:
                return self._finish('opening', move, start_time)

        candidates = filter_obvious_losses(game, player, self.rng)
        if not candidates:
            # Every move loses at once; any legal move will do
            candidates = legal_moves
        if len(candidates) == 1:
            return self._finish('pruned', candidates[0], start_time, candidates=1)

        candidates = self.ranker.rank(game, player, candidates, self.config.sim_time_limit)
        if len(candidates) == 1:
            return self._finish('ranked', candidates[0], start_time, candidates=1)

        depth = self.config.depth_for_turn(turn_number)
        self.search.nodes = 0
        scores = {}
        for move in candidates:
            if time.monotonic() - start_time > self.config.move_time_limit:
                if self.config.verbose:
                    print(f"Taking too long... scored {len(scores)}/{len(candidates)} candidates")
                break
            scores[move] = self.search.score_move(game, move, depth, self.config.search_algorithm)

        if not scores:
            # The shortlist came back too late to search anything; trust its order
            return self._finish('ranked', candidates[0], start_time, candidates=len(candidates))

        # White maximizes, black minimizes white's score
        best_move = rank_scores(scores, descending=(player == WHITE_PLAYER))[0]
        return self._finish('search', best_move, start_time, candidates=len(candidates),
                            depth=depth, scores=scores, nodes=self.search.nodes)

    def _finish(self, stage: str, move: Optional[Move], start_time: float, **details) -> Optional[Move]:
        self.stats = DecisionStats(stage=stage, move=move,
                                   thinking_time=time.monotonic() - start_time, **details)
        if self.config.verbose:
            print(f"[{stage}] {move} in {self.stats.thinking_time:.3f}s")
        return move

    def get_stats(self) -> Optional[DecisionStats]:
        """Get statistics from last decision"""
        return self.stats
