"""
Tree search for Pentago: alpha-beta minimax, negamax and a one-ply loss filter
"""

import random
from typing import Dict, List, Optional

from pentago_eval import PentagoEvaluator
from pentago_game import Move, PentagoGame, WHITE_PLAYER, opponent_of

INF = float('inf')


def filter_obvious_losses(game: PentagoGame, player: int,
                          rng: Optional[random.Random] = None) -> List[Move]:
    """
    Drop moves that lose on the spot and jump on a move that wins on the spot.

    The legal moves are shuffled first so that equally good moves are not
    biased towards the top-left of the board. Returns [winning_move] as soon
    as one is found, otherwise every move that does not hand the opponent an
    immediate win (possibly none).
    """
    rng = rng or random
    legal_moves = game.get_all_legal_moves()
    rng.shuffle(legal_moves)

    opponent = opponent_of(player)
    safe_moves = []
    for move in legal_moves:
        next_game = game.apply_move(move)
        if next_game.game_over:
            if next_game.winner == player:
                return [move]
            if next_game.winner == opponent:
                continue
        safe_moves.append(move)
    return safe_moves


def rank_scores(scores: Dict[Move, float], descending: bool = True) -> List[Move]:
    """Moves ordered by score; equal scores keep the order they were scored in"""
    sign = -1 if descending else 1
    return sorted(scores, key=lambda move: sign * scores[move])


class TreeSearch:
    """Depth-limited search; every score is from white's (player 0) point of view at the leaves"""

    def __init__(self, evaluator: Optional[PentagoEvaluator] = None):
        self.evaluator = evaluator or PentagoEvaluator()
        self.nodes = 0

    def alpha_beta(self, game: PentagoGame, depth: int, alpha: float, beta: float,
                   maximizing: bool) -> float:
        """Minimax with alpha-beta pruning; white maximizes"""
        self.nodes += 1
        if depth == 0 or game.game_over:
            return self.evaluator.evaluate(game, WHITE_PLAYER)

        if maximizing:
            best_value = -INF
            for move in game.get_all_legal_moves():
                value = self.alpha_beta(game.apply_move(move), depth - 1, alpha, beta, False)
                best_value = max(best_value, value)
                alpha = max(alpha, best_value)
                if beta <= alpha:
                    break
            return best_value
        else:
            best_value = INF
            for move in game.get_all_legal_moves():
                value = self.alpha_beta(game.apply_move(move), depth - 1, alpha, beta, True)
                best_value = min(best_value, value)
                beta = min(beta, best_value)
                if beta <= alpha:
                    break
            return best_value

    def negamax(self, turn_index: int, game: PentagoGame, depth: int,
                alpha: float, beta: float) -> float:
        """Negamax with alpha-beta; the result is from the side to move at turn_index"""
        self.nodes += 1
        color = 1 if turn_index % 2 == 0 else -1
        if depth == 0 or game.game_over:
            return color * self.evaluator.evaluate(game, WHITE_PLAYER)

        best_value = -INF
        for move in game.get_all_legal_moves():
            value = -self.negamax(turn_index + 1, game.apply_move(move), depth - 1, -beta, -alpha)
            best_value = max(best_value, value)
            alpha = max(alpha, best_value)
            if alpha >= beta:
                break
        return best_value

    def score_move(self, game: PentagoGame, move: Move, depth: int,
                   algorithm: str = 'negamax') -> float:
        """Value of playing move, from white's point of view, searched depth plies past it"""
        child = game.apply_move(move)
        if algorithm == 'alphabeta':
            return self.alpha_beta(child, depth, -INF, INF, child.turn_player == WHITE_PLAYER)
        if algorithm == 'negamax':
            value = self.negamax(child.turn_player, child, depth, -INF, INF)
            return value if child.turn_player == WHITE_PLAYER else -value
        raise ValueError(f"Unknown search algorithm {algorithm!r}")

    def score_moves(self, game: PentagoGame, moves: List[Move], depth: int,
                    algorithm: str = 'negamax') -> Dict[Move, float]:
        return {move: self.score_move(game, move, depth, algorithm) for move in moves}
