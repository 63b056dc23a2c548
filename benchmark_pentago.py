#!/usr/bin/env python3
"""
Benchmark decision time of the Pentago AI on random mid-game positions
"""
import argparse
import random
import time

from tqdm import tqdm

from pentago_ai import PentagoAI
from pentago_config import EngineConfig
from pentago_game import play_random_moves


def benchmark_decisions(positions: int, random_moves: int, config: EngineConfig, seed: int):
    """Time choose_move on positions reached by random_moves random plies"""
    rng = random.Random(seed)
    ai = PentagoAI(config, random.Random(seed))

    timings = []
    stages = {}
    nodes = 0
    for _ in tqdm(range(positions), desc="Positions"):
        game = play_random_moves(random_moves, rng)
        if game.game_over:
            continue

        start_time = time.monotonic()
        move = ai.choose_move(game)
        timings.append(time.monotonic() - start_time)

        assert move is not None and game.is_valid_move(move)
        stats = ai.get_stats()
        stages[stats.stage] = stages.get(stats.stage, 0) + 1
        nodes += stats.nodes

    return timings, stages, nodes


def main():
    parser = argparse.ArgumentParser(description="Pentago AI decision benchmark")
    parser.add_argument('--positions', type=int, default=10, help="Number of positions to solve")
    parser.add_argument('--random-moves', type=int, default=12,
                        help="Random plies played before each decision")
    parser.add_argument('--algorithm', choices=['negamax', 'alphabeta'], default='negamax')
    parser.add_argument('--move-time', type=float, default=1.92, help="Per-move budget (s)")
    parser.add_argument('--sim-time', type=float, default=0.8, help="Monte Carlo budget (s)")
    parser.add_argument('--depth', type=int, default=1, help="Base search depth")
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args()

    config = EngineConfig(
        move_time_limit=args.move_time,
        sim_time_limit=args.sim_time,
        base_depth=args.depth,
        max_depth=max(args.depth, EngineConfig().max_depth),
        search_algorithm=args.algorithm,
        seed=args.seed,
        verbose=args.verbose,
    )

    print("Pentago AI Decision Benchmark")
    print("=" * 40)
    print(f"Algorithm: {args.algorithm}, base depth {args.depth}, "
          f"budget {args.move_time:.2f}s (Monte Carlo {args.sim_time:.2f}s)")

    timings, stages, nodes = benchmark_decisions(args.positions, args.random_moves, config, args.seed)
    if not timings:
        print("Every random game ended before a decision was needed")
        return

    print(f"\nDecisions: {len(timings)}")
    print(f"Average time per move: {sum(timings) / len(timings):.3f} seconds")
    print(f"Slowest move: {max(timings):.3f} seconds")
    print(f"Search nodes: {nodes}")
    print("Decision stages:")
    for stage, count in sorted(stages.items()):
        print(f"- {stage}: {count}")


if __name__ == "__main__":
    main()
