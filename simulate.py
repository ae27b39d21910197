#!/usr/bin/env python3
"""
Batch self-play statistics.

Plays many rounds between computer players and reports, per seat, the
number of wins and the average final score.

Usage:
    python simulate.py --games 1000
    python simulate.py --games 500 --policy tile_count --opponent-policy random --seed 3
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import numpy as np

sys.path.insert(0, str(Path(__file__).parent))

from dlx_mahjong.policy import make_policy, available_policies
from dlx_mahjong.game import Game, NUM_PLAYERS

logger = logging.getLogger(__name__)


def run_simulation(
    num_games: int,
    policy: str = "tile_count",
    opponent_policy: str = "random",
    seed: Optional[int] = None,
) -> Dict[str, np.ndarray]:
    """
    Play independent rounds and collect per-seat statistics.

    Seat 0 uses policy, the other seats opponent_policy. Every round starts
    from a random seat.

    Returns:
        Dictionary with "wins" and "scores" arrays of shape (num_games, 4),
        and "exhausted", the number of rounds that ended without a winner
    """
    rng = np.random.default_rng(seed)
    wins = np.zeros((num_games, NUM_PLAYERS), dtype=np.int8)
    scores = np.zeros((num_games, NUM_PLAYERS), dtype=np.int64)
    exhausted = 0

    for n in range(num_games):
        if n % 100 == 0:
            logger.info(f"Starting game number {n}")

        game_seed = int(rng.integers(2**31))
        policies = [
            make_policy(policy if seat == 0 else opponent_policy, seed=game_seed + seat)
            for seat in range(NUM_PLAYERS)
        ]
        game = Game(policies=policies, seed=game_seed)
        game.reset(start_player=game.random_start_player())
        result = game.play_round()

        scores[n] = result.scores
        if result.winner is None:
            exhausted += 1
        else:
            wins[n, result.winner] = 1

    return {"wins": wins, "scores": scores, "exhausted": exhausted}


def main():
    parser = argparse.ArgumentParser(description="Simulate Mahjong rounds between computer players")
    parser.add_argument("--games", type=int, default=1000,
                        help="Number of rounds to play")
    parser.add_argument("--policy", type=str, default="tile_count", choices=available_policies(),
                        help="Policy of player 0")
    parser.add_argument("--opponent-policy", type=str, default="random", choices=available_policies(),
                        help="Policy of players 1-3")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    # Per-round win messages would drown the summary
    if args.log_level != "DEBUG":
        logging.getLogger("dlx_mahjong").setLevel(logging.WARNING)

    stats = run_simulation(args.games, args.policy, args.opponent_policy, args.seed)

    print("=" * 60)
    print(f"Results over {args.games} games ({stats['exhausted']} without a winner)")
    print("=" * 60)
    for seat in range(NUM_PLAYERS):
        name = args.policy if seat == 0 else args.opponent_policy
        print(f"Player {seat} ({name}):")
        print(f"  Number of wins: {int(stats['wins'][:, seat].sum())}")
        print(f"  Average score: {stats['scores'][:, seat].mean():.1f}")


if __name__ == "__main__":
    main()
