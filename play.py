#!/usr/bin/env python3
"""
Play Mahjong against computer players in the terminal.

Usage:
    python play.py
    python play.py --seat 2 --policy random --seed 7
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

sys.path.insert(0, str(Path(__file__).parent))

from dlx_mahjong.hand import PickupAction
from dlx_mahjong.state import GameState
from dlx_mahjong.policy import Policy, make_policy, available_policies
from dlx_mahjong.game import Game, GamePhase, NUM_PLAYERS


class QuitGame(Exception):
    """Raised when the player types 'q' at a prompt."""


def ask_choice(prompt: str, count: int) -> int:
    """Read a number in range(count) from the terminal"""
    while True:
        user_input = input(f"{prompt} (or 'q' to quit): ").strip()
        if user_input.lower() == 'q':
            raise QuitGame()
        try:
            choice = int(user_input)
        except ValueError:
            print("Please enter a valid number")
            continue
        if 0 <= choice < count:
            return choice
        print(f"Please enter a number between 0 and {count - 1}")


class HumanPolicy(Policy):
    """Asks the person at the terminal for every decision."""

    name = "human"

    def select_discard(self, valid_discards: Sequence[int], state: GameState) -> int:
        hand = state.own_hand
        print(hand.describe())
        while True:
            index = ask_choice("Select which tile to discard", len(hand))
            if index in valid_discards:
                return index
            print("Chosen tile must be hidden.")

    def select_pickup(self, actions: Sequence[PickupAction], state: GameState) -> PickupAction:
        tile = state.discard_pile.last
        print(f"Available actions on {tile}:")
        for i, action in enumerate(actions):
            print(f"  [{i}] {PickupAction(action).name.lower()}")
        return PickupAction(actions[ask_choice("Select action", len(actions))])

    def choose_chow(self, starters: Sequence[int]) -> int:
        print("Multiple chows possible. Select which rank to start the chow with:")
        for i, rank in enumerate(starters):
            print(f"  [{i}] {rank}")
        return starters[ask_choice("Select chow", len(starters))]


def print_scores(game: Game, round_over: bool) -> None:
    for player in game.players:
        base, multiplier = player.score(
            game.round_wind,
            full_hand=True,
            mahjong=round_over and player.number == game.winner,
        )
        print(f"Player {player.number} - Total score: {base * 2 ** multiplier} "
              f"({base} doubled {multiplier} times)")


def play_round(game: Game, human_seat: int) -> None:
    """Run one round, printing what every player can see"""
    human = game.players[human_seat]
    while game.phase != GamePhase.GAME_OVER:
        phase = game.phase
        current = game.current_player
        pile_size = len(game.discard_pile)

        if phase == GamePhase.DRAWING:
            if current == human_seat and pile_size > 0:
                print("Discard pile: " + ", ".join(str(tile) for tile in game.discard_pile))
            seat = game.players[current].seat_wind.name.capitalize()
            print(f"\nPlayer {current}'s turn ({seat}):")

        game.advance()

        if phase == GamePhase.DRAWING and current == human_seat and game.phase != GamePhase.GAME_OVER:
            print(f"Draw tile: {human.latest_tile}")
        elif phase == GamePhase.DISCARDING:
            print(f"Player {current} discards {game.discard_pile.last}")
        elif phase == GamePhase.CLAIMING and game.current_player != current and game.phase != GamePhase.DRAWING:
            claimer = game.players[game.current_player]
            print(f"Player {claimer.number} picks up {claimer.latest_tile}")
            print(claimer.visible_hand().describe(with_indices=False))
            base, multiplier = claimer.score(game.round_wind)
            print(f"Known score: {base * 2 ** multiplier} ({base} doubled {multiplier} times)")

    result = game.finish_round()
    print()
    if result.winner is None:
        print("Game finished due to running out of tiles.")
    elif result.winner == human_seat:
        print("You have a winning hand. Congratulations.")
    else:
        print(f"Player {result.winner} has a winning hand.")
    print_scores(game, round_over=True)
    print("Session totals: " + ", ".join(f"P{i}={total}" for i, total in enumerate(game.totals)))


def main():
    parser = argparse.ArgumentParser(description="Play Mahjong against computer players")
    parser.add_argument("--seat", type=int, default=0, choices=range(NUM_PLAYERS),
                        help="Seat you play (0-3)")
    parser.add_argument("--policy", type=str, default="tile_count", choices=available_policies(),
                        help="Policy of the computer players")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    policies: List[Policy] = []
    for seat in range(NUM_PLAYERS):
        seed = None if args.seed is None else args.seed + seat
        policies.append(HumanPolicy(seed) if seat == args.seat else make_policy(args.policy, seed=seed))

    game = Game(policies=policies, seed=args.seed)
    game.reset()

    print("=" * 60)
    print(f"Mahjong - you are Player {args.seat}")
    print("=" * 60)

    try:
        while True:
            play_round(game, args.seat)
            if input("\nStart next round? (y/n): ").strip().lower() != 'y':
                break
            game.next_round()
    except (QuitGame, EOFError):
        pass
    print("Thanks for playing!")


if __name__ == "__main__":
    main()
