"""
DLX Mahjong Gymnasium Environment

A Gymnasium-compatible environment in which an agent chooses the discards
of one seat. Every other decision, including the agent's own pickups, is
made by policies.
"""

import gymnasium as gym
from gymnasium import spaces
import numpy as np
from typing import Dict, Any, List, Optional, Tuple

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dlx_mahjong.tiles import TileSet
from dlx_mahjong.hand import WINNING_HAND_SIZE
from dlx_mahjong.game import Game, GamePhase, NUM_PLAYERS
from dlx_mahjong.policy import Policy, make_policy


class DLXMahjongEnv(gym.Env):
    """
    Mahjong environment for reinforcement learning.

    Observation Space:
        A dictionary containing:
        - hand: (34,) int8 - Count of each tile kind in the agent's hand
        - visible: (4, 34) int8 - Revealed tiles of every player
        - discards: (34,) int8 - Discard pile counts
        - valid_actions: (14,) int8 - Hand slots that may be discarded
        - game_info: (6,) float32 - [round_wind, seat_wind, wall_remaining,
                                     turn_count, current_player, known_score]

    Action Space:
        Discrete(14): index of the hand slot to discard

    Rewards:
        final score / 100 when the agent wins, minus the winner's score / 200
        when another player wins, 0 otherwise. Choosing a slot that cannot be
        discarded costs 1 and a random valid slot is discarded instead.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 1}

    NUM_ACTIONS = WINNING_HAND_SIZE

    def __init__(
        self,
        player_idx: int = 0,
        opponent_policy: str = "tile_count",
        seed: Optional[int] = None,
        render_mode: Optional[str] = None,
    ):
        """
        Initialize the environment.

        Args:
            player_idx: Seat controlled by the agent (0-3)
            opponent_policy: Policy name for the other seats and the agent's pickups
            seed: Random seed for reproducibility
            render_mode: Rendering mode ("human" or "ansi")
        """
        super().__init__()

        self.player_idx = player_idx
        self.opponent_policy = opponent_policy
        self.render_mode = render_mode
        self._seed = seed

        self.game = Game(policies=self._make_policies(seed), seed=seed)
        self._rng = np.random.default_rng(seed)

        self.observation_space = spaces.Dict({
            "hand": spaces.Box(low=0, high=4, shape=(TileSet.NUM_TILE_TYPES,), dtype=np.int8),
            "visible": spaces.Box(low=0, high=4, shape=(NUM_PLAYERS, TileSet.NUM_TILE_TYPES), dtype=np.int8),
            "discards": spaces.Box(low=0, high=4, shape=(TileSet.NUM_TILE_TYPES,), dtype=np.int8),
            "valid_actions": spaces.Box(low=0, high=1, shape=(self.NUM_ACTIONS,), dtype=np.int8),
            "game_info": spaces.Box(low=-1, high=np.inf, shape=(6,), dtype=np.float32),
        })
        self.action_space = spaces.Discrete(self.NUM_ACTIONS)

        self._episode_reward = 0.0
        self._episode_length = 0

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict]:
        """
        Reset the environment to start a new round.

        Returns:
            Tuple of (observation, info)
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng = np.random.default_rng(seed)
            for player, policy in zip(self.game.players, self._make_policies(seed)):
                player.policy = policy

        self.game.reset(seed=seed)
        self._episode_reward = 0.0
        self._episode_length = 0

        self._run_until_agent_discards()
        return self._get_observation(), self._get_info()

    def _make_policies(self, seed: Optional[int]) -> List[Policy]:
        """One policy per seat, seeded from seed + seat"""
        return [make_policy(self.opponent_policy, seed=None if seed is None else seed + i)
                for i in range(NUM_PLAYERS)]

    def step(self, action: int) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict]:
        """
        Discard the tile in the chosen hand slot and play on until the agent
        has to discard again or the round ends.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.game.phase == GamePhase.GAME_OVER:
            return self._get_observation(), 0.0, True, False, self._get_info()

        self._episode_length += 1
        reward = 0.0

        valid = self.game.players[self.player_idx].hand.valid_discards()
        action = int(action)
        if action not in valid:
            reward -= 1.0
            action = int(self._rng.choice(valid))

        self.game.player_discard(self.player_idx, action)
        self._run_until_agent_discards()

        terminated = self.game.phase == GamePhase.GAME_OVER
        info = self._get_info()
        if terminated:
            result = self.game.finish_round()
            if result.winner == self.player_idx:
                reward += result.scores[self.player_idx] / 100.0
            elif result.winner is not None:
                reward -= result.scores[result.winner] / 200.0
            info["episode"] = {
                "r": self._episode_reward + reward,
                "l": self._episode_length,
                "winner": result.winner,
            }

        self._episode_reward += reward
        return self._get_observation(), reward, terminated, False, info

    def _run_until_agent_discards(self) -> None:
        """Advance the round until the agent must discard or the round ends"""
        while self.game.phase != GamePhase.GAME_OVER:
            if self.game.phase == GamePhase.DISCARDING and self.game.current_player == self.player_idx:
                return
            self.game.advance()

    def _get_observation(self) -> Dict[str, np.ndarray]:
        player = self.game.players[self.player_idx]

        visible = np.zeros((NUM_PLAYERS, TileSet.NUM_TILE_TYPES), dtype=np.int8)
        for p in self.game.players:
            visible[p.number] = p.visible_hand().to_count_array()

        valid_actions = np.zeros(self.NUM_ACTIONS, dtype=np.int8)
        for index in player.hand.valid_discards():
            if index < self.NUM_ACTIONS:
                valid_actions[index] = 1

        game_info = np.array([
            self.game.round_wind,
            player.seat_wind,
            self.game.wall.remaining,
            self.game.turn_count,
            self.game.current_player,
            player.total_score(self.game.round_wind, full_hand=True),
        ], dtype=np.float32)

        return {
            "hand": player.hand.to_count_array(),
            "visible": visible,
            "discards": self.game.discard_pile.to_count_array(),
            "valid_actions": valid_actions,
            "game_info": game_info,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "turn": self.game.turn_count,
            "phase": self.game.phase.name,
            "current_player": self.game.current_player,
            "wall_remaining": self.game.wall.remaining,
            "winner": self.game.winner,
        }

    def render(self) -> Optional[str]:
        if self.render_mode == "human":
            print(self._render_ansi())
        elif self.render_mode == "ansi":
            return self._render_ansi()
        return None

    def _render_ansi(self) -> str:
        player = self.game.players[self.player_idx]
        lines = [
            f"=== DLX Mahjong - Turn {self.game.turn_count} ===",
            f"Phase: {self.game.phase.name}",
            f"Round wind: {self.game.round_wind.name}, seat wind: {player.seat_wind.name}",
            f"Wall Remaining: {self.game.wall.remaining}",
        ]
        if self.game.discard_pile.last is not None:
            lines.append(f"Last Discard: {self.game.discard_pile.last}")
        lines.append("")
        lines.append(f"--- Your Hand (Player {self.player_idx}) ---")
        lines.append(player.hand.describe())
        return "\n".join(lines)

    def close(self):
        pass


def register_envs():
    """Register the Mahjong environment with Gymnasium."""
    gym.register(
        id="DLXMahjong-v0",
        entry_point="envs.mahjong_env:DLXMahjongEnv",
        max_episode_steps=1000,
    )
