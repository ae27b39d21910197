"""
DLX Mahjong
Hand evaluation with an exact-cover (dancing links) win check, plus a
four-player game engine built on it.
"""

from .tiles import Tile, Suit, Wind, Dragon, TileSet, circle, bamboo, character, wind, dragon
from .groups import Group, GroupType, enumerate_groups, find_chow_starter_ranks
from .dlx import ExactCoverSolver, find_exact_covers
from .scoring import (
    Visibility, ScoreKey, ScoreEntry, ScoreTable, ScoreTableError, ScoreEngine,
    DEFAULT_SCORE_TABLE, mahjong_bonus, final_score,
)
from .wall import Wall, DiscardPile
from .hand import Hand, PickupAction, is_winning_hand, max_score, visible_score
from .state import GameState
from .policy import Policy, RandomPolicy, TileCountPolicy, make_policy
from .player import Player
from .game import Game, GamePhase, RoundResult, SCORE_CAP

__version__ = "0.1.0"
__all__ = [
    "Tile",
    "Suit",
    "Wind",
    "Dragon",
    "TileSet",
    "circle",
    "bamboo",
    "character",
    "wind",
    "dragon",
    "Group",
    "GroupType",
    "enumerate_groups",
    "find_chow_starter_ranks",
    "ExactCoverSolver",
    "find_exact_covers",
    "Visibility",
    "ScoreKey",
    "ScoreEntry",
    "ScoreTable",
    "ScoreTableError",
    "ScoreEngine",
    "DEFAULT_SCORE_TABLE",
    "mahjong_bonus",
    "final_score",
    "Wall",
    "DiscardPile",
    "Hand",
    "PickupAction",
    "is_winning_hand",
    "max_score",
    "visible_score",
    "GameState",
    "Policy",
    "RandomPolicy",
    "TileCountPolicy",
    "make_policy",
    "Player",
    "Game",
    "GamePhase",
    "RoundResult",
    "SCORE_CAP",
]
