"""
Mahjong Gymnasium Environments
"""

from .mahjong_env import DLXMahjongEnv, register_envs

__all__ = ["DLXMahjongEnv", "register_envs"]
