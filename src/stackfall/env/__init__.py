"""Gymnasium environments for stackfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .falling_block_env import FallingBlockEnv

ENV_ID = "FallingBlocks-10x32-v0"

# Register the default falling-block environment (6 discrete actions)
register(
    id=ENV_ID,
    entry_point="stackfall.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["ENV_ID", "FallingBlockEnv"]
