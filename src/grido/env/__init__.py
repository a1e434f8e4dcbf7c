"""Gymnasium environments for Grido."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Grido-16x12-v0",
    entry_point="grido.env.grido_env:GridoEnv",
)

__all__ = ["Grido-16x12-v0"]
