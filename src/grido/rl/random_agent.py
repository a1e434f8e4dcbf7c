from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

import gymnasium as gym

import grido.env  # noqa: F401  ensure registration
from grido.game import TextCanvas, compose_frame, render_frame
from grido.utils.logging import setup_logger

logger = logging.getLogger("grido.rl.random_agent")


def run_random(steps: int = 2000, seed: Optional[int] = None, show: bool = False) -> float:
    env = gym.make("Grido-16x12-v0")
    rng = random.Random(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = rng.randrange(int(env.action_space.n))
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d finished: score %d, level %d", episodes, info["score"], info["level"])
            obs, info = env.reset()
    if show:
        frame = compose_frame(env.unwrapped.game)
        canvas = TextCanvas(frame.width, frame.height)
        render_frame(frame, canvas)
        print(canvas)
    env.close()
    logger.info("random agent total reward: %.2f over %d steps", total_reward, steps)
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Drive Grido with uniformly random actions")
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--show", action="store_true", help="print the final frame")
    p.add_argument("--log-level", type=str, default="info")
    return p


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="grido", level=args.log_level)
    run_random(steps=args.steps, seed=args.seed, show=args.show)


if __name__ == "__main__":  # pragma: no cover
    main()
