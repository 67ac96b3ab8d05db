"""Headless runner: a player, a crowd of zombies, and a fixed number of frames."""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable, Sequence

from loguru import logger
from pygame.math import Vector3

from .__about__ import __version__
from .config import load_config
from .diagnostics import configure_logging, configure_logging_from_config
from .entities import ZombieState
from .gameplay.state import initialize_simulation, spawn_player, spawn_zombie
from .models import AgentHandle, SimulationData
from .rng import DeterministicRNG, seed_rng


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zombie-ai-sandbox",
        description="Run the zombie AI core against a headless world.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--zombies", type=int, default=12, help="zombies to spawn")
    parser.add_argument("--frames", type=int, default=600, help="frames to simulate")
    parser.add_argument("--dt", type=float, default=1 / 60, help="seconds per frame")
    parser.add_argument(
        "--jitter",
        type=float,
        default=0.0,
        help="random +/- fraction applied to dt each frame",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--spread",
        type=float,
        default=40.0,
        help="half-extent of the square zombies spawn in",
    )
    parser.add_argument(
        "--punch-every",
        type=int,
        default=0,
        help="player punches every N frames (0 disables)",
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    parser.add_argument("--log-level", default=None)
    return parser


def populate(
    sim: SimulationData, *, zombies: int, spread: float, rng: DeterministicRNG
) -> list[AgentHandle]:
    """Spawn the player and the crowd; returns the zombies' handles."""
    spawn_player(sim, Vector3(0.0, sim.world_tuning.ground_height, 0.0))
    handles: list[AgentHandle] = []
    for _ in range(max(0, zombies)):
        position = Vector3(
            rng.uniform(-spread, spread),
            sim.world_tuning.ground_height,
            rng.uniform(-spread, spread),
        )
        zombie = spawn_zombie(sim, position, rng=rng)
        assert zombie.handle is not None
        handles.append(zombie.handle)
    return handles


def summarize(
    sim: SimulationData, zombies: Iterable[AgentHandle]
) -> dict[str, int]:
    counts = Counter(zombie.state.value for zombie in sim.registry.zombies())
    summary = {state.value: counts.get(state.value, 0) for state in ZombieState}
    # Only zombie bodies count; a replaced player is destroyed too.
    crowd = set(zombies)
    summary["dead"] = sum(1 for handle in sim.world.destroyed if handle in crowd)
    return summary


def run(args: argparse.Namespace) -> dict[str, int]:
    if args.config is not None:
        config, _ = load_config(args.config)
    else:
        config, _ = load_config()
    if args.log_level:
        configure_logging(args.log_level)
    else:
        configure_logging_from_config(config)

    seed = seed_rng(args.seed)
    rng = DeterministicRNG(seed)
    logger.info(f"Sandbox seed {seed}")

    sim = initialize_simulation(config)
    crowd = populate(sim, zombies=args.zombies, spread=args.spread, rng=rng)

    jitter = max(0.0, min(1.0, args.jitter))
    for frame in range(max(0, args.frames)):
        dt = args.dt
        if jitter:
            dt *= 1.0 + rng.uniform(-jitter, jitter)
        if args.punch_every and frame % args.punch_every == 0 and sim.player is not None:
            sim.player.request_punch()
        sim.driver.tick(dt)

    return summarize(sim, crowd)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    summary = run(args)
    print(
        f"{args.frames} frames: "
        + ", ".join(f"{name}={count}" for name, count in summary.items())
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
