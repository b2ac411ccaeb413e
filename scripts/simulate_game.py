"""Run computer-only Black Times games and summarise the outcomes.

Usage:
    uv run python scripts/simulate_game.py [--games N] [--seed S] [--size small]
        [--shape spiral] [--players 4] [--max-turns 200] [--parallel]
        [--chart turns.png]
"""

from __future__ import annotations

import argparse
import logging
import time
from collections import Counter

import numpy as np

from blacktimes.sim.core.enums import Difficulty, GalaxyShape, GalaxySize
from blacktimes.sim.core.game_state import GameConfig
from blacktimes.sim.runner import BatchRunner
from blacktimes.sim.telemetry import GameTelemetry


def summarise(telemetry: list[GameTelemetry]) -> None:
    turns = np.array([t.turns for t in telemetry])
    print(f"\nGames: {len(telemetry)}")
    print(f"  Avg turns: {turns.mean():.1f} (median {np.median(turns):.0f}, max {turns.max()})")

    outcomes = Counter(t.victory_type or "none" for t in telemetry)
    for outcome, count in outcomes.most_common():
        print(f"  {outcome:>14}: {count} ({count / len(telemetry) * 100:.1f}%)")

    races = Counter()
    for t in telemetry:
        for p in t.players:
            if p.player_id == t.winner_id:
                races[p.race_id] += 1
    if races:
        print("  Wins by race:")
        for race_id, count in races.most_common():
            print(f"    {race_id:>10}: {count}")


def plot_turns(telemetry: list[GameTelemetry], path: str) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.hist([t.turns for t in telemetry], bins=20, color="#4488ff", edgecolor="black", linewidth=0.5)
    ax.set_xlabel("Turns played")
    ax.set_ylabel("Games")
    ax.set_title(f"Game length over {len(telemetry)} games")
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    print(f"Chart saved to {path}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--seed", type=int, default=42, help="Seed of the first game")
    parser.add_argument("--size", choices=[s.value for s in GalaxySize], default=GalaxySize.SMALL.value)
    parser.add_argument("--shape", choices=[s.value for s in GalaxyShape], default=GalaxyShape.SPIRAL.value)
    parser.add_argument("--players", type=int, default=4)
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.NORMAL.value)
    parser.add_argument("--max-turns", type=int, default=200)
    parser.add_argument("--parallel", action="store_true")
    parser.add_argument("--chart", help="Write a histogram of game lengths to this path")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig(
        galaxy_size=args.size,
        galaxy_shape=args.shape,
        player_count=args.players,
        difficulty=args.difficulty,
        seed=args.seed,
    )
    runner = BatchRunner()
    t0 = time.time()
    telemetry = runner.run_batch(
        args.games, config, base_seed=args.seed,
        max_turns=args.max_turns, parallel=args.parallel,
    )
    elapsed = time.time() - t0
    print(f"Time: {elapsed:.1f}s ({elapsed / max(1, args.games) * 1000:.0f}ms/game)")

    summarise(telemetry)
    if args.chart:
        plot_turns(telemetry, args.chart)


if __name__ == "__main__":
    main()
