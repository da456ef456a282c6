#!/usr/bin/env python3
"""
Compare computer player line-ups for Rummy simulation.
"""

import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd

from rummy_sim.engine.game import GameState, simulate_round
from rummy_sim.engine.strategy import BasicStrategy, SmartStrategy
from rummy_sim.presets import get_preset, list_presets
from rummy_sim.simulator import Simulator


def compare_strategies(num_runs: int = 100, presets: list[str] = None) -> pd.DataFrame:
    """Run a batch per preset and compare results."""
    presets = presets or list_presets()
    sim = Simulator()

    print("=" * 70)
    print(f"STRATEGY COMPARISON ({num_runs} games each)")
    print("=" * 70)

    rows = []
    frames = []
    for name in presets:
        preset = get_preset(name)
        print(f"\nTesting: {preset.name}...", end=" ", flush=True)

        start_time = time.time()
        batch = sim.run_batch(name, runs=num_runs)
        elapsed = time.time() - start_time

        rows.append({
            "preset": name,
            "players": " vs ".join(s.value for s in preset.strategies),
            "p0_win_pct": batch.win_rates[0],
            "p1_win_pct": batch.win_rates[1],
            "draws": batch.draws,
            "avg_rounds": batch.avg_rounds,
            "time": elapsed,
        })

        frame = batch.to_frame()
        frame["preset"] = name
        frames.append(frame)

        print(f"Done ({elapsed:.1f}s)")

    results = pd.DataFrame(rows).set_index("preset")

    # Print results table
    print("\n" + "=" * 70)
    print("RESULTS")
    print("=" * 70)
    print(f"{'Preset':<16} {'Players':<16} {'P0 %':>7} {'P1 %':>7} {'Draws':>6} {'Rounds':>8}")
    print("-" * 70)
    for name, stats in results.iterrows():
        print(f"{name:<16} {stats['players']:<16} {stats['p0_win_pct']:>6.1f}% "
              f"{stats['p1_win_pct']:>6.1f}% {stats['draws']:>6} {stats['avg_rounds']:>8.1f}")

    rounds = pd.concat(frames, ignore_index=True)
    if not rounds.empty:
        print("\nRound outcomes per preset:")
        outcomes = rounds.groupby(["preset", "outcome"]).size().unstack(fill_value=0)
        print(outcomes.to_string())

        print("\nAverage deadwood at round end:")
        deadwood = rounds.groupby("preset")[["deadwood_p0", "deadwood_p1"]].mean().round(1)
        print(deadwood.to_string())

    return results


def detailed_single_game(preset_name: str = "gin"):
    """Run a single game with every turn printed."""
    preset = get_preset(preset_name)
    if preset is None:
        print(f"Unknown preset: {preset_name}. Available: {', '.join(list_presets())}")
        return

    sim = Simulator()
    config = sim.build_config(preset)
    strategies = [SmartStrategy() if s.value == "smart" else BasicStrategy() for s in preset.strategies]

    print("=" * 70)
    print(f"DETAILED GAME - {preset.name}")
    print("=" * 70)

    game = GameState(config=config, preset_name=preset_name)
    while True:
        game.start_round()
        for player, hand in enumerate(game.hands):
            print(f"P{player} dealt: {hand}")

        result = simulate_round(game, strategies)
        for event in game.history.turns(game.round_number - 1):
            d = event.data
            line = f"  Turn {event.turn:>3} P{d['player']}: {d['pile']:<7} +{d['drawn']:<4} -{d['discarded']}"
            if "declaration" in d:
                line += f"  {d['declaration']} ({'valid' if d['declaration_valid'] else 'invalid'})"
            print(line)

        print(f"Round {game.round_number - 1}: {result.outcome.name}")
        for detail in result.details:
            print(f"  {detail}")
        print(f"  Scores: P0={game.scores[0]} P1={game.scores[1]}")
        print()

        if max(game.scores) >= config.winning_score or game.round_number >= config.max_rounds:
            break

    print("=" * 70)
    print(f"GAME OVER after {game.round_number} rounds")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Compare Rummy computer players")
    parser.add_argument("--runs", type=int, default=100, help="Number of games per preset")
    parser.add_argument("--preset", action="append", help="Preset to compare (repeatable)")
    parser.add_argument("--detailed", type=str, help="Run detailed single game with preset")

    args = parser.parse_args()

    if args.detailed:
        detailed_single_game(args.detailed)
    else:
        compare_strategies(num_runs=args.runs, presets=args.preset)
