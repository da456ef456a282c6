"""
Main API for Rummy simulation.
Provides clean interface for running simulations.
"""

import random
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .engine.game import GameConfig, simulate_game
from .engine.strategy import BasicStrategy, SmartStrategy
from .presets import Preset, StrategyType, get_preset, list_presets


@dataclass
class RoundDetail:
    """Details of a single round."""
    round_number: int
    outcome: str
    winner: int
    points: int
    recipient: Optional[int]
    deadwood: list[int]
    scores: list[int]  # Totals after the round


@dataclass
class GameSummary:
    """Summary of a simulated game."""
    winners: list[int]
    final_scores: list[int]
    rounds_played: int
    preset_used: str
    round_history: list[RoundDetail] = field(default_factory=list)
    log_path: Optional[str] = None

    @property
    def winner(self) -> Optional[int]:
        return self.winners[0] if len(self.winners) == 1 else None

    def __str__(self):
        if self.winner is not None:
            result = f"P{self.winner} WINS"
        else:
            result = "DRAW"
        lines = [
            f"{'='*50}",
            f"  {result} - {self.rounds_played} rounds ({self.preset_used})",
            f"{'='*50}",
            f"  Final scores: P0={self.final_scores[0]}  P1={self.final_scores[1]}",
        ]
        for detail in self.round_history:
            lines.append(f"  Round {detail.round_number}: {detail.outcome:<16} "
                         f"P{detail.winner}  +{detail.points}  -> {detail.scores}")
        lines.append(f"{'='*50}")
        return "\n".join(lines)

    def to_dict(self):
        return {
            "winners": self.winners,
            "final_scores": self.final_scores,
            "rounds_played": self.rounds_played,
            "preset_used": self.preset_used,
        }


@dataclass
class BatchResult:
    """Results from multiple simulated games."""
    runs: int
    wins: list[int]          # Outright wins per player
    draws: int
    avg_rounds: float
    avg_scores: list[float]
    outcome_distribution: dict[str, int]
    preset_used: str
    games: list[GameSummary] = field(default_factory=list, repr=False)

    @property
    def win_rates(self) -> list[float]:
        return [w / self.runs * 100 for w in self.wins]

    def __str__(self):
        lines = [
            f"{'='*50}",
            f"  BATCH RESULTS ({self.runs} games)",
            f"  Preset: {self.preset_used}",
            f"{'='*50}",
            f"  P0 wins: {self.wins[0]}/{self.runs} ({self.win_rates[0]:.1f}%)",
            f"  P1 wins: {self.wins[1]}/{self.runs} ({self.win_rates[1]:.1f}%)",
            f"  Draws: {self.draws}",
            f"  Avg rounds per game: {self.avg_rounds:.1f}",
            f"  Avg final score: P0={self.avg_scores[0]:.1f}  P1={self.avg_scores[1]:.1f}",
            "",
            "  Round outcomes:",
        ]

        total = sum(self.outcome_distribution.values()) or 1
        for outcome, count in sorted(self.outcome_distribution.items(), key=lambda x: -x[1]):
            pct = count / total * 100
            bar = "█" * int(pct / 2)
            lines.append(f"    {outcome:<16} {count:>4} ({pct:>5.1f}%) {bar}")

        lines.append(f"{'='*50}")
        return "\n".join(lines)

    def to_dict(self):
        return {
            "runs": self.runs,
            "wins": self.wins,
            "draws": self.draws,
            "avg_rounds": self.avg_rounds,
            "avg_scores": self.avg_scores,
            "outcome_distribution": self.outcome_distribution,
            "preset_used": self.preset_used,
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per round played across the batch."""
        rows = []
        for game_index, game in enumerate(self.games):
            for detail in game.round_history:
                rows.append({
                    "game": game_index,
                    "round": detail.round_number,
                    "outcome": detail.outcome,
                    "winner": detail.winner,
                    "points": detail.points,
                    "recipient": detail.recipient,
                    "deadwood_p0": detail.deadwood[0],
                    "deadwood_p1": detail.deadwood[1],
                    "score_p0": detail.scores[0],
                    "score_p1": detail.scores[1],
                })
        columns = ["game", "round", "outcome", "winner", "points", "recipient",
                   "deadwood_p0", "deadwood_p1", "score_p0", "score_p1"]
        return pd.DataFrame(rows, columns=columns)


class Simulator:
    """
    Main simulator class.

    Usage:
        sim = Simulator()
        result = sim.run("gin")
        print(result)

        # Or run many:
        batch = sim.run_batch("classic_random", runs=100)
        print(batch)
    """

    def __init__(self, log_dir: str = None):
        """Save a JSON history of every game to `log_dir` when given."""
        self.log_dir = Path(log_dir) if log_dir else None

    def _get_strategy(self, strategy_type: StrategyType, rng: random.Random):
        """Get strategy instance from type."""
        if strategy_type == StrategyType.BASIC:
            return BasicStrategy(rng=rng)
        return SmartStrategy()

    def _resolve_preset(self, preset: Union[str, Preset]) -> tuple[Preset, str]:
        if isinstance(preset, str):
            p = get_preset(preset)
            if p is None:
                raise ValueError(f"Unknown preset: {preset}. Available: {list_presets()}")
            return p, preset
        return preset, preset.name

    def build_config(self, preset: Preset, seed: int = None) -> GameConfig:
        config = GameConfig(mode=preset.mode)
        for key, value in preset.config_overrides.items():
            if hasattr(config, key):
                setattr(config, key, value)
        if seed is not None:
            config.seed = seed
        return config

    def run(self, preset: Union[str, Preset] = "classic",
            verbose: bool = False, seed: int = None) -> GameSummary:
        """
        Run a single game.

        Args:
            preset: Preset name (string) or Preset object
            verbose: Print each round as it finishes
            seed: Overrides the configured seed

        Returns:
            GameSummary with results
        """
        p, preset_name = self._resolve_preset(preset)
        config = self.build_config(p, seed)

        strategies = []
        for player, strategy_type in enumerate(p.strategies):
            strategy_rng = random.Random(config.seed * 10 + player + 1) if config.seed is not None else None
            strategies.append(self._get_strategy(strategy_type, strategy_rng))

        result = simulate_game(config=config, strategies=strategies,
                               verbose=verbose, preset_name=preset_name)

        log_path = None
        if self.log_dir is not None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            log_path = str(self.log_dir / f"game_{timestamp}_{preset_name}.json")
            result.history.save(log_path)

        # Build round details from history events
        round_history = []
        for event in result.history.events:
            if event.event_type == "round_end":
                data = event.data
                round_history.append(RoundDetail(
                    round_number=event.round_number,
                    outcome=data["outcome"],
                    winner=data["winner"],
                    points=data["points"],
                    recipient=data["recipient"],
                    deadwood=data["deadwood"],
                    scores=data["scores"],
                ))

        return GameSummary(
            winners=result.winners,
            final_scores=result.scores,
            rounds_played=len(result.rounds),
            preset_used=preset_name,
            round_history=round_history,
            log_path=log_path,
        )

    def run_batch(self, preset: Union[str, Preset] = "classic",
                  runs: int = 100, verbose: bool = False, seed: int = None) -> BatchResult:
        """
        Run multiple games and aggregate results.

        Game i is seeded with `seed + i` (or the preset's configured seed + i).
        """
        if runs <= 0:
            raise ValueError("runs must be positive")

        p, preset_name = self._resolve_preset(preset)
        base_seed = seed if seed is not None else self.build_config(p).seed
        if base_seed is None:
            base_seed = random.randrange(2 ** 31)

        wins = [0, 0]
        draws = 0
        total_rounds = 0
        total_scores = [0, 0]
        outcome_distribution = {}
        games = []

        for i in range(runs):
            if verbose and (i + 1) % 10 == 0:
                print(f"  Game {i + 1}/{runs}...")

            summary = self.run(p, verbose=False, seed=base_seed + i)
            summary.preset_used = preset_name
            games.append(summary)

            if summary.winner is None:
                draws += 1
            else:
                wins[summary.winner] += 1
            total_rounds += summary.rounds_played
            for player in range(2):
                total_scores[player] += summary.final_scores[player]
            for detail in summary.round_history:
                outcome_distribution[detail.outcome] = outcome_distribution.get(detail.outcome, 0) + 1

        return BatchResult(
            runs=runs,
            wins=wins,
            draws=draws,
            avg_rounds=total_rounds / runs,
            avg_scores=[s / runs for s in total_scores],
            outcome_distribution=outcome_distribution,
            preset_used=preset_name,
            games=games,
        )


# Convenience functions
def run(preset: str = "classic", verbose: bool = False) -> GameSummary:
    """Quick run with default simulator."""
    sim = Simulator()
    return sim.run(preset, verbose)


def run_batch(preset: str = "classic", runs: int = 100, verbose: bool = False) -> BatchResult:
    """Quick batch run with default simulator."""
    sim = Simulator()
    return sim.run_batch(preset, runs, verbose)
