"""
Game history tracking for Rummy simulation.
Captures every turn and round result so a game can be reviewed or replayed.
"""

from dataclasses import dataclass, asdict
from typing import Optional
import json
from pathlib import Path


@dataclass
class GameEvent:
    """Single event in a game."""
    round_number: int
    event_type: str  # "game_start", "round_start", "turn", "round_end", "game_end"
    data: dict
    turn: Optional[int] = None
    timestamp: int = 0  # event sequence number


class GameHistory:
    """Captures the course of a game."""

    def __init__(self, mode: str, preset_name: str = "custom"):
        self.events: list[GameEvent] = []
        self.metadata = {
            "mode": mode,
            "preset": preset_name,
        }
        self._event_counter = 0

    def add_event(self, round_number: int, event_type: str, data: dict, turn: int = None):
        """Add an event to the history."""
        self.events.append(GameEvent(
            round_number=round_number,
            event_type=event_type,
            data=data,
            turn=turn,
            timestamp=self._event_counter
        ))
        self._event_counter += 1

    def add_game_start(self, starting_cards: int, players: list[str]):
        self.add_event(
            round_number=0,
            event_type="game_start",
            data={
                "starting_cards": starting_cards,
                "players": players,
            }
        )

    def add_round_start(self, round_number: int, starter: int, hands: list[list[str]]):
        """Log the dealt hands."""
        self.add_event(
            round_number=round_number,
            event_type="round_start",
            data={
                "starter": starter,
                "hands": hands,
            }
        )

    def add_turn(self, round_number: int, turn: int, player: int, pile: str,
                 drawn: str, discarded: str, declaration: str = None,
                 declaration_valid: bool = None):
        """Log one draw/discard/declare turn."""
        data = {
            "player": player,
            "pile": pile,
            "drawn": drawn,
            "discarded": discarded,
        }
        if declaration:
            data["declaration"] = declaration
            data["declaration_valid"] = declaration_valid

        self.add_event(
            round_number=round_number,
            event_type="turn",
            data=data,
            turn=turn
        )

    def add_round_end(self, round_number: int, outcome: str, winner: int,
                      points: int, recipient: Optional[int], deadwood: list[int],
                      scores: list[int]):
        self.add_event(
            round_number=round_number,
            event_type="round_end",
            data={
                "outcome": outcome,
                "winner": winner,
                "points": points,
                "recipient": recipient,
                "deadwood": deadwood,
                "scores": scores,
            }
        )

    def add_game_end(self, round_number: int, winners: list[int], scores: list[int]):
        self.add_event(
            round_number=round_number,
            event_type="game_end",
            data={
                "winners": winners,
                "scores": scores,
            }
        )

    def turns(self, round_number: int = None) -> list[GameEvent]:
        """Turn events, optionally for one round."""
        return [e for e in self.events
                if e.event_type == "turn"
                and (round_number is None or e.round_number == round_number)]

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "metadata": self.metadata,
            "events": [asdict(e) for e in self.events],
            "summary": self._generate_summary()
        }

    def _generate_summary(self) -> dict:
        round_ends = [e for e in self.events if e.event_type == "round_end"]
        game_end = next((e for e in self.events if e.event_type == "game_end"), None)

        outcomes = {}
        for e in round_ends:
            outcomes[e.data["outcome"]] = outcomes.get(e.data["outcome"], 0) + 1

        return {
            "rounds_played": len(round_ends),
            "turns_played": len(self.turns()),
            "outcomes": outcomes,
            "winners": game_end.data.get("winners") if game_end else [],
        }

    def save(self, filepath: str):
        """Save game history to JSON."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: str) -> 'GameHistory':
        """Load game history from JSON."""
        with open(filepath) as f:
            data = json.load(f)

        history = cls(
            mode=data["metadata"]["mode"],
            preset_name=data["metadata"]["preset"]
        )
        history.metadata = data["metadata"]

        for event_data in data["events"]:
            history.events.append(GameEvent(**event_data))
            history._event_counter = max(history._event_counter, event_data["timestamp"] + 1)

        return history
