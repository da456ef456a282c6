"""
Scoring engine for Rummy simulation.
Turns deadwood values and declarations into round results.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Sequence

from .meld_detector import MeldAnalysis

NUM_PLAYERS = 2


class RoundOutcome(Enum):
    RUMMY = auto()            # Classic: all cards melded
    GIN = auto()              # Gin: zero deadwood
    KNOCK = auto()            # Knocker strictly lower
    UNDERCUT = auto()         # Knocker strictly higher
    KNOCK_TIE = auto()        # Equal deadwood after a knock
    STOCK_EXHAUSTED = auto()  # No declaration, lower deadwood wins
    STOCK_TIE = auto()        # No declaration, equal deadwood
    NO_RESULT = auto()        # Round stopped without declaration or exhaustion


@dataclass
class RoundResult:
    """Outcome of one scored round."""
    winner: int
    outcome: RoundOutcome
    points: int = 0
    recipient: Optional[int] = None
    deadwood: tuple[int, ...] = ()
    details: list[str] = field(default_factory=list)

    def add_detail(self, msg: str):
        self.details.append(msg)

    @property
    def scored(self) -> bool:
        return self.recipient is not None and self.points > 0


def opponent_of(player: int) -> int:
    return (player + 1) % NUM_PLAYERS


def check_scores(scores: list[int]) -> None:
    if len(scores) != NUM_PLAYERS:
        raise ValueError(f"Expected {NUM_PLAYERS} scores, got {len(scores)}")


def _award(scores: list[int], player: int, points: int, result: RoundResult) -> None:
    result.recipient = player
    result.points = points
    scores[player] += points
    result.add_detail(f"P{player} +{points}")


def award_declaration(analyses: Sequence[MeldAnalysis], scores: list[int],
                      declarer: int, outcome: RoundOutcome,
                      bonus: int = 0) -> RoundResult:
    """Rummy or Gin: the declarer takes the opponent's deadwood (plus any bonus)."""
    deadwood = tuple(a.deadwood_value for a in analyses)
    opponent = opponent_of(declarer)
    result = RoundResult(winner=declarer, outcome=outcome, deadwood=deadwood)
    result.add_detail(f"P{declarer} declares {outcome.name}; P{opponent} deadwood {deadwood[opponent]}")

    points = deadwood[opponent] + bonus
    if bonus:
        result.add_detail(f"{outcome.name} bonus {bonus}")
    _award(scores, declarer, points, result)
    return result


def award_knock(analyses: Sequence[MeldAnalysis], scores: list[int],
                knocker: int, undercut_bonus: int = 0) -> RoundResult:
    """Compare the knocker against the opponent and pay the difference."""
    deadwood = tuple(a.deadwood_value for a in analyses)
    opponent = opponent_of(knocker)
    knocker_dw, opponent_dw = deadwood[knocker], deadwood[opponent]

    if knocker_dw < opponent_dw:
        result = RoundResult(winner=knocker, outcome=RoundOutcome.KNOCK, deadwood=deadwood)
        result.add_detail(f"P{knocker} knocks with {knocker_dw} against {opponent_dw}")
        _award(scores, knocker, opponent_dw - knocker_dw, result)
    elif knocker_dw > opponent_dw:
        result = RoundResult(winner=opponent, outcome=RoundOutcome.UNDERCUT, deadwood=deadwood)
        result.add_detail(f"P{opponent} undercuts: {opponent_dw} against {knocker_dw}")
        if undercut_bonus:
            result.add_detail(f"UNDERCUT bonus {undercut_bonus}")
        _award(scores, opponent, knocker_dw - opponent_dw + undercut_bonus, result)
    else:
        # Knocker keeps the lead for the next round
        result = RoundResult(winner=knocker, outcome=RoundOutcome.KNOCK_TIE, deadwood=deadwood)
        result.add_detail(f"Knock tie at {knocker_dw}, no points")
    return result


def award_stock_exhausted(analyses: Sequence[MeldAnalysis], scores: list[int]) -> RoundResult:
    """Lower deadwood takes the opponent's deadwood; a tie scores nothing."""
    deadwood = tuple(a.deadwood_value for a in analyses)
    d0, d1 = deadwood

    if d0 == d1:
        result = RoundResult(winner=0, outcome=RoundOutcome.STOCK_TIE, deadwood=deadwood)
        result.add_detail(f"Stock exhausted, tie at {d0}, no points")
        return result

    winner = 0 if d0 < d1 else 1
    result = RoundResult(winner=winner, outcome=RoundOutcome.STOCK_EXHAUSTED, deadwood=deadwood)
    result.add_detail(f"Stock exhausted, P{winner} lower with {deadwood[winner]}")
    _award(scores, winner, deadwood[opponent_of(winner)], result)
    return result


def no_result(analyses: Sequence[MeldAnalysis]) -> RoundResult:
    result = RoundResult(winner=0, outcome=RoundOutcome.NO_RESULT,
                         deadwood=tuple(a.deadwood_value for a in analyses))
    result.add_detail("Round ended with no declaration and stock remaining")
    return result
