"""
Game modes for Rummy simulation.

Each mode owns its declaration rules and the declaration pending for the
current round, and scores the round when it ends.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from .deck import Card
from .meld_detector import MeldAnalysis, MeldDetector
from .scoring import (
    RoundOutcome,
    RoundResult,
    award_declaration,
    award_knock,
    award_stock_exhausted,
    check_scores,
    no_result,
)


class Declaration(str, Enum):
    RUMMY = "RUMMY"
    GIN = "GIN"
    KNOCK = "KNOCK"


DeclarationLike = Union[Declaration, str]


def to_declaration(value: DeclarationLike) -> Optional[Declaration]:
    """Map a declaration or its name to a Declaration, None if unknown."""
    if isinstance(value, Declaration):
        return value
    try:
        return Declaration(str(value).strip().upper())
    except ValueError:
        return None


@dataclass(frozen=True)
class PendingDeclaration:
    player: int
    declaration: Declaration


class GameMode:
    """Shared behaviour for Classic and Gin rules."""

    name: str = ""
    supported_declarations: tuple[Declaration, ...] = ()

    def __init__(self, detector: MeldDetector = None):
        self.detector = detector or MeldDetector()
        self.pending: Optional[PendingDeclaration] = None

    def starting_card_count(self) -> int:
        raise NotImplementedError

    def supports(self, declaration: DeclarationLike) -> bool:
        return to_declaration(declaration) in self.supported_declarations

    def _qualifies(self, analysis: MeldAnalysis, declaration: Declaration) -> bool:
        raise NotImplementedError

    def can_declare(self, hand: Iterable[Card], declaration: DeclarationLike) -> bool:
        decl = to_declaration(declaration)
        if decl not in self.supported_declarations:
            return False
        return self._qualifies(self.detector.find_best_melds(hand), decl)

    def validate_declaration(self, hand: Iterable[Card], player: int,
                             declaration: DeclarationLike) -> bool:
        """
        Record a declaration if the hand supports it.

        Unsupported declarations are rejected without touching the pending
        state. A supported declaration the hand does not qualify for clears it.
        """
        decl = to_declaration(declaration)
        if decl not in self.supported_declarations:
            return False

        if self._qualifies(self.detector.find_best_melds(hand), decl):
            self.pending = PendingDeclaration(player, decl)
            return True

        self.pending = None
        return False

    def has_active_declaration(self) -> bool:
        return self.pending is not None

    def clear_declaration(self) -> None:
        self.pending = None

    def score_round(self, hands: Sequence[Iterable[Card]], scores: list[int],
                    stock_exhausted: bool = False,
                    analyses: Sequence[MeldAnalysis] = None) -> RoundResult:
        """Score the finished round into `scores` and clear the pending declaration."""
        check_scores(scores)
        if analyses is None:
            analyses = [self.detector.find_best_melds(h) for h in hands]
        if len(analyses) != len(scores):
            raise ValueError(f"Expected {len(scores)} hands, got {len(analyses)}")

        try:
            if self.pending is not None:
                return self._score_declaration(self.pending, analyses, scores)
            if stock_exhausted:
                return award_stock_exhausted(analyses, scores)
            return no_result(analyses)
        finally:
            self.clear_declaration()

    def _score_declaration(self, pending: PendingDeclaration,
                           analyses: Sequence[MeldAnalysis],
                           scores: list[int]) -> RoundResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class ClassicMode(GameMode):
    """Classic Rummy: configurable hand size, RUMMY only."""

    name = "Classic Rummy"
    supported_declarations = (Declaration.RUMMY,)

    def __init__(self, starting_cards: int = 13, detector: MeldDetector = None):
        super().__init__(detector)
        self.starting_cards = starting_cards

    def starting_card_count(self) -> int:
        return self.starting_cards

    def _qualifies(self, analysis: MeldAnalysis, declaration: Declaration) -> bool:
        return analysis.is_complete

    def _score_declaration(self, pending, analyses, scores):
        return award_declaration(analyses, scores, pending.player, RoundOutcome.RUMMY)


class GinMode(GameMode):
    """Gin Rummy: 10 cards, GIN on zero deadwood, KNOCK at or under the threshold."""

    name = "Gin Rummy"
    supported_declarations = (Declaration.GIN, Declaration.KNOCK)
    STARTING_CARDS = 10

    def __init__(self, knock_threshold: int = 7, gin_bonus: int = 0,
                 undercut_bonus: int = 0, detector: MeldDetector = None):
        super().__init__(detector)
        self.knock_threshold = knock_threshold
        self.gin_bonus = gin_bonus
        self.undercut_bonus = undercut_bonus

    def starting_card_count(self) -> int:
        return self.STARTING_CARDS

    def _qualifies(self, analysis: MeldAnalysis, declaration: Declaration) -> bool:
        if declaration == Declaration.GIN:
            return analysis.is_complete and analysis.deadwood_value == 0
        return analysis.deadwood_value <= self.knock_threshold

    def _score_declaration(self, pending, analyses, scores):
        if pending.declaration == Declaration.GIN:
            return award_declaration(analyses, scores, pending.player,
                                     RoundOutcome.GIN, bonus=self.gin_bonus)
        return award_knock(analyses, scores, pending.player,
                           undercut_bonus=self.undercut_bonus)


MODES = {
    "classic": ClassicMode,
    "gin": GinMode,
}


def create_mode(name: str, starting_cards: int = 13, knock_threshold: int = 7,
                gin_bonus: int = 0, undercut_bonus: int = 0) -> GameMode:
    """Build the mode for a configured mode name ("classic" or "gin")."""
    if name is None or not str(name).strip():
        raise ValueError("Game mode cannot be empty")

    key = str(name).strip().lower()
    if key == "classic":
        return ClassicMode(starting_cards=starting_cards)
    if key == "gin":
        return GinMode(knock_threshold=knock_threshold, gin_bonus=gin_bonus,
                       undercut_bonus=undercut_bonus)
    raise ValueError(f"Unknown game mode: {name!r}. Supported modes: {', '.join(MODES)}")
