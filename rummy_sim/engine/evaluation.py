"""
Card evaluation for the smart computer player.

A card is worth keeping when any of four independent criteria holds:

1. immediate_meld  - adding it melds more cards than before
2. rank_gap        - it narrows the tightest rank gap within its suit
3. suit_count      - it makes its suit the largest suit group in hand
4. deadwood_rank   - it pairs up with unmelded cards of the same rank
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional

from .deck import Card
from .meld_detector import MeldDetector

CRITERIA = ("immediate_meld", "rank_gap", "suit_count", "deadwood_rank")


@dataclass(frozen=True)
class EvaluationResult:
    """Which criteria a card satisfies."""
    immediate_meld: bool
    rank_gap: bool
    suit_count: bool
    deadwood_rank: bool

    def as_tuple(self) -> tuple[bool, bool, bool, bool]:
        return (self.immediate_meld, self.rank_gap, self.suit_count, self.deadwood_rank)

    @property
    def satisfies_any(self) -> bool:
        return any(self.as_tuple())

    @property
    def criteria_count(self) -> int:
        return sum(self.as_tuple())

    def __str__(self) -> str:
        flags = ", ".join(f"{name}={value}" for name, value in zip(CRITERIA, self.as_tuple()))
        return f"{self.criteria_count}/4 ({flags})"


def _min_rank_gap(cards: list[Card]) -> Optional[int]:
    """Smallest number of missing ranks between neighbours, None for < 2 cards."""
    if len(cards) < 2:
        return None
    values = sorted(c.rank_value for c in cards)
    return min(b - a - 1 for a, b in zip(values, values[1:]))


def immediate_meld(card: Card, hand: Iterable[Card], detector: MeldDetector = None) -> bool:
    detector = detector or MeldDetector()
    cards = list(hand)
    before = detector.find_best_melds(cards).melded_count
    after = detector.find_best_melds(cards + [card]).melded_count
    return after > before


def rank_gap(card: Card, hand: Iterable[Card], detector: MeldDetector = None) -> bool:
    suited = [c for c in hand if c.suit == card.suit]
    if not suited:
        return True

    before = _min_rank_gap(suited)
    after = _min_rank_gap(suited + [card])
    if before is None:
        return after is not None
    return after < before


def suit_count(card: Card, hand: Iterable[Card], detector: MeldDetector = None) -> bool:
    counts = Counter(c.suit for c in hand)
    current_max = max(counts.values(), default=0)
    return counts[card.suit] + 1 > current_max


def deadwood_rank(card: Card, hand: Iterable[Card], detector: MeldDetector = None) -> bool:
    detector = detector or MeldDetector()
    analysis = detector.find_best_melds(list(hand) + [card])
    same_rank = sum(1 for c in analysis.deadwood if c.rank == card.rank)
    return same_rank > 1


class CardEvaluator:
    """Evaluates a candidate card against a hand that does not hold it."""

    def __init__(self, detector: MeldDetector = None):
        self.detector = detector or MeldDetector()

    def evaluate(self, card: Card, hand: Iterable[Card]) -> EvaluationResult:
        cards = [c for c in hand if c != card]
        return EvaluationResult(
            immediate_meld=immediate_meld(card, cards, self.detector),
            rank_gap=rank_gap(card, cards, self.detector),
            suit_count=suit_count(card, cards, self.detector),
            deadwood_rank=deadwood_rank(card, cards, self.detector),
        )

    def should_keep(self, card: Card, hand: Iterable[Card]) -> bool:
        return self.evaluate(card, hand).satisfies_any
