"""
Computer player strategies for Rummy simulation.
"""

import random
from collections import Counter
from enum import Enum
from typing import Iterable, Optional

from .deck import Card
from .evaluation import CardEvaluator
from .meld_detector import MeldDetector
from .modes import Declaration, GameMode


class Pile(Enum):
    STOCK = "stock"
    DISCARD = "discard"


class DiscardSelector:
    """Picks the least useful deadwood card from a hand holding one extra card."""

    def __init__(self, evaluator: CardEvaluator = None):
        self.evaluator = evaluator or CardEvaluator()

    @property
    def detector(self) -> MeldDetector:
        return self.evaluator.detector

    def select(self, hand: Iterable[Card], exclude: Optional[Card] = None) -> Card:
        """
        Choose the card to discard. `exclude` (the card just taken from the
        discard pile) is never chosen unless it is the only card held.
        """
        cards = list(hand)
        if not cards:
            raise ValueError("Cannot select a discard from an empty hand")
        allowed = [c for c in cards if c != exclude] or cards

        all_deadwood = self.detector.find_best_melds(cards).deadwood
        deadwood = [c for c in all_deadwood if c in allowed]
        if not deadwood:
            # Nothing unmelded to give up, so break the first meld card
            return allowed[0]

        # 1. Fewest criteria satisfied when judged against the rest of the hand
        counts = {}
        for card in deadwood:
            rest = [c for c in cards if c != card]
            counts[card] = self.evaluator.evaluate(card, rest).criteria_count
        fewest = min(counts.values())
        tied = [c for c in deadwood if counts[c] == fewest]
        if len(tied) == 1:
            return tied[0]

        # 2. Scarcest suit among the deadwood
        suit_freq = Counter(c.suit for c in all_deadwood)
        scarcest = min(suit_freq[c.suit] for c in tied)
        tied = [c for c in tied if suit_freq[c.suit] == scarcest]

        # 3. Costliest card
        return max(tied, key=lambda c: c.points)


def first_declaration(hand: Iterable[Card], mode: GameMode) -> Optional[Declaration]:
    """The first declaration, in the mode's priority order, the hand qualifies for."""
    cards = list(hand)
    for declaration in mode.supported_declarations:
        if mode.can_declare(cards, declaration):
            return declaration
    return None


class BasicStrategy:
    """
    Random computer player.
    Flips a coin between piles, discards a random card, and declares
    whenever the hand allows it.
    """

    def __init__(self, rng: random.Random = None):
        self.rng = rng or random.Random()

    def choose_pile(self, hand: Iterable[Card], discard_top: Optional[Card], game) -> Pile:
        if discard_top is None:
            return Pile.STOCK
        return self.rng.choice([Pile.DISCARD, Pile.STOCK])

    def select_discard(self, hand: Iterable[Card], drawn: Card, pile: Pile, game) -> Card:
        choices = sorted(c for c in hand if pile == Pile.STOCK or c != drawn)
        return self.rng.choice(choices or sorted(hand))

    def choose_declaration(self, hand: Iterable[Card], game) -> Optional[Declaration]:
        return first_declaration(hand, game.mode)


class SmartStrategy:
    """
    Heuristic computer player.

    Takes the discard top only when it satisfies a keep criterion and is not
    a card this player already threw away this round; otherwise
    draws from stock and throws the drawn card straight back unless it is
    worth keeping. Kept cards push the discard choice to the DiscardSelector.
    """

    def __init__(self, evaluator: CardEvaluator = None):
        self.evaluator = evaluator or CardEvaluator()
        self.discard_selector = DiscardSelector(self.evaluator)

    def choose_pile(self, hand: Iterable[Card], discard_top: Optional[Card], game) -> Pile:
        if discard_top is None:
            return Pile.STOCK
        # Never take back a card thrown away earlier in the round
        if game is not None and game.discarded_by(game.current_player, discard_top):
            return Pile.STOCK
        if self.evaluator.should_keep(discard_top, hand):
            return Pile.DISCARD
        return Pile.STOCK

    def select_discard(self, hand: Iterable[Card], drawn: Card, pile: Pile, game) -> Card:
        cards = list(hand)
        if pile == Pile.STOCK:
            rest = [c for c in cards if c != drawn]
            if not self.evaluator.should_keep(drawn, rest):
                return drawn
            return self.discard_selector.select(cards)
        return self.discard_selector.select(cards, exclude=drawn)

    def choose_declaration(self, hand: Iterable[Card], game) -> Optional[Declaration]:
        return first_declaration(hand, game.mode)
