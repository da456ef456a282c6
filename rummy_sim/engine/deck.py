"""
Card model for Rummy simulation.
Handles card creation, parsing, shuffling, drawing and hands.
"""

import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from functools import total_ordering
from typing import Iterable, Optional


class Suit(Enum):
    CLUBS = "Clubs"
    DIAMONDS = "Diamonds"
    HEARTS = "Hearts"
    SPADES = "Spades"

    @property
    def short(self) -> str:
        return self.value[0]

    @property
    def order(self) -> int:
        return SUIT_ORDER[self]


class Rank(IntEnum):
    """Card ranks. The integer value is the rank value used for runs (Ace low)."""
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def short(self) -> str:
        return RANK_SYMBOLS.get(self, str(self.value))

    @property
    def points(self) -> int:
        """Deadwood value: Ace 1, pip cards face value, court cards 10."""
        return min(self.value, 10)


SUIT_ORDER = {suit: i for i, suit in enumerate(Suit)}
SUITS_BY_SHORT = {suit.short: suit for suit in Suit}
RANK_SYMBOLS = {Rank.ACE: "A", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K"}
RANKS_BY_SYMBOL = {rank.short: rank for rank in Rank}


@total_ordering
@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    @property
    def sort_key(self) -> tuple[int, int]:
        """Suit first, then rank: the display order of a hand."""
        return (SUIT_ORDER[self.suit], int(self.rank))

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.sort_key < other.sort_key

    @property
    def rank_value(self) -> int:
        """Numeric order for runs, 1..13."""
        return int(self.rank)

    @property
    def points(self) -> int:
        """Point value of this card when it is deadwood."""
        return self.rank.points

    def __str__(self) -> str:
        return f"{self.rank.short}{self.suit.short}"

    def __repr__(self) -> str:
        return self.__str__()


def card_points(card: Card) -> int:
    return card.points


def parse_card(text: str) -> Card:
    """
    Parse card notation such as "5S", "10H", "QS", "AC".

    Numeric court ranks are accepted too ("1C", "11D", "13S").
    """
    token = text.strip().upper()
    if len(token) < 2:
        raise ValueError(f"Invalid card: {text!r}")

    rank_text, suit_text = token[:-1], token[-1]
    suit = SUITS_BY_SHORT.get(suit_text)
    if suit is None:
        raise ValueError(f"Invalid suit in card: {text!r}")

    if rank_text in RANKS_BY_SYMBOL:
        rank = RANKS_BY_SYMBOL[rank_text]
    elif rank_text.isdigit() and 1 <= int(rank_text) <= 13:
        rank = Rank(int(rank_text))
    else:
        raise ValueError(f"Invalid rank in card: {text!r}")

    return Card(rank, suit)


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace- or comma-separated list of cards."""
    tokens = text.replace(",", " ").split()
    return [parse_card(t) for t in tokens]


@dataclass
class Deck:
    """The stockpile. The top of the deck is the end of the list."""
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def standard_52(cls) -> "Deck":
        """Create a standard 52-card deck."""
        cards = []
        for suit in Suit:
            for rank in Rank:
                cards.append(Card(rank, suit))
        return cls(cards=cards)

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Shuffle the deck with the given random source."""
        (rng or random).shuffle(self.cards)

    def draw(self) -> Card:
        """Draw the top card."""
        if not self.cards:
            raise IndexError("Cannot draw from an empty deck")
        return self.cards.pop()

    def remove_card(self, card: Card) -> bool:
        """Remove a specific card from deck. Returns True if found."""
        if card in self.cards:
            self.cards.remove(card)
            return True
        return False

    def arrange_top(self, cards: Iterable[Card]) -> None:
        """Move the given cards to the top, first card drawn first."""
        wanted = list(cards)
        for card in wanted:
            if not self.remove_card(card):
                raise ValueError(f"{card} is not in the deck")
        self.cards.extend(reversed(wanted))

    def is_empty(self) -> bool:
        return not self.cards

    def remaining(self) -> int:
        """Cards left to draw."""
        return len(self.cards)


class Hand:
    """Cards held by one player. Owned and mutated by the game loop only."""

    def __init__(self, cards: Iterable[Card] = None):
        self._cards: list[Card] = []
        for card in cards or []:
            self.add(card)

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def add(self, card: Card) -> None:
        if card in self._cards:
            raise ValueError(f"{card} is already in the hand")
        self._cards.append(card)

    def remove(self, card: Card) -> Card:
        """Remove and return the card."""
        if card not in self._cards:
            raise ValueError(f"{card} is not in the hand")
        self._cards.remove(card)
        return card

    def sorted_cards(self) -> list[Card]:
        return sorted(self._cards)

    def size(self) -> int:
        return len(self._cards)

    def __contains__(self, card: Card) -> bool:
        return card in self._cards

    def __iter__(self):
        return iter(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.sorted_cards())

    def __repr__(self) -> str:
        return f"Hand({self.__str__()})"
