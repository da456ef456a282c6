"""
Meld detection for Rummy simulation.
Finds the best way to split a hand into melds and deadwood.
"""

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum, auto
from itertools import combinations
from typing import Iterable

from .deck import Card


class MeldType(Enum):
    RUN = auto()   # 3+ consecutive cards of one suit
    SET = auto()   # 3-4 cards of one rank


@dataclass(frozen=True)
class Meld:
    """A validated run or set."""
    cards: tuple[Card, ...]
    meld_type: MeldType

    def __post_init__(self):
        cards = tuple(self.cards)
        object.__setattr__(self, "cards", cards)
        if len(cards) < 3:
            raise ValueError(f"A meld needs at least 3 cards, got {len(cards)}")
        if len(set(cards)) != len(cards):
            raise ValueError("A meld cannot repeat a card")

        if self.meld_type == MeldType.SET:
            if len(cards) > 4:
                raise ValueError("A set has at most 4 cards")
            if len({c.rank for c in cards}) != 1:
                raise ValueError("A set must share one rank")
        else:
            if len({c.suit for c in cards}) != 1:
                raise ValueError("A run must share one suit")
            values = sorted(c.rank_value for c in cards)
            if any(b - a != 1 for a, b in zip(values, values[1:])):
                raise ValueError("A run must be consecutive")

    @property
    def points(self) -> int:
        return sum(c.points for c in self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return "-".join(str(c) for c in self.cards)


@dataclass(frozen=True)
class MeldAnalysis:
    """Result of meld detection: chosen melds plus everything left over."""
    melds: tuple[Meld, ...]
    deadwood: tuple[Card, ...]

    @property
    def deadwood_value(self) -> int:
        return sum(c.points for c in self.deadwood)

    @property
    def melded_count(self) -> int:
        return sum(len(m) for m in self.melds)

    @property
    def is_complete(self) -> bool:
        """Every card is in a meld."""
        return not self.deadwood

    def __str__(self) -> str:
        melds = " | ".join(str(m) for m in self.melds) or "none"
        deadwood = ", ".join(str(c) for c in self.deadwood) or "none"
        return f"Melds: {melds}; Deadwood: {deadwood} ({self.deadwood_value})"


@dataclass(frozen=True)
class _Candidate:
    meld: Meld
    mask: int       # bit i set <=> card i of the canonical hand is used
    points: int


class MeldDetector:
    """Finds the best non-overlapping melds in a hand."""

    def find_set_candidates(self, cards: list[Card]) -> list[Meld]:
        """All sets: a 3-group as is, a 4-group plus each of its 3-card subsets."""
        by_rank = defaultdict(list)
        for card in cards:
            by_rank[card.rank].append(card)

        sets = []
        for rank in sorted(by_rank):
            group = by_rank[rank]
            if len(group) == 3:
                sets.append(Meld(tuple(group), MeldType.SET))
            elif len(group) == 4:
                sets.append(Meld(tuple(group), MeldType.SET))
                for subset in combinations(group, 3):
                    sets.append(Meld(subset, MeldType.SET))
        return sets

    def find_run_candidates(self, cards: list[Card]) -> list[Meld]:
        """All contiguous same-suit windows of length >= 3."""
        by_suit = defaultdict(list)
        for card in cards:
            by_suit[card.suit].append(card)

        runs = []
        for suit in sorted(by_suit, key=lambda s: s.order):
            suited = sorted(by_suit[suit], key=lambda c: c.rank_value)
            for start in range(len(suited)):
                end = start + 1
                while end < len(suited) and suited[end].rank_value - suited[end - 1].rank_value == 1:
                    end += 1
                    if end - start >= 3:
                        runs.append(Meld(tuple(suited[start:end]), MeldType.RUN))
        return runs

    def find_candidates(self, cards: list[Card]) -> list[Meld]:
        return self.find_set_candidates(cards) + self.find_run_candidates(cards)

    def find_best_melds(self, hand: Iterable[Card]) -> MeldAnalysis:
        """
        Pick the disjoint melds covering the most cards.

        Ties on coverage go to the lowest deadwood value; remaining ties keep
        the combination found first (sets are tried before runs).
        """
        cards = sorted(set(hand))
        if not cards:
            return MeldAnalysis(melds=(), deadwood=())

        index = {card: i for i, card in enumerate(cards)}
        candidates = []
        for meld in self.find_candidates(cards):
            mask = 0
            for card in meld.cards:
                mask |= 1 << index[card]
            candidates.append(_Candidate(meld, mask, meld.points))

        best_key = (0, 0)
        best_chosen: tuple[int, ...] = ()

        # Iterative DFS: each stack entry is (next candidate index, used mask,
        # chosen indices, melded count, melded points). Every disjoint subset is
        # visited exactly once because a branch only looks forward.
        stack = [(0, 0, (), 0, 0)]
        while stack:
            start, used, chosen, count, points = stack.pop()

            key = (count, points)  # max cards, then max melded points == min deadwood
            if key > best_key:
                best_key = key
                best_chosen = chosen

            # Push in reverse so candidates are explored in index order
            for i in range(len(candidates) - 1, start - 1, -1):
                candidate = candidates[i]
                if candidate.mask & used:
                    continue
                stack.append((
                    i + 1,
                    used | candidate.mask,
                    chosen + (i,),
                    count + len(candidate.meld),
                    points + candidate.points,
                ))

        melds = tuple(candidates[i].meld for i in best_chosen)
        covered = set()
        for meld in melds:
            covered.update(meld.cards)
        deadwood = tuple(c for c in cards if c not in covered)
        return MeldAnalysis(melds=melds, deadwood=deadwood)

    def is_fully_melded(self, hand: Iterable[Card]) -> bool:
        return self.find_best_melds(hand).is_complete

    def deadwood_value(self, hand: Iterable[Card]) -> int:
        return self.find_best_melds(hand).deadwood_value

    def melded_card_count(self, hand: Iterable[Card]) -> int:
        return self.find_best_melds(hand).melded_count


_default_detector = MeldDetector()


def find_best_melds(hand: Iterable[Card]) -> MeldAnalysis:
    """Convenience function to analyse a hand."""
    return _default_detector.find_best_melds(hand)


def is_fully_melded(hand: Iterable[Card]) -> bool:
    return _default_detector.is_fully_melded(hand)


def deadwood_value(hand: Iterable[Card]) -> int:
    return _default_detector.deadwood_value(hand)


def melded_card_count(hand: Iterable[Card]) -> int:
    return _default_detector.melded_card_count(hand)
