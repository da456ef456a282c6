"""Test cards, parsing, the deck and hands."""

import random

import pytest

from rummy_sim.engine.deck import (
    Card, Deck, Hand, Rank, Suit, card_points, parse_card, parse_cards,
)


class TestCardValues:
    """Deadwood points for every card in the deck."""

    @pytest.mark.parametrize("rank", list(Rank))
    @pytest.mark.parametrize("suit", list(Suit))
    def test_point_table(self, rank, suit):
        expected = 10 if rank.value >= 10 else rank.value
        assert card_points(Card(rank, suit)) == expected

    def test_ace_is_one(self):
        assert parse_card("AS").points == 1

    def test_court_cards_are_ten(self):
        assert [c.points for c in parse_cards("10H JH QH KH")] == [10, 10, 10, 10]

    def test_rank_value_is_ace_low(self):
        assert parse_card("AC").rank_value == 1
        assert parse_card("KC").rank_value == 13


class TestParsing:

    def test_symbols(self):
        assert parse_card("QS") == Card(Rank.QUEEN, Suit.SPADES)
        assert parse_card("10h") == Card(Rank.TEN, Suit.HEARTS)

    def test_numeric_court_ranks(self):
        assert parse_card("13S") == Card(Rank.KING, Suit.SPADES)
        assert parse_card("1C") == Card(Rank.ACE, Suit.CLUBS)

    def test_round_trip_str(self):
        for text in ("AC", "2D", "10H", "JS", "KD"):
            assert str(parse_card(text)) == text

    def test_list_separators(self):
        assert parse_cards("5S, 6S 7S") == parse_cards("5S 6S 7S")

    @pytest.mark.parametrize("text", ["", "S", "5X", "0S", "14H", "ZZ"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_card(text)


class TestOrdering:

    def test_suit_then_rank(self):
        hand = parse_cards("2S KC AD 5C")
        assert [str(c) for c in sorted(hand)] == ["5C", "KC", "AD", "2S"]


class TestDeck:

    def test_standard_52(self):
        deck = Deck.standard_52()
        assert deck.remaining() == 52
        assert len(set(deck.cards)) == 52

    def test_shuffle_is_reproducible(self):
        a, b = Deck.standard_52(), Deck.standard_52()
        a.shuffle(random.Random(7))
        b.shuffle(random.Random(7))
        assert a.cards == b.cards

    def test_draw_until_empty(self):
        deck = Deck(cards=parse_cards("AC 2C"))
        assert deck.draw() == parse_card("2C")
        assert deck.draw() == parse_card("AC")
        assert deck.is_empty()
        with pytest.raises(IndexError):
            deck.draw()

    def test_remove_card(self):
        deck = Deck.standard_52()
        assert deck.remove_card(parse_card("QS"))
        assert not deck.remove_card(parse_card("QS"))
        assert deck.remaining() == 51

    def test_arrange_top(self):
        deck = Deck.standard_52()
        deck.arrange_top(parse_cards("7H 2C"))
        assert deck.draw() == parse_card("7H")
        assert deck.draw() == parse_card("2C")
        assert deck.remaining() == 50

    def test_arrange_top_missing_card(self):
        deck = Deck(cards=parse_cards("AC"))
        with pytest.raises(ValueError):
            deck.arrange_top(parse_cards("KD"))


class TestHand:

    def test_add_and_remove(self):
        hand = Hand(parse_cards("5S 6S"))
        hand.add(parse_card("7S"))
        assert hand.size() == 3
        assert parse_card("7S") in hand
        assert hand.remove(parse_card("5S")) == parse_card("5S")
        assert len(hand) == 2

    def test_duplicate_rejected(self):
        hand = Hand(parse_cards("5S"))
        with pytest.raises(ValueError):
            hand.add(parse_card("5S"))

    def test_remove_missing(self):
        with pytest.raises(ValueError):
            Hand().remove(parse_card("5S"))

    def test_str_is_sorted(self):
        assert str(Hand(parse_cards("KS 2C"))) == "2C, KS"
