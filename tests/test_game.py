"""Test configuration, dealing and the game loop."""

import random

import pytest

from conftest import cards
from rummy_sim.engine.deck import parse_card
from rummy_sim.engine.game import GameConfig, GameState, play_turn, simulate_game, simulate_round
from rummy_sim.engine.scoring import RoundOutcome
from rummy_sim.engine.strategy import BasicStrategy, Pile, SmartStrategy, first_declaration

KNOCK_HAND = cards("5S 6S 7S 9D 9C 9H KC KD KH 2H")
OPPONENT_12 = cards("2C 3C 4C 8H 8S 8D AD 2S 4D 5D")


class ScriptedStrategy:
    """Always draws from one pile and throws the drawn card straight back."""

    def __init__(self, pile=Pile.STOCK, declare=True):
        self.pile = pile
        self.declare = declare

    def choose_pile(self, hand, discard_top, game):
        return self.pile

    def select_discard(self, hand, drawn, pile, game):
        return drawn

    def choose_declaration(self, hand, game):
        return first_declaration(hand, game.mode) if self.declare else None


class TestGameConfig:

    def test_defaults(self):
        config = GameConfig()
        assert config.mode == "classic"
        assert config.starting_cards == 13
        assert config.knock_threshold == 7
        assert config.winning_score == 100
        assert config.first_player == 1
        assert config.gin_bonus == 0

    def test_from_properties(self):
        config = GameConfig.from_properties({
            "mode": " GIN ",
            "number_cards": "7",
            "knock_threshold": "5",
            "seed": "11",
            "player_name": "ignored",
        })
        assert config.mode == "gin"
        assert config.starting_cards == 7
        assert config.knock_threshold == 5
        assert config.seed == 11

    def test_computer_smart_property(self):
        assert GameConfig().computer_smart
        assert not GameConfig.from_properties({"computer_smart": "false"}).computer_smart
        assert GameConfig.from_properties({"computer_smart": " TRUE "}).computer_smart
        with pytest.raises(ValueError, match="computer_smart"):
            GameConfig.from_properties({"computer_smart": "maybe"})

    def test_from_properties_bad_number(self):
        with pytest.raises(ValueError, match="knock_threshold"):
            GameConfig.from_properties({"knock_threshold": "seven"})

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            GameState(GameConfig(mode="canasta"))


class TestStartRound:

    def test_gin_deal(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round()
        assert [h.size() for h in game.hands] == [10, 10]
        assert game.deck.remaining() == 32
        assert game.discard_top is None

    def test_classic_deal(self):
        game = GameState(GameConfig(mode="classic", starting_cards=7))
        game.start_round()
        assert [h.size() for h in game.hands] == [7, 7]
        assert game.deck.remaining() == 38

    def test_preset_hands_are_topped_up(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round(hands=[KNOCK_HAND[:9], []])
        assert all(c in game.hands[0] for c in KNOCK_HAND[:9])
        assert game.hands[0].size() == 10
        assert game.hands[1].size() == 10
        dealt = list(game.hands[0]) + list(game.hands[1]) + game.deck.cards
        assert len(set(dealt)) == 52

    def test_card_dealt_twice(self):
        game = GameState(GameConfig(mode="gin"))
        with pytest.raises(ValueError, match="dealt twice"):
            game.start_round(hands=[cards("5S"), cards("5S")])

    def test_stock_top(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round(hands=[KNOCK_HAND, OPPONENT_12], stock_top=cards("QH JH"))
        assert game.deck.draw() == parse_card("QH")
        assert game.deck.draw() == parse_card("JH")

    def test_logs_round_start(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round()
        event = game.history.events[-1]
        assert event.event_type == "round_start"
        assert event.data["starter"] == 1


class TestPlayTurn:

    def test_stock_draw(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round(hands=[KNOCK_HAND, OPPONENT_12], stock_top=cards("QH"))
        record = play_turn(game, 1, ScriptedStrategy(declare=False))
        assert record.pile == Pile.STOCK
        assert record.drawn == parse_card("QH")
        assert game.discard_top == parse_card("QH")
        assert game.hands[1].size() == 10

    def test_discard_draw(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round(hands=[KNOCK_HAND, OPPONENT_12], stock_top=cards("QH"))
        play_turn(game, 1, ScriptedStrategy(declare=False))
        record = play_turn(game, 0, ScriptedStrategy(pile=Pile.DISCARD, declare=False))
        assert record.pile == Pile.DISCARD
        assert record.drawn == parse_card("QH")
        assert game.deck.remaining() == 31

    def test_empty_discard_falls_back_to_stock(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round()
        record = play_turn(game, 0, ScriptedStrategy(pile=Pile.DISCARD, declare=False))
        assert record.pile == Pile.STOCK

    def test_declaration(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round(hands=[KNOCK_HAND, OPPONENT_12])
        record = play_turn(game, 0, ScriptedStrategy())
        assert record.declaration.value == "KNOCK"
        assert record.declaration_valid
        assert game.mode.has_active_declaration()


class TestSimulateRound:

    def test_ends_on_declaration(self):
        game = GameState(GameConfig(mode="gin", first_player=0))
        game.start_round(hands=[KNOCK_HAND, OPPONENT_12])
        result = simulate_round(game, [ScriptedStrategy(), ScriptedStrategy()])
        assert result.outcome == RoundOutcome.KNOCK
        assert result.winner == 0
        assert game.scores == [10, 0]
        assert len(game.history.turns(0)) == 1
        assert game.round_starter == 0
        assert game.round_number == 1

    def test_stock_exhausted(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round()
        strategies = [ScriptedStrategy(declare=False), ScriptedStrategy(declare=False)]
        result = simulate_round(game, strategies)
        assert result.outcome in (RoundOutcome.STOCK_EXHAUSTED, RoundOutcome.STOCK_TIE)
        assert game.deck.is_empty()
        assert len(game.history.turns(0)) == 32

    def test_turn_limit(self):
        game = GameState(GameConfig(mode="gin", max_turns=5))
        game.start_round()
        strategies = [ScriptedStrategy(pile=Pile.DISCARD, declare=False)] * 2
        result = simulate_round(game, strategies)
        assert result.outcome == RoundOutcome.NO_RESULT
        assert game.scores == [0, 0]
        assert len(game.history.turns(0)) == 10
        assert game.deck.remaining() == 31

    def test_turn_limit_keeps_starter(self):
        game = GameState(GameConfig(mode="gin", max_turns=3, first_player=1))
        game.start_round()
        strategies = [ScriptedStrategy(pile=Pile.DISCARD, declare=False)] * 2
        result = simulate_round(game, strategies)
        assert result.outcome == RoundOutcome.NO_RESULT
        assert game.round_starter == 1

    @pytest.mark.parametrize("seed", [7, 9, 12])
    @pytest.mark.parametrize("mode", ["gin", "classic"])
    def test_smart_players_finish_round(self, seed, mode):
        # Each card can leave the discard pile at most once, so a round is
        # over well before 60 turn pairs
        game = GameState(GameConfig(mode=mode, seed=seed, max_turns=60))
        game.start_round()
        result = simulate_round(game, [SmartStrategy(), SmartStrategy()])
        assert result.outcome != RoundOutcome.NO_RESULT

    def test_smart_player_never_retakes_own_discard(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round()
        strategy = SmartStrategy()
        card = parse_card("7S")
        hand = cards("5S 6S 9D")

        game.current_player = 0
        assert strategy.choose_pile(hand, card, game) == Pile.DISCARD
        game.discarded[0].add(card)
        assert strategy.choose_pile(hand, card, game) == Pile.STOCK
        game.current_player = 1
        assert strategy.choose_pile(hand, card, game) == Pile.DISCARD

    def test_discards_tracked_per_round(self):
        game = GameState(GameConfig(mode="gin"))
        game.start_round(hands=[KNOCK_HAND, OPPONENT_12], stock_top=cards("QH"))
        play_turn(game, 1, ScriptedStrategy(declare=False))
        assert game.discarded_by(1, parse_card("QH"))
        assert not game.discarded_by(0, parse_card("QH"))
        game.start_round()
        assert not game.discarded_by(1, parse_card("QH"))

    def test_logs_round_end(self):
        game = GameState(GameConfig(mode="gin", first_player=0))
        game.start_round(hands=[KNOCK_HAND, OPPONENT_12])
        simulate_round(game, [ScriptedStrategy(), ScriptedStrategy()])
        event = game.history.events[-1]
        assert event.event_type == "round_end"
        assert event.data["outcome"] == "KNOCK"
        assert event.data["deadwood"] == [2, 12]
        assert event.data["scores"] == [10, 0]


class TestSimulateGame:

    def test_runs_to_completion(self):
        config = GameConfig(mode="gin", winning_score=50, seed=5)
        result = simulate_game(config)
        assert max(result.scores) >= 50 or len(result.rounds) == config.max_rounds
        assert result.winners == [i for i, s in enumerate(result.scores) if s == max(result.scores)]
        assert result.history.events[-1].event_type == "game_end"

    def test_reproducible(self):
        config = GameConfig(mode="classic", winning_score=40, seed=3)
        assert simulate_game(config).scores == simulate_game(config).scores

    def test_round_limit(self):
        config = GameConfig(mode="gin", winning_score=10 ** 6, max_rounds=3, seed=8)
        result = simulate_game(config)
        assert len(result.rounds) == 3

    def test_basic_players(self):
        config = GameConfig(mode="gin", winning_score=30, seed=2)
        strategies = [BasicStrategy(random.Random(1)), BasicStrategy(random.Random(2))]
        result = simulate_game(config, strategies)
        assert result.winner in (0, 1, None)

    def test_computer_smart_off_plays_random_first_player(self):
        config = GameConfig(mode="gin", winning_score=20, seed=4, computer_smart=False)
        result = simulate_game(config)
        start = result.history.events[0]
        assert start.data["players"] == ["BasicStrategy", "SmartStrategy"]

    def test_needs_two_strategies(self):
        with pytest.raises(ValueError):
            simulate_game(GameConfig(), [BasicStrategy()])

    def test_verbose(self, capsys):
        simulate_game(GameConfig(mode="gin", winning_score=20, seed=4), verbose=True)
        assert "Game over" in capsys.readouterr().out
