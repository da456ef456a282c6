"""
Game state and simulation loop for Rummy.
"""

import random
from dataclasses import dataclass, field, fields
from typing import Iterable, Mapping, Optional, Sequence

from .deck import Card, Deck, Hand
from .history import GameHistory
from .modes import Declaration, GameMode, create_mode
from .scoring import NUM_PLAYERS, RoundOutcome, RoundResult, opponent_of
from .strategy import BasicStrategy, Pile, SmartStrategy


@dataclass
class GameConfig:
    """Configuration for a game."""
    mode: str = "classic"
    starting_cards: int = 13     # Classic only, Gin always deals 10
    knock_threshold: int = 7
    winning_score: int = 100
    max_rounds: int = 50
    max_turns: int = 500         # Turn pairs per round, backstop only
    first_player: int = 1
    seed: Optional[int] = 30008
    # Gin extensions, off by default
    gin_bonus: int = 0
    undercut_bonus: int = 0
    # Player 0 plays the smart heuristic, or random moves when False
    computer_smart: bool = True

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "GameConfig":
        """Build a config from string properties such as a parsed .properties file."""
        config = cls()
        int_fields = {f.name for f in fields(cls) if f.name not in ("mode", "computer_smart")}
        for key, value in properties.items():
            name = PROPERTY_ALIASES.get(key, key)
            if name == "mode":
                config.mode = str(value).strip().lower()
            elif name == "computer_smart":
                config.computer_smart = parse_flag(key, value)
            elif name in int_fields:
                try:
                    setattr(config, name, int(str(value).strip()))
                except ValueError:
                    raise ValueError(f"Property {key!r} must be an integer, got {value!r}") from None
        return config

    def create_mode(self) -> GameMode:
        return create_mode(
            self.mode,
            starting_cards=self.starting_cards,
            knock_threshold=self.knock_threshold,
            gin_bonus=self.gin_bonus,
            undercut_bonus=self.undercut_bonus,
        )


PROPERTY_ALIASES = {
    "number_cards": "starting_cards",
}


def parse_flag(key: str, value) -> bool:
    text = str(value).strip().lower()
    if text in ("true", "yes", "1"):
        return True
    if text in ("false", "no", "0"):
        return False
    raise ValueError(f"Property {key!r} must be true or false, got {value!r}")


@dataclass
class TurnRecord:
    """What one player did in one turn."""
    round_number: int
    turn: int
    player: int
    pile: Pile
    drawn: Card
    discarded: Card
    declaration: Optional[Declaration] = None
    declaration_valid: Optional[bool] = None


@dataclass
class GameResult:
    """Result of a complete game."""
    winners: list[int]
    scores: list[int]
    rounds: list[RoundResult] = field(default_factory=list)
    history: Optional[GameHistory] = None

    @property
    def winner(self) -> Optional[int]:
        """The single winner, None when the game is drawn."""
        return self.winners[0] if len(self.winners) == 1 else None


class GameState:
    """
    Tracks the full state of a two-player game.
    """

    def __init__(self, config: GameConfig = None, rng: random.Random = None,
                 preset_name: str = "custom"):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.mode = self.config.create_mode()

        self.history = GameHistory(mode=self.mode.name, preset_name=preset_name)

        self.scores = [0] * NUM_PLAYERS
        self.round_number = 0
        self.round_starter = self.config.first_player

        # Round state
        self.deck = Deck()
        self.hands = [Hand() for _ in range(NUM_PLAYERS)]
        self.discard_pile: list[Card] = []
        self.discarded: list[set[Card]] = [set() for _ in range(NUM_PLAYERS)]
        self.current_player = self.round_starter

    @property
    def discard_top(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    def discarded_by(self, player: int, card: Card) -> bool:
        """Whether `player` has already thrown `card` away this round."""
        return card in self.discarded[player]

    def start_round(self, hands: Sequence[Iterable[Card]] = None,
                    stock_top: Iterable[Card] = None) -> None:
        """
        Shuffle and deal a new round.

        `hands` pre-seeds players' hands before the random deal tops them up;
        `stock_top` forces the next cards drawn from the stock.
        """
        self.mode.clear_declaration()
        self.deck = Deck.standard_52()
        self.deck.shuffle(self.rng)
        self.hands = [Hand() for _ in range(NUM_PLAYERS)]
        self.discard_pile = []
        self.discarded = [set() for _ in range(NUM_PLAYERS)]
        self.current_player = self.round_starter

        for player, cards in enumerate(hands or []):
            for card in cards:
                if not self.deck.remove_card(card):
                    raise ValueError(f"{card} dealt twice")
                self.hands[player].add(card)

        count = self.mode.starting_card_count()
        for hand in self.hands:
            while hand.size() < count and not self.deck.is_empty():
                hand.add(self.deck.draw())

        if stock_top:
            self.deck.arrange_top(stock_top)

        self.history.add_round_start(
            self.round_number,
            self.round_starter,
            [[str(c) for c in h.sorted_cards()] for h in self.hands],
        )


def play_turn(game: GameState, player: int, strategy, turn: int = 0) -> TurnRecord:
    """Draw, discard and optionally declare for one player."""
    game.current_player = player
    hand = game.hands[player]
    discard_top = game.discard_top

    pile = strategy.choose_pile(hand.cards, discard_top, game)
    if pile == Pile.DISCARD and discard_top is not None:
        drawn = game.discard_pile.pop()
    else:
        pile = Pile.STOCK
        drawn = game.deck.draw()
    hand.add(drawn)

    discarded = strategy.select_discard(hand.cards, drawn, pile, game)
    hand.remove(discarded)
    game.discard_pile.append(discarded)
    game.discarded[player].add(discarded)

    declaration = strategy.choose_declaration(hand.cards, game)
    valid = None
    if declaration is not None:
        valid = game.mode.validate_declaration(hand.cards, player, declaration)

    record = TurnRecord(
        round_number=game.round_number,
        turn=turn,
        player=player,
        pile=pile,
        drawn=drawn,
        discarded=discarded,
        declaration=declaration,
        declaration_valid=valid,
    )
    game.history.add_turn(
        game.round_number, turn, player, pile.value, str(drawn), str(discarded),
        declaration=declaration.value if declaration else None,
        declaration_valid=valid,
    )
    return record


def simulate_round(game: GameState, strategies: Sequence) -> RoundResult:
    """Play an already dealt round to its end and score it."""
    player = game.round_starter
    declared = False
    exhausted = game.deck.is_empty()
    turn = 0

    while not (declared or exhausted) and turn < game.config.max_turns:
        for _ in range(NUM_PLAYERS):
            record = play_turn(game, player, strategies[player], turn)
            if record.declaration_valid:
                declared = True
                break
            if game.deck.is_empty():
                exhausted = True
                break
            player = opponent_of(player)
        turn += 1

    result = game.mode.score_round(
        [h.cards for h in game.hands], game.scores, stock_exhausted=exhausted
    )
    if result.outcome != RoundOutcome.NO_RESULT:
        game.round_starter = result.winner
    game.history.add_round_end(
        game.round_number,
        result.outcome.name,
        result.winner,
        result.points,
        result.recipient,
        list(result.deadwood),
        list(game.scores),
    )
    game.round_number += 1
    return result


def simulate_game(config: GameConfig = None, strategies: Sequence = None,
                  rng: random.Random = None, verbose: bool = False,
                  preset_name: str = "custom") -> GameResult:
    """Simulate a complete game: rounds until someone reaches the winning score."""
    game = GameState(config=config, rng=rng, preset_name=preset_name)
    if strategies is None:
        first = SmartStrategy() if game.config.computer_smart else BasicStrategy(rng=game.rng)
        strategies = [first, SmartStrategy()]
    if len(strategies) != NUM_PLAYERS:
        raise ValueError(f"Expected {NUM_PLAYERS} strategies, got {len(strategies)}")

    game.history.add_game_start(
        game.mode.starting_card_count(),
        [type(s).__name__ for s in strategies],
    )

    rounds = []
    while True:
        game.start_round()
        result = simulate_round(game, strategies)
        rounds.append(result)

        if verbose:
            print(f"Round {game.round_number - 1}: {result.outcome.name} "
                  f"- P{result.winner} wins, scores P0={game.scores[0]} P1={game.scores[1]}")

        if max(game.scores) >= game.config.winning_score:
            break
        if game.round_number >= game.config.max_rounds:
            break

    top = max(game.scores)
    winners = [i for i, s in enumerate(game.scores) if s == top]
    game.history.add_game_end(game.round_number, winners, list(game.scores))

    if verbose:
        if len(winners) == 1:
            print(f"Game over. Winner is player: {winners[0]}")
        else:
            print(f"Game over. Drawn winners are players: {', '.join(map(str, winners))}")

    return GameResult(winners=winners, scores=list(game.scores), rounds=rounds, history=game.history)
