"""
Rummy simulation engine components.
"""

from .deck import Card, Deck, Hand, Rank, Suit, card_points, parse_card, parse_cards
from .meld_detector import (
    Meld, MeldAnalysis, MeldDetector, MeldType,
    deadwood_value, find_best_melds, is_fully_melded, melded_card_count,
)
from .scoring import RoundOutcome, RoundResult
from .modes import ClassicMode, Declaration, GameMode, GinMode, PendingDeclaration, create_mode
from .evaluation import CardEvaluator, EvaluationResult
from .strategy import BasicStrategy, DiscardSelector, Pile, SmartStrategy
from .history import GameEvent, GameHistory
from .game import GameConfig, GameResult, GameState, TurnRecord, play_turn, simulate_game, simulate_round
