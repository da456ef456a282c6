"""
Rummy and Gin Rummy rules engine and simulator
"""

from .engine.deck import Card, Deck, Hand, Rank, Suit, parse_card, parse_cards
from .engine.meld_detector import MeldAnalysis, MeldDetector, find_best_melds
from .engine.modes import ClassicMode, Declaration, GinMode, create_mode
from .engine.evaluation import CardEvaluator, EvaluationResult
from .engine.strategy import BasicStrategy, DiscardSelector, SmartStrategy
from .engine.game import GameConfig, GameState, simulate_game

__version__ = "0.1.0"
