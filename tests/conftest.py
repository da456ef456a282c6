"""Pytest configuration and shared fixtures."""

import os
import random
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from rummy_sim.engine.deck import parse_cards
from rummy_sim.engine.evaluation import CardEvaluator
from rummy_sim.engine.meld_detector import MeldDetector
from rummy_sim.engine.modes import ClassicMode, GinMode


def cards(text):
    """Parse a card list such as "5S 6S 7S"."""
    return parse_cards(text)


@pytest.fixture
def detector():
    return MeldDetector()


@pytest.fixture
def evaluator(detector):
    return CardEvaluator(detector)


@pytest.fixture
def classic():
    return ClassicMode()


@pytest.fixture
def gin():
    return GinMode(knock_threshold=7)


@pytest.fixture
def rng():
    """Provide a reproducible random source."""
    return random.Random(42)


@pytest.fixture
def sample_hand():
    """The 11-card hand with one run, one set and 26 points of deadwood.

    Melds: 5S-6S-7S run, 9D-9C-9H set
    Deadwood: 2D, 3C, 10H, QS, AC = 2 + 3 + 10 + 10 + 1 = 26
    """
    return cards("5S 6S 7S 9D 9C 9H 2D 3C 10H QS AC")
