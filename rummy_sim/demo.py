#!/usr/bin/env python3
"""
Demo script for Rummy simulation.
Shows meld detection, declarations, scoring, the smart player and a full game.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from rummy_sim.engine.deck import parse_cards
from rummy_sim.engine.meld_detector import find_best_melds
from rummy_sim.engine.modes import ClassicMode, Declaration, GinMode
from rummy_sim.engine.evaluation import CardEvaluator
from rummy_sim.engine.strategy import DiscardSelector
from rummy_sim.engine.game import GameConfig, simulate_game


def demo_meld_detection():
    """Demonstrate meld detection."""
    print("=" * 60)
    print("MELD DETECTION DEMO")
    print("=" * 60)

    test_hands = [
        "5S 6S 7S 9D 9C 9H 2D 3C 10H QS AC",
        "4H 5H 6H 7H 7C 7D",
        "2C 2D 2H 2S 3S 4S",
        "AC 3D 5H 7S 9C JD KH",
    ]

    for text in test_hands:
        analysis = find_best_melds(parse_cards(text))
        print(f"\nCards: {text}")
        print(f"  {analysis}")
        print(f"  Melded cards: {analysis.melded_count}")


def demo_declarations():
    """Demonstrate declaration checks in both modes."""
    print("\n" + "=" * 60)
    print("DECLARATION DEMO")
    print("=" * 60)

    classic = ClassicMode()
    gin = GinMode(knock_threshold=7)

    full = parse_cards("5S 6S 7S 9D 9C 9H KC KD KH 2H")
    knocker = parse_cards("5S 6S 7S 9D 9C 9H KC KD KH 4H")
    nothing = parse_cards("AC 3D 5H 7S 9C JD KH 2S 4D 6H")

    for label, hand in (("gin hand", full[:9]), ("knock hand", knocker), ("junk hand", nothing)):
        print(f"\n{label}: {' '.join(str(c) for c in hand)}")
        print(f"  RUMMY (classic): {classic.can_declare(hand, Declaration.RUMMY)}")
        print(f"  GIN:             {gin.can_declare(hand, Declaration.GIN)}")
        print(f"  KNOCK (<= 7):    {gin.can_declare(hand, Declaration.KNOCK)}")


def demo_scoring():
    """Demonstrate a knock and an undercut."""
    print("\n" + "=" * 60)
    print("SCORING DEMO")
    print("=" * 60)

    gin = GinMode(knock_threshold=7)
    knocker = parse_cards("5S 6S 7S 9D 9C 9H KC KD KH 5H")
    opponent = parse_cards("2C 3C 4C 8H 8S 8D JC QC KS 2D")

    scores = [0, 0]
    gin.validate_declaration(knocker, 0, Declaration.KNOCK)
    result = gin.score_round([knocker, opponent], scores)

    print(f"\nOutcome: {result.outcome.name}, winner P{result.winner}")
    for line in result.details:
        print(f"  {line}")
    print(f"  Scores: {scores}")


def demo_smart_player():
    """Demonstrate card evaluation and discard selection."""
    print("\n" + "=" * 60)
    print("SMART PLAYER DEMO")
    print("=" * 60)

    evaluator = CardEvaluator()
    hand = parse_cards("5S 6S 9D 9C 2D 3C 10H QS AC KD")

    for text in ("7S", "9H", "JH"):
        card = parse_cards(text)[0]
        print(f"\nCandidate {card}: {evaluator.evaluate(card, hand)}")

    selector = DiscardSelector(evaluator)
    eleven = hand + parse_cards("7S")
    print(f"\nHand: {' '.join(str(c) for c in eleven)}")
    print(f"  Discard: {selector.select(eleven)}")


def demo_full_game():
    """Demonstrate a full game between two smart players."""
    print("\n" + "=" * 60)
    print("FULL GAME SIMULATION (gin)")
    print("=" * 60)

    result = simulate_game(GameConfig(mode="gin"), verbose=True)
    print(f"\nFinal scores: {result.scores}")


if __name__ == "__main__":
    demo_meld_detection()
    demo_declarations()
    demo_scoring()
    demo_smart_player()
    demo_full_game()

    print("\n" + "=" * 60)
    print("SIMULATION COMPLETE")
    print("=" * 60)
