"""
Tug - Rules engine for a two-player card-allocation game.

Two players fight for control of seven places by secretly committing
cards from a shared deck, round after round, until one of them holds
enough points or enough places. The engine provides:
- The card, place and player model
- The round lifecycle (deal, act, reset)
- The four-action turn protocol
- Win evaluation
- Bot strategies and a game loop to drive them
"""

__version__ = "0.1.0"
