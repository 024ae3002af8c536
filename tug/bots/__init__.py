"""
Bots module - Strategies that decide moves.

Provides:
- Strategy: Interface for choosing actions and assigning competition cards
- RandomStrategy, FirstLegalStrategy, ScriptedStrategy: simple adapters
- HeuristicEvaluator: Scores game states
- GreedyStrategy: One-ply look-ahead bot
- ConsoleStrategy: Human player at a terminal
"""

from .policy import Strategy, BotDecision, RandomStrategy, FirstLegalStrategy, ScriptedStrategy
from .evaluator import HeuristicEvaluator, EvaluationWeights, StateEvaluation
from .greedy_bot import GreedyStrategy
from .console import ConsoleStrategy, parse_command

__all__ = [
    "Strategy",
    "BotDecision",
    "RandomStrategy",
    "FirstLegalStrategy",
    "ScriptedStrategy",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "StateEvaluation",
    "GreedyStrategy",
    "ConsoleStrategy",
    "parse_command",
]
