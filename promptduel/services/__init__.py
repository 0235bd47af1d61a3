"""
Services Package

Contains all business logic and service classes.
"""

from .game_orchestrator import GameOrchestrator
from .game_service import GameService, get_game_service, initialize_game_service
from .opponent import OpponentEngine, OpponentMove
from .evaluation import EvaluationEngine, score_prompt_offline
from .oracle_client import OpenRouterClient, OfflineOracle, build_oracle
from .results_repository import (
    InMemoryGameResultRepository, MongoGameResultRepository, build_results_repository
)

__all__ = [
    'GameOrchestrator',
    'GameService', 'get_game_service', 'initialize_game_service',
    'OpponentEngine', 'OpponentMove',
    'EvaluationEngine', 'score_prompt_offline',
    'OpenRouterClient', 'OfflineOracle', 'build_oracle',
    'InMemoryGameResultRepository', 'MongoGameResultRepository', 'build_results_repository'
]
