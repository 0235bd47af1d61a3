"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    AIThought, DifficultyTier, Evaluation, GamePhase, GameState, Side, Word, WordBankEntry
)
from .result import GameResultRecord
from .errors import (
    GameError, UserInputError, InvalidWordIndexError, WordAlreadyUsedError,
    WordCapExceededError, GameOverError, OracleError, NoWordsAvailableError,
    EvaluationError, PersistenceError
)

__all__ = [
    'AIThought', 'DifficultyTier', 'Evaluation', 'GamePhase', 'GameState', 'Side', 'Word',
    'WordBankEntry', 'GameResultRecord',
    'GameError', 'UserInputError', 'InvalidWordIndexError', 'WordAlreadyUsedError',
    'WordCapExceededError', 'GameOverError', 'OracleError', 'NoWordsAvailableError',
    'EvaluationError', 'PersistenceError'
]
