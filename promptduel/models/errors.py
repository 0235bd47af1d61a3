"""
Game Errors

Exception hierarchy shared by the game services.
"""


class GameError(Exception):
    """Base class for game errors."""


class UserInputError(GameError):
    """A player move that is rejected locally; the player may retry."""


class InvalidWordIndexError(UserInputError):
    pass


class WordAlreadyUsedError(UserInputError):
    pass


class WordCapExceededError(UserInputError):
    pass


class GameOverError(UserInputError):
    pass


class OracleError(GameError):
    """The language model call failed or returned nothing usable."""


class NoWordsAvailableError(GameError):
    """The word bank has no unused entries left."""


class EvaluationError(GameError):
    pass


class PersistenceError(GameError):
    """Storing or reading game results failed."""
