"""
Utilities Package

Contains utility functions, decorators, and helper modules.
Decorators live in ``utils.decorators`` and are imported from there by the
controllers.
"""

from .game_logger import game_logger

__all__ = ['game_logger']
