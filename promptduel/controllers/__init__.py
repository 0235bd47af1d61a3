"""
Controllers Package

HTTP blueprints exposing the game services.
"""

from .game_controller import game_bp

__all__ = ['game_bp']
