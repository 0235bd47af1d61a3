"""
Configuration Package

Contains all configuration-related files and settings.

This package separates three types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules and constants (business logic)
- prompt_catalog.py: Static topic/difficulty catalog of system instructions
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    WORD_BANK_SIZE, MAX_WORDS_PER_SIDE, AVAILABLE_MODELS, validate_game_settings
)
from .prompt_catalog import GamePrompt, GAME_PROMPTS, find_prompt, get_prompt_by_id, list_prompts

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_BANK_SIZE', 'MAX_WORDS_PER_SIDE', 'AVAILABLE_MODELS', 'validate_game_settings',
    # Prompt catalog
    'GamePrompt', 'GAME_PROMPTS', 'find_prompt', 'get_prompt_by_id', 'list_prompts'
]
