"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv('promptduel/config/config.env')


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Database Settings
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'prompt_duel')

    # Authentication Settings
    JWT_SECRET = os.getenv('JWT_SECRET')

    # Oracle (language model gateway) Settings
    OPENROUTER_API_KEY = os.getenv('OPENROUTER_API_KEY')
    OPENROUTER_BASE_URL = os.getenv('OPENROUTER_BASE_URL', 'https://openrouter.ai/api/v1')
    APP_URL = os.getenv('APP_URL', 'http://localhost:5173')
    ORACLE_TIMEOUT_SECONDS = float(os.getenv('ORACLE_TIMEOUT_SECONDS', 30))
    DEFAULT_MODEL = os.getenv('DEFAULT_MODEL', 'openai/gpt-3.5-turbo')

    # Game Settings
    THINKING_DELAY_MIN_SECONDS = float(os.getenv('THINKING_DELAY_MIN_SECONDS', 2))
    THINKING_DELAY_MAX_SECONDS = float(os.getenv('THINKING_DELAY_MAX_SECONDS', 5))
    EVALUATION_FALLBACK_ON_ERROR = os.getenv('EVALUATION_FALLBACK_ON_ERROR', 'True').lower() == 'true'

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None
    OPENROUTER_API_KEY = None
    JWT_SECRET = 'test-jwt-secret'
    THINKING_DELAY_MIN_SECONDS = 0.0
    THINKING_DELAY_MAX_SECONDS = 0.0


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
