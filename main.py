"""
Prompt Duel Server - Main Entry Point

This is the main entry point for the Prompt Duel game server.
It initializes the game service and starts the Flask application.
"""

from promptduel import create_app
from promptduel.config import Config, validate_game_settings
from promptduel.services.game_service import initialize_game_service
from promptduel.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        validate_game_settings()

        game_service = initialize_game_service(Config)
        print("✓ Game service initialized successfully")
        print(f"  Oracle: {type(game_service.oracle).__name__}")
        print(f"  Results store: {type(game_service.results).__name__}")

        # Create Flask app
        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Prompt Duel Server Starting")

        print(f"\nStarting Prompt Duel Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Prompt Duel Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
