"""
Develordle Game Server - Main Entry Point

This is the main entry point for the Develordle game server.
It initializes the game service and starts the Flask-SocketIO application.
"""

import logging

from develordle import create_app
from develordle.config import Config
from develordle.services.game_service import initialize_game_service
from develordle.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        logging.basicConfig(level=Config.LOG_LEVEL, format='%(levelname)s: %(name)s: %(message)s')

        print("Initializing services...")

        game_service = initialize_game_service(
            max_rounds=Config.MAX_ROUNDS,
            reveal_delay_ms=Config.REVEAL_DELAY_MS
        )
        print(f"✓ Game service initialized with {len(game_service.vocabulary)} words")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Develordle Server Starting")

        print(f"\nStarting Develordle Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG,
                     allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Develordle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
