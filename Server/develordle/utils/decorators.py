"""
Request Decorators

Contains decorators shared by the HTTP endpoints.
"""

from functools import wraps
from flask import request, jsonify
from ..services.game_service import get_game_service
from .game_logger import game_logger


def require_game(action: str):
    """
    Decorator resolving the <game_id> URL parameter to its GameSession.

    The wrapped view receives the session as a `session` keyword argument.
    Responds 500 when the game service is down and 404 for unknown games.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(game_id, *args, **kwargs):
            game_service = get_game_service()
            if not game_service:
                return jsonify({
                    'success': False,
                    'error': 'Game service unavailable'
                }), 500

            session = game_service.get_session(game_id)
            if session is None:
                error_response = {
                    'success': False,
                    'error': 'Game not found'
                }
                game_logger.log_server_response(request, action, False, error_response, game_id)
                return jsonify(error_response), 404

            kwargs['session'] = session
            return f(game_id, *args, **kwargs)

        return decorated_function
    return decorator
