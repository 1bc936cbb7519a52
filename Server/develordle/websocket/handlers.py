"""
WebSocket Event Handlers

Real-time play: key presses come in one at a time and tile reveals go out
staggered, the way the board animates.
"""

from dataclasses import asdict

from flask import request
from flask_socketio import emit, join_room, leave_room

from ..config.game_settings import MESSAGE_CLEAR_MS
from ..models.game import GameCondition, InputEvent
from ..services.feedback_sequencer import FeedbackSequence
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger

# Games started by each connected socket: sid -> set of game ids
socket_games = {}


def play_feedback(socketio, game_id: str, feedback: FeedbackSequence, room: str) -> None:
    """
    Emit the reveals of one row on their schedule, then the result if any.

    Runs as a background task. Every event is checked against the game's
    current session before it goes out, so reveals still queued when the
    player started over are dropped.
    """
    game_service = get_game_service()
    elapsed_ms = 0
    dropped = 0

    for event in feedback:
        wait_ms = event.delay_ms - elapsed_ms
        if wait_ms > 0:
            socketio.sleep(wait_ms / 1000)
        elapsed_ms = event.delay_ms

        if game_service is None or not game_service.is_current(game_id, event.session_id):
            dropped += 1
            continue
        socketio.emit('tile_reveal', event.to_dict(), room=room)

    if dropped:
        game_logger.logger.info(
            f"Dropped {dropped} stale reveal(s) for game {game_id}, session {feedback.session_id}"
        )
        return

    # The sequence is exhausted, so a finished session has published its result
    session = game_service.get_session(game_id)
    if session is not None and session.session_id == feedback.session_id and session.resolution:
        resolution = session.resolution
        socketio.emit('game_resolved', resolution.to_dict(), room=room)
        event_name = 'game_won' if resolution.condition is GameCondition.WON else 'game_lost'
        game_logger.log_game_event(
            game_id, event_name, 'socket',
            session_id=resolution.session_id,
            rounds_used=len(session.guess_results),
            target_word=resolution.answer
        )


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Discard every game the socket started."""
        game_ids = socket_games.pop(request.sid, set())
        game_service = get_game_service()
        if not game_service:
            return

        for game_id in game_ids:
            if game_service.delete_game(game_id):
                game_logger.log_game_event(game_id, 'game_deleted', 'socket', reason='disconnect')

    @socketio.on('new_game')
    def handle_new_game(data=None):
        """Start a new game, or a new session of an existing one."""
        try:
            game_service = get_game_service()
            if not game_service:
                emit('error', {'error': 'Game service unavailable'})
                return

            data = data or {}
            game_id = data.get('game_id')
            game_logger.log_user_action(request, 'new_game', game_id, transport='socket')

            if game_id and game_service.get_session(game_id):
                state = game_service.new_session(game_id)
                game_logger.log_game_event(game_id, 'session_started', request.remote_addr,
                                           session_id=state.session_id)
            else:
                game_id = game_service.create_new_game()
                state = game_service.get_game_state(game_id)
                socket_games.setdefault(request.sid, set()).add(game_id)

            join_room(f"game_{game_id}")
            emit('game_state', {
                'success': True,
                'game_id': game_id,
                'state': asdict(state)
            })

        except Exception as e:
            game_logger.log_error(request, e, 'new_game')
            emit('error', {'error': str(e)})

    @socketio.on('key')
    def handle_key(data):
        """Apply one key press from the player."""
        try:
            game_service = get_game_service()
            if not game_service:
                emit('error', {'error': 'Game service unavailable'})
                return

            if not isinstance(data, dict) or not data.get('game_id'):
                emit('error', {'error': 'Game ID is required'})
                return

            game_id = data['game_id']
            session = game_service.get_session(game_id)
            if session is None:
                emit('error', {'error': 'Game not found'})
                return

            event = InputEvent.from_key(data.get('key'))
            if event is None:
                return

            result = session.route(event)

            if result is not None and result.condition is GameCondition.INCOMPLETE_GUESS:
                emit('condition', {
                    'condition': result.condition.value,
                    'message': result.message,
                    'clear_after_ms': MESSAGE_CLEAR_MS
                })

            emit('game_state', {
                'success': True,
                'game_id': game_id,
                'state': asdict(session.get_state())
            })

            if result is not None and result.feedback is not None:
                game_logger.log_user_action(request, 'submit_guess', game_id,
                                            transport='socket', row=result.feedback.row)
                socketio.start_background_task(play_feedback, socketio, game_id, result.feedback, request.sid)

        except Exception as e:
            game_logger.log_error(request, e, 'key')
            emit('error', {'error': str(e)})

    @socketio.on('leave_game')
    def handle_leave_game(data):
        """Stop receiving updates for a game and discard it."""
        game_id = (data or {}).get('game_id')
        if not game_id:
            emit('error', {'error': 'Game ID is required'})
            return

        leave_room(f"game_{game_id}")
        socket_games.get(request.sid, set()).discard(game_id)
        game_service = get_game_service()
        if game_service:
            game_service.delete_game(game_id)
        game_logger.log_user_action(request, 'leave_game', game_id, transport='socket')
