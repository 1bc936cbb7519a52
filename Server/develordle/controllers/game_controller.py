"""
Game Controller

Handles all game-related HTTP endpoints. HTTP clients receive the whole
reveal stream of a submitted row in one response and animate it themselves,
using each event's delay_ms.
"""

from dataclasses import asdict
from typing import Dict, Optional

from flask import Blueprint, request, jsonify

from ..config.game_settings import MESSAGE_CLEAR_MS
from ..models.game import GameCondition, InputEvent, InputKind, SubmitResult
from ..services.game_service import GameSession, get_game_service
from ..utils.decorators import require_game
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _parse_input_event(data: Dict) -> Optional[InputEvent]:
    """Accept either {"key": "A"} or {"type": "letter", "char": "A"}."""
    if 'key' in data:
        return InputEvent.from_key(data['key'])

    kind = data.get('type')
    try:
        input_kind = InputKind(str(kind).lower())
    except ValueError:
        return None
    if input_kind is InputKind.LETTER:
        return InputEvent.letter(data.get('char'))
    return InputEvent(input_kind)


def _build_response(session: GameSession, result: Optional[SubmitResult]) -> Dict:
    """Drain the feedback of a submission and assemble the JSON payload."""
    response_data = {'success': True}

    if result is not None and result.condition is GameCondition.INCOMPLETE_GUESS:
        response_data['condition'] = result.condition.value
        response_data['message'] = result.message
        response_data['clear_after_ms'] = MESSAGE_CLEAR_MS

    if result is not None and result.feedback is not None:
        feedback = result.feedback
        response_data['events'] = [event.to_dict() for event in feedback.drain()]
        response_data['resolution_delay_ms'] = feedback.resolution_delay_ms

    if session.resolution is not None:
        response_data['resolution'] = session.resolution.to_dict()

    response_data['state'] = asdict(session.get_state())
    return response_data


def _log_resolution(session: GameSession, result: Optional[SubmitResult]) -> None:
    if result is None or result.feedback is None or session.resolution is None:
        return
    resolution = session.resolution
    event = 'game_won' if resolution.condition is GameCondition.WON else 'game_lost'
    game_logger.log_game_event(
        session.game_id, event, request.remote_addr,
        session_id=resolution.session_id,
        rounds_used=len(session.guess_results),
        target_word=resolution.answer
    )


@game_bp.route('/health', methods=['GET'])
def health():
    """Liveness check."""
    return jsonify({'success': True, 'status': 'ok', 'service_ready': get_game_service() is not None})


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'new_game')

        game_id = game_service.create_new_game()
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=state.word_length, max_rounds=state.max_rounds
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')

        error_response = {
            'success': False,
            'error': str(e)
        }

        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/new_session', methods=['POST'])
@require_game('new_session')
def new_session(game_id, session):
    """Restart a game with a new target word."""
    try:
        game_logger.log_user_action(request, 'new_session', game_id)

        session.new_session()
        state = session.get_state()
        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_game_event(game_id, 'session_started', request.remote_addr,
                                   session_id=state.session_id)
        game_logger.log_server_response(request, 'new_session', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_session', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_session', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game('get_state')
def get_state(game_id, session):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        response_data = _build_response(session, None)

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            active_row=session.active_row, status=session.status.value
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/input', methods=['POST'])
@require_game('input')
def send_input(game_id, session):
    """Apply one key press: a letter, delete or submit."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or ('key' not in data and 'type' not in data):
            error_response = {
                'success': False,
                'error': 'Input key is required'
            }
            game_logger.log_server_response(request, 'input', False, error_response, game_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'input', game_id, payload=data)

        event = _parse_input_event(data)
        result = session.route(event) if event is not None else None

        response_data = _build_response(session, result)
        _log_resolution(session, result)

        game_logger.log_server_response(
            request, 'input', True, response_data, game_id,
            active_row=session.active_row, cursor=session.cursor
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'input', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'input', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game('submit_guess')
def make_guess(game_id, session):
    """Type a whole word into the active row and submit it."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('guess'), str):
            error_response = {
                'success': False,
                'error': 'Guess is required'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
            return jsonify(error_response), 400

        guess = data['guess'].strip().upper()

        game_logger.log_user_action(
            request, 'submit_guess', game_id,
            guess=guess, guess_length=len(guess)
        )

        if session.feedback_pending:
            error_response = {
                'success': False,
                'error': 'Previous guess is still being revealed'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
            return jsonify(error_response), 409

        error = None
        if session.is_over:
            error = 'Game is already over'
        elif len(guess) != session.word_length:
            error = f'Guess must be exactly {session.word_length} letters'
        elif not (guess.isascii() and guess.isalpha()):
            error = 'Guess must contain only letters'

        if error:
            error_response = {
                'success': False,
                'error': error
            }
            game_logger.log_server_response(
                request, 'submit_guess', False, error_response, game_id,
                validation_error=error, attempted_guess=guess
            )
            return jsonify(error_response), 400

        # Replace whatever was typed into the active row
        while session.cursor > 0:
            session.route(InputEvent.delete())
        for char in guess:
            session.route(InputEvent.letter(char))
        result = session.route(InputEvent.submit())

        response_data = _build_response(session, result)
        _log_resolution(session, result)

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=guess, active_row=session.active_row, status=session.status.value
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game('delete_game')
def delete_game(game_id, session):
    """Delete a game and free its session."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        success = get_game_service().delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr,
                                       session_id=session.session_id)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, game_id)
        return jsonify(error_response), 500
