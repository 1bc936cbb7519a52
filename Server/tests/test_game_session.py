import threading

import pytest

from develordle.models.game import GameCondition, LetterStatus, SessionStatus
from develordle.services.game_service import GameService
from develordle.services.vocabulary import Vocabulary

from tests.helpers import make_session, play, type_word


def test_new_session_initial_state(stack_session):
    state = stack_session.get_state()
    assert state.rows == [''] * 6
    assert state.active_row == 0
    assert state.cursor == 0
    assert state.status == 'ACTIVE'
    assert state.answer is None
    assert set(state.letter_status.values()) == {'UNKNOWN'}
    assert len(state.letter_status) == 26
    assert state.keyboard[2][0] == 'ENTER'


def test_append_beyond_word_length_is_ignored(stack_session):
    for char in 'CRANES':
        stack_session.append_letter(char)
    assert stack_session.rows[0] == 'CRANE'
    assert stack_session.cursor == 5
    assert stack_session.append_letter('X') is False


def test_delete_at_start_of_row_is_ignored(stack_session):
    assert stack_session.delete_letter() is False
    stack_session.append_letter('C')
    stack_session.append_letter('R')
    assert stack_session.delete_letter() is True
    assert stack_session.rows[0] == 'C'
    assert stack_session.cursor == 1


def test_incomplete_guess_leaves_state_untouched(stack_session):
    for char in 'CRA':
        stack_session.append_letter(char)
    result = stack_session.submit_guess()
    assert result.accepted is False
    assert result.condition is GameCondition.INCOMPLETE_GUESS
    assert result.message == 'Not enough letters!'
    assert result.feedback is None
    assert stack_session.active_row == 0
    assert stack_session.cursor == 3
    assert stack_session.guess_results == []


def test_win_scenario(stack_session):
    events = play(stack_session, 'CRANE')
    assert [event.status for event in events] == [
        LetterStatus.PRESENT, LetterStatus.ABSENT, LetterStatus.CORRECT,
        LetterStatus.ABSENT, LetterStatus.ABSENT,
    ]
    assert stack_session.status is SessionStatus.ACTIVE
    assert stack_session.active_row == 1
    assert stack_session.cursor == 0

    result = type_word(stack_session, 'STACK')
    assert stack_session.status is SessionStatus.WON
    assert stack_session.active_row == 1

    # The result is only published once every tile of the row has been revealed
    assert stack_session.resolution is None
    assert stack_session.revealed_target is None
    result.feedback.drain()

    assert stack_session.resolution.condition is GameCondition.WON
    assert stack_session.resolution.message == '🎉 Congratulations! You won!'
    for letter in 'STACK':
        assert stack_session.key_status[letter] is LetterStatus.CORRECT
    assert stack_session.key_status['R'] is LetterStatus.ABSENT


def test_loss_scenario():
    session = make_session('MERGE')
    guesses = ['CRANE', 'STACK', 'PROXY', 'ASYNC', 'CLOUD', 'TOKEN']
    for guess in guesses[:-1]:
        play(session, guess)
        assert session.status is SessionStatus.ACTIVE

    result = type_word(session, guesses[-1])
    assert session.status is SessionStatus.LOST
    assert session.active_row == 6
    assert session.revealed_target is None

    result.feedback.drain()
    assert session.revealed_target == 'MERGE'
    assert session.resolution.condition is GameCondition.LOST
    assert session.resolution.message == 'Game Over! The word was: MERGE'
    assert session.get_state().answer == 'MERGE'


def test_win_on_last_row_is_a_win():
    session = make_session('MERGE')
    for guess in ['CRANE', 'STACK', 'PROXY', 'ASYNC', 'CLOUD']:
        play(session, guess)
    play(session, 'MERGE')
    assert session.status is SessionStatus.WON
    assert session.resolution.condition is GameCondition.WON


def test_no_buffer_edits_after_the_game_ends(stack_session):
    play(stack_session, 'STACK')
    assert stack_session.append_letter('A') is False
    assert stack_session.delete_letter() is False
    assert stack_session.submit_guess().accepted is False
    assert stack_session.rows[0] == 'STACK'


def test_key_status_never_downgrades():
    session = make_session('STACK')
    previous = dict(session.key_status)
    for guess in ['STAIR', 'TASTY', 'CACTI', 'ATTIC', 'SKATE']:
        play(session, guess)
        for letter, status in session.key_status.items():
            assert status.priority >= previous[letter].priority, letter
        previous = dict(session.key_status)

    assert session.key_status['S'] is LetterStatus.CORRECT
    assert session.key_status['T'] is LetterStatus.CORRECT
    assert session.key_status['A'] is LetterStatus.CORRECT


def test_new_session_resets_everything(stack_session):
    first_id = stack_session.session_id
    play(stack_session, 'CRANE')
    stack_session.append_letter('S')

    stack_session.new_session()
    assert stack_session.session_id > first_id
    assert stack_session.rows == [''] * 6
    assert stack_session.active_row == 0
    assert stack_session.cursor == 0
    assert stack_session.status is SessionStatus.ACTIVE
    assert stack_session.guess_results == []
    assert all(status is LetterStatus.UNKNOWN for status in stack_session.key_status.values())


def test_feedback_from_a_superseded_session_does_not_resolve_the_new_one(stack_session):
    result = type_word(stack_session, 'STACK')
    stack_session.new_session()

    result.feedback.drain()
    assert stack_session.status is SessionStatus.ACTIVE
    assert stack_session.resolution is None
    assert not stack_session.feedback_pending


def test_feedback_pending_until_drained(stack_session):
    result = type_word(stack_session, 'CRANE')
    assert stack_session.feedback_pending
    assert stack_session.get_state().feedback_pending is True
    result.feedback.drain()
    assert not stack_session.feedback_pending


def test_guess_results_record_each_row(stack_session):
    play(stack_session, 'CRANE')
    assert stack_session.get_state().guess_results == [[
        ('C', 'PRESENT'), ('R', 'ABSENT'), ('A', 'CORRECT'), ('N', 'ABSENT'), ('E', 'ABSENT'),
    ]]


def test_snapshot_withholds_the_row_being_revealed(stack_session):
    result = type_word(stack_session, 'STACK')

    state = stack_session.get_state()
    assert state.feedback_pending is True
    assert state.status == 'ACTIVE'
    assert state.guess_results == []
    assert set(state.letter_status.values()) == {'UNKNOWN'}
    assert state.rows[0] == 'STACK'

    result.feedback.drain()
    state = stack_session.get_state()
    assert state.feedback_pending is False
    assert state.status == 'WON'
    assert len(state.guess_results) == 1
    assert {state.letter_status[letter] for letter in 'STACK'} == {'CORRECT'}


def test_snapshot_keeps_earlier_rows_while_the_next_one_reveals(stack_session):
    play(stack_session, 'CRANE')
    result = type_word(stack_session, 'MERGE')

    state = stack_session.get_state()
    assert len(state.guess_results) == 1
    assert state.letter_status['A'] == 'CORRECT'
    assert state.letter_status['M'] == 'UNKNOWN'
    result.feedback.drain()
    assert stack_session.get_state().letter_status['M'] == 'ABSENT'


def test_completion_racing_a_restart_does_not_resolve_the_new_session(stack_session):
    result = type_word(stack_session, 'STACK')
    reveal = threading.Thread(target=result.feedback.drain)

    with stack_session._lock:
        reveal.start()
        # The reveal thread is now parked on the completion callback
        reveal.join(timeout=0.1)
        assert reveal.is_alive()
        stack_session.new_session()

    reveal.join(timeout=5)
    assert not reveal.is_alive()
    assert stack_session.resolution is None
    assert stack_session.status is SessionStatus.ACTIVE
    assert not stack_session.feedback_pending


class TestGameService:

    @pytest.fixture
    def service(self):
        return GameService(vocabulary=Vocabulary(['STACK']), reveal_delay_ms=0)

    def test_create_and_lookup(self, service):
        game_id = service.create_new_game()
        assert service.get_session(game_id) is not None
        assert service.get_game_state(game_id).game_id == game_id
        assert service.get_game_state('missing') is None
        assert service.new_session('missing') is None

    def test_is_current_tracks_the_latest_session(self, service):
        game_id = service.create_new_game()
        old_id = service.get_session(game_id).session_id
        assert service.is_current(game_id, old_id)

        state = service.new_session(game_id)
        assert state.session_id != old_id
        assert not service.is_current(game_id, old_id)
        assert service.is_current(game_id, state.session_id)
        assert not service.is_current('missing', state.session_id)

    def test_session_ids_are_unique_across_games(self, service):
        first = service.get_session(service.create_new_game()).session_id
        second = service.get_session(service.create_new_game()).session_id
        assert second > first

    def test_delete_game(self, service):
        game_id = service.create_new_game()
        assert service.delete_game(game_id) is True
        assert service.delete_game(game_id) is False
