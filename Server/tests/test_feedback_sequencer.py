import pytest

from develordle.models.game import LetterStatus
from develordle.services.evaluator import evaluate_guess
from develordle.services.feedback_sequencer import FeedbackSequencer

C = LetterStatus.CORRECT
P = LetterStatus.PRESENT
A = LetterStatus.ABSENT
U = LetterStatus.UNKNOWN


def test_events_are_staggered_left_to_right(sequencer):
    feedback = sequencer.sequence(7, 2, 'CRANE', evaluate_guess('STACK', 'CRANE'), {})
    events = feedback.drain()

    assert [event.position for event in events] == [0, 1, 2, 3, 4]
    assert [event.delay_ms for event in events] == [0, 300, 600, 900, 1200]
    assert [event.letter for event in events] == list('CRANE')
    assert {event.row for event in events} == {2}
    assert {event.session_id for event in events} == {7}
    assert feedback.resolution_delay_ms == 5 * 300 + 300


def test_key_status_is_folded_tile_by_tile(sequencer):
    feedback = sequencer.sequence(1, 0, 'EERIE', evaluate_guess('MERGE', 'EERIE'), {'E': U})
    key_statuses = [event.key_status for event in feedback.events]
    # first E is absent, then the exact match on position 1 lights the key up
    assert key_statuses == [A, C, C, A, C]


def test_key_status_never_downgrades_within_a_row(sequencer):
    feedback = sequencer.sequence(1, 0, 'EERIE', [A, C, C, A, C], {'E': P})
    assert feedback.events[0].key_status is P
    assert feedback.events[1].key_status is C


def test_completion_fires_once_after_last_event(sequencer):
    calls = []
    feedback = sequencer.sequence(1, 0, 'STACK', [C] * 5, {}, on_complete=lambda: calls.append(True))

    stream = iter(feedback)
    for _ in range(5):
        next(stream)
        assert calls == []
    with pytest.raises(StopIteration):
        next(stream)
    assert calls == [True]
    assert feedback.completed


def test_sequence_cannot_be_restarted(sequencer):
    feedback = sequencer.sequence(1, 0, 'STACK', [C] * 5, {})
    assert len(feedback.drain()) == 5
    with pytest.raises(RuntimeError):
        feedback.drain()


def test_sequence_rejects_mismatched_classifications(sequencer):
    with pytest.raises(ValueError):
        sequencer.sequence(1, 0, 'STACK', [C] * 4, {})


def test_zero_delay_unit():
    feedback = FeedbackSequencer(delay_unit_ms=0, resolution_margin_ms=0).sequence(1, 0, 'STACK', [C] * 5, {})
    assert {event.delay_ms for event in feedback.events} == {0}
    assert feedback.resolution_delay_ms == 0


def test_negative_delay_unit_is_rejected():
    with pytest.raises(ValueError):
        FeedbackSequencer(delay_unit_ms=-1)


def test_event_serialization(sequencer):
    event = sequencer.sequence(3, 1, 'CRANE', evaluate_guess('STACK', 'CRANE'), {}).events[2]
    assert event.to_dict() == {
        'session_id': 3,
        'row': 1,
        'position': 2,
        'letter': 'A',
        'status': 'CORRECT',
        'key_status': 'CORRECT',
        'delay_ms': 600,
    }
