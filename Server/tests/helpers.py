from develordle.models.game import InputEvent
from develordle.services.game_service import GameSession
from develordle.services.vocabulary import Vocabulary


def make_session(target: str, **kwargs) -> GameSession:
    """A session whose target is always `target`."""
    return GameSession(Vocabulary([target]), **kwargs)


def type_word(session: GameSession, word: str):
    """Type a word through the router and submit it; returns the SubmitResult."""
    for char in word:
        session.route(InputEvent.letter(char))
    return session.route(InputEvent.submit())


def play(session: GameSession, word: str):
    """Type, submit and fully reveal a word; returns the revealed events."""
    result = type_word(session, word)
    assert result is not None and result.accepted
    return result.feedback.drain()
