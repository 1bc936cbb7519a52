import os
import random
import tempfile

# Keep test runs from writing game logs into the working directory
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='develordle-logs-'))

import pytest

from develordle import create_app
from develordle.config import TestingConfig
from develordle.services.feedback_sequencer import FeedbackSequencer
from develordle.services.game_service import initialize_game_service
from develordle.services.vocabulary import Vocabulary

from tests.helpers import make_session


@pytest.fixture
def stack_session():
    return make_session('STACK')


@pytest.fixture
def seeded_vocabulary():
    return Vocabulary(['STACK', 'MERGE', 'ARRAY', 'CRANE', 'QUERY'], rng=random.Random(1234))


@pytest.fixture
def game_service():
    return initialize_game_service(vocabulary=Vocabulary(['STACK']), reveal_delay_ms=0)


@pytest.fixture
def app_and_socketio(game_service):
    return create_app(TestingConfig)


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def socketio(app_and_socketio):
    return app_and_socketio[1]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sequencer():
    return FeedbackSequencer(delay_unit_ms=300)
