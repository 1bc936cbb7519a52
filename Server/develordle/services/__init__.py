"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate_guess
from .feedback_sequencer import FeedbackSequence, FeedbackSequencer
from .game_service import GameService, GameSession, get_game_service, initialize_game_service
from .input_router import InputRouter
from .vocabulary import Vocabulary, default_vocabulary

__all__ = [
    'evaluate_guess',
    'FeedbackSequence', 'FeedbackSequencer',
    'GameService', 'GameSession', 'get_game_service', 'initialize_game_service',
    'InputRouter',
    'Vocabulary', 'default_vocabulary'
]
