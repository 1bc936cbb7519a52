"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    GameCondition, GameState, InputEvent, InputKind, LetterStatus, RevealEvent,
    Resolution, SessionStatus, SubmitResult
)

__all__ = [
    'GameCondition', 'GameState', 'InputEvent', 'InputKind', 'LetterStatus',
    'RevealEvent', 'Resolution', 'SessionStatus', 'SubmitResult'
]
