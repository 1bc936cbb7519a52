"""
Game Configuration Constants Module

This module defines the rules of a Develordle session: board size, reveal
timing, keyboard layout and the messages shown to the player. All game
parameters are centralized here to enable easy modification.
"""

import json
import os
from typing import List, Final

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""Number of letters in every word, and tiles in every row."""

MAX_ROUNDS: Final[int] = 6
"""
Maximum number of guess attempts allowed per session.
Type: Final[int] - Immutable to prevent accidental modification
"""

# Reveal timing (milliseconds)
REVEAL_DELAY_MS: Final[int] = 300
"""Stagger between two consecutive tile reveals of the same row."""

RESOLUTION_MARGIN_MS: Final[int] = 300
"""Extra wait after the last tile before a clock-driven client shows the result."""

MESSAGE_CLEAR_MS: Final[int] = 2000
"""How long a transient message (e.g. incomplete guess) stays on screen."""

# On-screen keyboard, top to bottom
KEYBOARD_ROWS: Final[List[List[str]]] = [
    ['Q', 'W', 'E', 'R', 'T', 'Y', 'U', 'I', 'O', 'P'],
    ['A', 'S', 'D', 'F', 'G', 'H', 'J', 'K', 'L'],
    ['ENTER', 'Z', 'X', 'C', 'V', 'B', 'N', 'M', 'BACK'],
]

# Player-facing messages
INCOMPLETE_GUESS_MESSAGE: Final[str] = "Not enough letters!"
WIN_MESSAGE: Final[str] = "🎉 Congratulations! You won!"
LOSE_MESSAGE: Final[str] = "Game Over! The word was: {target}"


def _load_word_list() -> List[str]:
    """
    Load the word bank from wordles.json.

    Returns:
        List[str]: List of uppercase words

    Raises:
        FileNotFoundError: If wordles.json file is not found
        ValueError: If the file is malformed or does not contain a list
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'wordles.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in wordles.json: {e}") from e

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    return [word.strip().upper() for word in word_list]


# Curated developer word bank loaded from JSON file
WORD_LIST: Final[List[str]] = _load_word_list()
