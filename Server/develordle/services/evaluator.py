"""
Guess Evaluator

Implements the Wordle letter evaluation algorithm with correct handling of
repeated letters.
"""

from typing import List, Optional

from ..models.game import LetterStatus


def evaluate_guess(target: str, guess: str) -> List[LetterStatus]:
    """
    Classify every position of a guess against the target.

    Exact matches are resolved first and consume their target letter, then the
    remaining positions are scanned left to right against the letters still
    left in the pool. A letter occurring k times in the target is therefore
    credited CORRECT or PRESENT at most k times.

    Args:
        target: The hidden word
        guess: The submitted word, same length as target

    Returns:
        List of LetterStatus, one per position

    Raises:
        ValueError: If target and guess differ in length
    """
    if len(target) != len(guess):
        raise ValueError(
            f"Cannot evaluate a {len(guess)}-letter guess against a {len(target)}-letter target"
        )

    result = [LetterStatus.ABSENT] * len(guess)
    pool: List[Optional[str]] = list(target)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == target[i]:
            result[i] = LetterStatus.CORRECT
            pool[i] = None

    # Second pass: right letter, wrong position
    for i, letter in enumerate(guess):
        if result[i] is LetterStatus.CORRECT:
            continue
        if letter in pool:
            result[i] = LetterStatus.PRESENT
            # Remove first occurrence to prevent double-counting
            pool[pool.index(letter)] = None

    return result
