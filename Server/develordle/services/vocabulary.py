"""
Vocabulary Service

Holds the fixed collection of candidate target words.
"""

import logging
import random
from typing import Dict, Iterable, Optional, Tuple

from ..config.game_settings import WORD_LIST, WORD_LENGTH

logger = logging.getLogger(__name__)


class Vocabulary:
    """
    Immutable collection of fixed-length uppercase words.

    Words are validated on construction. With strict=False, entries of the
    wrong length or with non-alphabetic characters are dropped with a warning
    instead of rejecting the whole collection.
    """

    def __init__(self, words: Iterable[str], word_length: int = WORD_LENGTH,
                 strict: bool = True, rng: Optional[random.Random] = None):
        self.word_length = word_length
        self._rng = rng or random.Random()

        accepted = []
        for index, raw in enumerate(words):
            word = raw.strip().upper() if isinstance(raw, str) else ''
            problem = None
            if not isinstance(raw, str):
                problem = "is not a string"
            elif len(word) != word_length:
                problem = f"is not {word_length} characters long"
            elif not (word.isascii() and word.isalpha()):
                problem = "contains non-alphabetic characters"

            if problem is None:
                accepted.append(word)
            elif strict:
                raise ValueError(f"Word at index {index} '{raw}' {problem}")
            else:
                logger.warning("Skipping word '%s': %s", raw, problem)

        if not accepted:
            raise ValueError("Word list cannot be empty")

        self._words: Tuple[str, ...] = tuple(accepted)

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.upper() in self._words

    def pick_target(self) -> str:
        """Draw a target word uniformly at random."""
        return self._rng.choice(self._words)

    def statistics(self) -> Dict:
        """
        Analyzes the word list.

        Returns:
            dict: total_words, avg_vowel_count, letter_frequency and the five
            most common letters
        """
        vowels = set('AEIOU')
        total_vowels = sum(len([char for char in word if char in vowels]) for word in self._words)

        letter_frequency: Dict[str, int] = {}
        for word in self._words:
            for char in word:
                letter_frequency[char] = letter_frequency.get(char, 0) + 1

        return {
            "total_words": len(self._words),
            "avg_vowel_count": round(total_vowels / len(self._words), 2),
            "letter_frequency": letter_frequency,
            "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
        }


def default_vocabulary(rng: Optional[random.Random] = None) -> Vocabulary:
    """Vocabulary built from the shipped developer word bank."""
    return Vocabulary(WORD_LIST, rng=rng)
