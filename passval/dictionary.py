"""
dictionary.py - Common-password dictionary used by the penalty detectors.

How this works:
1. A dictionary is built once from newline-delimited text (one entry per line)
2. Every entry is trimmed and lower-cased, blank lines are skipped
3. Lookups go through a frozenset, so exact membership is O(1)
4. Entries of 4+ characters are also kept in a separate tuple, sorted
   longest first, for the substring scan in the penalty engine

The bundled list lives in data/common_passwords.txt. It is loaded lazily the
first time default_dictionary() is called and then shared by every validator
for the rest of the process. A Dictionary never changes after construction,
so any number of threads can read from it at once.
"""

import logging
import os
import threading
from typing import Iterable, Optional, Tuple


logger = logging.getLogger(__name__)

# Bundled word list, sits right next to this module
DEFAULT_DICTIONARY_PATH = os.path.join(os.path.dirname(__file__), "data", "common_passwords.txt")

# Shorter entries still count for exact matches but are skipped by the
# substring scan
MIN_SUBSTRING_LENGTH = 4


class Dictionary:
    """
    Immutable set of common passwords.

    Usage:
        d = Dictionary.from_text("password\\n123456\\n")
        d.contains("PASSWORD")   # True
        "123456" in d            # True
    """

    __slots__ = ("_set", "_words", "_scan_words")

    def __init__(self, entries: Iterable[str]):
        seen = set()
        words = []
        for entry in entries:
            word = entry.strip().lower()
            if not word or word in seen:
                continue
            seen.add(word)
            words.append(word)

        self._set = frozenset(seen)
        self._words = tuple(words)
        self._scan_words = tuple(
            sorted(
                (w for w in words if len(w) >= MIN_SUBSTRING_LENGTH),
                key=lambda w: (-len(w), w),
            )
        )

    @classmethod
    def from_text(cls, text: str) -> "Dictionary":
        """Build a dictionary from newline-delimited text."""
        dictionary = cls(text.splitlines())
        logger.debug(
            "Built dictionary with %d entries (%d usable for substring scan)",
            len(dictionary), len(dictionary._scan_words),
        )
        return dictionary

    def contains(self, word: str) -> bool:
        """Exact, case-insensitive membership test."""
        return word.lower() in self._set

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._set)

    def words(self) -> Tuple[str, ...]:
        """Every entry, in the order it was loaded."""
        return self._words

    def substring_candidates(self) -> Tuple[str, ...]:
        """
        Entries long enough for substring matching.

        Ordered longest first, ties broken alphabetically, so the first hit
        during a scan is always the longest (and alphabetically first) match.
        """
        return self._scan_words


def load_dictionary(text: str) -> Dictionary:
    return Dictionary.from_text(text)


# ------------------------------------------------------------------
# Process-wide default
# ------------------------------------------------------------------

_default_dictionary: Optional[Dictionary] = None
_default_lock = threading.Lock()


def default_dictionary() -> Dictionary:
    """
    Get the bundled common-passwords dictionary.

    Built on first call and reused afterwards. There is no way to reload it;
    callers who want a different list pass their own text to the validator.
    """
    global _default_dictionary
    if _default_dictionary is None:
        with _default_lock:
            if _default_dictionary is None:
                with open(DEFAULT_DICTIONARY_PATH, "r", encoding="utf-8") as f:
                    _default_dictionary = Dictionary.from_text(f.read())
                logger.debug("Loaded default dictionary from %s", DEFAULT_DICTIONARY_PATH)
    return _default_dictionary
