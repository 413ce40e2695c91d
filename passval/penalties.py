"""
penalties.py - Pattern detectors that knock the entropy score down.

Entropy alone thinks "qwertyuiop" is a decent password. These detectors look
for the shortcuts attackers actually try first and return a multiplicative
penalty for each weakness they find:

1. Common password      - exact or leet-speak dictionary match
2. Repeated characters  - "aaaa", or very few distinct characters
3. Sequential runs      - "abcd", "4321"
4. Keyboard patterns    - "qwerty", "asdf", "zaq1" style walks
5. Dictionary substring - a common password hidden inside a longer one

Every detector sees the lower-cased password and the dictionary, and returns
either None or a PenaltyDetail. They always run in the order above and every
penalty found is reported, not just the first one. Factors are in (0, 1], so
applying them can only lower a score.

New detectors only need a detect(lower, dictionary) method; the engine
doesn't care what class they are.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from passval.dictionary import Dictionary
from passval.leet import leet_normalize, leet_variants


logger = logging.getLogger(__name__)


class PenaltyRule(str, enum.Enum):
    """Machine-readable tag for each kind of penalty."""

    COMMON_PASSWORD = "common_password"
    COMMON_PASSWORD_LEET = "common_password_leet"
    REPEATED_CHARS = "repeated_chars"
    SEQUENTIAL_CHARS = "sequential_chars"
    KEYBOARD_PATTERN = "keyboard_pattern"
    DICTIONARY_SUBSTRING = "dictionary_substring"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PenaltyDetail:
    """A single penalty applied during validation."""

    rule: PenaltyRule
    factor: float
    description: str

    def __post_init__(self):
        if not 0.0 < self.factor <= 1.0:
            raise ValueError(f"Penalty factor must be in (0, 1], got {self.factor}")


class PenaltyDetector(Protocol):
    def detect(self, lower: str, dictionary: Optional[Dictionary]) -> Optional[PenaltyDetail]:
        ...


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def longest_run(s: str) -> int:
    """Length of the longest run of identical consecutive characters."""
    if not s:
        return 0
    best = current = 1
    for prev, c in zip(s, s[1:]):
        if c == prev:
            current += 1
            best = max(best, current)
        else:
            current = 1
    return best


def longest_sequence(s: str) -> int:
    """Length of the longest run where each code point is +/-1 from the last."""
    if not s:
        return 0
    best = current = 1
    for prev, c in zip(s, s[1:]):
        if abs(ord(c) - ord(prev)) == 1:
            current += 1
            best = max(best, current)
        else:
            current = 1
    return best


def longest_common_substring_len(a: str, b: str) -> int:
    """
    Length of the longest contiguous substring shared by a and b.

    Plain dynamic programming, O(len(a) * len(b)). Both sides are short
    (a password and a keyboard row) so this is plenty fast.
    """
    if not a or not b:
        return 0

    best = 0
    prev = [0] * (len(b) + 1)
    for ca in a:
        row = [0] * (len(b) + 1)
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                row[j] = prev[j - 1] + 1
                if row[j] > best:
                    best = row[j]
        prev = row
    return best


# ------------------------------------------------------------------
# Detectors
# ------------------------------------------------------------------

class CommonPasswordDetector:
    """Exact dictionary hit, or a hit after undoing leet-speak."""

    EXACT_FACTOR = 0.1
    LEET_FACTOR = 0.15

    def detect(self, lower: str, dictionary: Optional[Dictionary]) -> Optional[PenaltyDetail]:
        if dictionary is None:
            return None

        if dictionary.contains(lower):
            return PenaltyDetail(
                rule=PenaltyRule.COMMON_PASSWORD,
                factor=self.EXACT_FACTOR,
                description="password is in the common passwords list",
            )

        # leet_variants is sorted, so the reported variant is the
        # alphabetically first one that matches
        for variant in leet_variants(lower):
            if dictionary.contains(variant):
                return PenaltyDetail(
                    rule=PenaltyRule.COMMON_PASSWORD_LEET,
                    factor=self.LEET_FACTOR,
                    description=f"password matches common password via leet-speak ({variant})",
                )

        return None


class RepeatedCharsDetector:
    """Long runs of one character and low overall character diversity."""

    def detect(self, lower: str, dictionary: Optional[Dictionary]) -> Optional[PenaltyDetail]:
        if len(lower) < 3:
            return None

        max_repeat = longest_run(lower)
        unique_ratio = len(set(lower)) / len(lower)

        factor = 1.0
        reasons = []

        if max_repeat >= 4:
            factor *= 0.4
            reasons.append(f"{max_repeat} consecutive repeated characters")
        elif max_repeat == 3:
            factor *= 0.6
            reasons.append(f"{max_repeat} consecutive repeated characters")

        if unique_ratio < 0.4:
            factor *= 0.5
            reasons.append(f"low character diversity ({unique_ratio * 100:.0f}% unique)")
        elif unique_ratio < 0.6:
            factor *= 0.7
            reasons.append(f"moderate character diversity ({unique_ratio * 100:.0f}% unique)")

        if factor < 1.0:
            return PenaltyDetail(
                rule=PenaltyRule.REPEATED_CHARS,
                factor=factor,
                description="; ".join(reasons),
            )
        return None


class SequentialCharsDetector:
    """Ascending or descending runs like abc, cba, 123."""

    def detect(self, lower: str, dictionary: Optional[Dictionary]) -> Optional[PenaltyDetail]:
        if len(lower) < 3:
            return None

        max_seq = longest_sequence(lower)

        if max_seq >= 5:
            factor, desc = 0.3, f"long sequential pattern detected ({max_seq} chars)"
        elif max_seq == 4:
            factor, desc = 0.5, f"sequential pattern detected ({max_seq} chars)"
        elif max_seq == 3:
            factor, desc = 0.7, f"short sequential pattern detected ({max_seq} chars)"
        else:
            return None

        return PenaltyDetail(rule=PenaltyRule.SEQUENTIAL_CHARS, factor=factor, description=desc)


# Keyboard rows plus a few common diagonal walks (US QWERTY)
KEYBOARD_ROWS = (
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
    "1234567890",
    "qazwsx",
    "edcrfv",
    "tgbyhn",
    "yujm",
)


class KeyboardPatternDetector:
    """Stretches of the password that follow a keyboard row, either direction."""

    def __init__(self, rows: Sequence[str] = KEYBOARD_ROWS):
        self.references = tuple(rows) + tuple(row[::-1] for row in rows)

    def detect(self, lower: str, dictionary: Optional[Dictionary]) -> Optional[PenaltyDetail]:
        best = max(
            (longest_common_substring_len(lower, ref) for ref in self.references),
            default=0,
        )

        if best >= 6:
            factor, desc = 0.2, f"long keyboard pattern detected ({best} chars)"
        elif best == 5:
            factor, desc = 0.4, f"keyboard pattern detected ({best} chars)"
        elif best == 4:
            factor, desc = 0.6, f"short keyboard pattern detected ({best} chars)"
        else:
            return None

        return PenaltyDetail(rule=PenaltyRule.KEYBOARD_PATTERN, factor=factor, description=desc)


class DictionarySubstringDetector:
    """A common password (4+ chars) embedded in the password, leet-speak included."""

    def detect(self, lower: str, dictionary: Optional[Dictionary]) -> Optional[PenaltyDetail]:
        if dictionary is None or not lower:
            return None

        normalized = leet_normalize(lower)

        # candidates come longest first, so the first hit is the one we want
        match = next(
            (w for w in dictionary.substring_candidates() if w in lower or w in normalized),
            None,
        )
        if match is None:
            return None

        ratio = len(match) / len(lower)

        if ratio >= 0.8:
            factor, desc = 0.2, f"password is mostly the dictionary word '{match}'"
        elif ratio >= 0.5:
            factor, desc = 0.5, f"password contains dictionary word '{match}'"
        elif ratio >= 0.3:
            factor, desc = 0.7, f"password contains dictionary word '{match}'"
        else:
            return None

        return PenaltyDetail(rule=PenaltyRule.DICTIONARY_SUBSTRING, factor=factor, description=desc)


# Order matters: penalties are reported and applied in this order
DEFAULT_DETECTORS = (
    CommonPasswordDetector(),
    RepeatedCharsDetector(),
    SequentialCharsDetector(),
    KeyboardPatternDetector(),
    DictionarySubstringDetector(),
)


def detect_penalties(
    password: str,
    dictionary: Optional[Dictionary],
    detectors: Sequence[PenaltyDetector] = DEFAULT_DETECTORS,
) -> List[PenaltyDetail]:
    """
    Run every detector against the password.

    Args:
        password: Raw password (lower-cased here, once, for all detectors)
        dictionary: Common-password dictionary, or None to skip the
            dictionary-based detectors
        detectors: Detectors to run, in order

    Returns:
        All penalties found, in detector order
    """
    lower = password.lower()
    penalties = []
    for detector in detectors:
        penalty = detector.detect(lower, dictionary)
        if penalty is not None:
            penalties.append(penalty)

    logger.debug("Detected %d penalties", len(penalties))
    return penalties
