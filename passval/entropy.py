"""
entropy.py - Entropy estimate and the 0-100 score curve.

Entropy = length * log2(pool_size)

The pool size is built from the character classes that actually appear in
the password (not the ones a policy asks for):
    lowercase  +26
    uppercase  +26
    digits     +10
    anything else (punctuation, symbols, spaces, other scripts) +33

Bits are turned into a score with a saturating curve:

    score = 100 * (1 - e^(-bits / 40))

    20 bits  -> ~39
    40 bits  -> ~63
    60 bits  -> ~78
    80 bits  -> ~86
    128 bits -> ~96

Low entropy is punished hard, and past ~60 bits each extra bit buys less.
"""

import math


# Curve shape. Lower = faster saturation. Fixed, not part of the policy.
SCORE_CURVE_K = 40.0

LOWER_POOL = 26
UPPER_POOL = 26
DIGIT_POOL = 10
SYMBOL_POOL = 33

# Score bands for the human-readable label, checked in order
STRENGTH_LABELS = (
    (20, "Very Weak"),
    (40, "Weak"),
    (60, "Moderate"),
    (80, "Strong"),
)


def effective_pool_size(password: str) -> int:
    """Sum of the pool weights for every character class present."""
    has_lower = has_upper = has_digit = has_symbol = False

    for c in password:
        if c.islower():
            has_lower = True
        elif c.isupper():
            has_upper = True
        elif c.isdecimal():
            has_digit = True
        else:
            has_symbol = True

    pool = 0
    if has_lower:
        pool += LOWER_POOL
    if has_upper:
        pool += UPPER_POOL
    if has_digit:
        pool += DIGIT_POOL
    if has_symbol:
        pool += SYMBOL_POOL
    return pool


def calculate_entropy(password: str) -> float:
    """
    Estimate entropy in bits.

    Returns 0.0 for an empty password or a degenerate pool.
    """
    if not password:
        return 0.0

    pool_size = effective_pool_size(password)
    if pool_size <= 1:
        return 0.0

    return len(password) * math.log2(pool_size)


def entropy_to_score(entropy: float) -> int:
    """Map entropy bits onto 0-100 with the saturating curve."""
    if entropy <= 0:
        return 0

    score = 100.0 * (1.0 - math.exp(-entropy / SCORE_CURVE_K))

    # round half away from zero
    s = int(math.floor(score + 0.5))
    return max(0, min(100, s))


def raw_score(password: str) -> int:
    """Score before any pattern penalties."""
    return entropy_to_score(calculate_entropy(password))


def strength_label(score: int) -> str:
    """Label a score as Very Weak / Weak / Moderate / Strong / Very Strong."""
    for upper_bound, label in STRENGTH_LABELS:
        if score < upper_bound:
            return label
    return "Very Strong"
