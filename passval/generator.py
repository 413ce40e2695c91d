"""
generator.py - Random passwords that are guaranteed to pass a policy.

How this works:
1. Pick a length uniformly between the policy's min and max
2. Build the character pool from the required classes (all four if the
   policy doesn't require any)
3. Put one character from each required class at its own random position
4. Fill every other position randomly from the full pool
5. Run the candidate through the validator; if it fails (too weak, or it
   happened to spell out a keyboard walk), throw it away and try again,
   up to MAX_ATTEMPTS times

Randomness comes from Python's `secrets` module, never `random`. The output
is meant to be used as a real account password, so it has to come from the
OS's cryptographic random number generator, not a predictable PRNG.
Candidates are never stored or logged.
"""

import logging
import secrets
import string
from typing import List

from passval.config import ValidatorConfig
from passval.errors import GenerationExhausted


logger = logging.getLogger(__name__)

# Character sets
LOWERCASE = string.ascii_lowercase      # a-z
UPPERCASE = string.ascii_uppercase      # A-Z
DIGITS = string.digits                  # 0-9
SYMBOLS = "!@#$%^&*()-_=+[]{}|;:',.<>?/`~"

# Hard cap on retries so generate() always terminates
MAX_ATTEMPTS = 1000


def _character_classes(config: ValidatorConfig) -> List[str]:
    """The character sets the policy requires, in a fixed order."""
    classes = []
    if config.require_lower:
        classes.append(LOWERCASE)
    if config.require_upper:
        classes.append(UPPERCASE)
    if config.require_numbers:
        classes.append(DIGITS)
    if config.require_symbols:
        classes.append(SYMBOLS)
    return classes


def generate_candidate(config: ValidatorConfig) -> str:
    """
    Generate one random password that meets the structural rules.

    The candidate always has the right length and one character from every
    required class. Whether it scores high enough is the validator's call.

    Args:
        config: Policy to satisfy

    Returns:
        A random password
    """
    length = config.min_length + secrets.randbelow(config.max_length - config.min_length + 1)

    required = _character_classes(config)
    pool = "".join(required) or (LOWERCASE + UPPERCASE + DIGITS + SYMBOLS)

    # A policy can require more classes than it allows characters (e.g. max
    # length 2 with all four classes); the extra classes just don't fit
    required = required[:length]

    # Shuffle the positions so the guaranteed chars aren't always up front.
    # secrets.SystemRandom().shuffle is cryptographically secure.
    positions = list(range(length))
    secrets.SystemRandom().shuffle(positions)

    password_chars = [""] * length
    for pos, chars in zip(positions, required):
        password_chars[pos] = secrets.choice(chars)

    for pos in positions[len(required):]:
        password_chars[pos] = secrets.choice(pool)

    return "".join(password_chars)


def generate_password(validator, max_attempts: int = MAX_ATTEMPTS) -> str:
    """
    Generate a password that passes the validator.

    Args:
        validator: PasswordValidator whose policy and threshold must be met
        max_attempts: Retry cap

    Returns:
        The first candidate that passes validation

    Raises:
        GenerationExhausted: If no candidate passed within max_attempts
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generate_candidate(validator.config)
        passed, _ = validator.validate(candidate)
        if passed:
            logger.debug("Generated a compliant password after %d attempt(s)", attempt)
            return candidate

    logger.warning(
        "Password generation exhausted after %d attempts (min=%d, max=%d, complexity=%d)",
        max_attempts, validator.config.min_length, validator.config.max_length,
        validator.config.complexity,
    )
    raise GenerationExhausted(max_attempts)
