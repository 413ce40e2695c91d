"""
config.py - Password policy settings.

A ValidatorConfig is built once and then shared by every validation and
generation call made through its validator. It's frozen, so nothing can
change the policy halfway through.

Values come from the application (not from users), so instead of rejecting
odd numbers we quietly clamp them into range:
    min_length < 1          -> 1
    max_length < min_length -> min_length
    complexity              -> clamped to 0..100
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidatorConfig:
    """Length bounds, required character classes and the minimum score."""

    min_length: int = 8
    max_length: int = 64
    require_lower: bool = False
    require_upper: bool = False
    require_numbers: bool = False
    require_symbols: bool = False
    complexity: int = 50

    def __post_init__(self):
        min_length = max(1, int(self.min_length))
        max_length = max(min_length, int(self.max_length))
        complexity = max(0, min(100, int(self.complexity)))

        # frozen dataclass, so go through object.__setattr__
        object.__setattr__(self, "min_length", min_length)
        object.__setattr__(self, "max_length", max_length)
        object.__setattr__(self, "complexity", complexity)
