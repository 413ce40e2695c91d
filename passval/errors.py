"""
errors.py - What can go wrong, and how it's reported.

There are only two kinds of "failure" in passval:

- PolicyViolation: the password broke one or more rules or scored below the
  threshold. This is an ordinary answer, not an exception. It's handed back
  from validate_verbose() with every failed rule and every penalty listed,
  so the user can fix everything in one go.
- GenerationExhausted: generate() gave up after its attempt cap. This one is
  raised; the caller can relax the policy and try again.

Bad configuration is never an error. Out-of-range numbers are clamped (see
ValidatorConfig), and any string at all can be validated.
"""

from dataclasses import dataclass
from typing import Tuple

from passval.penalties import PenaltyDetail


class PassvalError(Exception):
    """Base class for passval exceptions."""


class GenerationExhausted(PassvalError):
    """No compliant password was found within the attempt cap."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"failed to generate a valid password after {attempts} attempts")


@dataclass(frozen=True)
class PolicyViolation:
    """
    Everything that kept a password from passing.

    rule_failures are in check order (length, classes, then complexity);
    penalties are in detector order.
    """

    rule_failures: Tuple[str, ...] = ()
    penalties: Tuple[PenaltyDetail, ...] = ()

    def __str__(self) -> str:
        parts = [f"rule: {failure}" for failure in self.rule_failures]
        parts.extend(
            f"penalty({p.rule}, x{p.factor:.2f}): {p.description}" for p in self.penalties
        )
        return "; ".join(parts)

    def __bool__(self) -> bool:
        return bool(self.rule_failures or self.penalties)
