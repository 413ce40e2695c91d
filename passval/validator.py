"""
validator.py - Password policy checks and the final score.

How a password gets judged (single pass, nothing remembered between calls):
1. Structural rules: length bounds, then each required character class.
   Every broken rule is recorded; we never stop at the first one.
2. Entropy -> raw score (see entropy.py)
3. Pattern penalties (see penalties.py), multiplied into the score one at a
   time, in detector order
4. Clamp to 0..100
5. Pass = no broken rules AND score >= the policy's complexity threshold.
   Missing the threshold is reported as one more rule failure.

The same password, policy and dictionary always give the same answer, so a
single validator can be shared freely between threads.
"""

import logging
import unicodedata
from dataclasses import dataclass
from typing import Optional, Tuple

from passval.config import ValidatorConfig
from passval.dictionary import Dictionary, default_dictionary
from passval.entropy import calculate_entropy, entropy_to_score
from passval.errors import PolicyViolation
from passval.generator import generate_password
from passval.penalties import PenaltyDetail, detect_penalties


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationOutcome:
    """Full result of validating one password."""

    passed: bool
    score: int
    raw_score: int
    entropy_bits: float
    rule_failures: Tuple[str, ...] = ()
    penalties: Tuple[PenaltyDetail, ...] = ()

    def violation(self) -> Optional[PolicyViolation]:
        """The failure detail, or None if the password passed."""
        if self.passed:
            return None
        return PolicyViolation(rule_failures=self.rule_failures, penalties=self.penalties)


def char_classes(password: str) -> Tuple[bool, bool, bool, bool]:
    """
    Which policy character classes appear in the password.

    Symbols are anything Unicode files under punctuation or symbols, so a
    space or a control character doesn't count as one.

    Returns:
        (has_lower, has_upper, has_number, has_symbol)
    """
    lower = upper = number = symbol = False
    for c in password:
        if c.islower():
            lower = True
        elif c.isupper():
            upper = True
        elif c.isdecimal():
            number = True
        elif unicodedata.category(c)[0] in ("P", "S"):
            symbol = True
    return lower, upper, number, symbol


class PasswordValidator:
    """
    Validates passwords against a policy and generates ones that pass.

    Usage:
        v = PasswordValidator(min_length=8, max_length=64, require_upper=True, complexity=60)
        passed, score = v.validate("correct horse")
        passed, score, violation = v.validate_verbose("correct horse")
        new_password = v.generate()

    Args:
        min_length: Minimum length in characters (clamped to >= 1)
        max_length: Maximum length (clamped to >= min_length)
        require_lower: Require a lowercase letter
        require_upper: Require an uppercase letter
        require_numbers: Require a digit
        require_symbols: Require a punctuation or symbol character
        complexity: Minimum acceptable score, 0-100 (clamped)
        custom_dictionary: Newline-delimited common passwords to use instead
            of the bundled list. Empty means "use the bundled list".
        dictionary: An already-built Dictionary to share; takes precedence
            over custom_dictionary
    """

    def __init__(
        self,
        min_length: int = 8,
        max_length: int = 64,
        require_lower: bool = False,
        require_upper: bool = False,
        require_numbers: bool = False,
        require_symbols: bool = False,
        complexity: int = 50,
        custom_dictionary: str = "",
        dictionary: Optional[Dictionary] = None,
    ):
        self.config = ValidatorConfig(
            min_length=min_length,
            max_length=max_length,
            require_lower=require_lower,
            require_upper=require_upper,
            require_numbers=require_numbers,
            require_symbols=require_symbols,
            complexity=complexity,
        )

        if dictionary is None:
            dictionary = Dictionary.from_text(custom_dictionary) if custom_dictionary else default_dictionary()
        self.dictionary = dictionary

    @classmethod
    def from_config(cls, config: ValidatorConfig, dictionary: Optional[Dictionary] = None) -> "PasswordValidator":
        return cls(
            min_length=config.min_length,
            max_length=config.max_length,
            require_lower=config.require_lower,
            require_upper=config.require_upper,
            require_numbers=config.require_numbers,
            require_symbols=config.require_symbols,
            complexity=config.complexity,
            dictionary=dictionary,
        )

    def __repr__(self) -> str:
        return f"PasswordValidator({self.config!r}, dictionary_size={len(self.dictionary)})"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def evaluate(self, password: str) -> ValidationOutcome:
        """Run every check and return the full outcome."""
        config = self.config
        failures = []

        # --- Rule checks ---
        if len(password) < config.min_length:
            failures.append(f"too short: minimum {config.min_length} characters")
        if len(password) > config.max_length:
            failures.append(f"too long: maximum {config.max_length} characters")

        has_lower, has_upper, has_number, has_symbol = char_classes(password)

        if config.require_lower and not has_lower:
            failures.append("missing lowercase letter")
        if config.require_upper and not has_upper:
            failures.append("missing uppercase letter")
        if config.require_numbers and not has_number:
            failures.append("missing number")
        if config.require_symbols and not has_symbol:
            failures.append("missing symbol")

        # --- Entropy + penalties ---
        entropy = calculate_entropy(password)
        raw = entropy_to_score(entropy)

        penalties = detect_penalties(password, self.dictionary)
        score = raw
        for penalty in penalties:
            # truncate after each factor, so penalties compound on whole points
            score = int(score * penalty.factor)

        score = max(0, min(100, score))

        rules_pass = not failures
        complexity_pass = score >= config.complexity
        if not complexity_pass:
            failures.append(f"complexity {score} below threshold {config.complexity}")

        return ValidationOutcome(
            passed=rules_pass and complexity_pass,
            score=score,
            raw_score=raw,
            entropy_bits=entropy,
            rule_failures=tuple(failures),
            penalties=tuple(penalties),
        )

    def validate(self, password: str) -> Tuple[bool, int]:
        """
        Check a password against the policy.

        Returns:
            (passed, score) where score is 0-100
        """
        outcome = self.evaluate(password)
        return outcome.passed, outcome.score

    def validate_verbose(self, password: str) -> Tuple[bool, int, Optional[PolicyViolation]]:
        """
        Check a password and explain the verdict.

        Returns:
            (passed, score, violation). violation is None when the password
            passes; otherwise it lists every failed rule and every penalty.
        """
        outcome = self.evaluate(password)
        return outcome.passed, outcome.score, outcome.violation()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self) -> str:
        """
        Generate a random password that passes this validator.

        Raises:
            GenerationExhausted: If the attempt cap was hit first
        """
        return generate_password(self)


# --- Self-test ---
if __name__ == "__main__":
    print("=" * 72)
    print("Password Validator Self-Test")
    print("=" * 72)

    v = PasswordValidator(8, 64, True, True, True, True, 60)

    print("\n1. Bundled dictionary:")
    passed, score, violation = v.validate_verbose("password")
    print(f"   password -> pass={passed} score={score}")
    if violation:
        print(f"   {violation}")

    print("\n2. Custom dictionary:")
    custom = "\n".join(["password", "123456", "qwerty", "admin", "letmein", "superman", "rangers"])
    v2 = PasswordValidator(8, 64, True, True, True, True, 60, custom_dictionary=custom)
    passed, score, violation = v2.validate_verbose("superman123!")
    print(f"   superman123! -> pass={passed} score={score}")
    if violation:
        print(f"   {violation}")

    print("\n3. Example passwords:")
    print(f"   {'Password':<28} {'Raw':>4} {'Final':>6}  Penalties")
    for pw in [
        "password", "p@ssw0rd", "qwerty", "aaaaaa", "Xk9$mP2!vLq", "12345678",
        "abcdefg", "P@ssword123", "admin2023!", "letmein!!", "Abc123!",
        "Summer2024$", "!@#$%^&*", "aB3!aB3!", "correcthorsebatterystaple",
        "Tr0ub4dor&3", "p@ssw0rd123", "keyboardcat", "11111111", "password123",
    ]:
        outcome = v.evaluate(pw)
        rules = ", ".join(str(p.rule) for p in outcome.penalties) or "none"
        verdict = "PASS" if outcome.passed else "FAIL"
        print(f"   {pw:<28} {outcome.raw_score:>4} {outcome.score:>6}  {rules} [{verdict}]")

    print("\n4. Generated password:")
    pw = v.generate()
    print(f"   {pw}  (score {v.validate(pw)[1]})")

    print("\n" + "=" * 72)
