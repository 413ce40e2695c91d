"""
leet.py - Leet-speak normalization.

People disguise dictionary words by swapping letters for look-alikes:
"p@ssw0rd" is still "password". Before checking a password against the
dictionary we map those characters back to letters.

Two flavours:
- leet_normalize() picks the most common letter for every character. One
  answer, always the same.
- leet_variants() also tries the alternatives for characters that could mean
  more than one letter ('1' is 'i' or 'l', '9' is 'g' or 'q').

Only the first MAX_AMBIGUOUS_POSITIONS ambiguous characters are expanded.
Every extra ambiguous character doubles the number of variants, and real
obfuscated passwords rarely depend on more than two of them.
"""

import itertools
from typing import Dict, List, Tuple


# Character -> possible letters. The first letter is the canonical one.
LEET_MAP: Dict[str, Tuple[str, ...]] = {
    "@": ("a",),
    "4": ("a",),
    "8": ("b",),
    "(": ("c",),
    "{": ("c",),
    "3": ("e",),
    "6": ("g",),
    "#": ("h",),
    "!": ("i",),
    "1": ("i", "l"),
    "|": ("i", "l"),
    "0": ("o",),
    "9": ("g", "q"),
    "5": ("s",),
    "$": ("s",),
    "7": ("t",),
    "+": ("t",),
    "2": ("z",),
    "%": ("x",),
}

# Tunable: how many ambiguous positions get expanded (2 -> at most 4 variants
# for two-way ambiguities)
MAX_AMBIGUOUS_POSITIONS = 2


def leet_normalize(s: str) -> str:
    """
    Replace every leet character with its canonical letter.

    Characters that aren't in LEET_MAP are left alone, so a string that is
    already plain lowercase letters comes back unchanged.

    Args:
        s: Text to normalize (callers pass it lower-cased)

    Returns:
        The canonical form
    """
    return "".join(LEET_MAP[c][0] if c in LEET_MAP else c for c in s)


def leet_variants(s: str) -> List[str]:
    """
    Enumerate the plausible de-obfuscated forms of a string.

    The canonical form is always included. For the first
    MAX_AMBIGUOUS_POSITIONS ambiguous characters (left to right) every
    combination of their alternatives is layered on top of the canonical form.

    Example:
        leet_variants("p@ss1") -> ["passi", "passl"]

    Returns:
        Distinct variants, sorted alphabetically. The sort gives callers a
        stable order to search in, so "first match" means the same thing on
        every run.
    """
    canonical = list(leet_normalize(s))
    variants = {"".join(canonical)}

    ambiguous = [(i, LEET_MAP[c]) for i, c in enumerate(s) if len(LEET_MAP.get(c, ())) > 1]
    ambiguous = ambiguous[:MAX_AMBIGUOUS_POSITIONS]

    if ambiguous:
        positions = [pos for pos, _ in ambiguous]
        for combo in itertools.product(*(options for _, options in ambiguous)):
            chars = canonical[:]
            for pos, letter in zip(positions, combo):
                chars[pos] = letter
            variants.add("".join(chars))

    return sorted(variants)
