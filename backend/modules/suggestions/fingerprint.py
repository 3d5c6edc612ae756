"""
Suggestion fingerprinting.

A fingerprint is a coarse similarity signal: two suggestions whose first
ten sorted unique words match get the same value, whatever the word order,
casing, punctuation or repetition. Collisions between unrelated texts are
expected and acceptable.
"""

import re

# Word characters are ASCII only; whitespace is any Unicode whitespace
_NON_WORD = re.compile(r"[^A-Za-z0-9_\s]")
_WHITESPACE = re.compile(r"\s+")

# Number of sorted unique tokens that make up the fingerprint key
KEY_TOKENS = 10


def fingerprint_key(problem: str, solution: str) -> str:
    """Build the token string the fingerprint hash is computed over."""
    content = f"{problem.lower().strip()} {solution.lower().strip()}"
    words = _WHITESPACE.split(_NON_WORD.sub("", content))
    return "".join(sorted(set(words))[:KEY_TOKENS])


def rolling_hash(text: str) -> int:
    """
    32-bit rolling hash: ``h = h * 31 + code``, wrapped to signed 32 bits.

    Returns the absolute value of the final hash.
    """
    h = 0
    for char in text:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def fingerprint(problem: str, solution: str) -> str:
    """Similarity fingerprint of a suggestion, as lowercase hex."""
    return format(rolling_hash(fingerprint_key(problem, solution)), "x")
