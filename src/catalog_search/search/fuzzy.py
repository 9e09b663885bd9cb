"""Edit-distance fuzzy matching for typo tolerance."""

from rapidfuzz.distance import Levenshtein

# Patterns shorter than this never fuzzy-match
MIN_FUZZY_PATTERN_LENGTH = 3


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions or substitutions
    turning ``a`` into ``b``."""
    return Levenshtein.distance(a, b)


def fuzzy_match(text: str, pattern: str) -> bool:
    """Check whether any word of ``text`` is within the typo allowance of ``pattern``.

    The allowance is one edit per three pattern characters. Both arguments must
    already be lower-cased.

    Args:
        text: Text to search, split on whitespace
        pattern: A single query word

    Returns:
        True if some word is close enough to the pattern
    """
    if len(pattern) < MIN_FUZZY_PATTERN_LENGTH:
        return False

    max_distance = len(pattern) // 3
    return any(
        Levenshtein.distance(word, pattern, score_cutoff=max_distance) <= max_distance
        for word in text.split()
    )
