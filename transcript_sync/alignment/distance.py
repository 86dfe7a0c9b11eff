"""Edit distance and the fuzzy match policy of the aligner.

A fuzzy match models a spelling correction: the correction service may turn
``"пограмма"`` into ``"программа"`` and the two must still be recognised as
the same word. Short tokens are excluded because a single edit on a two
letter word changes it into a different word.
"""

from __future__ import annotations

from transcript_sync.config import MatchingConfig
from transcript_sync.timestamps.models import MatchDecision

__all__ = [
    "edit_distance",
    "is_fuzzy_match",
    "match_tokens",
]

_DEFAULT_CONFIG = MatchingConfig()


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between ``a`` and ``b``.

    Only two rows sized to the shorter string are kept, so auxiliary memory
    is ``O(min(len(a), len(b)))``.

    Returns:
        int: Minimum number of single-character insertions, deletions and
            substitutions turning one string into the other.

    """
    if not a:
        return len(b)
    if not b:
        return len(a)
    if len(a) > len(b):
        a, b = b, a

    prev = list(range(len(a) + 1))
    curr = [0] * (len(a) + 1)
    for i, char_b in enumerate(b, start=1):
        curr[0] = i
        for j, char_a in enumerate(a, start=1):
            cost = 0 if char_a == char_b else 1
            curr[j] = min(
                prev[j] + 1,
                curr[j - 1] + 1,
                prev[j - 1] + cost,
            )
        prev, curr = curr, prev
    return prev[len(a)]


def is_fuzzy_match(a: str, b: str, *, config: MatchingConfig | None = None) -> bool:
    """Return whether two normalized tokens are close enough to be one word.

    Parameters:
        a, b: Normalized tokens.
        config: Matching thresholds; defaults to :class:`MatchingConfig`.

    Returns:
        bool: ``False`` when either token is shorter than
            ``config.min_length``; otherwise whether the edit distance stays
            within ``max(config.min_distance, floor(longest * config.max_ratio))``.

    """
    cfg = config or _DEFAULT_CONFIG
    if len(a) < cfg.min_length or len(b) < cfg.min_length:
        return False
    tolerance = max(cfg.min_distance, int(max(len(a), len(b)) * cfg.max_ratio))
    return edit_distance(a, b) <= tolerance


def match_tokens(
    a: str, b: str, *, config: MatchingConfig | None = None
) -> MatchDecision:
    """Classify the relation between two normalized tokens.

    Returns:
        MatchDecision: ``EXACT`` for equal strings, ``FUZZY`` for a
            tolerated spelling difference, ``NONE`` otherwise.

    """
    if a == b:
        return MatchDecision.EXACT
    if is_fuzzy_match(a, b, config=config):
        return MatchDecision.FUZZY
    return MatchDecision.NONE
