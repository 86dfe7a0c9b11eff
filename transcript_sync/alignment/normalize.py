"""Token normalization used as the comparison key of the aligner."""

from __future__ import annotations

import string

from transcript_sync.utils.constant import EDGE_PUNCTUATION

__all__ = ["normalize_token"]

# Whitespace is stripped together with punctuation so that sequences such as
# `" «Привет,» "` lose every decoration in a single pass.
_EDGE_CHARS = EDGE_PUNCTUATION + string.whitespace + "\u00a0"


def normalize_token(text: str) -> str:
    """Return the comparison form of a token.

    Rules:
    - strip quotes, dashes, brackets, sentence punctuation, ellipsis and
      whitespace from both edges (inner characters are kept)
    - lowercase

    Punctuation-only input yields an empty string.
    """
    return text.strip(_EDGE_CHARS).lower()
