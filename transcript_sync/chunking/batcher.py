"""Fixed-size windowing of token sequences.

Long transcripts are sent to the correction service in windows because the
service limits its input size. Windows never overlap: every token belongs to
exactly one batch, and concatenating the batches in order restores the input.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

__all__ = [
    "batch_tokens",
]

T = TypeVar("T")


def batch_tokens(tokens: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split a token sequence into consecutive fixed-size batches.

    Parameters:
        tokens (Sequence[T]): Tokens in reading order.
        batch_size (int): Tokens per batch. If <= 0 the whole sequence is
            returned as a single batch.

    Returns:
        list[list[T]]: Batches in order; the last one may be shorter. An
            empty input yields no batches.
    """
    if not tokens:
        return []
    if batch_size <= 0:
        return [list(tokens)]
    return [list(tokens[start : start + batch_size]) for start in range(0, len(tokens), batch_size)]
