"""Timestamp estimation and fixed-size segment grouping.

Used when only a script and the length of its audio are known, e.g. when a
second recognition pass over synthesized speech is unavailable.
"""

from __future__ import annotations

from collections.abc import Sequence

from transcript_sync.timestamps.models import AlignedToken, Segment, Transcript
from transcript_sync.utils.constant import SEGMENT_WORD_COUNT

__all__ = [
    "estimate_word_timestamps",
    "group_into_segments",
]


def group_into_segments(
    words: Sequence[AlignedToken],
    size: int = SEGMENT_WORD_COUNT,
) -> list[Segment]:
    """Group consecutive timed words into segments of ``size`` words.

    Parameters:
        words: Words in reading order; all must carry timing.
        size: Words per segment (the last segment may be shorter).

    Returns:
        list[Segment]: Segments spanning from the first word's start to the
            last word's end.

    Raises:
        ValueError: If ``size`` is not positive.
    """
    if size <= 0:
        raise ValueError("size must be greater than 0")

    segments: list[Segment] = []
    for offset in range(0, len(words), size):
        chunk = words[offset : offset + size]
        segments.append(
            Segment(
                text=" ".join(w.text.strip() for w in chunk).strip(),
                start=chunk[0].start or 0.0,
                end=chunk[-1].end or 0.0,
            )
        )
    return segments


def estimate_word_timestamps(
    text: str,
    duration: float,
    *,
    segment_word_count: int = SEGMENT_WORD_COUNT,
    language: str | None = None,
) -> Transcript:
    """Distribute ``duration`` over the words of ``text`` by character count.

    Parameters:
        text: Script text; split on whitespace.
        duration: Length of the audio in seconds.
        segment_word_count: Words per display segment.
        language: Optional language tag copied onto the transcript.

    Returns:
        Transcript: Words laid end to end from 0 to ``duration`` with
            ``matched=False``, grouped into segments.

    Raises:
        ValueError: If ``duration`` is negative.
    """
    if duration < 0:
        raise ValueError("duration must be greater than or equal to 0")

    raw_words = text.split()
    total_chars = sum(len(w) for w in raw_words)

    words: list[AlignedToken] = []
    cursor = 0.0
    for raw in raw_words:
        span = len(raw) / total_chars * duration
        words.append(AlignedToken(text=raw, start=cursor, end=cursor + span, matched=False))
        cursor += span

    return Transcript(
        words=words,
        segments=group_into_segments(words, segment_word_count),
        language=language,
        duration=duration,
    )
