"""Formatter for plain text (.txt) output."""

from transcript_sync.timestamps.models import Transcript


def to_txt(result: Transcript, **kwargs: object) -> str:
    """Format a Transcript as plain text, one segment per line.

    Falls back to the space-joined words when the transcript has no
    segments.
    """
    if not result.segments:
        return result.text
    return "\n".join(segment.text for segment in result.segments)
