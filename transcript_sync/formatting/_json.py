"""Formatter for JSON (.json) output."""

from transcript_sync.timestamps.models import Transcript


def to_json(result: Transcript, **kwargs: object) -> str:
    """Convert a Transcript into a JSON-formatted string.

    Parameters:
        result: The Transcript to serialize.
        **kwargs: Additional arguments; ignored for JSON output.

    Returns:
        JSON string representation of the transcript (pretty-printed with
        two-space indentation).
    """
    return result.model_dump_json(indent=2)
