"""Formatter for JSON Lines (.jsonl) output.

Each line contains a JSON object representing a single word of the
transcript, which is what the player streams for highlighting.
"""

from __future__ import annotations

from transcript_sync.timestamps.models import Transcript


def to_jsonl(result: Transcript, **kwargs: object) -> str:  # noqa: D401
    """Convert a ``Transcript`` into JSON Lines string (one word per line).

    Args:
        result: The transcript containing words.
        **kwargs: Additional arguments (ignored for JSONL output).

    Returns:
        A JSON Lines string where each line is a JSON object for one word.

    """
    return "\n".join(word.model_dump_json() for word in result.words)
