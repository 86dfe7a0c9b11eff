"""Token alignment between timed and authoritative transcripts.

The helpers are pure functions operating on the models defined in
:pymod:`transcript_sync.timestamps.models`; they perform no I/O and hold no
state between calls.
"""

from .aligner import reconcile_with_corrected_text, reconcile_with_timed_speech
from .distance import edit_distance, is_fuzzy_match, match_tokens
from .interpolate import interpolate_gaps
from .normalize import normalize_token

__all__ = [
    "normalize_token",
    "edit_distance",
    "is_fuzzy_match",
    "match_tokens",
    "reconcile_with_corrected_text",
    "reconcile_with_timed_speech",
    "interpolate_gaps",
]
