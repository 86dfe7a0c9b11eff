"""Align a synthesized reading back onto the script that was read.

Speech synthesis produces audio but no word timing. A recognition pass over
that audio yields timed words whose text drifts from the script
(pronunciation of numbers, merged words, recognition errors). The script
stays authoritative: every script word is kept, in order, and receives the
timing of the recognized word it matches or an interpolated one.
"""

from __future__ import annotations

from transcript_sync.alignment import reconcile_with_timed_speech
from transcript_sync.config import BatchConfig
from transcript_sync.timestamps.estimate import group_into_segments
from transcript_sync.timestamps.models import TargetToken, Transcript
from transcript_sync.utils.logging_config import get_logger

__all__ = ["align_synthesized_speech"]

logger = get_logger(__name__)


def align_synthesized_speech(
    script: str,
    recognized: Transcript,
    *,
    config: BatchConfig | None = None,
) -> Transcript:
    """Timestamp every word of ``script`` using a recognized transcript.

    Parameters:
        script: Text that was synthesized; split on whitespace.
        recognized: Recognition result for the synthesized audio.
        config: Segment size, match-rate threshold and matching settings.

    Returns:
        Transcript: One word per script word, grouped into segments of
            ``config.segment_word_count`` words. ``language`` and
            ``duration`` are taken from ``recognized``.

    Raises:
        ValueError: If a recognized word has no timing.
    """
    cfg = config or BatchConfig()
    target = [TargetToken(text=word) for word in script.split()]
    source = recognized.source_tokens()

    result = reconcile_with_timed_speech(target, source, config=cfg.matching)
    logger.info(f"[speech] aligned {result.matched}/{result.total} script words")
    if result.total and result.match_rate < cfg.low_match_rate:
        logger.warning(f"[speech] low match rate {result.match_rate:.0%}")

    return Transcript(
        words=result.tokens,
        segments=group_into_segments(result.tokens, cfg.segment_word_count),
        language=recognized.language,
        duration=recognized.duration,
    )
