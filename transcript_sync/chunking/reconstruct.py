"""Batch correction driver and display segment reconstruction.

The correction service (spelling and punctuation restoration) receives the
recognized words in fixed-size batches. Its answer is plain text, so each
batch is re-attached to the recognized timing with
:func:`~transcript_sync.alignment.reconcile_with_corrected_text` and the
display segments are rebuilt from the corrected words afterwards.

Batches are independent: a failing or low-quality batch falls back to the
recognized words without touching its neighbours.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Protocol

from rich.progress import Progress, TaskID

from transcript_sync.alignment import reconcile_with_corrected_text
from transcript_sync.chunking.batcher import batch_tokens
from transcript_sync.config import BatchConfig, MatchingConfig
from transcript_sync.timestamps.models import (
    AlignedToken,
    Segment,
    SourceToken,
    TargetToken,
    Transcript,
)
from transcript_sync.utils.logging_config import get_logger

__all__ = [
    "SupportsCorrection",
    "BatchOutcome",
    "CorrectionReport",
    "apply_corrections",
    "apply_corrected_text",
    "rebuild_segments",
]

logger = get_logger(__name__)


class SupportsCorrection(Protocol):
    """Protocol for text correction services (spelling / punctuation)."""

    def correct(self, text: str) -> str:
        """Return a corrected version of ``text``.

        Parameters:
            text (str): Space-joined recognized words of one batch.

        Returns:
            str: Corrected text; words are separated by whitespace.
        """


@dataclass(frozen=True)
class BatchOutcome:
    """Statistics for one correction batch.

    Attributes:
        index: Zero-based batch index.
        matched: Words whose text was replaced by the correction.
        total: Words in the batch.
        failed: Whether the correction service raised for this batch.

    """

    index: int
    matched: int
    total: int
    failed: bool = False

    @property
    def match_rate(self) -> float:
        """Share of matched words in the batch."""
        return self.matched / self.total if self.total else 1.0


@dataclass
class CorrectionReport:
    """Corrected transcript together with per-batch statistics."""

    transcript: Transcript
    batches: list[BatchOutcome] = field(default_factory=list)

    @property
    def matched(self) -> int:
        """Matched words across all batches."""
        return sum(b.matched for b in self.batches)

    @property
    def total(self) -> int:
        """Words across all batches."""
        return sum(b.total for b in self.batches)

    @property
    def match_rate(self) -> float:
        """Aggregate share of matched words."""
        return self.matched / self.total if self.total else 1.0


class _StaticCorrector:
    """Corrector returning a fixed, already corrected text."""

    def __init__(self, text: str) -> None:
        self._text = text

    def correct(self, text: str) -> str:
        del text
        return self._text


def _correct_batch(
    index: int,
    batch: Sequence[SourceToken],
    *,
    corrector: SupportsCorrection,
    matching: MatchingConfig,
    total_batches: int,
    low_match_rate: float,
) -> tuple[list[AlignedToken], BatchOutcome]:
    """Correct and re-align a single batch.

    Returns:
        tuple[list[AlignedToken], BatchOutcome]: Aligned words of the batch
            (the recognized words when the service fails) and its statistics.
    """
    batch_num = index + 1
    batch_text = " ".join(tok.text.strip() for tok in batch)
    try:
        corrected_text = corrector.correct(batch_text)
    except Exception as exc:  # service failure only affects this batch
        logger.warning(f"[correction] batch {batch_num}/{total_batches} failed: {exc}")
        words = [
            AlignedToken(text=tok.text, start=tok.start, end=tok.end, matched=False)
            for tok in batch
        ]
        return words, BatchOutcome(index=index, matched=0, total=len(batch), failed=True)

    target = [TargetToken(text=part) for part in corrected_text.split()]
    logger.debug(
        f"[correction] batch {batch_num}/{total_batches}: "
        f"sent {len(batch)} words, got {len(target)} back"
    )
    result = reconcile_with_corrected_text(batch, target, config=matching)
    outcome = BatchOutcome(index=index, matched=result.matched, total=result.total)
    logger.info(
        f"[correction] batch {batch_num}/{total_batches}: "
        f"aligned {result.matched}/{result.total} words"
    )
    if outcome.match_rate < low_match_rate:
        logger.warning(
            f"[correction] batch {batch_num}/{total_batches}: low match rate "
            f"{outcome.match_rate:.0%}"
        )
    return result.tokens, outcome


def rebuild_segments(
    segments: Sequence[Segment],
    words: Sequence[AlignedToken],
) -> list[Segment]:
    """Re-derive each segment's text from the words inside its time range.

    A word belongs to a segment when ``seg.start <= word.start`` and
    ``word.end <= seg.end``. Segments without any such word keep their
    original text.

    Returns:
        list[Segment]: New segments with the same time ranges.
    """
    rebuilt: list[Segment] = []
    for segment in segments:
        inside = [
            w.text.strip()
            for w in words
            if w.has_timing and w.start >= segment.start and w.end <= segment.end
        ]
        text = " ".join(t for t in inside if t).strip()
        rebuilt.append(segment.model_copy(update={"text": text or segment.text}))
    return rebuilt


def apply_corrections(
    transcript: Transcript,
    corrector: SupportsCorrection,
    *,
    config: BatchConfig | None = None,
    progress: Progress | None = None,
    task: TaskID | None = None,
) -> CorrectionReport:
    """Run the correction service over a transcript batch by batch.

    Each batch is sent as space-joined text, the answer is split on
    whitespace and aligned back onto the recognized words. With
    ``config.max_workers > 1`` batches are corrected on a thread pool; the
    results are always concatenated in batch order.

    Parameters:
        transcript: Recognized transcript; every word must carry timing.
        corrector: Correction service.
        config: Batch settings; defaults to :class:`BatchConfig`.
        progress: Optional Rich progress advanced once per finished batch.
        task: Task within ``progress`` to advance.

    Returns:
        CorrectionReport: Corrected transcript (words and rebuilt segments)
            and per-batch statistics.

    Raises:
        ValueError: If a recognized word has no timing.
    """
    cfg = config or BatchConfig()
    matching = cfg.matching or MatchingConfig()
    source = transcript.source_tokens()
    batches = batch_tokens(source, cfg.batch_size)
    if not batches:
        return CorrectionReport(transcript=transcript.model_copy(deep=True))

    logger.info(
        f"[correction] correcting {len(source)} words in {len(batches)} batch(es)"
    )

    def _run(index: int) -> tuple[list[AlignedToken], BatchOutcome]:
        result = _correct_batch(
            index,
            batches[index],
            corrector=corrector,
            matching=matching,
            total_batches=len(batches),
            low_match_rate=cfg.low_match_rate,
        )
        if progress is not None and task is not None:
            progress.advance(task)
        return result

    if cfg.max_workers > 1 and len(batches) > 1:
        with ThreadPoolExecutor(max_workers=cfg.max_workers) as pool:
            results = list(pool.map(_run, range(len(batches))))
    else:
        results = [_run(index) for index in range(len(batches))]

    words: list[AlignedToken] = []
    outcomes: list[BatchOutcome] = []
    for batch_words, outcome in results:
        words.extend(batch_words)
        outcomes.append(outcome)

    corrected = transcript.model_copy(
        update={
            "words": words,
            "segments": rebuild_segments(transcript.segments, words),
        }
    )
    report = CorrectionReport(transcript=corrected, batches=outcomes)
    logger.info(
        f"[correction] complete: aligned {report.matched}/{report.total} words "
        f"({report.match_rate:.0%})"
    )
    return report


def apply_corrected_text(
    transcript: Transcript,
    corrected_text: str,
    *,
    config: BatchConfig | None = None,
) -> CorrectionReport:
    """Align an already corrected text onto a whole transcript.

    Equivalent to :func:`apply_corrections` with a single batch whose
    correction is ``corrected_text``.

    Returns:
        CorrectionReport: Corrected transcript and its statistics.
    """
    cfg = dataclasses.replace(config or BatchConfig(), batch_size=0, max_workers=1)
    return apply_corrections(transcript, _StaticCorrector(corrected_text), config=cfg)
