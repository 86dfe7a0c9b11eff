"""Configuration dataclasses for the alignment pipeline.

This module groups related settings so that the aligner, the batch driver
and the CLI share one set of tunables instead of long parameter lists.
"""

from __future__ import annotations

from dataclasses import dataclass

from transcript_sync.utils.constant import (
    CORRECTION_BATCH_SIZE,
    CORRECTION_MAX_WORKERS,
    FUZZY_MAX_RATIO,
    FUZZY_MIN_DISTANCE,
    FUZZY_MIN_LENGTH,
    INTERPOLATION_FILL_RATIO,
    LOOKAHEAD_WINDOW,
    LOW_MATCH_RATE_THRESHOLD,
    SEGMENT_WORD_COUNT,
)


@dataclass(frozen=True)
class MatchingConfig:
    """Groups token matching and aligner settings.

    Attributes:
        lookahead_window: Tokens scanned ahead on either side before the
            aligner gives up on the current token. ``0`` disables lookahead.
        min_length: Normalized tokens shorter than this only match exactly.
        min_distance: Edit distance always tolerated for long-enough tokens.
        max_ratio: Share of the longer token's length tolerated as edits.
        fill_ratio: Share of an interpolated slot covered by the token.

    Raises:
        ValueError: If any value is out of range.

    """

    lookahead_window: int = LOOKAHEAD_WINDOW
    min_length: int = FUZZY_MIN_LENGTH
    min_distance: int = FUZZY_MIN_DISTANCE
    max_ratio: float = FUZZY_MAX_RATIO
    fill_ratio: float = INTERPOLATION_FILL_RATIO

    def __post_init__(self) -> None:
        if self.lookahead_window < 0:
            raise ValueError("lookahead_window must be greater than or equal to 0")
        if self.min_length < 0:
            raise ValueError("min_length must be greater than or equal to 0")
        if self.min_distance < 0:
            raise ValueError("min_distance must be greater than or equal to 0")
        if not 0.0 <= self.max_ratio <= 1.0:
            raise ValueError("max_ratio must be in [0.0, 1.0]")
        if not 0.0 <= self.fill_ratio <= 1.0:
            raise ValueError("fill_ratio must be in [0.0, 1.0]")


@dataclass
class BatchConfig:
    """Groups batch correction settings.

    Attributes:
        batch_size: Words sent to the correction service per request;
            ``<= 0`` sends the whole transcript at once.
        max_workers: Concurrent correction requests (``1`` = sequential).
        low_match_rate: Batches below this match rate are logged as warnings.
        segment_word_count: Words per segment when grouping synthesized text.
        matching: Settings forwarded to the aligner.

    """

    batch_size: int = CORRECTION_BATCH_SIZE
    max_workers: int = CORRECTION_MAX_WORKERS
    low_match_rate: float = LOW_MATCH_RATE_THRESHOLD
    segment_word_count: int = SEGMENT_WORD_COUNT
    matching: MatchingConfig | None = None

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError("max_workers must be greater than 0")
        if self.segment_word_count < 1:
            raise ValueError("segment_word_count must be greater than 0")
        if self.matching is None:
            self.matching = MatchingConfig()


@dataclass
class UIConfig:
    """Groups UI and logging settings.

    Attributes:
        verbose: Enable detailed diagnostic output.
        quiet: Suppress non-error output.

    """

    verbose: bool = False
    quiet: bool = False
