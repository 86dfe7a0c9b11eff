"""Batching and reconstruction utilities for long transcripts.

This module splits recognized words into batches for the correction service
and reassembles the corrected batches into words and display segments.
"""

from .batcher import batch_tokens
from .reconstruct import (
    BatchOutcome,
    CorrectionReport,
    SupportsCorrection,
    apply_corrected_text,
    apply_corrections,
    rebuild_segments,
)

__all__ = [
    "batch_tokens",
    "SupportsCorrection",
    "BatchOutcome",
    "CorrectionReport",
    "apply_corrections",
    "apply_corrected_text",
    "rebuild_segments",
]
