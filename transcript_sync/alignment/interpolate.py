"""Gap interpolation for aligned tokens that lack timing."""

from __future__ import annotations

from collections.abc import Sequence

from transcript_sync.timestamps.models import AlignedToken
from transcript_sync.utils.constant import INTERPOLATION_FILL_RATIO

__all__ = ["interpolate_gaps"]


def interpolate_gaps(
    tokens: Sequence[AlignedToken],
    *,
    duration: float,
    fill_ratio: float = INTERPOLATION_FILL_RATIO,
) -> list[AlignedToken]:
    """Spread every run of untimed tokens evenly between its anchors.

    For a run of ``g`` untimed tokens bounded by ``prev_end`` (end of the
    preceding timed token, ``0.0`` when the run opens the sequence) and
    ``next_start`` (start of the following timed token, ``duration`` when the
    run closes it), the slot width is ``(next_start - prev_end) / (g + 1)``
    and the ``p``-th token covers ``[prev_end + step * p,
    prev_end + step * (p + fill_ratio)]``. When the anchors overlap
    (``next_start < prev_end``) the run collapses onto ``next_start`` so that
    start times never decrease towards the following anchor.

    Parameters:
        tokens: Aligner output, possibly containing untimed tokens.
        duration: Overall duration used when no anchor follows a run.
        fill_ratio: Share of each slot covered by its token.

    Returns:
        list[AlignedToken]: New list where every token has timing. Timed
            tokens are passed through unchanged.
    """
    result = list(tokens)
    prev_end = 0.0
    i = 0
    while i < len(result):
        token = result[i]
        if token.has_timing:
            prev_end = token.end  # type: ignore[assignment]
            i += 1
            continue

        run_end = i
        while run_end < len(result) and not result[run_end].has_timing:
            run_end += 1
        gap = run_end - i
        next_start = result[run_end].start if run_end < len(result) else duration

        base = min(prev_end, next_start)  # type: ignore[type-var]
        step = (next_start - base) / (gap + 1)
        for pos in range(1, gap + 1):
            result[i + pos - 1] = result[i + pos - 1].model_copy(
                update={
                    "start": base + step * pos,
                    "end": base + step * (pos + fill_ratio),
                }
            )
        i = run_end

    return result
