"""Two-pointer fuzzy aligner reconciling timed and authoritative tokens.

Two contracts share one walking strategy:

* ``reconcile_with_corrected_text`` – the recognized (timed) tokens are the
  backbone of the output. Text is replaced by the corrected tokens wherever
  both sides agree; everything else keeps its recognized text and timing.
  Output length equals ``len(source)``.
* ``reconcile_with_timed_speech`` – the script (authoritative) tokens are the
  backbone. Timing is borrowed from a recognition pass over synthesized
  speech; unmatched script tokens are interpolated. Output length equals
  ``len(target)``.

Both walks look ahead at most ``MatchingConfig.lookahead_window`` tokens on
either side to recover from inserted, dropped or merged words. The window is
a heuristic: a correction that inserts a whole clause defeats it and the
affected tokens simply stay unmatched.

The functions keep all pointer state in local variables and never mutate
their inputs, so batches can be aligned concurrently.
"""

from __future__ import annotations

from collections.abc import Sequence

from transcript_sync.alignment.distance import match_tokens
from transcript_sync.alignment.interpolate import interpolate_gaps
from transcript_sync.alignment.normalize import normalize_token
from transcript_sync.config import MatchingConfig
from transcript_sync.timestamps.models import (
    AlignedToken,
    AlignmentResult,
    SourceToken,
    TargetToken,
)

__all__ = [
    "reconcile_with_corrected_text",
    "reconcile_with_timed_speech",
]


def _leading_whitespace(text: str) -> str:
    return text[: len(text) - len(text.lstrip())]


def _verbatim(token: SourceToken) -> AlignedToken:
    return AlignedToken(text=token.text, start=token.start, end=token.end, matched=False)


def _untimed(token: TargetToken) -> AlignedToken:
    return AlignedToken(text=token.text, matched=False)


def reconcile_with_corrected_text(
    source: Sequence[SourceToken],
    target: Sequence[TargetToken],
    *,
    config: MatchingConfig | None = None,
) -> AlignmentResult:
    """Carry corrected text onto recognized tokens, keeping their timing.

    Walk ``i`` over ``source`` and ``j`` over ``target``:

    1. A match (exact or fuzzy) emits ``target[j]``'s text with
       ``source[i]``'s timing and advances both pointers.
    2. Otherwise, if one of the next ``window`` target tokens matches
       ``source[i]``, the correction inserted tokens; they are skipped and
       the matching one is emitted.
    3. Otherwise, if one of the next ``window`` source tokens matches
       ``target[j]``, the correction merged tokens away; the source tokens in
       between are emitted verbatim and ``target[j]`` is retried.
    4. Otherwise ``source[i]`` is emitted verbatim and only ``i`` advances.

    Once ``target`` runs out the remaining source tokens are kept verbatim.
    A leading space on a recognized token is kept in front of its
    replacement.

    Parameters:
        source: Recognized tokens with timing.
        target: Corrected tokens, in reading order.
        config: Matching settings; defaults to :class:`MatchingConfig`.

    Returns:
        AlignmentResult: Exactly one token per source token.
    """
    cfg = config or MatchingConfig()
    window = cfg.lookahead_window
    source_keys = [normalize_token(tok.text) for tok in source]
    target_keys = [normalize_token(tok.text) for tok in target]

    def _replaced(src: SourceToken, tgt: TargetToken) -> AlignedToken:
        return AlignedToken(
            text=_leading_whitespace(src.text) + tgt.text.strip(),
            start=src.start,
            end=src.end,
            matched=True,
        )

    tokens: list[AlignedToken] = []
    matched = 0
    i = j = 0
    while i < len(source):
        if j >= len(target):
            tokens.append(_verbatim(source[i]))
            i += 1
            continue

        if match_tokens(source_keys[i], target_keys[j], config=cfg):
            tokens.append(_replaced(source[i], target[j]))
            matched += 1
            i += 1
            j += 1
            continue

        # Correction inserted token(s): skip them on the target side.
        found = False
        for k in range(1, window + 1):
            if j + k >= len(target):
                break
            if match_tokens(source_keys[i], target_keys[j + k], config=cfg):
                j += k
                tokens.append(_replaced(source[i], target[j]))
                matched += 1
                i += 1
                j += 1
                found = True
                break
        if found:
            continue

        # Correction merged token(s): keep the skipped source tokens as-is.
        for k in range(1, window + 1):
            if i + k >= len(source):
                break
            if match_tokens(source_keys[i + k], target_keys[j], config=cfg):
                tokens.extend(_verbatim(tok) for tok in source[i : i + k])
                i += k
                found = True
                break
        if found:
            continue

        tokens.append(_verbatim(source[i]))
        i += 1

    return AlignmentResult(tokens=tokens, matched=matched)


def reconcile_with_timed_speech(
    target: Sequence[TargetToken],
    source: Sequence[SourceToken],
    *,
    config: MatchingConfig | None = None,
    interpolate: bool = True,
) -> AlignmentResult:
    """Give every script token a timestamp taken from recognized speech.

    Walk ``j`` over ``target`` and ``i`` over ``source``:

    1. A match emits ``target[j]`` with ``source[i]``'s timing and advances
       both pointers.
    2. Otherwise, if one of the next ``window`` source tokens matches
       ``target[j]``, the speech contained extra tokens; they are skipped.
    3. Otherwise, if one of the next ``window`` target tokens matches
       ``source[i]``, the speech dropped or merged script tokens; those are
       emitted without timing.
    4. Otherwise ``target[j]`` is emitted without timing and only ``j``
       advances.

    Untimed tokens are filled by :func:`interpolate_gaps` when
    ``interpolate`` is true, using the end of the last recognized token as
    the overall duration.

    If either sequence is empty every target token gets a zero timestamp.

    Parameters:
        target: Script tokens, in reading order.
        source: Tokens recognized from the synthesized audio.
        config: Matching settings; defaults to :class:`MatchingConfig`.
        interpolate: Fill untimed tokens before returning.

    Returns:
        AlignmentResult: Exactly one token per target token.
    """
    if not target or not source:
        return AlignmentResult(
            tokens=[
                AlignedToken(text=tok.text, start=0.0, end=0.0, matched=False)
                for tok in target
            ],
            matched=0,
        )

    cfg = config or MatchingConfig()
    window = cfg.lookahead_window
    source_keys = [normalize_token(tok.text) for tok in source]
    target_keys = [normalize_token(tok.text) for tok in target]

    def _timed(tgt: TargetToken, src: SourceToken) -> AlignedToken:
        return AlignedToken(text=tgt.text, start=src.start, end=src.end, matched=True)

    tokens: list[AlignedToken] = []
    matched = 0
    i = j = 0
    while j < len(target):
        if i >= len(source):
            tokens.append(_untimed(target[j]))
            j += 1
            continue

        if match_tokens(target_keys[j], source_keys[i], config=cfg):
            tokens.append(_timed(target[j], source[i]))
            matched += 1
            i += 1
            j += 1
            continue

        # Speech contained extra token(s): skip them on the source side.
        found = False
        for k in range(1, window + 1):
            if i + k >= len(source):
                break
            if match_tokens(target_keys[j], source_keys[i + k], config=cfg):
                i += k
                tokens.append(_timed(target[j], source[i]))
                matched += 1
                i += 1
                j += 1
                found = True
                break
        if found:
            continue

        # Speech dropped script token(s): leave them for interpolation.
        for k in range(1, window + 1):
            if j + k >= len(target):
                break
            if match_tokens(target_keys[j + k], source_keys[i], config=cfg):
                tokens.extend(_untimed(tok) for tok in target[j : j + k])
                j += k
                found = True
                break
        if found:
            continue

        tokens.append(_untimed(target[j]))
        j += 1

    if interpolate:
        tokens = interpolate_gaps(
            tokens, duration=source[-1].end, fill_ratio=cfg.fill_ratio
        )
    return AlignmentResult(tokens=tokens, matched=matched)
