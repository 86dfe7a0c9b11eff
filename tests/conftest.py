"""Shared test fixtures for the transcript_sync test suite."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

import pytest

from transcript_sync.timestamps.models import (
    AlignedToken,
    SourceToken,
    TargetToken,
    Transcript,
)


@pytest.fixture()
def reset_cli_logging() -> Iterator[Callable[[], None]]:
    """Return a callable dropping root handlers installed by ``configure_logging``.

    CLI commands call ``logging.basicConfig(force=True)``, which binds a plain
    ``StreamHandler`` to the ``sys.stderr`` of the running ``CliRunner``. That
    stream is closed once the invocation returns. pytest's own handlers are
    subclasses and are left alone.
    """
    root = logging.getLogger()
    level = root.level

    def _reset() -> None:
        for handler in root.handlers[:]:
            if type(handler) is logging.StreamHandler:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)

    yield _reset
    _reset()


@pytest.fixture(autouse=True)
def _restore_root_logging(reset_cli_logging: Callable[[], None]) -> None:
    """Apply ``reset_cli_logging`` after every test."""


def _make_source(words: list[str], *, step: float = 1.0, start: float = 0.0) -> list[SourceToken]:
    """Build back-to-back timed tokens, each ``step`` seconds long."""
    return [
        SourceToken(text=w, start=start + idx * step, end=start + (idx + 1) * step)
        for idx, w in enumerate(words)
    ]


def _make_target(words: list[str]) -> list[TargetToken]:
    """Build untimed tokens."""
    return [TargetToken(text=w) for w in words]


@pytest.fixture()
def source_factory() -> Callable[..., list[SourceToken]]:
    """Factory fixture for timed tokens."""
    return _make_source


@pytest.fixture()
def target_factory() -> Callable[[list[str]], list[TargetToken]]:
    """Factory fixture for untimed tokens."""
    return _make_target


@pytest.fixture()
def recognized_transcript() -> Transcript:
    """Six recognized words in two three-word segments, one second per word."""
    words = ["привет", "как", "дела", "я", "пограмма", "хорошо"]
    return Transcript(
        words=[
            AlignedToken(text=w, start=float(i), end=float(i + 1)) for i, w in enumerate(words)
        ],
        segments=[
            {"text": "привет как дела", "start": 0.0, "end": 3.0},
            {"text": "я пограмма хорошо", "start": 3.0, "end": 6.0},
        ],
        language="ru",
        duration=6.0,
    )
