"""Unit tests for the output formatter registry."""

from __future__ import annotations

import json

import pytest

from transcript_sync.formatting import (
    FORMATTERS,
    FormatterSpec,
    get_formatter,
    get_formatter_spec,
)
from transcript_sync.timestamps.models import AlignedToken, Segment, Transcript


@pytest.fixture()
def transcript() -> Transcript:
    """Two words in one segment."""
    return Transcript(
        words=[
            AlignedToken(text="Привет,", start=0.0, end=0.5, matched=True),
            AlignedToken(text="мир!", start=0.5, end=1.0, matched=False),
        ],
        segments=[Segment(text="Привет, мир!", start=0.0, end=1.0)],
        language="ru",
        duration=1.0,
    )


def test_registry_contents() -> None:
    """All formats are registered with their metadata."""
    assert set(FORMATTERS) == {"json", "jsonl", "txt"}
    assert all(isinstance(spec, FormatterSpec) for spec in FORMATTERS.values())
    assert FORMATTERS["txt"].includes_timing is False
    assert FORMATTERS["jsonl"].file_extension == ".jsonl"


def test_get_formatter_is_case_insensitive() -> None:
    """Format names are matched case-insensitively."""
    assert get_formatter("JSON") is FORMATTERS["json"].format_func
    assert get_formatter_spec("Txt") is FORMATTERS["txt"]


def test_get_formatter_unknown_format() -> None:
    """Unsupported formats raise ``ValueError`` listing the supported ones."""
    with pytest.raises(ValueError, match="Supported formats"):
        get_formatter("srt")


def test_json_output(transcript: Transcript) -> None:
    """JSON output is the full transcript document."""
    data = json.loads(get_formatter("json")(transcript))
    assert data["language"] == "ru"
    assert data["words"][0] == {"text": "Привет,", "start": 0.0, "end": 0.5, "matched": True}
    assert data["segments"][0]["text"] == "Привет, мир!"


def test_jsonl_output(transcript: Transcript) -> None:
    """JSONL output has one word per line."""
    lines = get_formatter("jsonl")(transcript).splitlines()
    assert len(lines) == 2
    assert json.loads(lines[1])["text"] == "мир!"


def test_txt_output(transcript: Transcript) -> None:
    """Plain text uses segments, falling back to words."""
    assert get_formatter("txt")(transcript) == "Привет, мир!"
    no_segments = transcript.model_copy(update={"segments": []})
    assert get_formatter("txt")(no_segments) == "Привет, мир!"
