"""Unit tests for the top-level CLI entry points.

These tests validate help output, the version callback and the three
alignment commands end to end on small files.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from transcript_sync import cli
from transcript_sync.timestamps.models import Transcript
from transcript_sync.utils.logging_config import get_logger

runner = CliRunner()


def _write_transcript(path: Path, transcript: Transcript) -> Path:
    path.write_text(transcript.model_dump_json(), encoding="utf-8")
    return path


def test_version_callback() -> None:
    """Ensure ``--version`` callback exits the process cleanly."""
    with pytest.raises(typer.Exit):
        cli.version_callback(True)


def test_main_help() -> None:
    """Invoking the app without args should print usage and exit 0."""
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 0
    assert "Usage" in result.stdout


def test_version_option() -> None:
    """``--version`` prints the package version."""
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert "transcript-sync version" in result.stdout


def test_correct_command(tmp_path: Path, recognized_transcript: Transcript) -> None:
    """Corrected text is carried onto the recognized timing."""
    transcript_file = _write_transcript(tmp_path / "asr.json", recognized_transcript)
    corrected_file = tmp_path / "corrected.txt"
    corrected_file.write_text("Привет, как дела? Я программа, хорошо.", encoding="utf-8")
    output = tmp_path / "out" / "corrected.json"

    result = runner.invoke(
        cli.app,
        ["correct", str(transcript_file), str(corrected_file), "-o", str(output), "--quiet"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [w["text"] for w in data["words"]] == [
        "Привет,",
        "как",
        "дела?",
        "Я",
        "программа,",
        "хорошо.",
    ]
    assert [s["text"] for s in data["segments"]] == ["Привет, как дела?", "Я программа, хорошо."]


def test_sync_command_txt(tmp_path: Path) -> None:
    """Script words are timestamped from a recognition of synthesized audio."""
    script_file = tmp_path / "script.txt"
    script_file.write_text("Привет, мир! Как дела?", encoding="utf-8")
    recognized = Transcript.model_validate(
        {
            "words": [
                {"word": " привет", "start": 0.0, "end": 0.5},
                {"word": " мир", "start": 0.5, "end": 1.0},
                {"word": " как", "start": 1.2, "end": 1.5},
                {"word": " дела", "start": 1.5, "end": 2.0},
            ],
            "duration": 2.0,
        }
    )
    recognized_file = _write_transcript(tmp_path / "tts.json", recognized)
    output = tmp_path / "synced.jsonl"

    result = runner.invoke(
        cli.app,
        [
            "sync",
            str(script_file),
            str(recognized_file),
            "--output-format",
            "jsonl",
            "-o",
            str(output),
            "--segment-words",
            "2",
            "--quiet",
        ],
    )

    assert result.exit_code == 0, result.output
    lines = output.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["text"] for line in lines] == ["Привет,", "мир!", "Как", "дела?"]
    assert json.loads(lines[2])["start"] == 1.2


def test_estimate_command_stdout(tmp_path: Path) -> None:
    """Estimation writes plain text segments to stdout."""
    script_file = tmp_path / "script.txt"
    script_file.write_text("один два три", encoding="utf-8")

    result = runner.invoke(
        cli.app,
        [
            "estimate",
            str(script_file),
            "--duration",
            "3",
            "--output-format",
            "txt",
            "--segment-words",
            "2",
            "--quiet",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "один два" in result.stdout
    assert "три" in result.stdout


def test_correct_rejects_invalid_transcript(tmp_path: Path) -> None:
    """A malformed transcript is reported as a bad parameter."""
    transcript_file = tmp_path / "bad.json"
    transcript_file.write_text('{"words": [{"text": "x", "start": 2, "end": 1}]}', encoding="utf-8")
    corrected_file = tmp_path / "corrected.txt"
    corrected_file.write_text("x", encoding="utf-8")

    result = runner.invoke(
        cli.app, ["correct", str(transcript_file), str(corrected_file), "--quiet"]
    )

    assert result.exit_code == 2


def test_correct_rejects_negative_lookahead(
    tmp_path: Path, recognized_transcript: Transcript
) -> None:
    """A negative lookahead window is rejected."""
    transcript_file = _write_transcript(tmp_path / "asr.json", recognized_transcript)
    corrected_file = tmp_path / "corrected.txt"
    corrected_file.write_text("привет", encoding="utf-8")

    result = runner.invoke(
        cli.app,
        ["correct", str(transcript_file), str(corrected_file), "--lookahead=-1", "--quiet"],
    )

    assert result.exit_code == 2


def test_unsupported_output_format(tmp_path: Path) -> None:
    """Unknown output formats exit with code 1."""
    script_file = tmp_path / "script.txt"
    script_file.write_text("слово", encoding="utf-8")

    result = runner.invoke(
        cli.app,
        ["estimate", str(script_file), "--duration", "1", "--output-format", "srt", "--quiet"],
    )

    assert result.exit_code == 1


def test_logging_works_after_cli_run(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
    reset_cli_logging: Callable[[], None],
) -> None:
    """Records logged after a CLI run reach capture without stream errors."""
    script_file = tmp_path / "script.txt"
    script_file.write_text("раз два три", encoding="utf-8")
    result = runner.invoke(
        cli.app,
        ["estimate", str(script_file), "--duration", "3", "-o", str(tmp_path / "out.json")],
    )
    assert result.exit_code == 0, result.output

    reset_cli_logging()
    root = logging.getLogger()
    # basicConfig(force=True) detached the capture handler during the run.
    if caplog.handler not in root.handlers:
        root.addHandler(caplog.handler)
    caplog.set_level(logging.WARNING)
    errors: list[logging.LogRecord] = []
    monkeypatch.setattr(logging.Handler, "handleError", lambda self, record: errors.append(record))

    get_logger("transcript_sync.tests").warning("after cli run")

    assert "after cli run" in caplog.text
    assert not errors
