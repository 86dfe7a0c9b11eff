"""Command-line interface for transcript-sync using Typer.

Features:
- `correct` command carrying corrected text onto a recognized transcript.
- `sync` command timestamping a script from recognized synthesized speech.
- `estimate` command spreading a script over a known audio duration.
- Options for output formatting, lookahead tuning and verbose logging.
"""

import pathlib
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from transcript_sync import __version__
from transcript_sync.chunking import apply_corrected_text
from transcript_sync.config import BatchConfig, MatchingConfig, UIConfig
from transcript_sync.formatting import get_formatter_spec
from transcript_sync.speech import align_synthesized_speech
from transcript_sync.timestamps.estimate import estimate_word_timestamps
from transcript_sync.timestamps.models import Transcript
from transcript_sync.utils.constant import (
    DEFAULT_OUTPUT_FORMAT,
    LOOKAHEAD_WINDOW,
    SEGMENT_WORD_COUNT,
)
from transcript_sync.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

OutputFormatOption = Annotated[
    str,
    typer.Option(
        "--output-format",
        "-f",
        help="Format of the output (json, jsonl or txt).",
        case_sensitive=False,
    ),
]
OutputOption = Annotated[
    pathlib.Path | None,
    typer.Option(
        "--output",
        "-o",
        help="File to write the result to (stdout when omitted).",
        dir_okay=False,
        writable=True,
        resolve_path=True,
    ),
]
LookaheadOption = Annotated[
    int,
    typer.Option(
        "--lookahead",
        help="Tokens scanned ahead to recover from inserted or merged words.",
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", help="Enable verbose output.")
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", help="Suppress console messages except the result."),
]


def version_callback(value: bool) -> None:
    """Show the application's version and exit.

    Args:
        value: When True, print the version and exit.

    Raises:
        typer.Exit: Always raised after printing when value is True.

    """
    if value:
        print(f"transcript-sync version: {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="transcript-sync",
    help="Align word timestamps between recognized, corrected and scripted transcripts.",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the application's version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Print help when no subcommand is given.

    Raises:
        typer.Exit: Raised to terminate after displaying help or version.

    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_transcript(path: pathlib.Path) -> Transcript:
    """Read and validate a transcript JSON document.

    Raises:
        typer.BadParameter: If the file cannot be read or is not a transcript.
    """
    try:
        return Transcript.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}") from exc
    except ValidationError as exc:
        raise typer.BadParameter(f"{path} is not a valid transcript: {exc}") from exc


def _read_text(path: pathlib.Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        typer.BadParameter: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}") from exc


def _build_config(lookahead: int) -> BatchConfig:
    """Build the batch configuration for a CLI run.

    Raises:
        typer.BadParameter: If the lookahead window is invalid.
    """
    try:
        matching = MatchingConfig(lookahead_window=lookahead)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--lookahead") from exc
    return BatchConfig(matching=matching)


def _emit(
    transcript: Transcript,
    output_format: str,
    output: pathlib.Path | None,
) -> None:
    """Format the transcript and write it to ``output`` or stdout.

    Raises:
        typer.Exit: If the output format is not supported.
    """
    try:
        spec = get_formatter_spec(output_format)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    rendered = spec.format_func(transcript)
    if output is None:
        typer.echo(rendered)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered + "\n", encoding="utf-8")
    logger.info(f"Wrote {output}")


def _display_summary(  # pragma: no cover - formatting helper
    title: str,
    rows: list[tuple[str, str]],
    ui_config: UIConfig,
) -> None:
    """Render run statistics as a Rich table on stderr."""
    if ui_config.quiet:
        return
    console = Console(stderr=True)
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)


@app.command()
def correct(
    transcript_file: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Recognized transcript JSON (words with start/end).",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    corrected_file: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Corrected text of the same transcript.",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output_format: OutputFormatOption = DEFAULT_OUTPUT_FORMAT,
    output: OutputOption = None,
    lookahead: LookaheadOption = LOOKAHEAD_WINDOW,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> Transcript:
    """Carry corrected text onto a recognized transcript, keeping its timing.

    Returns:
        The corrected transcript.

    """
    configure_logging(verbose=verbose, quiet=quiet)
    ui_config = UIConfig(verbose=verbose, quiet=quiet)
    config = _build_config(lookahead)

    transcript = _load_transcript(transcript_file)
    corrected_text = _read_text(corrected_file)
    try:
        report = apply_corrected_text(transcript, corrected_text, config=config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="TRANSCRIPT_FILE") from exc

    _emit(report.transcript, output_format, output)
    _display_summary(
        "Correction",
        [
            ("Words", str(report.total)),
            ("Matched", str(report.matched)),
            ("Match rate", f"{report.match_rate:.1%}"),
        ],
        ui_config,
    )
    return report.transcript


@app.command()
def sync(
    script_file: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Script text that was synthesized.",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    recognized_file: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Transcript JSON recognized from the synthesized audio.",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    segment_words: Annotated[
        int,
        typer.Option("--segment-words", help="Words per display segment.", min=1),
    ] = SEGMENT_WORD_COUNT,
    output_format: OutputFormatOption = DEFAULT_OUTPUT_FORMAT,
    output: OutputOption = None,
    lookahead: LookaheadOption = LOOKAHEAD_WINDOW,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> Transcript:
    """Timestamp every script word from recognized synthesized speech.

    Returns:
        The timestamped script transcript.

    """
    configure_logging(verbose=verbose, quiet=quiet)
    ui_config = UIConfig(verbose=verbose, quiet=quiet)
    config = _build_config(lookahead)
    config.segment_word_count = segment_words

    script = _read_text(script_file)
    recognized = _load_transcript(recognized_file)
    try:
        transcript = align_synthesized_speech(script, recognized, config=config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="RECOGNIZED_FILE") from exc

    _emit(transcript, output_format, output)
    matched = sum(1 for w in transcript.words if w.matched)
    _display_summary(
        "Speech sync",
        [
            ("Script words", str(len(transcript.words))),
            ("Matched", str(matched)),
            ("Interpolated", str(len(transcript.words) - matched)),
        ],
        ui_config,
    )
    return transcript


@app.command()
def estimate(
    script_file: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Script text to timestamp.",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    duration: Annotated[
        float,
        typer.Option("--duration", help="Audio duration in seconds.", min=0.0),
    ],
    segment_words: Annotated[
        int,
        typer.Option("--segment-words", help="Words per display segment.", min=1),
    ] = SEGMENT_WORD_COUNT,
    language: Annotated[
        str | None,
        typer.Option("--language", help="Language tag stored on the transcript."),
    ] = None,
    output_format: OutputFormatOption = DEFAULT_OUTPUT_FORMAT,
    output: OutputOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> Transcript:
    """Spread script words over a duration proportionally to their length.

    Returns:
        The estimated transcript.

    """
    configure_logging(verbose=verbose, quiet=quiet)
    script = _read_text(script_file)
    transcript = estimate_word_timestamps(
        script,
        duration,
        segment_word_count=segment_words,
        language=language,
    )
    _emit(transcript, output_format, output)
    return transcript


if __name__ == "__main__":  # pragma: no cover
    app()
