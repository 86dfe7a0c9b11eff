"""Common data models for timestamped transcripts and alignment results.

This module defines pydantic models that are shared across the aligner,
the batch correction driver, the synthesized-speech driver and the
formatters.
"""

from __future__ import annotations

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "SourceToken",
    "TargetToken",
    "AlignedToken",
    "MatchDecision",
    "AlignmentResult",
    "Segment",
    "Transcript",
]


class SourceToken(BaseModel):
    """A recognized token with trustworthy timing."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., validation_alias=AliasChoices("text", "word"))
    start: float = Field(..., description="Start time of the token in seconds.")
    end: float = Field(..., description="End time of the token in seconds.")

    @model_validator(mode="after")
    def _check_order(self) -> SourceToken:
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not exceed end ({self.end})")
        return self


class TargetToken(BaseModel):
    """An authoritative token without timing."""

    model_config = ConfigDict(frozen=True)

    text: str


class AlignedToken(BaseModel):
    """Output unit of the aligner.

    ``start``/``end`` are either both set or both ``None``; ``None`` marks a
    token whose timing still has to be interpolated.
    """

    text: str = Field(
        ...,
        validation_alias=AliasChoices("text", "word"),
        description="Display text of the token.",
    )
    start: float | None = Field(None, description="Start time in seconds.")
    end: float | None = Field(None, description="End time in seconds.")
    matched: bool = Field(
        False, description="Whether both sequences agreed on this token."
    )

    @model_validator(mode="after")
    def _check_timing(self) -> AlignedToken:
        if (self.start is None) != (self.end is None):
            raise ValueError("start and end must both be set or both be None")
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError(f"start ({self.start}) must not exceed end ({self.end})")
        return self

    @property
    def has_timing(self) -> bool:
        """Whether the token carries a real timestamp."""
        return self.start is not None

    def to_source(self) -> SourceToken:
        """Return the token as a timed :class:`SourceToken`.

        Raises:
            ValueError: If the token has no timing yet.
        """
        if self.start is None or self.end is None:
            raise ValueError(f"token {self.text!r} has no timing")
        return SourceToken(text=self.text, start=self.start, end=self.end)


class MatchDecision(str, Enum):
    """Outcome of comparing two normalized tokens."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    NONE = "none"

    def __bool__(self) -> bool:
        return self is not MatchDecision.NONE


class AlignmentResult(BaseModel):
    """Aligned tokens together with the match statistic of the run."""

    tokens: list[AlignedToken] = Field(default_factory=list)
    matched: int = Field(0, description="Number of tokens both sides agreed on.")

    @property
    def total(self) -> int:
        """Number of emitted tokens."""
        return len(self.tokens)

    @property
    def match_rate(self) -> float:
        """Share of matched tokens; ``1.0`` for an empty result."""
        if not self.tokens:
            return 1.0
        return self.matched / len(self.tokens)


class Segment(BaseModel):
    """A display segment covering a time range of the transcript."""

    text: str = Field(..., description="Rendered text of the segment.")
    start: float = Field(..., description="Segment start time (seconds).")
    end: float = Field(..., description="Segment end time (seconds).")


class Transcript(BaseModel):
    """Word-synchronized transcript consumed by the player."""

    words: list[AlignedToken] = Field(default_factory=list)
    segments: list[Segment] = Field(default_factory=list)
    language: str | None = None
    duration: float | None = None

    def source_tokens(self) -> list[SourceToken]:
        """Return the words as timed source tokens.

        Raises:
            ValueError: If any word lacks timing.
        """
        return [word.to_source() for word in self.words]

    @property
    def text(self) -> str:
        """Space-joined text of all words."""
        return " ".join(w.text.strip() for w in self.words)
