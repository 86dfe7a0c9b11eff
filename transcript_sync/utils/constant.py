"""Project-wide constants for convenient reuse."""

from __future__ import annotations

import os
import pathlib
import sys
from typing import Final

from transcript_sync.utils.env_loader import load_project_env

# Ensure .env is loaded exactly once at import time for the whole project
if "pytest" not in sys.modules:
    load_project_env()


# Repository root resolved relative to this file (utils/constant.py → package → repo)
REPO_ROOT: Final[pathlib.Path] = pathlib.Path(__file__).resolve().parents[2]

# Default path of the dotenv file containing runtime overrides
ENV_FILE: Final[pathlib.Path] = REPO_ROOT / ".env"

# Number of recognized words sent to the correction service per request.
# The service has an input-size limit; <= 0 sends everything in one batch.
CORRECTION_BATCH_SIZE: Final[int] = int(os.getenv("CORRECTION_BATCH_SIZE", "500"))

# Worker threads used to call the correction service (1 = sequential)
CORRECTION_MAX_WORKERS: Final[int] = int(os.getenv("CORRECTION_MAX_WORKERS", "1"))

# How many tokens the aligner scans ahead on either side to recover from an
# insertion or a merge before giving up on the current token.
LOOKAHEAD_WINDOW: Final[int] = int(os.getenv("LOOKAHEAD_WINDOW", "3"))

# Fuzzy matching tolerance. Tokens shorter than FUZZY_MIN_LENGTH only match
# exactly; longer ones accept max(FUZZY_MIN_DISTANCE, len * FUZZY_MAX_RATIO)
# edits.
FUZZY_MIN_LENGTH: Final[int] = int(os.getenv("FUZZY_MIN_LENGTH", "4"))
FUZZY_MIN_DISTANCE: Final[int] = int(os.getenv("FUZZY_MIN_DISTANCE", "2"))
FUZZY_MAX_RATIO: Final[float] = float(os.getenv("FUZZY_MAX_RATIO", "0.3"))

# Share of an interpolated slot that is highlighted; < 1 leaves a small pause
# before the next word lights up.
INTERPOLATION_FILL_RATIO: Final[float] = float(os.getenv("INTERPOLATION_FILL_RATIO", "0.8"))

# Words per display segment for synthesized / estimated transcripts
SEGMENT_WORD_COUNT: Final[int] = int(os.getenv("SEGMENT_WORD_COUNT", "20"))

# Batches aligning fewer than this share of words are reported as warnings
LOW_MATCH_RATE_THRESHOLD: Final[float] = float(os.getenv("LOW_MATCH_RATE_THRESHOLD", "0.5"))

# Edge punctuation ignored when comparing tokens
EDGE_PUNCTUATION: Final[str] = os.getenv(
    "EDGE_PUNCTUATION", ".,!?;:—–-«»\"“”„'‘’()[]{}…"
)

# Output format used by the CLI when none is given
DEFAULT_OUTPUT_FORMAT: Final[str] = os.getenv("DEFAULT_OUTPUT_FORMAT", "json")
