"""Timestamping of synthesized speech against its source script."""

from .synthesis import align_synthesized_speech

__all__ = ["align_synthesized_speech"]
