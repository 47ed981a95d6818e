"""Startup order resolution."""

from .normalizer import normalize
from .sequencer import resolve, sequence

__all__ = ["normalize", "resolve", "sequence"]
