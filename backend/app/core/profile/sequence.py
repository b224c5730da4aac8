# File: backend/app/core/profile/sequence.py
# Version: v0.1.0
"""
Sequence sanitization and fixed-stride windowing.

Windows are 0-based, [start, end) half-open, like the rest of the backend.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from .constants import VALID_BASES
from .models import SequenceValidationError


def sanitize_sequence(sequence: str) -> str:
    """Uppercase and map anything outside A/C/G/T/M to N. Length is preserved."""
    # per character: some code points grow when uppercased ("ß" -> "SS")
    out = []
    for c in sequence:
        u = c.upper()
        out.append(u if u in VALID_BASES else "N")
    return "".join(out)


def validate_window_params(length: int, window_size: int, stride: int) -> None:
    if window_size < 1:
        raise SequenceValidationError(
            f"Window size must be a positive integer (got {window_size}).",
            length=length, window_size=window_size,
        )
    if stride < 1:
        raise SequenceValidationError(
            f"Stride must be a positive integer (got {stride}).",
            length=length, window_size=window_size,
        )
    if length < window_size:
        raise SequenceValidationError(
            f"Sequence length ({length}) must be at least window size ({window_size}).",
            length=length, window_size=window_size,
        )


def expected_window_count(length: int, window_size: int, stride: int) -> int:
    if length < window_size:
        return 0
    return (length - window_size) // stride + 1


def iter_windows(seq: str, window_size: int, stride: int) -> Iterator[Tuple[int, int, int, str]]:
    """Yield (index, start, end, substring) for every full window."""
    for k, i in enumerate(range(0, len(seq) - window_size + 1, stride)):
        yield k, i, i + window_size, seq[i : i + window_size]


def extract_windows(seq: str, window_size: int, stride: int) -> List[Tuple[int, int, int, str]]:
    return list(iter_windows(seq, window_size, stride))
