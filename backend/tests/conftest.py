# File: backend/tests/conftest.py
# Version: v0.2.0
"""
Test bootstrap: ensure project root is on sys.path so 'backend.*' imports work,
plus shared profile fixtures.
"""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


# 300 A, a 15 bp GC block, 300 A: one window (index 60) covers the block exactly
INSERT_SEQ = "A" * 300 + "GCGCGCGCGCGCGCG" + "A" * 300


@pytest.fixture
def insert_seq() -> str:
    return INSERT_SEQ


@pytest.fixture
def mixed_seq() -> str:
    # deterministic, composition varies along the sequence
    return (
        "ATGCGTACGTTAGCCGATAGCTAGGCTTAACGGATCCATGCAAATTTGGGCCCATATGCGC"
        "TTTTAAAACGCGCGATATATGGCCMMGGATCCNNACGTAGCTAGCTGACTGATCGGCTAA"
    )
