# File: backend/app/core/profile/models.py
# Version: v0.1.0
"""
Data model for the biophysical profile engine.

Every "for each feature" loop goes through the `Feature` enumeration and
fixed-size tuples indexed by it; no dynamic key iteration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .parameters import ProfileParameters


class Feature(IntEnum):
    GC = 0
    HBOND = 1
    STACK = 2
    DG = 3
    ZX = 4
    ZY = 5
    ZZ = 6
    BEND = 7

    @property
    def key(self) -> str:
        """External (JSON/report) name of the feature."""
        return FEATURE_KEYS[self]

    @classmethod
    def from_key(cls, key: str) -> "Feature":
        return _KEY_TO_FEATURE[key]


FEATURES: Tuple[Feature, ...] = tuple(Feature)
N_FEATURES = len(FEATURES)

FEATURE_KEYS: Tuple[str, ...] = (
    "gc",
    "hb_per_base",
    "stack_per_base",
    "dG_per_base",
    "zx",
    "zy",
    "zz",
    "bendability",
)
_KEY_TO_FEATURE = {k: Feature(i) for i, k in enumerate(FEATURE_KEYS)}


class AnomalyType(str, Enum):
    NONE = "None"
    THERMAL_DIP = "Thermal Dip"
    STRUCTURAL_SHIFT = "Structural Shift"
    STACKING_ANCHOR = "Stacking Anchor"
    MULTIVARIATE_DEVIATION = "Multivariate Deviation"


class Archetype(str, Enum):
    Z_DNA_CANDIDATE = "Z-DNA Candidate"
    PUTATIVE_PROMOTER = "Putative Promoter"
    MECHANICAL_ANCHOR = "Mechanical Anchor"
    G_QUADRUPLEX = "G-Quadruplex"
    FLEXIBLE_LINKER = "Flexible Linker"
    UNKNOWN_ANOMALY = "Unknown Anomaly"
    STABLE_HELIX = "Stable Helix"


@dataclass(frozen=True)
class BiophysicalFeatures:
    """8-component feature vector of one window."""
    gc: float
    hb_per_base: float
    stack_per_base: float
    dg_per_base: float
    zx: float
    zy: float
    zz: float
    bendability: float

    def __getitem__(self, feature: Feature) -> float:
        return self.as_tuple()[feature]

    def as_tuple(self) -> Tuple[float, ...]:
        return (
            self.gc,
            self.hb_per_base,
            self.stack_per_base,
            self.dg_per_base,
            self.zx,
            self.zy,
            self.zz,
            self.bendability,
        )

    def as_dict(self) -> Dict[str, float]:
        return {f.key: v for f, v in zip(FEATURES, self.as_tuple())}

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "BiophysicalFeatures":
        vals = tuple(float(v) for v in values)
        if len(vals) != N_FEATURES:
            raise ValueError(f"expected {N_FEATURES} feature values, got {len(vals)}")
        return cls(*vals)

    @classmethod
    def zeros(cls) -> "BiophysicalFeatures":
        return cls.from_values([0.0] * N_FEATURES)


@dataclass(frozen=True)
class AnalysisStats:
    """Population mean/std per feature for one run."""
    mean: Tuple[float, ...]
    std: Tuple[float, ...]

    def mean_of(self, feature: Feature) -> float:
        return self.mean[feature]

    def std_of(self, feature: Feature) -> float:
        return self.std[feature]

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "mean": {f.key: self.mean[f] for f in FEATURES},
            "std": {f.key: self.std[f] for f in FEATURES},
        }


@dataclass(frozen=True)
class FeatureContribution:
    feature: Feature
    score: float
    percentage: float


@dataclass
class AnalysisWindow:
    index: int
    start: int
    end: int
    sequence: str
    features: BiophysicalFeatures
    tm: float
    z_scores: Tuple[float, ...] = field(default_factory=tuple)
    combined_score: float = 0.0
    contributions: List[FeatureContribution] = field(default_factory=list)
    is_anomalous: bool = False
    anomaly_type: AnomalyType = AnomalyType.NONE
    archetype: Archetype = Archetype.STABLE_HELIX

    def z(self, feature: Feature) -> float:
        return self.z_scores[feature] if self.z_scores else 0.0

    def top_contributions(self, n: int = 3) -> List[FeatureContribution]:
        return self.contributions[:n]


@dataclass(frozen=True)
class CorrelationPoint:
    index: int
    correlation: float


@dataclass(frozen=True)
class WindowDelta:
    index: int
    start: int
    end: int
    diff: BiophysicalFeatures


@dataclass(frozen=True)
class ComparisonResult:
    deltas: List[WindowDelta]
    avg_delta: BiophysicalFeatures


@dataclass(frozen=True)
class BiologicalSummary:
    archetype_counts: Dict[Archetype, int]
    anomaly_count: int
    avg_tm: float

    @property
    def promoter_potential(self) -> int:
        return self.archetype_counts.get(Archetype.PUTATIVE_PROMOTER, 0)

    @property
    def structural_anchors(self) -> int:
        return self.archetype_counts.get(Archetype.MECHANICAL_ANCHOR, 0)

    @property
    def z_dna_sites(self) -> int:
        return self.archetype_counts.get(Archetype.Z_DNA_CANDIDATE, 0)


@dataclass
class AnalysisResult:
    windows: List[AnalysisWindow]
    stats: AnalysisStats
    correlation_map: List[CorrelationPoint]
    threshold_used: float
    multivariate_scores: List[float]
    summary: BiologicalSummary
    parameters: Optional["ProfileParameters"] = None

    def window(self, index: int) -> AnalysisWindow:
        for w in self.windows:
            if w.index == index:
                return w
        raise KeyError(index)


class SequenceValidationError(ValueError):
    """Raised when the input cannot be windowed (sequence shorter than W, bad W/S)."""

    def __init__(self, message: str, *, length: int, window_size: int):
        super().__init__(message)
        self.length = length
        self.window_size = window_size
