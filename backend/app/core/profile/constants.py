# File: backend/app/core/profile/constants.py
# Version: v0.1.0
"""
Constant tables for the biophysical profile engine.

Per-base tables are indexed by BASE_TO_ID; per-dinucleotide tables are
5x5 (row = 5' base, column = 3' base). N (unknown) has no entry and
contributes nothing to chemistry sums.

Sources:
- DELTA_H / DELTA_S_CAL: SantaLucia (1998) unified nearest-neighbor set.
- STACK_E_KCAL: Ornstein et al. (1978) stacking energies.
- BENDABILITY_INDEX: dinucleotide averages of the DNase I bendability scale.
- M (5-methylcytosine) follows C with a small stabilizing offset.
"""

from __future__ import annotations

from typing import Dict, Tuple

BASES = ("A", "C", "G", "T", "M")
BASE_TO_ID: Dict[str, int] = {b: i for i, b in enumerate(BASES)}

GC_LIKE = frozenset("GCM")
VALID_BASES = frozenset(BASES)

HBOND_PER_BASE: Tuple[float, ...] = (2.0, 3.0, 3.0, 2.0, 3.0)

# Per-base helical displacement vectors (x, y, z), arbitrary units.
Z_VEC: Tuple[Tuple[float, float, float], ...] = (
    (0.24, -0.11, 0.33),   # A
    (-0.18, 0.27, -0.05),  # C
    (0.31, 0.22, -0.28),   # G
    (-0.29, -0.16, 0.19),  # T
    (-0.12, 0.35, -0.09),  # M
)

# kcal/mol
STACK_E_KCAL: Tuple[Tuple[float, ...], ...] = (
    #   A       C       G       T       M
    (-5.37, -10.51, -6.78, -6.57, -10.86),   # A
    (-6.57, -8.26, -9.69, -6.78, -8.54),     # C
    (-9.81, -14.59, -8.26, -10.51, -15.02),  # G
    (-3.82, -9.81, -6.57, -5.37, -10.14),    # T
    (-6.88, -8.54, -10.05, -7.04, -8.83),    # M
)

# kcal/mol
DELTA_H: Tuple[Tuple[float, ...], ...] = (
    #   A      C      G      T      M
    (-7.9, -8.4, -7.8, -7.2, -8.6),   # A
    (-8.5, -8.0, -10.6, -7.8, -8.2),  # C
    (-8.2, -9.8, -8.0, -8.4, -10.0),  # G
    (-7.2, -8.2, -8.5, -7.9, -8.4),   # T
    (-8.7, -8.2, -10.8, -8.0, -8.4),  # M
)

# cal/(mol*K)
DELTA_S_CAL: Tuple[Tuple[float, ...], ...] = (
    #   A       C       G       T       M
    (-22.2, -22.4, -21.0, -20.4, -22.8),  # A
    (-22.7, -19.9, -27.2, -21.0, -20.2),  # C
    (-22.2, -24.4, -19.9, -22.4, -24.8),  # G
    (-21.3, -22.2, -22.7, -22.2, -22.6),  # T
    (-23.1, -20.2, -27.6, -21.4, -20.5),  # M
)

# Dimensionless; positive means more bendable toward the major groove.
BENDABILITY_INDEX: Tuple[Tuple[float, ...], ...] = (
    #   A       C       G       T       M
    (-0.274, -0.205, -0.081, -0.280, -0.215),  # A
    (0.006, -0.032, -0.033, -0.081, -0.040),   # C
    (-0.037, -0.076, -0.032, -0.205, -0.084),  # G
    (0.015, -0.037, 0.006, -0.274, -0.045),    # T
    (-0.004, -0.040, -0.043, -0.091, -0.048),  # M
)

T_KELVIN = 310.15  # 37 °C
K_SALT = 0.368  # cal/(mol*K) per nearest-neighbor pair per ln[Na+]
EPS = 1e-9

# Mg2+ folded into a monovalent-equivalent concentration: Na_eq = Na + 120*sqrt(Mg)
MG_EQUIVALENCE_FACTOR = 120.0
LOG_FLOOR = 1e-5

CORRELATION_LOOKBACK = 5

DEFAULT_THRESHOLD = 3.0
DEFAULT_WINDOW_SIZE = 15
DEFAULT_STRIDE = 5
DEFAULT_SALT = 0.1
DEFAULT_SALT_MG = 0.0015
