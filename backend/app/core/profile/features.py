# File: backend/app/core/profile/features.py
# Version: v0.1.0
"""
Window feature extraction (nearest-neighbor model).

Implements:
- GC/5mC fraction, H-bond density and helical displacement (per-base sums / W)
- Stacking, enthalpy, entropy and bendability over valid adjacent pairs
- Salt-corrected Gibbs free energy per valid pair
- Melting temperature from GC fraction and effective salt

Notes:
- N bases count toward W but contribute nothing; a pair is valid only when
  both bases are recognized. Pair sums are divided by max(pair_count, 1), so
  a window with no valid pairs reports 0 for the pair features.
"""

from __future__ import annotations

import math
from typing import Optional

from .constants import (
    BASE_TO_ID,
    BENDABILITY_INDEX,
    DELTA_H,
    DELTA_S_CAL,
    GC_LIKE,
    HBOND_PER_BASE,
    LOG_FLOOR,
    STACK_E_KCAL,
    T_KELVIN,
    Z_VEC,
)
from .models import BiophysicalFeatures
from .salt import DEFAULT_SALT_POLICY, SaltCorrection, effective_salt


def calculate_window_features(
    sub: str,
    salt: float,
    salt_mg: float,
    *,
    salt_policy: Optional[SaltCorrection] = None,
) -> BiophysicalFeatures:
    """
    Compute the 8-component feature vector of one (sanitized) window.

    Args:
        sub: window substring over A/C/G/T/M/N
        salt: monovalent salt concentration (M)
        salt_mg: divalent (Mg2+) concentration (M)
        salt_policy: entropy salt-correction policy (default: effective salt)
    """
    policy = salt_policy or DEFAULT_SALT_POLICY
    L = len(sub)
    ids = [BASE_TO_ID.get(c) for c in sub]

    gc_count = 0
    hb_sum = zx_sum = zy_sum = zz_sum = 0.0
    for base, bid in zip(sub, ids):
        if bid is None:
            continue
        if base in GC_LIKE:
            gc_count += 1
        hb_sum += HBOND_PER_BASE[bid]
        vx, vy, vz = Z_VEC[bid]
        zx_sum += vx
        zy_sum += vy
        zz_sum += vz

    h_sum = s_sum = e_sum = bend_sum = 0.0
    pair_count = 0
    for cur, nxt in zip(ids, ids[1:]):
        if cur is None or nxt is None:
            continue
        e_sum += STACK_E_KCAL[cur][nxt]
        h_sum += DELTA_H[cur][nxt]
        s_sum += DELTA_S_CAL[cur][nxt]
        bend_sum += BENDABILITY_INDEX[cur][nxt]
        pair_count += 1

    s_sum += policy.entropy_correction(pair_count, salt, salt_mg)

    dg = h_sum - T_KELVIN * (s_sum / 1000.0)

    n = max(L, 1)
    pairs = max(pair_count, 1)
    return BiophysicalFeatures(
        gc=gc_count / n,
        hb_per_base=hb_sum / n,
        stack_per_base=e_sum / pairs,
        dg_per_base=dg / pairs,
        zx=zx_sum / n,
        zy=zy_sum / n,
        zz=zz_sum / n,
        bendability=bend_sum / pairs,
    )


def melting_temperature(gc: float, salt: float, salt_mg: float) -> float:
    """Salt-adjusted GC-content Tm estimate (°C)."""
    conc = max(effective_salt(salt, salt_mg), LOG_FLOOR)
    return 64.9 + 41.0 * (gc - 0.5) + 16.6 * math.log10(conc)
