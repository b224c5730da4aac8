# File: backend/app/core/profile/salt.py
# Version: v0.1.0
"""
Salt-correction policies for the nearest-neighbor entropy term.

Two formulas are in use for the entropy correction:

- "effective" (default): ln(Na + 120*sqrt(Mg)), i.e. magnesium folded into a
  monovalent-equivalent concentration. The same effective salt drives Tm.
- "monovalent": ln(Na), ignoring magnesium.

Both floor the logarithm argument at LOG_FLOOR. Tm always uses the effective
salt, independent of the entropy policy.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from .constants import K_SALT, LOG_FLOOR, MG_EQUIVALENCE_FACTOR


def effective_salt(salt: float, salt_mg: float) -> float:
    """Monovalent-equivalent concentration (M)."""
    return salt + MG_EQUIVALENCE_FACTOR * math.sqrt(max(salt_mg, 0.0))


@dataclass(frozen=True)
class SaltCorrection:
    name: str = "base"

    def concentration(self, salt: float, salt_mg: float) -> float:
        raise NotImplementedError

    def entropy_correction(self, pair_count: int, salt: float, salt_mg: float) -> float:
        """Entropy increment in cal/(mol*K) for `pair_count` nearest-neighbor pairs."""
        if pair_count <= 0:
            return 0.0
        conc = max(self.concentration(salt, salt_mg), LOG_FLOOR)
        return K_SALT * pair_count * math.log(conc)


@dataclass(frozen=True)
class EffectiveSaltCorrection(SaltCorrection):
    name: str = "effective"

    def concentration(self, salt: float, salt_mg: float) -> float:
        return effective_salt(salt, salt_mg)


@dataclass(frozen=True)
class MonovalentSaltCorrection(SaltCorrection):
    name: str = "monovalent"

    def concentration(self, salt: float, salt_mg: float) -> float:
        return salt


SALT_POLICIES: Dict[str, SaltCorrection] = {
    "effective": EffectiveSaltCorrection(),
    "monovalent": MonovalentSaltCorrection(),
}
DEFAULT_SALT_POLICY = SALT_POLICIES["effective"]


def get_salt_policy(name: str) -> SaltCorrection:
    try:
        return SALT_POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown salt model '{name}'. Expected one of: {', '.join(sorted(SALT_POLICIES))}"
        ) from None
