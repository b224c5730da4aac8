# File: backend/app/core/profile/parameters.py
# Version: v0.1.0
"""
Pydantic model for profile analysis parameters.

Usage:
    from backend.app.core.profile.parameters import ProfileParameters
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, confloat, conint

from .constants import (
    DEFAULT_SALT,
    DEFAULT_SALT_MG,
    DEFAULT_STRIDE,
    DEFAULT_THRESHOLD,
    DEFAULT_WINDOW_SIZE,
)


class ProfileParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    threshold: confloat(gt=0) = Field(DEFAULT_THRESHOLD, description="Anomaly threshold (z-score multiple)")
    window_size: conint(ge=1) = Field(DEFAULT_WINDOW_SIZE, description="Window length W (bp)")
    stride: conint(ge=1) = Field(DEFAULT_STRIDE, description="Offset between window starts S (bp)")
    salt: confloat(ge=0) = Field(DEFAULT_SALT, description="Monovalent salt concentration (M)")
    salt_mg: confloat(ge=0) = Field(DEFAULT_SALT_MG, description="Divalent Mg2+ concentration (M)")
    salt_model: Literal["effective", "monovalent"] = Field(
        "effective", description="Entropy salt-correction formula"
    )
