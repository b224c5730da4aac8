# File: backend/app/config/config_profile.py
# Version: v0.1.0
"""
Profile parameters loader (read-only).

- Reads defaults from: backend/app/config/profile_param_default.json
- Validates payloads with ProfileParameters (Pydantic) from core/profile/parameters.py
- Missing file → model defaults

Usage:
    from backend.app.config.config_profile import load_default_params
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from backend.app.core.config import settings
from backend.app.core.profile.parameters import ProfileParameters

# Resolve config directory relative to this file
_THIS_DIR = Path(__file__).resolve().parent
CONFIG_DIR = _THIS_DIR
DEFAULT_FILE = CONFIG_DIR / "profile_param_default.json"


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_params(path: Optional[Path]) -> ProfileParameters:
    """Load and validate parameters from `path`; None or a missing file gives model defaults."""
    payload = _read_json(Path(path)) if path else {}
    return ProfileParameters.model_validate(payload or {})


def load_default_params() -> ProfileParameters:
    """Load default profile parameters (PROFILE_DEFAULTS_PATH or profile_param_default.json)."""
    return load_params(settings.PROFILE_DEFAULTS_PATH or DEFAULT_FILE)
