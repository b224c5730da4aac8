# File: backend/tests/test_profile_features.py
# Version: v0.1.0
"""
Unit tests for the profile leaves:
- sanitization and windowing
- salt-correction policies
- window feature extraction and Tm
"""

from __future__ import annotations

import math

import pytest

from backend.app.core.profile import constants as C
from backend.app.core.profile.features import calculate_window_features, melting_temperature
from backend.app.core.profile.models import Feature, SequenceValidationError
from backend.app.core.profile.salt import (
    EffectiveSaltCorrection,
    MonovalentSaltCorrection,
    effective_salt,
    get_salt_policy,
)
from backend.app.core.profile.sequence import (
    expected_window_count,
    extract_windows,
    sanitize_sequence,
    validate_window_params,
)


def test_sanitize_maps_unknowns_and_keeps_length():
    raw = "acgtXmn-RY"
    clean = sanitize_sequence(raw)
    assert clean == "ACGTNMNNNN"
    assert len(clean) == len(raw)
    # characters whose uppercase form is longer still map to a single N
    assert sanitize_sequence("ACGT\u00df") == "ACGTN"
    assert sanitize_sequence("\ufb01ac") == "NAC"


def test_sanitize_idempotent():
    s = sanitize_sequence("ggccMMxyzATat")
    assert sanitize_sequence(s) == s


@pytest.mark.parametrize("length,w,s", [(20, 15, 5), (15, 15, 5), (100, 15, 5), (37, 10, 3), (16, 15, 1)])
def test_window_count_and_span(length, w, s):
    seq = "A" * length
    windows = extract_windows(seq, w, s)
    assert len(windows) == (length - w) // s + 1 == expected_window_count(length, w, s)
    for k, (idx, start, end, sub) in enumerate(windows):
        assert idx == k
        assert start == k * s
        assert end - start == w
        assert len(sub) == w


def test_validate_short_sequence_message():
    with pytest.raises(SequenceValidationError) as ei:
        validate_window_params(14, 15, 5)
    msg = str(ei.value)
    assert "14" in msg and "15" in msg
    assert ei.value.length == 14
    assert ei.value.window_size == 15


@pytest.mark.parametrize("w,s", [(0, 5), (15, 0), (15, -1)])
def test_validate_rejects_non_positive_params(w, s):
    with pytest.raises(SequenceValidationError):
        validate_window_params(100, w, s)


def test_effective_salt_formula():
    assert math.isclose(effective_salt(0.1, 0.0015), 0.1 + 120 * math.sqrt(0.0015))
    # negative Mg clamps to zero
    assert math.isclose(effective_salt(0.05, -1.0), 0.05)


def test_salt_policies_differ_and_resolve():
    eff = get_salt_policy("effective")
    mono = get_salt_policy("monovalent")
    assert isinstance(eff, EffectiveSaltCorrection)
    assert isinstance(mono, MonovalentSaltCorrection)
    assert math.isclose(mono.entropy_correction(10, 0.1, 0.0015), C.K_SALT * 10 * math.log(0.1))
    assert eff.entropy_correction(10, 0.1, 0.0015) != mono.entropy_correction(10, 0.1, 0.0015)
    assert eff.entropy_correction(0, 0.1, 0.0015) == 0.0


def test_salt_policy_log_floor():
    mono = get_salt_policy("monovalent")
    assert math.isclose(mono.entropy_correction(1, 0.0, 0.0), C.K_SALT * math.log(C.LOG_FLOOR))


def test_unknown_salt_policy():
    with pytest.raises(ValueError):
        get_salt_policy("owczarzy")


def test_homopolymer_features():
    sub = "G" * 15
    f = calculate_window_features(sub, 0.1, 0.0015)
    g = C.BASE_TO_ID["G"]
    assert f.gc == 1.0
    assert math.isclose(f.hb_per_base, 3.0)
    assert math.isclose(f.stack_per_base, C.STACK_E_KCAL[g][g])
    assert math.isclose(f.bendability, C.BENDABILITY_INDEX[g][g])
    assert math.isclose(f.zx, C.Z_VEC[g][0])
    assert math.isclose(f[Feature.ZZ], C.Z_VEC[g][2])

    pairs = 14
    h = pairs * C.DELTA_H[g][g]
    s = pairs * C.DELTA_S_CAL[g][g] + C.K_SALT * pairs * math.log(effective_salt(0.1, 0.0015))
    expected_dg = (h - C.T_KELVIN * s / 1000.0) / pairs
    assert math.isclose(f.dg_per_base, expected_dg, rel_tol=1e-12)


def test_methylcytosine_counts_as_gc():
    f = calculate_window_features("AMAMA", 0.1, 0.0)
    assert math.isclose(f.gc, 2 / 5)
    assert math.isclose(f.hb_per_base, (3 * 2 + 2 * 3) / 5)


def test_unknown_bases_count_in_length_only():
    f = calculate_window_features("GGNNN", 0.1, 0.0015)
    g = C.BASE_TO_ID["G"]
    assert math.isclose(f.gc, 2 / 5)
    assert math.isclose(f.hb_per_base, 6 / 5)
    # only the GG pair is valid
    assert math.isclose(f.stack_per_base, C.STACK_E_KCAL[g][g])


def test_all_unknown_window_is_zero():
    f = calculate_window_features("N" * 15, 0.1, 0.0015)
    assert f.as_tuple() == (0.0,) * 8


def test_single_base_window_has_no_pairs():
    f = calculate_window_features("A", 0.1, 0.0015)
    assert f.gc == 0.0
    assert f.hb_per_base == 2.0
    assert f.stack_per_base == 0.0
    assert f.dg_per_base == 0.0
    assert f.bendability == 0.0


def test_salt_model_changes_free_energy_only():
    eff = calculate_window_features("ACGTACGTACGTACG", 0.1, 0.0015, salt_policy=get_salt_policy("effective"))
    mono = calculate_window_features("ACGTACGTACGTACG", 0.1, 0.0015, salt_policy=get_salt_policy("monovalent"))
    assert eff.dg_per_base != mono.dg_per_base
    assert eff.gc == mono.gc
    assert eff.stack_per_base == mono.stack_per_base


def test_melting_temperature():
    tm = melting_temperature(0.5, 0.1, 0.0015)
    assert math.isclose(tm, 64.9 + 16.6 * math.log10(0.1 + 120 * math.sqrt(0.0015)))
    # higher GC → higher Tm
    assert melting_temperature(0.8, 0.1, 0.0015) > tm
    # zero salt is floored, not a math error
    assert math.isfinite(melting_temperature(0.5, 0.0, 0.0))
