"""Validate the closed-form pH equations against textbook values."""

import math

import numpy as np
import pytest

from titrasim.chemistry import (
    KA_ETHANOIC,
    KB_AMMONIA,
    KW,
    ReactionRegime,
    compute_equivalence_volume,
    compute_ph,
    compute_ph_at_volume,
    theoretical_curve,
)
from titrasim.errors import DomainError, InvalidArgument

SASB = ReactionRegime.STRONG_ACID_STRONG_BASE
WASB = ReactionRegime.WEAK_ACID_STRONG_BASE
SAWB = ReactionRegime.STRONG_ACID_WEAK_BASE


def _ph(regime, base_volume_ml, acid_molarity=0.1, base_molarity=0.1, acid_volume_ml=25.0):
    return compute_ph_at_volume(
        regime, acid_molarity, base_molarity, acid_volume_ml, base_volume_ml
    )


class TestStrongAcidStrongBase:
    def test_initial_ph_is_one(self):
        assert _ph(SASB, 0.0) == pytest.approx(1.0)

    def test_equivalence_is_exactly_neutral(self):
        assert _ph(SASB, 25.0) == 7.0

    def test_excess_base_at_fifty_ml(self):
        # 0.0025 mol OH- in 0.075 L -> pOH 1.477
        expected = 14.0 + math.log10(0.0025 / 0.075)
        assert _ph(SASB, 50.0) == pytest.approx(expected)
        assert _ph(SASB, 50.0) == pytest.approx(12.52, abs=0.01)

    def test_excess_acid_midway(self):
        # 0.00125 mol H+ left in 0.0375 L
        assert _ph(SASB, 12.5) == pytest.approx(-math.log10(0.00125 / 0.0375))


class TestWeakAcidStrongBase:
    def test_initial_ph_uses_weak_acid_approximation(self):
        assert _ph(WASB, 0.0) == pytest.approx(-math.log10(math.sqrt(1.8e-5 * 0.1)))
        assert _ph(WASB, 0.0) == pytest.approx(2.87, abs=0.01)

    def test_half_equivalence_equals_pka(self):
        assert _ph(WASB, 12.5) == pytest.approx(-math.log10(KA_ETHANOIC))
        assert _ph(WASB, 12.5) == pytest.approx(4.74, abs=0.01)

    def test_equivalence_uses_acetate_hydrolysis(self):
        c_a = 0.0025 / 0.050
        c_oh = math.sqrt(KW * c_a / KA_ETHANOIC)
        assert _ph(WASB, 25.0) == pytest.approx(-math.log10(KW / c_oh))
        assert _ph(WASB, 25.0) > 8.0

    def test_post_equivalence_matches_strong_base(self):
        assert _ph(WASB, 50.0) == pytest.approx(_ph(SASB, 50.0))


class TestStrongAcidWeakBase:
    def test_pre_equivalence_matches_strong_acid(self):
        assert _ph(SAWB, 10.0) == pytest.approx(_ph(SASB, 10.0))

    def test_equivalence_uses_ammonium_hydrolysis(self):
        c_bh = 0.0025 / 0.050
        expected = -math.log10(math.sqrt(KW * c_bh / KB_AMMONIA))
        assert _ph(SAWB, 25.0) == pytest.approx(expected)
        assert _ph(SAWB, 25.0) < 6.0

    def test_double_equivalence_is_one_to_one_buffer(self):
        assert _ph(SAWB, 50.0) == pytest.approx(14.0 + math.log10(KB_AMMONIA))


@pytest.mark.parametrize("regime", list(ReactionRegime))
def test_equivalence_within_tolerance_selects_equivalence_formula(regime):
    n_acid = 0.0025
    exact = compute_ph(regime, n_acid, n_acid, 0.050)
    drifted = compute_ph(regime, n_acid, n_acid * (1 + 1e-12), 0.050)
    assert drifted == exact


@pytest.mark.parametrize("regime", [SASB, SAWB])
def test_ph_non_decreasing_over_whole_curve(regime):
    volumes = np.linspace(0.0, 50.0, 501)
    ph = theoretical_curve(regime, 0.1, 0.1, 25.0, volumes)
    assert np.all(np.diff(ph) >= 0)


def test_weak_acid_buffer_and_excess_base_non_decreasing():
    volumes = np.linspace(0.5, 50.0, 400)
    ph = theoretical_curve(WASB, 0.1, 0.1, 25.0, volumes)
    assert np.all(np.diff(ph) >= 0)


@pytest.mark.parametrize("regime", list(ReactionRegime))
def test_ph_within_zero_and_fourteen_for_classroom_inputs(regime):
    volumes = np.linspace(0.0, 50.0, 101)
    for c_acid, c_base in [(0.1, 0.1), (0.05, 0.2), (0.5, 0.5), (0.01, 0.01)]:
        ph = theoretical_curve(regime, c_acid, c_base, 25.0, volumes)
        assert np.all((ph > 0) & (ph < 14))


def test_concentrated_acid_warns_outside_range():
    with pytest.warns(UserWarning, match="outside 0-14"):
        ph = compute_ph(SASB, 0.05, 0.0, 0.025)
    assert ph < 0


def test_weak_base_buffer_without_acid_raises_domain_error():
    with pytest.raises(DomainError):
        compute_ph(SAWB, 0.0, 0.001, 0.05)


def test_empty_weak_acid_equivalence_raises_domain_error():
    with pytest.raises(DomainError):
        compute_ph(WASB, 0.0, 0.0, 0.05)


@pytest.mark.parametrize(
    "acid, base, volume",
    [(-0.001, 0.0, 0.05), (0.001, -0.001, 0.05), (0.001, 0.0, 0.0), (0.001, 0.0, math.nan)],
)
def test_invalid_arguments_rejected(acid, base, volume):
    with pytest.raises(InvalidArgument):
        compute_ph(SASB, acid, base, volume)


def test_regime_must_be_enum():
    with pytest.raises(TypeError):
        compute_ph("strong-acid-strong-base", 0.001, 0.0, 0.05)


class TestEquivalenceVolume:
    def test_equal_concentrations(self):
        assert compute_equivalence_volume(25, 0.1, 0.1) == 25.0

    def test_scales_with_concentration_ratio(self):
        assert compute_equivalence_volume(25.0, 0.2, 0.1) == pytest.approx(50.0)
        assert compute_equivalence_volume(25.0, 0.1, 0.2) == pytest.approx(12.5)

    @pytest.mark.parametrize("base_molarity", [0.0, -0.1, math.nan])
    def test_invalid_base_molarity_gives_nan(self, base_molarity):
        assert math.isnan(compute_equivalence_volume(25.0, 0.1, base_molarity))


def test_weak_acid_first_dose_dips_below_initial_ph():
    """The sqrt(Ka*c) start and the Henderson-Hasselbalch buffer are separate branches."""
    initial = _ph(WASB, 0.0)
    first_dose = _ph(WASB, 0.1)
    assert initial == pytest.approx(2.872, abs=0.001)
    assert first_dose == pytest.approx(2.349, abs=0.001)
    assert first_dose < initial
    assert _ph(WASB, 0.5) > first_dose
