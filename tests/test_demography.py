import numpy as np
import pytest

from popuviz.demography import (
    birth_rate_factor,
    developed_curve,
    developing_curve,
    floor_and_round,
    pseudo_variance,
    sex_split,
    survival_growth,
)

AGES = np.arange(21, dtype=float) * 5


def test_birth_rate_factor_floors():
    assert birth_rate_factor(1950, developed=True) == 1.0
    assert birth_rate_factor(2100, developed=True) == 0.3
    assert birth_rate_factor(1950, developed=False) == 1.5
    assert birth_rate_factor(2100, developed=False) == 0.5
    assert birth_rate_factor(2500, developed=False) == 0.4


def test_birth_rate_factor_never_increases():
    for developed in (True, False):
        values = [birth_rate_factor(y, developed) for y in range(1950, 2101)]
        assert all(a >= b for a, b in zip(values, values[1:]))


def test_survival_growth_is_unclamped():
    assert survival_growth(1950) == 0
    assert survival_growth(2100) == 1
    assert survival_growth(2250) == 2


def test_developed_peak_follows_bulge():
    # 1990: peak age 40, bin index 8
    base = developed_curve(1990, AGES.copy())
    assert int(np.argmax(base)) == 8


def test_developed_oldest_bin_never_collapses():
    base = developed_curve(1950, AGES.copy())
    assert base[-1] > 0


def test_developing_curve_decays_from_wide_base():
    base = developing_curve(1950, AGES.copy())
    assert base[0] == pytest.approx(150 * 1.2)
    assert np.all(np.diff(base) < 0)


def test_developing_bulge_inactive_far_from_bulge():
    # bulge at age 0 in 1950; bins at 20+ are untouched
    base = developing_curve(1950, AGES.copy())
    assert base[4] == pytest.approx(150 * np.exp(-0.05 * 20))


def test_curves_do_not_modify_ages():
    ages = AGES.copy()
    developed_curve(2050, ages)
    developing_curve(2050, ages)
    assert np.array_equal(ages, AGES)


def test_pseudo_variance_is_bounded_and_repeatable():
    v = pseudo_variance(2024, 21)
    assert v.shape == (21,)
    assert np.all(np.abs(v - 1) <= 0.02 + 1e-12)
    assert np.array_equal(v, pseudo_variance(2024, 21))
    assert v[0] == pytest.approx(1 + 0.02 * np.sin(2024))


@pytest.mark.parametrize("year", [1950, 2000, 2050, 2100])
@pytest.mark.parametrize("curve", [developed_curve, developing_curve])
def test_female_exceeds_male_in_old_age(curve, year):
    base = curve(year, AGES.copy())
    male, female = sex_split(base, pseudo_variance(year, 21), AGES)
    old = AGES >= 80
    assert np.all(female[old] > male[old])


def test_floor_and_round():
    out = floor_and_round(np.array([0.0, 0.999, 1.234567, 42.005]))
    assert out[0] == 1.0
    assert out[1] == 1.0
    assert out[2] == 1.23
    assert out.min() >= 1.0
