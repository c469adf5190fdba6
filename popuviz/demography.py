"""Parametric curves for the two country archetypes.

Approximations used:
- Developed: a Gaussian bulge (the post-war boom cohort) that ages upward
  and widens, with an old-age taper softened by rising longevity and
  progressively thinner cohorts below the bulge.
- Developing: exponential decay from a wide base, slowing over time, with a
  small youth bulge that drifts upward as child survival improves.

These are shape models for teaching, not calibrated to any census data.
All functions take `ages` as a numpy array of bin start ages (0, 5, ..., 100).
"""

import numpy as np

BASE_YEAR = 1950

MALE_SHARE = 0.5
FEMALE_SHARE = 0.51
FEMALE_LONGEVITY_SCALE = 500.0  # female premium grows by age/500
MIN_POPULATION = 1.0            # millions; no bin is ever reported empty
VARIANCE_AMPLITUDE = 0.02


def elapsed(year: float) -> float:
    return year - BASE_YEAR


def birth_rate_factor(year: float, developed: bool) -> float:
    """Fertility proxy, declining from the 1950 baseline to a plateau."""
    t = elapsed(year)
    if developed:
        return max(0.3, 1 - t / 120)
    return max(0.4, 1.5 - t / 150)


def survival_growth(year: float) -> float:
    """Linear proxy for cumulative life-expectancy gains. Not clamped."""
    return elapsed(year) / 150


def developed_curve(year: float, ages: np.ndarray) -> np.ndarray:
    """Base population (millions, both sexes unsplit) for the Developed archetype."""
    t = elapsed(year)
    peak_age = min(60.0, 20 + t / 2)
    spread = 25 + t / 10

    base = 100 * np.exp(-((ages - peak_age) ** 2) / (2 * spread ** 2))

    # Taper off for the very old; longevity pushes the tail outward
    old = ages > 80
    taper = 1 - (ages[old] - 80) / (40 + survival_growth(year) * 20)
    base[old] *= np.maximum(0.1, taper)

    # Cohorts below the bulge shrink as fertility stays below replacement
    young = ages < peak_age
    shrink_factor = max(0.4, 1 - t / 200)
    base[young] *= (0.7 + 0.3 * (ages[young] / peak_age)) * shrink_factor

    return base


def developing_curve(year: float, ages: np.ndarray) -> np.ndarray:
    """Base population (millions, both sexes unsplit) for the Developing archetype."""
    t = elapsed(year)
    slope = max(0.015, 0.05 - t / 4000)
    base = 150 * np.exp(-slope * ages)

    bulge_pos = max(0.0, (year - 1970) / 3)
    bulge = ages < bulge_pos + 20
    base[bulge] *= 1 + 0.2 * np.exp(-((ages[bulge] - bulge_pos) ** 2) / 100)

    return base


def pseudo_variance(year: float, n_bins: int) -> np.ndarray:
    """Deterministic jitter of +/-2% per bin. Same inputs, same output."""
    return 1 + VARIANCE_AMPLITUDE * np.sin(year + np.arange(n_bins))


def sex_split(base: np.ndarray, variance: np.ndarray, ages: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Split a base curve into (male, female) before flooring and rounding.

    Females start ~2% above males and gain an age-proportional premium.
    """
    scaled = base * variance
    male = scaled * MALE_SHARE
    female = scaled * FEMALE_SHARE * (1 + ages / FEMALE_LONGEVITY_SCALE)
    return male, female


def floor_and_round(values: np.ndarray) -> np.ndarray:
    """Floor at MIN_POPULATION and round to display precision (2 decimals)."""
    return np.round(np.maximum(MIN_POPULATION, values), 2)
