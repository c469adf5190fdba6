"""Snapshot generation for the population pyramid.

A snapshot is the 21 five-year age bins (0-4 ... 100+) of one archetype in one
year, split by sex, in millions. Snapshots are recomputed from scratch on every
call; nothing is cached or mutated in place.
"""

from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from popuviz.data import (
    AGE_RANGES,
    BIN_WIDTH,
    BRACKETS,
    ELDERLY,
    NUM_BINS,
    WORKING,
    YEAR_MAX,
    YEAR_MIN,
    YOUTH,
    AgeBracket,
    CountryArchetype,
)
from popuviz.demography import (
    birth_rate_factor,
    developed_curve,
    developing_curve,
    floor_and_round,
    pseudo_variance,
    sex_split,
    survival_growth,
)

_CURVES = {
    CountryArchetype.DEVELOPED: developed_curve,
    CountryArchetype.DEVELOPING: developing_curve,
}


@dataclass(frozen=True)
class AgeBin:
    """One five-year cohort, in millions."""
    age_range: str
    male: float
    female: float

    @property
    def total(self) -> float:
        return self.male + self.female


@dataclass
class Snapshot:
    """All age bins for one (year, archetype) pair."""
    year: int
    archetype: CountryArchetype
    bins: list[AgeBin]

    @property
    def male(self) -> np.ndarray:
        return np.array([b.male for b in self.bins])

    @property
    def female(self) -> np.ndarray:
        return np.array([b.female for b in self.bins])

    @property
    def total(self) -> float:
        return float(self.male.sum() + self.female.sum())

    @property
    def birth_rate_factor(self) -> float:
        return birth_rate_factor(self.year, self.archetype is CountryArchetype.DEVELOPED)

    @property
    def survival_growth(self) -> float:
        return survival_growth(self.year)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "Age": [b.age_range for b in self.bins],
            "Male": self.male,
            "Female": self.female,
        })


def generate(year: int, archetype: CountryArchetype) -> list[AgeBin]:
    """Generate the population distribution for a year and archetype.

    Args:
        year: Calendar year. Meaningful in 1950-2100; other years extrapolate.
        archetype: Which demographic profile to use.

    Returns:
        21 AgeBins ordered youngest first. Both sexes are >= 1 and rounded
        to 2 decimals.
    """
    ages = np.arange(NUM_BINS, dtype=float) * BIN_WIDTH
    base = _CURVES[archetype](year, ages)
    variance = pseudo_variance(year, NUM_BINS)

    male, female = sex_split(base, variance, ages)
    male = floor_and_round(male)
    female = floor_and_round(female)

    return [
        AgeBin(age_range=label, male=float(m), female=float(f))
        for label, m, f in zip(AGE_RANGES, male, female)
    ]


def generate_snapshot(year: int, archetype: CountryArchetype) -> Snapshot:
    return Snapshot(year=year, archetype=archetype, bins=generate(year, archetype))


def bracket_total(bins: list[AgeBin], bracket: AgeBracket) -> float:
    """Sum male + female over the bins whose label falls inside `bracket`."""
    return float(sum(b.total for b in bins if bracket.contains(b.age_range)))


def summarize(snapshot: Snapshot) -> dict:
    """Bracket totals, overall total and dependency ratio for a snapshot."""
    summary = {bracket.name: bracket_total(snapshot.bins, bracket) for bracket in BRACKETS}
    summary["total"] = snapshot.total
    working = summary[WORKING.name]
    dependants = summary[YOUTH.name] + summary[ELDERLY.name]
    summary["dependency_ratio"] = dependants / working if working > 0 else float("inf")
    return summary


@dataclass
class Timeline:
    """Snapshots for a run of consecutive years."""
    archetype: CountryArchetype
    snapshots: list[Snapshot] = field(default_factory=list)

    @property
    def year_list(self) -> list[int]:
        return [s.year for s in self.snapshots]

    @property
    def population_series(self) -> list[float]:
        return [s.total for s in self.snapshots]

    @property
    def youth_series(self) -> list[float]:
        return [bracket_total(s.bins, YOUTH) for s in self.snapshots]

    @property
    def working_series(self) -> list[float]:
        return [bracket_total(s.bins, WORKING) for s in self.snapshots]

    @property
    def elderly_series(self) -> list[float]:
        return [bracket_total(s.bins, ELDERLY) for s in self.snapshots]


def run_timeline(
    archetype: CountryArchetype,
    start_year: int = YEAR_MIN,
    end_year: int = YEAR_MAX,
) -> Timeline:
    """Generate one snapshot per year from start_year to end_year inclusive."""
    if end_year < start_year:
        raise ValueError(f"end_year {end_year} is before start_year {start_year}")

    timeline = Timeline(archetype=archetype)
    for year in range(start_year, end_year + 1):
        timeline.snapshots.append(generate_snapshot(year, archetype))
    return timeline
