"""Archetype configuration, age-bin labels and age brackets."""

import json
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Optional

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

YEAR_MIN = 1950
YEAR_MAX = 2100
DEFAULT_YEAR = 2024

BIN_WIDTH = 5
AGE_RANGES = [
    "0-4", "5-9", "10-14", "15-19", "20-24", "25-29", "30-34", "35-39",
    "40-44", "45-49", "50-54", "55-59", "60-64", "65-69", "70-74",
    "75-79", "80-84", "85-89", "90-94", "95-99", "100+",
]
NUM_BINS = len(AGE_RANGES)


class CountryArchetype(StrEnum):
    DEVELOPED = "developed"
    DEVELOPING = "developing"


@dataclass(frozen=True)
class AgeBracket:
    """Inclusive age range used for summary statistics.

    max_inclusive=None means "no upper bound" (e.g. 65+).
    """
    name: str
    label: str
    min_inclusive: int
    max_inclusive: Optional[int] = None

    def contains(self, age_range: str) -> bool:
        """True if the bin labelled `age_range` starts inside this bracket."""
        start, _ = parse_age_range(age_range)
        if start < self.min_inclusive:
            return False
        return self.max_inclusive is None or start <= self.max_inclusive


YOUTH = AgeBracket("youth", "Youth (0-14)", 0, 14)
WORKING = AgeBracket("working", "Working Age (15-64)", 15, 64)
ELDERLY = AgeBracket("elderly", "Elderly (65+)", 65, None)
BRACKETS = [YOUTH, WORKING, ELDERLY]


def parse_age_range(label: str) -> tuple[int, Optional[int]]:
    """Parse an age-range label into (start, end).

    "20-24" -> (20, 24), "100+" -> (100, None).
    """
    text = label.strip()
    try:
        if text.endswith("+"):
            return int(text[:-1]), None
        start, end = text.split("-")
        start_age, end_age = int(start), int(end)
    except ValueError:
        raise ValueError(f"Unrecognised age range label {label!r}") from None
    if end_age < start_age:
        raise ValueError(f"Age range {label!r} ends before it starts")
    return start_age, end_age


@lru_cache(maxsize=1)
def load_archetypes() -> dict:
    """Load archetypes.json and return a dict mapping CountryArchetype -> display data."""
    path = DATA_DIR / "archetypes.json"
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    by_code = {a["code"]: a for a in raw["archetypes"]}
    archetypes = {}
    for archetype in CountryArchetype:
        entry = dict(by_code[archetype.value])
        if entry["scale_max"] <= 0:
            raise ValueError(f"scale_max for {archetype.value} must be positive")
        entry["display_name"] = f"{entry['land']} ({entry['name']})"
        archetypes[archetype] = entry
    return archetypes


def get_archetype_names() -> list[str]:
    """Return archetype display names in enumeration order."""
    return [a["display_name"] for a in load_archetypes().values()]


def get_archetype(name: str) -> CountryArchetype:
    """Return the archetype for a given display name."""
    for archetype, entry in load_archetypes().items():
        if entry["display_name"] == name:
            return archetype
    raise KeyError(name)


def scale_max(archetype: CountryArchetype) -> float:
    """Fixed axis ceiling (millions) for an archetype, constant across years."""
    return float(load_archetypes()[archetype]["scale_max"])
