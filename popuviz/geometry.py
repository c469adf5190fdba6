"""Pixel layout of a back-to-back population pyramid.

Male bars grow leftward from their axis and female bars rightward, separated
by a central gutter for the age labels. Bar lengths scale against a fixed
ceiling (`max_val`) rather than the snapshot maximum, so the same population
maps to the same length in every year.
"""

from dataclasses import dataclass, field

import numpy as np

from popuviz.model import AgeBin

TICK_FRACTIONS = (0.0, 0.25, 0.5, 0.75, 1.0)


@dataclass(frozen=True)
class Margin:
    top: float = 20.0
    right: float = 40.0
    bottom: float = 40.0
    left: float = 40.0


@dataclass(frozen=True)
class BarGeometry:
    age_range: str
    male_bar_length: float
    female_bar_length: float
    y_top: float
    y_height: float

    @property
    def y_center(self) -> float:
        return self.y_top + self.y_height / 2


@dataclass(frozen=True)
class AxisTick:
    value: float
    label: str
    male_x: float
    female_x: float


@dataclass
class PyramidLayout:
    width: float
    height: float
    max_val: float
    half_width: float
    bar_height: float
    male_axis_x: float
    female_axis_x: float
    bars: list[BarGeometry] = field(default_factory=list)
    ticks: list[AxisTick] = field(default_factory=list)

    @property
    def center_x(self) -> float:
        return self.width / 2


def scale(value: float, max_val: float, half_width: float) -> float:
    """Linear bar length for `value` against the shared ceiling."""
    return value / max_val * half_width


def axis_ticks(max_val: float, half_width: float, male_axis_x: float, female_axis_x: float) -> list[AxisTick]:
    """Reference ticks at fixed fractions of max_val, mirrored on both sides."""
    ticks = []
    for value in np.array(TICK_FRACTIONS) * max_val:
        offset = scale(value, max_val, half_width)
        ticks.append(AxisTick(
            value=float(value),
            label=f"{value:.0f}M",
            male_x=male_axis_x - offset,
            female_x=female_axis_x + offset,
        ))
    return ticks


def layout(
    bins: list[AgeBin],
    max_val: float,
    width: float = 800.0,
    height: float = 500.0,
    margin: Margin = Margin(),
    gutter: float = 60.0,
    inset: float = 1.0,
) -> PyramidLayout:
    """Compute bar extents for a snapshot.

    Args:
        bins: Age bins, youngest first. Bin 0 is placed at the top.
        max_val: Axis ceiling in millions, fixed per archetype by the caller.
        width, height: Canvas size in pixels.
        margin: Space around the plotting area.
        gutter: Central gap reserved for age labels.
        inset: Vertical gap on each side of a bar.

    Returns:
        PyramidLayout with one BarGeometry per bin, in bin order.
    """
    if max_val <= 0:
        raise ValueError(f"max_val must be positive (got {max_val})")
    if not bins:
        raise ValueError("Cannot lay out an empty snapshot")

    half_width = (width - margin.left - margin.right - gutter) / 2
    bar_height = (height - margin.top - margin.bottom) / len(bins)
    if half_width <= 0 or bar_height <= 2 * inset:
        raise ValueError(f"Canvas {width}x{height} is too small for {len(bins)} bins")

    male_axis_x = margin.left + half_width
    female_axis_x = width - margin.right - half_width

    bars = [
        BarGeometry(
            age_range=b.age_range,
            male_bar_length=scale(b.male, max_val, half_width),
            female_bar_length=scale(b.female, max_val, half_width),
            y_top=margin.top + i * bar_height + inset,
            y_height=bar_height - 2 * inset,
        )
        for i, b in enumerate(bins)
    ]

    return PyramidLayout(
        width=width,
        height=height,
        max_val=max_val,
        half_width=half_width,
        bar_height=bar_height,
        male_axis_x=male_axis_x,
        female_axis_x=female_axis_x,
        bars=bars,
        ticks=axis_ticks(max_val, half_width, male_axis_x, female_axis_x),
    )
