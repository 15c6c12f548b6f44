"""
Scale construction — year → x pixel, month → y pixel, variance → color.

All scales are immutable after construction and safe to call with any value.
Linear scales extrapolate outside their domain; the color scale clamps to the
palette extremes.  A collapsed domain (both ends equal) maps every input to
the middle of the range instead of dividing by zero.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import matplotlib
from matplotlib.colors import to_hex
import numpy as np

from models.dataset import Dataset, EmptyDatasetError
from models.plot import MONTHS_PER_YEAR, PlotConfig

logger = logging.getLogger("anomaly_heatmap.scales")

# Step thresholds for "nice" tick spacing (1, 2, 5 x 10^n)
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int) -> float:
    """
    Return the tick spacing for roughly *count* ticks across [start, stop].

    Positive results are the step itself; negative results are the negated
    inverse of a sub-unit step (-10 means 0.1) so callers can avoid
    accumulating float error on fractional steps.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def nice_ticks(start: float, stop: float, count: int) -> list[float]:
    """Round tick values inside [start, stop], about *count* of them."""
    if count <= 0:
        return []
    if start == stop:
        return [float(start)]
    reverse = stop < start
    if reverse:
        start, stop = stop, start

    increment = tick_increment(start, stop, count)
    if increment == 0 or not math.isfinite(increment):
        return []
    if increment > 0:
        r0 = math.ceil(start / increment)
        r1 = math.floor(stop / increment)
        values = [(r0 + i) * increment for i in range(r1 - r0 + 1)]
    else:
        inverse = -increment
        r0 = math.ceil(start * inverse)
        r1 = math.floor(stop * inverse)
        values = [(r0 + i) / inverse for i in range(r1 - r0 + 1)]

    if reverse:
        values.reverse()
    return [float(v) for v in values]


@dataclass(frozen=True)
class LinearScale:
    """Continuous linear mapping from a two-point domain to a two-point range."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def normalize(self, value: float) -> float:
        d0, d1 = self.domain
        span = d1 - d0
        if span == 0:
            return 0.5
        return (value - d0) / span

    def __call__(self, value: float) -> float:
        r0, r1 = self.range
        return r0 + self.normalize(value) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        r0, r1 = self.range
        d0, d1 = self.domain
        if r1 == r0:
            return (d0 + d1) / 2
        return d0 + (pixel - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = 10) -> list[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)

    def with_range(self, new_range: tuple[float, float]) -> LinearScale:
        return LinearScale(domain=self.domain, range=new_range)


@dataclass(frozen=True)
class SequentialColorScale:
    """
    Maps a numeric domain onto a matplotlib colormap, returning ``#rrggbb``.

    ``domain[0]`` lands on the colormap's start and ``domain[1]`` on its end,
    so a reversed domain ``(max, min)`` puts the highest value on the first
    palette color.
    """

    domain: tuple[float, float]
    scheme: str = "RdYlBu"
    _cmap: Any = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.scheme not in matplotlib.colormaps:
            raise ValueError(f"unknown matplotlib colormap {self.scheme!r}")
        # the registry hands out a copy per lookup
        object.__setattr__(self, "_cmap", matplotlib.colormaps[self.scheme])

    def normalize(self, value: float) -> float:
        d0, d1 = self.domain
        span = d1 - d0
        if span == 0:
            return 0.5
        return float(np.clip((value - d0) / span, 0.0, 1.0))

    def __call__(self, value: float) -> str:
        return to_hex(self._cmap(self.normalize(value)), keep_alpha=False)


@dataclass(frozen=True)
class ScaleSet:
    x: LinearScale
    y: LinearScale
    color: SequentialColorScale


def variance_color_scale(dataset: Dataset, scheme: str) -> SequentialColorScale:
    """Hot-at-the-top diverging scale: domain runs max → min variance."""
    return SequentialColorScale(
        domain=(dataset.max_variance, dataset.min_variance),
        scheme=scheme,
    )


def build_scales(dataset: Dataset, plot: PlotConfig) -> ScaleSet:
    """Derive the three scales for *dataset* on the *plot* surface."""
    if not dataset.monthly_variance:
        raise EmptyDatasetError("cannot build scales for an empty dataset")

    # last year + 1 so the final year's cells get the same width as the rest
    x = LinearScale(
        domain=(dataset.first_year, dataset.last_year + 1),
        range=(plot.padding, plot.width - plot.padding),
    )
    # month 13 is a sentinel so December has a full cell height
    y = LinearScale(
        domain=(1, MONTHS_PER_YEAR + 1),
        range=(plot.padding, plot.height - plot.bottom_padding),
    )
    color = variance_color_scale(dataset, plot.color_scheme)

    logger.debug(
        "Scales built — years %d..%d, variance %.3f..%.3f",
        dataset.first_year, dataset.last_year,
        dataset.min_variance, dataset.max_variance,
    )
    return ScaleSet(x=x, y=y, color=color)
