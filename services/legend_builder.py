"""
Color legend — discrete swatches spanning the variance range.

The legend re-derives min/max variance from the dataset and builds its own
color scale with the same palette and the same reversed domain as the
heatmap, so a swatch and a cell with equal variance always share a color.
Tick labels are absolute temperatures (base + variance).
"""
from __future__ import annotations

import logging

from models.dataset import Dataset
from models.plot import Axis, AxisTick, Legend, LegendBucket, PlotConfig
from services.scale_builder import LinearScale, variance_color_scale

logger = logging.getLogger("anomaly_heatmap.legend")


def bucket_step(min_variance: float, max_variance: float, buckets: int) -> float:
    """Width of one legend bucket; zero when all variances are equal."""
    return (max_variance - min_variance) / buckets


def bucket_thresholds(min_variance: float, max_variance: float, buckets: int) -> list[float]:
    """Starting value of each bucket: min, min + step, ... (*buckets* values)."""
    step = bucket_step(min_variance, max_variance, buckets)
    return [min_variance + i * step for i in range(buckets)]


def boundary_values(min_variance: float, max_variance: float, buckets: int) -> list[float]:
    """Every bucket edge, *buckets* + 1 values from min to max inclusive."""
    step = bucket_step(min_variance, max_variance, buckets)
    values = [min_variance + i * step for i in range(buckets)]
    values.append(max_variance)
    return values


def build_legend(dataset: Dataset, plot: PlotConfig) -> Legend:
    """Build the swatches and the absolute-temperature tick axis below them."""
    lo = dataset.min_variance
    hi = dataset.max_variance
    count = plot.legend_buckets
    size = plot.legend_cell_size
    color = variance_color_scale(dataset, plot.color_scheme)

    buckets = tuple(
        LegendBucket(
            threshold_value=value,
            color=color(value),
            x=plot.padding + size * index,
            y=plot.height - plot.padding,
        )
        for index, value in enumerate(bucket_thresholds(lo, hi, count))
    )

    # same reversed domain as the color scale, mapped onto the swatch strip
    axis_scale = LinearScale(domain=(hi, lo), range=(size * count, 0.0))
    base = dataset.base_temperature
    ticks = tuple(
        AxisTick(value=value, position=axis_scale(value), label=f"{base + value:.1f}")
        for value in boundary_values(lo, hi, count)
    )
    axis = Axis(
        id="legend-x-axis",
        orient="bottom",
        translate=(plot.padding, plot.height - plot.padding + size),
        range=(0.0, size * count),
        ticks=ticks,
    )

    step = bucket_step(lo, hi, count)
    if step == 0:
        logger.warning("All variances equal (%.3f) — legend collapses to one color", lo)
    return Legend(buckets=buckets, cell_size=size, step=step, axis=axis)
