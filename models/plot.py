from __future__ import annotations

from dataclasses import dataclass

import matplotlib

import config

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class PlotConfig:
    """Geometry of the drawing surface; passed explicitly to every stage."""

    width: float = config.PLOT_WIDTH
    height: float = config.PLOT_HEIGHT
    padding: float = config.PLOT_PADDING
    bottom_padding: float = config.PLOT_BOTTOM_PADDING
    cell_width: float = config.CELL_WIDTH
    legend_cell_size: float = config.LEGEND_CELL_SIZE
    legend_buckets: int = config.LEGEND_BUCKETS
    tooltip_offset: float = config.TOOLTIP_OFFSET_PX
    year_tick_count: int = config.YEAR_TICK_COUNT
    color_scheme: str = config.COLOR_SCHEME

    def __post_init__(self) -> None:
        if self.inner_height <= 0:
            raise ValueError(
                f"plot height {self.height} leaves no room for padding "
                f"{self.padding} + bottom padding {self.bottom_padding}"
            )
        if self.width <= 2 * self.padding:
            raise ValueError(f"plot width {self.width} leaves no room for padding {self.padding}")
        if self.legend_buckets < 1:
            raise ValueError("legend needs at least one bucket")
        if self.color_scheme not in matplotlib.colormaps:
            raise ValueError(f"unknown matplotlib colormap {self.color_scheme!r}")

    @property
    def inner_height(self) -> float:
        return self.height - self.padding - self.bottom_padding

    @property
    def cell_height(self) -> float:
        return self.inner_height / MONTHS_PER_YEAR

    @property
    def view_box(self) -> str:
        return f"0 0 {self.width:g} {self.height:g}"


@dataclass(frozen=True)
class Cell:
    """One drawable heatmap rectangle bound to an AnomalyRecord."""

    x: float
    y: float
    width: float
    height: float
    fill: str
    year: int
    month_index: int  # zero-based, January = 0
    temperature: float  # base + variance
    variance: float
    tooltip_title: str
    tooltip_temperature: str


@dataclass(frozen=True)
class AxisTick:
    value: float
    position: float  # px along the axis, in the axis group's coordinates
    label: str


@dataclass(frozen=True)
class Axis:
    """A tick axis drawn inside a translated <g> group."""

    id: str
    orient: str  # "bottom" or "left"
    translate: tuple[float, float]
    range: tuple[float, float]
    ticks: tuple[AxisTick, ...]


@dataclass(frozen=True)
class LegendBucket:
    threshold_value: float
    color: str
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Legend:
    buckets: tuple[LegendBucket, ...]
    cell_size: float
    step: float
    axis: Axis


@dataclass(frozen=True)
class Heatmap:
    """Everything the renderer produced for one dataset."""

    plot: PlotConfig
    base_temperature: float
    cells: tuple[Cell, ...]
    x_axis: Axis
    y_axis: Axis


@dataclass(frozen=True)
class TooltipState:
    """Floating label state after a pointer event."""

    visible: bool
    title: str = ""
    temperature: str = ""
    left: float = 0.0
    top: float = 0.0
    year: int | None = None
