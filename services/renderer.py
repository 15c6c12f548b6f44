from __future__ import annotations

import logging

from models.dataset import Dataset, EmptyDatasetError
from models.plot import MONTHS_PER_YEAR, Axis, AxisTick, Cell, Heatmap, PlotConfig
from services.interaction import format_temperature, month_name, tooltip_title
from services.scale_builder import LinearScale, ScaleSet, build_scales

logger = logging.getLogger("anomaly_heatmap.renderer")


def build_x_axis(x_scale: LinearScale, plot: PlotConfig) -> Axis:
    """Bottom axis at round years inside the x domain, labelled with the year."""
    ticks = tuple(
        AxisTick(value=year, position=x_scale(year), label=str(int(year)))
        for year in x_scale.ticks(plot.year_tick_count)
        if float(year).is_integer()
    )
    return Axis(
        id="x-axis",
        orient="bottom",
        translate=(0.0, plot.height - plot.bottom_padding),
        range=x_scale.range,
        ticks=ticks,
    )


def build_y_axis(plot: PlotConfig) -> Axis:
    """
    Left axis with one label per month.

    The axis scale is shifted by half a month ([-0.5, 11.5]) so each label
    sits in the vertical middle of its row of cells.
    """
    month_scale = LinearScale(
        domain=(-0.5, MONTHS_PER_YEAR - 0.5),
        range=(0.0, plot.inner_height),
    )
    ticks = tuple(
        AxisTick(value=index, position=month_scale(index), label=month_name(int(index)))
        for index in month_scale.ticks(MONTHS_PER_YEAR)
    )
    return Axis(
        id="y-axis",
        orient="left",
        translate=(plot.padding, plot.padding),
        range=month_scale.range,
        ticks=ticks,
    )


def render_heatmap(
    dataset: Dataset,
    plot: PlotConfig,
    scales: ScaleSet | None = None,
) -> Heatmap:
    """Bind every record to a colored cell and build both axes."""
    if not dataset.monthly_variance:
        raise EmptyDatasetError("cannot render an empty dataset")
    if scales is None:
        scales = build_scales(dataset, plot)

    base = dataset.base_temperature
    cell_height = plot.cell_height
    cells: list[Cell] = []
    for record in dataset.monthly_variance:
        temperature = record.temperature(base)
        cells.append(
            Cell(
                x=scales.x(record.year),
                y=scales.y(record.month),
                width=plot.cell_width,
                height=cell_height,
                fill=scales.color(record.variance),
                year=record.year,
                month_index=record.month - 1,
                temperature=temperature,
                variance=record.variance,
                tooltip_title=tooltip_title(record),
                tooltip_temperature=format_temperature(temperature),
            )
        )

    heatmap = Heatmap(
        plot=plot,
        base_temperature=base,
        cells=tuple(cells),
        x_axis=build_x_axis(scales.x, plot),
        y_axis=build_y_axis(plot),
    )
    logger.info(
        "Heatmap rendered — %d cells, years %d..%d",
        len(cells), dataset.first_year, dataset.last_year,
    )
    return heatmap
