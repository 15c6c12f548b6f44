#!/usr/bin/env python3
"""
Anomaly Heatmap — monthly global temperature anomalies as an SVG heatmap.

Fetches the anomaly dataset once, builds year/month/color scales, and writes
a standalone SVG plus an HTML page with hover tooltips and a color legend.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass

import aiohttp

import config
from models.dataset import Dataset
from models.plot import Heatmap, Legend, PlotConfig
from services.legend_builder import build_legend
from services.logger import log_render
from services.renderer import render_heatmap
from services.scale_builder import build_scales
from utils.dataset_client import DatasetClient, load_dataset
from utils.svg import render_page, render_svg, write_text

# ── Logging setup ─────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("anomaly_heatmap")


@dataclass(frozen=True)
class RenderOutput:
    heatmap: Heatmap
    legend: Legend
    svg: str
    page: str


def _print_banner(plot: PlotConfig) -> None:
    print(
        f"\nAnomaly Heatmap v1.0\n"
        f"  source:  {config.DATASET_URL}\n"
        f"  surface: {plot.view_box}\n"
    )


def render(dataset: Dataset, plot: PlotConfig) -> RenderOutput:
    """Render stage: pure, synchronous, only ever called with a loaded dataset."""
    scales = build_scales(dataset, plot)
    heatmap = render_heatmap(dataset, plot, scales)
    legend = build_legend(dataset, plot)
    return RenderOutput(
        heatmap=heatmap,
        legend=legend,
        svg=render_svg(heatmap, legend),
        page=render_page(heatmap, legend),
    )


async def main(
    plot: PlotConfig | None = None,
    svg_path: str = config.OUTPUT_SVG_PATH,
    html_path: str = config.OUTPUT_HTML_PATH,
    session: aiohttp.ClientSession | None = None,
) -> int:
    plot = plot or PlotConfig()
    _print_banner(plot)

    client = DatasetClient(session=session)
    try:
        result = await load_dataset(client)
    finally:
        await client.close()

    if not result.ok:
        logger.error("rendering failed: %s", result.error)
        return 1

    output = render(result.dataset, plot)
    svg_file = write_text(svg_path, output.svg)
    html_file = write_text(html_path, output.page)
    log_render(
        result.dataset,
        output.heatmap,
        output.legend,
        outputs={"svg": str(svg_file), "html": str(html_file)},
    )
    logger.info("Done — %d cells, legend %s", len(output.heatmap.cells),
                " / ".join(t.label for t in output.legend.axis.ticks))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nAborted via Ctrl+C")
        sys.exit(130)
