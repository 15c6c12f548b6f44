#!/usr/bin/env python3
"""
Smoke test for the real dataset URL.

Run:  python test_live.py

Fetches global-temperature.json once, renders it, and prints a summary so
you can verify the data and the scales look sane.  Not collected as a unit
test: it needs outbound network access.
"""
from __future__ import annotations

import asyncio
import sys

import aiohttp

import config
from main import render
from models.plot import PlotConfig
from utils.dataset_client import DatasetClient, load_dataset


async def smoke_test() -> bool:
    print(f"\n{'=' * 60}")
    print(f"  Dataset Smoke Test — {config.DATASET_URL}")
    print(f"{'=' * 60}\n")

    async with aiohttp.ClientSession(
        headers={"User-Agent": config.USER_AGENT}
    ) as session:
        result = await load_dataset(DatasetClient(session=session))

    if not result.ok:
        print(f"  FAILED: {result.error}")
        return False

    dataset = result.dataset
    print(f"  records:        {len(dataset)}")
    print(f"  years:          {dataset.first_year}..{dataset.last_year}")
    print(f"  base:           {dataset.base_temperature}°C")
    print(f"  variance range: {dataset.min_variance:+.3f} .. {dataset.max_variance:+.3f}")

    output = render(dataset, PlotConfig())
    print(f"  cells:          {len(output.heatmap.cells)}")
    print(f"  x ticks:        {[t.label for t in output.heatmap.x_axis.ticks]}")
    print(f"  legend:         {[t.label for t in output.legend.axis.ticks]}")
    print(f"  svg size:       {len(output.svg):,} chars")
    return len(output.heatmap.cells) == len(dataset)


if __name__ == "__main__":
    ok = asyncio.run(smoke_test())
    sys.exit(0 if ok else 1)
