from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from models.dataset import Dataset
from models.plot import Heatmap, Legend

logger = logging.getLogger("anomaly_heatmap.logger")

_BASE_DIR = Path(__file__).resolve().parent.parent / "data" / "logs"


def _ensure_dir(subdir: str, base_dir: Path | None = None) -> Path:
    path = (base_dir or _BASE_DIR) / subdir
    path.mkdir(parents=True, exist_ok=True)
    return path


def _today_str() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def _append_jsonl(subdir: str, record: dict[str, Any], base_dir: Path | None = None) -> Path | None:
    """Append a single JSON record to today's JSONL file in the given subdirectory."""
    try:
        dir_path = _ensure_dir(subdir, base_dir)
        filepath = dir_path / f"{_today_str()}.jsonl"
        with open(filepath, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except OSError as exc:
        logger.error("Failed to write log to %s/%s: %s", base_dir or _BASE_DIR, subdir, exc)
        return None
    return filepath


def log_render(
    dataset: Dataset,
    heatmap: Heatmap,
    legend: Legend,
    outputs: dict[str, str] | None = None,
    timestamp: datetime | None = None,
    base_dir: Path | None = None,
) -> Path | None:
    """Log a render summary to data/logs/renders/."""
    ts = timestamp or datetime.now(timezone.utc)
    record = {
        "timestamp": ts.isoformat(),
        "records": len(dataset),
        "first_year": dataset.first_year,
        "last_year": dataset.last_year,
        "base_temperature": dataset.base_temperature,
        "min_variance": round(dataset.min_variance, 4),
        "max_variance": round(dataset.max_variance, 4),
        "cells": len(heatmap.cells),
        "x_ticks": [t.label for t in heatmap.x_axis.ticks],
        "legend_step": round(legend.step, 4),
        "legend_labels": [t.label for t in legend.axis.ticks],
        "outputs": outputs or {},
    }
    return _append_jsonl("renders", record, base_dir)
