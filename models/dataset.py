"""
Monthly temperature anomaly dataset.

The source delivers ``{baseTemperature, monthlyVariance: [{year, month,
variance}, ...]}`` ordered by year then month.  Records are immutable once
parsed; the first and last records define the year domain of the plot.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np


class DatasetError(Exception):
    """Base class for everything that can go wrong producing a Dataset."""


class DatasetFetchError(DatasetError):
    """Network, HTTP status or JSON decoding failure."""


class EmptyDatasetError(DatasetError, ValueError):
    """The dataset has no monthly records, so no scale domain exists."""


class MalformedRecordError(DatasetError, ValueError):
    """A record or top-level field is missing or not usable."""


@dataclass(frozen=True)
class AnomalyRecord:
    """One (year, month) temperature deviation from the base temperature."""

    year: int
    month: int  # 1-12
    variance: float  # degrees C relative to Dataset.base_temperature

    def temperature(self, base: float) -> float:
        return base + self.variance


def _number(value: Any, field: str, where: str) -> float:
    # bool is an int subclass; JSON true/false is never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRecordError(f"{where}: field '{field}' is not a number ({value!r})")
    if not math.isfinite(value):
        raise MalformedRecordError(f"{where}: field '{field}' is not finite ({value!r})")
    return float(value)


def _integer(value: Any, field: str, where: str) -> int:
    number = _number(value, field, where)
    if not number.is_integer():
        raise MalformedRecordError(f"{where}: field '{field}' is not an integer ({value!r})")
    return int(number)


@dataclass(frozen=True)
class Dataset:
    """Base temperature plus the ordered monthly anomaly records."""

    base_temperature: float
    monthly_variance: tuple[AnomalyRecord, ...]

    def __post_init__(self) -> None:
        if not self.monthly_variance:
            raise EmptyDatasetError(
                "dataset contains no monthly records; cannot derive scale domains"
            )

    @classmethod
    def from_json(cls, payload: Any) -> Dataset:
        """Validate a decoded JSON payload and build a Dataset from it."""
        if not isinstance(payload, dict):
            raise MalformedRecordError(
                f"dataset: expected a JSON object, got {type(payload).__name__}"
            )
        if "baseTemperature" not in payload:
            raise MalformedRecordError("dataset: missing field 'baseTemperature'")
        base = _number(payload["baseTemperature"], "baseTemperature", "dataset")

        raw_records = payload.get("monthlyVariance")
        if raw_records is None:
            raise MalformedRecordError("dataset: missing field 'monthlyVariance'")
        if not isinstance(raw_records, list):
            raise MalformedRecordError("dataset: field 'monthlyVariance' is not a list")
        if not raw_records:
            raise EmptyDatasetError("dataset: 'monthlyVariance' is empty")

        records: list[AnomalyRecord] = []
        for index, raw in enumerate(raw_records):
            where = f"record {index}"
            if not isinstance(raw, dict):
                raise MalformedRecordError(f"{where}: expected an object, got {raw!r}")
            for field in ("year", "month", "variance"):
                if field not in raw:
                    raise MalformedRecordError(f"{where}: missing field '{field}'")
            month = _integer(raw["month"], "month", where)
            if not 1 <= month <= 12:
                raise MalformedRecordError(f"{where}: month {month} outside 1-12")
            records.append(
                AnomalyRecord(
                    year=_integer(raw["year"], "year", where),
                    month=month,
                    variance=_number(raw["variance"], "variance", where),
                )
            )

        return cls(base_temperature=base, monthly_variance=tuple(records))

    @property
    def first_year(self) -> int:
        return self.monthly_variance[0].year

    @property
    def last_year(self) -> int:
        return self.monthly_variance[-1].year

    @property
    def variances(self) -> np.ndarray:
        return np.fromiter(
            (r.variance for r in self.monthly_variance),
            dtype=np.float64,
            count=len(self.monthly_variance),
        )

    @property
    def min_variance(self) -> float:
        return float(np.min(self.variances))

    @property
    def max_variance(self) -> float:
        return float(np.max(self.variances))

    def __len__(self) -> int:
        return len(self.monthly_variance)
