from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

import config
from models.dataset import Dataset, DatasetError, DatasetFetchError

logger = logging.getLogger("anomaly_heatmap.dataset_client")


@dataclass(frozen=True)
class LoadResult:
    """Outcome of the load stage: exactly one of dataset / error is set."""

    dataset: Dataset | None = None
    error: DatasetError | None = None

    @property
    def ok(self) -> bool:
        return self.dataset is not None and self.error is None


class DatasetClient:
    """Async client for the monthly temperature anomaly JSON document."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._url = url or config.DATASET_URL
        self._timeout = (
            config.FETCH_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": config.USER_AGENT}
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def fetch_json(self) -> Any:
        """GET the dataset URL and decode the body. Raises DatasetFetchError."""
        session = await self._ensure_session()
        try:
            async with session.get(
                self._url,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as resp:
                if resp.status != 200:
                    raise DatasetFetchError(
                        f"GET {self._url} returned HTTP {resp.status}"
                    )
                # raw.githubusercontent.com serves JSON as text/plain
                return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise DatasetFetchError(f"GET {self._url} failed: {exc!r}") from exc
        except ValueError as exc:
            raise DatasetFetchError(f"GET {self._url} returned invalid JSON: {exc}") from exc

    async def fetch_dataset(self) -> Dataset:
        payload = await self.fetch_json()
        dataset = Dataset.from_json(payload)
        logger.info(
            "Dataset loaded — %d records, years %d..%d, base %.2f°C",
            len(dataset), dataset.first_year, dataset.last_year,
            dataset.base_temperature,
        )
        return dataset


async def load_dataset(client: DatasetClient) -> LoadResult:
    """Load stage of the pipeline; failures come back as a typed result."""
    try:
        return LoadResult(dataset=await client.fetch_dataset())
    except DatasetError as exc:
        return LoadResult(error=exc)
