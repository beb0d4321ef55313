"""HTTP access for remote assets."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Protocol

import requests
from requests.adapters import HTTPAdapter

from .config import DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger("catalog_site")

DEFAULT_MAX_WORKERS = 16


class Fetcher(Protocol):
    async def fetch_bytes(self, url: str) -> bytes:
        ...


class HttpFetcher:
    """Async facade over a shared ``requests.Session``.

    Requests run on a private thread pool of ``max_workers`` threads, and the
    session keeps the same number of pooled connections per host, so up to
    ``max_workers`` fetches are in flight at once. Errors, including
    non-success status codes, are raised to the caller.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: Optional[str] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.timeout = timeout
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="catalog-fetch"
        )
        self._session = requests.Session()
        adapter = HTTPAdapter(pool_maxsize=max_workers)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)
        if user_agent:
            self._session.headers["User-Agent"] = user_agent

    def _get(self, url: str) -> bytes:
        logger.debug("GET %s", url)
        resp = self._session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.content

    async def fetch_bytes(self, url: str) -> bytes:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self._get, url)

    def close(self) -> None:
        self._session.close()
        self._executor.shutdown(wait=True)

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
