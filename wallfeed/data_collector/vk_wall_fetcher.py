# wallfeed/data_collector/vk_wall_fetcher.py
"""
Забирает одну страницу стены VK (wall.get).

Повторы с экспоненциальной паузой живут только здесь: для пайплайна
fetch() — один блокирующий вызов, который либо отдаёт JSON, либо падает FetchError.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable

import aiohttp

from wallfeed.services.errors import FetchError


@dataclass
class RetryPolicy:
    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 8.0
    retry_statuses: set[int] = field(default_factory=lambda: {429, 500, 502, 503, 504})

    def delay(self, attempt: int) -> float:
        delay = min(self.max_delay_seconds, self.base_delay_seconds * (2 ** (attempt - 1)))
        # jitter, чтобы не долбить API синхронно
        return delay * random.uniform(0.7, 1.3)


class VkWallFetcher:
    def __init__(
        self,
        *,
        api_url: str,
        domain: str,
        token: str,
        api_version: str,
        count: int = 50,
        filter_mode: str = "all",
        timeout: int = 20,
        retry: RetryPolicy | None = None,
        logger: logging.Logger,
        session_factory: Callable[[], Any] = aiohttp.ClientSession,
        sleep=asyncio.sleep,
    ):
        self.api_url = api_url
        self.params = {
            "domain": domain,
            "count": count,
            "access_token": token,
            "v": api_version,
            "filter": filter_mode,
        }
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.retry = retry or RetryPolicy()
        self.logger = logger
        self.session_factory = session_factory
        self.sleep = sleep

    async def fetch(self) -> dict:
        last_error: Exception | None = None

        async with self.session_factory() as session:
            for attempt in range(1, self.retry.max_attempts + 1):
                try:
                    async with session.get(self.api_url, params=self.params, timeout=self.timeout) as resp:
                        if resp.status in self.retry.retry_statuses:
                            last_error = FetchError(f"VK API request failed: {resp.status}")
                        elif resp.status >= 400:
                            # остальные 4xx повторять бессмысленно
                            raise FetchError(f"VK API request failed: {resp.status}")
                        else:
                            return await resp.json(content_type=None)
                except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                    last_error = e

                self.logger.warning(
                    "VK request attempt %d/%d failed: %s",
                    attempt, self.retry.max_attempts, last_error,
                )
                if attempt < self.retry.max_attempts:
                    await self.sleep(self.retry.delay(attempt))

        raise FetchError(f"VK API request failed after {self.retry.max_attempts} attempts: {last_error}")
