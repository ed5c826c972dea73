# wallfeed/services/ingestion_service.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from wallfeed.data_manager.models import RawPost
from wallfeed.services.duplicate_filter_service import DuplicateFilterService, WriteStatus
from wallfeed.services.error_mapper import VkErrorMapper
from wallfeed.services.errors import FetchError, PostSkipped, VkApiError
from wallfeed.services.notify_service import AdminNotifier
from wallfeed.services.record_builder import RecordBuilder

TOKEN_ALERT = "Необходимо обновить VK токен"


@dataclass
class RunReport:
    fetched: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    manual_skipped: int = 0
    failed: int = 0
    aborted: bool = False
    error: Optional[str] = None
    error_code: Optional[int] = None
    skip_reasons: List[Tuple[int, str]] = field(default_factory=list)


class IngestionService:
    """
    Один проход по странице стены:
    fetch → для каждого поста build → save, строго по очереди.

    Фатальны только ошибки транспорта и конверт ошибки API.
    Всё, что случилось с отдельным постом, ловится и логируется.
    """

    def __init__(
        self,
        *,
        fetcher,
        builder: RecordBuilder,
        writer: DuplicateFilterService,
        error_mapper: VkErrorMapper,
        notifier: AdminNotifier,
        logger: logging.Logger,
        post_delay: float = 1.0,
        save_snapshot: Optional[Callable[[dict], object]] = None,
        sleep=asyncio.sleep,
    ):
        self.fetcher = fetcher
        self.builder = builder
        self.writer = writer
        self.error_mapper = error_mapper
        self.notifier = notifier
        self.logger = logger
        self.post_delay = post_delay
        self.save_snapshot = save_snapshot
        self.sleep = sleep

    # ───────────────────────── helpers ───────────────────────── #
    def _snapshot(self, page: dict) -> None:
        if self.save_snapshot is None:
            return
        try:
            self.save_snapshot(page)
        except Exception as e:
            self.logger.error("Failed to save debug data: %s", e)

    async def _handle_api_error(self, error: VkApiError, report: RunReport) -> None:
        self.logger.error(str(error))
        report.aborted = True
        report.error = error.message
        report.error_code = error.code
        if self.error_mapper.needs_admin(error):
            try:
                await self.notifier.notify(TOKEN_ALERT)
            except Exception as e:
                self.logger.error("Admin notification failed: %s", e)

    def _count(self, status: WriteStatus, report: RunReport) -> None:
        if status is WriteStatus.CREATED:
            report.created += 1
        elif status is WriteStatus.UPDATED:
            report.updated += 1
        elif status is WriteStatus.SKIPPED_MANUAL:
            report.manual_skipped += 1
        else:
            report.failed += 1

    def process_post(self, raw: dict, report: RunReport) -> None:
        post = RawPost.model_validate(raw)
        try:
            record = self.builder.build(post)
        except PostSkipped as e:
            self.logger.info("  Skipping post %s: %s", post.id, e.reason)
            report.skipped += 1
            report.skip_reasons.append((post.id, e.reason))
            return
        self._count(self.writer.save(record), report)

    # ───────────────────────── core ──────────────────────────── #
    async def run(self) -> RunReport:
        report = RunReport()
        self.logger.info("Fetching VK posts...")

        try:
            page = await self.fetcher.fetch()
        except FetchError as e:
            self.logger.error("VK fetch error: %s", e)
            report.aborted = True
            report.error = str(e)
            return report

        self._snapshot(page)

        if not isinstance(page, dict) or not isinstance(page.get("error", {}), dict):
            self.logger.error("Unexpected VK response: %.200r", page)
            report.aborted = True
            report.error = "Unexpected VK response"
            return report

        if "error" in page:
            await self._handle_api_error(self.error_mapper.to_error(page["error"]), report)
            return report

        response = page.get("response")
        items = (response.get("items") if isinstance(response, dict) else None) or []
        if not isinstance(items, list):
            items = []
        report.fetched = len(items)
        self.logger.info("Found %d posts in VK", len(items))

        for index, raw in enumerate(items):
            if index > 0:
                await self.sleep(self.post_delay)

            post_id = raw.get("id", "unknown") if isinstance(raw, dict) else "unknown"
            self.logger.info("Processing post #%d ID: %s", index + 1, post_id)
            try:
                self.process_post(raw, report)
            except ValidationError as e:
                self.logger.error("Malformed post %s: %s", post_id, e)
                report.failed += 1
            except Exception as e:
                self.logger.error("Failed to process post %s: %s", post_id, e, exc_info=True)
                report.failed += 1

        self.logger.info(
            "Done: created=%d updated=%d skipped=%d manual=%d failed=%d",
            report.created, report.updated, report.skipped, report.manual_skipped, report.failed,
        )
        return report
