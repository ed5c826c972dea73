# wallfeed/services/duplicate_filter_service.py
from __future__ import annotations

import logging
from enum import Enum

import duckdb

from wallfeed.data_manager.duckdb_repository import NewsRepository, UpsertStatus
from wallfeed.data_manager.models import NewsRecord


class WriteStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED_MANUAL = "skipped_manual"
    FAILED = "failed"


class DuplicateFilterService:
    """
    Дедупликация по (external_id, source): новая запись создаётся,
    известная — перезаписывается целиком, ручная — пропускается.
    Ошибка БД не роняет прогон: пишем в лог и возвращаем FAILED.
    """

    def __init__(self, repo: NewsRepository, logger: logging.Logger):
        self.repo = repo
        self.logger = logger

    def save(self, record: NewsRecord) -> WriteStatus:
        try:
            status = self.repo.upsert(record)
        except duckdb.Error as e:
            self.logger.error(
                "Failed to save %s content %s: %s", record.source, record.external_id, e
            )
            return WriteStatus.FAILED

        if status is UpsertStatus.SKIPPED_MANUAL:
            self.logger.info(
                "Skipping manually edited %s record: %s", record.source, record.external_id
            )
        else:
            self.logger.info("Saved %s record %s: %s", record.source, record.external_id, record.title)
        return WriteStatus(status.value)
