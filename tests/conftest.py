from __future__ import annotations

import logging

import pytest

from wallfeed.data_manager.duckdb_client import DuckDBClient
from wallfeed.data_manager.duckdb_repository import NewsRepository
from wallfeed.services.attachment_extractor import AttachmentExtractor
from wallfeed.services.duplicate_filter_service import DuplicateFilterService
from wallfeed.services.record_builder import RecordBuilder
from wallfeed.services.repost_classifier import RepostClassifier

ZEN_URL = "https://dzen.ru/media/id/abc?utm_source=share"
ZEN_CANONICAL = "https://zen.yandex.ru/media/id/abc"


def link(url, title=None, description=None, sizes=None):
    payload = {"url": url, "title": title, "description": description}
    if sizes is not None:
        payload["photo"] = {"sizes": sizes}
    return {"type": "link", "link": payload}


def photo(*sizes):
    return {"type": "photo", "photo": {"sizes": list(sizes)}}


def video(title=None, description=None, images=()):
    return {"type": "video", "video": {"title": title, "description": description, "image": list(images)}}


def post(id=1, text="", attachments=(), copy_history=(), owner_id=-100, date=1700000000, **extra):
    return {
        "id": id,
        "owner_id": owner_id,
        "date": date,
        "text": text,
        "attachments": list(attachments),
        "copy_history": list(copy_history),
        **extra,
    }


@pytest.fixture
def logger():
    return logging.getLogger("wallfeed.tests")


@pytest.fixture
def db():
    client = DuckDBClient(":memory:")
    yield client
    client.close()


@pytest.fixture
def repo(db):
    return NewsRepository(db.conn)


@pytest.fixture
def writer(repo, logger):
    return DuplicateFilterService(repo, logger)


@pytest.fixture
def classifier():
    return RepostClassifier()


@pytest.fixture
def extractor():
    return AttachmentExtractor()


@pytest.fixture
def builder(classifier, extractor, logger):
    return RecordBuilder(classifier=classifier, extractor=extractor, logger=logger)
