# wallfeed/services/record_builder.py
from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from wallfeed.data_manager.models import NewsRecord, RawPost
from wallfeed.services.attachment_extractor import AttachmentExtractor
from wallfeed.services.errors import PostSkipped
from wallfeed.services.repost_classifier import RepostClassifier
from wallfeed.utils.normalizer import clean_image_url, clean_text, truncate


def article_external_id(url: str) -> str:
    """md5 нормализованной ссылки → стабильный ключ записи из Дзена."""
    return "zen_" + hashlib.md5(url.encode("utf-8")).hexdigest()


class RecordBuilder:
    """
    Собирает NewsRecord из поста VK.

    1. Репост статьи Дзена → source="zen", ссылка на статью, id = md5(ссылки).
    2. Обычный пост → source="vk", ссылка на стену, id = id поста.
    Пост без полезного содержимого → PostSkipped.
    """

    EXCERPT_MAX = 200

    def __init__(
        self,
        *,
        classifier: RepostClassifier,
        extractor: AttachmentExtractor,
        logger: logging.Logger,
        tz_name: str = "UTC",
    ):
        self.classifier = classifier
        self.extractor = extractor
        self.logger = logger
        self.tz = timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)

    # ───────────────────────── helpers ───────────────────────── #
    def _date(self, ts: int) -> datetime:
        return datetime.fromtimestamp(ts, self.tz).replace(tzinfo=None)

    def _record(self, *, source, text, title, post, image_post, link, external_id):
        return NewsRecord(
            source=source,
            title=title,
            content=text,
            excerpt=truncate(text, self.EXCERPT_MAX),
            image=clean_image_url(self.extractor.best_image(image_post)),
            link=link,
            date=self._date(post.date),
            external_id=external_id,
            is_manual=False,
        )

    # ───────────────────────── core ──────────────────────────── #
    def build(self, post: RawPost) -> NewsRecord:
        if self.classifier.is_external_article(post):
            return self.build_article(post)
        return self.build_native(post)

    def build_article(self, post: RawPost) -> NewsRecord:
        source_post = self.classifier.resolve_source_post(post)
        self.logger.debug("Пост %s: контент Дзена в посте %s", post.id, source_post.id)

        text = clean_text(source_post.text) or self.extractor.text_from_link(source_post)
        if not text:
            raise PostSkipped("empty Zen content")

        url = self.classifier.resolve_article_url(source_post)
        if not url:
            self.logger.warning(
                "Zen URL not found for post %s, using VK link", source_post.id
            )
            url = post.permalink

        return self._record(
            source="zen",
            text=text,
            title=self.extractor.title(text, source_post),
            post=post,
            image_post=source_post,
            link=url,
            external_id=article_external_id(url),
        )

    def build_native(self, post: RawPost) -> NewsRecord:
        if post.marked_as_ads:
            raise PostSkipped("ad post")

        text = clean_text(post.text) or self.extractor.text_from_attachments(post)
        if not text:
            raise PostSkipped("empty post")

        return self._record(
            source="vk",
            text=text,
            title=self.extractor.title(text, post),
            post=post,
            image_post=post,
            link=post.permalink,
            external_id=str(post.id),
        )
