# wallfeed/services/repost_classifier.py
from __future__ import annotations

import re
from typing import Iterable, Iterator, Mapping, Optional

from wallfeed.data_manager.models import LinkAttachment, RawPost
from wallfeed.utils.normalizer import (
    DEFAULT_MIRROR_HOSTS,
    DEFAULT_STRIP_PARAMS,
    extract_urls,
    normalize_article_url,
)

DEFAULT_ARTICLE_HOSTS = (r"zen\.yandex", r"dzen\.ru")


class RepostClassifier:
    """
    Определяет, ведёт ли пост (или кто-то в его цепочке репостов)
    на внешнюю статью, и находит пост, который эту статью несёт.

    Обход copy_history ограничен max_depth: глубже — считаем, что совпадения нет.
    """

    def __init__(
        self,
        article_hosts: Iterable[str] = DEFAULT_ARTICLE_HOSTS,
        *,
        mirror_hosts: Mapping[str, str] = DEFAULT_MIRROR_HOSTS,
        strip_params: Iterable[str] = DEFAULT_STRIP_PARAMS,
        max_depth: int = 16,
    ):
        hosts = tuple(article_hosts)
        if not hosts:
            raise ValueError("article_hosts must not be empty")
        self.pattern = re.compile("(" + "|".join(hosts) + ")", re.IGNORECASE)
        self.mirror_hosts = dict(mirror_hosts)
        self.strip_params = tuple(strip_params)
        self.max_depth = max_depth

    # ───────────────────────── helpers ───────────────────────── #
    def matches(self, url: str) -> bool:
        return bool(self.pattern.search(url))

    def _own_urls(self, post: RawPost) -> Iterator[str]:
        """Ссылки самого поста: сначала вложения, потом текст."""
        for attachment in post.attachments:
            if isinstance(attachment, LinkAttachment) and attachment.link.url:
                yield attachment.link.url
        yield from extract_urls(post.text)

    def _first_own_match(self, post: RawPost) -> Optional[str]:
        return next((u for u in self._own_urls(post) if self.matches(u)), None)

    def normalize(self, url: str) -> str:
        return normalize_article_url(url, self.strip_params, self.mirror_hosts)

    # ───────────────────────── core ──────────────────────────── #
    def is_direct_match(self, post: RawPost) -> bool:
        return self._first_own_match(post) is not None

    def is_external_article(self, post: RawPost, depth: int = 0) -> bool:
        if depth > self.max_depth:
            return False
        if self.is_direct_match(post):
            return True
        return any(
            self.is_external_article(repost, depth + 1) for repost in post.copy_history
        )

    def resolve_source_post(self, post: RawPost) -> RawPost:
        if self.is_direct_match(post):
            return post
        for repost in post.copy_history:
            if self.is_external_article(repost, 1):
                return repost
        return post

    def resolve_article_url(self, post: RawPost, depth: int = 0) -> Optional[str]:
        """DFS: вложения → текст → каждая запись copy_history по порядку."""
        if depth > self.max_depth:
            return None

        url = self._first_own_match(post)
        if url:
            return self.normalize(url)

        for repost in post.copy_history:
            url = self.resolve_article_url(repost, depth + 1)
            if url:
                return url
        return None
