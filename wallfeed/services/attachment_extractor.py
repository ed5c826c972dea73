# wallfeed/services/attachment_extractor.py
from __future__ import annotations

from typing import List, Optional

from wallfeed.data_manager.models import (
    Attachment,
    ImageSize,
    LinkAttachment,
    OtherAttachment,
    PhotoAttachment,
    RawPost,
    VideoAttachment,
)
from wallfeed.utils.normalizer import clean_text, truncate


def image_sizes(attachment: Attachment) -> List[ImageSize]:
    """Варианты размеров превью для любого типа вложения."""
    if isinstance(attachment, VideoAttachment):
        return attachment.video.image
    if isinstance(attachment, PhotoAttachment):
        return attachment.photo.sizes
    if isinstance(attachment, LinkAttachment):
        return attachment.link.photo.sizes if attachment.link.photo else []
    if isinstance(attachment, OtherAttachment):
        return []
    raise TypeError(f"Unsupported attachment: {attachment!r}")


class AttachmentExtractor:
    """
    Выбор текста, заголовка и картинки из вложений поста.
    Вложения просматриваются по порядку, для каждого поля побеждает первое совпадение.
    """

    LINK_TITLE_MIN = 15          # короче — служебный заголовок ("Дзен", "Статья")
    SENTENCE_MIN = 20
    SENTENCE_MAX = 90
    SENTENCE_MARK_AFTER = 10
    TITLE_MAX = 100

    # ───────────────────────── text ──────────────────────────── #
    def text_from_link(self, post: RawPost) -> str:
        """Заголовок ссылки, иначе её описание."""
        for attachment in post.attachments:
            if not isinstance(attachment, LinkAttachment):
                continue
            for candidate in (attachment.link.title, attachment.link.description):
                text = clean_text(candidate)
                if text:
                    return text
        return ""

    def text_from_attachments(self, post: RawPost) -> str:
        """Для видео — описание или название, для ссылок — описание или заголовок."""
        for attachment in post.attachments:
            if isinstance(attachment, VideoAttachment):
                candidates = (attachment.video.description, attachment.video.title)
            elif isinstance(attachment, LinkAttachment):
                candidates = (attachment.link.description, attachment.link.title)
            else:
                continue
            for candidate in candidates:
                text = clean_text(candidate)
                if text:
                    return text
        return ""

    # ───────────────────────── title ─────────────────────────── #
    def link_title(self, post: RawPost) -> Optional[str]:
        for attachment in post.attachments:
            if isinstance(attachment, LinkAttachment):
                title = clean_text(attachment.link.title)
                if len(title) > self.LINK_TITLE_MIN:
                    return title
        return None

    def video_title(self, post: RawPost) -> Optional[str]:
        for attachment in post.attachments:
            if isinstance(attachment, VideoAttachment):
                title = clean_text(attachment.video.title)
                if title:
                    return title
        return None

    @classmethod
    def first_sentence(cls, text: str) -> str:
        start = cls.SENTENCE_MARK_AFTER + 1

        end = text.find(".", start)
        if end != -1:
            return text[: end + 1]

        end = text.find("\n", start)
        if end != -1:
            return text[:end]

        return text

    def title(self, text: str, post: RawPost) -> str:
        link_title = self.link_title(post)
        if link_title:
            return link_title

        sentence = self.first_sentence(text)
        if self.SENTENCE_MIN < len(sentence) < self.SENTENCE_MAX:
            return sentence

        video_title = self.video_title(post)
        if video_title:
            return video_title

        # короткое первое предложение ("Hello world.") берётся целиком
        if len(sentence) <= self.SENTENCE_MIN:
            return sentence
        return truncate(text, self.TITLE_MAX)

    # ───────────────────────── image ─────────────────────────── #
    def best_image(self, post: RawPost) -> Optional[str]:
        for attachment in post.attachments:
            sizes = image_sizes(attachment)
            if sizes:
                best = max(sizes, key=lambda s: s.width)
                return best.url or None
        return None
