# wallfeed/utils/normalizer.py
"""
Чистые функции нормализации текста и ссылок.

Ничего не знают о моделях VK: принимают строки и возвращают строки,
поэтому их одинаково используют классификатор репостов и сборщик записей.
"""
from __future__ import annotations

import re
import warnings
from fnmatch import fnmatchcase
from html import unescape
from typing import Iterable, List, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

MENTION_RE = re.compile(r"\[([^|\]]+)\|([^\]]+)\]")  # [id123|Имя] → Имя
WHITESPACE_RE = re.compile(r"\s+")
URL_RE = re.compile(r"https?://[^\s]+")
URL_TRAILING_PUNCT = ".,;:!?)»\"'"

ELLIPSIS = "..."

DEFAULT_STRIP_PARAMS = ("share_to", "utm_*", "from", "cl4url", "persist_*")
DEFAULT_MIRROR_HOSTS = {"dzen.ru": "zen.yandex.ru"}

IMAGE_TRACKING_RES = (
    (re.compile(r"&from=bu&cs=[^&]+"), ""),
    (re.compile(r"\?as=[^&]+&?"), "?"),
)
IMAGE_URL_MAX = 500

_MAX_CLEAN_PASSES = 8


# ─────────────────── text ─────────────────── #
def _clean_pass(text: str) -> str:
    text = MENTION_RE.sub(r"\2", text)
    text = text.replace("[", "").replace("]", "")
    if "<" in text:
        text = BeautifulSoup(text, "html.parser").get_text()
    text = WHITESPACE_RE.sub(" ", text)
    text = unescape(text)
    return text.strip()


def clean_text(raw: Optional[str]) -> str:
    """
    Убирает разметку упоминаний, скобки, HTML-теги и сущности,
    схлопывает пробелы. Повторяется до неподвижной точки, поэтому
    clean_text(clean_text(x)) == clean_text(x).
    """
    text = raw or ""
    for _ in range(_MAX_CLEAN_PASSES):
        cleaned = _clean_pass(text)
        if cleaned == text:
            break
        text = cleaned
    return text


def truncate(text: str, limit: int) -> str:
    """Обрезает по границе слова и добавляет многоточие."""
    if len(text) <= limit:
        return text

    cut = text[:limit]
    last_space = cut.rfind(" ")
    if last_space > 0:
        cut = cut[:last_space]
    return cut.rstrip() + ELLIPSIS


def extract_urls(text: Optional[str]) -> List[str]:
    """Ссылки из текста поста, без хвостовой пунктуации предложения."""
    urls = (u.rstrip(URL_TRAILING_PUNCT) for u in URL_RE.findall(text or ""))
    return [u for u in urls if URL_RE.fullmatch(u)]


# ─────────────────── urls ─────────────────── #
def _is_stripped_param(name: str, patterns: Iterable[str]) -> bool:
    name = name.lower()
    return any(fnmatchcase(name, p) for p in patterns)


def _canonical_host(netloc: str, mirror_hosts: Mapping[str, str]) -> str:
    host = netloc.lower()
    for mirror, canonical in mirror_hosts.items():
        if host == mirror or host.endswith("." + mirror):
            return host[: len(host) - len(mirror)] + canonical
    return host


def normalize_article_url(
    url: str,
    strip_params: Iterable[str] = DEFAULT_STRIP_PARAMS,
    mirror_hosts: Mapping[str, str] = DEFAULT_MIRROR_HOSTS,
) -> str:
    """
    Канонический вид ссылки на статью: без трекинговых параметров,
    зеркальный хост заменён на основной, без хвостовых / ? &.
    """
    strip_params = tuple(strip_params)
    parts = urlsplit(url.strip())

    query = "&".join(
        pair
        for pair in parts.query.split("&")
        if pair and not _is_stripped_param(pair.split("=", 1)[0], strip_params)
    )
    netloc = _canonical_host(parts.netloc, mirror_hosts)

    url = urlunsplit((parts.scheme.lower(), netloc, parts.path, query, "")).rstrip("/?&")
    # пустой или "/"-фрагмент отбрасываем вместе с "#"
    fragment = parts.fragment.rstrip("/?&")
    return f"{url}#{fragment}" if fragment else url


def clean_image_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None

    for pattern, repl in IMAGE_TRACKING_RES:
        url = pattern.sub(repl, url)
    url = url.rstrip("?")

    # слишком длинные ссылки VK режем до scheme://host/path
    if len(url) > IMAGE_URL_MAX:
        parts = urlsplit(url)
        return f"{parts.scheme or 'https'}://{parts.netloc}{parts.path}"
    return url
