from conftest import ZEN_CANONICAL, ZEN_URL, link, post

from wallfeed.data_manager.models import RawPost
from wallfeed.services.repost_classifier import RepostClassifier


def make(**kwargs):
    return RawPost.model_validate(post(**kwargs))


def nested(depth, leaf):
    current = leaf
    for i in range(depth):
        current = post(id=1000 + i, copy_history=[current])
    return make(**current)


class TestIsExternalArticle:
    def test_link_attachment(self, classifier):
        assert classifier.is_external_article(make(attachments=[link(ZEN_URL)]))

    def test_url_in_text(self, classifier):
        assert classifier.is_external_article(make(text="Читайте https://zen.yandex.ru/media/x"))

    def test_case_insensitive(self, classifier):
        assert classifier.is_external_article(make(attachments=[link("https://DZEN.RU/a/1")]))

    def test_plain_post(self, classifier):
        assert not classifier.is_external_article(
            make(text="Просто пост https://example.com", attachments=[link("https://example.com/a")])
        )

    def test_repost_with_empty_wrapper(self, classifier):
        inner = post(id=7, text="Статья", attachments=[link(ZEN_URL)])
        assert classifier.is_external_article(make(id=1, copy_history=[inner]))

    def test_custom_hosts(self):
        classifier = RepostClassifier([r"habr\.com"])
        assert classifier.is_external_article(make(text="https://habr.com/ru/articles/1/"))
        assert not classifier.is_external_article(make(attachments=[link(ZEN_URL)]))

    def test_depth_limit_fails_safe(self):
        classifier = RepostClassifier(max_depth=3)
        leaf = post(id=1, attachments=[link(ZEN_URL)])
        assert classifier.is_external_article(nested(3, leaf))
        assert not classifier.is_external_article(nested(4, leaf))


class TestResolveSourcePost:
    def test_direct_match_returns_self(self, classifier):
        p = make(id=1, attachments=[link(ZEN_URL)], copy_history=[post(id=2, attachments=[link(ZEN_URL)])])
        assert classifier.resolve_source_post(p).id == 1

    def test_first_matching_history_entry(self, classifier):
        p = make(
            id=1,
            text="мой комментарий",
            copy_history=[
                post(id=2, text="без ссылок"),
                post(id=3, attachments=[link(ZEN_URL)]),
                post(id=4, attachments=[link(ZEN_URL)]),
            ],
        )
        assert classifier.resolve_source_post(p).id == 3

    def test_falls_back_to_post(self, classifier):
        p = make(id=1, copy_history=[post(id=2, text="нет")])
        assert classifier.resolve_source_post(p).id == 1


class TestResolveArticleUrl:
    def test_attachment_before_text(self, classifier):
        p = make(text="https://dzen.ru/a/text", attachments=[link("https://dzen.ru/a/attach?from=x")])
        assert classifier.resolve_article_url(p) == "https://zen.yandex.ru/a/attach"

    def test_text_before_history(self, classifier):
        p = make(text="https://dzen.ru/a/text", copy_history=[post(attachments=[link(ZEN_URL)])])
        assert classifier.resolve_article_url(p) == "https://zen.yandex.ru/a/text"

    def test_from_history(self, classifier):
        p = make(copy_history=[post(text="нет"), post(attachments=[link(ZEN_URL)])])
        assert classifier.resolve_article_url(p) == ZEN_CANONICAL

    def test_absent(self, classifier):
        assert classifier.resolve_article_url(make(text="без ссылок")) is None

    def test_depth_limit_returns_none(self):
        classifier = RepostClassifier(max_depth=2)
        leaf = post(id=1, attachments=[link(ZEN_URL)])
        assert classifier.resolve_article_url(nested(2, leaf)) == ZEN_CANONICAL
        assert classifier.resolve_article_url(nested(3, leaf)) is None
