import asyncio
import logging

from wallfeed.logger.logger import TelegramLogsHandler, setup_logger
from wallfeed.services.notify_service import AdminNotifier
from wallfeed.utils.app_config import AppConfig


class FakeBot:
    def __init__(self):
        self.sent = []

    async def send_message(self, chat_id, text):
        self.sent.append((chat_id, text))


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "wallfeed.log"
    logger = setup_logger(AppConfig(), None, log_file=log_file)

    logger.info("Found %d posts in VK", 3)
    for h in logger.handlers:
        h.flush()

    assert "Found 3 posts in VK" in log_file.read_text(encoding="utf-8")
    assert not any(isinstance(h, TelegramLogsHandler) for h in logger.handlers)
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)


def test_telegram_handler_attached_when_enabled(tmp_path):
    cfg = AppConfig.model_validate({"users": {"admin_ids": [7]}, "settings": {"tg_error_log": True}})
    logger = setup_logger(cfg, FakeBot(), log_file=tmp_path / "a.log")
    assert any(isinstance(h, TelegramLogsHandler) for h in logger.handlers)
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)


async def test_telegram_handler_sends_errors_to_admins():
    bot = FakeBot()
    handler = TelegramLogsHandler(bot, {7})
    handler.setFormatter(logging.Formatter("%(message)s"))
    record = logging.LogRecord("wallfeed", logging.ERROR, __file__, 1, "DB error", None, None)

    handler.emit(record)
    await asyncio.sleep(0)

    assert bot.sent == [(7, "❗️ERROR: DB error")]


def test_telegram_handler_without_loop_is_silent():
    bot = FakeBot()
    record = logging.LogRecord("wallfeed", logging.ERROR, __file__, 1, "x", None, None)
    TelegramLogsHandler(bot, {7}).emit(record)
    assert bot.sent == []


async def test_notifier_without_bot_only_logs(caplog):
    logger = logging.getLogger("wallfeed.tests")
    notifier = AdminNotifier(bot=None, admin_ids=[1], logger=logger)
    with caplog.at_level(logging.WARNING, logger=logger.name):
        assert await notifier.notify("Необходимо обновить VK токен") == 0
    assert "Admin notification" in caplog.text
