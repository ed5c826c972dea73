# wallfeed/logger/logger.py
from __future__ import annotations
import asyncio
import logging
import sys
from pathlib import Path

from aiogram import Bot

from wallfeed.utils.app_config import AppConfig
from wallfeed.utils.paths import LOG_FILE

LOGGER_NAME = "wallfeed"


class TelegramLogsHandler(logging.Handler):
    """
    ERROR+ → в личку администраторам.
    Работает только внутри запущенного event loop, иначе молча пропускает запись.
    """

    def __init__(self, bot: Bot, admin_ids: set[int]):
        super().__init__(logging.ERROR)
        self.bot = bot
        self.admin_ids = admin_ids

    def emit(self, record: logging.LogRecord):
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return  # нет активного цикла

        text = self.format(record)
        for uid in self.admin_ids:
            loop.create_task(
                self.bot.send_message(chat_id=uid, text=f"❗️{record.levelname}: {text}")
            )


def setup_logger(cfg: AppConfig, bot: Bot | None = None, log_file: Path = LOG_FILE) -> logging.Logger:
    """
    • DEBUG → stdout + файл
    • ERROR+ → ещё и в TG администраторам (если включено tg_error_log)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    # ── file ──
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    # ── console ──
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.DEBUG)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # ── telegram ERROR+ ──
    if bot is not None and cfg.settings.tg_error_log and cfg.users.admin_ids:
        tg_err = TelegramLogsHandler(bot=bot, admin_ids=set(cfg.users.admin_ids))
        tg_err.setFormatter(fmt)
        logger.addHandler(tg_err)

    return logger
