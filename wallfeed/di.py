# wallfeed/di.py
# ────────────── 0. stdlib / сторонние ────────────── #
import os
from functools import partial

from aiogram import Bot

# ────────────── 1. util-слой ────────────── #
from wallfeed.utils.file_utils import load_env, get_env, load_app_config, save_debug_snapshot
from wallfeed.utils.paths import DB, LOGS_DIR
from wallfeed.logger.logger import setup_logger

# ────────────── 2. БД ────────────── #
from wallfeed.data_manager.duckdb_client import DuckDBClient
from wallfeed.data_manager.duckdb_repository import NewsRepository

# ────────────── 3. сервис-слой ────────────── #
from wallfeed.data_collector.vk_wall_fetcher import RetryPolicy, VkWallFetcher
from wallfeed.services.attachment_extractor import AttachmentExtractor
from wallfeed.services.duplicate_filter_service import DuplicateFilterService
from wallfeed.services.error_mapper import VkErrorMapper
from wallfeed.services.ingestion_service import IngestionService
from wallfeed.services.notify_service import AdminNotifier
from wallfeed.services.polling_service import PollingService
from wallfeed.services.record_builder import RecordBuilder
from wallfeed.services.repost_classifier import RepostClassifier

# ────────────── 4. конфиг + окружение ────────────── #
load_env()                                   # .env → os.environ
cfg = load_app_config()

# ────────────── 5. бот и логгер ────────────── #
tg_token = os.environ.get("TELEGRAM_TOKEN")
bot = Bot(token=tg_token) if tg_token else None
logger = setup_logger(cfg, bot)

# ────────────── 6. БД и репозиторий ────────────── #
db_client = DuckDBClient(DB, reset=cfg.settings.reset)
news_repo = NewsRepository(db_client.conn)

# ────────────── 7. сервисы ────────────── #
fetcher = VkWallFetcher(
    api_url     = cfg.vk.api_url,
    domain      = cfg.vk.domain,
    token       = get_env("VK_API_TOKEN"),
    api_version = cfg.vk.api_version,
    count       = cfg.vk.count,
    filter_mode = cfg.vk.filter,
    timeout     = cfg.vk.timeout,
    retry       = RetryPolicy(
        max_attempts       = cfg.retry.max_attempts,
        base_delay_seconds = cfg.retry.base_delay_seconds,
        max_delay_seconds  = cfg.retry.max_delay_seconds,
        retry_statuses     = set(cfg.retry.retry_statuses),
    ),
    logger      = logger,
)

classifier = RepostClassifier(
    cfg.classifier.article_hosts,
    mirror_hosts = cfg.classifier.mirror_hosts,
    strip_params = cfg.classifier.strip_params,
    max_depth    = cfg.classifier.max_depth,
)

record_builder = RecordBuilder(
    classifier = classifier,
    extractor  = AttachmentExtractor(),
    logger     = logger,
    tz_name    = cfg.settings.timezone,
)

writer = DuplicateFilterService(news_repo, logger)

notifier = AdminNotifier(bot=bot, admin_ids=cfg.users.admin_ids, logger=logger)

snapshot = None
if cfg.settings.debug_dump:
    snapshot = partial(save_debug_snapshot, "vk_response", logger=logger, directory=LOGS_DIR)

ingestion_service = IngestionService(
    fetcher       = fetcher,
    builder       = record_builder,
    writer        = writer,
    error_mapper  = VkErrorMapper(overrides=cfg.vk.error_messages),
    notifier      = notifier,
    logger        = logger,
    post_delay    = cfg.settings.post_delay,
    save_snapshot = snapshot,
)

polling_service = PollingService(
    ingestion_service = ingestion_service,
    interval          = cfg.settings.poll_interval,
    logger            = logger,
)

# ────────────── 8. экспорт ────────────── #
__all__ = ["bot", "cfg", "logger", "ingestion_service", "polling_service", "db_client"]
