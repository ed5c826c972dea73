import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from wallfeed.utils.paths import ENV_DIR, CONFIG_DIR, LOGS_DIR
from wallfeed.utils.app_config import AppConfig   # ← pydantic-модель


# ─────────────────── env ─────────────────── #
def load_env(path=ENV_DIR):
    """Загружает .env в переменные окружения (если файл есть)."""
    load_dotenv(dotenv_path=path)


def get_env(key):
    value = os.environ.get(key)
    if value is None:
        raise RuntimeError(f"ENV: обязательная переменная {key} не найдена!")
    return value


# ─────────────────── config ───────────────── #
def load_app_config(path=CONFIG_DIR):
    """Читает config.json (или .yml) и валидирует через Pydantic-модель AppConfig."""
    path = Path(path)
    if not path.exists():
        return AppConfig()
    with open(path, encoding="utf-8") as f:
        if path.suffix in (".yml", ".yaml"):
            data: dict[str, Any] = yaml.safe_load(f) or {}
        else:
            data = json.load(f)
    return AppConfig.model_validate(data)


# ─────────────────── debug ───────────────── #
def save_debug_snapshot(prefix, data, logger: logging.Logger, directory=LOGS_DIR):
    """Сохраняет сырой ответ API для отладки. Ошибки только логируются."""
    try:
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = directory / f"{prefix}_{stamp}.json"
        path.write_text(json.dumps(data, ensure_ascii=False, indent=4), encoding="utf-8")
        logger.debug("Saved debug data to: %s", path.name)
        return path
    except (OSError, TypeError, ValueError) as e:
        logger.error("Failed to save debug data: %s", e)
        return None
