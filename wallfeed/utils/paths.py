# wallfeed/utils/paths.py
from pathlib import Path

# базовая директория — корень проекта
BASE_DIR = Path(__file__).resolve().parents[2]

# папка для хранения файлов БД
DATA_DIR = BASE_DIR / 'data'
DB = DATA_DIR / 'news.duckdb'

# логи и отладочные снимки ответов VK
LOGS_DIR = BASE_DIR / 'logs'
LOG_FILE = LOGS_DIR / 'wallfeed.log'

CONFIG_DIR = BASE_DIR / 'config.json'
ENV_DIR = BASE_DIR / '.env'
