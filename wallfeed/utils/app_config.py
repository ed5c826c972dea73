# wallfeed/utils/app_config
from __future__ import annotations
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from wallfeed.utils.normalizer import DEFAULT_MIRROR_HOSTS, DEFAULT_STRIP_PARAMS


class VkBlock(BaseModel):
    domain:       str = "mnogodeto4ka_web"
    count:        int = 50
    api_version:  str = "5.199"
    filter:       str = "all"
    api_url:      str = "https://api.vk.com/method/wall.get"
    timeout:      int = 20
    error_messages: Dict[int, str] = {}    # переопределения таблицы ошибок VK


class RetryBlock(BaseModel):
    max_attempts:       int = 3
    base_delay_seconds: float = 1.0
    max_delay_seconds:  float = 8.0
    retry_statuses:     List[int] = [429, 500, 502, 503, 504]


class ClassifierBlock(BaseModel):
    article_hosts: List[str] = [r"zen\.yandex", r"dzen\.ru"]
    mirror_hosts:  Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_MIRROR_HOSTS))
    strip_params:  List[str] = list(DEFAULT_STRIP_PARAMS)
    max_depth:     int = 16


class UsersBlock(BaseModel):
    admin_ids: List[int] = []


class SettingsBlock(BaseModel):
    reset:         bool = False
    post_delay:    float = 1.0
    poll_interval: int = 900
    debug_dump:    bool = True
    timezone:      str = "UTC"
    tg_error_log:  bool = False


class AppConfig(BaseModel):
    vk:         VkBlock = VkBlock()
    retry:      RetryBlock = RetryBlock()
    classifier: ClassifierBlock = ClassifierBlock()
    users:      UsersBlock = UsersBlock()
    settings:   SettingsBlock = SettingsBlock()

    model_config = ConfigDict(extra="forbid")
