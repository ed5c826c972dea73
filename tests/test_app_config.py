import json

import pytest
from pydantic import ValidationError

from wallfeed.utils.file_utils import load_app_config


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_app_config(tmp_path / "absent.json")
    assert cfg.vk.count == 50
    assert cfg.vk.api_version == "5.199"
    assert cfg.retry.max_attempts == 3
    assert cfg.settings.post_delay == 1.0
    assert cfg.classifier.mirror_hosts == {"dzen.ru": "zen.yandex.ru"}


def test_json_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "vk": {"domain": "other_public", "error_messages": {"5": "Токен"}},
        "users": {"admin_ids": [1, 2]},
    }), encoding="utf-8")

    cfg = load_app_config(path)

    assert cfg.vk.domain == "other_public"
    assert cfg.vk.error_messages == {5: "Токен"}
    assert cfg.users.admin_ids == [1, 2]


def test_yaml_config(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("settings:\n  post_delay: 0.5\n  timezone: Europe/Moscow\n", encoding="utf-8")
    cfg = load_app_config(path)
    assert cfg.settings.post_delay == 0.5
    assert cfg.settings.timezone == "Europe/Moscow"


def test_unknown_block_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"telegram_channels": {}}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_app_config(path)
