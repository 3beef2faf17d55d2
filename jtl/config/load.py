from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigLoadError
from .model import EngineConfig
from .paths import config_path

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

CACHE_ENV = "JTL_CACHE"


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Failed to parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def _cache_env_override() -> bool | None:
    env = os.environ.get(CACHE_ENV, None)
    if env is None:
        return None
    return env.strip().lower() not in {"0", "false", "no", "off", ""}


def load_config(root: Path) -> EngineConfig:
    """
    Загружает jtl-cfg/jtl.yaml.

    Отсутствующий файл дает конфигурацию по умолчанию.
    Переменная окружения JTL_CACHE переопределяет ключ cache.

    Args:
        root: Корень проекта

    Returns:
        Конфигурация движка

    Raises:
        ConfigLoadError: При ошибке разбора или неверных значениях
    """
    path = config_path(root)
    raw = _read_yaml_map(path)
    cfg = EngineConfig.from_dict(raw)
    logger.debug(f"Loaded config from {path if raw else 'defaults'}: {cfg}")

    override = _cache_env_override()
    if override is not None and override != cfg.cache:
        logger.debug(f"{CACHE_ENV} overrides cache={cfg.cache} -> {override}")
        cfg = replace(cfg, cache=override)
    return cfg


__all__ = ["load_config", "CACHE_ENV"]
