"""
Configuration loading for JTL.
"""

from __future__ import annotations

from .load import CACHE_ENV, load_config
from .model import EngineConfig
from .paths import CFG_DIR, CONFIG_FILE, cfg_root, config_path

__all__ = [
    "EngineConfig",
    "load_config",
    "CACHE_ENV",
    "CFG_DIR",
    "CONFIG_FILE",
    "cfg_root",
    "config_path",
]
