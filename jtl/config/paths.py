from __future__ import annotations

from pathlib import Path

# Single source of truth for configuration directory structure.
CFG_DIR = "jtl-cfg"
CONFIG_FILE = "jtl.yaml"


def cfg_root(root: Path) -> Path:
    """Absolute path to the jtl-cfg/ directory."""
    return (root / CFG_DIR).resolve()


def config_path(root: Path) -> Path:
    """Path to the main configuration file jtl-cfg/jtl.yaml."""
    return cfg_root(root) / CONFIG_FILE


__all__ = ["CFG_DIR", "CONFIG_FILE", "cfg_root", "config_path"]
