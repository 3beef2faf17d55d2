from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from ..assets import DEFAULT_SUFFIXES
from ..errors import ConfigLoadError
from ..template.blocks import BlockMatching
from ..template.elements import DEFAULT_STRUCTURE_TYPE

_KNOWN_KEYS = {"templates_dir", "cache", "block_matching", "structure_type", "suffixes"}


@dataclass(frozen=True)
class EngineConfig:
    templates_dir: str = "templates"
    cache: bool = True
    block_matching: BlockMatching = BlockMatching.NESTED
    structure_type: str = DEFAULT_STRUCTURE_TYPE
    suffixes: Tuple[str, ...] = field(default=DEFAULT_SUFFIXES)

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "EngineConfig":
        """
        Строит конфигурацию из YAML-словаря.

        Raises:
            ConfigLoadError: При неизвестных ключах или значениях неверного типа
        """
        unknown = sorted(set(raw) - _KNOWN_KEYS)
        if unknown:
            raise ConfigLoadError(f"Unknown config keys: {', '.join(unknown)}")

        templates_dir = raw.get("templates_dir", "templates")
        if not isinstance(templates_dir, str) or not templates_dir.strip():
            raise ConfigLoadError("templates_dir must be a non-empty string")

        cache = raw.get("cache", True)
        if not isinstance(cache, bool):
            raise ConfigLoadError(f"cache must be a boolean, got {cache!r}")

        try:
            block_matching = BlockMatching.parse(raw.get("block_matching", BlockMatching.NESTED.value))
        except ValueError as e:
            raise ConfigLoadError(str(e)) from e

        structure_type = raw.get("structure_type", DEFAULT_STRUCTURE_TYPE)
        if not isinstance(structure_type, str):
            raise ConfigLoadError(f"structure_type must be a string, got {structure_type!r}")

        suffixes = raw.get("suffixes", list(DEFAULT_SUFFIXES))
        if not isinstance(suffixes, list) or not all(isinstance(s, str) for s in suffixes):
            raise ConfigLoadError("suffixes must be a list of strings")

        return EngineConfig(
            templates_dir=templates_dir,
            cache=cache,
            block_matching=block_matching,
            structure_type=structure_type,
            suffixes=tuple(suffixes),
        )


__all__ = ["EngineConfig"]
