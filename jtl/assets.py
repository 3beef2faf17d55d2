"""
Ассеты шаблонов: источники исходного текста.

StringAsset - шаблон в памяти, FileAsset - файл в UTF-8.
FileAssetBuilder ищет шаблоны в каталоге с учетом суффиксов,
StringAssetBuilder раздает шаблоны из словаря.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from .errors import TemplateNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES = (".html", ".jtl", ".tpl")


@dataclass(frozen=True)
class StringAsset:
    content: str
    location: str = "<string>"

    def get_content_as_string(self) -> str:
        return self.content


@dataclass(frozen=True)
class FileAsset:
    path: Path

    @property
    def location(self) -> str:
        return str(self.path)

    def get_content_as_string(self) -> str:
        return self.path.read_text(encoding="utf-8")


class FileAssetBuilder:
    """
    Поиск шаблонов в файловой системе.

    Путь шаблона разрешается относительно base_dir: сначала как есть,
    затем с каждым суффиксом по порядку.
    """

    def __init__(self, base_dir: Path, suffixes: Sequence[str] = DEFAULT_SUFFIXES):
        self.base_dir = Path(base_dir)
        self.suffixes = tuple(suffixes)

    def candidates(self, location: str) -> List[Path]:
        """Пути-кандидаты в порядке проверки."""
        base = self.base_dir / location
        out = [base]
        for suffix in self.suffixes:
            if not base.name.endswith(suffix):
                out.append(base.with_name(base.name + suffix))
        return out

    def build(self, location: str) -> FileAsset:
        """
        Находит файл шаблона.

        Raises:
            TemplateNotFoundError: Если ни один кандидат не существует
        """
        candidates = self.candidates(location)
        for path in candidates:
            if path.is_file():
                logger.debug(f"Template '{location}' resolved to {path}")
                return FileAsset(path)

        searched = [str(p) for p in candidates]
        logger.debug(f"Template '{location}' not found, searched: {searched}")
        raise TemplateNotFoundError(location, searched)


class StringAssetBuilder:
    """Шаблоны из словаря 'путь -> текст'."""

    def __init__(self, templates: Mapping[str, str] | None = None):
        self._templates: Dict[str, str] = dict(templates or {})

    def add(self, location: str, content: str) -> "StringAssetBuilder":
        self._templates[location] = content
        return self

    def build(self, location: str) -> StringAsset:
        """
        Raises:
            TemplateNotFoundError: Если шаблона нет в словаре
        """
        try:
            content = self._templates[location]
        except KeyError:
            raise TemplateNotFoundError(location) from None
        return StringAsset(content, location)


__all__ = [
    "DEFAULT_SUFFIXES",
    "StringAsset",
    "FileAsset",
    "FileAssetBuilder",
    "StringAssetBuilder",
]
