"""
Кэш результатов рендеринга.

Ключ - только идентификатор шаблона: атрибуты в ключ не входят,
поэтому повторный рендер того же пути с другими данными вернет
ранее сохраненный результат. Инвалидация только явная.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol, runtime_checkable

from ..template.elements import SourceCode


@runtime_checkable
class TemplateCache(Protocol):
    def get(self, identifier: str) -> Optional[SourceCode]: ...

    def put(self, identifier: str, result: SourceCode) -> None: ...

    def remove(self, identifier: str) -> None: ...

    def invalidate_cache(self) -> None: ...


class InMemoryTemplateCache:
    """
    Словарь 'идентификатор -> SourceCode' без TTL и ограничения размера.
    Без блокировок.
    """

    def __init__(self):
        self._entries: Dict[str, SourceCode] = {}

    def get(self, identifier: str) -> Optional[SourceCode]:
        return self._entries.get(identifier)

    def put(self, identifier: str, result: SourceCode) -> None:
        self._entries[identifier] = result

    def remove(self, identifier: str) -> None:
        self._entries.pop(identifier, None)

    def invalidate_cache(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries


class NullTemplateCache:
    """Кэш, который ничего не хранит. Используется при выключенном кэшировании."""

    def get(self, identifier: str) -> Optional[SourceCode]:
        return None

    def put(self, identifier: str, result: SourceCode) -> None:
        pass

    def remove(self, identifier: str) -> None:
        pass

    def invalidate_cache(self) -> None:
        pass

    def __len__(self) -> int:
        return 0

    def __contains__(self, identifier: object) -> bool:
        return False


__all__ = ["TemplateCache", "InMemoryTemplateCache", "NullTemplateCache"]
