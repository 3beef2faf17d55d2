"""
Лексические типы шаблонизатора JTL.

Определяет типы токенов и сам токен с позиционной информацией.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""

    # Обычный текст (включая нераспознанные {{...}})
    TEXT = "TEXT"

    # Условные блоки
    IF_OPEN = "IF_OPEN"          # {{#if expr}}
    IF_CLOSE = "IF_CLOSE"        # {{/if}}

    # Циклы
    EACH_OPEN = "EACH_OPEN"      # {{#each path}}
    EACH_CLOSE = "EACH_CLOSE"    # {{/each}}

    # Включения
    INCLUDE = "INCLUDE"          # {{> name}}

    # Переменные (с фильтрами или без)
    VARIABLE = "VARIABLE"        # {{ path }} / {{ path | f1 | f2 }}

    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики.

    value всегда содержит исходный текст токена без изменений,
    поэтому конкатенация value всех токенов восстанавливает шаблон.
    """
    type: TokenType
    value: str
    position: int        # Позиция в исходном тексте
    line: int            # Номер строки (начиная с 1)
    column: int          # Номер колонки (начиная с 1)
    argument: str = ""   # Условие, путь, имя включения или содержимое переменной

    @property
    def end(self) -> int:
        """Позиция сразу после токена."""
        return self.position + len(self.value)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token"]
