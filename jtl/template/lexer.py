"""
Лексический анализатор для шаблонизатора JTL.

Однопроходно разбивает исходный текст на текстовые фрагменты и теги {{ ... }}.
Токенизация без потерь: конкатенация значений токенов дает исходный текст,
поэтому проходы рендерера могут переписывать шаблон по токенам.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .tokens import Token, TokenType


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Распознает:
    - {{#if expr}} / {{/if}}
    - {{#each path}} / {{/each}}
    - {{> name}}
    - {{ path }} и {{ path | filter }}

    Содержимое тега не может содержать '}'. Нераспознанные теги
    (например {{#unless x}}) остаются текстом.
    """

    TAG_START = "{{"
    TAG_END = "}}"

    # Регулярные выражения применяются к содержимому между {{ и }}
    _IF_OPEN = re.compile(r'#if\s+(.+)', re.DOTALL)
    _EACH_OPEN = re.compile(r'#each\s+(.+)', re.DOTALL)
    _INCLUDE = re.compile(r'>\s*(.+)', re.DOTALL)

    _CLOSERS = {
        '/if': TokenType.IF_CLOSE,
        '/each': TokenType.EACH_CLOSE,
    }

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов.

        Последним всегда идет EOF.
        """
        tokens: List[Token] = []
        search_from = 0

        while True:
            start = self.text.find(self.TAG_START, search_from)
            if start == -1:
                break

            tag = self._match_tag(start)
            if tag is None:
                # Не тег - продолжаем поиск со следующего символа
                search_from = start + 1
                continue

            token_type, argument, end = tag
            if start > self.position:
                tokens.append(self._make_token(TokenType.TEXT, end=start))
            tokens.append(self._make_token(token_type, end=end, argument=argument))
            search_from = end

        if self.position < self.length:
            tokens.append(self._make_token(TokenType.TEXT, end=self.length))

        tokens.append(Token(TokenType.EOF, "", self.position, self.line, self.column))
        return tokens

    def _match_tag(self, start: int) -> Optional[Tuple[TokenType, str, int]]:
        """
        Пытается распознать тег, начинающийся в позиции start.

        Returns:
            (тип, аргумент, позиция конца) или None, если это не тег
        """
        close = self.text.find("}", start + len(self.TAG_START))
        if close == -1 or not self.text.startswith(self.TAG_END, close):
            return None

        content = self.text[start + len(self.TAG_START):close]
        if not content or self.TAG_START in content:
            # Внутри есть другой '{{': тегом может быть только он
            return None

        classified = self._classify(content)
        if classified is None:
            return None

        token_type, argument = classified
        return token_type, argument, close + len(self.TAG_END)

    def _classify(self, content: str) -> Optional[Tuple[TokenType, str]]:
        """Определяет тип тега по его содержимому."""
        closer = self._CLOSERS.get(content)
        if closer is not None:
            return closer, ""

        match = self._IF_OPEN.fullmatch(content)
        if match:
            return TokenType.IF_OPEN, match.group(1).strip()

        match = self._EACH_OPEN.fullmatch(content)
        if match:
            return TokenType.EACH_OPEN, match.group(1).strip()

        match = self._INCLUDE.fullmatch(content)
        if match:
            return TokenType.INCLUDE, match.group(1).strip()

        if content[0] in "#/>":
            # Неизвестная директива, закрывающий тег другого вида или пустое включение
            return None

        return TokenType.VARIABLE, content

    def _make_token(self, token_type: TokenType, end: int, argument: str = "") -> Token:
        """Создает токен от текущей позиции до end и продвигает позицию."""
        token = Token(
            type=token_type,
            value=self.text[self.position:end],
            position=self.position,
            line=self.line,
            column=self.column,
            argument=argument,
        )
        self._advance(end)
        return token

    def _advance(self, end: int) -> None:
        """
        Перемещает позицию до end, обновляя номера строк и колонок.
        """
        consumed = self.text[self.position:end]
        newlines = consumed.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(consumed) - consumed.rfind("\n")
        else:
            self.column += len(consumed)
        self.position = end


def tokenize_template(text: str) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Список токенов, включая EOF в конце
    """
    lexer = TemplateLexer(text)
    return lexer.tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
