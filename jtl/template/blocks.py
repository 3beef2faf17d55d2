"""
Сопоставление блочных конструкций {{#if}}...{{/if}} и {{#each}}...{{/each}}.

Работает поверх потока токенов лексера. Глубина вложенности отслеживается
отдельно для каждого вида блока: {{#each}} внутри {{#if}} не влияет на поиск
закрывающего {{/if}}.

Режимы сопоставления:
- NESTED: открывающий тег закрывается сбалансированным закрывающим тегом того же вида
- SHALLOW: открывающий тег закрывается первым закрывающим тегом того же вида
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .tokens import Token, TokenType


class BlockMatching(enum.Enum):
    """Режим сопоставления открывающих и закрывающих тегов."""
    NESTED = "nested"
    SHALLOW = "shallow"

    @classmethod
    def parse(cls, value: str) -> "BlockMatching":
        """
        Преобразует строковое значение из конфигурации.

        Raises:
            ValueError: При неизвестном режиме
        """
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown block matching mode '{value}'. Expected one of: {allowed}")


class BlockKind(enum.Enum):
    """Вид блочной конструкции."""
    IF = "if"
    EACH = "each"


# Открывающий и закрывающий типы токенов для каждого вида блока
_BLOCK_TOKENS: Dict[BlockKind, Tuple[TokenType, TokenType]] = {
    BlockKind.IF: (TokenType.IF_OPEN, TokenType.IF_CLOSE),
    BlockKind.EACH: (TokenType.EACH_OPEN, TokenType.EACH_CLOSE),
}


@dataclass(frozen=True)
class Block:
    """
    Найденный блок.

    source - полный текст блока от открывающего до закрывающего тега включительно,
    inner - содержимое между тегами без изменений.
    """
    kind: BlockKind
    argument: str
    opening: Token
    closing: Token
    source: str
    inner: str

    @property
    def start(self) -> int:
        return self.opening.position

    @property
    def end(self) -> int:
        return self.closing.end


class BlockMatcher:
    """
    Находит непересекающиеся блоки одного вида в порядке появления в тексте.
    """

    def __init__(self, mode: BlockMatching = BlockMatching.NESTED):
        self.mode = mode

    def find_blocks(self, text: str, tokens: List[Token], kind: BlockKind) -> List[Block]:
        """
        Находит все блоки заданного вида.

        Открывающий тег без пары пропускается, поиск продолжается
        со следующего токена.

        Args:
            text: Исходный текст, из которого получены токены
            tokens: Токены лексера
            kind: Вид блока

        Returns:
            Список блоков в порядке появления
        """
        open_type, close_type = _BLOCK_TOKENS[kind]
        blocks: List[Block] = []

        index = 0
        while index < len(tokens):
            token = tokens[index]
            if token.type != open_type:
                index += 1
                continue

            closing_index = self._find_closing(tokens, index, open_type, close_type)
            if closing_index is None:
                index += 1
                continue

            closing = tokens[closing_index]
            blocks.append(Block(
                kind=kind,
                argument=token.argument,
                opening=token,
                closing=closing,
                source=text[token.position:closing.end],
                inner=text[token.end:closing.position],
            ))
            index = closing_index + 1

        return blocks

    def _find_closing(
        self,
        tokens: List[Token],
        open_index: int,
        open_type: TokenType,
        close_type: TokenType,
    ) -> Optional[int]:
        """Ищет индекс закрывающего токена для открывающего токена open_index."""
        depth = 1
        for index in range(open_index + 1, len(tokens)):
            token_type = tokens[index].type
            if token_type == close_type:
                if self.mode is BlockMatching.SHALLOW:
                    return index
                depth -= 1
                if depth == 0:
                    return index
            elif token_type == open_type:
                depth += 1
        return None


__all__ = ["BlockMatching", "BlockKind", "Block", "BlockMatcher"]
