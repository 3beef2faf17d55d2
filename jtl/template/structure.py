"""
Структурный парсер шаблона.

Строит плоскую CodeStructure для интроспекции: сначала все условные блоки,
затем все циклы, затем все включения. Содержимое блоков не разбирается
рекурсивно и попадает в структуру как единственный текстовый дочерний элемент.
"""

from __future__ import annotations

from typing import List

from .blocks import BlockKind, BlockMatcher, BlockMatching
from .elements import (
    DEFAULT_STRUCTURE_TYPE,
    CodeStructure,
    CodeStructureBuilder,
    ConditionalStatement,
    ForEachStatement,
    IncludeStatement,
)
from .lexer import tokenize_template
from .tokens import Token, TokenType


class StructureParser:
    """
    Парсер структуры шаблона.

    Порядок элементов сгруппирован по виду конструкции,
    а не по позиции в тексте.
    """

    def __init__(
        self,
        block_matching: BlockMatching = BlockMatching.NESTED,
        structure_type: str = DEFAULT_STRUCTURE_TYPE,
    ):
        self.matcher = BlockMatcher(block_matching)
        self.structure_type = structure_type

    def parse(self, raw: str) -> CodeStructure:
        """
        Разбирает исходный текст шаблона.

        Args:
            raw: Исходный текст

        Returns:
            Структура кода
        """
        tokens = tokenize_template(raw)
        builder = CodeStructureBuilder().with_type(self.structure_type)

        for block in self.matcher.find_blocks(raw, tokens, BlockKind.IF):
            builder.add_element(ConditionalStatement(
                statement=block.source,
                content=block.inner,
                condition=block.argument,
            ))

        for block in self.matcher.find_blocks(raw, tokens, BlockKind.EACH):
            builder.add_element(ForEachStatement(
                statement=block.source,
                content=block.inner,
                items_key=block.argument,
            ))

        for token in self._include_tokens(tokens):
            builder.add_element(IncludeStatement(
                statement=token.value,
                content=token.value,
                template_name=token.argument,
            ))

        return builder.build()

    @staticmethod
    def _include_tokens(tokens: List[Token]) -> List[Token]:
        return [t for t in tokens if t.type == TokenType.INCLUDE]


__all__ = ["StructureParser"]
