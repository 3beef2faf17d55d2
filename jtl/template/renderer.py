"""
Рендерер шаблонов JTL.

Выполняет пять последовательных проходов по тексту шаблона:
включения -> условия -> циклы -> переменные с фильтрами -> простые переменные.
Каждый проход полностью заменяет все свои конструкции до начала следующего.
Содержимое истинных условий и тела циклов рендерится рекурсивно всеми пятью проходами.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from ..types import Asset, AssetBuilder, Template
from .blocks import Block, BlockKind, BlockMatcher, BlockMatching
from .common import escape_html, stringify
from .context import TemplateContext
from .elements import DEFAULT_STRUCTURE_TYPE, SourceCode, SourceCodeBuilder
from .filters import FilterRegistry
from .lexer import tokenize_template
from .resolver import DefaultVariableResolver
from .structure import StructureParser
from .tokens import Token, TokenType

FILTER_SEPARATOR = "|"


def include_marker(name: str) -> str:
    """Инертный маркер на месте {{> name}}."""
    return f"<!-- Include: {name} -->"


class TemplateRenderer:
    """
    Рендерер шаблонов.

    Не хранит состояния между вызовами, кроме ссылок на коллабораторов.
    """

    def __init__(
        self,
        filter_registry: Optional[FilterRegistry] = None,
        asset_builder: Optional[AssetBuilder] = None,
        block_matching: BlockMatching = BlockMatching.NESTED,
        structure_type: str = DEFAULT_STRUCTURE_TYPE,
    ):
        """
        Args:
            filter_registry: Реестр фильтров (по умолчанию со встроенными фильтрами)
            asset_builder: Поставщик исходного текста шаблонов
            block_matching: Режим сопоставления блоков
            structure_type: Метка типа для CodeStructure
        """
        self.filter_registry = filter_registry if filter_registry is not None else FilterRegistry()
        self.asset_builder = asset_builder
        self.block_matcher = BlockMatcher(block_matching)
        self.structure_parser = StructureParser(block_matching, structure_type)

    def render(
        self,
        template: Template,
        context: TemplateContext,
        asset: Optional[Asset] = None,
    ) -> SourceCode:
        """
        Рендерит шаблон.

        Args:
            template: Шаблон с атрибутами
            context: Контекст с резолвером и вычислителем
            asset: Заранее загруженный ассет; если не задан, берется у asset_builder

        Returns:
            Результат рендеринга

        Raises:
            ValueError: Если ассет не передан и поставщик ассетов не настроен
        """
        if asset is None:
            if self.asset_builder is None:
                raise ValueError(
                    f"Cannot load template '{template.location}': no asset builder configured"
                )
            asset = self.asset_builder.build(template.location)

        raw = asset.get_content_as_string()
        structure = self.structure_parser.parse(raw)
        rendered = self.render_content(raw, template, context)

        return (
            SourceCodeBuilder()
            .with_asset(asset)
            .with_code_structure(structure)
            .with_raw_content(raw)
            .with_rendered_content(rendered)
            .build()
        )

    def render_content(self, text: str, template: Template, context: TemplateContext) -> str:
        """
        Прогоняет текст через все пять проходов.
        """
        text = self._process_includes(text)
        text = self._process_conditionals(text, template, context)
        text = self._process_loops(text, template, context)
        text = self._process_filters(text, context)
        text = self._process_variables(text, context)
        return text

    # ---------------------------- проходы ---------------------------- #

    def _process_includes(self, text: str) -> str:
        def substitute(token: Token) -> str:
            if token.type == TokenType.INCLUDE:
                return include_marker(token.argument)
            return token.value

        return self._rewrite_tokens(text, substitute)

    def _process_conditionals(self, text: str, template: Template, context: TemplateContext) -> str:
        def render_block(block: Block) -> str:
            if context.expression_evaluator.evaluate(block.argument, context):
                return self.render_content(block.inner, template, context)
            return ""

        return self._rewrite_blocks(text, BlockKind.IF, render_block)

    def _process_loops(self, text: str, template: Template, context: TemplateContext) -> str:
        def render_block(block: Block) -> str:
            items = DefaultVariableResolver(template.attributes).resolve_value(block.argument)
            if not isinstance(items, (list, tuple)):
                return ""

            parts: List[str] = []
            last_index = len(items) - 1
            for index, item in enumerate(items):
                derived: Dict[str, Any] = dict(template.attributes)
                derived["this"] = item
                derived["@index"] = index
                derived["@first"] = index == 0
                derived["@last"] = index == last_index

                iteration_template = template.with_attributes(derived)
                parts.append(self.render_content(block.inner, iteration_template, context.derive(derived)))
            return "".join(parts)

        return self._rewrite_blocks(text, BlockKind.EACH, render_block)

    def _process_filters(self, text: str, context: TemplateContext) -> str:
        def substitute(token: Token) -> str:
            if token.type != TokenType.VARIABLE or FILTER_SEPARATOR not in token.argument:
                return token.value

            path, *filter_names = [part.strip() for part in token.argument.split(FILTER_SEPARATOR)]
            value = context.variable_resolver.resolve_value(path)
            value = self.filter_registry.apply_chain(value, filter_names)
            return escape_html(stringify(value))

        return self._rewrite_tokens(text, substitute)

    def _process_variables(self, text: str, context: TemplateContext) -> str:
        def substitute(token: Token) -> str:
            if token.type != TokenType.VARIABLE:
                return token.value
            return escape_html(context.variable_resolver.resolve(token.argument.strip()))

        return self._rewrite_tokens(text, substitute)

    # ---------------------------- вспомогательное ---------------------------- #

    @staticmethod
    def _rewrite_tokens(text: str, substitute: Callable[[Token], str]) -> str:
        """Собирает текст заново, заменяя каждый токен результатом substitute."""
        return "".join(substitute(token) for token in tokenize_template(text))

    def _rewrite_blocks(self, text: str, kind: BlockKind, render_block: Callable[[Block], str]) -> str:
        """Заменяет все блоки заданного вида результатом render_block."""
        blocks = self.block_matcher.find_blocks(text, tokenize_template(text), kind)
        if not blocks:
            return text

        parts: List[str] = []
        cursor = 0
        for block in blocks:
            parts.append(text[cursor:block.start])
            parts.append(render_block(block))
            cursor = block.end
        parts.append(text[cursor:])
        return "".join(parts)


__all__ = ["TemplateRenderer", "include_marker", "FILTER_SEPARATOR"]
