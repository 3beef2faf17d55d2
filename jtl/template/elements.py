"""
Модель элементов кода шаблона.

Определяет закрытое множество элементов структуры (текст, HTML-тег,
условный оператор, цикл, включение), структуру кода и результат рендеринга,
а также билдеры для их пошаговой сборки.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from ..types import Asset


DEFAULT_STRUCTURE_TYPE = "HTML"


@dataclass(frozen=True)
class TextElement:
    """
    Текстовый фрагмент без тегов.
    """
    content: str

    @property
    def opening_tag(self) -> Optional[str]:
        return None

    @property
    def closing_tag(self) -> Optional[str]:
        return None

    @property
    def tag_name(self) -> Optional[str]:
        return None

    @property
    def line(self) -> str:
        return self.content

    @property
    def children(self) -> Tuple[AnyCodeElement, ...]:
        return ()


@dataclass(frozen=True)
class HtmlTagElement:
    """
    HTML-тег с произвольным именем.

    Структурный парсер такие элементы не создает, они доступны
    вызывающему коду для построения собственных структур.
    """
    tag_name: str
    content: str
    opening_tag: Optional[str] = None
    closing_tag: Optional[str] = None
    children: Tuple[AnyCodeElement, ...] = ()

    @property
    def line(self) -> str:
        return self.content


@dataclass(frozen=True)
class Statement:
    """
    Базовый класс операторов шаблона.

    statement - полный исходный текст конструкции,
    content - ее содержимое (для блоков - текст между тегами).
    """
    statement: str
    content: str

    @property
    def line(self) -> str:
        return self.statement

    @property
    def opening_tag(self) -> Optional[str]:
        return None

    @property
    def closing_tag(self) -> Optional[str]:
        return None

    @property
    def tag_name(self) -> Optional[str]:
        return None

    @property
    def children(self) -> Tuple[AnyCodeElement, ...]:
        return ()


@dataclass(frozen=True)
class ConditionalStatement(Statement):
    """Условный блок {{#if condition}}...{{/if}}."""
    condition: str = ""

    @property
    def opening_tag(self) -> Optional[str]:
        return "{{#if " + self.condition + "}}"

    @property
    def closing_tag(self) -> Optional[str]:
        return "{{/if}}"

    @property
    def tag_name(self) -> Optional[str]:
        return "if"

    @property
    def children(self) -> Tuple[AnyCodeElement, ...]:
        return (TextElement(self.content),)


@dataclass(frozen=True)
class ForEachStatement(Statement):
    """Цикл {{#each items_key}}...{{/each}}."""
    items_key: str = ""

    @property
    def opening_tag(self) -> Optional[str]:
        return "{{#each " + self.items_key + "}}"

    @property
    def closing_tag(self) -> Optional[str]:
        return "{{/each}}"

    @property
    def tag_name(self) -> Optional[str]:
        return "each"

    @property
    def children(self) -> Tuple[AnyCodeElement, ...]:
        return (TextElement(self.content),)


@dataclass(frozen=True)
class IncludeStatement(Statement):
    """Включение {{> template_name}}. Содержимое совпадает с текстом оператора."""
    template_name: str = ""

    @property
    def opening_tag(self) -> Optional[str]:
        return "{{>" + self.template_name + "}}"

    @property
    def tag_name(self) -> Optional[str]:
        return "include"


AnyCodeElement = Union[
    TextElement,
    HtmlTagElement,
    ConditionalStatement,
    ForEachStatement,
    IncludeStatement,
]


@dataclass(frozen=True)
class CodeStructure:
    """Упорядоченный набор элементов кода с меткой типа."""
    elements: Tuple[AnyCodeElement, ...] = ()
    type: str = DEFAULT_STRUCTURE_TYPE

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)


@dataclass(frozen=True)
class SourceCode:
    """
    Результат рендеринга шаблона.

    Сравнивается по значению всех четырех полей.
    """
    asset: Asset
    code_structure: CodeStructure
    raw_content: str
    rendered_content: str


class CodeStructureBuilder:
    """
    Билдер структуры кода.

    Накапливает элементы в изменяемом списке; build() возвращает
    неизменяемую CodeStructure.
    """

    def __init__(self):
        self._elements: List[AnyCodeElement] = []
        self._type = DEFAULT_STRUCTURE_TYPE

    def with_type(self, structure_type: str) -> "CodeStructureBuilder":
        self._type = structure_type
        return self

    def add_element(self, element: AnyCodeElement) -> "CodeStructureBuilder":
        self._elements.append(element)
        return self

    def add_elements(self, elements: Iterable[AnyCodeElement]) -> "CodeStructureBuilder":
        self._elements.extend(elements)
        return self

    def build(self) -> CodeStructure:
        return CodeStructure(elements=tuple(self._elements), type=self._type)


class SourceCodeBuilder:
    """
    Билдер результата рендеринга.

    Все четыре поля обязательны.
    """

    def __init__(self):
        self._asset: Optional[Asset] = None
        self._code_structure: Optional[CodeStructure] = None
        self._raw_content: Optional[str] = None
        self._rendered_content: Optional[str] = None

    def with_asset(self, asset: Asset) -> "SourceCodeBuilder":
        self._asset = asset
        return self

    def with_code_structure(self, code_structure: CodeStructure) -> "SourceCodeBuilder":
        self._code_structure = code_structure
        return self

    def with_raw_content(self, raw_content: str) -> "SourceCodeBuilder":
        self._raw_content = raw_content
        return self

    def with_rendered_content(self, rendered_content: str) -> "SourceCodeBuilder":
        self._rendered_content = rendered_content
        return self

    def build(self) -> SourceCode:
        """
        Собирает SourceCode.

        Raises:
            ValueError: Если какое-либо поле не задано
        """
        missing = [
            name for name, value in (
                ("asset", self._asset),
                ("code_structure", self._code_structure),
                ("raw_content", self._raw_content),
                ("rendered_content", self._rendered_content),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"SourceCode is incomplete, missing: {', '.join(missing)}")

        return SourceCode(
            asset=self._asset,
            code_structure=self._code_structure,
            raw_content=self._raw_content,
            rendered_content=self._rendered_content,
        )


__all__ = [
    "DEFAULT_STRUCTURE_TYPE",
    "TextElement",
    "HtmlTagElement",
    "Statement",
    "ConditionalStatement",
    "ForEachStatement",
    "IncludeStatement",
    "AnyCodeElement",
    "CodeStructure",
    "SourceCode",
    "CodeStructureBuilder",
    "SourceCodeBuilder",
]
