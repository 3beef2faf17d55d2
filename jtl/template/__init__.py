"""
Ядро шаблонизатора JTL.

Лексер и сопоставление блоков, структурный парсер, резолвер переменных,
вычислитель условий, реестр фильтров и рендерер.
"""

from __future__ import annotations

from .blocks import BlockMatching
from .context import TemplateContext
from .elements import (
    AnyCodeElement,
    CodeStructure,
    CodeStructureBuilder,
    ConditionalStatement,
    ForEachStatement,
    HtmlTagElement,
    IncludeStatement,
    SourceCode,
    SourceCodeBuilder,
    Statement,
    TextElement,
)
from .evaluator import EvaluationResult, ExpressionEvaluator
from .filters import FilterRegistry, TemplateFilter
from .renderer import TemplateRenderer
from .resolver import DefaultVariableResolver
from .structure import StructureParser

__all__ = [
    "BlockMatching",
    "TemplateContext",
    "AnyCodeElement",
    "CodeStructure",
    "CodeStructureBuilder",
    "ConditionalStatement",
    "ForEachStatement",
    "HtmlTagElement",
    "IncludeStatement",
    "SourceCode",
    "SourceCodeBuilder",
    "Statement",
    "TextElement",
    "EvaluationResult",
    "ExpressionEvaluator",
    "FilterRegistry",
    "TemplateFilter",
    "TemplateRenderer",
    "DefaultVariableResolver",
    "StructureParser",
]
