"""
Контекст рендеринга шаблона.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .protocols import ExpressionEvaluatorProtocol, VariableResolverProtocol


@dataclass(frozen=True)
class TemplateContext:
    """
    Пара коллабораторов, через которые рендерер разрешает переменные
    и вычисляет условия.
    """
    variable_resolver: VariableResolverProtocol
    expression_evaluator: ExpressionEvaluatorProtocol

    def derive(self, overlay: Mapping[str, Any]) -> "TemplateContext":
        """
        Создает контекст итерации цикла.

        Вычислитель остается тем же, резолвер строится поверх
        текущих переменных и overlay (this, @index, @first, @last).
        """
        return TemplateContext(
            variable_resolver=self.variable_resolver.derive(overlay),
            expression_evaluator=self.expression_evaluator,
        )


__all__ = ["TemplateContext"]
