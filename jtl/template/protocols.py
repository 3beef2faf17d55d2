"""
Протоколы для шаблонизатора JTL.

Определяют интерфейсы резолвера переменных и вычислителя выражений,
через которые рендерер работает с контекстом.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .context import TemplateContext


@runtime_checkable
class VariableResolverProtocol(Protocol):
    """Резолвер переменных по точечному пути."""

    def resolve(self, path: str) -> str:
        """Возвращает строковое представление значения по пути."""
        ...

    def resolve_value(self, path: str) -> Any:
        """Возвращает значение по пути или None."""
        ...

    def set_variables(self, variables: Mapping[str, Any]) -> None:
        """Заменяет словарь переменных целиком."""
        ...

    def derive(self, overlay: Mapping[str, Any]) -> "VariableResolverProtocol":
        """Создает новый резолвер поверх текущих переменных и overlay."""
        ...


@runtime_checkable
class ExpressionEvaluatorProtocol(Protocol):
    """Вычислитель булевых выражений в условиях {{#if}}."""

    def evaluate(self, expression: str, context: "TemplateContext") -> bool:
        """Вычисляет выражение, никогда не выбрасывая исключений."""
        ...


__all__ = ["VariableResolverProtocol", "ExpressionEvaluatorProtocol"]
