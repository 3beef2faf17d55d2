"""
Вычислитель условных выражений для {{#if ...}}.

Грамматика плоская, без скобок и приоритетов:
сначала проверяется '&&', затем '||', затем операторы сравнения,
затем '??', и наконец истинность одиночного значения.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Tuple

from .common import is_number, is_truthy, stringify

if TYPE_CHECKING:
    from .context import TemplateContext


# Порядок важен: '>=' и '<=' должны проверяться раньше '>' и '<'
COMPARISON_OPERATORS: Tuple[str, ...] = ("==", "!=", ">=", "<=", ">", "<")

_INT_LITERAL = re.compile(r'[+-]?\d+')
_FLOAT_LITERAL = re.compile(r'[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?')


@dataclass(frozen=True)
class EvaluationResult:
    """
    Результат вычисления выражения.

    error заполнен, если вычисление завершилось исключением;
    в этом случае value всегда False.
    """
    value: bool
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class ExpressionEvaluator:
    """
    Вычислитель булевых выражений шаблона.

    Операнды: строковые литералы в одинарных или двойных кавычках,
    целые и вещественные числа, true/false/null и точечные пути к переменным.
    """

    def evaluate(self, expression: str, context: "TemplateContext") -> bool:
        """
        Вычисляет выражение.

        Никогда не выбрасывает исключений: любая ошибка дает False.

        Args:
            expression: Текст выражения
            context: Контекст с резолвером переменных

        Returns:
            Результат вычисления
        """
        return self.try_evaluate(expression, context).value

    def try_evaluate(self, expression: str, context: "TemplateContext") -> EvaluationResult:
        """
        Вычисляет выражение, отличая ложный результат от ошибки вычисления.
        """
        try:
            return EvaluationResult(value=self._evaluate(expression, context))
        except Exception as e:
            return EvaluationResult(value=False, error=f"{type(e).__name__}: {e}")

    def _evaluate(self, expression: str, context: "TemplateContext") -> bool:
        text = expression.strip()

        if "&&" in text:
            return all(self._evaluate(part, context) for part in text.split("&&"))

        if "||" in text:
            return any(self._evaluate(part, context) for part in text.split("||"))

        for operator in COMPARISON_OPERATORS:
            if operator not in text:
                continue
            operands = text.split(operator)
            if len(operands) != 2:
                continue
            left = self._resolve_operand(operands[0], context)
            right = self._resolve_operand(operands[1], context)
            return self._compare(left, right, operator)

        if "??" in text:
            left_text, _, right_text = text.partition("??")
            left = self._resolve_operand(left_text, context)
            if left is not None:
                return is_truthy(left)
            return is_truthy(self._resolve_operand(right_text, context))

        return is_truthy(self._resolve_operand(text, context))

    def _resolve_operand(self, operand: str, context: "TemplateContext") -> Any:
        """
        Разрешает операнд в значение.

        Порядок: строковый литерал, целое, вещественное, true/false/null,
        переменная. Переменная с пустым строковым представлением считается null.
        """
        text = operand.strip()

        if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
            return text[1:-1]

        if _INT_LITERAL.fullmatch(text):
            return int(text)

        if _FLOAT_LITERAL.fullmatch(text):
            return float(text)

        if text == "true":
            return True
        if text == "false":
            return False
        if text == "null":
            return None

        value = context.variable_resolver.resolve_value(text)
        if stringify(value) == "":
            return None
        return value

    @staticmethod
    def _compare(left: Any, right: Any, operator: str) -> bool:
        if operator == "==":
            return left == right
        if operator == "!=":
            return left != right

        a = left if is_number(left) else 0
        b = right if is_number(right) else 0
        if operator == ">=":
            return a >= b
        if operator == "<=":
            return a <= b
        if operator == ">":
            return a > b
        return a < b


__all__ = ["ExpressionEvaluator", "EvaluationResult", "COMPARISON_OPERATORS"]
