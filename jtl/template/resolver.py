"""
Резолвер переменных шаблона.

Разрешает точечные пути вида 'user.address.city' по вложенным словарям
и приводит найденные значения к строке для подстановки.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional

from .common import stringify


class DefaultVariableResolver:
    """
    Резолвер переменных по словарю словарей.

    Отсутствующий сегмент пути или попытка пройти через значение,
    не являющееся словарем, дает None (и пустую строку в resolve).

    Словарь переменных заменяется целиком через set_variables и
    разделяется между рендерами, поэтому экземпляр не потокобезопасен.
    """

    def __init__(self, variables: Optional[Mapping[str, Any]] = None):
        self._variables: Mapping[str, Any] = variables if variables is not None else {}

    @property
    def variables(self) -> Mapping[str, Any]:
        """Текущий словарь переменных."""
        return self._variables

    def set_variables(self, variables: Mapping[str, Any]) -> None:
        """
        Заменяет словарь переменных для последующих разрешений.

        Args:
            variables: Новый словарь переменных
        """
        self._variables = variables

    def resolve(self, path: str) -> str:
        """
        Разрешает путь и возвращает строковое представление значения.

        Args:
            path: Точечный путь, например 'user.name'

        Returns:
            Строковое значение или "" для отсутствующих переменных
        """
        return stringify(self.resolve_value(path))

    def resolve_value(self, path: str) -> Any:
        """
        Разрешает путь и возвращает значение без преобразования.

        Пробелы вокруг каждого сегмента игнорируются.
        """
        current: Any = self._variables
        for part in path.strip().split("."):
            if not isinstance(current, Mapping):
                return None
            current = current.get(part.strip())
        return current

    def derive(self, overlay: Mapping[str, Any]) -> "DefaultVariableResolver":
        """
        Создает резолвер того же класса поверх текущих переменных и overlay.

        Используется для контекста отдельной итерации цикла.
        """
        merged: Dict[str, Any] = dict(self._variables)
        merged.update(overlay)
        return type(self)(merged)


__all__ = ["DefaultVariableResolver"]
