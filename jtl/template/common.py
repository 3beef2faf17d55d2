"""
Общие функции работы со значениями шаблона.

Строковое представление значений, истинность и HTML-экранирование
используются резолвером, вычислителем выражений, фильтрами и рендерером.
"""

from __future__ import annotations

import html
from collections.abc import Mapping
from typing import Any


def stringify(value: Any) -> str:
    """
    Строковое представление значения для подстановки в шаблон.

    Правила:
    - None -> ""
    - bool -> "true" / "false"
    - список/кортеж -> элементы через ", "
    - словарь -> "{ключ: значение, ...}" в порядке вставки
    - остальное -> str(value)
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(stringify(item) for item in value)
    if isinstance(value, Mapping):
        pairs = ", ".join(f"{stringify(k)}: {stringify(v)}" for k, v in value.items())
        return "{" + pairs + "}"
    return str(value)


def is_truthy(value: Any) -> bool:
    """
    Истинность значения для условий {{#if}}.

    None -> False, bool -> само значение, строка/коллекция -> непустота,
    число -> отличие от нуля, прочие объекты -> True.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (str, list, tuple, Mapping)):
        return len(value) > 0
    if isinstance(value, (int, float)):
        return value != 0
    return True


def is_number(value: Any) -> bool:
    """Число в смысле шаблона: int или float, но не bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def escape_html(text: str) -> str:
    """
    Экранирует спецсимволы HTML.

    & -> &amp;, < -> &lt;, > -> &gt;, " -> &quot;, ' -> &#x27;
    """
    return html.escape(text, quote=True)


__all__ = ["stringify", "is_truthy", "is_number", "escape_html"]
