"""
Реестр фильтров шаблона.

Фильтр - функция одного значения, применяемая в цепочке {{ path | f1 | f2 }}.
Встроенные фильтры тотальны: для неподходящего входа возвращают значение
без изменений (или нейтральный результат), но не выбрасывают исключений.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

from .common import escape_html, is_number, stringify

TemplateFilter = Callable[[Any], Any]

# Символы, которые encodeURIComponent оставляет без кодирования помимо букв и цифр
_URL_SAFE = "-_.!~*'()"

_SUBSTRING_LIMIT = 10

_CENTS = Decimal("0.01")
# Хватает для любого конечного float с двумя знаками после запятой
_FIXED_CONTEXT = Context(prec=400)


def _is_float(value: Any) -> bool:
    return isinstance(value, float)


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _round_half_away(value: float) -> Any:
    if not math.isfinite(value):
        return value
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def _capitalize_word(word: str) -> str:
    return word[:1].upper() + word[1:]


# ---------------------------- строки ---------------------------- #

def _uppercase(value: Any) -> Any:
    return stringify(value).upper()


def _lowercase(value: Any) -> Any:
    return stringify(value).lower()


def _trim(value: Any) -> Any:
    return stringify(value).strip()


def _capitalize(value: Any) -> Any:
    return _capitalize_word(stringify(value))


def _titlecase(value: Any) -> Any:
    return " ".join(_capitalize_word(word) for word in stringify(value).split(" "))


# ---------------------------- размер и форма ---------------------------- #

def _length(value: Any) -> Any:
    if isinstance(value, (str, list, tuple, Mapping)):
        return len(value)
    return 0


def _size(value: Any) -> Any:
    if isinstance(value, (list, tuple, Mapping)):
        return len(value)
    return 0


def _reverse(value: Any) -> Any:
    if isinstance(value, str):
        return value[::-1]
    if isinstance(value, (list, tuple)):
        return list(reversed(value))
    return value


def _substring(value: Any) -> Any:
    if isinstance(value, str) and len(value) > _SUBSTRING_LIMIT:
        return value[:_SUBSTRING_LIMIT] + "..."
    return value


# ---------------------------- числа ---------------------------- #

def _abs(value: Any) -> Any:
    return abs(value) if is_number(value) else value


def _round(value: Any) -> Any:
    return _round_half_away(value) if _is_float(value) else value


def _ceil(value: Any) -> Any:
    if _is_float(value) and math.isfinite(value):
        return math.ceil(value)
    return value


def _floor(value: Any) -> Any:
    if _is_float(value) and math.isfinite(value):
        return math.floor(value)
    return value


def _to_fixed(value: Any) -> Any:
    if not _is_float(value) or not math.isfinite(value):
        return value
    return format(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT), "f")


# ---------------------------- условные ---------------------------- #

def _default(value: Any) -> Any:
    return "" if _is_empty(value) else value


def _emptycheck(value: Any) -> Any:
    return "N/A" if _is_empty(value) else value


# ---------------------------- списки ---------------------------- #

def _first(value: Any) -> Any:
    if isinstance(value, (list, tuple)) and value:
        return value[0]
    return value


def _last(value: Any) -> Any:
    if isinstance(value, (list, tuple)) and value:
        return value[-1]
    return value


def _join(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ", ".join(stringify(item) for item in value)
    return value


# ---------------------------- кодирование ---------------------------- #

def _urlencode(value: Any) -> Any:
    return quote(stringify(value), safe=_URL_SAFE)


def _htmlescape(value: Any) -> Any:
    return escape_html(stringify(value))


BUILTIN_FILTERS: Dict[str, TemplateFilter] = {
    "uppercase": _uppercase,
    "lowercase": _lowercase,
    "trim": _trim,
    "capitalize": _capitalize,
    "titlecase": _titlecase,
    "length": _length,
    "size": _size,
    "reverse": _reverse,
    "substring": _substring,
    "abs": _abs,
    "round": _round,
    "ceil": _ceil,
    "floor": _floor,
    "toFixed": _to_fixed,
    "default": _default,
    "emptycheck": _emptycheck,
    "first": _first,
    "last": _last,
    "join": _join,
    "urlencode": _urlencode,
    "htmlescape": _htmlescape,
}


class FilterRegistry:
    """
    Реестр именованных фильтров.

    Имена чувствительны к регистру. Повторная регистрация имени
    заменяет предыдущий фильтр.
    """

    def __init__(self, register_builtins: bool = True):
        """
        Args:
            register_builtins: Зарегистрировать встроенные фильтры
        """
        self._filters: Dict[str, TemplateFilter] = {}
        if register_builtins:
            self._filters.update(BUILTIN_FILTERS)

    def get_filter(self, name: str) -> Optional[TemplateFilter]:
        """Возвращает фильтр по имени или None."""
        return self._filters.get(name)

    def register_filter(self, name: str, filter_fn: TemplateFilter) -> None:
        """
        Регистрирует фильтр, перезаписывая существующий с тем же именем.

        Raises:
            TypeError: Если filter_fn не вызываемый объект
        """
        if not callable(filter_fn):
            raise TypeError(f"Filter '{name}' must be callable, got {type(filter_fn).__name__}")
        self._filters[name] = filter_fn

    def has_filter(self, name: str) -> bool:
        return name in self._filters

    def names(self) -> List[str]:
        """Имена зарегистрированных фильтров в порядке регистрации."""
        return list(self._filters)

    def apply_chain(self, value: Any, names: List[str]) -> Any:
        """
        Применяет фильтры слева направо.

        Неизвестное имя пропускается, значение передается дальше без изменений.
        """
        for name in names:
            filter_fn = self._filters.get(name)
            if filter_fn is not None:
                value = filter_fn(value)
        return value


__all__ = ["TemplateFilter", "FilterRegistry", "BUILTIN_FILTERS"]
