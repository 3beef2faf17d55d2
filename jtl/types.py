from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Protocol, runtime_checkable


@dataclass(frozen=True)
class Template:
    """
    Шаблон для рендеринга: идентификатор (путь) и словарь атрибутов.

    Атрибуты копируются при создании и доступны только для чтения.
    """
    location: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def with_attributes(self, attributes: Mapping[str, Any]) -> "Template":
        """Новый шаблон с тем же путем и другими атрибутами."""
        return Template(self.location, attributes)


@runtime_checkable
class Asset(Protocol):
    """Источник исходного текста шаблона."""

    def get_content_as_string(self) -> str: ...


@runtime_checkable
class AssetBuilder(Protocol):
    """
    Поставщик ассетов по идентификатору шаблона.

    Ошибка поиска пробрасывается вызывающему коду без изменений.
    """

    def build(self, location: str) -> Asset: ...


__all__ = ["Template", "Asset", "AssetBuilder"]
