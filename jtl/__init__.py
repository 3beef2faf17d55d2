"""
JTL: logic-annotated template rendering.

Public API re-exported for embedding callers.
"""

from __future__ import annotations

from .assets import FileAsset, FileAssetBuilder, StringAsset, StringAssetBuilder
from .cache import InMemoryTemplateCache, NullTemplateCache, TemplateCache
from .engine import JtlEngine, create_engine
from .errors import ConfigLoadError, JtlUserError, TemplateNotFoundError
from .template import (
    BlockMatching,
    CodeStructure,
    ExpressionEvaluator,
    FilterRegistry,
    SourceCode,
    TemplateContext,
    TemplateRenderer,
    DefaultVariableResolver,
)
from .types import Asset, AssetBuilder, Template

__all__ = [
    "JtlEngine",
    "create_engine",
    "Template",
    "Asset",
    "AssetBuilder",
    "StringAsset",
    "FileAsset",
    "FileAssetBuilder",
    "StringAssetBuilder",
    "TemplateCache",
    "InMemoryTemplateCache",
    "NullTemplateCache",
    "JtlUserError",
    "TemplateNotFoundError",
    "ConfigLoadError",
    "BlockMatching",
    "CodeStructure",
    "ExpressionEvaluator",
    "FilterRegistry",
    "SourceCode",
    "TemplateContext",
    "TemplateRenderer",
    "DefaultVariableResolver",
]
