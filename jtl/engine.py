"""
Engine facade: cache lookup, variable binding and rendering.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from .assets import FileAssetBuilder, StringAsset
from .cache import InMemoryTemplateCache, NullTemplateCache, TemplateCache
from .config import EngineConfig, load_config
from .template.blocks import BlockMatching
from .template.context import TemplateContext
from .template.elements import DEFAULT_STRUCTURE_TYPE, SourceCode
from .template.evaluator import ExpressionEvaluator
from .template.filters import FilterRegistry
from .template.protocols import ExpressionEvaluatorProtocol, VariableResolverProtocol
from .template.renderer import TemplateRenderer
from .template.resolver import DefaultVariableResolver
from .types import Asset, AssetBuilder, Template

logger = logging.getLogger(__name__)


class JtlEngine:
    """
    Engine coordinating class.

    Owns the collaborators shared between renders:
    - TemplateCache keyed by template location
    - FilterRegistry, ExpressionEvaluator and VariableResolver
    - TemplateRenderer, built lazily from the registry and asset builder

    Not thread-safe: the resolver variables are replaced on every render.
    """

    def __init__(
        self,
        cache: Optional[TemplateCache] = None,
        asset_builder: Optional[AssetBuilder] = None,
        filter_registry: Optional[FilterRegistry] = None,
        expression_evaluator: Optional[ExpressionEvaluatorProtocol] = None,
        variable_resolver: Optional[VariableResolverProtocol] = None,
        renderer: Optional[TemplateRenderer] = None,
        block_matching: BlockMatching = BlockMatching.NESTED,
        structure_type: str = DEFAULT_STRUCTURE_TYPE,
    ):
        self._cache: TemplateCache = cache if cache is not None else InMemoryTemplateCache()
        self._asset_builder = asset_builder
        self._filter_registry = filter_registry if filter_registry is not None else FilterRegistry()
        self._expression_evaluator = expression_evaluator if expression_evaluator is not None else ExpressionEvaluator()
        self._variable_resolver = variable_resolver if variable_resolver is not None else DefaultVariableResolver()
        self._renderer = renderer
        self._block_matching = block_matching
        self._structure_type = structure_type

    # ---------------------------- getters ---------------------------- #

    @property
    def cache(self) -> TemplateCache:
        return self._cache

    @property
    def asset_builder(self) -> Optional[AssetBuilder]:
        return self._asset_builder

    @property
    def filter_registry(self) -> FilterRegistry:
        return self._filter_registry

    @property
    def expression_evaluator(self) -> ExpressionEvaluatorProtocol:
        return self._expression_evaluator

    @property
    def variable_resolver(self) -> VariableResolverProtocol:
        return self._variable_resolver

    @property
    def renderer(self) -> TemplateRenderer:
        if self._renderer is None:
            self._renderer = TemplateRenderer(
                filter_registry=self._filter_registry,
                asset_builder=self._asset_builder,
                block_matching=self._block_matching,
                structure_type=self._structure_type,
            )
        return self._renderer

    # ---------------------------- setters ---------------------------- #

    def set_cache(self, cache: TemplateCache) -> None:
        self._cache = cache

    def set_asset_builder(self, asset_builder: AssetBuilder) -> None:
        self._asset_builder = asset_builder
        self._renderer = None

    def set_filter_registry(self, filter_registry: FilterRegistry) -> None:
        self._filter_registry = filter_registry
        self._renderer = None

    def set_expression_evaluator(self, expression_evaluator: ExpressionEvaluatorProtocol) -> None:
        self._expression_evaluator = expression_evaluator

    def set_variable_resolver(self, variable_resolver: VariableResolverProtocol) -> None:
        self._variable_resolver = variable_resolver

    def set_renderer(self, renderer: TemplateRenderer) -> None:
        self._renderer = renderer

    # ---------------------------- rendering ---------------------------- #

    def render(
        self,
        template: Template,
        asset: Optional[Asset] = None,
        use_cache: bool = True,
    ) -> SourceCode:
        """
        Render a template, consulting the cache by location first.

        The cache key ignores attributes: a cached result is returned
        as is even if the attributes differ from the ones that produced it.

        Args:
            template: Template with attributes
            asset: Preloaded asset; the asset builder is used when omitted
            use_cache: Look up and store the result in the cache

        Returns:
            Render result
        """
        if use_cache:
            cached = self._cache.get(template.location)
            if cached is not None:
                logger.debug(f"Cache hit for '{template.location}'")
                return cached

        self._variable_resolver.set_variables(template.attributes)
        context = TemplateContext(
            variable_resolver=self._variable_resolver,
            expression_evaluator=self._expression_evaluator,
        )
        result = self.renderer.render(template, context, asset)
        logger.debug(f"Rendered '{template.location}' ({len(result.rendered_content)} chars)")

        if use_cache:
            self._cache.put(template.location, result)
        return result

    def render_string(self, text: str, attributes: Optional[Mapping[str, Any]] = None, location: str = "<string>") -> str:
        """Render an inline template without touching the cache."""
        template = Template(location, attributes or {})
        return self.render(template, StringAsset(text, location), use_cache=False).rendered_content


def create_engine(root: Path, config: Optional[EngineConfig] = None) -> JtlEngine:
    """
    Build an engine for a project directory.

    Args:
        root: Project root containing jtl-cfg/ and the templates directory
        config: Explicit configuration; loaded from jtl-cfg/jtl.yaml when omitted

    Returns:
        Configured engine
    """
    cfg = config if config is not None else load_config(root)
    templates_dir = (Path(root) / cfg.templates_dir).resolve()
    logger.debug(f"Creating engine: templates_dir={templates_dir}, cache={cfg.cache}, "
                 f"block_matching={cfg.block_matching.value}")

    return JtlEngine(
        cache=InMemoryTemplateCache() if cfg.cache else NullTemplateCache(),
        asset_builder=FileAssetBuilder(templates_dir, cfg.suffixes),
        block_matching=cfg.block_matching,
        structure_type=cfg.structure_type,
    )


__all__ = ["JtlEngine", "create_engine"]
