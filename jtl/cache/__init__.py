from .template_cache import InMemoryTemplateCache, NullTemplateCache, TemplateCache

__all__ = ["TemplateCache", "InMemoryTemplateCache", "NullTemplateCache"]
