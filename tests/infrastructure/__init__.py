"""
Общая инфраструктура тестов JTL.
"""

from .file_utils import write
from .rendering_utils import make_context, render_text

__all__ = ["write", "make_context", "render_text"]
