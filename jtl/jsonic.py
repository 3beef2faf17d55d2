from __future__ import annotations

import json
from typing import Any


def dumps(data: Any) -> str:
    """JSON для вывода CLI: UTF-8 без экранирования, с отступами."""
    return json.dumps(data, ensure_ascii=False, indent=2)

__all__ = ["dumps"]
