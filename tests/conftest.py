import textwrap
from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Минимальный проект: jtl-cfg/jtl.yaml + несколько шаблонов в templates/."""
    root = tmp_path
    write(
        root / "jtl-cfg" / "jtl.yaml",
        textwrap.dedent("""
        templates_dir: templates
        cache: true
        block_matching: nested
        """).strip() + "\n",
    )
    write(root / "templates" / "greeting.html", "Hello, {{name}}!\n")
    write(root / "templates" / "adult.jtl", "{{#if age >= 18}}adult{{/if}}")
    write(root / "templates" / "list.html", "<ul>{{#each tags}}<li>{{this}}</li>{{/each}}</ul>")
    write(
        root / "templates" / "page.html",
        "{{> header}}\n{{#if user.name}}Hi {{user.name | uppercase}}{{/if}}\n",
    )
    return root


@pytest.fixture(autouse=True)
def _clear_cache_env(monkeypatch):
    # переменная окружения не должна влиять на тесты конфигурации
    monkeypatch.delenv("JTL_CACHE", raising=False)
