"""
Тесты ассетов и поставщиков ассетов.
"""

from pathlib import Path

import pytest

from jtl.assets import FileAsset, FileAssetBuilder, StringAsset, StringAssetBuilder
from jtl.errors import JtlUserError, TemplateNotFoundError
from jtl.types import Asset, AssetBuilder

from tests.infrastructure.file_utils import write


class TestFileAssetBuilder:

    def test_exact_name(self, tmp_path: Path):
        write(tmp_path / "page.txt", "exact")
        asset = FileAssetBuilder(tmp_path).build("page.txt")
        assert asset.get_content_as_string() == "exact"

    def test_suffix_resolution_order(self, tmp_path: Path):
        write(tmp_path / "page.jtl", "jtl")
        write(tmp_path / "page.tpl", "tpl")
        asset = FileAssetBuilder(tmp_path).build("page")
        assert asset.path == tmp_path / "page.jtl"

    def test_nested_location(self, tmp_path: Path):
        write(tmp_path / "mail" / "welcome.html", "Привет, {{name}}")
        asset = FileAssetBuilder(tmp_path).build("mail/welcome")
        assert asset.get_content_as_string() == "Привет, {{name}}"

    def test_custom_suffixes(self, tmp_path: Path):
        write(tmp_path / "page.md", "md")
        assert FileAssetBuilder(tmp_path, suffixes=[".md"]).build("page").location.endswith("page.md")

    def test_not_found(self, tmp_path: Path):
        builder = FileAssetBuilder(tmp_path)
        with pytest.raises(TemplateNotFoundError) as exc_info:
            builder.build("missing")

        err = exc_info.value
        assert isinstance(err, JtlUserError)
        assert isinstance(err, FileNotFoundError)
        assert err.location == "missing"
        assert len(err.searched) == 4
        assert "Template not found: missing" in str(err)

    def test_directory_is_not_a_template(self, tmp_path: Path):
        (tmp_path / "dir").mkdir()
        with pytest.raises(TemplateNotFoundError):
            FileAssetBuilder(tmp_path).build("dir")

    def test_protocols(self, tmp_path: Path):
        assert isinstance(FileAssetBuilder(tmp_path), AssetBuilder)
        assert isinstance(FileAsset(tmp_path / "x"), Asset)


class TestStringAssets:

    def test_string_asset(self):
        asset = StringAsset("text")
        assert asset.get_content_as_string() == "text"
        assert asset.location == "<string>"
        assert asset == StringAsset("text")

    def test_string_asset_builder(self):
        builder = StringAssetBuilder({"a": "A"}).add("b", "B")
        assert builder.build("a") == StringAsset("A", "a")
        assert builder.build("b").get_content_as_string() == "B"

    def test_string_asset_builder_missing(self):
        with pytest.raises(TemplateNotFoundError, match="Template not found: x"):
            StringAssetBuilder().build("x")
