"""
Тесты рендерера: пять проходов, экранирование, циклы и условия.
"""

import pytest

from jtl.assets import StringAsset, StringAssetBuilder
from jtl.errors import TemplateNotFoundError
from jtl.template.blocks import BlockMatching
from jtl.template.elements import ConditionalStatement
from jtl.template.filters import FilterRegistry
from jtl.template.renderer import TemplateRenderer, include_marker
from jtl.types import Template

from tests.infrastructure.rendering_utils import make_context, render_text


class TestScenarios:

    def test_variable_is_escaped(self):
        assert render_text("Hello, {{name}}!", {"name": "Jet<leaf>"}) == "Hello, Jet&lt;leaf&gt;!"

    @pytest.mark.parametrize("age,expected", [(20, "adult"), (18, "adult"), (10, "")])
    def test_conditional_on_number(self, age, expected):
        assert render_text("{{#if age >= 18}}adult{{/if}}", {"age": age}) == expected

    def test_each_over_list(self):
        text = "{{#each tags}}<li>{{this}}</li>{{/each}}"
        assert render_text(text, {"tags": ["a", "b"]}) == "<li>a</li><li>b</li>"

    def test_unknown_filter_is_identity(self):
        assert render_text("{{x | noSuchFilter}}", {"x": "hi"}) == "hi"
        assert render_text("{{x | noSuchFilter}}", {"x": "<hi>"}) == "&lt;hi&gt;"


class TestVariables:

    def test_missing_variable_is_empty(self):
        assert render_text("[{{missing}}][{{a.b.c}}]", {"a": {}}) == "[][]"

    def test_whitespace_in_tag(self):
        assert render_text("{{  user.name  }}", {"user": {"name": "Ann"}}) == "Ann"

    def test_values_are_stringified(self):
        attrs = {"flag": True, "items": ["x", "y"], "ratio": 1.5}
        assert render_text("{{flag}}|{{items}}|{{ratio}}", attrs) == "true|x, y|1.5"

    def test_escaping_is_total(self):
        assert render_text("{{s}}", {"s": "&<>\"'"}) == "&amp;&lt;&gt;&quot;&#x27;"

    def test_literal_text_is_not_escaped(self):
        assert render_text("<b title='t'>{{x}} & more</b>", {"x": "&"}) == "<b title='t'>&amp; & more</b>"

    def test_unrecognized_tags_stay_literal(self):
        assert render_text("{{#unless x}}y{{/unless}}", {"x": True}) == "{{#unless x}}y{{/unless}}"


class TestFilters:

    def test_chain_order(self):
        assert render_text("{{v | uppercase | substring}}", {"v": "abcdefghijkl"}) == "ABCDEFGHIJ..."

    def test_filters_receive_raw_values(self):
        attrs = {"items": [1, 2, 3], "price": 3.14159, "tags": ["a", "b"]}
        assert render_text("{{items | length}}", attrs) == "3"
        assert render_text("{{price | toFixed}}", attrs) == "3.14"
        assert render_text("{{tags | first | uppercase}}", attrs) == "A"

    def test_filtered_output_is_escaped(self):
        assert render_text("{{v | trim}}", {"v": "  <x>  "}) == "&lt;x&gt;"

    def test_missing_value_with_filter(self):
        assert render_text("{{missing | emptycheck}}") == "N/A"
        assert render_text("{{missing | uppercase}}") == ""

    def test_custom_filter(self):
        registry = FilterRegistry()
        registry.register_filter("double", lambda v: v * 2 if isinstance(v, int) else v)
        renderer = TemplateRenderer(filter_registry=registry)
        assert render_text("{{n | double}}", {"n": 21}, renderer=renderer) == "42"


class TestConditionals:

    def test_true_branch_is_rendered_recursively(self):
        text = "{{#if show}}Hi {{name | uppercase}}{{/if}}!"
        assert render_text(text, {"show": True, "name": "ann"}) == "Hi ANN!"
        assert render_text(text, {"show": False, "name": "ann"}) == "!"

    def test_multiline(self):
        assert render_text("{{#if ok}}\nline\n{{/if}}", {"ok": True}) == "\nline\n"

    def test_malformed_condition_is_false(self):
        assert render_text("{{#if == ==}}x{{/if}}") == ""

    @pytest.mark.parametrize("ok,expected", [(False, ""), (True, "var s = '{{';")])
    def test_literal_open_braces_in_body(self, ok, expected):
        """Литерал '{{' в теле не скрывает закрывающий тег"""
        assert render_text("{{#if ok}}var s = '{{';{{/if}}", {"ok": ok}) == expected

    def test_nested_conditionals(self):
        text = "{{#if a}}A{{#if b}}B{{/if}}{{/if}}"
        assert render_text(text, {"a": True, "b": True}) == "AB"
        assert render_text(text, {"a": True, "b": False}) == "A"
        assert render_text(text, {"a": False, "b": True}) == ""

    def test_nested_conditionals_shallow(self):
        """Режим SHALLOW закрывает внешний блок первым {{/if}}"""
        renderer = TemplateRenderer(block_matching=BlockMatching.SHALLOW)
        text = "{{#if a}}A{{#if b}}B{{/if}}{{/if}}"
        assert render_text(text, {"a": True, "b": False}, renderer=renderer) == "A{{#if b}}B{{/if}}"


class TestLoops:

    @pytest.mark.parametrize("items,expected", [
        ([], ""),
        (["a"], "0:true:true;"),
        (["a", "b", "c"], "0:true:false;1:false:false;2:false:true;"),
    ])
    def test_index_markers(self, items, expected):
        text = "{{#each xs}}{{@index}}:{{@first}}:{{@last}};{{/each}}"
        assert render_text(text, {"xs": items}) == expected

    @pytest.mark.parametrize("value", ["abc", 5, None, {"a": 1}])
    def test_non_sequence_renders_empty(self, value):
        assert render_text("[{{#each xs}}x{{/each}}]", {"xs": value}) == "[]"

    def test_missing_sequence_renders_empty(self):
        assert render_text("[{{#each xs}}x{{/each}}]") == "[]"

    def test_mapping_items(self):
        text = "{{#each users}}{{this.name}}({{title}}),{{/each}}"
        attrs = {"title": "T", "users": [{"name": "A"}, {"name": "B"}]}
        assert render_text(text, attrs) == "A(T),B(T),"

    def test_nested_path(self):
        attrs = {"order": {"lines": ["x", "y"]}}
        assert render_text("{{#each order.lines}}{{this}}{{/each}}", attrs) == "xy"

    def test_item_values_are_escaped(self):
        assert render_text("{{#each xs}}{{this}}{{/each}}", {"xs": ["<", ">"]}) == "&lt;&gt;"

    def test_filters_inside_loop(self):
        text = "{{#each xs}}{{this | uppercase}} {{/each}}"
        assert render_text(text, {"xs": ["a", "b"]}) == "A B "

    def test_nested_loops(self):
        text = "{{#each rows}}[{{#each this}}{{this}}{{/each}}]{{/each}}"
        assert render_text(text, {"rows": [[1, 2], [3]]}) == "[12][3]"

    def test_nested_loops_shallow(self):
        renderer = TemplateRenderer(block_matching=BlockMatching.SHALLOW)
        text = "{{#each rows}}[{{#each this}}{{this}}{{/each}}]{{/each}}"
        assert render_text(text, {"rows": [[1, 2], [3]]}, renderer=renderer) == (
            "[{{#each this}}1, 2[{{#each this}}3]{{/each}}"
        )

    def test_literal_open_braces_in_body(self):
        text = "{{#each xs}}'{{' {{this}};{{/each}}"
        assert render_text(text, {"xs": ["a", "b"]}) == "'{{' a;'{{' b;"
        assert render_text(text, {"xs": []}) == ""

    def test_loop_inside_true_conditional(self):
        text = "{{#if show}}{{#each xs}}{{this}}{{/each}}{{/if}}"
        assert render_text(text, {"show": True, "xs": [1, 2]}) == "12"


class TestIncludes:

    def test_include_marker(self):
        assert render_text("<div>{{> header}}</div>") == "<div><!-- Include: header --></div>"
        assert include_marker("x/y") == "<!-- Include: x/y -->"

    def test_include_inside_conditional(self):
        assert render_text("{{#if ok}}{{>part}}{{/if}}", {"ok": True}) == "<!-- Include: part -->"


class TestRenderResult:

    def test_result_fields(self):
        text = "{{#if ok}}{{name}}{{/if}}"
        asset = StringAsset(text, "inline")
        renderer = TemplateRenderer()
        attrs = {"ok": True, "name": "Ann"}

        result = renderer.render(Template("inline", attrs), make_context(attrs), asset)

        assert result.asset is asset
        assert result.raw_content == text
        assert result.rendered_content == "Ann"
        assert isinstance(result.code_structure.elements[0], ConditionalStatement)

    def test_idempotent(self):
        text = "{{#each xs}}{{this | uppercase}}{{/each}} {{#if n > 1}}many{{/if}}"
        attrs = {"xs": ["a", "b"], "n": 2}
        assert render_text(text, attrs) == render_text(text, attrs) == "AB many"

    def test_asset_builder_is_used(self):
        renderer = TemplateRenderer(asset_builder=StringAssetBuilder({"page": "Hi {{name}}"}))
        attrs = {"name": "Ann"}
        result = renderer.render(Template("page", attrs), make_context(attrs))
        assert result.rendered_content == "Hi Ann"
        assert result.asset.location == "page"

    def test_missing_asset_propagates(self):
        renderer = TemplateRenderer(asset_builder=StringAssetBuilder())
        with pytest.raises(TemplateNotFoundError):
            renderer.render(Template("missing"), make_context())

    def test_no_asset_builder(self):
        with pytest.raises(ValueError, match="no asset builder configured"):
            TemplateRenderer().render(Template("page"), make_context())
