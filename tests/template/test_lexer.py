"""
Тесты для лексера шаблонов.
"""

import pytest

from jtl.template.lexer import TemplateLexer, tokenize_template
from jtl.template.tokens import TokenType


def _types(text):
    return [t.type for t in tokenize_template(text)]


class TestTemplateLexer:

    def test_plain_variable(self):
        """Текст и переменная"""
        tokens = tokenize_template("Hello, {{name}}!")
        assert [t.type for t in tokens] == [
            TokenType.TEXT, TokenType.VARIABLE, TokenType.TEXT, TokenType.EOF,
        ]
        assert tokens[1].argument == "name"
        assert tokens[1].value == "{{name}}"

    def test_variable_keeps_raw_content(self):
        """Аргумент переменной содержит содержимое тега без обрезки"""
        tokens = tokenize_template("{{ user.name | uppercase }}")
        assert tokens[0].type == TokenType.VARIABLE
        assert tokens[0].argument == " user.name | uppercase "

    def test_block_tags(self):
        """Открывающие и закрывающие теги блоков"""
        tokens = tokenize_template("{{#if a > 1}}x{{/if}}{{#each items}}y{{/each}}")
        assert [t.type for t in tokens] == [
            TokenType.IF_OPEN, TokenType.TEXT, TokenType.IF_CLOSE,
            TokenType.EACH_OPEN, TokenType.TEXT, TokenType.EACH_CLOSE,
            TokenType.EOF,
        ]
        assert tokens[0].argument == "a > 1"
        assert tokens[3].argument == "items"

    def test_literal_open_braces_before_tag(self):
        """Незакрытый '{{' не поглощает следующий тег"""
        tokens = tokenize_template("{{#if ok}}s = '{{';{{/if}}")
        assert [t.type for t in tokens] == [
            TokenType.IF_OPEN, TokenType.TEXT, TokenType.IF_CLOSE, TokenType.EOF,
        ]
        assert tokens[1].value == "s = '{{';"

    def test_include(self):
        """Включение с пробелами вокруг имени"""
        tokens = tokenize_template("{{> header }}")
        assert tokens[0].type == TokenType.INCLUDE
        assert tokens[0].argument == "header"

    @pytest.mark.parametrize("text", [
        "{{#unless x}}",
        "{{/unless}}",
        "{{}}",
        "{{a}",
        "{{>}}",
        "no tags at all",
    ])
    def test_not_a_tag_stays_text(self, text):
        """Нераспознанные конструкции остаются текстом"""
        tokens = tokenize_template(text)
        assert [t.type for t in tokens] == [TokenType.TEXT, TokenType.EOF]
        assert tokens[0].value == text

    def test_empty_text(self):
        assert _types("") == [TokenType.EOF]

    def test_lossless(self):
        """Конкатенация значений токенов восстанавливает исходный текст"""
        text = (
            "<ul>\n{{#each items}}\n  <li>{{ this | uppercase }}</li>\n{{/each}}\n</ul>"
            "{{> footer}}{{#unknown}} {{ { }} }}"
        )
        tokens = tokenize_template(text)
        assert "".join(t.value for t in tokens) == text

    def test_positions(self):
        """Номера строк и колонок"""
        tokens = tokenize_template("a\nbc{{x}}\n{{y}}")
        variables = [t for t in tokens if t.type == TokenType.VARIABLE]
        assert (variables[0].line, variables[0].column) == (2, 3)
        assert (variables[1].line, variables[1].column) == (3, 1)
        assert variables[0].position == 4
        assert variables[0].end == 9

    def test_multiline_condition(self):
        """Условие может содержать перевод строки"""
        tokens = TemplateLexer("{{#if a &&\n b}}x{{/if}}").tokenize()
        assert tokens[0].type == TokenType.IF_OPEN
        assert tokens[0].argument == "a &&\n b"
        assert tokens[1].line == 2
