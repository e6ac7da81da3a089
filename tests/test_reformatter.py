"""
Template reformatter tests

Tests whole-document reformatting: the Allman scenarios, depth threading
across lines, comment blocks, line endings, idempotence, and the
file-level write-on-change behaviour.
"""

import pytest

from allmanize.lib.directives import DirectiveRegistry
from allmanize.lib.reformatter import Reformatter, reformat


@pytest.fixture
def reformatter():
    return Reformatter(indent_unit="    ")


SAMPLES = [
    "@if (x) {\n  <p>hi</p>\n} @else {\n  <p>bye</p>\n}",
    "@if (a) {\n@if (b) {\n<p>x</p>\n} }\n",
    (
        "<ul>\n"
        "  @for (item of items; track item.id) {\n"
        "    <li>{{ item.name }}</li>\n"
        "  } @empty {\n"
        "    <li>None</li>\n"
        "  }\n"
        "</ul>\n"
    ),
    (
        "@switch (mode) {\n"
        "  @case ('a') { <a-view/> }\n"
        "  @case ('b') {\n"
        "    <b-view/>\n"
        "  }\n"
        "  @default { <p>{{ fallback }}</p> }\n"
        "}\n"
    ),
    "<div>@if (user) {<span>{{ user.name }}</span>} @else {<span>guest</span>}</div>",
    "@if (a) {\n<!-- note\n  @if (b) { } }\n-->\n<p>x</p>\n}\n",
    "}\n} }\n@if (x) {\n",
    "@if (isValid(a, (b+c)))  {\n<p>ok</p>\n} @else if (other) {\n<p>other</p>\n}\r\n",
    "@if (a) {\r\n\t<p>tab</p>\r\n}\r\n",
    "",
    "\n\n",
]


class TestScenarios:
    """Test the documented reformatting scenarios"""

    def test_if_else_block(self, reformatter):
        """'} @else {' splits into brace, head, brace with bodies one level in"""
        source = "@if (x) {\n<p>hi</p>\n} @else {\n<p>bye</p>\n}"
        assert reformatter.document_reformat(source).split("\n") == [
            "@if (x)",
            "{",
            "    <p>hi</p>",
            "}",
            "@else",
            "{",
            "    <p>bye</p>",
            "}",
        ]

    def test_author_indent_kept_under_depth(self, reformatter):
        """Content keeps its own indent on top of the block indent"""
        source = "@if (x) {\n  <p>hi</p>\n}"
        assert reformatter.document_reformat(source).split("\n") == [
            "@if (x)",
            "{",
            "      <p>hi</p>",
            "}",
        ]

    def test_stacked_closers(self, reformatter):
        """'} }' on one line closes two levels on two lines"""
        source = "@if (a) {\n@if (b) {\n<p>x</p>\n} }"
        assert reformatter.document_reformat(source).split("\n") == [
            "@if (a)",
            "{",
            "    @if (b)",
            "    {",
            "        <p>x</p>",
            "    }",
            "}",
        ]

    def test_interpolation_line_passes_through(self, reformatter):
        """A content line with interpolation is only indented"""
        source = "@if (u) {\n<div>{{ user.name }}</div>\n}"
        assert reformatter.document_reformat(source).split("\n") == [
            "@if (u)",
            "{",
            "    <div>{{ user.name }}</div>",
            "}",
        ]

    def test_interpolation_line_at_top_level_unchanged(self, reformatter):
        """At depth zero an interpolation line is left exactly as written"""
        source = "  <div>{{ user.name }}</div>"
        assert reformatter.document_reformat(source) == source

    def test_lone_closer_dedents(self, reformatter):
        """A line holding only '}' closes the open block"""
        source = "@for (i of xs; track i) {\n<li>{{ i }}</li>\n}\n<p>after</p>"
        assert reformatter.document_reformat(source).split("\n") == [
            "@for (i of xs; track i)",
            "{",
            "    <li>{{ i }}</li>",
            "}",
            "<p>after</p>",
        ]

    def test_custom_indent_unit(self):
        """The indentation unit is configurable"""
        assert reformat("@if (x) {\n<p>hi</p>\n}", indent_unit="\t") == "@if (x)\n{\n\t<p>hi</p>\n}"


class TestCommentsAndBlanks:
    """Test pass-through lines"""

    def test_blank_lines_kept_empty(self, reformatter):
        """Blank and whitespace-only lines come out empty"""
        assert reformatter.document_reformat("a\n\n   \nb") == "a\n\n\nb"

    def test_multiline_comment_verbatim(self, reformatter):
        """Lines inside a comment block are untouched and do not move the depth"""
        source = "@if (a) {\n<!-- start\n  @if (b) { } }\nend -->\n<p>x</p>\n}"
        assert reformatter.document_reformat(source).split("\n") == [
            "@if (a)",
            "{",
            "<!-- start",
            "  @if (b) { } }",
            "end -->",
            "    <p>x</p>",
            "}",
        ]

    def test_inline_comment_not_structural(self, reformatter):
        """A directive inside a one-line comment is not expanded"""
        source = "<!-- @if (x) { -->"
        assert reformatter.document_reformat(source) == source

    def test_comment_reopened_on_closing_line(self, reformatter):
        """A comment opened after '-->' on the same line keeps comment mode"""
        source = "<!-- a\nb --> <!-- c\n@if (x) {\n-->\n@if (y) {"
        assert reformatter.document_reformat(source).split("\n") == [
            "<!-- a",
            "b --> <!-- c",
            "@if (x) {",
            "-->",
            "@if (y)",
            "{",
        ]


class TestLineEndings:
    """Test newline handling"""

    def test_trailing_newline_kept(self, reformatter):
        """A trailing newline survives reformatting"""
        assert reformatter.document_reformat("@if (x) {\n}\n") == "@if (x)\n{\n}\n"

    def test_crlf_kept(self, reformatter):
        """CRLF documents come back with CRLF"""
        source = "@if (x) {\r\n<p>a</p>\r\n}\r\n"
        assert reformatter.document_reformat(source) == "@if (x)\r\n{\r\n    <p>a</p>\r\n}\r\n"


class TestConditionInterpolation:
    """Test '{{' inside a directive condition"""

    def test_block_opened(self, reformatter):
        """The condition keeps its text and the block body is indented"""
        source = "@if (a === '{{') {\n<p>x</p>\n}"
        assert reformatter.document_reformat(source).split("\n") == [
            "@if (a === '{{')",
            "{",
            "    <p>x</p>",
            "}",
        ]

    def test_idempotent(self, reformatter):
        """A second run leaves the split head alone"""
        once = reformatter.document_reformat("@if (a === '{{') {\n<p>x</p>\n}")
        assert reformatter.document_reformat(once) == once


class TestRobustness:
    """Test tolerant handling of malformed input"""

    @pytest.mark.parametrize("source", [
        "}\n}\n}",
        "} } } }",
        "@if (a(b {\n<p>x</p>",
        "{{ unterminated\n@if (x) { {{ y",
        "<!-- never closed\n@if (x) {",
        "@else\n@empty {\n}}}",
    ])
    def test_never_raises(self, reformatter, source):
        """Malformed structure is reformatted without error"""
        assert isinstance(reformatter.document_reformat(source), str)

    def test_extra_closers_clamp(self, reformatter):
        """Closers beyond depth zero leave later lines unindented"""
        source = "}\n}\n<p>x</p>"
        assert reformatter.document_reformat(source) == source

    def test_unrecognized_directive_is_text(self, reformatter):
        """'@ifReady {' is ordinary content"""
        source = "@ifReady {"
        assert reformatter.document_reformat(source) == source


class TestProperties:
    """Test properties that hold for every document"""

    @pytest.mark.parametrize("source", SAMPLES)
    def test_idempotent(self, reformatter, source):
        """Reformatting twice equals reformatting once"""
        once = reformatter.document_reformat(source)
        assert reformatter.document_reformat(once) == once

    @pytest.mark.parametrize("source", SAMPLES[:5] + SAMPLES[7:9])
    def test_one_structural_token_per_line(self, reformatter, source):
        """Braces only ever appear alone on their line"""
        registry = DirectiveRegistry()
        for line in reformatter.document_reformat(source).splitlines():
            masked = registry.spans_mask(line.strip())
            head = registry.spec_match(masked)
            if head is not None:
                # Condition parentheses may hold braces, nothing may follow them
                assert registry.directive_extract(masked, 0).text == masked
            elif "{" in masked or "}" in masked:
                assert masked in ("{", "}")

    @pytest.mark.parametrize("source", SAMPLES)
    def test_interpolation_preserved(self, reformatter, source):
        """Every '{{ ... }}' span appears unchanged in the output"""
        import re

        output = reformatter.document_reformat(source)
        for span in re.findall(r"\{\{.*?\}\}", source):
            assert span in output
