"""
Custom Pygments lexer for control-flow template markup

Highlights templates when they are shown on the terminal (--show, --diff).

Token types:
- Keyword: Control-flow directives (@if, @else if, @for, ...)
- Punctuation: Block braces and condition parentheses
- String.Interpol: {{ ... }} interpolation spans
- Comment.Multiline: <!-- ... --> comments (may span lines)
- Name.Tag: HTML tags
"""

import re

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Whitespace,
    Punctuation,
    Name,
    String,
    Keyword,
    Comment,
)

from ..models.directives import CONTROL_FLOW_DIRECTIVES


# Longest keyword first so "@else if" is one token; inner spaces match any run
DIRECTIVE_PATTERN = "|".join(
    re.escape(keyword).replace("\\ ", " ").replace(" ", r"\s+")
    for keyword in sorted(
        (spec.keyword for spec in CONTROL_FLOW_DIRECTIVES), key=len, reverse=True
    )
)


class TemplateLexer(RegexLexer):
    """
    Lexer for HTML templates with @directive control flow

    Example:
        @if (user) { <b>{{ user.name }}</b> }

    Tokens:
        @if → Keyword
        ( user ) → Punctuation / Text / Punctuation
        { → Punctuation
        <b → Name.Tag
        {{ user.name }} → String.Interpol
        } → Punctuation
    """

    name = 'Control-flow template'
    aliases = ['controlflow-html', 'allmanize']
    filenames = ['*.html']

    tokens = {
        'root': [
            # HTML comments
            (r'<!--', Comment.Multiline, 'comment'),

            # Interpolation spans
            (r'\{\{', String.Interpol, 'interpolation'),

            # Control-flow directive with its condition
            (r'(' + DIRECTIVE_PATTERN + r')(?![\w-])(\s*)(\()',
             bygroups(Keyword, Whitespace, Punctuation), 'condition'),
            (r'(' + DIRECTIVE_PATTERN + r')(?![\w-])', Keyword),

            # Block braces
            (r'[{}]', Punctuation),

            # HTML tags
            (r'</?[\w-]+', Name.Tag),
            (r'/?>', Name.Tag),

            (r'\s+', Whitespace),
            (r'[^@<{}\s]+', Text),
            (r'.', Text),
        ],

        'comment': [
            (r'-->', Comment.Multiline, '#pop'),
            (r'[^-]+', Comment.Multiline),
            (r'-', Comment.Multiline),
        ],

        'interpolation': [
            (r'\}\}', String.Interpol, '#pop'),
            (r'[^}]+', String.Interpol),
            (r'\}', String.Interpol),
        ],

        'condition': [
            # Nested parentheses inside a condition
            (r'\(', Punctuation, '#push'),
            (r'\)', Punctuation, '#pop'),
            (r'[^()\n]+', Text),
            # Unbalanced condition: give up at end of line
            (r'\n', Whitespace, '#pop:99'),
        ],
    }


def get_lexer() -> TemplateLexer:
    """
    Get the TemplateLexer instance

    Returns:
        TemplateLexer instance ready for use with Pygments
    """
    return TemplateLexer()
