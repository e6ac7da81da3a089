"""
Terminal previews of reformatting results

Renders reformatted documents and unified diffs with Pygments so that
--show and --diff output is readable on a terminal.
"""

import difflib

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer

from ..models.scanner import ReformatResult
from .lexer import TemplateLexer


def diff_make(result: ReformatResult) -> str:
    """
    Unified diff between a file's original and reformatted text

    Returns:
        Diff text, empty when the file did not change
    """
    if not result.changed:
        return ""
    diff = difflib.unified_diff(
        result.original.splitlines(keepends=True),
        result.formatted.splitlines(keepends=True),
        fromfile=f"a/{result.path}",
        tofile=f"b/{result.output_path}",
    )
    return "".join(diff)


def diff_render(result: ReformatResult, color: bool = True) -> str:
    """Diff for result, highlighted for the terminal when color is set"""
    diff = diff_make(result)
    if not diff or not color:
        return diff
    return highlight(diff, DiffLexer(), TerminalFormatter())


def source_render(text: str, color: bool = True) -> str:
    """Template text highlighted with TemplateLexer"""
    if not color:
        return text
    return highlight(text, TemplateLexer(), TerminalFormatter())
