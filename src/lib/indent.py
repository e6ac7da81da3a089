"""
Indentation depth tracking

Depth is a plain counter of open directive blocks. An emitted line is
indented by the configured unit once per open block, followed by the
leading whitespace the line already had in the source, so markup-level
nesting written by the author survives underneath the directive nesting.
"""

from typing import Optional


class IndentTracker:
    """
    Depth arithmetic and prefix construction

    The tracker itself is stateless: the running depth is threaded through
    the caller's loop and passed in explicitly.

    Example:
        >>> tracker = IndentTracker("  ")
        >>> tracker.line_emit(2, "\\t", "<p>hi</p>")
        '    \\t<p>hi</p>'
        >>> tracker.depth_close(0)
        0
    """

    def __init__(self, unit: Optional[str] = None) -> None:
        if unit is None:
            from ..config import appsettings
            unit = appsettings.indent_unit
        self.unit = unit

    def depth_open(self, depth: int) -> int:
        return depth + 1

    def depth_close(self, depth: int) -> int:
        """Close one block; unbalanced closers clamp at zero instead of failing"""
        return max(depth - 1, 0)

    def prefix_make(self, depth: int, original_indent: str = "") -> str:
        return self.unit * max(depth, 0) + original_indent

    def line_emit(self, depth: int, original_indent: str, text: str) -> str:
        if not text:
            return ""
        return self.prefix_make(depth, original_indent) + text
