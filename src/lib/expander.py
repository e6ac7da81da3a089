"""
Line expander - splits one control-flow line into Allman-style lines

A single left-to-right scan over the trimmed line. Every directive head,
opening brace and closing brace found on the line is emitted on a line of
its own; the text between them is collected in a pending buffer and emitted
as one line whenever a structural token interrupts it.

Example:
    depth 0, "@if (x) { <b>hi</b> } @else {"  ->
        @if (x)
        {
            <b>hi</b>
        }
        @else
        {
    depth after the line: 1
"""

from typing import List, Optional

from ..models.scanner import ExpandedLine
from .directives import DirectiveRegistry, INTERPOLATION_OPEN, COMMENT_OPEN
from .indent import IndentTracker


class LineExpander:
    """
    Per-line transformer used by the Reformatter for control-flow lines

    The expander keeps no state between calls: the depth in effect at the
    start of the line goes in, the depth after it comes back out.
    """

    def __init__(
        self,
        tracker: Optional[IndentTracker] = None,
        registry: Optional[DirectiveRegistry] = None,
    ) -> None:
        self.tracker = tracker or IndentTracker()
        self.registry = registry or DirectiveRegistry()

    def line_expand(self, content: str, original_indent: str, depth: int) -> ExpandedLine:
        """
        Expand one line into one-structural-token-per-line output

        Args:
            content: Source line with surrounding whitespace removed
            original_indent: Leading whitespace of the source line, repeated
                             on every emitted line after the depth indent
            depth: Nesting depth in effect at the start of the line

        Returns:
            ExpandedLine with the indented output lines and the new depth
        """
        lines: List[str] = []
        pending: List[str] = []
        current = depth
        index = 0

        while index < len(content):
            char = content[index]

            if content.startswith(INTERPOLATION_OPEN, index):
                end = self.registry.interpolation_skip(content, index)
                pending.append(content[index:end])
                index = end

            elif content.startswith(COMMENT_OPEN, index):
                end = self.registry.comment_skip(content, index)
                pending.append(content[index:end])
                index = end

            elif self.registry.directiveStart_is(content, index):
                self.pending_flush(pending, lines, current, original_indent)
                directive = self.registry.directive_extract(content, index)
                lines.append(self.tracker.line_emit(current, original_indent, directive.text))
                index = directive.next_index

                brace = self.whitespace_skip(content, index)
                if self.blockOpener_is(content, brace):
                    lines.append(self.tracker.line_emit(current, original_indent, '{'))
                    current = self.tracker.depth_open(current)
                    index = brace + 1

            elif char == '}':
                self.pending_flush(pending, lines, current, original_indent)
                current = self.tracker.depth_close(current)
                lines.append(self.tracker.line_emit(current, original_indent, '}'))
                index += 1

            elif char == '{':
                self.pending_flush(pending, lines, current, original_indent)
                lines.append(self.tracker.line_emit(current, original_indent, '{'))
                current = self.tracker.depth_open(current)
                index += 1

            else:
                pending.append(char)
                index += 1

        self.pending_flush(pending, lines, current, original_indent)

        if not lines:
            lines.append(self.tracker.line_emit(depth, original_indent, content))

        return ExpandedLine(lines=lines, depth=current)

    def pending_flush(
        self, pending: List[str], lines: List[str], depth: int, original_indent: str
    ) -> None:
        """Emit buffered text as one line; whitespace-only buffers are dropped"""
        text = ''.join(pending).strip()
        pending.clear()
        if text:
            lines.append(self.tracker.line_emit(depth, original_indent, text))

    @staticmethod
    def whitespace_skip(content: str, index: int) -> int:
        while index < len(content) and content[index].isspace():
            index += 1
        return index

    @staticmethod
    def blockOpener_is(content: str, index: int) -> bool:
        # '{{' after a head is an interpolation, not the block
        return (
            index < len(content)
            and content[index] == '{'
            and not content.startswith(INTERPOLATION_OPEN, index)
        )
