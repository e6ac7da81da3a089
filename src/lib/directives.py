"""
Directive scanner for template control-flow markup

Recognizes the control-flow directives (@if, @else if, @else, @for, @empty,
@switch, @case, @default), tells them apart from ordinary text, and extracts
a directive head - keyword plus its parenthesized condition - as one unit.

Interpolation spans ({{ ... }}) and HTML comments (<!-- ... -->) are opaque:
the scanner only ever skips over them.
"""

import re
from typing import Dict, List, Optional

from ..models.directives import DirectiveSpec, DirectiveKind, CONTROL_FLOW_DIRECTIVES
from ..models.scanner import ExtractedDirective


INTERPOLATION_OPEN = '{{'
INTERPOLATION_CLOSE = '}}'
COMMENT_OPEN = '<!--'
COMMENT_CLOSE = '-->'

# '} @else {' / '} @empty {' written on one line
BLOCK_CHAIN = re.compile(r'\}\s*@(?:else|empty)\b[^{]*\{')

# '} }', '} } }' ... (interpolations are masked before this is applied)
STACKED_CLOSERS = re.compile(r'\}\s*\}')


class DirectiveRegistry:
    """
    Registry of control-flow directive specifications

    Keeps the keyword vocabulary and answers the scanning questions the
    line expander and the reformatter ask about a line.
    """

    def __init__(self, specs: Optional[List[DirectiveSpec]] = None) -> None:
        """Initialize the registry with the built-in vocabulary unless given one"""
        self.specs: List[DirectiveSpec] = []
        for spec in specs if specs is not None else CONTROL_FLOW_DIRECTIVES:
            self.register(spec)

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive, keeping longer keywords ahead of their prefixes"""
        self.specs.append(spec)
        self.specs.sort(key=lambda s: len(s.keyword), reverse=True)

    @property
    def keywords(self) -> List[str]:
        return [spec.keyword for spec in self.specs]

    def directives_listByKind(self) -> Dict[DirectiveKind, List[DirectiveSpec]]:
        """Group registered directives by kind"""
        grouped: Dict[DirectiveKind, List[DirectiveSpec]] = {}
        for spec in self.specs:
            grouped.setdefault(spec.kind, []).append(spec)
        return grouped

    def spec_match(self, text: str) -> Optional[DirectiveSpec]:
        """
        Find the directive that text starts with

        Args:
            text: Text beginning at a candidate '@'

        Returns:
            Matching DirectiveSpec, or None for ordinary text

        Example:
            "@else if (x) {" -> spec for "@else if"
            "@else {"        -> spec for "@else"
            "@ifReady"       -> None
        """
        for spec in self.specs:
            if spec.matches(text):
                return spec
        return None

    def controlFlowDirective_is(self, text: str) -> bool:
        return self.spec_match(text) is not None

    def directiveStart_is(self, line: str, index: int) -> bool:
        """
        Check whether a directive begins at line[index]

        The '@' must not be glued to a preceding word character, so
        addresses like 'admin@if.org' stay text.
        """
        if index >= len(line) or line[index] != '@':
            return False
        if index > 0 and (line[index - 1].isalnum() or line[index - 1] == '_'):
            return False
        return self.controlFlowDirective_is(line[index:])

    def interpolation_skip(self, line: str, start: int) -> int:
        """
        Index just past the '}}' closing the interpolation opened at start

        An unterminated interpolation runs to the end of the line.
        """
        end = line.find(INTERPOLATION_CLOSE, start + len(INTERPOLATION_OPEN))
        return len(line) if end == -1 else end + len(INTERPOLATION_CLOSE)

    def comment_skip(self, line: str, start: int) -> int:
        """Index just past the '-->' closing the comment opened at start"""
        end = line.find(COMMENT_CLOSE, start + len(COMMENT_OPEN))
        return len(line) if end == -1 else end + len(COMMENT_CLOSE)

    def spans_mask(self, line: str) -> str:
        """
        Blank out interpolation and inline comment spans

        Each span collapses to a single space so that the braces inside
        '{{ ... }}' never count as structure. Directive heads are copied
        through unmasked: a '{{' inside a condition belongs to the condition.
        """
        pieces = []
        index = 0
        while index < len(line):
            if self.directiveStart_is(line, index):
                end = self.directive_extract(line, index).next_index
                pieces.append(line[index:end])
                index = end
            elif line.startswith(INTERPOLATION_OPEN, index):
                index = self.interpolation_skip(line, index)
                pieces.append(' ')
            elif line.startswith(COMMENT_OPEN, index):
                index = self.comment_skip(line, index)
                pieces.append(' ')
            else:
                pieces.append(line[index])
                index += 1
        return ''.join(pieces)

    def controlFlowLine_is(self, line: str) -> bool:
        """
        Check whether a line needs the expansion path

        True when the line carries a directive with an opening brace after
        it, a '} @else {' chain, or two or more abutting closing braces.
        Lines that are only '}' are not control-flow lines; the reformatter
        handles them on its own.

        Args:
            line: Source line (surrounding whitespace is ignored)

        Returns:
            True if the line must be split into Allman-style lines
        """
        masked = self.spans_mask(line.strip())
        for index in range(len(masked)):
            if not self.directiveStart_is(masked, index):
                continue
            if '{' in masked[self.directive_extract(masked, index).next_index:]:
                return True
        return bool(BLOCK_CHAIN.search(masked) or STACKED_CLOSERS.search(masked))

    def directive_extract(self, line: str, start: int) -> ExtractedDirective:
        """
        Extract a directive head beginning at start

        Scans forward tracking parenthesis depth. Once a '(' has been seen
        the head ends on the ')' that brings the depth back to zero. A '{'
        at depth zero ends the head without being consumed. Otherwise the
        head runs to the end of the line.

        Args:
            line: Line containing the directive
            start: Index of the directive's '@'

        Returns:
            ExtractedDirective with the trimmed head and the index after it

        Example:
            For "@if (isValid(a, (b+c)))  {" from 0:
            ExtractedDirective(text="@if (isValid(a, (b+c)))", next_index=23)
        """
        depth = 0
        seen_paren = False
        index = start

        while index < len(line):
            char = line[index]
            if char == '(':
                depth += 1
                seen_paren = True
            elif char == ')':
                depth = max(depth - 1, 0)
                if depth == 0 and seen_paren:
                    index += 1
                    break
            elif char == '{' and depth == 0:
                break
            index += 1

        return ExtractedDirective(text=line[start:index].strip(), next_index=index)

    def commentBlock_opens(self, line: str) -> bool:
        """True if line leaves an HTML comment open at its end"""
        start = line.find(COMMENT_OPEN)
        while start != -1:
            end = line.find(COMMENT_CLOSE, start + len(COMMENT_OPEN))
            if end == -1:
                return True
            start = line.find(COMMENT_OPEN, end + len(COMMENT_CLOSE))
        return False

    def commentBlock_closes(self, line: str) -> bool:
        """True if line, read from inside a comment, ends outside of one"""
        end = line.find(COMMENT_CLOSE)
        if end == -1:
            return False
        return not self.commentBlock_opens(line[end + len(COMMENT_CLOSE):])
