"""
Scanner-specific data models

Type-safe structures passed between the directive scanner, the line
expander and the reformatter.
"""

from enum import Enum
from pathlib import Path
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class SourceLine:
    """
    One input line split into its leading whitespace and trimmed content

    Attributes:
        raw: The line exactly as read (no line terminator)
        indent: Leading whitespace of raw ("original indent")
        content: raw with surrounding whitespace removed

    Example:
        SourceLine.line_split("    <p>hi</p>  ")
        -> SourceLine(raw="    <p>hi</p>  ", indent="    ", content="<p>hi</p>")
    """
    raw: str
    indent: str
    content: str

    @classmethod
    def line_split(cls, raw: str) -> "SourceLine":
        stripped = raw.lstrip()
        return cls(raw=raw, indent=raw[: len(raw) - len(stripped)], content=stripped.strip())

    @property
    def blank(self) -> bool:
        return not self.content


@dataclass
class ExtractedDirective:
    """
    Result of extracting a directive head from a line

    Returned by DirectiveRegistry.directive_extract().

    Attributes:
        text: Trimmed directive head, condition included (e.g., "@if (x)")
        next_index: Index in the line immediately after the head

    Example:
        For line "@if (a(b)) {" from 0:
        ExtractedDirective(text="@if (a(b))", next_index=10)
    """
    text: str
    next_index: int


@dataclass
class ExpandedLine:
    """
    Result of expanding one control-flow line

    Returned by LineExpander.line_expand().

    Attributes:
        lines: Fully indented output lines, one structural token each
        depth: Nesting depth in effect after the line
    """
    lines: List[str]
    depth: int


class ScanMode(Enum):
    """Per-line dispatch mode of the reformatter"""
    PLAIN = "plain"
    COMMENT = "comment"


@dataclass
class ReformatResult:
    """
    Outcome of reformatting one file

    Attributes:
        path: Source file that was read
        output_path: File the result was (or would be) written to
        changed: Reformatted text differs from the source text
        written: output_path was actually written
        original: Source text
        formatted: Reformatted text
    """
    path: Path
    output_path: Path
    changed: bool
    written: bool = False
    original: str = field(default="", repr=False)
    formatted: str = field(default="", repr=False)
