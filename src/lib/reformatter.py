"""
Template reformatter - drives a document through the line expander

Walks the document one line at a time, threading the running depth from
line to line:

- blank lines come out empty
- lines inside a multi-line <!-- ... --> comment come out verbatim
- a lone '}' closes one block
- ordinary lines are re-indented without touching the depth
- control-flow lines go through the LineExpander, which also returns the
  depth for the next line

The transformation never raises: unbalanced closers clamp the depth at
zero and malformed spans run to the end of their line.

Example:
    >>> reformat("@if (x) {\\n<p>hi</p>\\n}")
    '@if (x)\\n{\\n    <p>hi</p>\\n}'
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..models.scanner import SourceLine, ScanMode, ReformatResult
from .directives import DirectiveRegistry
from .expander import LineExpander
from .indent import IndentTracker
from .log import LOG


class Reformatter:
    """
    Re-emits template documents with Allman-style directive blocks

    Args:
        indent_unit: Whitespace added per open block (defaults to
                     appsettings.indent_unit)
        registry: Directive vocabulary (defaults to the built-in one)
    """

    def __init__(
        self,
        indent_unit: Optional[str] = None,
        registry: Optional[DirectiveRegistry] = None,
    ) -> None:
        self.tracker = IndentTracker(indent_unit)
        self.registry = registry or DirectiveRegistry()
        self.expander = LineExpander(self.tracker, self.registry)

    def lines_reformat(self, lines: Iterable[str]) -> List[str]:
        """
        Reformat a sequence of lines (without line terminators)

        Args:
            lines: Source lines in document order

        Returns:
            Output lines; control-flow lines may expand into several
        """
        output: List[str] = []
        depth = 0
        mode = ScanMode.PLAIN

        for number, raw in enumerate(lines, start=1):
            if mode is ScanMode.COMMENT:
                output.append(raw)
                if self.registry.commentBlock_closes(raw):
                    mode = ScanMode.PLAIN
                continue

            line = SourceLine.line_split(raw)

            if line.blank:
                output.append('')
                continue

            if self.registry.commentBlock_opens(line.content):
                LOG(f"line {number}: comment block opens", level=3)
                mode = ScanMode.COMMENT
                output.append(raw)
                continue

            if not self.registry.controlFlowLine_is(line.content):
                if line.content == '}':
                    depth = self.tracker.depth_close(depth)
                output.append(self.tracker.line_emit(depth, line.indent, line.content))
                continue

            expanded = self.expander.line_expand(line.content, line.indent, depth)
            LOG(
                f"line {number}: expanded into {len(expanded.lines)} lines, "
                f"depth {depth} -> {expanded.depth}",
                level=3,
            )
            output.extend(expanded.lines)
            depth = expanded.depth

        return output

    def document_reformat(self, text: str) -> str:
        """
        Reformat a whole document

        Line endings are kept: a document written with '\\r\\n' is split and
        re-joined on '\\r\\n'. A trailing newline stays a trailing newline.

        Args:
            text: Full file content

        Returns:
            Reformatted content (equal to text when nothing needed changing)
        """
        newline = '\r\n' if '\r\n' in text else '\n'
        lines = text.replace('\r\n', '\n').split('\n')
        return newline.join(self.lines_reformat(lines))

    def file_reformat(
        self,
        path: Union[str, Path],
        output_path: Union[str, Path, None] = None,
        write: bool = True,
        encoding: Optional[str] = None,
    ) -> ReformatResult:
        """
        Reformat one file

        In place (no output_path, or the same file) the file is rewritten
        only when its content changed. With a different output_path the
        result is always written there, creating parent directories, so a
        mirrored tree is complete.

        Args:
            path: Template file to read
            output_path: Destination (defaults to path)
            write: False to compute the result without touching disk
            encoding: Text encoding (defaults to appsettings.file_encoding)

        Returns:
            ReformatResult describing what changed and what was written

        Raises:
            OSError: If the file cannot be read or written
            UnicodeDecodeError: If the file is not valid text in encoding
        """
        if encoding is None:
            from ..config import appsettings
            encoding = appsettings.file_encoding

        source = Path(path)
        target = Path(output_path) if output_path is not None else source

        # newline='' keeps '\r\n' visible to document_reformat
        with open(source, encoding=encoding, newline='') as handle:
            original = handle.read()

        formatted = self.document_reformat(original)
        changed = formatted != original
        mirrored = target.resolve() != source.resolve()

        written = False
        if write and (changed or mirrored):
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, 'w', encoding=encoding, newline='') as handle:
                handle.write(formatted)
            written = True

        LOG(f"{'changed' if changed else 'unchanged'}: {source}", level=2)

        return ReformatResult(
            path=source,
            output_path=target,
            changed=changed,
            written=written,
            original=original,
            formatted=formatted,
        )


def reformat(text: str, indent_unit: Optional[str] = None) -> str:
    """Reformat template text with a default-configured Reformatter"""
    return Reformatter(indent_unit=indent_unit).document_reformat(text)
