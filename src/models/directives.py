"""
Directive specification and metadata models

Defines the fixed vocabulary of template control-flow directives and the
categories they fall into.
"""

from enum import Enum
from dataclasses import dataclass
from typing import List


class DirectiveKind(Enum):
    """
    Categories of control-flow directives

    Used for organization and for the lexer's token classification.
    """
    CONDITIONAL = "conditional"  # @if, @else if, @else
    LOOP = "loop"                # @for, @empty
    SWITCH = "switch"            # @switch, @case, @default


@dataclass(frozen=True)
class DirectiveSpec:
    """
    Specification for a control-flow directive

    Attributes:
        keyword: Literal keyword including the leading '@' (e.g., "@else if")
        kind: Category for organization
        description: Human-readable description
        takes_condition: Whether the keyword is normally followed by a
                         parenthesized expression
        continues_block: Whether the directive chains onto a preceding
                         block (the '} @else {' form)
    """
    keyword: str
    kind: DirectiveKind
    description: str
    takes_condition: bool = True
    continues_block: bool = False

    def matches(self, text: str) -> bool:
        """
        Check if text starts with this keyword on a word boundary

        The keyword must be followed by end of string, whitespace, '(' or '{'
        so that e.g. '@ifReady' is not taken for '@if'.

        Args:
            text: Text beginning at a candidate '@'

        Returns:
            True if this spec's keyword starts text
        """
        if not text.startswith(self.keyword):
            return False
        if len(text) == len(self.keyword):
            return True
        return text[len(self.keyword)] in KEYWORD_TERMINATORS


# Characters allowed directly after a keyword
KEYWORD_TERMINATORS = frozenset(" \t({")

# Longest keyword first so '@else if' wins over '@else'
CONTROL_FLOW_DIRECTIVES: List[DirectiveSpec] = [
    DirectiveSpec("@else if", DirectiveKind.CONDITIONAL,
                  "Alternative branch with its own condition", continues_block=True),
    DirectiveSpec("@else", DirectiveKind.CONDITIONAL,
                  "Fallback branch", takes_condition=False, continues_block=True),
    DirectiveSpec("@if", DirectiveKind.CONDITIONAL, "Conditional block"),
    DirectiveSpec("@for", DirectiveKind.LOOP, "Repeated block over a collection"),
    DirectiveSpec("@empty", DirectiveKind.LOOP,
                  "Block rendered when a @for collection is empty",
                  takes_condition=False, continues_block=True),
    DirectiveSpec("@switch", DirectiveKind.SWITCH, "Multi-way branch on an expression"),
    DirectiveSpec("@case", DirectiveKind.SWITCH, "One arm of a @switch"),
    DirectiveSpec("@default", DirectiveKind.SWITCH,
                  "Fallback arm of a @switch", takes_condition=False),
]
