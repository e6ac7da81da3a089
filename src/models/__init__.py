"""
Models package for allmanize

Contains data structures and type definitions for the reformat pipeline.
"""

from .state import ProgramState, pipeline
from .directives import DirectiveSpec, DirectiveKind, CONTROL_FLOW_DIRECTIVES
from .scanner import SourceLine, ExtractedDirective, ExpandedLine, ScanMode, ReformatResult

__all__ = [
    "ProgramState",
    "pipeline",
    "DirectiveSpec",
    "DirectiveKind",
    "CONTROL_FLOW_DIRECTIVES",
    "SourceLine",
    "ExtractedDirective",
    "ExpandedLine",
    "ScanMode",
    "ReformatResult",
]
