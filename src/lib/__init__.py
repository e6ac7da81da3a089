"""
allmanize - Allman-style reformatter for control-flow templates

Re-indents HTML templates so that every @if/@else/@for/@switch block opens
and closes on lines of its own.
"""

__version__ = "1.0.0"

from .reformatter import Reformatter, reformat
from .directives import DirectiveRegistry
from .expander import LineExpander
from .indent import IndentTracker
from .log import LOG, state_connectToLogger

__all__ = [
    "Reformatter",
    "reformat",
    "DirectiveRegistry",
    "LineExpander",
    "IndentTracker",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
