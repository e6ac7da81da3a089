"""
allmanize - Allman-style reformatter for control-flow templates

Re-indents HTML templates so that every @if/@else/@for/@switch block opens
and closes on lines of its own.
"""

__version__ = "1.0.0"

from .lib import Reformatter, reformat, DirectiveRegistry, LOG, state_connectToLogger

__all__ = ["Reformatter", "reformat", "DirectiveRegistry", "LOG", "state_connectToLogger", "__version__"]
