"""
mangen - markdown to man page builder

Generates groff man pages from a markdown documentation tree using pandoc.
"""

__version__ = "1.0.0"

from .lib import ManCompiler, MacroRegistry, IncludeResolver, PandocConverter, LOG, state_connectToLogger

__all__ = [
    "ManCompiler",
    "MacroRegistry",
    "IncludeResolver",
    "PandocConverter",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
