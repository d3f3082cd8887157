"""
Models package for mangen

Contains data structures and type definitions for the man page pipeline.
"""

from .state import ProgramState, pipeline
from .document import SourceDocument, TitleBlock, PageResult
from .macros import MacroKind, MacroCall, MacroSpec

__all__ = [
    "ProgramState",
    "pipeline",
    "SourceDocument",
    "TitleBlock",
    "PageResult",
    "MacroKind",
    "MacroCall",
    "MacroSpec",
]
