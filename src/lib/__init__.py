"""
mangen - markdown to man page builder

Library modules for the man page pipeline.
"""

from .frontmatter import frontMatter_split, body_extract, FrontMatterError
from .includes import IncludeResolver, includes_resolve, IncludeError
from .macros import MacroRegistry
from .titleblock import titleBlock_make, buildDate_format
from .manifest import files_enumerate, versionToken_get, VersionError
from .converter import PandocConverter, ConversionError
from .compiler import ManCompiler, RenderError
from .log import LOG, state_connectToLogger

__all__ = [
    "frontMatter_split",
    "body_extract",
    "FrontMatterError",
    "IncludeResolver",
    "includes_resolve",
    "IncludeError",
    "MacroRegistry",
    "titleBlock_make",
    "buildDate_format",
    "files_enumerate",
    "versionToken_get",
    "VersionError",
    "PandocConverter",
    "ConversionError",
    "ManCompiler",
    "RenderError",
    "LOG",
    "state_connectToLogger",
]
