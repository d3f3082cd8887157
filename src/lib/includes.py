"""
Resolver for <!-- @include: path --> directives

Splices the body of another markdown file into the including document.
Included files may include further files; resolution is depth first, so an
included file is fully expanded before its text is substituted.

Paths are relative to the directory of the file containing the directive,
so a documentation tree can be moved without touching its includes.

Example:
    docs/core/man/doveadm.1.md:
        Options:
        <!-- @include: include/global-options.inc -->

    resolves include/global-options.inc against docs/core/man/.
"""

import re
from pathlib import Path
from typing import List, Optional, Union

from .frontmatter import document_read
from .log import LOG

INCLUDE_PATTERN = re.compile(r"<!--\s*@include:\s*(.*?)\s*-->")


class IncludeError(Exception):
    """Raised on include cycles or when nesting exceeds the configured depth"""
    pass


class IncludeResolver:
    """
    Recursive include expander

    Keeps the chain of files being expanded so that a file including itself,
    directly or through other files, is reported instead of recursing forever.
    """

    def __init__(self, max_depth: int = 32) -> None:
        """
        Initialize resolver

        Args:
            max_depth: Deepest allowed include nesting (top-level document is depth 0)
        """
        self.max_depth = max_depth

    def includes_resolve(
        self,
        body: str,
        source_path: Union[str, Path],
        chain: Optional[List[Path]] = None,
    ) -> str:
        """
        Replace every include directive in body with the resolved included body

        Directives with an empty path are left untouched. Missing include
        targets raise the underlying FileNotFoundError.

        Args:
            body: Document body (front matter already removed)
            source_path: File the body was loaded from
            chain: Files currently being expanded, outermost first

        Returns:
            Body with all includes expanded

        Raises:
            IncludeError: On an include cycle or when max_depth is exceeded
        """
        source_path = Path(source_path)
        chain = chain if chain is not None else [source_path.resolve()]

        def include_substitute(match: "re.Match[str]") -> str:
            target = match.group(1)
            if not target:
                return match.group(0)

            include_path = source_path.parent / target
            LOG(f"    Include: {include_path}", level=2)

            resolved = include_path.resolve()
            if resolved in chain:
                cycle = " -> ".join(str(p) for p in chain + [resolved])
                raise IncludeError(f"Include cycle detected: {cycle}")
            if len(chain) > self.max_depth:
                raise IncludeError(
                    f"Include depth exceeds {self.max_depth} at {include_path} "
                    f"(included from {source_path})"
                )

            document = document_read(include_path)
            return self.includes_resolve(document.body, include_path, chain + [resolved])

        return INCLUDE_PATTERN.sub(include_substitute, body)


def includes_resolve(body: str, source_path: Union[str, Path], max_depth: int = 32) -> str:
    """Expand includes in body with a fresh IncludeResolver"""
    return IncludeResolver(max_depth=max_depth).includes_resolve(body, source_path)
