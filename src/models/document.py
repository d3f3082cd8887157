"""
Document-level data models

Type-safe structures passed between the front-matter stripper, the title
block generator and the compiler.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class SourceDocument:
    """
    A markdown source split into front matter and body

    Returned by frontMatter_split(). The pipeline only ever uses the body;
    front matter is kept for callers that want it.

    Attributes:
        path: File the text was read from (None for in-memory text)
        frontmatter: Parsed YAML header ({} when absent or empty)
        body: Markdown text following the header

    Example:
        For "---\\ntitle: x\\n---\\nHello":
        SourceDocument(path=None, frontmatter={"title": "x"}, body="Hello")
    """
    path: Optional[Path]
    frontmatter: Dict[str, Any]
    body: str


@dataclass
class TitleBlock:
    """
    Pandoc title block heading every man page source

    Attributes:
        name: Program name (first "."-separated segment of the base name)
        section: Man section (second segment)
        version: Short commit hash of the documentation tree
        date: Build date, YYYY/MM/DD
        label: Project label shown after the version

    Example:
        >>> TitleBlock("doveadm", "1", "abc1234", "2026/10/19", "Dovecot").render()
        '% doveadm(1) abc1234 | Dovecot\\n%\\n% 2026/10/19\\n\\n'
    """
    name: str
    section: str
    version: str
    date: str
    label: str = "Dovecot"

    def render(self) -> str:
        """Render the title, (empty) author and date lines plus a blank separator"""
        return (
            f"% {self.name}({self.section}) {self.version} | {self.label}\n"
            "%\n"
            f"% {self.date}\n\n"
        )


@dataclass
class PageResult:
    """
    Outcome of rendering one man page

    Attributes:
        source: Markdown source file
        output: Written man page, None if rendering failed
        error: Exception raised while converting or writing, None on success
    """
    source: Path
    output: Optional[Path] = None
    error: Optional[BaseException] = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None
