"""
Front matter handling for markdown sources

A front matter block is a YAML header fenced by "---" lines at the very top
of a file:

    ---
    title: doveadm
    ---
    Body text starts here.

The man page pipeline only needs the body; the header is parsed so that
malformed files are reported instead of leaking YAML into the output.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..models.document import SourceDocument
from .log import LOG

DELIMITER = "---"
BOM = "\ufeff"


class FrontMatterError(Exception):
    """Raised when a front matter block is not valid YAML"""
    pass


def frontMatter_split(text: str, path: Optional[Path] = None) -> SourceDocument:
    """
    Split raw file text into front matter and body.

    Rules:
        - A leading byte order mark is ignored
        - The block opens only if the text starts with "---" and the next
          character is not another "-"
        - The block closes at the next line starting with "---"; one line
          break after the closing fence is dropped
        - An unterminated block swallows the whole file (empty body)
        - Text without an opening fence is returned unchanged as the body

    Args:
        text: Raw file contents
        path: Source path, used in error messages

    Returns:
        SourceDocument with parsed front matter and body

    Raises:
        FrontMatterError: If the header is not valid YAML
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    if not text.startswith(DELIMITER) or text[len(DELIMITER):len(DELIMITER) + 1] == "-":
        return SourceDocument(path=path, frontmatter={}, body=text)

    rest = text[len(DELIMITER):]
    close = rest.find("\n" + DELIMITER)

    if close == -1:
        block, body = rest, ""
    else:
        block = rest[:close]
        body = rest[close + 1 + len(DELIMITER):]
        if body.startswith("\r"):
            body = body[1:]
        if body.startswith("\n"):
            body = body[1:]

    return SourceDocument(path=path, frontmatter=frontMatter_parse(block, path), body=body)


def frontMatter_parse(block: str, path: Optional[Path] = None) -> Dict[str, Any]:
    """Parse the text between the fences; the opening fence line may carry a language tag"""
    _, _, yaml_text = block.partition("\n")
    if not yaml_text.strip():
        return {}

    try:
        data: Any = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid front matter in {path or '<string>'}: {e}")

    if not isinstance(data, dict):
        LOG(f"Ignoring non-mapping front matter in {path or '<string>'}", level=2)
        return {}
    return data


def body_extract(text: str, path: Optional[Path] = None) -> str:
    """Return only the body of a markdown source"""
    return frontMatter_split(text, path).body


def document_read(path: Union[str, Path]) -> SourceDocument:
    """Read a UTF-8 markdown file and split off its front matter"""
    path = Path(path)
    return frontMatter_split(path.read_text(encoding="utf-8"), path)
