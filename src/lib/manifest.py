"""
Man page manifest and version metadata

Expands the configured glob patterns into the list of sources to render and
reads the short commit hash that stamps every page of a run.
"""

import glob
import subprocess
from pathlib import Path
from typing import Iterable, List, Union

from .log import LOG


class VersionError(Exception):
    """Raised when the documentation tree's commit hash cannot be read"""
    pass


def files_enumerate(patterns: Iterable[str], root: Union[str, Path] = ".") -> List[Path]:
    """
    Expand glob patterns relative to root.

    Each pattern's matches are sorted; the results are concatenated in
    pattern order. Patterns that match nothing contribute nothing.

    Args:
        patterns: Glob patterns (recursive "**" allowed)
        root: Directory the patterns are relative to

    Returns:
        Matching file paths, prefixed with root
    """
    root = Path(root)
    files: List[Path] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern, root_dir=root, recursive=True))
        LOG(f"Pattern {pattern}: {len(matches)} file(s)", level=2)
        files.extend(root / match for match in matches if (root / match).is_file())
    return files


def versionToken_get(root: Union[str, Path] = ".") -> str:
    """
    Return the abbreviated hash of HEAD for the git work tree at root.

    Raises:
        VersionError: If git is not installed or root is not inside a work tree
    """
    cmd = ["git", "rev-parse", "--short", "HEAD"]
    try:
        result = subprocess.run(
            cmd, cwd=str(root), capture_output=True, text=True, check=True
        )
    except FileNotFoundError:
        raise VersionError("git was not found on the system")
    except subprocess.CalledProcessError as e:
        raise VersionError(
            f"Cannot read commit hash in {root}: {e.stderr.strip() or e}"
        )

    token = result.stdout.strip()
    if not token:
        raise VersionError(f"git returned no commit hash in {root}")
    return token
