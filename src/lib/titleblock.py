"""
Pandoc title block generation

pandoc's man writer takes the page name, section and footer text from a
title block at the top of the document:

    % doveadm(1) 1a2b3c4 | Dovecot
    %
    % 2026/10/19

See https://pandoc.org/MANUAL.html#extension-pandoc_title_block
"""

from datetime import date
from pathlib import Path
from typing import Optional, Union

from ..models.document import TitleBlock

DATE_FORMAT = "%Y/%m/%d"


def buildDate_format(day: Optional[date] = None) -> str:
    """Format a date (default: today) as YYYY/MM/DD"""
    return (day or date.today()).strftime(DATE_FORMAT)


def titleBlock_make(
    source: Union[str, Path],
    version: str,
    build_date: str,
    label: str = "Dovecot",
) -> TitleBlock:
    """
    Build the title block for a man page source.

    The program name and section are the first two "."-separated segments of
    the base name ("doveadm.1.md" -> "doveadm", "1"). A base name with fewer
    segments leaves the missing parts empty.

    Args:
        source: Path or base name of the markdown source
        version: Short commit hash for the run
        build_date: Preformatted build date for the run
        label: Project label

    Returns:
        TitleBlock ready to render
    """
    parts = Path(source).name.split(".")
    name = parts[0]
    section = parts[1] if len(parts) > 1 else ""
    return TitleBlock(name=name, section=section, version=version, date=build_date, label=label)
