"""
pandoc invocation

Converts a prepared markdown document into a standalone groff man page by
piping it through "pandoc -f markdown -t man -s".
"""

import asyncio
from typing import List, Optional

from .log import LOG


class ConversionError(Exception):
    """Raised when pandoc is missing or fails to convert a document"""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class PandocConverter:
    """
    Asynchronous markdown to man page converter

    Each convert() call starts its own pandoc process, so any number of
    conversions can be awaited concurrently.
    """

    def __init__(self, pandoc_path: str = "pandoc", source_format: str = "markdown",
                 target_format: str = "man", extra_args: Optional[List[str]] = None) -> None:
        """
        Initialize converter

        Args:
            pandoc_path: pandoc executable (name on PATH or absolute path)
            source_format: pandoc input format
            target_format: pandoc output format
            extra_args: Arguments appended after the format options
                        (default: ["-s"] for a standalone document)
        """
        self.pandoc_path = pandoc_path
        self.source_format = source_format
        self.target_format = target_format
        self.extra_args = extra_args if extra_args is not None else ["-s"]

    def command_build(self) -> List[str]:
        return [
            self.pandoc_path,
            "-f", self.source_format,
            "-t", self.target_format,
            *self.extra_args,
        ]

    async def convert(self, markdown: str) -> str:
        """
        Convert markdown text to the target format

        Args:
            markdown: Complete document, title block included

        Returns:
            pandoc's standard output

        Raises:
            ConversionError: If pandoc cannot be started or exits non-zero
        """
        cmd = self.command_build()
        LOG(f"Running: {' '.join(cmd)}", level=2)

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise ConversionError(f"pandoc was not found on the system ({self.pandoc_path})")
        except OSError as e:
            raise ConversionError(f"Cannot start pandoc ({self.pandoc_path}): {e}")

        stdout, stderr = await proc.communicate(markdown.encode("utf-8"))
        err_text = stderr.decode("utf-8", errors="replace").strip()

        if proc.returncode != 0:
            raise ConversionError(
                f"Exit status {proc.returncode} when running '{' '.join(cmd)}': {err_text}",
                returncode=proc.returncode,
                stderr=err_text,
            )

        return stdout.decode("utf-8")
