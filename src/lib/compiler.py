"""
Compiler for markdown man page sources

Turns each source into a pandoc-ready document (front matter removed,
includes expanded, title block prepended, macros rewritten), converts all
documents concurrently and writes the resulting man pages.
"""

import asyncio
import contextlib
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..models.document import PageResult
from .converter import PandocConverter
from .frontmatter import document_read
from .includes import IncludeResolver
from .log import LOG
from .macros import MacroRegistry
from .titleblock import titleBlock_make


class RenderError(Exception):
    """Raised after all conversions finished when one or more pages failed"""

    def __init__(self, results: List[PageResult]) -> None:
        self.results = results
        self.failures = [r for r in results if not r.ok]
        written = len(results) - len(self.failures)
        first = self.failures[0]
        super().__init__(
            f"{written} of {len(results)} man pages written; "
            f"{len(self.failures)} failed, first: {first.source}: {first.error}"
        )


class ManCompiler:
    """
    Compiles markdown sources to groff man pages

    Responsibilities:
    - Prepare each source (front matter, includes, title block, macros)
    - Submit every prepared document to the converter
    - Write converted pages to the output directory
    - Report one PageResult per source
    """

    def __init__(
        self,
        sources: Sequence[Union[str, Path]],
        output_dir: Union[str, Path],
        version: str,
        build_date: str,
        converter: Optional[PandocConverter] = None,
        label: str = "Dovecot",
        max_concurrent: int = 8,
        include_max_depth: int = 32,
    ) -> None:
        """
        Initialize compiler

        Args:
            sources: Markdown sources, in submission order
            output_dir: Directory for the generated man pages
            version: Short commit hash stamped on every page
            build_date: Preformatted date stamped on every page
            converter: Object with an async convert(markdown) -> str method
                       (default: PandocConverter())
            label: Project label for the title line
            max_concurrent: Concurrent conversions allowed (0 = unbounded)
            include_max_depth: Include nesting limit
        """
        self.sources = [Path(s) for s in sources]
        self.output_dir = Path(output_dir)
        self.version = version
        self.build_date = build_date
        self.converter = converter or PandocConverter()
        self.label = label
        self.max_concurrent = max_concurrent
        self.includes = IncludeResolver(max_depth=include_max_depth)
        self.macros = MacroRegistry()

    def page_prepare(self, source: Union[str, Path]) -> str:
        """
        Build the markdown document pandoc receives for one source

        Steps: strip front matter, expand includes, prepend the title block,
        rewrite macros (title block included).

        Args:
            source: Markdown source path

        Returns:
            Complete markdown document
        """
        source = Path(source)
        document = document_read(source)

        title = titleBlock_make(source, self.version, self.build_date, self.label)
        raw_md = title.render() + self.includes.includes_resolve(document.body, source)

        return self.macros.macros_rewrite(raw_md)

    def outputPath_make(self, source: Union[str, Path]) -> Path:
        """Output path: source base name without its .md extension, in output_dir"""
        name = Path(source).name
        if name.endswith(".md"):
            name = name[:-len(".md")]
        return self.output_dir / name

    def page_write(self, source: Union[str, Path], text: str) -> Path:
        """Write a converted page verbatim and return its path"""
        out_f = self.outputPath_make(source)
        out_f.write_text(text, encoding="utf-8")
        LOG(f"Man file written: {out_f}", level=2)
        return out_f

    async def page_render(self, source: Path, markdown: str, limiter) -> Path:
        """Convert one prepared document and write it"""
        async with limiter:
            result = await self.converter.convert(markdown)
        return self.page_write(source, result)

    async def compile(self) -> List[PageResult]:
        """
        Prepare, convert and write every source

        Every source is prepared, in order, before the first conversion is
        submitted; a preparation error ends the run right there. Conversions
        then run concurrently and all of them are awaited before any failure
        is reported.

        Returns:
            One PageResult per source, in source order

        Raises:
            RenderError: If any conversion or write failed
        """
        LOG(f"Rendering {len(self.sources)} man page(s) into {self.output_dir}", level=1)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        if self.max_concurrent > 0:
            limiter = asyncio.Semaphore(self.max_concurrent)
        else:
            limiter = contextlib.nullcontext()

        prepared = []
        for source in self.sources:
            LOG(f"Processing file: {source}", level=2)
            prepared.append((source, self.page_prepare(source)))

        tasks = [
            asyncio.create_task(self.page_render(source, markdown, limiter))
            for source, markdown in prepared
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results: List[PageResult] = []
        for source, outcome in zip(self.sources, outcomes):
            if isinstance(outcome, BaseException):
                LOG(f"Failed: {source}: {outcome}", level=1)
                results.append(PageResult(source=source, error=outcome))
            else:
                results.append(PageResult(source=source, output=outcome))

        if any(not r.ok for r in results):
            raise RenderError(results)

        return results

    def compile_run(self) -> List[PageResult]:
        """Run compile() on a fresh event loop"""
        return asyncio.run(self.compile())
