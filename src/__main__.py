#!/usr/bin/env python3
"""
mangen - markdown to man page builder

Generates groff man pages from the markdown sources of a documentation
tree. REQUIRES pandoc to be installed on the system.

For every source named by the manifest (MANGEN_MAN_PATHS, relative to
MANGEN_DOCS_ROOT) the builder:
    - strips the YAML front matter
    - expands <!-- @include: path --> directives, recursively
    - prepends a pandoc title block (name, section, commit hash, date)
    - rewrites [[man,...]] and [[setting,...]] reference macros
    - converts the result with "pandoc -f markdown -t man -s"
    - writes <outputdir>/<source name without .md>

Usage:
    mangen outputdir/

Examples:
    # From the base directory of the documentation
    mangen man/

    # Debug output (files, includes, pandoc calls)
    mangen man/ --debug

    # Different documentation tree
    MANGEN_DOCS_ROOT=../dovecot-docs mangen man/
"""

import shutil
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import (
    ManCompiler,
    PandocConverter,
    RenderError,
    VersionError,
    LOG,
    state_connectToLogger,
    files_enumerate,
    versionToken_get,
    buildDate_format,
)
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    prog="mangen",
    description="Generates man pages from markdown source.\n\n"
                "Requires \"pandoc\" to be installed on the system!",
    formatter_class=RawDescriptionHelpFormatter,
)

parser.add_argument("outputdir", type=str, help="path to output man pages")

parser.add_argument("-d", "--debug", action="store_true", help="print debug output")


def error_exit(state: ProgramState, message: str) -> None:
    """Print an error (and, in debug mode, the active traceback) and exit 1"""
    print(f"Error: {message}", file=sys.stderr)
    if state.debug and sys.exc_info()[0] is not None:
        import traceback

        traceback.print_exc()
    sys.exit(1)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and create the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - docsRoot: Documentation base directory
            - manOutputdir: Created output directory
            - envOK: True if environment is valid

    Exits:
        1 if the docs root is missing, pandoc is not installed or the output
        directory cannot be created
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    state.docsRoot = Path(appsettings.docs_root)
    if not state.docsRoot.is_dir():
        error_exit(state, f"Documentation root not found: {state.docsRoot}")
    LOG(f"Documentation root: {state.docsRoot}", level=2)

    if shutil.which(appsettings.pandoc_path) is None:
        error_exit(state, f"pandoc not found ({appsettings.pandoc_path}); install pandoc "
                          "or set MANGEN_PANDOC_PATH")

    state.manOutputdir = Path(state.outputdir)
    try:
        state.manOutputdir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        error_exit(state, f"Cannot create output directory {state.manOutputdir}: {e}")
    LOG(f"Output directory: {state.manOutputdir}", level=2)

    state.envOK = True
    return state


def manifest_resolve(inputstate: ProgramState) -> ProgramState:
    """
    Expand the manifest glob patterns into the list of man page sources.

    Returns:
        ProgramState with added field:
            - sourceFiles: List[Path] of markdown sources
    """
    state = inputstate.copy()

    state.sourceFiles = files_enumerate(appsettings.man_paths, state.docsRoot)
    LOG(f"Found {len(state.sourceFiles)} man page source(s)", level=1)
    if not state.sourceFiles:
        LOG(f"No sources match {appsettings.man_paths} under {state.docsRoot}", level=1)
    return state


def version_stamp(inputstate: ProgramState) -> ProgramState:
    """
    Compute the values shared by every page of the run.

    Returns:
        ProgramState with added fields:
            - versionToken: Short commit hash of the docs tree
            - buildDate: Today's date as YYYY/MM/DD

    Exits:
        1 if the commit hash cannot be read
    """
    state = inputstate.copy()

    try:
        state.versionToken = versionToken_get(state.docsRoot)
    except VersionError as e:
        error_exit(state, str(e))
    state.buildDate = buildDate_format()

    LOG(f"Version {state.versionToken}, date {state.buildDate}", level=2)
    return state


def pages_render(inputstate: ProgramState) -> ProgramState:
    """
    Prepare, convert and write every man page.

    Returns:
        ProgramState with added field:
            - renderResults: List[PageResult], one per source

    Exits:
        1 if any page fails to prepare, convert or write
    """
    state = inputstate.copy()

    compiler = ManCompiler(
        sources=state.sourceFiles,
        output_dir=state.manOutputdir,
        version=state.versionToken,
        build_date=state.buildDate,
        converter=PandocConverter(pandoc_path=appsettings.pandoc_path),
        label=appsettings.project_label,
        max_concurrent=appsettings.max_concurrent,
        include_max_depth=appsettings.include_max_depth,
    )

    try:
        state.renderResults = compiler.compile_run()
    except RenderError as e:
        state.renderResults = e.results
        for failed in e.failures:
            print(f"Error: {failed.source}: {failed.error}", file=sys.stderr)
        error_exit(state, str(e))
    except Exception as e:
        error_exit(state, f"{type(e).__name__}: {e}")

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """Display a summary of the written pages (terminal pipeline stage)"""
    state: ProgramState = inputstate.copy()
    results = state.renderResults or []

    LOG(f"✓ {len(results)} man page(s) written to {state.manOutputdir}", level=1)
    for result in results:
        LOG(f"  {result.output}", level=2)
    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point - build man pages from the markdown documentation tree.

    Orchestrates the full pipeline:
        1. env_check: Validate docs root and pandoc, create output dir
        2. manifest_resolve: Expand the manifest globs
        3. version_stamp: Read commit hash and build date
        4. pages_render: Prepare, convert and write pages
        5. results_report: Display results

    Args:
        argv: Command line arguments (default: sys.argv[1:])
    """
    options: Namespace = parser.parse_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, debug_default=appsettings.debug_mode
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, manifest_resolve, version_stamp, pages_render, results_report)


if __name__ == "__main__":
    main()
