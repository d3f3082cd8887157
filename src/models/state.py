"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the build pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the build progresses.

    Pipeline stages and their state additions:
        - Initial: outputdir, debug, verbosity
        - env_check: docsRoot, manOutputdir, envOK
        - manifest_resolve: sourceFiles
        - version_stamp: versionToken, buildDate
        - pages_render: renderResults
        - results_report: (no additions, terminal stage)

    Attributes:
        outputdir: Directory the man pages are written to (CLI positional)
        debug: Debug flag from the CLI
        verbosity: Logging verbosity level (1 = normal, 2 = debug)
        envOK: Environment validation passed
        docsRoot: Resolved documentation base directory
        manOutputdir: Created output directory path
        sourceFiles: Man page sources found by the manifest globs
        versionToken: Short commit hash, shared by every page of the run
        buildDate: Build date (YYYY/MM/DD), shared by every page of the run
        renderResults: One PageResult per source file
    """

    # CLI arguments
    outputdir: Optional[Path] = field(default=None)
    debug: bool = field(default=False)
    verbosity: int = field(default=1)

    # Pipeline state
    envOK: bool = field(default=False)
    docsRoot: Path = field(default=Path("."))
    manOutputdir: Path = field(default=Path("."))
    sourceFiles: List[Path] = field(default_factory=list)
    versionToken: str = field(default="")
    buildDate: str = field(default="")
    renderResults: Optional[List[Any]] = field(default=None)  # List[PageResult] at runtime

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, debug_default: bool = False
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace.

        Picks the CLI options that name ProgramState fields and derives the
        logging verbosity from the debug flag.

        Args:
            options: Parsed CLI arguments (outputdir, debug)
            debug_default: Debug setting from the environment, OR-ed with the flag

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}
        if filtered_options.get("outputdir") is not None:
            filtered_options["outputdir"] = Path(filtered_options["outputdir"])

        debug = bool(filtered_options.get("debug")) or debug_default
        merged_args = {**filtered_options, "debug": debug, "verbosity": 2 if debug else 1}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            manifest_resolve,
            version_stamp,
            pages_render,
            results_report
        )

    This is equivalent to:
        results_report(pages_render(version_stamp(manifest_resolve(env_check(initial_state)))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
