"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field

from .scanner import ReformatResult


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the reformat pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, pattern, check, diff, show
        - env_check: inPlace, envOK
        - templates_collect: templateFiles
        - templates_reformat: reformatResults, failedFiles
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory searched for template files
        outputdir: Directory receiving reformatted files
        verbosity: Logging verbosity level (1-3)
        pattern: Glob selecting template files (relative to inputdir)
        check: Report pending changes without writing
        diff: Print a highlighted diff per changed file
        show: Print each reformatted document highlighted
        envOK: Environment validation passed
        inPlace: inputdir and outputdir are the same directory
        templateFiles: Template files selected for reformatting
        reformatResults: One result per successfully processed file
        failedFiles: Files that could not be read or written
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: Optional[str] = field(default=None)
    check: bool = field(default=False)
    diff: bool = field(default=False)
    show: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inPlace: bool = field(default=False)
    templateFiles: List[Path] = field(default_factory=list)
    reformatResults: List[ReformatResult] = field(default_factory=list)
    failedFiles: List[Path] = field(default_factory=list)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (pattern, check, etc.)
            inputdir: Directory containing template files
            outputdir: Directory for reformatted output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)

    @property
    def changedResults(self) -> List[ReformatResult]:
        return [result for result in self.reformatResults if result.changed]


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
            templates_collect,
            templates_reformat,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
