#!/usr/bin/env python3
"""
allmanize - Allman-style reformatter for control-flow templates

Reformats HTML templates that use @if/@else/@for/@switch block directives
so that every directive head, opening brace and closing brace sits on a
line of its own, indented one unit per open block.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Usage:
    allmanize inputdir/ outputdir/ [--pattern GLOB] [--check] [--diff]

    When inputdir and outputdir are the same directory, files are rewritten
    in place and only when their content changes. Otherwise every selected
    template is written under outputdir at the same relative path.

Examples:
    # Reformat a project in place
    allmanize src/app src/app

    # Preview what would change without writing anything
    allmanize src/app src/app --check --diff

    # Reformat a different set of templates into a separate tree
    allmanize . formatted/ --pattern "**/*.component.html" -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Reformatter, __version__, LOG, state_connectToLogger
from .lib.preview import diff_render, source_render
from .models import ProgramState, ReformatResult, pipeline


DISPLAY_TITLE = r"""
        _ _
   __ _| | |_ __ ___   __ _ _ __ (_)_______
  / _` | | | '_ ` _ \ / _` | '_ \| |_  / _ \
 | (_| | | | | | | | | (_| | | | | |/ /  __/
  \__,_|_|_|_| |_| |_|\__,_|_| |_|_/___\___|

  Allman-style braces for template control flow
"""

# Define CLI arguments
parser = ArgumentParser(
    description="allmanize - Allman-style reformatter for control-flow templates",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default=appsettings.template_glob,
    type=str,
    help="Glob (relative to inputdir) selecting template files",
)

parser.add_argument(
    "--check",
    action="store_true",
    default=False,
    help="Report files that would change without writing; exit 1 if any would",
)

parser.add_argument(
    "--diff",
    action="store_true",
    default=False,
    help="Print a highlighted unified diff for each changed file",
)

parser.add_argument(
    "--show",
    action="store_true",
    default=False,
    help="Print each reformatted template, highlighted",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the input directory and prepare the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inPlace: True if inputdir and outputdir are the same directory
            - envOK: True if environment is valid

    Exits:
        1 if the input directory does not exist
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.outputdir is None:
        state.outputdir = state.inputdir

    state.inPlace = state.inputdir.resolve() == state.outputdir.resolve()
    if not state.inPlace and not state.check:
        state.outputdir.mkdir(parents=True, exist_ok=True)

    LOG(f"Input directory: {state.inputdir}", level=2)
    LOG(f"Output directory: {state.outputdir} ({'in place' if state.inPlace else 'mirrored'})", level=2)

    state.envOK = True
    return state


def templates_collect(inputstate: ProgramState) -> ProgramState:
    """
    Select the template files to reformat.

    Args:
        inputstate: Program state with inputdir and pattern

    Returns:
        ProgramState with added field:
            - templateFiles: Sorted list of matching files under inputdir
    """
    state = inputstate.copy()
    pattern = state.pattern or appsettings.template_glob

    files: List[Path] = sorted(path for path in state.inputdir.glob(pattern) if path.is_file())
    if not state.inPlace:
        # Never pick up our own output when it lives under inputdir
        outputdir = state.outputdir.resolve()
        files = [path for path in files if outputdir not in path.resolve().parents]

    state.templateFiles = files
    if files:
        LOG(f"Found {len(files)} template file(s) matching {pattern}", level=1)
    else:
        LOG(f"No template files match {pattern}", level=1)
    return state


def templates_reformat(inputstate: ProgramState) -> ProgramState:
    """
    Reformat every selected template.

    Files that cannot be read or written are reported on stderr and
    skipped; the remaining files are still processed.

    Args:
        inputstate: Program state with templateFiles

    Returns:
        ProgramState with added fields:
            - reformatResults: One ReformatResult per processed file
            - failedFiles: Files that raised an I/O or decoding error
    """
    state = inputstate.copy()
    reformatter = Reformatter()
    results: List[ReformatResult] = []
    failed: List[Path] = []

    LOG(f"Reformatting {len(state.templateFiles)} template(s)...", level=1)

    for path in state.templateFiles:
        output_path = state.outputdir / path.relative_to(state.inputdir)
        try:
            result = reformatter.file_reformat(path, output_path, write=not state.check)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error processing {path}: {e}", file=sys.stderr)
            failed.append(path)
            continue

        results.append(result)
        if state.diff and result.changed:
            print(diff_render(result, color=sys.stdout.isatty()), end="")
        if state.show:
            print(source_render(result.formatted, color=sys.stdout.isatty()))

    state.reformatResults = results
    state.failedFiles = failed
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the run.

    Args:
        inputstate: Program state with reformatResults populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if any file failed, or in check mode if any file would change
    """
    state: ProgramState = inputstate.copy()
    changed = state.changedResults

    verb = "would change" if state.check else "changed"
    LOG(f"{len(state.reformatResults)} file(s) checked, {len(changed)} {verb}", level=1)
    for result in changed:
        LOG(f"  {verb}: {result.path}", level=1)
    for path in state.failedFiles:
        LOG(f"  failed: {path}", level=1)

    if state.failedFiles:
        sys.exit(1)
    if state.check and changed:
        sys.exit(1)
    return state


@chris_plugin(
    parser=parser,
    title="allmanize - Allman-style reformatter for control-flow templates",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - reformat the templates found under inputdir.

    Orchestrates the full pipeline:
        1. env_check: Validate directories
        2. templates_collect: Select template files
        3. templates_reformat: Reformat and write them
        4. results_report: Summarize and set the exit status

    Args:
        options: CLI arguments from argparse
            - pattern: str - Glob selecting templates
            - check: bool - Report only, do not write
            - diff: bool - Print diffs of changed files
            - show: bool - Print reformatted templates
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing templates
        outputdir: Directory receiving reformatted templates

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )
    if appsettings.debug_mode:
        state.verbosity = max(state.verbosity, 3)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, templates_collect, templates_reformat, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
