#!/usr/bin/env python3
"""
scriptlet - Scriptlet filter rule parser

Reads an ad-blocking filter list, parses every //scriptlet(...) rule into
a scriptlet name and arguments, merges in the engine identification and
writes the resulting parameter sets as YAML.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Rule shape:
    [domains]#%#//scriptlet('name', 'arg', ...)
    [domains]#@%#//scriptlet('name', 'arg', ...)     (whitelist)

Usage:
    scriptlet inputdir/ outputdir/ --inputFile filters.txt

Examples:
    # Basic run, malformed rules are skipped and reported
    scriptlet . output/ --inputFile filters.txt

    # Abort on the first malformed rule, custom engine version
    scriptlet . output/ --inputFile filters.txt --strict --engineVersion 4.2.1

    # Verbose output, highlights malformed rules
    scriptlet . output/ --inputFile filters.txt -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

import yaml
from chris_plugin import chris_plugin

from .config import appsettings
from .lib import FilterListLoader, MalformedDirective, __version__, LOG, state_connectToLogger
from .lib.lexer import rule_highlight
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="scriptlet - Parse scriptlet rules of a filter list into engine parameters",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Filter list file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default="scriptlets.yaml",
    type=str,
    help="Output YAML file (relative to outputdir)",
)

parser.add_argument(
    "--filterId",
    default=0,
    type=int,
    help="Filter list identifier assigned to every rule",
)

parser.add_argument(
    "--engineVersion",
    default=None,
    type=str,
    help="Engine version merged into scriptlet parameters. Defaults to SCRIPTLET_ENGINE_VERSION",
)

parser.add_argument(
    "--strict",
    action="store_true",
    help="Abort on the first malformed scriptlet rule instead of skipping it",
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
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputRulesFile: Resolved path to the filter list
            - outputPath: Resolved path to the output file
            - envOK: True if environment is valid

    Exits:
        1 if the filter list is not found
    """

    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputRulesFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputPath = state.outputdir / state.outputFile
    state.outputPath.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.outputPath}", level=2)

    state.envOK = True
    return state


def rules_load(inputstate: ProgramState) -> ProgramState:
    """
    Read the filter list and parse its scriptlet rules.

    Args:
        inputstate: Program state with inputRulesFile path set

    Returns:
        ProgramState with added field:
            - loadResult: LoadResult with parsed and malformed rules

    Exits:
        1 if the file cannot be read, or a malformed rule is met in strict mode
    """

    state = inputstate.copy()

    LOG("Loading filter list...", level=1)

    version = state.engineVersion or appsettings.engine_version
    loader = FilterListLoader(
        filterId=state.filterId,
        version=version,
        skip_malformed=False if state.strict else None,
    )

    try:
        state.loadResult = loader.file_load(state.inputRulesFile)
    except MalformedDirective as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Parsed {len(state.loadResult.rules)} scriptlet rules", level=2)
    return state


def params_compile(inputstate: ProgramState) -> ProgramState:
    """
    Write parsed scriptlet parameters to the output YAML file.

    Args:
        inputstate: Program state with loadResult

    Returns:
        ProgramState with added field:
            - compileResult: Dict containing:
                - status: bool
                - output_file: str
                - rule_count: int
                - malformed_count: int

    Exits:
        1 if loadResult is None or the output cannot be written
    """

    state = inputstate.copy()

    if state.loadResult is None:
        print("Error: No loaded rules available", file=sys.stderr)
        sys.exit(1)

    LOG("Writing scriptlet parameters...", level=1)

    document = {
        "scriptlets": [
            {
                "ruleText": rule.ruleText,
                "filterId": rule.filterId,
                "whitelist": rule.whitelist_is(),
                "domains": {
                    "permitted": rule.domains.permitted,
                    "restricted": rule.domains.restricted,
                },
                "params": rule.params.as_dict(),
            }
            for rule in state.loadResult.rules
        ],
        "malformed": [
            {"line": bad.line_number, "ruleText": bad.ruleText, "error": bad.error}
            for bad in state.loadResult.malformed
        ],
    }

    try:
        with open(state.outputPath, "w", encoding="utf-8") as f:
            yaml.safe_dump(document, f, sort_keys=False, allow_unicode=True)
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    state.compileResult = {
        "status": True,
        "output_file": str(state.outputPath),
        "rule_count": len(state.loadResult.rules),
        "malformed_count": len(state.loadResult.malformed),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display loading results to user.

    Args:
        inputstate: Program state with compileResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if compileResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.compileResult:
        print("Error: Loading failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Filter list processed!", level=1)
    LOG(f"  Output: {state.compileResult['output_file']}", level=1)
    LOG(f"  Scriptlet rules: {state.compileResult['rule_count']}", level=1)
    LOG(f"  Malformed: {state.compileResult['malformed_count']}", level=1)

    if state.verbosity >= 2 and state.loadResult is not None:
        for bad in state.loadResult.malformed:
            LOG(f"  line {bad.line_number}: {rule_highlight(bad.ruleText)}", level=2)
    return state


@chris_plugin(
    parser=parser,
    title="scriptlet - Scriptlet filter rule parser",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - parse scriptlet rules of a filter list.

    Orchestrates the pipeline:
        1. env_check: Validate paths
        2. rules_load: Read the filter list and parse scriptlet rules
        3. params_compile: Write engine parameters as YAML
        4. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    if appsettings.debug_mode:
        state.verbosity = max(state.verbosity, 3)

    state_connectToLogger(state)

    pipeline(state, env_check, rules_load, params_compile, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
