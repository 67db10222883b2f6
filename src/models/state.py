"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the loading pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile,
          filterId, engineVersion, strict
        - env_check: inputRulesFile, outputPath, envOK
        - rules_load: loadResult
        - params_compile: compileResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the filter list
        outputdir: Directory for the generated parameter file
        verbosity: Logging verbosity level (1-3)
        inputFile: Filter list filename (relative to inputdir)
        outputFile: Output filename (relative to outputdir)
        filterId: Filter list identifier assigned to every rule
        engineVersion: Engine version override (None uses settings)
        strict: Abort on the first malformed scriptlet rule
        envOK: Environment validation passed
        inputRulesFile: Resolved path to the filter list
        outputPath: Resolved path to the output file
        loadResult: LoadResult from the filter list loader
        compileResult: Summary of the written output (output_file, rule_count)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: str = field(default="scriptlets.yaml")
    filterId: int = field(default=0)
    engineVersion: Optional[str] = field(default=None)
    strict: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputRulesFile: Path = field(default=Path("/"))
    outputPath: Path = field(default=Path("/"))
    loadResult: Optional[Any] = field(default=None)  # LoadResult at runtime
    compileResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, outputFile, etc.)
            inputdir: Directory containing the filter list
            outputdir: Directory for generated output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        import dataclasses

        options_dict = vars(options)
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        # Explicit directories override anything in the namespace
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
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

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            rules_load,
            params_compile,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
