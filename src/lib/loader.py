"""
Filter list loader

Reads a filter list line by line, picks out scriptlet rules and builds
ScriptletRule objects from them. Other rule kinds are counted and left
alone.

Malformed scriptlet rules are either skipped (recorded in the result) or
abort loading, depending on skip_malformed.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from ..models.rules import ScriptletEngine
from .parser import DirectiveParser, MalformedDirective
from .rules import ScriptletRule, scriptletRule_is
from .log import LOG


@dataclass
class MalformedRule:
    """
    A scriptlet rule that failed to parse

    Attributes:
        line_number: 1-based line number in the filter list
        ruleText: The rule line
        error: Error message from the parser
    """
    line_number: int
    ruleText: str
    error: str


@dataclass
class LoadResult:
    """
    Outcome of loading a filter list

    Attributes:
        rules: Successfully parsed scriptlet rules, in list order
        malformed: Scriptlet rules that were skipped because they failed to parse
        other_count: Non-scriptlet rules that were passed over
        comment_count: Comment and blank lines
    """
    rules: List[ScriptletRule] = field(default_factory=list)
    malformed: List[MalformedRule] = field(default_factory=list)
    other_count: int = 0
    comment_count: int = 0


class FilterListLoader:
    """
    Loads scriptlet rules from filter list text

    Example:
        >>> loader = FilterListLoader(filterId=1, version="1.0.0")
        >>> result = loader.lines_load(["! comment", "#%#//scriptlet('log')"])
        >>> result.rules[0].name
        'log'
    """

    def __init__(
        self,
        filterId: int,
        version: Optional[str] = None,
        engine: Optional[ScriptletEngine] = None,
        skip_malformed: Optional[bool] = None,
    ):
        """
        Initialize loader

        Args:
            filterId: Identifier assigned to every loaded rule
            version: Engine version (defaults to configured engine_version)
            engine: Optional scriptlet engine invoked for each rule
            skip_malformed: Skip malformed rules instead of raising
                            (defaults to configured skip_malformed)
        """
        from ..config import appsettings

        self.filterId = filterId
        self.version = version if version is not None else appsettings.engine_version
        self.engine = engine
        self.skip_malformed = (
            skip_malformed if skip_malformed is not None else appsettings.skip_malformed
        )
        self.comment_prefix = appsettings.comment_prefix
        self.parser = DirectiveParser()

    def lines_load(self, lines: Iterable[str]) -> LoadResult:
        """
        Load scriptlet rules from an iterable of lines

        Args:
            lines: Filter list lines (trailing newlines allowed)

        Returns:
            LoadResult with rules, malformed entries and counters

        Raises:
            MalformedDirective: On the first malformed scriptlet rule when
                                skip_malformed is False
        """
        result = LoadResult()

        for line_number, line in enumerate(lines, start=1):
            ruleText = line.strip()
            if not ruleText or ruleText.startswith(self.comment_prefix):
                result.comment_count += 1
                continue

            if not scriptletRule_is(ruleText, self.parser.marker):
                result.other_count += 1
                continue

            try:
                rule = ScriptletRule.fromText(
                    ruleText,
                    self.filterId,
                    version=self.version,
                    engine=self.engine,
                    parser=self.parser,
                )
            except MalformedDirective as e:
                if not self.skip_malformed:
                    raise
                LOG(f"Line {line_number}: skipping malformed rule: {e}", level=2)
                result.malformed.append(
                    MalformedRule(line_number=line_number, ruleText=ruleText, error=str(e))
                )
                continue

            result.rules.append(rule)

        LOG(
            f"Loaded {len(result.rules)} scriptlet rules "
            f"({len(result.malformed)} malformed, {result.other_count} other)",
            level=2,
        )
        return result

    def file_load(self, path: Path) -> LoadResult:
        """Load scriptlet rules from a filter list file"""
        with open(path, "r", encoding="utf-8") as f:
            return self.lines_load(f)
