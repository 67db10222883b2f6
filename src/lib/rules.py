"""
Scriptlet filter rules

Classifies rule lines, extracts their domain prefix and builds
ScriptletRule objects carrying the parameters for a scriptlet engine.

Rule shape:
    [domains]#%#//scriptlet('name', 'arg', ...)     normal rule
    [domains]#@%#//scriptlet('name', 'arg', ...)    whitelist (exception) rule

Domains are comma separated; a leading '~' excludes a domain.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..models.parser import ParsedDirective
from ..models.rules import DomainSet, ScriptletEngine, ScriptletParams
from .parser import DirectiveParser
from .log import LOG


def scriptletRule_is(ruleText: str, marker: Optional[str] = None) -> bool:
    """
    Check if a rule line is a scriptlet rule

    Args:
        ruleText: Rule line to check
        marker: Scriptlet marker (defaults to configured marker)

    Returns:
        True if the marker occurs in the line
    """
    if marker is None:
        from ..config import appsettings
        marker = appsettings.scriptlet_marker
    return marker in ruleText


def domains_parse(domainText: str) -> DomainSet:
    """
    Parse a comma separated domain prefix

    Args:
        domainText: Text before the rule mask (e.g., "example.org,~sub.example.org")

    Returns:
        DomainSet with permitted and restricted domains, lowercased

    Example:
        >>> domains_parse("Example.org, ~ads.example.org")
        DomainSet(permitted=['example.org'], restricted=['ads.example.org'])
    """
    domains = DomainSet()
    for entry in domainText.split(","):
        entry = entry.strip().lower()
        if not entry or entry == "~":
            continue
        if entry.startswith("~"):
            domains.restricted.append(entry[1:])
        else:
            domains.permitted.append(entry)
    return domains


@dataclass
class ScriptletRule:
    """
    A scriptlet rule loaded from a filter list

    Implements the FilterRule capability.

    Attributes:
        ruleText: Original rule line
        filterId: Identifier of the filter list
        whitelist: True for exception rules (#@%#)
        domains: Domains the rule applies to
        params: Engine parameters (engine identification plus parsed directive)
        script: Script produced by the engine, None if no engine was given
        scriptSource: Where the script comes from
    """
    ruleText: str
    filterId: int
    whitelist: bool
    domains: DomainSet
    params: ScriptletParams
    script: Optional[str] = None
    scriptSource: str = field(default="local")

    def whitelist_is(self) -> bool:
        """True if the rule is an exception (whitelist) rule"""
        return self.whitelist

    @property
    def name(self) -> str:
        return self.params.name

    @classmethod
    def fromText(
        cls,
        ruleText: str,
        filterId: int,
        version: str,
        engine: Optional[ScriptletEngine] = None,
        engineName: Optional[str] = None,
        parser: Optional[DirectiveParser] = None,
    ) -> "ScriptletRule":
        """
        Build a ScriptletRule from a rule line

        Engine and version are explicit so rules can be built without any
        running engine.

        Args:
            ruleText: Rule line, already classified as a scriptlet rule
            filterId: Identifier of the filter list
            version: Engine version merged into the parameters
            engine: Optional engine invoked with the parameters
            engineName: Engine identifier (defaults to configured name)
            parser: DirectiveParser to use (defaults to configured marker)

        Returns:
            ScriptletRule with parsed parameters and, if an engine was
            given, the script it produced

        Raises:
            MalformedDirective: If the directive text cannot be parsed
        """
        from ..config import appsettings

        if engineName is None:
            engineName = appsettings.engine_name
        if parser is None:
            parser = DirectiveParser()

        whitelist = appsettings.script_exception_mask in ruleText
        mask = appsettings.mask_select(whitelist)
        domainText = ruleText.split(mask, 1)[0] if mask in ruleText else ""

        directive: ParsedDirective = parser.parse(ruleText)
        params = ScriptletParams(
            engine=engineName,
            version=version,
            name=directive.name,
            args=list(directive.args),
        )
        LOG(f"Scriptlet '{params.name}' with {len(params.args)} argument(s)", level=3)

        script = engine.invoke(params.as_dict()) if engine is not None else None

        return cls(
            ruleText=ruleText,
            filterId=filterId,
            whitelist=whitelist,
            domains=domains_parse(domainText),
            params=params,
            script=script,
        )
