"""
Filter rule models

Defines the capability shared by filter rules, the domain restrictions a
rule carries, and the parameter set handed to a scriptlet engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class FilterRule(Protocol):
    """
    Capability every loaded filter rule provides

    Attributes:
        ruleText: Original rule line
        filterId: Identifier of the filter list the rule came from
    """
    ruleText: str
    filterId: int

    def whitelist_is(self) -> bool:
        """True if the rule is an exception (whitelist) rule"""
        ...


@runtime_checkable
class ScriptletEngine(Protocol):
    """Downstream engine turning scriptlet parameters into an injectable script"""

    def invoke(self, params: Dict[str, Any]) -> Optional[str]:
        ...


@dataclass
class DomainSet:
    """
    Domains a rule applies to

    Attributes:
        permitted: Domains the rule is limited to (empty means everywhere)
        restricted: Domains excluded with a leading '~'
    """
    permitted: List[str] = field(default_factory=list)
    restricted: List[str] = field(default_factory=list)

    def empty_is(self) -> bool:
        """Check if the rule carries no domain restriction"""
        return not self.permitted and not self.restricted

    def applies(self, domain: str) -> bool:
        """
        Check if the rule applies to a domain

        Subdomains match their parent entries, restrictions win over
        permissions.

        Args:
            domain: Host name to check (e.g., "www.example.org")

        Returns:
            True if the rule should be active on the domain
        """
        domain = domain.lower()

        def matches(entry: str) -> bool:
            return domain == entry or domain.endswith("." + entry)

        if any(matches(entry) for entry in self.restricted):
            return False
        if not self.permitted:
            return True
        return any(matches(entry) for entry in self.permitted)


@dataclass(frozen=True)
class ScriptletParams:
    """
    Parameters handed to a scriptlet engine

    Engine identification merged with the parsed directive.

    Attributes:
        engine: Engine identifier (e.g., "extension")
        version: Engine version string
        name: Scriptlet name
        args: Scriptlet arguments
    """
    engine: str
    version: str
    name: str
    args: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        """Return the parameters in the mapping form engines consume"""
        return {
            "engine": self.engine,
            "version": self.version,
            "name": self.name,
            "args": list(self.args),
        }
