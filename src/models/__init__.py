"""
Models package for scriptlet

Contains data structures and type definitions for rule parsing and loading.
"""

from .state import ProgramState, pipeline
from .parser import ScanState, ParsedDirective
from .rules import FilterRule, ScriptletEngine, DomainSet, ScriptletParams

__all__ = [
    "ProgramState",
    "pipeline",
    "ScanState",
    "ParsedDirective",
    "FilterRule",
    "ScriptletEngine",
    "DomainSet",
    "ScriptletParams",
]
