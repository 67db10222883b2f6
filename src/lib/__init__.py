"""
scriptlet - Scriptlet filter rule parser

Parses //scriptlet('name', 'arg', ...) rules from ad-blocking filter lists.
"""

__version__ = "1.0.0"

from .parser import DirectiveParser, MalformedDirective, directive_parse
from .rules import ScriptletRule, scriptletRule_is, domains_parse
from .loader import FilterListLoader, LoadResult, MalformedRule
from .log import LOG, state_connectToLogger

__all__ = [
    "DirectiveParser",
    "MalformedDirective",
    "directive_parse",
    "ScriptletRule",
    "scriptletRule_is",
    "domains_parse",
    "FilterListLoader",
    "LoadResult",
    "MalformedRule",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
