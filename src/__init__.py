"""
scriptlet - Scriptlet filter rule parser

Parses //scriptlet('name', 'arg', ...) rules from ad-blocking filter lists
into scriptlet names and arguments ready for a scriptlet engine.
"""

__version__ = "1.0.0"

from .lib import (
    DirectiveParser,
    MalformedDirective,
    directive_parse,
    ScriptletRule,
    FilterListLoader,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "DirectiveParser",
    "MalformedDirective",
    "directive_parse",
    "ScriptletRule",
    "FilterListLoader",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
