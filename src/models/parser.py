"""
Parser-specific data models

Type-safe structures for scanner states and parser return values.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List


class ScanState(Enum):
    """
    States of the directive argument scanner

    A scan that meets a character with no transition has no state at all
    (None) and can never reach CLOSED.
    """
    OPENED = "opened"    # outside quotes: before, between or after arguments
    PARAM = "param"      # inside a quoted argument
    CLOSED = "closed"    # terminal: ')' consumed as the last character


QUOTES = ("'", '"')
SEPARATORS = (" ", "(", ",")


@dataclass(frozen=True)
class ParsedDirective:
    """
    Result of parsing the directive text of a scriptlet rule

    Returned by DirectiveParser.parse(). The first quoted argument is the
    scriptlet name, every following quoted argument is kept in order.

    Attributes:
        name: Scriptlet name (first quoted argument)
        args: Remaining quoted arguments, in source order

    Example:
        For rule "example.org#%#//scriptlet('abort-on-property-read', 'alert')":
        ParsedDirective(name="abort-on-property-read", args=["alert"])
    """
    name: str
    args: List[str] = field(default_factory=list)
