"""
Parser for //scriptlet(...) directive text

Turns the directive part of a scriptlet filter rule into a ParsedDirective.

The parser operates in three steps:
1. Slicing: take the rule text after the scriptlet marker
2. Scanning: run the Tokenizer over every character
3. Validation: require the CLOSED terminal state and at least one argument

Example:
    >>> parser = DirectiveParser()
    >>> result = parser.parse("example.org#%#//scriptlet('log', 'arg1')")
    >>> result.name
    'log'
    >>> result.args
    ['arg1']
"""

from typing import Optional

from ..models.parser import ParsedDirective, ScanState
from .tokenizer import Tokenizer
from .log import LOG


class MalformedDirective(SyntaxError):
    """
    Raised when directive text does not scan to a closed argument list

    Attributes:
        text: The directive text (after the marker) that failed to parse
    """

    def __init__(self, text: str, reason: str = "Invalid scriptlet rule"):
        super().__init__(f"{reason}: {text}")
        self.text = text


class DirectiveParser:
    """
    Parser for the parenthesized, quoted argument list of a scriptlet rule

    Holds configuration only. All scanning state lives in a Tokenizer
    created per call, so one parser can be shared freely.
    """

    def __init__(self, marker: Optional[str] = None):
        """
        Initialize parser

        Args:
            marker: Literal preceding the directive text. Defaults to the
                    configured scriptlet marker ("//scriptlet").
        """
        if marker is None:
            from ..config import appsettings
            marker = appsettings.scriptlet_marker
        self.marker = marker

    def text_afterMarker(self, ruleText: str) -> str:
        """
        Return the part of a rule after the first marker occurrence

        Raises:
            MalformedDirective: If the marker does not occur in the rule
        """
        index = ruleText.find(self.marker)
        if index < 0:
            raise MalformedDirective(ruleText, f"Missing '{self.marker}' marker")
        return ruleText[index + len(self.marker):]

    def parse(self, ruleText: str) -> ParsedDirective:
        """
        Parse a scriptlet rule into its name and arguments

        Args:
            ruleText: Full rule line containing the scriptlet marker

        Returns:
            ParsedDirective with the first quoted argument as name and the
            remaining ones as args

        Raises:
            MalformedDirective: If the scan does not end in CLOSED, or no
                                quoted argument was found
        """
        text = self.text_afterMarker(ruleText)
        tokenizer = Tokenizer(text)
        state = tokenizer.run()
        LOG(f"Scanned {text!r} -> {state}", level=3)

        if state is not ScanState.CLOSED:
            raise MalformedDirective(text)

        arguments = tokenizer.accumulator.arguments_all()
        if not arguments:
            raise MalformedDirective(text, "Scriptlet name is missing")

        return ParsedDirective(name=arguments[0], args=arguments[1:])


def directive_parse(ruleText: str) -> ParsedDirective:
    """Parse a scriptlet rule with the configured marker"""
    return DirectiveParser().parse(ruleText)
