r"""
Finite-state scanner for scriptlet directive text

Partitions text such as ('name', "arg", 'it\'s') into quoted arguments.

Transitions:
    OPENED  ' ' ( ,          -> OPENED   (separators, discarded)
    OPENED  ' or "           -> PARAM    (quote becomes the active separator)
    OPENED  ) as last char   -> CLOSED
    OPENED  ) elsewhere      -> OPENED
    OPENED  anything else    -> None     (stuck, never CLOSED)
    PARAM   active quote, not after a backslash -> OPENED (argument committed)
    PARAM   anything else    -> PARAM    (character appended, backslash kept)
    CLOSED  anything         -> CLOSED
"""

from typing import Optional

from ..models.parser import ScanState, QUOTES, SEPARATORS
from .accumulator import ArgumentAccumulator


class Tokenizer:
    """
    Single-pass character scanner over one directive text

    Each instance owns its state, active separator and accumulator, so a
    Tokenizer is used for exactly one scan.

    Attributes:
        text: Directive text being scanned
        state: Current ScanState, or None once the scan is stuck
        separator: Quote character delimiting the open argument, if any
        accumulator: Collected arguments
    """

    def __init__(self, text: str):
        self.text = text
        self.state: Optional[ScanState] = ScanState.OPENED
        self.separator: Optional[str] = None
        self.accumulator = ArgumentAccumulator()

    def run(self) -> Optional[ScanState]:
        """
        Scan every character of the text in order

        Returns:
            Final scanner state. CLOSED only for well-formed directive text.
        """
        for index in range(len(self.text)):
            if self.state is None:
                break
            self.state = self.step(index)
        return self.state

    def step(self, index: int) -> Optional[ScanState]:
        """
        Apply the transition for the character at index

        Args:
            index: Position of the current character in text

        Returns:
            Next state, or None if the character has no transition
        """
        match self.state:
            case ScanState.OPENED:
                return self.opened_step(index)
            case ScanState.PARAM:
                return self.param_step(index)
            case ScanState.CLOSED:
                return ScanState.CLOSED
            case _:
                return None

    def opened_step(self, index: int) -> Optional[ScanState]:
        """Transition outside quotes"""
        char = self.text[index]
        if char in SEPARATORS:
            return ScanState.OPENED
        if char in QUOTES:
            self.separator = char
            return ScanState.PARAM
        if char == ")":
            if index == len(self.text) - 1:
                return ScanState.CLOSED
            return ScanState.OPENED
        return None

    def param_step(self, index: int) -> ScanState:
        """Transition inside a quoted argument"""
        char = self.text[index]
        escaped = index > 0 and self.text[index - 1] == "\\"
        if char == self.separator and not escaped:
            self.separator = None
            self.accumulator.argument_commit()
            return ScanState.OPENED
        self.accumulator.char_append(char)
        return ScanState.PARAM
