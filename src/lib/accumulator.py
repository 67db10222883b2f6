"""
Argument accumulator for the directive scanner

Collects characters of the quoted argument being scanned and commits
finished arguments in order.
"""

from typing import List


class ArgumentAccumulator:
    """
    Buffers characters into the current argument and keeps committed ones

    A fresh accumulator is created for every parse; nothing is shared
    between parses.

    Example:
        >>> acc = ArgumentAccumulator()
        >>> for c in "foo":
        ...     acc.char_append(c)
        >>> acc.argument_commit()
        >>> acc.char_append("x")
        >>> acc.arguments_all()
        ['foo']
    """

    def __init__(self) -> None:
        self._buffer: List[str] = []
        self._arguments: List[str] = []

    def char_append(self, char: str) -> None:
        """Append a character to the argument in progress"""
        self._buffer.append(char)

    def argument_commit(self) -> None:
        """Move the argument in progress to the committed list and reset it"""
        self._arguments.append("".join(self._buffer))
        self._buffer = []

    def arguments_all(self) -> List[str]:
        """
        Snapshot of committed arguments, in commit order

        Characters of an unterminated argument are not included.
        """
        return list(self._arguments)

    def __len__(self) -> int:
        return len(self._arguments)
