"""Immutable cursor infrastructure for type-safe scanning.

Implements the immutable cursor pattern for zero-`None` scanning.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
"""

from dataclasses import dataclass

__all__ = ["Cursor"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("n%10", 0)
        >>> cursor.current
        'n'
        >>> cursor.advance().current
        '%'
        >>> cursor.current  # Original unchanged (immutability)
        'n'
        >>> Cursor("n", 1).is_eof
        True
    """

    source: str
    pos: int = 0

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def startswith(self, text: str) -> bool:
        """Check whether the remaining input starts with text."""
        return self.source.startswith(text, self.pos)

    def advance(self, count: int = 1) -> "Cursor":
        """Return a new cursor moved forward, clamped at EOF."""
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def skip_spaces(self) -> "Cursor":
        """Return a new cursor positioned past any whitespace."""
        pos = self.pos
        source = self.source
        while pos < len(source) and source[pos].isspace():
            pos += 1
        return Cursor(source, pos)
