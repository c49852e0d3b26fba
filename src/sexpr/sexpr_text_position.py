"""Line and column tracking for S-expression source text."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SExprTextPosition:
    """
    Line and column position in source text.

    Both line and column are 1-indexed, so a fresh position is 1:1.
    """
    line: int = 1
    column: int = 1

    def advance(self, char: str | None) -> 'SExprTextPosition':
        """
        Compute the position after consuming a character.

        Args:
            char: The consumed character, or None at end of input

        Returns:
            The new position (this position if char is None)
        """
        if char is None:
            return self

        if char == '\n':
            return SExprTextPosition(self.line + 1, 1)

        return SExprTextPosition(self.line, self.column + 1)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"
