"""Exception classes for S-expression reading with detailed context."""

from typing import Optional

from sexpr.sexpr_text_position import SExprTextPosition


class SExprError(Exception):
    """Base exception for S-expression errors with detailed context information."""

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        expected: Optional[str] = None,
        suggestion: Optional[str] = None,
        context: Optional[str] = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            text: Source text of the offending token
            line: Line number (1-indexed) where the error occurred
            column: Column number (1-indexed) where the error occurred
            expected: What was expected
            suggestion: Suggestion for fixing the error
            context: Additional context information
        """
        self.message = message
        self.text = text
        self.line = line
        self.column = column
        self.expected = expected
        self.suggestion = suggestion
        self.context = context

        super().__init__(self._format_detailed_message())

    @property
    def position(self) -> SExprTextPosition | None:
        """Position of the offending token, if known."""
        if self.line is None or self.column is None:
            return None

        return SExprTextPosition(self.line, self.column)

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.line is not None and self.column is not None:
            parts.append(f"Line: {self.line}, Column: {self.column}")

        if self.text:
            parts.append(f"Received: '{self.text}'")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return "\n".join(parts)


class SExprSyntaxError(SExprError):
    """The lookahead token cannot begin or continue a valid construct."""


class SExprLexicalError(SExprSyntaxError):
    """A malformed token reported by the lexer and surfaced by the parser."""


class SExprStructuralError(SExprError):
    """Well-formed tokens that do not form a complete structure."""
