"""Token types and token representation for S-expression source."""

from dataclasses import dataclass, field
from enum import Enum

from sexpr.sexpr_text_position import SExprTextPosition


class SExprTokenType(Enum):
    """Token types for S-expression source."""
    EMPTY = "EMPTY"
    ERROR = "ERROR"
    STRING = "STRING"
    SYMBOL = "SYMBOL"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    BLOCK_START = "("
    BLOCK_END = ")"


@dataclass(frozen=True)
class SExprToken:
    """
    Represents a single token in S-expression source.

    Attributes:
        type: The token classification
        text: The accepted source characters, without quotes or parentheses
        position: Position of the first character of the token
        message: Diagnostic text, only set for ERROR tokens
    """
    type: SExprTokenType
    text: str
    position: SExprTextPosition = field(default_factory=SExprTextPosition)
    message: str | None = None

    def is_type(self, token_type: SExprTokenType) -> bool:
        """Check if this token has the given type."""
        return self.type == token_type

    def is_error(self) -> bool:
        """Check if this token reports a lexical error."""
        return self.type == SExprTokenType.ERROR

    def is_terminal(self) -> bool:
        """Check if no further tokens follow this one."""
        return self.type in (SExprTokenType.EMPTY, SExprTokenType.ERROR)

    def display_text(self) -> str:
        """Text used when citing this token in diagnostics."""
        if self.type in (SExprTokenType.BLOCK_START, SExprTokenType.BLOCK_END):
            return self.type.value

        if self.type == SExprTokenType.STRING:
            return f'"{self.text}"'

        return self.text

    def __str__(self) -> str:
        if self.type == SExprTokenType.EMPTY:
            description = "(empty)"

        elif self.type == SExprTokenType.ERROR:
            description = f"Error: {self.message} around '{self.text}'"

        else:
            description = self.display_text()

        return f"{description} ({self.type.name}) at {self.position}"

    def __repr__(self) -> str:
        return f"SExprToken({self.type.name}, {self.text!r}, pos={self.position})"
