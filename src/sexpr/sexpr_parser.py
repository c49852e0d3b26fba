"""Recursive-descent parser for S-expressions with one token of lookahead."""

import logging
from enum import Enum, auto
from typing import ClassVar, Dict, List

from sexpr.sexpr_error import SExprError, SExprLexicalError, SExprStructuralError, SExprSyntaxError
from sexpr.sexpr_lexer import SExprLexer
from sexpr.sexpr_token import SExprToken, SExprTokenType
from sexpr.sexpr_value import (
    SExpr, SExprBool, SExprFloat, SExprInteger, SExprList, SExprNil, SExprString, SExprSymbol
)


class SExprParserState(Enum):
    """Lifecycle states of a parser."""
    READY = auto()
    ERROR = auto()
    DONE = auto()


class SExprParser:
    """
    Parses S-expression source into expression trees, one top-level expression at a time.

    The parser owns a lexer over the source and holds exactly one lookahead
    token.  It performs no error recovery: the first failure aborts the read
    and leaves the parser in the ERROR state.
    """

    # Symbols that denote dedicated atoms rather than generic symbols
    _RESERVED_SYMBOLS: ClassVar[Dict[str, SExpr]] = {
        "nil": SExprNil(),
        "true": SExprBool(True),
        "false": SExprBool(False),
    }

    _INT64_MIN: ClassVar[int] = -2**63
    _INT64_MAX: ClassVar[int] = 2**63 - 1
    _INT64_MAX_DIGITS: ClassVar[int] = 19

    def __init__(self, source: str, max_depth: int | None = None) -> None:
        """
        Initialize parser with source text.

        Args:
            source: The source string to parse
            max_depth: Maximum list nesting depth, or None for no limit
        """
        self._lexer = SExprLexer(source)
        self._max_depth = max_depth
        self._depth = 0
        self._state = SExprParserState.READY
        self._error: SExprError | None = None
        self._logger = logging.getLogger("SExprParser")
        self._token: SExprToken = self._lexer.next()

    @property
    def state(self) -> SExprParserState:
        """Current parser state."""
        return self._state

    @property
    def token(self) -> SExprToken:
        """The current lookahead token."""
        return self._token

    def read(self) -> SExpr | None:
        """
        Read the next top-level expression.

        Returns:
            The expression, or None if there is no more input

        Raises:
            SExprLexicalError: If the source contains a malformed token
            SExprSyntaxError: If a token cannot start or continue an expression, or an
                integer does not fit in 64 bits
            SExprStructuralError: If a list is not closed before the end of input, or
                lists are nested too deeply
        """
        if self._state == SExprParserState.DONE:
            return None

        if self._state == SExprParserState.ERROR:
            assert self._error is not None, "Parser in error state without an error"
            raise self._error.with_traceback(None)

        try:
            try:
                expr = self._accept_expression()

            except RecursionError as e:
                raise self._nesting_too_deep_error(self._token) from e

            if expr is not None:
                return expr

            if self._token.type != SExprTokenType.EMPTY:
                raise self._unexpected_token_error()

        except SExprError as e:
            self._state = SExprParserState.ERROR
            self._error = e
            self._logger.debug("parse failed: %s", e.message)
            raise

        self._state = SExprParserState.DONE
        self._logger.debug("reached end of input at %s", self._token.position)
        return None

    def read_all(self) -> List[SExpr]:
        """
        Read every remaining top-level expression.

        Returns:
            The expressions in source order
        """
        exprs: List[SExpr] = []
        while True:
            expr = self.read()
            if expr is None:
                return exprs

            exprs.append(expr)

    def _advance(self) -> None:
        """Move to the next token."""
        self._token = self._lexer.next()

    def _accept_expression(self) -> SExpr | None:
        """
        Accept an atom or a list at the lookahead.

        Returns:
            The expression, or None if no expression starts here
        """
        atom = self._accept_atom()
        if atom is not None:
            return atom

        return self._accept_list()

    def _accept_atom(self) -> SExpr | None:
        """Accept an atom at the lookahead, advancing only on success."""
        token = self._token
        atom: SExpr

        if token.type == SExprTokenType.STRING:
            atom = SExprString(token.text)

        elif token.type == SExprTokenType.SYMBOL:
            reserved = self._RESERVED_SYMBOLS.get(token.text)
            atom = reserved if reserved is not None else SExprSymbol(token.text)

        elif token.type == SExprTokenType.INTEGER:
            atom = SExprInteger(self._parse_integer(token))

        elif token.type == SExprTokenType.FLOAT:
            atom = SExprFloat(self._parse_float(token.text))

        else:
            return None

        self._advance()
        return atom

    def _accept_list(self) -> SExprList | None:
        """Accept a parenthesized list at the lookahead."""
        if self._token.type != SExprTokenType.BLOCK_START:
            return None

        start_token = self._token
        self._depth += 1
        if self._max_depth is not None and self._depth > self._max_depth:
            raise self._nesting_too_deep_error(start_token)

        self._advance()  # consume '('

        elements: List[SExpr] = []
        while True:
            expr = self._accept_expression()
            if expr is not None:
                elements.append(expr)
                continue

            if self._token.type == SExprTokenType.BLOCK_END:
                self._advance()  # consume ')'
                break

            if self._token.type == SExprTokenType.EMPTY:
                raise SExprStructuralError(
                    message="unfinished list",
                    text=start_token.display_text(),
                    line=start_token.position.line,
                    column=start_token.position.column,
                    expected="')' to close the list",
                    suggestion="Add the missing closing parenthesis"
                )

            raise self._unexpected_token_error()

        self._depth -= 1
        return SExprList(tuple(elements))

    def _nesting_too_deep_error(self, token: SExprToken) -> SExprStructuralError:
        """Build the error for lists nested beyond the configured or interpreter limit."""
        if self._max_depth is not None:
            context = f"Lists may be nested at most {self._max_depth} deep"

        else:
            context = "Nesting exceeds the interpreter's recursion limit"

        return SExprStructuralError(
            message="maximum nesting depth exceeded",
            text=token.display_text(),
            line=token.position.line,
            column=token.position.column,
            context=context
        )

    def _parse_integer(self, token: SExprToken) -> int:
        """
        Convert the text of an INTEGER token to a signed 64-bit value.

        Raises:
            SExprSyntaxError: If the value does not fit in 64 bits
        """
        digits = token.text.lstrip('+-').lstrip('0')

        # Check the length first so huge literals never reach int()
        if len(digits) <= self._INT64_MAX_DIGITS:
            value = int(token.text)
            if self._INT64_MIN <= value <= self._INT64_MAX:
                return value

        raise SExprSyntaxError(
            message="integer out of range",
            text=token.text if len(token.text) <= 40 else token.text[:40] + "...",
            line=token.position.line,
            column=token.position.column,
            expected=f"an integer between {self._INT64_MIN} and {self._INT64_MAX}"
        )

    def _unexpected_token_error(self) -> SExprSyntaxError:
        """Build the error for a lookahead token that cannot be used here."""
        token = self._token
        if token.type == SExprTokenType.ERROR:
            assert token.message is not None, "Error token without a message"
            return SExprLexicalError(
                message=token.message,
                text=token.text,
                line=token.position.line,
                column=token.position.column
            )

        return SExprSyntaxError(
            message=f"unexpected '{token.display_text()}'",
            text=token.display_text(),
            line=token.position.line,
            column=token.position.column,
            expected="a string, symbol, number or '('"
        )

    @staticmethod
    def _parse_float(text: str) -> float:
        """
        Convert the text of a FLOAT token.

        An exponent marker with no digits means an exponent of zero.
        """
        stripped = text.rstrip('+-')
        if stripped[-1] in 'eE':
            return float(stripped[:-1])

        return float(text)
