"""Main S-expression reader class and module-level convenience functions."""

import logging
from typing import List

from sexpr.sexpr_lexer import SExprLexer
from sexpr.sexpr_parser import SExprParser
from sexpr.sexpr_token import SExprToken
from sexpr.sexpr_value import SExpr


class SExprReader:
    """
    Reads S-expression source text into immutable expression trees.

    A reader holds only configuration, so one instance can be shared for any
    number of sources.  Each call builds a fresh lexer and parser.
    """

    def __init__(self, max_depth: int | None = None):
        """
        Initialize the reader.

        Args:
            max_depth: Maximum list nesting depth, or None for no limit
        """
        self.max_depth = max_depth
        self._logger = logging.getLogger("SExprReader")

    def parse(self, source: str) -> SExpr | None:
        """
        Parse the first top-level expression in the source.

        Args:
            source: S-expression source text

        Returns:
            The expression, or None if the source holds only whitespace and comments

        Raises:
            SExprLexicalError: If the source contains a malformed token
            SExprSyntaxError: If a token cannot start or continue an expression
            SExprStructuralError: If a list is not closed, or is nested too deeply
        """
        parser = SExprParser(source, max_depth=self.max_depth)
        return parser.read()

    def parse_all(self, source: str) -> List[SExpr]:
        """
        Parse every top-level expression in the source.

        Args:
            source: S-expression source text

        Returns:
            The expressions in source order

        Raises:
            SExprLexicalError: If the source contains a malformed token
            SExprSyntaxError: If a token cannot start or continue an expression
            SExprStructuralError: If a list is not closed, or is nested too deeply
        """
        parser = SExprParser(source, max_depth=self.max_depth)
        exprs = parser.read_all()
        self._logger.debug("parsed %d top-level expressions", len(exprs))
        return exprs

    def tokenize(self, source: str) -> List[SExprToken]:
        """
        Lex the source without building a tree.

        Args:
            source: S-expression source text

        Returns:
            The tokens, ending with the first EMPTY or ERROR token
        """
        return SExprLexer(source).tokenize()


_default_reader = SExprReader()


def parse(source: str) -> SExpr | None:
    """Parse the first top-level expression in source, or return None if there is none."""
    return _default_reader.parse(source)


def parse_all(source: str) -> List[SExpr]:
    """Parse every top-level expression in source."""
    return _default_reader.parse_all(source)


def tokenize(source: str) -> List[SExprToken]:
    """Lex source into tokens, ending with the first EMPTY or ERROR token."""
    return _default_reader.tokenize(source)
