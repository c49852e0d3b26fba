"""Shared fixtures and utilities for S-expression tests."""

import pytest
from typing import List

from sexpr import SExprLexer, SExprReader, SExprToken, SExprTokenType


@pytest.fixture
def reader():
    """Create a fresh reader for each test."""
    return SExprReader()


@pytest.fixture
def reader_custom():
    """Factory for readers with custom configuration."""
    def _create_reader(max_depth: int | None = None) -> SExprReader:
        return SExprReader(max_depth=max_depth)
    return _create_reader


class SExprTestHelpers:
    """Helper utilities for S-expression testing."""

    @staticmethod
    def lex_all(source: str) -> List[SExprToken]:
        """Lex source into its full token list, including the terminal token."""
        return SExprLexer(source).tokenize()

    @staticmethod
    def lex_types(source: str) -> List[SExprTokenType]:
        """Lex source and return just the token types."""
        return [token.type for token in SExprLexer(source).tokenize()]

    @staticmethod
    def lex_one(source: str) -> SExprToken:
        """Lex the first token of source."""
        return SExprLexer(source).next()

    @staticmethod
    def build_nested_list(depth: int, base_value: str = "1") -> str:
        """Build a list nested depth levels deep around base_value."""
        return "(" * depth + base_value + ")" * depth


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return SExprTestHelpers
