"""S-expression reader package: lexer, parser and immutable expression trees."""

# Main API
from sexpr.sexpr import SExprReader, parse, parse_all, tokenize

# Exceptions (for error handling)
from sexpr.sexpr_error import SExprError, SExprSyntaxError, SExprLexicalError, SExprStructuralError

# Value types
from sexpr.sexpr_value import (
    SExpr, SExprAtom, SExprNil, SExprBool, SExprString, SExprSymbol, SExprInteger, SExprFloat, SExprList,
    sexpr_from_python
)

# Lower-level components (for advanced usage)
from sexpr.sexpr_text_position import SExprTextPosition
from sexpr.sexpr_token import SExprToken, SExprTokenType
from sexpr.sexpr_lexer import SExprLexer
from sexpr.sexpr_parser import SExprParser, SExprParserState


__all__ = [
    # Main API
    "SExprReader", "parse", "parse_all", "tokenize",

    # Exceptions
    "SExprError", "SExprSyntaxError", "SExprLexicalError", "SExprStructuralError",

    # Value types
    "SExpr", "SExprAtom", "SExprNil", "SExprBool", "SExprString", "SExprSymbol", "SExprInteger", "SExprFloat",
    "SExprList", "sexpr_from_python",

    # Lower-level components
    "SExprTextPosition", "SExprToken", "SExprTokenType", "SExprLexer", "SExprParser", "SExprParserState"
]
