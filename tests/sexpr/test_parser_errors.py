"""Tests for S-expression parse failures."""

import pytest

from sexpr import (
    SExprError, SExprLexicalError, SExprParser, SExprParserState, SExprStructuralError, SExprSyntaxError,
    SExprInteger, SExprTextPosition, parse
)


class TestSExprParserErrors:
    """Test error classification and reporting."""

    def test_unfinished_list(self, reader):
        """Test end of input inside a list is a structural error."""
        with pytest.raises(SExprStructuralError) as exc_info:
            reader.parse("(1 2")

        assert exc_info.value.message == "unfinished list"
        assert exc_info.value.position == SExprTextPosition(1, 1)

    def test_unfinished_nested_list_reports_inner_list(self, reader):
        """Test the innermost unclosed list is reported."""
        with pytest.raises(SExprStructuralError) as exc_info:
            reader.parse("(a\n  (b c")

        assert exc_info.value.line == 2
        assert exc_info.value.column == 3

    def test_unterminated_string(self, reader):
        """Test an unterminated string is a lexical error."""
        with pytest.raises(SExprLexicalError) as exc_info:
            reader.parse('"abc')

        assert exc_info.value.message == "unexpected end in string"

    def test_lexical_error_is_syntax_error(self, reader):
        """Test lexical errors can be caught as syntax errors."""
        with pytest.raises(SExprSyntaxError):
            reader.parse("(1 2. 3)")

    @pytest.mark.parametrize("source, message", [
        ("@", "unexpected character '@'"),
        ("(a [b])", "unexpected character '['"),
        ("1.2.3", "unexpected '.' in number"),
        ("(1 2.)", "digits expected"),
        ('(a "b', "unexpected end in string"),
    ])
    def test_lexical_message_surfaced_verbatim(self, reader, source, message):
        """Test the parser reports the lexer's message unchanged."""
        with pytest.raises(SExprLexicalError) as exc_info:
            reader.parse(source)

        assert exc_info.value.message == message

    def test_unexpected_block_end(self, reader):
        """Test a stray closing parenthesis is a syntax error."""
        with pytest.raises(SExprSyntaxError) as exc_info:
            reader.parse(")")

        assert not isinstance(exc_info.value, SExprLexicalError)
        assert exc_info.value.message == "unexpected ')'"
        assert exc_info.value.text == ")"

    def test_stray_block_end_after_expression(self):
        """Test a stray closing parenthesis fails the read that reaches it."""
        parser = SExprParser("(1))")
        assert parser.read() is not None
        with pytest.raises(SExprSyntaxError):
            parser.read()

    def test_no_partial_tree(self):
        """Test a failed read returns nothing for the elements already read."""
        parser = SExprParser("(1 2 3 @)")
        with pytest.raises(SExprLexicalError):
            parser.read()

        assert parser.state == SExprParserState.ERROR

    def test_error_is_terminal(self):
        """Test reading after an error raises the same error again."""
        parser = SExprParser("(1")
        with pytest.raises(SExprStructuralError) as first:
            parser.read()

        with pytest.raises(SExprStructuralError) as second:
            parser.read()

        assert first.value is second.value
        assert parser.state == SExprParserState.ERROR

    def test_error_after_good_expressions(self):
        """Test earlier expressions are returned before the failing one."""
        parser = SExprParser("a b #")
        assert parser.read() is not None
        assert parser.read() is not None
        with pytest.raises(SExprLexicalError) as exc_info:
            parser.read()

        assert exc_info.value.column == 5

    def test_error_details_in_message(self):
        """Test the formatted message includes position and received text."""
        with pytest.raises(SExprError) as exc_info:
            parse("; lead\n\n)")

        text = str(exc_info.value)
        assert text.startswith("Error: unexpected ')'")
        assert "Line: 3, Column: 1" in text
        assert "Received: ')'" in text

    def test_errors_share_base_class(self):
        """Test every parse failure is an SExprError."""
        for source in ["(", ")", '"', "(?.", "1.."]:
            with pytest.raises(SExprError):
                parse(source)


class TestSExprParserConfiguration:
    """Test parser configuration."""

    def test_max_depth_allows_limit(self, reader_custom, helpers):
        """Test nesting up to the limit is accepted."""
        reader = reader_custom(max_depth=3)
        assert reader.parse(helpers.build_nested_list(3)) is not None

    def test_max_depth_exceeded(self, reader_custom, helpers):
        """Test nesting beyond the limit is a structural error."""
        reader = reader_custom(max_depth=3)
        with pytest.raises(SExprStructuralError) as exc_info:
            reader.parse(helpers.build_nested_list(4))

        assert exc_info.value.message == "maximum nesting depth exceeded"
        assert exc_info.value.column == 4

    def test_max_depth_counts_nesting_not_lists(self, reader_custom):
        """Test sibling lists do not add to the depth."""
        reader = reader_custom(max_depth=2)
        assert len(reader.parse_all("((1) (2) (3)) ((4))")) == 2

    def test_deep_nesting_without_limit(self, reader, helpers):
        """Test nesting beyond the interpreter's recursion limit is a structural error."""
        with pytest.raises(SExprStructuralError) as exc_info:
            reader.parse(helpers.build_nested_list(5000))

        assert exc_info.value.message == "maximum nesting depth exceeded"

    def test_deep_nesting_without_limit_is_terminal(self, helpers):
        """Test a too-deep read leaves the parser in the error state."""
        parser = SExprParser(helpers.build_nested_list(5000))
        with pytest.raises(SExprStructuralError) as first:
            parser.read()

        assert parser.state == SExprParserState.ERROR
        with pytest.raises(SExprStructuralError) as second:
            parser.read()

        assert first.value is second.value


class TestSExprParserIntegerRange:
    """Test the signed 64-bit integer range."""

    @pytest.mark.parametrize("source, expected", [
        ("9223372036854775807", 9223372036854775807),
        ("-9223372036854775808", -9223372036854775808),
        ("+0009223372036854775807", 9223372036854775807),
        ("0000000000000000000000000", 0),
    ])
    def test_boundaries_accepted(self, reader, source, expected):
        """Test the extreme 64-bit values parse."""
        assert reader.parse(source) == SExprInteger(expected)

    @pytest.mark.parametrize("source", [
        "9223372036854775808",
        "-9223372036854775809",
        "99999999999999999999999",
    ])
    def test_out_of_range(self, reader, source):
        """Test integers outside 64 bits are syntax errors."""
        with pytest.raises(SExprSyntaxError) as exc_info:
            reader.parse(source)

        assert exc_info.value.message == "integer out of range"
        assert exc_info.value.position == SExprTextPosition(1, 1)

    def test_huge_literal(self):
        """Test a literal too long for int() is reported as out of range."""
        parser = SExprParser("(1 " + "1" * 5000 + ")")
        with pytest.raises(SExprSyntaxError) as exc_info:
            parser.read()

        assert exc_info.value.message == "integer out of range"
        assert exc_info.value.column == 4
        assert parser.state == SExprParserState.ERROR


class TestSExprParserErrorState:
    """Test repeated reads after a failure."""

    @staticmethod
    def _traceback_depth(error: BaseException) -> int:
        depth = 0
        tb = error.__traceback__
        while tb is not None:
            depth += 1
            tb = tb.tb_next

        return depth

    def test_repeated_reads_do_not_grow_traceback(self):
        """Test re-raising the stored error does not accumulate traceback frames."""
        parser = SExprParser("(1")
        depths = []
        for _ in range(3):
            with pytest.raises(SExprStructuralError) as exc_info:
                parser.read()

            depths.append(self._traceback_depth(exc_info.value))

        assert depths[1] == depths[2]
        assert depths[1] <= depths[0]
