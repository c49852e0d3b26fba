"""Lexer for S-expression source that reports failures as tokens."""

import logging
from typing import Callable, ClassVar, Iterator, List, Set

from sexpr.sexpr_text_position import SExprTextPosition
from sexpr.sexpr_token import SExprToken, SExprTokenType


class SExprLexer:
    """
    Pull-based lexer for S-expression source.

    Each call to read_token() or next() consumes exactly one token.  The lexer
    never raises: malformed input is reported as an ERROR token whose message
    describes the problem.  EMPTY and ERROR tokens are terminal, so callers
    should stop pulling tokens once they see either.
    """

    # Comma is an ordinary separator.  Carriage returns are accepted so CRLF
    # sources lex, but only '\n' moves to a new line.
    _WHITESPACE_CHARS: ClassVar[Set[str]] = set(" \t\r\n,")
    _DIGIT_CHARS: ClassVar[Set[str]] = set("0123456789")
    _SYMBOL_START_CHARS: ClassVar[Set[str]] = set(".*+!-_?$%&=<>/")
    _SYMBOL_EXTRA_CHARS: ClassVar[Set[str]] = set("/#")

    def __init__(self, source: str) -> None:
        """
        Initialize the lexer with source text.

        Args:
            source: The source string to lex
        """
        self._source = source
        self._source_len = len(source)
        self._index = 0
        self._position = SExprTextPosition()
        self._token_position = self._position
        self._text: List[str] = []
        self._error: str | None = None
        self._current_token: SExprToken | None = None
        self._logger = logging.getLogger("SExprLexer")

    @property
    def index(self) -> int:
        """Index of the next unconsumed character."""
        return self._index

    @property
    def position(self) -> SExprTextPosition:
        """Line and column of the next unconsumed character."""
        return self._position

    @property
    def at_end(self) -> bool:
        """True if all the source has been consumed."""
        return self._index >= self._source_len

    @property
    def text(self) -> str:
        """Text accepted for the most recently read token."""
        return ''.join(self._text)

    @property
    def error(self) -> str | None:
        """Message for the latest ERROR result of read_token(), if any."""
        return self._error

    @property
    def current_token(self) -> SExprToken | None:
        """The latest token returned by next()."""
        return self._current_token

    def read_token(self) -> SExprTokenType:
        """
        Consume and classify the next token.

        The accepted characters are left in the text buffer and the position
        of the token's first character is recorded for next().

        Returns:
            The type of the token that was read
        """
        self._error = None
        self._skip_whitespace_and_comments()

        self._text = []
        self._token_position = self._position

        if self.at_end:
            return SExprTokenType.EMPTY

        ch = self._source[self._index]

        if ch == '"':
            self._advance(discard=True)
            return self._read_string()

        if ch in ('+', '-'):
            self._advance()
            if self._accept_from(self._is_digit):
                return self._read_number(is_float=False)

            return self._read_symbol()

        if ch == '.':
            self._advance()
            if self._accept_from(self._is_digit):
                return self._read_number(is_float=True)

            return self._read_symbol()

        if self._is_symbol_start(ch):
            self._advance()
            return self._read_symbol()

        if self._is_digit(ch):
            self._advance()
            return self._read_number(is_float=False)

        if ch == '(':
            self._advance(discard=True)
            return SExprTokenType.BLOCK_START

        if ch == ')':
            self._advance(discard=True)
            return SExprTokenType.BLOCK_END

        return self._fail(f"unexpected character '{ch}'")

    def next(self) -> SExprToken:
        """
        Read the next token.

        Returns:
            The token, including its text and starting position
        """
        token_type = self.read_token()
        token = SExprToken(
            type=token_type,
            text=self.text,
            position=self._token_position,
            message=self._error if token_type == SExprTokenType.ERROR else None
        )
        self._current_token = token
        return token

    def tokenize(self) -> List[SExprToken]:
        """
        Read all the remaining tokens.

        Returns:
            The tokens, ending with the first EMPTY or ERROR token
        """
        tokens: List[SExprToken] = []
        while True:
            token = self.next()
            tokens.append(token)
            if token.is_terminal():
                return tokens

    def __iter__(self) -> Iterator[SExprToken]:
        """
        Iterate over the remaining tokens.

        Iteration stops before an EMPTY token, or after an ERROR token.
        """
        while True:
            token = self.next()
            if token.type == SExprTokenType.EMPTY:
                return

            yield token

            if token.type == SExprTokenType.ERROR:
                return

    def _advance(self, discard: bool = False) -> None:
        """
        Consume the current character.

        Args:
            discard: If True the character is not added to the token text
        """
        if self.at_end:
            return

        ch = self._source[self._index]
        if not discard:
            self._text.append(ch)

        self._index += 1
        self._position = self._position.advance(ch)

    def _accept(self, char: str, discard: bool = False) -> bool:
        """Consume the current character if it is char."""
        if self._index < self._source_len and self._source[self._index] == char:
            self._advance(discard)
            return True

        return False

    def _accept_from(self, predicate: Callable[[str], bool]) -> bool:
        """Consume the current character if it satisfies predicate."""
        if self._index < self._source_len and predicate(self._source[self._index]):
            self._advance()
            return True

        return False

    def _accept_while(self, predicate: Callable[[str], bool]) -> bool:
        """
        Consume characters while they satisfy predicate.

        Returns:
            True if at least one character was consumed
        """
        advanced = False
        while self._accept_from(predicate):
            advanced = True

        return advanced

    def _skip_whitespace_and_comments(self) -> None:
        """Skip separators and ';' comments, which never form part of a token."""
        while self._index < self._source_len:
            ch = self._source[self._index]
            if ch == ';':
                while self._index < self._source_len and self._source[self._index] != '\n':
                    self._advance(discard=True)

                continue

            if ch not in self._WHITESPACE_CHARS:
                return

            self._advance(discard=True)

    def _read_string(self) -> SExprTokenType:
        """
        Read the body of a string after its opening quote.

        Strings may span lines.  A backslash is kept as literal content and
        protects the character after it, including a double quote.
        """
        while not self.at_end:
            if self._accept('"', discard=True):
                return SExprTokenType.STRING

            if self._accept('\\') and self.at_end:
                break

            self._advance()

        return self._fail("unexpected end in string")

    def _read_symbol(self) -> SExprTokenType:
        """Read the remaining characters of a symbol."""
        self._accept_while(self._is_symbol_char)
        return SExprTokenType.SYMBOL

    def _read_number(self, is_float: bool) -> SExprTokenType:
        """
        Read the remaining characters of a number.

        Args:
            is_float: True if a decimal point has already been consumed

        Returns:
            INTEGER or FLOAT, or ERROR for a malformed number
        """
        self._accept_while(self._is_digit)

        if self._accept('.'):
            if is_float:
                return self._fail("unexpected '.' in number")

            is_float = True
            if not self._accept_while(self._is_digit):
                return self._fail("digits expected")

        # A fraction can only appear once, e.g. "1.2.3" or ".5.3"
        if is_float and self._accept('.'):
            return self._fail("unexpected '.' in number")

        if self._accept('e') or self._accept('E'):
            if not self._accept('+'):
                self._accept('-')

            is_float = True
            self._accept_while(self._is_digit)

        return SExprTokenType.FLOAT if is_float else SExprTokenType.INTEGER

    def _fail(self, message: str) -> SExprTokenType:
        """Record a lexical failure and return the ERROR token type."""
        self._error = message
        self._logger.debug("lexical error at %s: %s", self._token_position, message)
        return SExprTokenType.ERROR

    def _is_digit(self, ch: str) -> bool:
        """
        Determines if a character is a decimal digit.
        """
        return ch in self._DIGIT_CHARS

    def _is_symbol_start(self, ch: str) -> bool:
        """
        Determines if a character can start a symbol.
        """
        return ch.isalpha() or ch in self._SYMBOL_START_CHARS

    def _is_symbol_char(self, ch: str) -> bool:
        """
        Determines if a character can continue a symbol.
        """
        return self._is_symbol_start(ch) or ch in self._DIGIT_CHARS or ch in self._SYMBOL_EXTRA_CHARS
