"""
MiniBasic Lexer (Tokenizer)
===========================

This module implements the lexer for the MiniBasic language. It converts
source text into tokens for the parser, one token per call, on demand.

Token Categories
----------------
- Control: NONE, LEX_ERR, EOF
- Structural: NEWLINE, NUMBER, IDENT, STRING
- Keywords: LABEL, GOTO, PRINT, INPUT, LET, IF, THEN, ENDIF,
  WHILE, REPEAT, ENDWHILE
- Operators: = + - * / == != < <= > >=

Lexical Rules
-------------
| Element    | Rule                                                   |
|------------|--------------------------------------------------------|
| Whitespace | space, tab and CR are skipped                          |
| Newline    | significant: terminates statements                     |
| Comment    | '#' to end of line                                     |
| Identifier | letters only; keywords are exact, case-sensitive names |
| Number     | digits, optionally '.' followed by at least one digit  |
| String     | "..." without control characters, '\\' or '%'          |

There is no sign in numeric literals; '-' is a separate token handled
by the grammar as a unary operator.

Example Usage
-------------
>>> from minibasic.translator.lexer import Lexer
>>> lexer = Lexer('LET a = 3')
>>> for token in lexer.tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENT, 'a', 1:5)
Token(EQ, '=', 1:7)
Token(NUMBER, '3', 1:9)
Token(NEWLINE, '\\n', 1:10)
Token(EOF, 2:1)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional
import logging
import string

from minibasic.errors import SourceLocation
from minibasic.translator.errors import (
    IllegalStringCharacterError,
    MalformedNumberError,
    InvalidCharacterError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenCategory(Enum):
    """Partition of token kinds used by the lexer and parser."""

    CONTROL = "control"          # Markers that never come from source text
    STRUCTURAL = "structural"    # Newlines, literals and identifiers
    KEYWORD = "keyword"          # Reserved words
    OPERATOR = "operator"        # Arithmetic, assignment and comparison


class TokenKind(Enum):
    """
    Token kinds for the MiniBasic language.

    Each member carries its TokenCategory, so "is this a keyword" is a
    property of the member itself. Members compare by identity; the
    underlying values are sequence numbers with no meaning.
    """

    def __new__(cls, category: TokenCategory):
        obj = object.__new__(cls)
        obj._value_ = len(cls.__members__) + 1
        obj.category = category
        return obj

    # === Control Markers ===
    NONE = TokenCategory.CONTROL
    LEX_ERR = TokenCategory.CONTROL
    EOF = TokenCategory.CONTROL

    # === Structural ===
    NEWLINE = TokenCategory.STRUCTURAL
    NUMBER = TokenCategory.STRUCTURAL
    IDENT = TokenCategory.STRUCTURAL
    STRING = TokenCategory.STRUCTURAL

    # === Keywords ===
    LABEL = TokenCategory.KEYWORD
    GOTO = TokenCategory.KEYWORD
    PRINT = TokenCategory.KEYWORD
    INPUT = TokenCategory.KEYWORD
    LET = TokenCategory.KEYWORD
    IF = TokenCategory.KEYWORD
    THEN = TokenCategory.KEYWORD
    ENDIF = TokenCategory.KEYWORD
    WHILE = TokenCategory.KEYWORD
    REPEAT = TokenCategory.KEYWORD
    ENDWHILE = TokenCategory.KEYWORD

    # === Operators ===
    EQ = TokenCategory.OPERATOR          # =
    PLUS = TokenCategory.OPERATOR        # +
    MINUS = TokenCategory.OPERATOR       # -
    ASTERISK = TokenCategory.OPERATOR    # *
    SLASH = TokenCategory.OPERATOR       # /
    EQEQ = TokenCategory.OPERATOR        # ==
    NOTEQ = TokenCategory.OPERATOR       # !=
    LT = TokenCategory.OPERATOR          # <
    LTEQ = TokenCategory.OPERATOR        # <=
    GT = TokenCategory.OPERATOR          # >
    GTEQ = TokenCategory.OPERATOR        # >=

    @property
    def is_keyword(self) -> bool:
        return self.category is TokenCategory.KEYWORD

    @property
    def is_operator(self) -> bool:
        return self.category is TokenCategory.OPERATOR

    @classmethod
    def from_keyword(cls, text: str) -> Optional["TokenKind"]:
        """
        Return the keyword kind named exactly `text`, or None.

        Matching is case-sensitive: "PRINT" is a keyword, "print" is an
        identifier. Non-keyword members never match, so "EOF" or "PLUS"
        written in source are plain identifiers.
        """
        for kind in cls:
            if kind.name == text and kind.is_keyword:
                return kind
        return None


# Single-character tokens that need no lookahead
SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "\n": TokenKind.NEWLINE,
}

# Characters that may be followed by '=' to form a compound operator:
# char -> (kind when alone, kind when followed by '=')
COMPOUND_TOKENS: dict[str, tuple[Optional[TokenKind], TokenKind]] = {
    "=": (TokenKind.EQ, TokenKind.EQEQ),
    ">": (TokenKind.GT, TokenKind.GTEQ),
    "<": (TokenKind.LT, TokenKind.LTEQ),
    "!": (None, TokenKind.NOTEQ),
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from MiniBasic source.

    Attributes:
        kind: The TokenKind classification
        text: The exact lexeme (string literals without their quotes)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    kind: TokenKind
    text: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.text:
            return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes MiniBasic source code on demand.

    The lexer owns the source buffer, to which a sentinel newline is
    appended so the last line is always terminated. Each call to
    next_token() scans exactly one token and leaves the cursor on the
    first character after it. Once the end of input is reached every
    further call returns EOF.

    Usage:
        lexer = Lexer(source_text, "prog.bas")
        token = lexer.next_token()

    Attributes:
        source: The source buffer (with the sentinel newline)
        filename: Name of the source file (for error reporting)
        token_count: Number of tokens returned so far
    """

    # Returned by the cursor once it moves past the end of the buffer
    END = ""

    LETTERS = string.ascii_letters
    DIGITS = string.digits

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The MiniBasic source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source + "\n"
        self.filename = filename
        self.token_count = 0

        self._pos = 0
        self._char = self.source[0]

        # Position of the current character, for token and error locations
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    @property
    def cur_char(self) -> str:
        return self._char

    @property
    def cur_pos(self) -> int:
        return self._pos

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _advance(self) -> None:
        """Move the cursor one character forward."""
        if self._char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos + 1
        else:
            self._column += 1

        self._pos += 1
        if self._pos >= len(self.source):
            self._char = self.END
        else:
            self._char = self.source[self._pos]

    def _peek(self) -> str:
        """Return the character after the current one without consuming it."""
        if self._pos + 1 >= len(self.source):
            return self.END
        return self.source[self._pos + 1]

    def _is_digit(self, char: str) -> bool:
        return char != self.END and char in self.DIGITS

    def _is_letter(self, char: str) -> bool:
        return char != self.END and char in self.LETTERS

    def _current_line(self) -> str:
        """Return the text of the line the cursor is on."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    def _location(self, line: Optional[int] = None, column: Optional[int] = None) -> SourceLocation:
        return SourceLocation(self.filename, line or self._line, column or self._column)

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace(self) -> None:
        while self._char in (" ", "\t", "\r"):
            self._advance()

    def _skip_comment(self) -> None:
        """Skip a '#' comment up to, but not including, the newline."""
        if self._char == "#":
            while self._char != self.END and self._char != "\n":
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns:
            The next Token; EOF once the input is exhausted

        Raises:
            BasicLexicalError: If the source contains an invalid lexeme
        """
        self._skip_whitespace()
        self._skip_comment()

        line = self._line
        column = self._column
        char = self._char

        if char in SINGLE_CHAR_TOKENS:
            token = self._make_token(SINGLE_CHAR_TOKENS[char], char, line, column)

        elif char == self.END:
            token = self._make_token(TokenKind.EOF, "", line, column)

        elif char in COMPOUND_TOKENS:
            token = self._scan_operator(char, line, column)

        elif char == '"':
            token = self._scan_string(line, column)

        elif self._is_digit(char):
            token = self._scan_number(line, column)

        elif self._is_letter(char):
            token = self._scan_identifier(line, column)

        else:
            raise InvalidCharacterError(
                char,
                self._location(),
                self._current_line(),
            )

        # Leave the cursor on the first character after the token
        self._advance()
        self.token_count += 1
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including EOF.

        Yields:
            Token objects in source order

        Raises:
            BasicLexicalError: If invalid source is encountered
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def _make_token(self, kind: TokenKind, text: str, line: int, column: int) -> Token:
        return Token(kind=kind, text=text, line=line, column=column, filename=self.filename)

    def _scan_operator(self, char: str, line: int, column: int) -> Token:
        """Scan '=', '>', '<' or '!' with their '=' compound forms."""
        single, double = COMPOUND_TOKENS[char]

        if self._peek() == "=":
            self._advance()
            return self._make_token(double, char + "=", line, column)

        if single is None:
            raise InvalidCharacterError(
                char,
                self._location(),
                self._current_line(),
                hint=f"expected '!=', got '!{self._peek().strip()}'",
            )

        return self._make_token(single, char, line, column)

    def _scan_string(self, line: int, column: int) -> Token:
        """
        Scan a double-quoted string literal.

        The literal is copied verbatim into C source, so characters that
        would need escaping there are rejected. The cursor is left on the
        closing quote.
        """
        self._advance()  # consume opening "
        start = self._pos

        while self._char != '"':
            char = self._char
            if char == self.END or char in "\\%" or ord(char) < 32 or ord(char) == 127:
                raise IllegalStringCharacterError(
                    char,
                    self._location(),
                    self._current_line(),
                )
            self._advance()

        return self._make_token(TokenKind.STRING, self.source[start:self._pos], line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        """
        Scan a numeric literal: digits, optionally '.' and more digits.

        The cursor is left on the last character of the literal.
        """
        start = self._pos

        while self._is_digit(self._peek()):
            self._advance()

        if self._peek() == ".":
            self._advance()

            # Must have at least one digit after the decimal point
            if not self._is_digit(self._peek()):
                raise MalformedNumberError(
                    self.source[start:self._pos + 1],
                    self._location(line, column),
                    self._current_line(),
                )
            while self._is_digit(self._peek()):
                self._advance()

        return self._make_token(TokenKind.NUMBER, self.source[start:self._pos + 1], line, column)

    def _scan_identifier(self, line: int, column: int) -> Token:
        """Scan an identifier or keyword made of letters only."""
        start = self._pos

        while self._is_letter(self._peek()):
            self._advance()

        text = self.source[start:self._pos + 1]
        kind = TokenKind.from_keyword(text) or TokenKind.IDENT
        return self._make_token(kind, text, line, column)
