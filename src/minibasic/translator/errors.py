"""
MiniBasic Translator Error Hierarchy
====================================

This module defines the exception hierarchy for the MiniBasic translator.
All exceptions inherit from TranslatorError, which itself inherits from
the base MiniBasicError for consistent error handling across the toolchain.

Exception Hierarchy
-------------------
TranslatorError (base for all translation errors)
├── BasicLexicalError - characters that cannot form a token
│   ├── IllegalStringCharacterError - forbidden character in "..."
│   ├── MalformedNumberError - decimal point without digits
│   └── InvalidCharacterError - unexpected character (including lone '!')
├── BasicSyntaxError - tokens that do not fit the grammar
│   ├── UnexpectedTokenError - expected one kind, found another
│   └── InvalidStatementError - token cannot start a statement
└── BasicSemanticError - well-formed but meaningless programs
    ├── UndeclaredVariableError - variable used before LET/INPUT
    ├── DuplicateLabelError - LABEL declared twice
    └── UndeclaredLabelError - GOTO to a label that never appears

Error Message Format
--------------------
str(error) is always a single line, suitable for print-and-exit drivers:

    hello.bas:3:7: error: undeclared variable 'cuont'

describe() adds the source line, a caret and the hint:

    hello.bas:3:7: error: undeclared variable 'cuont'
        PRINT cuont
              ^
    hint: did you mean 'count'?

There is no error recovery: the first error raised ends the translation.
"""

from typing import Optional, List

from minibasic.errors import MiniBasicError, SourceLocation


# =============================================================================
# Base Translator Exception
# =============================================================================

class TranslatorError(MiniBasicError):
    """
    Base exception for all MiniBasic translator errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the one-line diagnostic: location prefix plus message."""
        if self.location:
            return f"{self.location}: error: {self.message}"
        return f"error: {self.message}"

    def describe(self) -> str:
        """
        Format the error with source context and hint.

        Example:
            hello.bas:5:7: error: undeclared variable 'cuont'
                PRINT cuont
                      ^
            hint: did you mean 'count'?
        """
        parts = [self._format_message()]

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class BasicLexicalError(TranslatorError):
    """
    The lexer cannot form a token from the source characters.

    Examples:
        - A '%' or backslash inside a string literal
        - "12." with no digit after the decimal point
        - A '!' that is not part of '!='
        - A character that starts no token at all, such as '$'
    """
    pass


class IllegalStringCharacterError(BasicLexicalError):
    """
    Forbidden character inside a string literal.

    The generated C passes string literals straight into printf, which has
    no escaping support on our side, so control characters, backslash and
    '%' are rejected. A newline before the closing quote means the literal
    is unterminated.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        if char in ("\n", ""):
            message = "unterminated string literal"
            hint = "add closing '\"' before the end of the line"
        else:
            message = f"illegal character {char!r} in string literal"
            hint = "string literals cannot contain control characters, '\\' or '%'"
        super().__init__(message, location=location, hint=hint, source_line=source_line)


class MalformedNumberError(BasicLexicalError):
    """
    Numeric literal with a decimal point but no fractional digits.

    Example:
        LET x = 12.    # Error: at least one digit must follow '.'
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"malformed number '{text}'",
            location=location,
            hint="at least one digit must follow the decimal point",
            source_line=source_line,
        )


class InvalidCharacterError(BasicLexicalError):
    """
    Character that cannot start any token.

    Also raised for '!' when it is not followed by '=', since '!' alone
    has no meaning in the language.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character {char!r}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class BasicSyntaxError(TranslatorError):
    """
    Token stream does not match the grammar.

    Examples:
        - IF without THEN
        - LET without '='
        - Two statements on one line (missing newline terminator)
    """
    pass


class UnexpectedTokenError(BasicSyntaxError):
    """
    The parser required one token kind and found another.

    Attributes:
        expected: Name of the expected token kind (e.g. "THEN")
        found: Name of the token kind actually found
        text: Lexeme of the token actually found
    """

    def __init__(
        self,
        expected: str,
        found: str,
        text: str = "",
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        self.text = text

        shown = f" '{text}'" if text and text.strip() else ""
        super().__init__(
            f"expected {expected}, got {found}{shown}",
            location=location,
            source_line=source_line,
        )


class InvalidStatementError(BasicSyntaxError):
    """Token that cannot begin a statement."""

    def __init__(
        self,
        found: str,
        text: str = "",
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.text = text
        super().__init__(
            f"invalid statement at '{text}' ({found})",
            location=location,
            hint="statements start with PRINT, IF, WHILE, LABEL, GOTO, LET or INPUT",
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class BasicSemanticError(TranslatorError):
    """
    Program is syntactically correct but violates a name rule.

    Variables must be introduced by LET or INPUT before they are read,
    and every label must be declared exactly once.
    """
    pass


def _did_you_mean(similar: List[str]) -> Optional[str]:
    if not similar:
        return None
    suggestions = ", ".join(f"'{s}'" for s in similar[:3])
    return f"did you mean {suggestions}?"


class UndeclaredVariableError(BasicSemanticError):
    """
    Variable referenced before any LET or INPUT assigns it.

    Forward references to variables are illegal, unlike labels.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_names: Optional[List[str]] = None,
    ):
        self.name = name
        self.similar_names = similar_names or []
        super().__init__(
            f"undeclared variable '{name}'",
            location=location,
            hint=_did_you_mean(self.similar_names)
            or f"assign '{name}' with LET or INPUT before using it",
            source_line=source_line,
        )


class DuplicateLabelError(BasicSemanticError):
    """LABEL declared more than once."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first declared at {original_location}"

        super().__init__(
            f"label '{name}' already exists",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndeclaredLabelError(BasicSemanticError):
    """
    GOTO to a label that is never declared anywhere in the program.

    Checked only once the whole program has been read, because a label
    may legally be declared after the GOTO that jumps to it. The location
    is that of the first GOTO referencing the label.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_names: Optional[List[str]] = None,
    ):
        self.name = name
        self.similar_names = similar_names or []
        super().__init__(
            f"attempting to GOTO to undeclared label '{name}'",
            location=location,
            hint=_did_you_mean(self.similar_names),
            source_line=source_line,
        )
