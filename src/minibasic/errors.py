"""
MiniBasic Error Hierarchy
=========================

This module defines the root of the exception hierarchy for the MiniBasic
toolchain. All exceptions inherit from MiniBasicError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
MiniBasicError (base)
├── OutputWriteError - generated C file cannot be created or written
└── TranslatorError - see minibasic.translator.errors
    ├── BasicLexicalError - invalid characters, strings or numbers
    ├── BasicSyntaxError - token does not fit the grammar
    └── BasicSemanticError - undeclared variables, duplicate/missing labels

Error messages follow this format:
    filename:line:column: error: description
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class MiniBasicError(Exception):
    """
    Base exception for all MiniBasic errors.

    All exceptions in the toolchain inherit from this class, allowing
    callers to catch every error with a single except clause:

        try:
            translate(source)
        except MiniBasicError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Output Exceptions
# =============================================================================

class OutputWriteError(MiniBasicError):
    """
    The generated program cannot be written.

    Raised when finalizing the emitter fails because the destination
    cannot be created (missing directory, permission denied) or the
    write itself fails.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write '{path}': {reason}")
