"""
MiniBasic - MiniBasic to C Translator
=====================================

This package translates programs written in MiniBasic, a minimal structured
procedural language, into equivalent C source code that any C compiler can
build.

Main Components
---------------
- **translator**: lexer, single-pass parser/code generator and emitter
- **cli**: the `mbc` command-line tool

Quick Start
-----------
Translate a string:
    >>> from minibasic import translate
    >>> c_source = translate('PRINT "hello, world"\\n')

Translate a file and write the result:
    >>> from minibasic import Translator
    >>> translator = Translator()
    >>> source = open("hello.bas").read()
    >>> translator.translate_to_file(source, "hello.c", filename="hello.bas")

Or use the command-line tool:
    $ mbc hello.bas -o hello.c
    $ cc hello.c -o hello

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from minibasic.errors import (
    MiniBasicError,
    SourceLocation,
    OutputWriteError,
)
from minibasic.translator import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    translate,
    TranslatorError,
    BasicLexicalError,
    BasicSyntaxError,
    BasicSemanticError,
)

__all__ = [
    # Version info
    "__version__",
    # Translator
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "translate",
    # Exception hierarchy
    "MiniBasicError",
    "SourceLocation",
    "OutputWriteError",
    "TranslatorError",
    "BasicLexicalError",
    "BasicSyntaxError",
    "BasicSemanticError",
]
