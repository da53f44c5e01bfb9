"""
MiniBasic Translator
====================

This package translates MiniBasic programs into C source code.

MiniBasic is a minimal structured language with a single numeric type:

- Output: PRINT "text" or PRINT expression
- Input: INPUT variable
- Assignment: LET variable = expression
- Control flow: IF ... THEN ... ENDIF, WHILE ... REPEAT ... ENDWHILE
- Jumps: LABEL name, GOTO name
- Comments: # to end of line

Pipeline
--------
Translation is a single pass with no syntax tree:

    MiniBasic Source → Lexer → Parser (emits C) → Emitter → C Source

The parser pulls tokens from the lexer on demand and pushes C fragments
into the emitter as each production is recognized. Declarations go to the
emitter's header, statements to its body.

Usage
-----
>>> from minibasic.translator import translate
>>> print(translate('LET a = 3\\nPRINT a\\n'))
#include <stdio.h>
float a;
int main(void){
a = 3;
printf("%.2f\\n", (float)(a));
return 0;
}
"""

from minibasic.translator.compiler import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    translate,
)
from minibasic.translator.errors import (
    TranslatorError,
    BasicLexicalError,
    BasicSyntaxError,
    BasicSemanticError,
    IllegalStringCharacterError,
    MalformedNumberError,
    InvalidCharacterError,
    UnexpectedTokenError,
    InvalidStatementError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
)
from minibasic.translator.lexer import Lexer, Token, TokenKind, TokenCategory
from minibasic.translator.parser import Parser
from minibasic.translator.emitter import Emitter

__all__ = [
    # Main API
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "translate",
    # Errors
    "TranslatorError",
    "BasicLexicalError",
    "BasicSyntaxError",
    "BasicSemanticError",
    "IllegalStringCharacterError",
    "MalformedNumberError",
    "InvalidCharacterError",
    "UnexpectedTokenError",
    "InvalidStatementError",
    "UndeclaredVariableError",
    "DuplicateLabelError",
    "UndeclaredLabelError",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "TokenCategory",
    # Parser / code generator
    "Parser",
    # Emitter
    "Emitter",
]
