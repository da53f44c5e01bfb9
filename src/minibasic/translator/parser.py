"""
MiniBasic Parser and C Code Generator
=====================================

This module implements a recursive descent parser for MiniBasic that
generates C as it goes. There is no syntax tree: each production emits
its C fragment into the Emitter as soon as it is recognized, so the
output is built in a single pass over the token stream.

Grammar (EBNF)
--------------
program      ::= {NEWLINE} {statement}
statement    ::= "PRINT" (expression | STRING) nl
               | "IF" comparison "THEN" nl {statement} "ENDIF" nl
               | "WHILE" comparison "REPEAT" nl {statement} "ENDWHILE" nl
               | "LABEL" IDENT nl
               | "GOTO" IDENT nl
               | "LET" IDENT "=" expression nl
               | "INPUT" IDENT nl
nl           ::= NEWLINE {NEWLINE}
comparison   ::= expression comparisonOp expression {comparisonOp expression}
expression   ::= term {("+" | "-") term}
term         ::= unary {("*" | "/") unary}
unary        ::= ["+" | "-"] primary
primary      ::= NUMBER | IDENT
comparisonOp ::= ">" | ">=" | "<" | "<=" | "==" | "!="

A comparison needs at least one comparison operator; a bare expression
is not a valid condition.

Generated C
-----------
| MiniBasic              | C                                          |
|------------------------|--------------------------------------------|
| (program)              | #include <stdio.h> / int main(void){ ...   |
| PRINT "hi"             | printf("hi\\n");                            |
| PRINT a*2              | printf("%.2f\\n", (float)(a*2));            |
| IF a>0 THEN ... ENDIF  | if(a>0){ ... }                             |
| WHILE ... REPEAT ...   | while(...){ ... }                          |
| LABEL top / GOTO top   | top: / goto top;                           |
| LET a = 1              | float a; (header) / a = 1;                 |
| INPUT a                | float a; (header) / guarded scanf          |

Operator precedence comes from the nesting of the grammar alone, so the
C expression is a direct transcription of the source expression.

Name Rules
----------
- A variable must be assigned by LET or INPUT lexically before it is read.
- A label may be declared only once.
- A label may be used by GOTO before it is declared; all GOTO targets are
  checked once the whole program has been read.

Example Usage
-------------
>>> from minibasic.translator.lexer import Lexer
>>> from minibasic.translator.emitter import Emitter
>>> from minibasic.translator.parser import Parser
>>> emitter = Emitter("out.c")
>>> Parser(Lexer("LET a = 3\\nPRINT a\\n"), emitter).program()
>>> print(emitter.output)
"""

from typing import Optional
import logging

from minibasic.errors import SourceLocation
from minibasic.translator.lexer import Lexer, Token, TokenKind
from minibasic.translator.emitter import Emitter
from minibasic.translator.errors import (
    UnexpectedTokenError,
    InvalidStatementError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Two-token-lookahead recursive descent parser emitting C.

    The parser pulls tokens from the lexer on demand and always holds
    the current token and the one after it. Name bookkeeping uses
    insertion-ordered dicts (name -> location of first occurrence), so
    lookups are hashed and header declarations keep first-use order.

    Attributes:
        lexer: Token source
        emitter: Destination for generated C
        cur_token: Token being examined
        peek_token: Token after cur_token
        symbols: Variables declared so far
        labels_declared: Labels declared so far
        labels_gotoed: Labels referenced by GOTO so far
    """

    COMPARISON_OPERATORS = (
        TokenKind.GT,
        TokenKind.GTEQ,
        TokenKind.LT,
        TokenKind.LTEQ,
        TokenKind.EQEQ,
        TokenKind.NOTEQ,
    )

    def __init__(self, lexer: Lexer, emitter: Emitter):
        self.lexer = lexer
        self.emitter = emitter

        self.symbols: dict[str, SourceLocation] = {}
        self.labels_declared: dict[str, SourceLocation] = {}
        self.labels_gotoed: dict[str, SourceLocation] = {}

        self.cur_token = Token(TokenKind.NONE, "")
        self.peek_token = Token(TokenKind.NONE, "")

        self._source_lines = lexer.source.split("\n")

        # Call twice to fill both cur_token and peek_token
        self._next_token()
        self._next_token()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _check(self, kind: TokenKind) -> bool:
        """Return True if the current token is of the given kind."""
        return self.cur_token.kind is kind

    def _next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _expect(self, kind: TokenKind, expected: Optional[str] = None) -> Token:
        """
        Consume the current token, which must be of the given kind.

        Returns:
            The consumed token

        Raises:
            UnexpectedTokenError: If the current token is of another kind
        """
        token = self.cur_token
        if token.kind is not kind:
            raise UnexpectedTokenError(
                expected or kind.name,
                token.kind.name,
                token.text,
                token.location,
                self._get_source_line(token.line),
            )
        self._next_token()
        return token

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self._source_lines):
            return self._source_lines[line - 1]
        return None

    # =========================================================================
    # Program
    # =========================================================================

    def program(self) -> None:
        """
        Parse the whole program and emit the complete C translation.

        Raises:
            BasicLexicalError: Invalid characters in the source
            BasicSyntaxError: Tokens that do not fit the grammar
            BasicSemanticError: Variable or label rules violated
        """
        logger.debug("PROGRAM")

        # Declarations are hoisted into the header after the include, and
        # the entry routine opens the body so that they stay global.
        self.emitter.header_line("#include <stdio.h>")
        self.emitter.emit_line("int main(void){")

        # Skip excess newlines at the start
        while self._check(TokenKind.NEWLINE):
            self._next_token()

        while not self._check(TokenKind.EOF):
            self._statement()

        self.emitter.emit_line("return 0;")
        self.emitter.emit_line("}")

        self._check_goto_targets()

    def _check_goto_targets(self) -> None:
        """Every label used by GOTO must have been declared somewhere."""
        for name, location in self.labels_gotoed.items():
            if name not in self.labels_declared:
                raise UndeclaredLabelError(
                    name,
                    location,
                    self._get_source_line(location.line),
                    find_similar_names(name, self.labels_declared),
                )

        logger.debug(
            f"{len(self.symbols)} variables, {len(self.labels_declared)} labels, "
            f"{len(self.labels_gotoed)} goto targets"
        )

    # =========================================================================
    # Statements
    # =========================================================================

    def _statement(self) -> None:
        token = self.cur_token
        logger.debug(f"STATEMENT-{token.kind.name} at {token.location}")

        # "PRINT" (expression | string)
        if self._check(TokenKind.PRINT):
            self._next_token()

            if self._check(TokenKind.STRING):
                self.emitter.emit_line('printf("' + self.cur_token.text + '\\n");')
                self._next_token()
            else:
                self.emitter.emit('printf("%.2f\\n", (float)(')
                self._expression()
                self.emitter.emit_line("));")

        # "IF" comparison "THEN" nl {statement} "ENDIF"
        elif self._check(TokenKind.IF):
            self._next_token()
            self.emitter.emit("if(")
            self._comparison()

            self._expect(TokenKind.THEN)
            self._nl()
            self.emitter.emit_line("){")

            self._block(TokenKind.ENDIF)
            self.emitter.emit_line("}")

        # "WHILE" comparison "REPEAT" nl {statement} "ENDWHILE"
        elif self._check(TokenKind.WHILE):
            self._next_token()
            self.emitter.emit("while(")
            self._comparison()

            self._expect(TokenKind.REPEAT)
            self._nl()
            self.emitter.emit_line("){")

            self._block(TokenKind.ENDWHILE)
            self.emitter.emit_line("}")

        # "LABEL" ident
        elif self._check(TokenKind.LABEL):
            self._next_token()
            name_token = self._expect(TokenKind.IDENT)
            name = name_token.text

            if name in self.labels_declared:
                raise DuplicateLabelError(
                    name,
                    name_token.location,
                    self.labels_declared[name],
                    self._get_source_line(name_token.line),
                )
            self.labels_declared[name] = name_token.location

            self.emitter.emit_line(name + ":;")

        # "GOTO" ident
        elif self._check(TokenKind.GOTO):
            self._next_token()
            name_token = self._expect(TokenKind.IDENT)

            # Forward references are legal; checked at end of program
            self.labels_gotoed.setdefault(name_token.text, name_token.location)
            self.emitter.emit_line("goto " + name_token.text + ";")

        # "LET" ident "=" expression
        elif self._check(TokenKind.LET):
            self._next_token()
            name_token = self._expect(TokenKind.IDENT)
            self._declare_variable(name_token)

            self._expect(TokenKind.EQ)
            self.emitter.emit(name_token.text + " = ")
            self._expression()
            self.emitter.emit_line(";")

        # "INPUT" ident
        elif self._check(TokenKind.INPUT):
            self._next_token()
            name_token = self._expect(TokenKind.IDENT)
            self._declare_variable(name_token)

            # On a failed read or end of input, zero the variable and skip the line
            name = name_token.text
            self.emitter.emit_line('if(1 != scanf("%f", &' + name + ")) {")
            self.emitter.emit_line(name + " = 0;")
            self.emitter.emit_line('scanf("%*[^\\n]");')
            self.emitter.emit_line("}")

        else:
            raise InvalidStatementError(
                token.kind.name,
                token.text,
                token.location,
                self._get_source_line(token.line),
            )

        self._nl()

    def _block(self, terminator: TokenKind) -> None:
        """Parse statements up to and including the terminating keyword."""
        while not self._check(terminator):
            if self._check(TokenKind.EOF):
                break  # _expect reports the missing terminator
            self._statement()

        self._expect(terminator)

    def _declare_variable(self, name_token: Token) -> None:
        """Declare a variable in the header on its first assignment."""
        name = name_token.text
        if name not in self.symbols:
            self.symbols[name] = name_token.location
            self.emitter.header_line("float " + name + ";")
            logger.debug(f"declared variable '{name}' at {name_token.location}")

    def _nl(self) -> None:
        """Require at least one newline, but allow more."""
        self._expect(TokenKind.NEWLINE)

        while self._check(TokenKind.NEWLINE):
            self._next_token()

    # =========================================================================
    # Expressions
    # =========================================================================

    def _is_comparison_operator(self) -> bool:
        return self.cur_token.kind in self.COMPARISON_OPERATORS

    def _comparison(self) -> None:
        """comparison ::= expression (("==" | "!=" | ">" | ">=" | "<" | "<=") expression)+"""
        self._expression()

        if not self._is_comparison_operator():
            token = self.cur_token
            raise UnexpectedTokenError(
                "comparison operator",
                token.kind.name,
                token.text,
                token.location,
                self._get_source_line(token.line),
            )

        while self._is_comparison_operator():
            self.emitter.emit(self.cur_token.text)
            self._next_token()
            self._expression()

    def _expression(self) -> None:
        """expression ::= term {( "-" | "+" ) term}"""
        self._term()

        while self._check(TokenKind.PLUS) or self._check(TokenKind.MINUS):
            self.emitter.emit(self.cur_token.text)
            self._next_token()
            self._term()

    def _term(self) -> None:
        """term ::= unary {( "/" | "*" ) unary}"""
        self._unary()

        while self._check(TokenKind.ASTERISK) or self._check(TokenKind.SLASH):
            self.emitter.emit(self.cur_token.text)
            self._next_token()
            self._unary()

    def _unary(self) -> None:
        """unary ::= ["+" | "-"] primary"""
        if self._check(TokenKind.PLUS) or self._check(TokenKind.MINUS):
            self.emitter.emit(self.cur_token.text)
            self._next_token()

        self._primary()

    def _primary(self) -> None:
        """primary ::= number | ident"""
        token = self.cur_token

        if self._check(TokenKind.NUMBER):
            self.emitter.emit(token.text)
            self._next_token()

        elif self._check(TokenKind.IDENT):
            if token.text not in self.symbols:
                raise UndeclaredVariableError(
                    token.text,
                    token.location,
                    self._get_source_line(token.line),
                    find_similar_names(token.text, self.symbols),
                )
            self.emitter.emit(token.text)
            self._next_token()

        else:
            raise UnexpectedTokenError(
                "number or variable",
                token.kind.name,
                token.text,
                token.location,
                self._get_source_line(token.line),
            )


# =============================================================================
# Name Suggestions
# =============================================================================

def find_similar_names(name: str, candidates) -> list[str]:
    """
    Find declared names close to `name`, for "did you mean" hints.

    Uses a simple edit distance heuristic: names that differ only in case,
    or within two edits and one character of length.
    """
    name_lower = name.lower()
    similar = []

    for candidate in candidates:
        candidate_lower = candidate.lower()
        if (
            candidate_lower == name_lower or
            abs(len(candidate) - len(name)) <= 1 and
            _edit_distance(name_lower, candidate_lower) <= 2
        ):
            similar.append(candidate)

    return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(distances[j], distances[j + 1], new_distances[-1]))
        distances = new_distances
    return distances[-1]
