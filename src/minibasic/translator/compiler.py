"""
MiniBasic Translator Main Module
================================

This module provides the main translator interface for MiniBasic.
It wires the three stages together for one translation:

    Source → Lexer → Parser/CodeGenerator → Emitter → C

Usage
-----
Command line:
    $ mbc hello.bas -o hello.c

Programmatic:
    >>> from minibasic.translator import translate
    >>> c_source = translate('PRINT "hello"\\n')

Configuration
-------------
TranslatorOptions holds the output path and text encoding. Values can
come from defaults, from the environment (TranslatorOptions.from_env)
or from the caller.

Error Handling
--------------
There is no recovery: the first lexical, syntax or semantic error is
raised as a TranslatorError subclass and nothing is written. Printing the
diagnostic and choosing an exit status is left to the caller (see
minibasic.cli.mbc).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import os

from minibasic.translator.lexer import Lexer
from minibasic.translator.parser import Parser
from minibasic.translator.emitter import Emitter

logger = logging.getLogger(__name__)

# Output file used when neither the caller nor the environment names one
DEFAULT_OUTPUT = "out.c"


@dataclass
class TranslatorOptions:
    """
    Translator configuration options.

    Attributes:
        output_path: Where translate_to_file() writes the C program.
                     None means DEFAULT_OUTPUT for the library; the CLI
                     derives it from the input file name instead.
        encoding: Text encoding for reading source and writing output
    """
    output_path: Optional[str] = None
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> "TranslatorOptions":
        """
        Create TranslatorOptions from environment variables.

        Environment variables (all optional):
            MINIBASIC_OUTPUT: Output file path
            MINIBASIC_ENCODING: Source/output text encoding

        Returns:
            TranslatorOptions with values from environment variables
        """
        options = cls()

        if output := os.environ.get("MINIBASIC_OUTPUT"):
            options.output_path = output

        if encoding := os.environ.get("MINIBASIC_ENCODING"):
            options.encoding = encoding

        return options


@dataclass
class TranslationResult:
    """
    Result of a successful translation.

    Attributes:
        filename: Source filename
        success: True once the whole program was translated
        output: Generated C program
        token_count: Number of tokens read from the source
        variables: Declared variables, in first-use order
        labels: Declared labels, in declaration order
        output_path: File the program was written to, if any
    """
    filename: str = ""
    success: bool = False
    output: str = ""
    token_count: int = 0
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    output_path: Optional[str] = None


class Translator:
    """
    MiniBasic to C translator.

    Example:
        translator = Translator()
        result = translator.translate_file("hello.bas")
        print(result.output)

    Attributes:
        options: Translator configuration options
    """

    def __init__(self, options: Optional[TranslatorOptions] = None):
        self.options = options or TranslatorOptions()

    def translate_source(self, source: str, filename: str = "<input>") -> TranslationResult:
        """
        Translate MiniBasic source to C without writing anything.

        Args:
            source: Complete MiniBasic source text
            filename: Source filename for error messages

        Returns:
            TranslationResult with the generated program

        Raises:
            TranslatorError: On the first lexical, syntax or semantic error
        """
        output_path = self.options.output_path or DEFAULT_OUTPUT
        emitter = Emitter(output_path, encoding=self.options.encoding)
        return self._run(source, filename, emitter)

    def translate_to_file(
        self,
        source: str,
        output_path: Optional[str] = None,
        filename: str = "<input>",
    ) -> TranslationResult:
        """
        Translate MiniBasic source and write the C program.

        The file is only written once the whole program has translated
        without error.

        Args:
            source: Complete MiniBasic source text
            output_path: Destination (defaults to options.output_path)
            filename: Source filename for error messages

        Raises:
            TranslatorError: On the first translation error
            OutputWriteError: If the output cannot be written
        """
        output_path = output_path or self.options.output_path or DEFAULT_OUTPUT
        emitter = Emitter(output_path, encoding=self.options.encoding)

        result = self._run(source, filename, emitter)
        emitter.write_file()
        result.output_path = str(output_path)
        return result

    def translate_file(self, filepath: str) -> TranslationResult:
        """
        Translate a MiniBasic source file without writing anything.

        Raises:
            FileNotFoundError: If the source file does not exist
            TranslatorError: On the first translation error
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding=self.options.encoding)
        return self.translate_source(source, str(filepath))

    def _run(self, source: str, filename: str, emitter: Emitter) -> TranslationResult:
        logger.debug(f"Translating {filename} ({len(source)} characters)")

        lexer = Lexer(source, filename)
        parser = Parser(lexer, emitter)
        parser.program()

        result = TranslationResult(
            filename=filename,
            success=True,
            output=emitter.output,
            token_count=lexer.token_count,
            variables=list(parser.symbols),
            labels=list(parser.labels_declared),
        )
        logger.debug(
            f"Translated {filename}: {result.token_count} tokens, "
            f"{len(result.output)} bytes of C"
        )
        return result


def translate(source: str, filename: str = "<input>") -> str:
    """
    Translate MiniBasic source text to C source text.

    Raises:
        TranslatorError: On the first translation error
    """
    return Translator().translate_source(source, filename).output
