"""
mbc - MiniBasic Translator Command-Line Interface
=================================================

This module implements the command-line interface for the MiniBasic
translator. It reads a MiniBasic program, translates it to C and writes
the result, or prints a single diagnostic line and exits non-zero.

Usage Examples
--------------
Basic translation (writes hello.c):
    $ mbc hello.bas

With output file:
    $ mbc hello.bas -o build/hello.c

Show the token stream:
    $ mbc --tokens hello.bas

Full pipeline to an executable:
    $ mbc hello.bas && cc hello.c -o hello

Environment
-----------
MINIBASIC_OUTPUT    default output path when -o is not given
MINIBASIC_ENCODING  source and output text encoding (default utf-8)
"""

import logging
from pathlib import Path
from typing import Optional

import click

from minibasic import __version__
from minibasic.translator import Translator, TranslatorOptions, Lexer
from minibasic.cli.errors import handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: input.c)",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output: production trace and error context",
)
@click.version_option(version=__version__, prog_name="mbc")
def main(
    input_file: Path,
    output: Optional[Path],
    tokens: bool,
    verbose: bool,
) -> None:
    """
    Translate a MiniBasic program to C.

    INPUT_FILE is the MiniBasic source file (.bas) to translate.

    The translator produces a single C file that can be built with any
    C compiler. Nothing is written if the program has an error.

    \b
    Examples:
        mbc hello.bas                # Outputs hello.c
        mbc hello.bas -o out.c       # Specify output file
        mbc --tokens hello.bas       # Dump tokens
        mbc -v hello.bas             # Verbose output

    \b
    Language summary:
        PRINT "text" | PRINT expression
        INPUT name
        LET name = expression
        IF comparison THEN ... ENDIF
        WHILE comparison REPEAT ... ENDWHILE
        LABEL name / GOTO name
    """
    setup_logging(verbose)
    options = TranslatorOptions.from_env()

    # Determine output filename
    if output is None:
        if options.output_path:
            output = Path(options.output_path)
        else:
            output = input_file.with_suffix(".c")

    try:
        if verbose:
            click.echo(f"Translating {input_file}...")

        source = input_file.read_text(encoding=options.encoding)

        # Token dump mode
        if tokens:
            for token in Lexer(source, str(input_file)).tokenize():
                click.echo(f"{token.kind.name:<10} {token.text!r}")
            return

        translator = Translator(options)
        result = translator.translate_to_file(source, str(output), filename=str(input_file))

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Variables: {', '.join(result.variables) or '(none)'}")
            click.echo(f"Labels: {', '.join(result.labels) or '(none)'}")
            click.echo(f"Wrote {len(result.output)} bytes to {output}")

        click.echo(f"Translated {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
