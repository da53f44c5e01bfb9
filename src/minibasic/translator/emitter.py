"""
C Output Emitter
================

Append-only sink for the generated C program. The parser pushes text into
two independent buffers:

- **header**: preamble and global declarations. Variables are hoisted here
  the first time they are introduced, out of statement order.
- **body**: statement code, strictly in source order.

The finished program is always header followed by body. The emitter does
no validation, escaping or formatting; callers are responsible for
emitting well-formed C fragments.
"""

from pathlib import Path
import logging

from minibasic.errors import OutputWriteError

logger = logging.getLogger(__name__)


class Emitter:
    """
    Collects generated C code and writes it to a file.

    Attributes:
        full_path: Destination of write_file()
        header: Declarations and preamble
        code: Statement code (the body)
    """

    def __init__(self, full_path: str = "out.c", encoding: str = "utf-8"):
        self.full_path = full_path
        self.encoding = encoding
        self.header = ""
        self.code = ""

    def emit(self, code: str) -> None:
        """Append text to the body."""
        self.code += code

    def emit_line(self, code: str) -> None:
        """Append text and a line separator to the body."""
        self.code += code + "\n"

    def header_line(self, code: str) -> None:
        """Append text and a line separator to the header."""
        self.header += code + "\n"

    @property
    def output(self) -> str:
        """The complete program: header followed by body."""
        return self.header + self.code

    def write_file(self) -> None:
        """
        Write the complete program to full_path, replacing any existing file.

        Raises:
            OutputWriteError: If the file cannot be created or written
        """
        contents = self.output
        try:
            Path(self.full_path).write_text(contents, encoding=self.encoding)
        except OSError as e:
            raise OutputWriteError(str(self.full_path), e.strerror or str(e)) from e

        logger.debug(f"Wrote {len(contents)} bytes to {self.full_path}")
