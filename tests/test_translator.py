"""
MiniBasic Translator Test Suite
===============================

End-to-end tests for the translation pipeline and its configuration.

Test Organization
-----------------
- TestTranslate: translate() and Translator.translate_source()
- TestTranslateToFile: output finalization
- TestTranslateFile: reading source files
- TestOptions: TranslatorOptions defaults and environment overrides
- TestDiagnostics: one-line and detailed error formats
- TestExamples: bundled example programs
- TestCompiledPrograms: generated C built and run with the host compiler
"""

import shutil
import subprocess
from pathlib import Path

import pytest
from minibasic import (
    translate,
    Translator,
    TranslatorOptions,
    MiniBasicError,
    OutputWriteError,
    TranslatorError,
    BasicSemanticError,
    BasicSyntaxError,
)
from minibasic.translator.compiler import DEFAULT_OUTPUT
from minibasic.translator.errors import UndeclaredVariableError, UndeclaredLabelError


EXAMPLES_DIR = Path(__file__).parent.parent / "examples"
CC = shutil.which("cc") or shutil.which("gcc")

COUNTDOWN = """\
LET n = 3
LABEL top
IF n <= 0 THEN
    GOTO done
ENDIF
PRINT n
LET n = n - 1
GOTO top
LABEL done
PRINT "liftoff"
"""


# =============================================================================
# Translation Tests
# =============================================================================

class TestTranslate:
    """Tests for translating source text."""

    def test_let_print_scenario(self):
        """Output pieces appear in the documented order."""
        output = translate("LET a = 3\nPRINT a\n")
        pieces = [
            "#include <stdio.h>",
            "float a;",
            "int main(void){",
            "a = 3;",
            'printf("%.2f\\n", (float)(a));',
            "return 0;",
            "}",
        ]
        positions = [output.index(piece) for piece in pieces]
        assert positions == sorted(positions)

    def test_if_scenario(self):
        output = translate('IF 1 > 0 THEN\nPRINT "hi"\nENDIF\n')
        assert 'if(1>0){\nprintf("hi\\n");\n}\n' in output

    def test_forward_goto_scenario(self):
        output = translate('GOTO skip\nPRINT "x"\nLABEL skip\n')
        assert output.index("goto skip;") < output.index("skip:;\n")

    def test_countdown(self):
        output = translate(COUNTDOWN)
        assert output == (
            "#include <stdio.h>\n"
            "float n;\n"
            "int main(void){\n"
            "n = 3;\n"
            "top:;\n"
            "if(n<=0){\n"
            "goto done;\n"
            "}\n"
            'printf("%.2f\\n", (float)(n));\n'
            "n = n-1;\n"
            "goto top;\n"
            "done:;\n"
            'printf("liftoff\\n");\n'
            "return 0;\n"
            "}\n"
        )

    def test_idempotent(self):
        """Translating the same program twice gives identical text."""
        source = "INPUT b\nLET a = b * 2\nLET z = 1\nLET c = a\nPRINT c + z\n"
        assert translate(source) == translate(source)

    def test_result_details(self):
        result = Translator().translate_source(COUNTDOWN, "count.bas")
        assert result.success
        assert result.filename == "count.bas"
        assert result.variables == ["n"]
        assert result.labels == ["top", "done"]
        assert result.token_count > 0
        assert result.output_path is None

    def test_translate_source_writes_nothing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Translator().translate_source('PRINT "x"\n')
        assert list(tmp_path.iterdir()) == []

    def test_errors_are_raised_not_exited(self):
        with pytest.raises(TranslatorError):
            translate("PRINT x\n")

    def test_error_categories(self):
        with pytest.raises(BasicSemanticError):
            translate("GOTO missing\n")
        with pytest.raises(BasicSyntaxError):
            translate("LET\n")
        with pytest.raises(MiniBasicError):
            translate("LET a = 1.\n")


# =============================================================================
# File Output Tests
# =============================================================================

class TestTranslateToFile:
    """Tests for writing the generated program."""

    def test_writes_output(self, tmp_path):
        path = tmp_path / "prog.c"
        result = Translator().translate_to_file('PRINT "hi"\n', str(path))
        assert path.read_text() == result.output
        assert result.output_path == str(path)

    def test_uses_option_output_path(self, tmp_path):
        path = tmp_path / "configured.c"
        translator = Translator(TranslatorOptions(output_path=str(path)))
        translator.translate_to_file('PRINT "hi"\n')
        assert path.exists()

    def test_default_output_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Translator().translate_to_file('PRINT "hi"\n')
        assert (tmp_path / DEFAULT_OUTPUT).exists()

    def test_no_file_on_error(self, tmp_path):
        path = tmp_path / "prog.c"
        with pytest.raises(UndeclaredLabelError):
            Translator().translate_to_file("GOTO nowhere\n", str(path))
        assert not path.exists()

    def test_unwritable_output(self, tmp_path):
        path = tmp_path / "no" / "such" / "dir" / "prog.c"
        with pytest.raises(OutputWriteError):
            Translator().translate_to_file('PRINT "hi"\n', str(path))


# =============================================================================
# File Input Tests
# =============================================================================

class TestTranslateFile:
    """Tests for reading source files."""

    def test_translate_file(self, tmp_path):
        source = tmp_path / "hello.bas"
        source.write_text('PRINT "hello"\n')
        result = Translator().translate_file(str(source))
        assert 'printf("hello\\n");' in result.output
        assert result.filename == str(source)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Translator().translate_file(str(tmp_path / "missing.bas"))

    def test_error_location_uses_filename(self, tmp_path):
        source = tmp_path / "bad.bas"
        source.write_text("PRINT 1\nPRINT y\n")
        with pytest.raises(UndeclaredVariableError) as exc_info:
            Translator().translate_file(str(source))
        assert exc_info.value.location.filename == str(source)
        assert exc_info.value.location.line == 2


# =============================================================================
# Configuration Tests
# =============================================================================

class TestOptions:
    """Tests for TranslatorOptions."""

    def test_defaults(self):
        options = TranslatorOptions()
        assert options.output_path is None
        assert options.encoding == "utf-8"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MINIBASIC_OUTPUT", "build/prog.c")
        monkeypatch.setenv("MINIBASIC_ENCODING", "latin-1")
        options = TranslatorOptions.from_env()
        assert options.output_path == "build/prog.c"
        assert options.encoding == "latin-1"

    def test_from_env_without_variables(self, monkeypatch):
        monkeypatch.delenv("MINIBASIC_OUTPUT", raising=False)
        monkeypatch.delenv("MINIBASIC_ENCODING", raising=False)
        assert TranslatorOptions.from_env() == TranslatorOptions()

    def test_encoding_used_for_output(self, tmp_path):
        path = tmp_path / "prog.c"
        translator = Translator(TranslatorOptions(encoding="latin-1"))
        translator.translate_to_file('PRINT "café"\n', str(path))
        assert "café".encode("latin-1") in path.read_bytes()


# =============================================================================
# Diagnostic Format Tests
# =============================================================================

class TestDiagnostics:
    """Tests for error message formatting."""

    def test_single_line_message(self):
        with pytest.raises(TranslatorError) as exc_info:
            translate("PRINT x\n")
        message = str(exc_info.value)
        assert "\n" not in message
        assert message == "<input>:1:7: error: undeclared variable 'x'"

    def test_describe_shows_context(self):
        with pytest.raises(TranslatorError) as exc_info:
            translate("LET count = 1\nPRINT cuont\n")
        lines = exc_info.value.describe().split("\n")
        assert lines[0] == "<input>:2:7: error: undeclared variable 'cuont'"
        assert lines[1] == "    PRINT cuont"
        assert lines[2] == "          ^"
        assert lines[3] == "hint: did you mean 'count'?"

    def test_syntax_message_names_expected_and_found(self):
        with pytest.raises(TranslatorError) as exc_info:
            translate("IF 1 > 0 PRINT\n")
        assert str(exc_info.value) == "<input>:1:10: error: expected THEN, got PRINT 'PRINT'"

    def test_newline_not_shown_as_text(self):
        with pytest.raises(TranslatorError) as exc_info:
            translate("LET a\n")
        assert str(exc_info.value) == "<input>:1:6: error: expected EQ, got NEWLINE"


# =============================================================================
# Example Program Tests
# =============================================================================

class TestExamples:
    """Every bundled example translates."""

    @pytest.mark.parametrize(
        "path",
        sorted(EXAMPLES_DIR.glob("*.bas")),
        ids=lambda p: p.name,
    )
    def test_example(self, path):
        result = Translator().translate_file(str(path))
        assert result.output.startswith("#include <stdio.h>\n")
        assert result.output.endswith("return 0;\n}\n")

    def test_examples_present(self):
        assert len(list(EXAMPLES_DIR.glob("*.bas"))) >= 4


# =============================================================================
# Compiled Program Tests
# =============================================================================

def run_program(tmp_path, source: str, stdin: str) -> str:
    """Translate, compile with the host C compiler and run with stdin."""
    c_file = tmp_path / "prog.c"
    exe = tmp_path / "prog"
    Translator().translate_to_file(source, str(c_file))
    subprocess.run(
        [CC, "-std=c99", "-pedantic-errors", "-o", str(exe), str(c_file)],
        check=True,
        capture_output=True,
    )
    completed = subprocess.run(
        [str(exe)], input=stdin, capture_output=True, text=True, check=True
    )
    return completed.stdout


@pytest.mark.skipif(CC is None, reason="no C compiler available")
class TestCompiledPrograms:
    """Generated C compiles and behaves as the MiniBasic program reads."""

    def test_countdown_runs(self, tmp_path):
        assert run_program(tmp_path, COUNTDOWN, "") == "3.00\n2.00\n1.00\nliftoff\n"

    def test_bad_input_discards_rest_of_line(self, tmp_path):
        source = "INPUT a\nINPUT b\nPRINT a\nPRINT b\n"
        assert run_program(tmp_path, source, "abc def\n5\n") == "0.00\n5.00\n"

    def test_end_of_input_zeroes_variable(self, tmp_path):
        source = "LET a = 7\nINPUT a\nPRINT a\n"
        assert run_program(tmp_path, source, "") == "0.00\n"

    def test_good_input(self, tmp_path):
        assert run_program(tmp_path, "INPUT a\nPRINT a * 2\n", "2.5\n") == "5.00\n"

    def test_label_at_end_of_block_compiles(self, tmp_path):
        source = "LET i = 0\nWHILE i < 2 REPEAT\nLET i = i + 1\nLABEL tail\nENDWHILE\nPRINT i\n"
        assert run_program(tmp_path, source, "") == "2.00\n"
