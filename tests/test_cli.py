# =============================================================================
# test_cli.py - mbc Command-Line Tests
# =============================================================================
# Tests for the mbc CLI: output files, token dump, diagnostics and
# exit codes.
# =============================================================================

import pytest
from click.testing import CliRunner

from minibasic.cli.mbc import main
from minibasic.cli.errors import ExitCode


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def hello(tmp_path):
    path = tmp_path / "hello.bas"
    path.write_text('LET a = 3\nPRINT "hello"\nPRINT a\n')
    return path


class TestMbcCLI:
    """Tests for the mbc CLI tool."""

    def test_cli_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Translate a MiniBasic program to C" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_default_output_path(self, runner, hello, monkeypatch):
        monkeypatch.delenv("MINIBASIC_OUTPUT", raising=False)
        result = runner.invoke(main, [str(hello)])

        assert result.exit_code == ExitCode.SUCCESS
        output = hello.with_suffix(".c")
        assert output.exists()
        assert "float a;" in output.read_text()
        assert f"Translated {hello} -> {output}" in result.output

    def test_explicit_output_path(self, runner, hello, tmp_path):
        output = tmp_path / "out" / "prog.c"
        output.parent.mkdir()
        result = runner.invoke(main, [str(hello), "-o", str(output)])

        assert result.exit_code == 0
        assert 'printf("hello\\n");' in output.read_text()

    def test_output_from_environment(self, runner, hello, tmp_path):
        output = tmp_path / "from_env.c"
        result = runner.invoke(main, [str(hello)], env={"MINIBASIC_OUTPUT": str(output)})

        assert result.exit_code == 0
        assert output.exists()

    def test_verbose(self, runner, hello):
        result = runner.invoke(main, ["-v", str(hello)])

        assert result.exit_code == 0
        assert "Variables: a" in result.output
        assert "Labels: (none)" in result.output

    def test_tokens(self, runner, hello):
        result = runner.invoke(main, ["--tokens", str(hello)])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].split() == ["LET", "'LET'"]
        assert lines[1].split() == ["IDENT", "'a'"]
        assert lines[-1].split() == ["EOF", "''"]
        assert not hello.with_suffix(".c").exists()

    def test_translation_error(self, runner, tmp_path):
        source = tmp_path / "bad.bas"
        source.write_text("PRINT 1\nPRINT y\n")
        result = runner.invoke(main, [str(source)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert f"{source}:2:7: error: undeclared variable 'y'" in result.output
        assert not source.with_suffix(".c").exists()

    def test_translation_error_is_one_line(self, runner, tmp_path):
        source = tmp_path / "bad.bas"
        source.write_text("GOTO nowhere\n")
        result = runner.invoke(main, [str(source)])

        assert result.exit_code == 1
        assert result.output.strip().count("\n") == 0
        assert "undeclared label 'nowhere'" in result.output

    def test_verbose_error_shows_context(self, runner, tmp_path):
        source = tmp_path / "bad.bas"
        source.write_text('PRINT "50%"\n')
        result = runner.invoke(main, ["-v", str(source)])

        assert result.exit_code == 1
        assert '    PRINT "50%"' in result.output
        assert "hint:" in result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.bas")])
        assert result.exit_code == 2

    def test_unwritable_output(self, runner, hello, tmp_path):
        output = tmp_path / "no" / "such" / "prog.c"
        result = runner.invoke(main, [str(hello), "-o", str(output)])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_unknown_encoding(self, runner, hello):
        result = runner.invoke(main, [str(hello)], env={"MINIBASIC_ENCODING": "no-such-codec"})
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Internal error" not in result.output
        assert not hello.with_suffix(".c").exists()
