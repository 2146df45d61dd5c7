"""
Tests for the expand command.
"""

from typing import Final, Generator
from pathlib import Path
from unittest.mock import patch
from click.testing import CliRunner
from rich.console import Console
import io
import pytest
from ddocmac.commands.app import cli
from ddocmac.commands.expand import source_expand
from ddocmac.config.settings import appsettings

PAGE: Final[str] = (
    "<html>\n"
    "  <head>\n"
    '    <META http-equiv="content-type" content="text/html; charset=utf-8">\n'
    "    <title>T</title>\n"
    "  </head>\n"
    "  <body>\n"
    "  <h1>T</h1>\n"
    "  <p>hi</p>\n"
    "  <hr>\n"
    "  </body>\n"
    "</html>"
)


@pytest.fixture
def runner() -> CliRunner:
    """Provides a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def captured_errors() -> Generator[io.StringIO, None, None]:
    """Captures the error console of the expand command."""
    output = io.StringIO()
    with patch("ddocmac.commands.expand.console", Console(file=output, width=200)):
        yield output


def test_expand_stdin(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["expand"], input="A $(B bold) word")
    assert result.exit_code == 0
    assert result.output == "A <b>bold</b> word"


def test_expand_files_in_order(runner: CliRunner, tmp_path: Path) -> None:
    first = tmp_path / "one.dd"
    second = tmp_path / "two.dd"
    first.write_text("$(I one)\n")
    second.write_text("$(U two)")
    result = runner.invoke(cli, ["expand", str(first), str(second)])
    assert result.exit_code == 0
    assert result.output == "<i>one</i>\n<u>two</u>"


def test_expand_with_defines(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["expand", "-D", "HI=Hello $(B $0)", "-D", "B="], input="$(HI you)!"
    )
    assert result.exit_code == 0
    assert result.output == "Hello !"


def test_expand_with_macro_file(runner: CliRunner, tmp_path: Path) -> None:
    macro_file = tmp_path / "site.ddoc"
    macro_file.write_text("GREET = Hello $0\nB = <strong>$0</strong>\n")
    result = runner.invoke(
        cli, ["expand", "-m", str(macro_file)], input="$(GREET $(B you))"
    )
    assert result.exit_code == 0
    assert result.output == "Hello <strong>you</strong>"


def test_define_overrides_macro_file(runner: CliRunner, tmp_path: Path) -> None:
    macro_file = tmp_path / "site.ddoc"
    macro_file.write_text("NAME = file\n")
    result = runner.invoke(
        cli, ["expand", "-m", str(macro_file), "-D", "NAME=cli"], input="$(NAME)"
    )
    assert result.output == "cli"


def test_configured_macro_files(
    runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    macro_file = tmp_path / "site.ddoc"
    macro_file.write_text("NAME = configured\n")
    monkeypatch.setattr(appsettings, "macroFiles", [str(macro_file)])
    result = runner.invoke(cli, ["expand"], input="$(NAME)")
    assert result.output == "configured"


def test_expand_embedded_code(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["expand"], input="---\nf(x);\n---\n")
    assert result.exit_code == 0
    assert result.output == '<pre class="d_code">f(x);\n</pre>'


def test_expand_document(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["expand", "--document", "--title", "T"], input="$(P hi)"
    )
    assert result.exit_code == 0
    assert result.output == PAGE


def test_expand_to_output_file(runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "out.html"
    result = runner.invoke(cli, ["expand", "-o", str(target)], input="$(I x)")
    assert result.exit_code == 0
    assert result.output == ""
    assert target.read_text() == "<i>x</i>"


def test_expand_max_depth(runner: CliRunner, captured_errors: io.StringIO) -> None:
    result = runner.invoke(
        cli, ["expand", "--max-depth", "3", "-D", "LOOP=$(LOOP)"], input="$(LOOP)"
    )
    assert result.exit_code == 1
    assert "Expansion failed" in captured_errors.getvalue()
    assert "LOOP" in captured_errors.getvalue()


def test_expand_max_depth_from_settings(
    runner: CliRunner, captured_errors: io.StringIO, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(appsettings, "maxDepth", 2)
    result = runner.invoke(cli, ["expand", "-D", "LOOP=$(LOOP)"], input="$(LOOP)")
    assert result.exit_code == 1


def test_expand_rejects_zero_depth(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["expand", "--max-depth", "0"], input="x")
    assert result.exit_code == 2


def test_expand_bad_macro_file(
    runner: CliRunner, tmp_path: Path, captured_errors: io.StringIO
) -> None:
    macro_file = tmp_path / "bad.ddoc"
    macro_file.write_text("A = x\nParams:\nrest")
    result = runner.invoke(cli, ["expand", "-m", str(macro_file)], input="$(A)")
    assert result.exit_code == 1
    assert "Error loading macros" in captured_errors.getvalue()
    assert "unparsed data (6)" in captured_errors.getvalue()


def test_expand_bad_define(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["expand", "-D", "NOEQUALS"], input="x")
    assert result.exit_code == 2
    assert "NAME=VALUE" in result.output


def test_source_expand_without_document() -> None:
    result = source_expand("$(B x)", {})
    assert result.success
    assert result.text == "<b>x</b>"


def test_source_expand_document_body_is_not_rescanned() -> None:
    result = source_expand("$(DOLLAR)(B x)", {"DDOC": "[$(BODY)]"}, document=True)
    assert result.text == "[$(B x)]"


def test_expand_dashes_inside_macro(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["-q", "expand"], input="See $(B ---) here\n")
    assert result.exit_code == 0
    assert result.output == "See <b>---</b> here\n"


def test_expand_document_dash_title(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["expand", "--document", "--title", "---"], input="$(P hi)"
    )
    assert result.exit_code == 0
    assert "<title>---</title>" in result.output
    assert "<h1>---</h1>" in result.output


def test_expand_undecodable_macro_file(
    runner: CliRunner, tmp_path: Path, captured_errors: io.StringIO
) -> None:
    macro_file = tmp_path / "latin.ddoc"
    macro_file.write_bytes(b"A = \xff\n")
    result = runner.invoke(cli, ["expand", "-m", str(macro_file)], input="$(A)")
    assert result.exit_code == 1
    assert "Error loading macros" in captured_errors.getvalue()


def test_expand_undecodable_input(
    runner: CliRunner, tmp_path: Path, captured_errors: io.StringIO
) -> None:
    source = tmp_path / "page.dd"
    source.write_bytes(b"$(B \xff)")
    result = runner.invoke(cli, ["expand", str(source)])
    assert result.exit_code == 1
    assert "Error reading input" in captured_errors.getvalue()
