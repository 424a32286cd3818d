#!/usr/bin/env python3
"""
Tests for the help table renderer.

The expected rows are spelled out cell by cell so that the column widths
and padding directions are visible in the test itself.
"""

import io
from unittest.mock import patch

from definition_argparser import ArgDefinition, ArgParser, write_help


def render(*definitions):
    buffer = io.StringIO()
    write_help(definitions, buffer)
    return buffer.getvalue()


class TestWriteHelp:
    """Test suite for write_help."""

    def test_table_with_default_column(self):
        output = render(
            ArgDefinition("--help", 0, aliases=("-h", "-?")),
            ArgDefinition("--int", 1, aliases=("-i",), default="12345", info="receive int32"),
        )
        expected = "\n".join(
            [
                "Arguments:",
                "Name  " + " | " + "ParamCount" + " | " + "Alias " + " | " + "Default" + " | Info",
                "--help" + " . " + " " * 9 + "0" + " . " + "-h, -?" + " . " + " " * 7 + " . ",
                "--int " + " . " + " " * 9 + "1" + " . " + "-i    " + " . " + "12345  " + " . "
                + "receive int32",
            ]
        )
        assert output == expected

    def test_default_column_omitted_without_defaults(self):
        output = render(ArgDefinition("--list", 1, info="receive string list"))
        lines = output.split("\n")
        assert "Default" not in output
        assert lines[1] == "Name  " + " | " + "ParamCount" + " | " + "Alias" + " | Info"
        assert lines[2] == "--list" + " . " + " " * 9 + "1" + " . " + " " * 5 + " . " + "receive string list"

    def test_no_trailing_newline(self):
        assert not render(ArgDefinition("--flag")).endswith("\n")

    def test_wide_cells_widen_columns(self):
        output = render(
            ArgDefinition("--a-very-long-name", 12345678901, aliases=("-x", "--extra-alias")),
        )
        header, row = output.split("\n")[1:]
        assert header.startswith("Name" + " " * (len("--a-very-long-name") - 4) + " | ")
        assert "ParamCount " in header
        assert row == (
            "--a-very-long-name" + " . " + "12345678901" + " . " + "-x, --extra-alias" + " . "
        )

    def test_empty_table_has_only_header(self):
        assert render() == "Arguments:\nName | ParamCount | Alias | Info"


class TestParserHelp:
    """Test suite for the ArgParser help helpers."""

    def test_format_help_matches_write_help(self):
        definitions = (
            ArgDefinition("--span3", 3, aliases=("-s3",), info="receive 3 strings"),
            ArgDefinition("--int", 1, aliases=("-i",), default="12345"),
        )
        parser = ArgParser([], *definitions)
        assert parser.format_help() == render(*definitions)

    def test_write_help_defaults_to_stdout(self):
        parser = ArgParser([], ArgDefinition("--flag", 0, aliases=("-f",), info="A flag"))
        with patch("sys.stdout", new_callable=io.StringIO) as mock_stdout:
            parser.write_help()
            help_output = mock_stdout.getvalue()
        assert help_output.startswith("Arguments:\n")
        assert "A flag" in help_output
        assert "-f" in help_output

    def test_help_does_not_affect_parsing(self):
        parser = ArgParser(["-f"], ArgDefinition("--flag", 0, aliases=("-f",)))
        before = dict(parser.results)
        parser.format_help()
        assert parser.results == before
