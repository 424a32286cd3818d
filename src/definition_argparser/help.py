"""
Help table rendering for argument definitions.

The table has one row per definition with the columns Name, ParamCount,
Alias, Default and Info. The Default column is left out entirely when no
definition declares a default.
"""

from typing import Any, Iterable, Optional, TextIO

from .definition import ArgDefinition

HEADER = "Arguments:"
HEADER_SEPARATOR = " | "
ROW_SEPARATOR = " . "
ALIAS_SEPARATOR = ", "


def _pad_after(writer: TextIO, value: Any, width: int) -> None:
    """Write the text, then fill the rest of the column with spaces."""
    text = "" if value is None else str(value)
    writer.write(text)
    writer.write(" " * max(width - len(text), 0))


def _pad_before(writer: TextIO, value: Any, width: int) -> None:
    """Fill the column with spaces, then write the text."""
    text = "" if value is None else str(value)
    writer.write(" " * max(width - len(text), 0))
    writer.write(text)


def write_help(
    definitions: Iterable[ArgDefinition],
    writer: TextIO,
    has_default: Optional[bool] = None,
) -> None:
    """
    Write the help table for a set of definitions.

    Column widths are the widest of the header label and every cell in the
    column. No newline is written after the last row.

    Args:
        definitions: Definitions to list, one row each, in order.
        writer: Text sink receiving the table.
        has_default: Whether to include the Default column. When None, the
            column is shown iff any definition declares a default.
    """
    definitions = tuple(definitions)
    if has_default is None:
        has_default = any(d.default is not None for d in definitions)

    name_width = len("Name")
    count_width = len("ParamCount")
    alias_width = len("Alias")
    default_width = len("Default")
    for definition in definitions:
        name_width = max(name_width, len(definition.name))
        count_width = max(count_width, len(str(definition.param_count)))
        alias_width = max(alias_width, len(ALIAS_SEPARATOR.join(definition.aliases)))
        if has_default:
            default_width = max(default_width, len(definition.default or ""))

    writer.write(HEADER + "\n")
    _pad_after(writer, "Name", name_width)
    writer.write(HEADER_SEPARATOR)
    _pad_after(writer, "ParamCount", count_width)
    writer.write(HEADER_SEPARATOR)
    _pad_after(writer, "Alias", alias_width)
    if has_default:
        writer.write(HEADER_SEPARATOR)
        _pad_after(writer, "Default", default_width)
    writer.write(HEADER_SEPARATOR + "Info")

    for definition in definitions:
        writer.write("\n")
        _pad_after(writer, definition.name, name_width)
        writer.write(ROW_SEPARATOR)
        _pad_before(writer, definition.param_count, count_width)
        writer.write(ROW_SEPARATOR)
        _pad_after(writer, ALIAS_SEPARATOR.join(definition.aliases), alias_width)
        if has_default:
            writer.write(ROW_SEPARATOR)
            _pad_after(writer, definition.default, default_width)
        writer.write(ROW_SEPARATOR)
        writer.write(definition.info or "")
