"""
definition-argparser - A table-driven command-line argument parser.

This package classifies a raw argument vector against a declarative set of
argument definitions (name, aliases, parameter count, default, help text),
collects unrecognized tokens, and provides typed accessors over the captured
values. It also renders a help table for the definitions.
"""

from .definition import ArgDefinition, DefinitionTable, fold_case
from .help import write_help
from .parser import DEFAULT_TYPE_PARSERS, ArgParser, classify

__version__ = "1.0.0"
__all__ = [
    "DEFAULT_TYPE_PARSERS",
    "ArgDefinition",
    "ArgParser",
    "DefinitionTable",
    "classify",
    "fold_case",
    "write_help",
]
