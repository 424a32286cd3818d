"""
ArgParser - classify a raw argument vector against a table of definitions.

The parser makes one left-to-right pass over the tokens at construction time,
recording every occurrence of a known argument as a slice into the token
array and collecting everything else as unknown tokens. Typed accessors then
read values back out of those slices. Accessors never raise for a missing or
malformed value; they return ``Err`` instead, so "absent" and "present but
malformed" share the same failure flag.
"""

import enum
import io
import logging
import re
import sys
import uuid
from decimal import Decimal
from fractions import Fraction
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Sequence, TextIO, Type, TypeVar

from result import Err, Ok, Result

from .definition import ArgDefinition, DefinitionTable, fold_case
from .help import write_help

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=enum.Enum)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Optional surrounding whitespace and a leading sign, ASCII digits only
_INTEGER_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")


def _strict_bool(value: str) -> bool:
    """
    Parse a string to a boolean value strictly.

    Only accepts 'true' and 'false' in any letter case, ignoring surrounding
    whitespace. Raises ValueError for any other string.
    """
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    elif normalized == "false":
        return False
    else:
        raise ValueError(f"Invalid boolean value: '{value}'. Must be one of: true, false")


def _parse_int64(value: str) -> Optional[int]:
    """Return the value as a signed 64-bit integer, or None if it is not one."""
    if not _INTEGER_PATTERN.match(value):
        return None
    number = int(value)
    if number < INT64_MIN or number > INT64_MAX:
        return None
    return number


# Built-in parse functions; each ArgParser copies these into its own registry
DEFAULT_TYPE_PARSERS: Mapping[type, Callable[[str], Any]] = MappingProxyType(
    {
        int: int,
        float: float,
        complex: complex,
        bool: _strict_bool,
        str: str,
        Decimal: Decimal,
        Fraction: Fraction,
        Path: Path,
        uuid.UUID: uuid.UUID,
    }
)


def classify(
    args: Sequence[str], table: DefinitionTable
) -> tuple[dict[str, list[slice]], list[str]]:
    """
    Classify every token in one pass, without backtracking.

    A token that matches a name or alias consumes the next ``param_count``
    tokens as one occurrence. If fewer tokens remain than the match needs,
    the matching token and everything after it become unknown and the pass
    stops, even if later tokens would have matched on their own.

    Args:
        args: The raw tokens, excluding the program name.
        table: Definitions to match against.

    Returns:
        tuple[dict[str, list[slice]], list[str]]: Canonical name to the list
        of occurrences in order of appearance, and the unknown tokens.
    """
    results: dict[str, list[slice]] = {}
    unknown_args: list[str] = []

    i = 0
    while i < len(args):
        token = args[i]
        definition = table.lookup(token)
        if definition is None:
            unknown_args.append(token)
            i += 1
            continue

        start = i + 1
        stop = start + definition.param_count
        if stop > len(args):
            logger.debug(
                "Argument '%s' needs %d parameter(s) but only %d token(s) remain; "
                "treating the rest as unknown",
                token,
                definition.param_count,
                len(args) - start,
            )
            unknown_args.append(token)
            unknown_args.extend(args[start:])
            break

        results.setdefault(definition.name, []).append(slice(start, stop))
        i = stop

    logger.debug(
        "Classified %d token(s): %d argument(s) recognized, %d unknown token(s)",
        len(args),
        len(results),
        len(unknown_args),
    )
    return results, unknown_args


class ArgParser:
    """
    A command-line argument parser driven by a table of ``ArgDefinition``.

    Parsing happens once, in the constructor. Afterwards ``results`` maps each
    canonical name that appeared to its occurrences (slices into ``args``) and
    ``unknown_args`` lists the tokens that were not recognized. Both are
    read-only: ``results`` is a mapping proxy over tuples of slices and
    ``unknown_args`` is a tuple.

    Example:
        parser = ArgParser(
            ["--int", "7", "-s3", "a", "b", "c", "stray"],
            ArgDefinition("--int", 1, aliases=("-i",), default="12345"),
            ArgDefinition("--span3", 3, aliases=("-s3",)),
            ignore_case=True,
        )
        parser.try_get("--int", int)       # Ok(7)
        parser.try_get_span("--span3")     # Ok(('a', 'b', 'c'))
        parser.unknown_args                # ('stray',)
    """

    def __init__(
        self,
        args: Optional[Sequence[str]],
        *definitions: ArgDefinition,
        ignore_case: bool = False,
        table: Optional[DefinitionTable] = None,
        type_parsers: Optional[Mapping[type, Callable[[str], Any]]] = None,
    ) -> None:
        """
        Build the definition table and classify the tokens.

        Args:
            args: Tokens to parse. If None, uses sys.argv[1:].
            *definitions: Argument definitions, in help-table order.
            ignore_case: Match names, aliases, defaults and enum names
                case-insensitively.
            table: A prebuilt table to use instead of ``definitions``.
            type_parsers: Parse functions for ``try_get``, merged over
                ``DEFAULT_TYPE_PARSERS`` for this parser only.

        Raises:
            ValueError: If both ``definitions`` and ``table`` are given.
        """
        if table is not None:
            if definitions:
                raise ValueError("Pass either definitions or a table, not both")
        else:
            table = DefinitionTable(definitions, ignore_case=ignore_case)

        self.args: tuple[str, ...] = tuple(sys.argv[1:] if args is None else args)
        self.table: DefinitionTable = table
        results, unknown_args = classify(self.args, self.table)
        self.results: Mapping[str, tuple[slice, ...]] = MappingProxyType(
            {name: tuple(ranges) for name, ranges in results.items()}
        )
        self.unknown_args: tuple[str, ...] = tuple(unknown_args)
        self._by_key: dict[str, tuple[slice, ...]] = {
            self.table.key(name): ranges for name, ranges in self.results.items()
        }
        self._type_parsers: dict[type, Callable[[str], Any]] = dict(DEFAULT_TYPE_PARSERS)
        if type_parsers:
            self._type_parsers.update(type_parsers)

    @property
    def ignore_case(self) -> bool:
        return self.table.ignore_case

    @property
    def definitions(self) -> tuple[ArgDefinition, ...]:
        return self.table.definitions

    @property
    def default_map(self) -> dict[str, str]:
        """Canonical name to default value, for definitions that declare one."""
        return self.table.defaults

    def __contains__(self, name: object) -> bool:
        """Whether the argument named ``name`` occurred at least once."""
        return isinstance(name, str) and self.table.key(name) in self._by_key

    def _occurrences(self, name: Optional[str]) -> Optional[tuple[slice, ...]]:
        if name is None:
            return None
        return self._by_key.get(self.table.key(name))

    def try_get_full_list(self, name: Optional[str]) -> Result[list[str], str]:
        """
        Return the parameters of every occurrence, flattened in order of appearance.

        An argument with ``param_count == 0`` that occurred yields ``Ok([])``.
        """
        ranges = self._occurrences(name)
        if ranges is None:
            return Err(f"Argument '{name}' not found")
        value: list[str] = []
        for occurrence in ranges:
            value.extend(self.args[occurrence])
        return Ok(value)

    def try_get_span(self, name: Optional[str]) -> Result[tuple[str, ...], str]:
        """Return the parameters of the last occurrence only."""
        ranges = self._occurrences(name)
        if not ranges:
            return Err(f"Argument '{name}' not found")
        return Ok(self.args[ranges[-1]])

    def try_get_string(self, name: Optional[str]) -> Result[str, str]:
        """
        Return the first parameter of the last occurrence, or the default.

        The default is used whenever the last occurrence captured no tokens,
        which covers both an absent argument and a ``param_count == 0`` one.
        """
        if name is None:
            return Err("Argument name is None")
        span = self.try_get_span(name)
        if span.is_ok() and span.ok_value:
            return Ok(span.ok_value[0])
        default = self.table.get_default(name)
        if default is not None:
            return Ok(default)
        return Err(f"Argument '{name}' not found and has no default")

    def register_type_parser(self, type_: Type[T], func: Callable[[str], T]) -> None:
        """
        Register the textual parse function ``try_get`` uses for a type.

        The registration applies to this parser only. The function receives
        the scalar string and returns the parsed value; any exception it
        raises turns into an ``Err``.

        Example:
            parser.register_type_parser(datetime.date, datetime.date.fromisoformat)
        """
        self._type_parsers[type_] = func

    def get_type_parser(self, type_: Type[T]) -> Callable[[str], T]:
        """Return the registered parse function for a type, or the type itself."""
        return self._type_parsers.get(type_, type_)

    def try_get(
        self,
        name: Optional[str],
        type_: Type[T],
        provider: Optional[Callable[[str], T]] = None,
    ) -> Result[T, str]:
        """
        Parse the scalar string of an argument as ``type_``.

        Args:
            name: Canonical argument name.
            type_: Target type. Its parse function comes from the registry
                (see ``register_type_parser``); unregistered types are called
                with the string.
            provider: Parse function to use instead of the registered one.

        Returns:
            Result[T, str]: Ok with the parsed value, or Err if the argument is
            absent without default or the text does not parse.
        """
        text = self.try_get_string(name)
        if text.is_err():
            return Err(text.err_value)
        parse = provider if provider is not None else self.get_type_parser(type_)
        try:
            return Ok(parse(text.ok_value))
        except Exception as e:
            return Err(
                f"Could not parse '{text.ok_value}' for argument '{name}' "
                f"as {getattr(type_, '__name__', type_)}: {e}"
            )

    def try_get_strict_boolean(self, name: Optional[str]) -> Result[bool, str]:
        """Parse the scalar string as a boolean, accepting only true/false."""
        return self.try_get(name, bool)

    def try_get_enum(self, name: Optional[str], enum_type: Type[E]) -> Result[E, str]:
        """
        Match the scalar string against the member names of ``enum_type``.

        Matching is case-insensitive when the parser ignores case.

        Raises:
            TypeError: If ``enum_type`` is not an Enum subclass.
        """
        if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
            raise TypeError(f"Expected an Enum subclass, got {enum_type!r}")
        text = self.try_get_string(name)
        if text.is_err():
            return Err(text.err_value)
        value = text.ok_value
        members = enum_type.__members__
        if value in members:
            return Ok(members[value])
        if self.ignore_case:
            folded = fold_case(value)
            for member_name, member in members.items():
                if fold_case(member_name) == folded:
                    return Ok(member)
        return Err(f"'{value}' is not a member of {enum_type.__name__}")

    def _is_prefix(self, value: str, word: str) -> bool:
        if self.ignore_case:
            return fold_case(word).startswith(fold_case(value))
        return word.startswith(value)

    def try_get_boolean(self, name: Optional[str]) -> Result[bool, str]:
        """
        Interpret the scalar string leniently as a boolean.

        Rules, checked in order:
            - empty string is False
            - a 64-bit integer is True when nonzero
            - a prefix of "yes" or "true" is True
            - a prefix of "no" or "false" is False
        Anything else is an Err. Prefix checks follow ``ignore_case``.
        """
        text = self.try_get_string(name)
        if text.is_err():
            return Err(text.err_value)
        value = text.ok_value
        if not value:
            return Ok(False)
        number = _parse_int64(value)
        if number is not None:
            return Ok(number != 0)
        if self._is_prefix(value, "yes") or self._is_prefix(value, "true"):
            return Ok(True)
        if self._is_prefix(value, "no") or self._is_prefix(value, "false"):
            return Ok(False)
        return Err(f"Invalid boolean value for argument '{name}': '{value}'")

    def write_help(self, writer: Optional[TextIO] = None) -> None:
        """Write the help table to ``writer`` (default: sys.stdout)."""
        write_help(
            self.definitions,
            sys.stdout if writer is None else writer,
            has_default=self.table.has_defaults,
        )

    def format_help(self) -> str:
        """Return the help table as a string."""
        buffer = io.StringIO()
        self.write_help(buffer)
        return buffer.getvalue()
