"""
Argument definitions and the lookup table built from them.

An ``ArgDefinition`` declares one argument: its canonical name, the aliases
that resolve to it, how many tokens it consumes, and optional default and
help text. A ``DefinitionTable`` indexes a sequence of definitions by every
name and alias so the parser can classify tokens with a single lookup.
"""

import dataclasses
from typing import Iterable, Iterator, Optional, Union


def fold_case(text: str) -> str:
    """
    Fold a string for case-insensitive comparison, one character at a time.

    Each character is replaced by its upper-case form only when that form is
    a single character, so the folded string always has the same length as
    the input ("ß" stays "ß" instead of becoming "SS").
    """
    folded = []
    for char in text:
        upper = char.upper()
        folded.append(upper if len(upper) == 1 else char)
    return "".join(folded)


@dataclasses.dataclass(frozen=True)
class ArgDefinition:
    """
    Declarative description of a single command-line argument.

    Example:
        ArgDefinition("--span3", 3, aliases=("-s3",), info="receive 3 strings")

    Attributes:
        name: Canonical name, used as the key for parse results and defaults.
        param_count: Number of tokens consumed right after the matching token.
        aliases: Additional tokens that resolve to this definition.
        default: Fallback value for scalar accessors when the argument is absent.
        info: Description shown in the help table.
    """

    name: str
    param_count: int = 0
    aliases: tuple[str, ...] = ()
    default: Optional[str] = None
    info: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Argument name must be a non-empty string, got {self.name!r}")
        if isinstance(self.param_count, bool) or not isinstance(self.param_count, int):
            raise ValueError(
                f"param_count for '{self.name}' must be an int, got {type(self.param_count).__name__}"
            )
        if self.param_count < 0:
            raise ValueError(
                f"param_count for '{self.name}' must be non-negative, got {self.param_count}"
            )
        # Normalize a single alias or a list of aliases to a tuple
        aliases: Union[str, Iterable[str]] = self.aliases
        if isinstance(aliases, str):
            aliases = (aliases,)
        object.__setattr__(self, "aliases", tuple(aliases))

    @property
    def tokens(self) -> tuple[str, ...]:
        """The canonical name followed by every alias."""
        return (self.name,) + self.aliases


class DefinitionTable:
    """
    Lookup table mapping every name and alias to its owning definition.

    Registration happens once, in order. When two definitions share a name or
    alias the later one silently takes over that token. With ``ignore_case``
    set, both the token lookup and the default lookup compare strings
    folded with ``fold_case``.
    """

    def __init__(
        self, definitions: Iterable[ArgDefinition] = (), ignore_case: bool = False
    ) -> None:
        self.ignore_case: bool = ignore_case
        self.definitions: tuple[ArgDefinition, ...] = tuple(definitions)
        self._lookup: dict[str, ArgDefinition] = {}
        self._defaults: dict[str, str] = {}
        self._default_names: dict[str, str] = {}

        for definition in self.definitions:
            if not isinstance(definition, ArgDefinition):
                raise TypeError(
                    f"Expected ArgDefinition, got {type(definition).__name__}: {definition!r}"
                )
            for token in definition.tokens:
                self._lookup[self.key(token)] = definition
            if definition.default is not None:
                key = self.key(definition.name)
                self._defaults[key] = definition.default
                self._default_names[key] = definition.name

    def key(self, token: str) -> str:
        """Return the comparison key for a token."""
        return fold_case(token) if self.ignore_case else token

    def lookup(self, token: Optional[str]) -> Optional[ArgDefinition]:
        """
        Find the definition that owns a name or alias.

        Args:
            token: A raw command-line token or argument name.

        Returns:
            Optional[ArgDefinition]: The owning definition, or None if the
            token is not registered.
        """
        if token is None:
            return None
        return self._lookup.get(self.key(token))

    def get_default(self, name: Optional[str]) -> Optional[str]:
        """Return the default registered under a canonical name, if any."""
        if name is None:
            return None
        return self._defaults.get(self.key(name))

    @property
    def defaults(self) -> dict[str, str]:
        """Canonical name to default value, for definitions that declare one."""
        return {self._default_names[k]: v for k, v in self._defaults.items()}

    @property
    def has_defaults(self) -> bool:
        return bool(self._defaults)

    def __iter__(self) -> Iterator[ArgDefinition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.key(token) in self._lookup

