"""Turns raw command-line tokens into a resolved command."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Sequence, Tuple

from .options import OPTIONS, OptionSpec, OptionValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedOption:
    spec: OptionSpec
    provided: bool
    value: OptionValue


class ResolvedCommand(Mapping):
    """Read-only mapping of option name to :class:`ResolvedOption` for one invocation."""

    def __init__(self, options: Dict[str, ResolvedOption], tokens: Sequence[str] = ()) -> None:
        self._options = dict(options)
        self.tokens: Tuple[str, ...] = tuple(tokens)

    def __getitem__(self, name: str) -> ResolvedOption:
        return self._options[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    def provided(self, name: str) -> bool:
        return self._options[name].provided

    def value(self, name: str) -> OptionValue:
        return self._options[name].value

    def __repr__(self) -> str:
        given = {name: option.value for name, option in self._options.items() if option.provided}
        return f"ResolvedCommand({given!r})"


def _index_of(tokens: Sequence[str], flag: str) -> int:
    try:
        return tokens.index(flag)
    except ValueError:
        return -1


def resolve_arguments(
    tokens: Optional[Sequence[str]] = None,
    schema: Optional[Dict[str, OptionSpec]] = None,
) -> ResolvedCommand:
    """Resolve every option in `schema` against `tokens`.

    Each form is located by its first occurrence and the later of the two
    positions wins when both appear. An option
    that takes an argument consumes the following token unless that token
    starts with ``-``; otherwise the default is kept. Unknown tokens are
    ignored.
    """

    tokens = list(tokens or [])
    schema = OPTIONS if schema is None else schema
    resolved: Dict[str, ResolvedOption] = {}
    for name, spec in schema.items():
        index = max(_index_of(tokens, spec.short_flag), _index_of(tokens, spec.long_flag))
        value = spec.default_value()
        provided = 0 <= index < len(tokens)
        if provided and spec.takes_argument:
            following = index + 1
            if following < len(tokens) and not tokens[following].startswith("-"):
                value = tokens[following]
        resolved[name] = ResolvedOption(spec=spec, provided=provided, value=value)
    command = ResolvedCommand(resolved, tokens)
    logger.debug("Resolved %s from %s", command, tokens)
    return command


__all__ = ["ResolvedOption", "ResolvedCommand", "resolve_arguments"]
