from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from league_bot.domain.league import StatValue

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class ParsedCommand:
    verb: str
    args: tuple[str, ...]


def parse_command(line: str, prefix: str = "!") -> ParsedCommand | None:
    """Split a prefixed chat line into a lower-cased verb and its arguments.

    Returns None when the line does not start with ``prefix``.
    """
    if not line.startswith(prefix):
        return None
    tokens = line[len(prefix) :].split()
    if not tokens:
        return ParsedCommand(verb="", args=())
    return ParsedCommand(verb=tokens[0].lower(), args=tuple(tokens[1:]))


def coerce_stat_value(raw: str) -> StatValue:
    """Interpret a typed stat value.

    A value containing a decimal point becomes a float, a fully numeric value
    an int, anything else (including a dotted value that is not a number)
    stays a string.
    """
    if "." in raw:
        try:
            return float(raw)
        except ValueError:
            return raw
    if _INTEGER_RE.fullmatch(raw):
        return int(raw)
    return raw


def parse_stat_pairs(tokens: Iterable[str]) -> dict[str, StatValue]:
    """Parse ``key=value`` tokens. Tokens without a key or value are skipped."""
    fields: dict[str, StatValue] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep or not key or not value:
            logger.debug("Skipping malformed stat token %r", token)
            continue
        fields[key] = coerce_stat_value(value)
    return fields
