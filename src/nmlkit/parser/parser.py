# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser turning a namelist block into a :class:`ParsedNamelist`.

Assignments are located by their unquoted ``=`` signs: the name token is the
identifier (with optional bracketed subscripts) directly before each ``=``,
and an entity's value list runs up to the name of the next entity.
"""

import logging
import re
from typing import TextIO

from nmlkit.errors import ErrorCode, NamelistError
from nmlkit.model.text import Entity, ParsedNamelist
from nmlkit.parser.lexical import has_balanced_quotes, next_unquoted, un_quote
from nmlkit.parser.reader import DEFAULT_CAPACITY, get_namelist

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ParseError(NamelistError):
    """Raised when a namelist block is syntactically invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.IMPROPER_CONSTRUCTION)


def scan_namelist(text: str) -> ParsedNamelist:
    """Parse one namelist block into its group name and entity assignments.

    Args:
        text: A block as returned by :func:`~nmlkit.parser.reader.get_namelist`,
            i.e. ``&group name = value, ... &end`` on a single logical line.

    Returns:
        The parsed namelist.

    Raises:
        ParseError: On a missing group name or ``&end``, unbalanced quotes,
            text without ``=``, malformed subscripts, or bad repeat counts.
    """
    group_name, body = _split_block(text)
    entities = [_parse_assignment(name, value_text) for name, value_text in _split_assignments(body)]
    logger.debug("Parsed namelist '%s' with %d entities", group_name, len(entities))
    return ParsedNamelist(group_name=group_name, entities=entities)


def parse_namelist_stream(stream: TextIO, capacity: int = DEFAULT_CAPACITY) -> ParsedNamelist | None:
    """Read the next block from *stream* and parse it; None at end of input."""
    text = get_namelist(stream, capacity)
    if text is None:
        return None
    return scan_namelist(text)


def extract_subscripts(name: str) -> tuple[str, list[int]]:
    """Split ``name[i][j]`` or ``name[i,j]`` into the bare name and its subscripts.

    Raises:
        ParseError: If a subscript is not a non-negative integer or the
            brackets are malformed.
    """
    bracket = name.find("[")
    if bracket == -1:
        if "]" in name:
            raise ParseError(f"unmatched ']' in name {name!r}")
        return name.strip(), []
    base = name[:bracket].strip()
    rest = name[bracket:].strip()
    subscripts: list[int] = []
    while rest:
        match = _SUBSCRIPT_GROUP_RE.match(rest)
        if not match:
            raise ParseError(f"malformed subscripts in name {name!r}")
        for part in match.group(1).split(","):
            part = part.strip()
            if not _SUBSCRIPT_RE.fullmatch(part):
                raise ParseError(f"subscript {part!r} of {base!r} is not a non-negative integer")
            subscripts.append(int(part))
        rest = rest[match.end() :]
    return base, subscripts


# ################
# Implementation
# ################

_GROUP_NAME_RE = re.compile(r"&([^\s&]+)")
_END_TAG = "&end"
_NAME_CHARS = re.compile(r"[A-Za-z0-9_.]")
_SUBSCRIPT_GROUP_RE = re.compile(r"\[([^\[\]]*)\]\s*")
_SUBSCRIPT_RE = re.compile(r"[0-9]+")
_REPEAT_RE = re.compile(r"\s*([0-9]+)\s*")
_NUMERIC_PREFIX_RE = re.compile(r"\s*[+-]?[0-9.]+(?:[eEdD][+-]?[0-9]+)?\s*")


def _split_block(text: str) -> tuple[str, str]:
    """Return the group name and the body between it and the closing ``&end``."""
    stripped = text.strip()
    match = _GROUP_NAME_RE.match(stripped)
    if not match or match.group(1) == _END_TAG[1:]:
        raise ParseError("namelist block must start with '&<group name>'")
    if not has_balanced_quotes(stripped):
        raise ParseError(f"unbalanced quotes in namelist '{match.group(1)}'")
    end = _last_unquoted(stripped, _END_TAG, match.end())
    if end is None:
        raise ParseError(f"namelist '{match.group(1)}' is missing '&end'")
    return match.group(1), stripped[match.end() : end]


def _last_unquoted(s: str, tag: str, start: int) -> int | None:
    """Return the index of the last occurrence of *tag* outside quotes."""
    found: int | None = None
    pos = next_unquoted(s, tag[0], start)
    while pos is not None:
        if s.startswith(tag, pos):
            found = pos
        pos = next_unquoted(s, tag[0], pos + 1)
    return found


def _split_assignments(body: str) -> list[tuple[str, str]]:
    """Split a block body into ``(name token, value text)`` pairs."""
    spans: list[tuple[int, int]] = []
    pos = next_unquoted(body, "=")
    while pos is not None:
        spans.append((_name_start(body, pos), pos))
        pos = next_unquoted(body, "=", pos + 1)

    first = spans[0][0] if spans else len(body)
    leading = body[:first].replace(",", " ").strip()
    if leading:
        raise ParseError(f"missing '=' after {leading!r}")

    pairs: list[tuple[str, str]] = []
    for i, (name_start, eq) in enumerate(spans):
        value_end = spans[i + 1][0] if i + 1 < len(spans) else len(body)
        pairs.append((body[name_start:eq], body[eq + 1 : value_end]))
    return pairs


def _name_start(body: str, eq: int) -> int:
    """Walk back from an ``=`` over the name token and its subscripts."""
    pos = eq - 1
    while pos >= 0 and body[pos].isspace():
        pos -= 1
    while pos >= 0 and body[pos] == "]":
        depth_start = body.rfind("[", 0, pos)
        if depth_start == -1:
            raise ParseError(f"unmatched ']' before '=' at offset {eq}")
        pos = depth_start - 1
        while pos >= 0 and body[pos].isspace():
            pos -= 1
    end = pos
    while pos >= 0 and _NAME_CHARS.match(body[pos]):
        pos -= 1
    if pos == end:
        raise ParseError(f"missing entity name before '=' at offset {eq}")
    return pos + 1


def _parse_assignment(name_token: str, value_text: str) -> Entity:
    name, subscripts = extract_subscripts(name_token)
    values: list[str] = []
    repeats: list[int] = []
    for token in _split_values(value_text):
        repeat, literal = _split_repeat(token, name)
        values.append(un_quote(literal))
        repeats.append(repeat)
    return Entity(name=name, subscripts=subscripts, values=values, repeats=repeats)


def _split_values(value_text: str) -> list[str]:
    """Split a value list at unquoted commas, dropping empty tokens."""
    tokens: list[str] = []
    start = 0
    comma = next_unquoted(value_text, ",")
    while comma is not None:
        tokens.append(value_text[start:comma])
        start = comma + 1
        comma = next_unquoted(value_text, ",", start)
    tokens.append(value_text[start:])
    return [t.strip() for t in tokens if t.strip()]


def _split_repeat(token: str, name: str) -> tuple[int, str]:
    """Split an optional ``N*`` repeat prefix from a value token."""
    star = next_unquoted(token, "*")
    if star is None:
        return 1, token
    prefix = token[:star]
    if _REPEAT_RE.fullmatch(prefix):
        count = int(prefix)
        if count < 1:
            raise ParseError(f"repeat count {count} for '{name}' must be positive")
        return count, token[star + 1 :].strip()
    if _NUMERIC_PREFIX_RE.fullmatch(prefix):
        raise ParseError(f"repeat count {prefix.strip()!r} for '{name}' is not an integer")
    return 1, token
