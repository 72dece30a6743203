# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Quoting-aware string helpers used by the reader, parser, and printer.

All helpers are pure functions. A quote character preceded by a backslash
is escaped and never opens or closes a quoted region.
"""

# ###############
# Public Interface
# ###############

QUOTE = '"'


def is_quoted(s: str, pos: int, qch: str = QUOTE) -> bool:
    """Return True if position *pos* of *s* lies inside a *qch*-quoted region.

    The string is scanned from the start, toggling on every unescaped quote.
    An opening quote counts as inside the region; its closing quote as outside.
    """
    in_quote = False
    for i in range(min(pos + 1, len(s))):
        if _is_live_quote(s, i, qch):
            in_quote = not in_quote
    return in_quote


def next_unquoted(s: str, c: str, start: int = 0, qch: str = QUOTE) -> int | None:
    """Return the index of the first *c* at or after *start* outside quotes, or None."""
    in_quote = False
    for i, ch in enumerate(s):
        if _is_live_quote(s, i, qch):
            in_quote = not in_quote
            continue
        if i >= start and ch == c and not in_quote:
            return i
    return None


def count_occurrences(s: str, c: str, end: int | None = None, qch: str = QUOTE) -> int:
    """Count occurrences of *c* in ``s[:end]`` that lie outside quotes."""
    limit = len(s) if end is None else min(end, len(s))
    count = 0
    in_quote = False
    for i in range(limit):
        if _is_live_quote(s, i, qch):
            in_quote = not in_quote
        elif s[i] == c and not in_quote:
            count += 1
    return count


def un_quote(s: str) -> str:
    """Strip matching surrounding quote marks and unescape embedded ``\\"``.

    Strings that are not fully quoted are returned unchanged.
    """
    if len(s) >= 2 and s[0] == QUOTE and s[-1] == QUOTE and s[-2] != "\\":
        return s[1:-1].replace("\\" + QUOTE, QUOTE)
    return s


def escape_quotes(s: str | None) -> str | None:
    """Prefix every ``"`` that is not already preceded by a backslash with one."""
    if s is None:
        return s
    out: list[str] = []
    for i, ch in enumerate(s):
        if ch == QUOTE and (i == 0 or s[i - 1] != "\\"):
            out.append("\\")
        out.append(ch)
    return "".join(out)


def quote(s: str) -> str:
    """Render *s* as a double-quoted literal with embedded quotes escaped."""
    return QUOTE + (escape_quotes(s) or "") + QUOTE


def contains_whitespace(s: str | None) -> bool:
    """Return True if *s* contains any whitespace character."""
    if not s:
        return False
    return any(ch.isspace() for ch in s)


def has_balanced_quotes(s: str, qch: str = QUOTE) -> bool:
    """Return True if every quoted region in *s* is closed."""
    return sum(1 for i in range(len(s)) if _is_live_quote(s, i, qch)) % 2 == 0


# ################
# Implementation
# ################


def _is_live_quote(s: str, i: int, qch: str) -> bool:
    """Return True if ``s[i]`` is a quote character that is not backslash-escaped."""
    return s[i] == qch and (i == 0 or s[i - 1] != "\\")
