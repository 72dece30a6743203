# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization of a bound schema back to namelist text.

The output is itself valid namelist input. Array items are written as
``name[0]...[0] = v0, v1, ...`` so that the values fill the array from its
first slot. Lines are soft-wrapped at column 120.
"""

import io
import logging
from typing import TextIO

from nmlkit.binding.binder import NULL_STRING
from nmlkit.binding.options import Options, resolve_options
from nmlkit.model.schema import Item, Namelist, ScalarType, Value
from nmlkit.parser.lexical import contains_whitespace, escape_quotes, quote

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

LINE_WIDTH = 120


def print_namelist(stream: TextIO, namelist: Namelist, options: Options | None = None) -> None:
    """Write *namelist* with its live values to *stream*.

    With ``NO_DEFAULTS``, scalar items equal to their default are omitted;
    array items are always written in full. If nothing is written the block
    is emitted as ``&name &end`` on one line.

    Strings are quoted when they hold whitespace or any of ``$ " , & = * ! #``,
    so printed text binds back to the same values. A string that needs quotes
    and ends in a backslash does not: the backslash escapes the closing quote.
    """
    _Printer(stream, namelist, resolve_options(options)).run()
    stream.flush()


def format_namelist(namelist: Namelist, options: Options | None = None) -> str:
    """Return the text :func:`print_namelist` would write."""
    buffer = io.StringIO()
    print_namelist(buffer, namelist, options)
    return buffer.getvalue()


def format_value(scalar_type: ScalarType, value: Value) -> str:
    """Render one slot as a namelist literal."""
    if scalar_type in (ScalarType.SHORT, ScalarType.INT, ScalarType.INT32, ScalarType.LONG):
        return str(value)
    if scalar_type == ScalarType.FLOAT:
        return f"{value:.8e}"
    if scalar_type == ScalarType.DOUBLE:
        return f"{value:.15e}"
    if scalar_type == ScalarType.CHAR:
        # A quoted backslash would escape the closing quote.
        if value == "\\":
            return value
        return quote(value)
    text = escape_quotes(NULL_STRING if value is None else str(value)) or ""
    if not text or contains_whitespace(text) or any(ch in text for ch in _QUOTE_TRIGGERS):
        return f'"{text}"'
    return text


# ################
# Implementation
# ################

_QUOTE_TRIGGERS = '$",&=*!#'
_INDENT = "    "
_CONTINUATION = "\n        "
_CONTINUATION_COLUMN = 9
_COMPACT_CONTINUATION = "\n "
_COMPACT_CONTINUATION_COLUMN = 2


class _Printer:
    """Tracks the output column and the open/close state of one block."""

    def __init__(self, stream: TextIO, namelist: Namelist, options: Options) -> None:
        self._stream = stream
        self._namelist = namelist
        self._compact = options.compact
        self._no_defaults = options.no_defaults
        self._column = 0
        self._block_open = False

    def run(self) -> None:
        for item in self._namelist.items:
            self._print_item(item)
        if not self._block_open:
            self._stream.write(f"&{self._namelist.name} &end\n")
        else:
            self._stream.write("&end\n")
        logger.debug("Printed namelist '%s'", self._namelist.name)

    def _print_item(self, item: Item) -> None:
        count = item.slot_count
        if self._no_defaults and count == 1 and item.is_default():
            return
        self._print_tag(item)
        for index, value in enumerate(item.values):
            if index == count - 1:
                terminator = " " if self._compact else "\n"
            else:
                terminator = " "
            self._emit(f"{format_value(item.type, value)},{terminator}")

    def _print_tag(self, item: Item) -> None:
        if not self._block_open:
            self._stream.write(f"&{self._namelist.name}\n")
            self._block_open = True
        if self._compact:
            if len(item.name) + 3 + self._column > LINE_WIDTH:
                self._stream.write(_COMPACT_CONTINUATION)
                self._column = _COMPACT_CONTINUATION_COLUMN
            tag = f" {item.name}"
        else:
            tag = f"{_INDENT}{item.name}"
            self._column = 0
        tag += "[0]" * item.n_subscripts + " = "
        self._column += len(tag)
        self._stream.write(tag)

    def _emit(self, text: str) -> None:
        if len(text) + self._column > LINE_WIDTH:
            if self._compact:
                self._stream.write(_COMPACT_CONTINUATION)
                self._column = _COMPACT_CONTINUATION_COLUMN
            else:
                self._stream.write(_CONTINUATION)
                self._column = _CONTINUATION_COLUMN
        self._stream.write(text)
        self._column += len(text)
