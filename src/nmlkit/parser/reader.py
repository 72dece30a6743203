# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reader that pulls complete namelist blocks out of a text stream.

A block runs from an opening ``&`` to the first ``&end`` outside quotes.
Comments are removed and line breaks become spaces, so the returned text is a
single logical line. The stream is read one character at a time and nothing
after the closing ``&end`` is consumed.
"""

import logging
from collections.abc import Iterator
from typing import TextIO

from nmlkit.errors import ErrorCode, NamelistError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_CAPACITY = 65536
"""Default maximum length, in characters, of one block."""


class NamelistReadError(NamelistError):
    """Raised when a stream does not yield a well-formed block.

    Attributes:
        code: ``BUFFER_TOO_SMALL`` or ``IMPROPER_CONSTRUCTION``.
        line: 1-based line number (relative to where reading started).
    """

    def __init__(self, message: str, code: ErrorCode, line: int) -> None:
        super().__init__(f"Line {line}: {message}", code)
        self.line = line


def get_namelist(stream: TextIO, capacity: int = DEFAULT_CAPACITY) -> str | None:
    """Read the next namelist block from *stream*.

    Args:
        stream: A text stream positioned anywhere before a block.
        capacity: Maximum number of characters the block may occupy.

    Returns:
        The block text from ``&`` through ``&end``, or None when the stream
        holds no further block.

    Raises:
        NamelistReadError: With ``BUFFER_TOO_SMALL`` if the block exceeds
            *capacity*, or ``IMPROPER_CONSTRUCTION`` if the stream ends before
            ``&end`` or holds stray text before the opening ``&``.
    """
    return _BlockReader(stream, capacity).read()


def get_namelist_e(stream: TextIO, capacity: int = DEFAULT_CAPACITY) -> tuple[str | None, ErrorCode]:
    """Read the next block like :func:`get_namelist`, returning an error code instead of raising."""
    try:
        return get_namelist(stream, capacity), ErrorCode.NO_ERROR
    except NamelistReadError as exc:
        logger.error("%s", exc)
        return None, exc.code


def iter_namelists(stream: TextIO, capacity: int = DEFAULT_CAPACITY) -> Iterator[str]:
    """Yield every namelist block in *stream* in order."""
    while True:
        block = get_namelist(stream, capacity)
        if block is None:
            return
        yield block


# ################
# Implementation
# ################

_COMMENT_CHARS = "!#"
_END_TAG = "&end"


class _BlockReader:
    """Character-level state machine assembling one block."""

    def __init__(self, stream: TextIO, capacity: int) -> None:
        self._stream = stream
        self._capacity = capacity
        self._line = 1
        self._chars: list[str] = []

    def read(self) -> str | None:
        """Skip to the opening ``&`` and collect the block through ``&end``."""
        if not self._skip_preamble():
            return None
        self._append("&")
        self._collect_body()
        text = "".join(self._chars)
        logger.debug("Read namelist block of %d characters", len(text))
        return text

    # ------------------------------------------------------------------
    # Character access helpers
    # ------------------------------------------------------------------

    def _next(self) -> str:
        """Return the next character, or '' at end of input."""
        ch = self._stream.read(1)
        if ch == "\n":
            self._line += 1
        return ch

    def _skip_to_eol(self) -> str:
        """Consume through the end of the current line and return the terminator."""
        ch = self._next()
        while ch not in ("", "\n"):
            ch = self._next()
        return ch

    def _append(self, ch: str) -> None:
        if len(self._chars) >= self._capacity:
            raise NamelistReadError(
                f"namelist block exceeds buffer capacity of {self._capacity} characters",
                ErrorCode.BUFFER_TOO_SMALL,
                self._line,
            )
        self._chars.append(ch)

    # ------------------------------------------------------------------
    # Block assembly
    # ------------------------------------------------------------------

    def _skip_preamble(self) -> bool:
        """Consume whitespace and comment lines before the block.

        Returns False when the stream ends before any block starts.
        """
        while True:
            ch = self._next()
            if ch == "":
                return False
            if ch.isspace():
                continue
            if ch in _COMMENT_CHARS:
                if self._skip_to_eol() == "":
                    return False
                continue
            if ch == "&":
                return True
            raise NamelistReadError(
                f"unexpected text {ch!r} before namelist block",
                ErrorCode.IMPROPER_CONSTRUCTION,
                self._line,
            )

    def _collect_body(self) -> None:
        """Collect characters until an unquoted ``&end`` closes the block."""
        start_line = self._line
        in_quote = False
        escaped = False
        at_line_start = False
        while True:
            ch = self._next()
            if ch == "":
                raise NamelistReadError(
                    f"end of input before '&end' (block started on line {start_line})",
                    ErrorCode.IMPROPER_CONSTRUCTION,
                    self._line,
                )
            if ch == "\n":
                self._append(" ")
                at_line_start = not in_quote
                escaped = False
                continue
            if at_line_start and ch.isspace():
                self._append(ch)
                continue
            if not in_quote and (ch == "!" or (at_line_start and ch == "#")):
                self._skip_to_eol()
                self._append(" ")
                at_line_start = True
                continue
            at_line_start = False
            self._append(ch)
            if ch == '"' and not escaped:
                in_quote = not in_quote
            escaped = ch == "\\" and not escaped
            if not in_quote and ch == "d" and self._ends_with_end_tag():
                return

    def _ends_with_end_tag(self) -> bool:
        return len(self._chars) > len(_END_TAG) and "".join(self._chars[-len(_END_TAG) :]) == _END_TAG
