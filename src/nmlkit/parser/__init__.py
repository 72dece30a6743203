# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reader, parser, and lexical helpers for namelist text."""

from nmlkit.parser.lexical import (
    contains_whitespace,
    count_occurrences,
    escape_quotes,
    is_quoted,
    next_unquoted,
    quote,
    un_quote,
)
from nmlkit.parser.parser import ParseError, extract_subscripts, parse_namelist_stream, scan_namelist
from nmlkit.parser.reader import (
    DEFAULT_CAPACITY,
    NamelistReadError,
    get_namelist,
    get_namelist_e,
    iter_namelists,
)

__all__ = [
    # Lexical helpers
    "contains_whitespace",
    "count_occurrences",
    "escape_quotes",
    "is_quoted",
    "next_unquoted",
    "quote",
    "un_quote",
    # Reader
    "DEFAULT_CAPACITY",
    "NamelistReadError",
    "get_namelist",
    "get_namelist_e",
    "iter_namelists",
    # Parser
    "ParseError",
    "extract_subscripts",
    "parse_namelist_stream",
    "scan_namelist",
]
