# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error codes and the exception base shared by all namelist stages."""

import enum

# ###############
# Public Interface
# ###############


class ErrorCode(enum.IntEnum):
    """Machine-actionable error codes reported by the reader and parser."""

    NO_ERROR = 0
    BUFFER_TOO_SMALL = 1
    IMPROPER_CONSTRUCTION = 2


NAMELIST_ERROR = -1
"""Status returned by the integer-status binder entry points on failure."""


class NamelistError(Exception):
    """Base class for every error raised while reading, parsing, or binding a namelist.

    Attributes:
        code: The error code describing the failure family.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.IMPROPER_CONSTRUCTION) -> None:
        super().__init__(message)
        self.code = code
