# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Processing and printing options for the binder and printer.

Options are passed explicitly as an :class:`Options` record. For callers that
use the legacy global-setter style, each thread keeps a default record that
:func:`set_namelist_processing_flags` and :func:`set_print_namelist_flags`
update and that is used whenever no explicit record is given.
"""

import enum
import threading
from dataclasses import dataclass, replace

# ###############
# Public Interface
# ###############


class ProcessingFlags(enum.IntFlag):
    """Flags controlling how the binder applies a parsed namelist."""

    NONE = 0
    STICKY_DEFAULTS = 0x0001


class PrintFlags(enum.IntFlag):
    """Flags controlling the printer layout."""

    NONE = 0
    NO_DEFAULTS = 1
    COMPACT = 2


@dataclass(frozen=True)
class Options:
    """Binder and printer options.

    Attributes:
        processing: When ``STICKY_DEFAULTS`` is set the binder does not reset
            items to their defaults before applying entities.
        printing: ``NO_DEFAULTS`` suppresses scalars equal to their default;
            ``COMPACT`` selects the single-line layout.
    """

    processing: ProcessingFlags = ProcessingFlags.NONE
    printing: PrintFlags = PrintFlags.NONE

    @property
    def sticky_defaults(self) -> bool:
        return bool(self.processing & ProcessingFlags.STICKY_DEFAULTS)

    @property
    def no_defaults(self) -> bool:
        return bool(self.printing & PrintFlags.NO_DEFAULTS)

    @property
    def compact(self) -> bool:
        return bool(self.printing & PrintFlags.COMPACT)


def get_options() -> Options:
    """Return the current thread's default options."""
    options = getattr(_state, "options", None)
    if options is None:
        options = _state.options = Options()
    return options


def set_namelist_processing_flags(flags: int) -> None:
    """Set the current thread's default processing flags."""
    _state.options = replace(get_options(), processing=ProcessingFlags(flags))


def set_print_namelist_flags(flags: int) -> None:
    """Set the current thread's default print flags."""
    _state.options = replace(get_options(), printing=PrintFlags(flags))


def resolve_options(options: Options | None) -> Options:
    """Return *options*, or the thread default when None."""
    return get_options() if options is None else options


# ################
# Implementation
# ################

_state = threading.local()
