# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Binding of parsed namelists onto schemas, and the option flags that control it."""

from nmlkit.binding.binder import (
    NULL_STRING,
    BindError,
    bind,
    bind_many,
    decode_literal,
    find_namelist,
    process_namelist,
    process_namelists,
)
from nmlkit.binding.options import (
    Options,
    PrintFlags,
    ProcessingFlags,
    get_options,
    set_namelist_processing_flags,
    set_print_namelist_flags,
)

__all__ = [
    "NULL_STRING",
    "BindError",
    "bind",
    "bind_many",
    "decode_literal",
    "find_namelist",
    "process_namelist",
    "process_namelists",
    "Options",
    "PrintFlags",
    "ProcessingFlags",
    "get_options",
    "set_namelist_processing_flags",
    "set_print_namelist_flags",
]
