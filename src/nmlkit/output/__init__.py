# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Text output: the namelist printer and diagnostic dumps."""

from nmlkit.output.printer import LINE_WIDTH, format_namelist, format_value, print_namelist
from nmlkit.output.show import show_namelist, show_namelist_fields, show_namelists_fields

__all__ = [
    "LINE_WIDTH",
    "format_namelist",
    "format_value",
    "print_namelist",
    "show_namelist",
    "show_namelist_fields",
    "show_namelists_fields",
]
