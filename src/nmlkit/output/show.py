# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Human-readable dumps of parsed namelists and schema field tables."""

from collections.abc import Iterable
from typing import TextIO

from nmlkit.model.schema import Item, Namelist
from nmlkit.model.text import ParsedNamelist
from nmlkit.output.printer import format_value

# ###############
# Public Interface
# ###############


def show_namelist(stream: TextIO, parsed: ParsedNamelist) -> None:
    """Write the group name and every entity of *parsed*, one entity per line.

    Repeated literals are shown as ``N*value``.
    """
    stream.write(f"namelist {parsed.group_name}: {len(parsed.entities)} entities\n")
    for entity in parsed.entities:
        subs = "".join(f"[{s}]" for s in entity.subscripts)
        tokens = [v if r == 1 else f"{r}*{v}" for v, r in zip(entity.values, entity.repeats)]
        stream.write(f"    {entity.name}{subs} ({entity.slot_count} slots): {' | '.join(tokens)}\n")


def show_namelist_fields(stream: TextIO, namelist: Namelist, name: str | None = None) -> None:
    """Write a table of the items of *namelist*: name, type, dimensions, and default.

    Args:
        stream: Destination stream.
        namelist: The schema to describe.
        name: Heading to use instead of the schema name.
    """
    stream.write(f"&{name or namelist.name}\n")
    rows = [_field_row(item) for item in namelist.items]
    if not rows:
        stream.write("    (no fields)\n")
        return
    widths = [max(len(row[col]) for row in rows + [_HEADER]) for col in range(len(_HEADER))]
    for row in [_HEADER] + rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        stream.write(("    " + "  ".join(cells)).rstrip() + "\n")


def show_namelists_fields(stream: TextIO, namelists: Iterable[Namelist]) -> None:
    """Write the field table of each schema, separated by blank lines."""
    for index, namelist in enumerate(namelists):
        if index:
            stream.write("\n")
        show_namelist_fields(stream, namelist)


# ################
# Implementation
# ################

_HEADER = ("NAME", "TYPE", "DIMENSIONS", "DEFAULT", "DESCRIPTION")


def _field_row(item: Item) -> tuple[str, str, str, str, str]:
    dims = "x".join(str(d) for d in item.dimensions) if item.dimensions else "-"
    if len(set(map(repr, item.default))) == 1:
        default = format_value(item.type, item.default[0])
    else:
        default = ", ".join(format_value(item.type, v) for v in item.default)
    return (item.name, item.type.name.lower(), dims, default, item.description or "")
