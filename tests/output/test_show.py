# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the parsed-namelist and field-table dumps."""

import io

from nmlkit.model.schema import Item, Namelist, ScalarType
from nmlkit.output.show import show_namelist, show_namelist_fields, show_namelists_fields
from nmlkit.parser.parser import scan_namelist

# ###############
# Test Helpers
# ###############


def _fields(namelist: Namelist, name: str | None = None) -> list[str]:
    """Render a field table and return its lines."""
    stream = io.StringIO()
    show_namelist_fields(stream, namelist, name)
    return stream.getvalue().splitlines()


# ###############
# Parsed Namelists
# ###############


class TestShowNamelist:
    def test_entities_with_repeats_and_subscripts(self) -> None:
        stream = io.StringIO()
        show_namelist(stream, scan_namelist("&cfg threads = 8, w[1] = 3*0.5, 1.0 &end"))
        assert stream.getvalue() == (
            "namelist cfg: 2 entities\n    threads (1 slots): 8\n    w[1] (4 slots): 3*0.5 | 1.0\n"
        )

    def test_empty_namelist(self) -> None:
        stream = io.StringIO()
        show_namelist(stream, scan_namelist("&cfg &end"))
        assert stream.getvalue() == "namelist cfg: 0 entities\n"


# ###############
# Field Tables
# ###############


class TestShowNamelistFields:
    def test_table_columns(self) -> None:
        namelist = Namelist(
            name="cfg",
            items=[
                Item(name="n", type=ScalarType.INT, default=1, description="count"),
                Item(name="w", type=ScalarType.DOUBLE, dimensions=[2], default=0.5),
            ],
        )
        lines = _fields(namelist)
        assert lines[0] == "&cfg"
        assert lines[1].split() == ["NAME", "TYPE", "DIMENSIONS", "DEFAULT", "DESCRIPTION"]
        assert lines[2].split() == ["n", "int", "-", "1", "count"]
        assert lines[3].split() == ["w", "double", "2", "5.000000000000000e-01"]
        assert lines[2].index("int") == lines[1].index("TYPE")
        assert lines[3].index("5.0") == lines[1].index("DEFAULT")

    def test_distinct_defaults_are_listed(self) -> None:
        namelist = Namelist(
            name="cfg",
            items=[Item(name="grid", type=ScalarType.SHORT, dimensions=[2, 2], default=[[1, 2], [3, 4]])],
        )
        row = _fields(namelist)[2]
        assert "2x2" in row
        assert "1, 2, 3, 4" in row

    def test_heading_override(self) -> None:
        assert _fields(Namelist(name="cfg"), "other")[0] == "&other"

    def test_no_fields(self) -> None:
        assert _fields(Namelist(name="cfg")) == ["&cfg", "    (no fields)"]

    def test_multiple_schemas_separated_by_blank_line(self) -> None:
        stream = io.StringIO()
        show_namelists_fields(stream, [Namelist(name="a"), Namelist(name="b")])
        assert stream.getvalue() == "&a\n    (no fields)\n\n&b\n    (no fields)\n"
