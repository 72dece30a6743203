# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Typed schema declarations: namelist groups and their items.

An item holds its live values and its declared defaults inline, as flat
row-major lists of ``slot_count`` scalars each.
"""

from __future__ import annotations

import enum
import math
import re
import struct
from typing import Any

from pydantic import BaseModel, field_validator, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class ScalarType(enum.IntEnum):
    """Scalar types an item may hold. The codes match the legacy type constants."""

    SHORT = 1
    INT = 2
    INT32 = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    STRING = 7
    CHAR = 8


Value = int | float | str | None
"""One scalar slot: an integer, a float, a string, or a null string."""


def coerce_value(scalar_type: ScalarType, value: Any) -> Value:
    """Convert *value* into the canonical Python form for *scalar_type*.

    Strings are parsed for numeric types. Integers are range-checked for the
    type's width, FLOAT values are rounded to single precision, and CHAR
    values must be exactly one character.

    Raises:
        ValueError: If the value cannot represent a slot of this type.
    """
    if scalar_type in _INTEGER_BOUNDS:
        return _coerce_integer(scalar_type, value)
    if scalar_type in (ScalarType.FLOAT, ScalarType.DOUBLE):
        return _coerce_float(scalar_type, value)
    if scalar_type == ScalarType.STRING:
        if value is None or isinstance(value, str):
            return value
        return str(value)
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"expected exactly one character, got {value!r}")
    return value


def zero_value(scalar_type: ScalarType) -> Value:
    """Return the value a slot of *scalar_type* holds when no default is declared."""
    return _ZERO_VALUES[scalar_type]


class Item(BaseModel):
    """One declared variable: a scalar or a fixed-shape array of one scalar type.

    Attributes:
        name: Identifier used in namelist text.
        type: Scalar type of every slot.
        dimensions: Size of each subscript; empty for a scalar.
        default: Declared default for every slot. A single value is broadcast
            to all slots and nested lists are flattened in row-major order.
        values: Live values; initialised from ``default``.
        description: Optional human-readable note shown in field listings.
    """

    name: str
    type: ScalarType
    dimensions: list[int] = _Field(default_factory=list)
    default: list[Value] = _Field(default_factory=list)
    values: list[Value] = _Field(default_factory=list)
    description: str | None = None

    @field_validator("default", "values", mode="before")
    @classmethod
    def _flatten_storage(cls, value: Any) -> list[Any]:
        if isinstance(value, (list, tuple)):
            return _flatten(value)
        return [value]

    @model_validator(mode="after")
    def _fill_storage(self) -> Item:
        if any(d < 1 for d in self.dimensions):
            raise ValueError(f"item '{self.name}' has a non-positive dimension: {self.dimensions}")
        self.default = self._expand(self.default or [zero_value(self.type)], "default")
        self.values = self._expand(self.values, "values") if self.values else list(self.default)
        return self

    @property
    def n_subscripts(self) -> int:
        """Number of subscripts the item is declared with."""
        return len(self.dimensions)

    @property
    def slot_count(self) -> int:
        """Total number of scalar slots (1 for a scalar)."""
        return math.prod(self.dimensions)

    @property
    def element_size(self) -> int:
        """Size in bytes of one slot in the legacy binary layout."""
        return _ELEMENT_SIZES[self.type]

    def reset(self) -> None:
        """Overwrite the live values with the declared defaults."""
        self.values = list(self.default)

    def is_default(self) -> bool:
        """Return True if every live value equals its default."""
        return self.values == self.default

    def _expand(self, raw: list[Value], label: str) -> list[Value]:
        count = self.slot_count
        if len(raw) == 1 and count > 1:
            raw = raw * count
        if len(raw) != count:
            raise ValueError(f"item '{self.name}' {label} has {len(raw)} values, expected {count}")
        try:
            return [coerce_value(self.type, v) for v in raw]
        except ValueError as exc:
            raise ValueError(f"item '{self.name}' {label}: {exc}") from exc


def slot_index(item: Item, subscripts: list[int]) -> int:
    """Return the row-major slot index addressed by *subscripts*.

    Subscripts address the leading dimensions; omitted trailing subscripts
    are taken as 0, so an empty list addresses slot 0 and ``m[1]`` on a
    ``[2][3]`` item addresses the start of row 1. Each subscript must be
    strictly less than its dimension.

    Raises:
        IndexError: On more subscripts than dimensions or an out-of-range subscript.
    """
    if len(subscripts) > item.n_subscripts:
        raise IndexError(
            f"item '{item.name}' takes at most {item.n_subscripts} subscript(s), got {len(subscripts)}"
        )
    padded = list(subscripts) + [0] * (item.n_subscripts - len(subscripts))
    index = 0
    for sub, dim in zip(padded, item.dimensions):
        if not 0 <= sub < dim:
            raise IndexError(f"subscript {sub} out of range for item '{item.name}' (dimension {dim})")
        index = index * dim + sub
    return index


class Namelist(BaseModel):
    """A named group of items. Item names are unique within the group."""

    name: str
    items: list[Item] = _Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_names(self) -> Namelist:
        seen: set[str] = set()
        for item in self.items:
            if item.name in seen:
                raise ValueError(f"duplicate item '{item.name}' in namelist '{self.name}'")
            seen.add(item.name)
        return self

    def find_item(self, name: str) -> Item | None:
        """Return the item called *name*, or None."""
        for item in self.items:
            if item.name == name:
                return item
        return None

    def get(self, name: str) -> Value | list[Value]:
        """Return the live value of a scalar item, or the flat value list of an array item.

        Raises:
            KeyError: If no item is called *name*.
        """
        item = self.find_item(name)
        if item is None:
            raise KeyError(name)
        if item.dimensions:
            return list(item.values)
        return item.values[0]

    def as_dict(self) -> dict[str, Value | list[Value]]:
        """Return the live values of all items keyed by item name."""
        return {item.name: self.get(item.name) for item in self.items}

    def reset_values(self) -> None:
        """Overwrite every item's live values with its defaults."""
        for item in self.items:
            item.reset()


def reset_namelist_values(namelist: Namelist) -> None:
    """Copy each item's defaults over its live values."""
    namelist.reset_values()


# ################
# Implementation
# ################

_INTEGER_BOUNDS: dict[ScalarType, tuple[int, int]] = {
    ScalarType.SHORT: (-(2**15), 2**15 - 1),
    ScalarType.INT: (-(2**31), 2**31 - 1),
    ScalarType.INT32: (-(2**31), 2**31 - 1),
    ScalarType.LONG: (-(2**63), 2**63 - 1),
}

_ZERO_VALUES: dict[ScalarType, Value] = {
    ScalarType.SHORT: 0,
    ScalarType.INT: 0,
    ScalarType.INT32: 0,
    ScalarType.LONG: 0,
    ScalarType.FLOAT: 0.0,
    ScalarType.DOUBLE: 0.0,
    ScalarType.STRING: None,
    ScalarType.CHAR: " ",
}

_ELEMENT_SIZES: dict[ScalarType, int] = {
    ScalarType.SHORT: 2,
    ScalarType.INT: 4,
    ScalarType.INT32: 4,
    ScalarType.LONG: 8,
    ScalarType.FLOAT: 4,
    ScalarType.DOUBLE: 8,
    ScalarType.STRING: 8,
    ScalarType.CHAR: 1,
}

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _flatten(value: list[Any] | tuple[Any, ...]) -> list[Any]:
    out: list[Any] = []
    for v in value:
        if isinstance(v, (list, tuple)):
            out.extend(_flatten(v))
        else:
            out.append(v)
    return out


def _coerce_integer(scalar_type: ScalarType, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not _INTEGER_RE.fullmatch(text):
            raise ValueError(f"not an integer: {value!r}")
        number = int(text, 10)
    elif isinstance(value, int):
        number = value
    else:
        raise ValueError(f"expected an integer, got {value!r}")
    low, high = _INTEGER_BOUNDS[scalar_type]
    if not low <= number <= high:
        raise ValueError(f"integer {number} overflows {scalar_type.name}")
    return number


def _coerce_float(scalar_type: ScalarType, value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not _FLOAT_RE.fullmatch(value):
            raise ValueError(f"not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"not a number: {value!r}") from None
    if isinstance(value, str) and math.isinf(number):
        raise ValueError(f"number {value!r} overflows {scalar_type.name}")
    if scalar_type == ScalarType.FLOAT:
        try:
            number = struct.unpack("f", struct.pack("f", number))[0]
        except OverflowError:
            raise ValueError(f"number {value!r} overflows FLOAT") from None
    return number
