# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model for namelists: parsed text and typed schemas."""

from nmlkit.model.schema import (
    Item,
    Namelist,
    ScalarType,
    Value,
    coerce_value,
    reset_namelist_values,
    slot_index,
    zero_value,
)
from nmlkit.model.text import Entity, ParsedNamelist

__all__ = [
    # Parsed text
    "Entity",
    "ParsedNamelist",
    # Schema
    "Item",
    "Namelist",
    "ScalarType",
    "Value",
    "coerce_value",
    "reset_namelist_values",
    "slot_index",
    "zero_value",
]
