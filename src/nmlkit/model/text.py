# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Untyped, textual model of one parsed namelist block."""

from __future__ import annotations

from pydantic import BaseModel, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Entity(BaseModel):
    """One ``name[subscripts] = values`` assignment.

    Attributes:
        name: The item identifier with any bracketed subscripts removed.
        subscripts: Non-negative indices taken from the brackets on the name.
        values: Literal tokens with surrounding quotes stripped.
        repeats: Repeat count for each literal, parallel to ``values``.
    """

    name: str
    subscripts: list[int] = _Field(default_factory=list)
    values: list[str] = _Field(default_factory=list)
    repeats: list[int] = _Field(default_factory=list)

    @model_validator(mode="after")
    def _check_parallel_lists(self) -> Entity:
        if len(self.values) != len(self.repeats):
            raise ValueError(f"entity '{self.name}' has {len(self.values)} values but {len(self.repeats)} repeats")
        if any(r < 1 for r in self.repeats):
            raise ValueError(f"entity '{self.name}' has a non-positive repeat count")
        if any(s < 0 for s in self.subscripts):
            raise ValueError(f"entity '{self.name}' has a negative subscript")
        return self

    @property
    def slot_count(self) -> int:
        """Number of scalar slots this entity supplies."""
        return sum(self.repeats)


class ParsedNamelist(BaseModel):
    """The group name and ordered entity assignments of one namelist block."""

    group_name: str = ""
    entities: list[Entity] = _Field(default_factory=list)

    def clear(self) -> None:
        """Release all entities and the group name, leaving an empty namelist."""
        self.group_name = ""
        self.entities = []
