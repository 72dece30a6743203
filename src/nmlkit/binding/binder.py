# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Binding of parsed namelist text onto typed schema items.

Each entity is matched to the item of the same name, its literals are
decoded into the item's scalar type, and the decoded values are written into
consecutive slots starting at the slot addressed by the entity's subscripts.
Entities are applied left to right, so a failed bind may leave earlier
entities applied; callers reset the schema before reusing it.
"""

import logging
from collections.abc import Iterable

from nmlkit.binding.options import Options, resolve_options
from nmlkit.errors import NAMELIST_ERROR, ErrorCode, NamelistError
from nmlkit.model.schema import Item, Namelist, ScalarType, Value, coerce_value, reset_namelist_values, slot_index
from nmlkit.model.text import Entity, ParsedNamelist

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

NULL_STRING = "{NULL}"
"""Literal that decodes to a null string slot."""


class BindError(NamelistError):
    """Raised when a parsed namelist does not fit its schema.

    Attributes:
        namelist: Name of the schema being bound.
        entity: Name of the offending entity, if any.
    """

    def __init__(self, message: str, namelist: str, entity: str | None = None) -> None:
        where = f"namelist '{namelist}'" if entity is None else f"namelist '{namelist}', entity '{entity}'"
        super().__init__(f"{where}: {message}", ErrorCode.IMPROPER_CONSTRUCTION)
        self.namelist = namelist
        self.entity = entity


def decode_literal(scalar_type: ScalarType, token: str) -> Value:
    """Decode one literal token into a value of *scalar_type*.

    Raises:
        ValueError: If the token is not a valid literal for the type.
    """
    if scalar_type == ScalarType.STRING:
        return None if token == NULL_STRING else token
    return coerce_value(scalar_type, token)


def bind(namelist: Namelist, parsed: ParsedNamelist, options: Options | None = None) -> int:
    """Apply *parsed* to *namelist*.

    Unless sticky defaults are enabled, every item is first reset to its
    default. The group name of *parsed* is not checked; see :func:`bind_many`.

    Returns:
        The number of entities applied.

    Raises:
        BindError: On an unknown item, a bad subscript, too many values, or a
            literal that cannot be decoded for the item's type.
    """
    opts = resolve_options(options)
    if not opts.sticky_defaults:
        reset_namelist_values(namelist)
    for entity in parsed.entities:
        _apply_entity(namelist, entity)
    logger.debug("Bound %d entities into namelist '%s'", len(parsed.entities), namelist.name)
    return len(parsed.entities)


def find_namelist(namelists: Iterable[Namelist], group_name: str) -> Namelist | None:
    """Return the schema whose name is *group_name*, or None."""
    for namelist in namelists:
        if namelist.name == group_name:
            return namelist
    return None


def bind_many(namelists: Iterable[Namelist], parsed: ParsedNamelist, options: Options | None = None) -> Namelist:
    """Bind *parsed* to the schema selected by its group name.

    Returns:
        The schema that was bound.

    Raises:
        BindError: If no schema matches the group name, or binding fails.
    """
    namelist = find_namelist(namelists, parsed.group_name)
    if namelist is None:
        raise BindError("no schema with this name", parsed.group_name)
    bind(namelist, parsed, options)
    return namelist


def process_namelist(namelist: Namelist, parsed: ParsedNamelist, options: Options | None = None) -> int:
    """Bind like :func:`bind`, reporting failure as ``NAMELIST_ERROR`` instead of raising.

    The diagnostic for a failure is logged at ERROR level.
    """
    try:
        return bind(namelist, parsed, options)
    except BindError as exc:
        logger.error("%s", exc)
        return NAMELIST_ERROR


def process_namelists(
    namelists: Iterable[Namelist], parsed: ParsedNamelist, options: Options | None = None
) -> int:
    """Bind like :func:`bind_many`, reporting failure as ``NAMELIST_ERROR`` instead of raising."""
    try:
        bind_many(namelists, parsed, options)
    except BindError as exc:
        logger.error("%s", exc)
        return NAMELIST_ERROR
    return len(parsed.entities)


# ################
# Implementation
# ################


def _apply_entity(namelist: Namelist, entity: Entity) -> None:
    item = namelist.find_item(entity.name)
    if item is None:
        raise BindError("no such item", namelist.name, entity.name)
    try:
        offset = slot_index(item, entity.subscripts)
    except IndexError as exc:
        raise BindError(str(exc), namelist.name, entity.name) from None

    if offset + entity.slot_count > item.slot_count:
        raise BindError(
            f"too many values: {entity.slot_count} starting at slot {offset} exceed {item.slot_count} slots",
            namelist.name,
            entity.name,
        )
    _write_slots(namelist, item, entity, offset)


def _write_slots(namelist: Namelist, item: Item, entity: Entity, offset: int) -> None:
    slot = offset
    for token, repeat in zip(entity.values, entity.repeats):
        try:
            value = decode_literal(item.type, token)
        except ValueError as exc:
            raise BindError(f"cannot decode {token!r} as {item.type.name}: {exc}", namelist.name, entity.name) from None
        item.values[slot : slot + repeat] = [value] * repeat
        slot += repeat
