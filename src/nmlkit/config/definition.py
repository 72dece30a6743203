# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML loader for namelist schema definition files.

A definition file declares one or more namelist groups and their items::

    namelists:
      - name: run_setup
        items:
          - name: lattice
            type: string
          - name: weights
            type: double
            dimensions: [4]
            default: 0.5
"""

from __future__ import annotations

import logging
from pathlib import Path

import pydantic
import yaml

from nmlkit.errors import NamelistError
from nmlkit.model.schema import Item, Namelist, ScalarType

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class SchemaDefinitionError(NamelistError):
    """Raised when a schema definition file is invalid or cannot be loaded."""


TYPE_NAMES: dict[str, ScalarType] = {
    "short": ScalarType.SHORT,
    "int": ScalarType.INT,
    "int32": ScalarType.INT32,
    "long": ScalarType.LONG,
    "float": ScalarType.FLOAT,
    "double": ScalarType.DOUBLE,
    "string": ScalarType.STRING,
    "char": ScalarType.CHAR,
}


def load_schema_file(path: Path) -> list[Namelist]:
    """Load the namelist schemas declared in a YAML definition file.

    Args:
        path: Path to the definition file.

    Returns:
        The declared schemas, in file order.

    Raises:
        SchemaDefinitionError: If the file cannot be read or is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SchemaDefinitionError(f"Schema definition file not found: {path}") from None
    except OSError as exc:
        raise SchemaDefinitionError(f"Cannot read schema definition file: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaDefinitionError(f"Schema definition file {path} is not valid UTF-8: {exc}") from exc

    namelists = parse_schema_text(text, source_label=str(path))
    logger.debug("Loaded %d namelist schema(s) from %s", len(namelists), path)
    return namelists


def parse_schema_text(text: str, source_label: str = "<string>") -> list[Namelist]:
    """Parse schema definition YAML text.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        SchemaDefinitionError: If the YAML is invalid or a declaration is malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaDefinitionError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise SchemaDefinitionError(f"{source_label}: schema definition must be a YAML mapping")
    if "namelists" not in data:
        raise SchemaDefinitionError(f"{source_label}: missing required field 'namelists'")
    raw_namelists = data["namelists"]
    if not isinstance(raw_namelists, list):
        raise SchemaDefinitionError(f"{source_label}: 'namelists' must be a list")

    namelists = [_parse_namelist(entry, f"{source_label}: namelists[{i}]") for i, entry in enumerate(raw_namelists)]
    seen: set[str] = set()
    for namelist in namelists:
        if namelist.name in seen:
            raise SchemaDefinitionError(f"{source_label}: duplicate namelist '{namelist.name}'")
        seen.add(namelist.name)
    return namelists


# ################
# Implementation
# ################


def _require_string(mapping: dict[str, object], key: str, location: str) -> str:
    """Extract a required string field from a mapping, raising SchemaDefinitionError if missing."""
    if key not in mapping:
        raise SchemaDefinitionError(f"{location}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise SchemaDefinitionError(f"{location}: '{key}' must be a string")
    return value


def _parse_namelist(entry: object, location: str) -> Namelist:
    if not isinstance(entry, dict):
        raise SchemaDefinitionError(f"{location} must be a YAML mapping")
    name = _require_string(entry, "name", location)
    raw_items = entry.get("items", [])
    if not isinstance(raw_items, list):
        raise SchemaDefinitionError(f"{location}: 'items' must be a list")
    items = [_parse_item(raw, f"{location}.items[{i}]") for i, raw in enumerate(raw_items)]
    try:
        return Namelist(name=name, items=items)
    except pydantic.ValidationError as exc:
        raise SchemaDefinitionError(f"{location}: {_first_error(exc)}") from exc


def _parse_item(entry: object, location: str) -> Item:
    if not isinstance(entry, dict):
        raise SchemaDefinitionError(f"{location} must be a YAML mapping")
    name = _require_string(entry, "name", location)
    type_name = _require_string(entry, "type", location).lower()
    if type_name not in TYPE_NAMES:
        known = ", ".join(TYPE_NAMES)
        raise SchemaDefinitionError(f"{location} '{name}': unknown type '{type_name}' (expected one of {known})")

    dimensions = entry.get("dimensions", [])
    if isinstance(dimensions, int):
        dimensions = [dimensions]
    if not isinstance(dimensions, list) or not all(isinstance(d, int) for d in dimensions):
        raise SchemaDefinitionError(f"{location} '{name}': 'dimensions' must be an integer or a list of integers")

    fields: dict[str, object] = {"name": name, "type": TYPE_NAMES[type_name], "dimensions": dimensions}
    if "default" in entry:
        fields["default"] = entry["default"]
    if "description" in entry:
        fields["description"] = _require_string(entry, "description", location)
    try:
        return Item(**fields)
    except pydantic.ValidationError as exc:
        raise SchemaDefinitionError(f"{location} '{name}': {_first_error(exc)}") from exc


def _first_error(exc: pydantic.ValidationError) -> str:
    errors = exc.errors()
    return str(errors[0]["msg"]) if errors else str(exc)
