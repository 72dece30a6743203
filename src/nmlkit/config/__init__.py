# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema definition files for namelist groups."""

from nmlkit.config.definition import TYPE_NAMES, SchemaDefinitionError, load_schema_file, parse_schema_text

__all__ = [
    "TYPE_NAMES",
    "SchemaDefinitionError",
    "load_schema_file",
    "parse_schema_text",
]
