# Copyright 2026 NmlKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the nmlkit command-line interface."""

import argparse
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

from nmlkit.binding.binder import BindError, bind_many
from nmlkit.binding.options import Options, PrintFlags, ProcessingFlags
from nmlkit.config.definition import SchemaDefinitionError, load_schema_file
from nmlkit.errors import NamelistError
from nmlkit.model.schema import Namelist
from nmlkit.model.text import ParsedNamelist
from nmlkit.output.printer import print_namelist
from nmlkit.output.show import show_namelist, show_namelists_fields
from nmlkit.parser.parser import scan_namelist
from nmlkit.parser.reader import iter_namelists

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the nmlkit CLI."""
    parser = argparse.ArgumentParser(
        prog="nmlkit",
        description="nmlkit - read, check and rewrite namelist input decks",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check an input deck against a schema definition",
        description="Bind every namelist in DECK to the schemas in SCHEMA and report errors.",
    )
    _add_schema_and_deck(check_parser)

    # print subcommand
    print_parser = subparsers.add_parser(
        "print",
        help="Bind an input deck and print the resulting namelists",
        description="Bind every namelist in DECK and write the bound values back out as namelist text.",
    )
    _add_schema_and_deck(print_parser)
    print_parser.add_argument(
        "--no-defaults",
        action="store_true",
        help="Omit scalar items that still hold their default value",
    )
    print_parser.add_argument(
        "--compact",
        action="store_true",
        help="Use the compact single-line layout",
    )

    # fields subcommand
    fields_parser = subparsers.add_parser(
        "fields",
        help="List the fields declared in a schema definition",
        description="Show the name, type, dimensions and default of every declared item.",
    )
    fields_parser.add_argument("schema", help="Path to the YAML schema definition file")

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        help="Show how an input deck is parsed",
        description="Parse every namelist in DECK without a schema and show its entities.",
    )
    show_parser.add_argument("deck", help="Path to the namelist input deck")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_schema_and_deck(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("schema", help="Path to the YAML schema definition file")
    subparser.add_argument("deck", help="Path to the namelist input deck")
    subparser.add_argument(
        "--sticky",
        action="store_true",
        help="Keep values from earlier namelists of the same group instead of resetting to defaults",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "print":
        return _cmd_print(args)
    if args.command == "fields":
        return _cmd_fields(args)
    if args.command == "show":
        return _cmd_show(args)
    return 0


def _load_schemas(path: str) -> list[Namelist] | None:
    try:
        return load_schema_file(Path(path))
    except SchemaDefinitionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _read_deck(path: str) -> list[ParsedNamelist] | None:
    """Read and parse every block of a deck, or report the first error and return None."""
    deck = Path(path)
    if not deck.exists():
        print(f"Error: input deck '{deck}' does not exist.", file=sys.stderr)
        return None
    try:
        with deck.open(encoding="utf-8") as stream:
            return [scan_namelist(block) for block in iter_namelists(stream)]
    except NamelistError as exc:
        print(f"Error: {deck}: {exc}", file=sys.stderr)
        return None
    except UnicodeDecodeError as exc:
        print(f"Error: {deck}: not valid UTF-8: {exc}", file=sys.stderr)
        return None


def _processing_flags(args: argparse.Namespace) -> ProcessingFlags:
    return ProcessingFlags.STICKY_DEFAULTS if args.sticky else ProcessingFlags.NONE


def _load_inputs(args: argparse.Namespace) -> tuple[list[Namelist], list[ParsedNamelist]] | None:
    """Load the schemas and parse the deck, or report the first error and return None."""
    schemas = _load_schemas(args.schema)
    if schemas is None:
        return None
    parsed_blocks = _read_deck(args.deck)
    if parsed_blocks is None:
        return None
    return schemas, parsed_blocks


def _bind_blocks(
    schemas: list[Namelist], parsed_blocks: list[ParsedNamelist], options: Options
) -> Iterator[Namelist | None]:
    """Bind each block in deck order, yielding the bound schema or None after reporting its error.

    A later block of the same group rebinds the same schema, so each result
    must be used before the next one is requested.
    """
    for parsed in parsed_blocks:
        try:
            yield bind_many(schemas, parsed, options)
        except BindError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            yield None


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    inputs = _load_inputs(args)
    if inputs is None:
        return 1
    results = list(_bind_blocks(*inputs, Options(processing=_processing_flags(args))))
    if any(namelist is None for namelist in results):
        return 1
    print(f"Checked {len(results)} namelist(s). No issues found.")
    return 0


def _cmd_print(args: argparse.Namespace) -> int:
    """Handle the print subcommand."""
    printing = PrintFlags.NONE
    if args.no_defaults:
        printing |= PrintFlags.NO_DEFAULTS
    if args.compact:
        printing |= PrintFlags.COMPACT
    options = Options(processing=_processing_flags(args), printing=printing)

    inputs = _load_inputs(args)
    if inputs is None:
        return 1
    has_errors = False
    for namelist in _bind_blocks(*inputs, options):
        if namelist is None:
            has_errors = True
            continue
        print_namelist(sys.stdout, namelist, options)
    return 1 if has_errors else 0


def _cmd_fields(args: argparse.Namespace) -> int:
    """Handle the fields subcommand."""
    schemas = _load_schemas(args.schema)
    if schemas is None:
        return 1
    show_namelists_fields(sys.stdout, schemas)
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    """Handle the show subcommand."""
    parsed_blocks = _read_deck(args.deck)
    if parsed_blocks is None:
        return 1
    if not parsed_blocks:
        print("No namelists found.")
        return 0
    for parsed in parsed_blocks:
        show_namelist(sys.stdout, parsed)
    return 0
