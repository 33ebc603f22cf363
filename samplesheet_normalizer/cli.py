"""
Command-line entry point.

    samplesheet-normalizer SampleSheet.xlsx -v nextseq2000 \\
        --run-name Run042 --read1-cycles 151 -o SampleSheet.csv

Exit code 0 = sheet normalised (and written unless ``--dry-run``).
Exit code 1 = parsing or validation failed; problems are printed to stderr.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import fields

from loguru import logger

from samplesheet_normalizer.config import RunConfig
from samplesheet_normalizer.enums import SchemaVariant
from samplesheet_normalizer.exceptions import (
    DuplicateIndexConflict,
    SampleSheetError,
    UnknownAdapterKitError,
)
from samplesheet_normalizer.legacy import DEFAULT_ADAPTER_KIT, validate_legacy_sheet
from samplesheet_normalizer.pipeline import ParseRequest, export, normalize
from samplesheet_normalizer.reader import read_document
from samplesheet_normalizer.serializer import write_sheet


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="samplesheet-normalizer",
        description="Normalise and validate sequencing sample sheets",
    )

    parser.add_argument("input", help="Input sample sheet (CSV or XLSX)")
    parser.add_argument(
        "-v", "--variant",
        choices=[v.value for v in SchemaVariant],
        default=SchemaVariant.NEXTSEQ_2000.value,
        help="Target instrument family (default: %(default)s)",
    )
    parser.add_argument("-o", "--output", help="Output sample sheet path")
    parser.add_argument(
        "--reverse-complement",
        action="store_true",
        help="Reverse-complement the variant's index2 column on export",
    )
    parser.add_argument(
        "--drop-column",
        metavar="NAME",
        help="Remove this column from the exported sheet",
    )
    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Use the legacy Nextera XT validator instead of a schema variant",
    )
    parser.add_argument(
        "--adapter-kit",
        default=DEFAULT_ADAPTER_KIT,
        help="Adapter kit for --legacy (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate only; do not write the output sheet",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    run = parser.add_argument_group("run configuration")
    for f in fields(RunConfig):
        run.add_argument(f"--{f.name.replace('_', '-')}", dest=f.name, default=None)

    return parser


def print_duplicates(duplicates: dict[str, list[str]] | dict[str, str]) -> None:
    for key, samples in duplicates.items():
        names = samples if isinstance(samples, str) else ", ".join(samples)
        print(f"[ERROR] DUPLICATE_INDEX {key} - {names}", file=sys.stderr)


def _run_legacy(args: argparse.Namespace, text: str) -> int:
    result = validate_legacy_sheet(text, adapter_kit=args.adapter_kit)
    if not result.is_valid:
        print_duplicates(result.duplicated_indexes)
        print("\nValidation failed (duplicate indexes).", file=sys.stderr)
        return 1
    if args.output and not args.dry_run:
        write_sheet(args.output, "\n".join(result.samples))
        print(f"Wrote: {args.output}")
    else:
        print("\n".join(result.samples))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    config = RunConfig.from_dict({
        f.name: getattr(args, f.name) for f in fields(RunConfig)
        if getattr(args, f.name) is not None
    })

    try:
        text = read_document(args.input)
        if args.legacy:
            return _run_legacy(args, text)

        result = normalize(ParseRequest(text, SchemaVariant(args.variant), config))
    except DuplicateIndexConflict as exc:
        print_duplicates(exc.duplicates)
        print("\nValidation failed (duplicate indexes).", file=sys.stderr)
        return 1
    except (SampleSheetError, UnknownAdapterKitError, FileNotFoundError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    for change in result.changes:
        print(f"[WARN] SANITIZED {change}", file=sys.stderr)

    if not result.is_valid:
        print_duplicates(result.duplicated_indexes)
        print("\nValidation failed (duplicate indexes).", file=sys.stderr)
        return 1

    content = export(
        result,
        reverse_complement=args.reverse_complement,
        remove_column=args.drop_column,
    )

    if args.dry_run:
        print(f"Dry run: {result.summary()}")
    elif args.output:
        write_sheet(args.output, content)
        print(f"Wrote: {args.output}")
    else:
        print(content)

    return 0


if __name__ == "__main__":
    sys.exit(main())
