#!/usr/bin/env python3
"""
demo_normalize.py: local smoke test for the normalisation pipeline.

Run this script from the repo root after installing the package in dev mode:

    pip install -e ".[dev]"
    python scripts/demo_normalize.py

Demonstrates four scenarios:

    1. NextSeq 2000 sheet with messy identifiers (rewritten in place)
    2. NextSeq 500 sheet with a duplicated index pair (rejected)
    3. Bare Nanopore CSV (header section synthesised from run config)
    4. Legacy Nextera XT sheet (indexes filled from the adapter kit)

Exit code 0 = all scenarios behaved as expected.
Exit code 1 = something went wrong (error printed to stderr).
"""

from __future__ import annotations

import sys

NEXTSEQ_2000_SHEET = """\
[Header]
FileFormatVersion,2
RunName,OldRun

[BCLConvert_Data]
Lane,Sample ID,Index,Index 2,Sample_Project
1,Tumour 01,ATTACTCG,TATAGCCT,Study #7
1,Tumour__02,TCCGGAGA,ATAGAGGC,Study #7
1,Tumour 01,TAGGCATG,CCTATCCT,Study #7
"""

NEXTSEQ_500_SHEET = """\
[Header]
Experiment Name,Run

[Data]
Sample_ID,Description,I7_Index_ID,index,I5_Index_ID,index2,Sample_Project
S1,,D701,ATTACTCG,D501,TATAGCCT,ProjA
S2,,D701,ATTACTCG,D501,TATAGCCT,ProjA
"""

NANOPORE_SHEET = """\
sample_id,index,index2,sample_project
Barcode01,AAGAAAGTTGTCGGTGTCTTTGTG,,ONT-1
Barcode02,TCGATTCCGTTTGTAGTCGTCTGT,,ONT-1
"""

LEGACY_SHEET = """\
[Data]
Sample_ID,Description,I7_Index_ID,index,I5_Index_ID,index2,Sample_Project
Lib 1,,A-N701,,A-S522,,Proj A
"""


def _separator(title: str) -> None:
    print(f"\n{'─' * 60}")
    print(f"  {title}")
    print(f"{'─' * 60}")


def run() -> int:
    try:
        from samplesheet_normalizer import (
            DuplicateIndexConflict,
            RunConfig,
            SchemaVariant,
            export,
            normalize_text,
            validate_legacy_sheet,
        )
    except ImportError as exc:
        print(
            f"ERROR: could not import samplesheet_normalizer, "
            f"did you run 'pip install -e .[dev]'?\n{exc}",
            file=sys.stderr,
        )
        return 1

    errors: list[str] = []
    config = RunConfig(
        run_name="DemoRun_20240115",
        read1_cycles="151",
        read2_cycles="151",
        index1_cycles="8",
        index2_cycles="8",
        adapter_read1="CTGTCTCTTATACACATCT",
    )

    # ------------------------------------------------------------------
    # Scenario 1: NextSeq 2000, identifiers rewritten
    # ------------------------------------------------------------------
    _separator("1/4  NextSeq 2000 sheet with messy identifiers")

    result = normalize_text(NEXTSEQ_2000_SHEET, SchemaVariant.NEXTSEQ_2000, config)
    print(f"  {result.summary()}")
    for change in result.changes:
        print(f"    {change}")
    print()
    print(export(result, reverse_complement=True))

    if not result.is_valid or len(result.changes) != 6:
        errors.append("Scenario 1: unexpected validation outcome")

    # ------------------------------------------------------------------
    # Scenario 2: NextSeq 500, duplicate indexes rejected
    # ------------------------------------------------------------------
    _separator("2/4  NextSeq 500 sheet with a duplicated index pair")

    try:
        normalize_text(NEXTSEQ_500_SHEET, SchemaVariant.NEXTSEQ_500, config)
        errors.append("Scenario 2: duplicate indexes were not rejected")
    except DuplicateIndexConflict as exc:
        print(f"  Rejected as expected: {exc}")

    # ------------------------------------------------------------------
    # Scenario 3: bare Nanopore CSV
    # ------------------------------------------------------------------
    _separator("3/4  Bare Nanopore CSV")

    ont_config = RunConfig(run_name="ONT_Demo", flow_cell_id="FAX12345", kit="SQK-NBD114-24")
    result = normalize_text(NANOPORE_SHEET, SchemaVariant.NANOPORE, ont_config)
    print(export(result))

    if result.header_section[1] != "Experiment_ID,ONT_Demo":
        errors.append("Scenario 3: header section not built from run config")

    # ------------------------------------------------------------------
    # Scenario 4: legacy Nextera XT validator
    # ------------------------------------------------------------------
    _separator("4/4  Legacy Nextera XT sheet")

    legacy = validate_legacy_sheet(LEGACY_SHEET)
    print("\n".join(legacy.samples))

    if legacy.samples[-1] != "Lib-1,Lib-1,N701,TAAGGCGA,S522,TCGCATAA,Proj-A":
        errors.append("Scenario 4: unexpected legacy output")

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------
    _separator("Summary")
    if errors:
        for err in errors:
            print(f"  FAIL  {err}", file=sys.stderr)
        return 1

    print("  All scenarios completed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
