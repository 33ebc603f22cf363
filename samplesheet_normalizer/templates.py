"""
Header section templates per instrument family.

Each template is an ordered list of lines ending with the data marker.
``{placeholders}`` are filled from :meth:`RunConfig.to_template_values`;
values are interpolated verbatim, so an empty value renders as ``Key,``.

:func:`rewrite_header_section` is the counterpart for sheets whose own
header section is preserved: known metadata keys are overwritten from
configuration and every other line passes through unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from samplesheet_normalizer.config import RunConfig
from samplesheet_normalizer.enums import SchemaVariant
from samplesheet_normalizer.parser import clean_section_line

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

NEXTSEQ_500_TEMPLATE: tuple[str, ...] = (
    "[Header]",
    "IEMFileVersion,4",
    "Investigator Name,{investigator}",
    "Experiment Name,{run_name}",
    "Date,{date}",
    "Workflow,GenerateFASTQ",
    "Application,NextSeq FASTQ Only",
    "Instrument Type,NextSeq/MiniSeq",
    "Assay,{assay}",
    "Index Adapters,{index_adapters}",
    "Description,{description}",
    "Chemistry,Amplicon",
    "",
    "[Reads]",
    "{read1_cycles}",
    "{read2_cycles}",
    "",
    "[Settings]",
    "Adapter,{adapter_read1}",
    "AdapterRead2,{adapter_read2}",
    "",
    "[Data]",
)

NEXTSEQ_2000_TEMPLATE: tuple[str, ...] = (
    "[Header]",
    "FileFormatVersion,2",
    "RunName,{run_name}",
    "InstrumentPlatform,NextSeq1k2k",
    "IndexOrientation,Forward",
    "",
    "[Reads]",
    "Read1Cycles,{read1_cycles}",
    "Read2Cycles,{read2_cycles}",
    "Index1Cycles,{index1_cycles}",
    "Index2Cycles,{index2_cycles}",
    "",
    "[Sequencing_Settings]",
    "LibraryPrepKits,{library_prep_kit}",
    "",
    "[BCLConvert_Settings]",
    "SoftwareVersion,{software_version}",
    "AdapterRead1,{adapter_read1}",
    "AdapterRead2,{adapter_read2}",
    "BarcodeMismatchesIndex1,{barcode_mismatches_index1}",
    "BarcodeMismatchesIndex2,{barcode_mismatches_index2}",
    "FastqCompressionFormat,gzip",
    "",
    "[BCLConvert_Data]",
)

NANOPORE_TEMPLATE: tuple[str, ...] = (
    "[Header]",
    "Experiment_ID,{run_name}",
    "Flow_Cell_ID,{flow_cell_id}",
    "Kit,{kit}",
    "Date,{date}",
    "",
    "[Data]",
)

TEMPLATES: dict[SchemaVariant, tuple[str, ...]] = {
    SchemaVariant.NEXTSEQ_500:  NEXTSEQ_500_TEMPLATE,
    SchemaVariant.NEXTSEQ_2000: NEXTSEQ_2000_TEMPLATE,
    SchemaVariant.NANOPORE:     NANOPORE_TEMPLATE,
}

#: Key/value header keys rewritten in preserved header sections, mapped to
#: the :class:`RunConfig` attribute that supplies the new value.
REWRITABLE_KEYS: dict[str, str] = {
    "Investigator Name": "investigator",
    "Experiment Name":   "run_name",
    "RunName":           "run_name",
    "Experiment_ID":     "run_name",
    "Date":              "date",
    "Flow_Cell_ID":      "flow_cell_id",
    "Kit":               "kit",
    "Read1Cycles":       "read1_cycles",
    "Read2Cycles":       "read2_cycles",
    "Index1Cycles":      "index1_cycles",
    "Index2Cycles":      "index2_cycles",
    "Adapter":           "adapter_read1",
    "AdapterRead1":      "adapter_read1",
    "AdapterRead2":      "adapter_read2",
}

#: Bare-number lines of an IEM ``[Reads]`` section, in order.
_READS_POSITIONAL = ("read1_cycles", "read2_cycles")


def render_header_section(
    variant: SchemaVariant,
    config: RunConfig | None = None,
) -> list[str]:
    """Render the header section template for *variant*.

    Parameters
    ----------
    variant:
        Instrument family.
    config:
        Run metadata. Defaults to an empty :class:`RunConfig`.

    Returns
    -------
    list[str]
        Header lines, ending with the family's data marker.
    """
    values = (config or RunConfig()).to_template_values()
    return [line.format_map(values) for line in TEMPLATES[SchemaVariant(variant)]]


def rewrite_header_section(
    lines: Sequence[str],
    config: RunConfig,
) -> list[str]:
    """Overwrite known metadata values in a preserved header section.

    Only configuration values that are set (non-empty) are applied. Lines
    keep their position; cells after the value (spreadsheet padding) are
    kept as they are. Bare read lengths in an IEM ``[Reads]`` section are
    rewritten positionally from ``read1_cycles`` / ``read2_cycles``.

    Parameters
    ----------
    lines:
        Header section as returned by the parser.
    config:
        Run metadata.

    Returns
    -------
    list[str]
        New header section; the input is not modified.
    """
    result: list[str] = []
    section = ""
    reads_seen = 0

    for line in lines:
        cleaned = clean_section_line(line)
        if cleaned.startswith("[") and cleaned.endswith("]"):
            section = cleaned[1:-1].lower()
            reads_seen = 0
            result.append(line)
            continue

        cols = line.split(",")
        key = cols[0].strip()

        if section == "reads" and key.isdigit():
            if reads_seen < len(_READS_POSITIONAL):
                value = getattr(config, _READS_POSITIONAL[reads_seen])
                reads_seen += 1
                if value:
                    cols[0] = value
                    line = ",".join(cols)
            result.append(line)
            continue

        attr = REWRITABLE_KEYS.get(key)
        value = getattr(config, attr) if attr else ""
        if value:
            if len(cols) >= 2:
                cols[1] = value
            else:
                cols.append(value)
            logger.debug(f"Rewriting header key {key!r}")
            line = ",".join(cols)
        result.append(line)

    return result
