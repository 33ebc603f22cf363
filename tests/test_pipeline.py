"""End-to-end tests for samplesheet_normalizer.pipeline."""

import dataclasses

import pytest

from samplesheet_normalizer import (
    DuplicateIndexConflict,
    ParseError,
    ParseRequest,
    ReconcileError,
    RunConfig,
    SanitizationConflict,
    SchemaVariant,
    export,
    normalize,
    normalize_text,
)
from samplesheet_normalizer.config import NEXTSEQ_500_COLUMNS, SCHEMAS
from samplesheet_normalizer.enums import IndexKeyFormat
from samplesheet_normalizer.templates import render_header_section


class TestNextSeq500:

    def test_columns_reordered_to_canonical(self, nextseq500_full):
        result = normalize_text(nextseq500_full, SchemaVariant.NEXTSEQ_500)
        assert result.table.headers == NEXTSEQ_500_COLUMNS
        assert result.samples[0] == (
            "S1", "", "D701", "ATTACTCG", "D501", "TATAGCCT", "ProjA",
        )
        assert result.is_valid
        assert result.changes == ()

    def test_input_header_preserved_and_rewritten(self, nextseq500_full):
        result = normalize_text(
            nextseq500_full,
            SchemaVariant.NEXTSEQ_500,
            RunConfig(run_name="NewRun"),
        )
        assert "Experiment Name,NewRun" in result.header_section
        assert "Investigator Name,Jane" in result.header_section
        assert "Workflow,GenerateFASTQ" in result.header_section
        assert result.header_section[-1] == "[Data]"

    def test_special_characters_rejected(self, nextseq500_special_chars):
        with pytest.raises(SanitizationConflict) as exc_info:
            normalize_text(nextseq500_special_chars, SchemaVariant.NEXTSEQ_500)
        assert exc_info.value.identifiers == ["S 1", "S#3"]

    def test_duplicate_indexes_rejected(self, nextseq500_duplicates):
        with pytest.raises(DuplicateIndexConflict) as exc_info:
            normalize_text(nextseq500_duplicates, SchemaVariant.NEXTSEQ_500)
        assert exc_info.value.duplicates == {"TATAGCCT-ATTACTCG": ["S1", "S2"]}

    def test_data_marker_only_sheet(self, legacy_nextera):
        result = normalize_text(legacy_nextera, SchemaVariant.NEXTSEQ_500)
        assert len(result.samples) == 1
        assert result.samples[0][0] == "S1"
        assert result.changes == ()
        assert result.is_valid
        assert result.duplicated_indexes == {}
        assert result.header_section == ("[Data]",)

    def test_export_reverse_complements_index2(self, nextseq500_full):
        result = normalize_text(nextseq500_full, SchemaVariant.NEXTSEQ_500)
        lines = export(result, reverse_complement=True).splitlines()
        data = lines.index("[Data]")
        assert lines[data + 1] == (
            "Sample_ID,Description,I7_Index_ID,index,I5_Index_ID,index2,Sample_Project"
        )
        assert lines[data + 2] == "S1,,D701,ATTACTCG,D501,AGGCTATA,ProjA"

    def test_export_does_not_modify_result(self, nextseq500_full):
        result = normalize_text(nextseq500_full, SchemaVariant.NEXTSEQ_500)
        export(result, reverse_complement=True)
        assert result.samples[0][5] == "TATAGCCT"


class TestNextSeq2000:

    def test_identifiers_rewritten(self, nextseq2000_full):
        result = normalize_text(nextseq2000_full, SchemaVariant.NEXTSEQ_2000)
        assert result.table.headers == ("Sample ID", "index", "Index 2", "Sample_Project")
        assert result.table.column("Sample ID") == ["Sample-1", "Sample-2", "Sample-1-1"]
        assert result.table.column("Sample_Project") == ["Proj-A", "Proj-A", "Proj-A"]
        assert len(result.changes) == 6
        assert result.is_valid

    def test_change_records(self, nextseq2000_full):
        result = normalize_text(nextseq2000_full, SchemaVariant.NEXTSEQ_2000)
        first = result.changes[0]
        assert (first.row, first.column, first.original, first.sanitized) == (
            1, "Sample ID", "Sample 1", "Sample-1",
        )
        assert "Sample-1-1" in str(result.changes[2])

    def test_header_rebuilt_from_template(self, nextseq2000_full):
        config = RunConfig(run_name="Run42", date="2024-03-01")
        result = normalize_text(nextseq2000_full, SchemaVariant.NEXTSEQ_2000, config)
        assert list(result.header_section) == render_header_section(
            SchemaVariant.NEXTSEQ_2000, config
        )
        assert "RunName,Run42" in result.header_section
        assert "RunName,OldRun" not in result.header_section

    def test_duplicates_reported_not_raised(self, nextseq2000_duplicates):
        result = normalize_text(nextseq2000_duplicates, SchemaVariant.NEXTSEQ_2000)
        assert not result.is_valid
        assert result.duplicated_indexes == {"TTTT-AAAA": ("sample1", "sample2")}

    def test_schema_duplicate_key_format(self, nextseq2000_duplicates, monkeypatch):
        schema = dataclasses.replace(
            SCHEMAS[SchemaVariant.NEXTSEQ_2000],
            duplicate_key_format=IndexKeyFormat.INDEX_INDEX2,
        )
        monkeypatch.setattr("samplesheet_normalizer.pipeline.get_schema", lambda variant: schema)
        result = normalize_text(nextseq2000_duplicates, SchemaVariant.NEXTSEQ_2000)
        assert result.duplicated_indexes == {"AAAA-TTTT": ("sample1", "sample2")}

    def test_export_reverse_complements_index2(self, nextseq2000_duplicates):
        result = normalize_text(nextseq2000_duplicates, SchemaVariant.NEXTSEQ_2000)
        lines = export(result, reverse_complement=True).splitlines()
        assert lines[-3:] == [
            "sample1,AAAA,AAAA,ProjA",
            "sample2,AAAA,AAAA,ProjA",
            "sample3,GGGG,GGGG,ProjA",
        ]

    def test_export_drops_column_by_name(self, nextseq2000_full):
        result = normalize_text(nextseq2000_full, SchemaVariant.NEXTSEQ_2000)
        lines = export(result, remove_column="sample_project").splitlines()
        assert lines[-4] == "Sample ID,index,Index 2"
        assert lines[-1] == "Sample-1-1,TAGGCATG,CCTATCCT"

    def test_non_ascii_identifiers_replaced(self):
        raw = "[BCLConvert_Data]\nSample_ID,Index,Index2,Sample_Project\nmuestra_\u00f11,AAAA,TTTT,Proyecto \u00d1\n"
        result = normalize_text(raw, SchemaVariant.NEXTSEQ_2000)
        assert result.table.column("Sample_ID") == ["muestra-1"]
        assert result.table.column("Sample_Project") == ["Proyecto-"]

    def test_wrong_layout_has_no_data_section(self, nextseq500_full):
        with pytest.raises(ParseError):
            normalize_text(nextseq500_full, SchemaVariant.NEXTSEQ_2000)


class TestNanopore:

    def test_bare_csv(self, nanopore_bare):
        config = RunConfig(run_name="Exp1", date="2024-02-02")
        result = normalize(ParseRequest(nanopore_bare, SchemaVariant.NANOPORE, config))
        assert result.table.headers == ("Sample_ID", "Index2", "Index", "Sample_Project")
        assert result.samples == (
            ("S1", "TTTT", "AAAA", "ProjA"),
            ("S2", "GGGG", "CCCC", "ProjB"),
        )
        assert list(result.header_section) == render_header_section(
            SchemaVariant.NANOPORE, config
        )

    def test_full_header_preserved(self, nanopore_full):
        result = normalize_text(
            nanopore_full, SchemaVariant.NANOPORE, RunConfig(run_name="Exp2")
        )
        assert result.header_section == (
            "[Header]",
            "Experiment_ID,Exp2",
            "",
            "Flow_Cell_ID,FAX00001",
            "[Data]",
        )

    def test_export_layout(self, nanopore_full):
        result = normalize_text(nanopore_full, SchemaVariant.NANOPORE)
        assert export(result).splitlines()[-2:] == [
            "Sample_ID,Index2,Index,Sample_Project",
            "S1,TTTT,AAAA,ProjA",
        ]

    def test_identifiers_rewritten(self):
        raw = "Sample_ID,Index2,Index,Sample_Project\nS 1,TTTT,AAAA,P\nS 1,GGGG,CCCC,P\n"
        result = normalize_text(raw, SchemaVariant.NANOPORE)
        assert result.table.column("Sample_ID") == ["S-1", "S-1-1"]

    def test_missing_columns(self):
        with pytest.raises(ReconcileError) as exc_info:
            normalize_text("Sample_Name,Foo,Bar\nx,y,z\n", SchemaVariant.NANOPORE)
        assert exc_info.value.missing == ["Sample_ID", "Index2", "Index", "Sample_Project"]


class TestRequest:

    def test_string_variant(self, nanopore_bare):
        result = normalize_text(nanopore_bare, "nanopore")
        assert result.variant == SchemaVariant.NANOPORE

    def test_unknown_variant(self, nanopore_bare):
        with pytest.raises(ValueError):
            normalize_text(nanopore_bare, "miseq")

    def test_empty_document(self):
        with pytest.raises(ParseError):
            normalize(ParseRequest("", SchemaVariant.NANOPORE))

    def test_result_serialisable(self, nextseq2000_duplicates):
        data = normalize_text(nextseq2000_duplicates, SchemaVariant.NEXTSEQ_2000).to_dict()
        assert data["variant"] == "nextseq2000"
        assert data["is_valid"] is False
        assert data["samples"][0] == ["sample1", "AAAA", "TTTT", "ProjA"]

    def test_summary(self, nextseq2000_duplicates):
        result = normalize_text(nextseq2000_duplicates, SchemaVariant.NEXTSEQ_2000)
        assert result.summary().startswith("FAIL")
        assert "3 sample(s)" in result.summary()
