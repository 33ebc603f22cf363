"""Tests for the samplesheet-normalizer command-line entry point."""

import pytest
from loguru import logger

from samplesheet_normalizer.cli import build_parser, main


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()


class TestNormalize:

    def test_prints_sheet_to_stdout(self, nextseq2000_file, capsys):
        assert main([nextseq2000_file, "--run-name", "Run1"]) == 0
        out = capsys.readouterr().out
        assert "RunName,Run1" in out
        assert "Sample-1-1,TAGGCATG,CCTATCCT,Proj-A" in out

    def test_sanitisation_warnings(self, nextseq2000_file, capsys):
        main([nextseq2000_file])
        err = capsys.readouterr().err
        assert err.count("[WARN] SANITIZED") == 6

    def test_writes_output(self, nextseq2000_file, tmp_path, capsys):
        out_path = tmp_path / "out.csv"
        assert main([nextseq2000_file, "-o", str(out_path)]) == 0
        assert "Wrote:" in capsys.readouterr().out
        lines = out_path.read_text().splitlines()
        assert lines[-1] == "Sample-1-1,TAGGCATG,CCTATCCT,Proj-A"

    def test_reverse_complement_and_drop_column(self, nextseq2000_file, capsys):
        rc = main([
            nextseq2000_file,
            "--reverse-complement",
            "--drop-column", "Sample_Project",
        ])
        assert rc == 0
        out = capsys.readouterr().out.splitlines()
        assert out[-1] == "Sample-1-1,TAGGCATG,AGGATAGG"

    def test_dry_run(self, nextseq2000_file, tmp_path, capsys):
        out_path = tmp_path / "out.csv"
        assert main([nextseq2000_file, "--dry-run", "-o", str(out_path)]) == 0
        assert "Dry run: PASS" in capsys.readouterr().out
        assert not out_path.exists()


class TestFailures:

    def test_duplicate_indexes(self, nextseq2000_duplicates_file, capsys):
        assert main([nextseq2000_duplicates_file]) == 1
        err = capsys.readouterr().err
        assert "DUPLICATE_INDEX TTTT-AAAA - sample1, sample2" in err

    def test_rejected_identifiers(self, nextseq500_special_chars_file, capsys):
        assert main([nextseq500_special_chars_file, "-v", "nextseq500"]) == 1
        err = capsys.readouterr().err
        assert "[ERROR]" in err
        assert "S#3" in err

    def test_wrong_variant_layout(self, nextseq500_special_chars_file, capsys):
        assert main([nextseq500_special_chars_file, "-v", "nextseq2000"]) == 1
        assert "[BCLConvert_Data]" in capsys.readouterr().err

    def test_unsupported_file_type(self, tmp_path, capsys):
        p = tmp_path / "sheet.xls"
        p.write_bytes(b"\xd0\xcf\x11\xe0")
        assert main([str(p)]) == 1
        err = capsys.readouterr().err
        assert "[ERROR] Unsupported sample sheet type '.xls'" in err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.csv")]) == 1
        assert "not found" in capsys.readouterr().err


class TestLegacy:

    def test_legacy_validator(self, legacy_nextera_file, capsys):
        assert main([legacy_nextera_file, "--legacy"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[-1] == "S1,S1,N701,TAAGGCGA,S522,TCGCATAA,ProjA"

    def test_unknown_adapter_kit(self, legacy_nextera_file, capsys):
        assert main([legacy_nextera_file, "--legacy", "--adapter-kit", "truseq"]) == 1
        assert "truseq" in capsys.readouterr().err


class TestBuildParser:

    def test_run_config_options(self):
        args = build_parser().parse_args(["in.csv", "--read1-cycles", "151", "--flow-cell-id", "FAX1"])
        assert args.read1_cycles == "151"
        assert args.flow_cell_id == "FAX1"
        assert args.run_name is None

    def test_defaults(self):
        args = build_parser().parse_args(["in.csv"])
        assert args.variant == "nextseq2000"
        assert not args.reverse_complement

    def test_rejects_unknown_variant(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["in.csv", "-v", "miseq"])
