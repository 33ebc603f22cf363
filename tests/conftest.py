"""
Shared pytest fixtures for samplesheet-normalizer tests.

Text fixtures are returned as strings; file fixtures write to pytest's
tmp_path so nothing is left on disk after the test run.
"""

import pytest

# ---------------------------------------------------------------------------
# NextSeq 500 (IEM V1) sample sheet content
# ---------------------------------------------------------------------------

NEXTSEQ_500_FULL = """\
[Header]
IEMFileVersion,4
Investigator Name,Jane
Experiment Name,OldRun
Date,2024-01-15
Workflow,GenerateFASTQ

[Reads]
151
151

[Settings]
Adapter,CTGTCTCTTATACACATCT

[Data]
Sample_Project,Sample_ID,index,index2,Description,I7_Index_ID,I5_Index_ID
ProjA,S1,ATTACTCG,TATAGCCT,,D701,D501
ProjA,S2,TCCGGAGA,ATAGAGGC,,D702,D502
"""

NEXTSEQ_500_SPREADSHEET_EXPORT = (
    "[Header],,,,,,\r\n"
    "Experiment Name,OldRun,,,,,\r\n"
    ",,,,,,\r\n"
    "[Data],,,,,,\r\n"
    "Sample_ID,Description,I7_Index_ID,index,I5_Index_ID,index2,Sample_Project\r\n"
    "S1,,D701,ATTACTCG,D501,TATAGCCT,ProjA\r\n"
    ",,,,,,\r\n"
)

NEXTSEQ_500_SPECIAL_CHARS = """\
[Header]
Experiment Name,Run

[Data]
Sample_ID,Description,I7_Index_ID,index,I5_Index_ID,index2,Sample_Project
S 1,,D701,ATTACTCG,D501,TATAGCCT,ProjA
S2,,D702,TCCGGAGA,D502,ATAGAGGC,ProjA
S#3,,D703,TAGGCATG,D503,CCTATCCT,ProjA
"""

NEXTSEQ_500_DUPLICATES = """\
[Header]
Experiment Name,Run

[Data]
Sample_ID,Description,I7_Index_ID,index,I5_Index_ID,index2,Sample_Project
S1,,D701,ATTACTCG,D501,TATAGCCT,ProjA
S2,,D701,ATTACTCG,D501,TATAGCCT,ProjA
S3,,D703,TAGGCATG,D503,CCTATCCT,ProjA
"""

# ---------------------------------------------------------------------------
# NextSeq 2000 (BCLConvert V2) sample sheet content
# ---------------------------------------------------------------------------

NEXTSEQ_2000_FULL = """\
[Header]
FileFormatVersion,2
RunName,OldRun

[Reads]
Read1Cycles,151

[BCLConvert_Settings]
AdapterRead1,CTGTCTCTTATACACATCT

[BCLConvert_Data]
Lane,Sample ID,index,Index 2,Sample_Project
1,Sample 1,ATTACTCG,TATAGCCT,Proj A
1,Sample__2,TCCGGAGA,ATAGAGGC,Proj A
1,Sample 1,TAGGCATG,CCTATCCT,Proj A
"""

NEXTSEQ_2000_DUPLICATES = """\
[Header]
FileFormatVersion,2

[BCLConvert_Data]
Sample_ID,Index,Index2,Sample_Project
sample1,AAAA,TTTT,ProjA
sample2,AAAA,TTTT,ProjA
sample3,GGGG,CCCC,ProjA
"""

# ---------------------------------------------------------------------------
# Nanopore sample sheet content
# ---------------------------------------------------------------------------

NANOPORE_BARE = """\
sample_id,INDEX,index2,Sample_Project,Notes
S1,AAAA,TTTT,ProjA,first
S2,CCCC,GGGG,ProjB
"""

NANOPORE_FULL = """\
[Header]
Experiment_ID,OldExperiment

Flow_Cell_ID,FAX00001
[Data]
Sample_ID,Index2,Index,Sample_Project
S1,TTTT,AAAA,ProjA
"""

# ---------------------------------------------------------------------------
# Legacy Nextera XT sheet
# ---------------------------------------------------------------------------

LEGACY_NEXTERA = (
    "[Data]\n"
    "Sample_ID,Description,I7_Index_ID,index,I5_Index_ID,index2,Sample_Project\n"
    "S1,,N701,,S522,,ProjA\n"
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def nextseq500_full():
    return NEXTSEQ_500_FULL


@pytest.fixture
def nextseq500_spreadsheet_export():
    return NEXTSEQ_500_SPREADSHEET_EXPORT


@pytest.fixture
def nextseq500_special_chars():
    return NEXTSEQ_500_SPECIAL_CHARS


@pytest.fixture
def nextseq500_duplicates():
    return NEXTSEQ_500_DUPLICATES


@pytest.fixture
def nextseq2000_full():
    return NEXTSEQ_2000_FULL


@pytest.fixture
def nextseq2000_duplicates():
    return NEXTSEQ_2000_DUPLICATES


@pytest.fixture
def nanopore_bare():
    return NANOPORE_BARE


@pytest.fixture
def nanopore_full():
    return NANOPORE_FULL


@pytest.fixture
def legacy_nextera():
    return LEGACY_NEXTERA


@pytest.fixture
def nextseq2000_file(tmp_path):
    p = tmp_path / "SampleSheet_2000.csv"
    p.write_text(NEXTSEQ_2000_FULL)
    return str(p)


@pytest.fixture
def nextseq2000_duplicates_file(tmp_path):
    p = tmp_path / "SampleSheet_2000_dup.csv"
    p.write_text(NEXTSEQ_2000_DUPLICATES)
    return str(p)


@pytest.fixture
def nextseq500_special_chars_file(tmp_path):
    p = tmp_path / "SampleSheet_500_special.csv"
    p.write_text(NEXTSEQ_500_SPECIAL_CHARS)
    return str(p)


@pytest.fixture
def legacy_nextera_file(tmp_path):
    p = tmp_path / "SampleSheet_legacy.csv"
    p.write_text(LEGACY_NEXTERA)
    return str(p)
