from pathlib import Path

import pandas as pd
import pytest

from prioritized_grouping.data_loader import (
    file_extension,
    load_pre_grouping,
    read_input,
)
from prioritized_grouping.errors import DataFormatError


class TestSampleDataFile:
    SAMPLE_PATH = Path(__file__).parent.parent / "data" / "prioritized_sample.csv"

    def test_sample_file_integrity(self):
        if not self.SAMPLE_PATH.exists():
            pytest.skip("Sample data file not found")
        df = read_input(self.SAMPLE_PATH)
        assert df.shape == (16, 5), "Sample should have 16 subjects and 4 groups"
        assert df["id"].is_unique, "Subject IDs should be unique"
        assert df.columns.tolist()[1:] == ["Art", "Biology", "Chemistry", "Drama"]


class TestFileExtension:
    def test_simple(self):
        assert file_extension("data/prioritized_sample.csv") == "csv"

    def test_splits_at_last_dot(self):
        assert file_extension("my.data.file.xlsx") == "xlsx"

    def test_upper_case(self):
        assert file_extension("DATA.CSV") == "csv"

    def test_no_extension(self):
        assert file_extension("README") == ""


class TestReadInput:
    @pytest.fixture
    def sample_csv(self, tmp_path: Path) -> Path:
        csv_content = """id,A,B,C
s1,1,2,3
s2,2,,1
s3,NA,1,2
"""
        csv_path = tmp_path / "priorities.csv"
        csv_path.write_text(csv_content)
        return csv_path

    def test_reads_csv(self, sample_csv: Path):
        df = read_input(str(sample_csv))
        assert df["id"].tolist() == ["s1", "s2", "s3"]
        assert df.columns.tolist() == ["id", "A", "B", "C"]

    def test_missing_markers_become_nan(self, sample_csv: Path):
        df = read_input(sample_csv)
        assert pd.isna(df.loc[1, "B"])
        assert pd.isna(df.loc[2, "A"])

    def test_reads_xlsx(self, tmp_path: Path):
        xlsx_path = tmp_path / "priorities.xlsx"
        pd.DataFrame({"id": ["s1", "s2"], "A": [1, 2], "B": [2, 1]}).to_excel(
            xlsx_path, index=False
        )
        df = read_input(xlsx_path)
        assert df["id"].tolist() == ["s1", "s2"]
        assert df["B"].tolist() == [2, 1]

    def test_unsupported_extension_raises(self, tmp_path: Path):
        path = tmp_path / "priorities.json"
        path.write_text("{}")
        with pytest.raises(DataFormatError, match="has to be one of"):
            read_input(path)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(DataFormatError, match="Failed to read"):
            read_input(tmp_path / "missing.csv")

    def test_empty_file_raises(self, tmp_path: Path):
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(DataFormatError, match="empty"):
            read_input(path)

    def test_reader_error_is_chained(self, tmp_path: Path):
        with pytest.raises(DataFormatError) as excinfo:
            read_input(tmp_path / "missing.csv")
        assert isinstance(excinfo.value.__cause__, OSError)


class TestLoadPreGrouping:
    def test_reads_two_columns(self, tmp_path: Path):
        path = tmp_path / "pre.csv"
        path.write_text("id,group,note\ns1,A,x\ns2,2,y\n")
        df = load_pre_grouping(path)
        assert df.shape == (2, 2)
        assert df.iloc[:, 0].tolist() == ["s1", "s2"]

    def test_single_column_raises(self, tmp_path: Path):
        path = tmp_path / "pre.csv"
        path.write_text("id\ns1\n")
        with pytest.raises(DataFormatError, match="group column"):
            load_pre_grouping(path)


class TestCorruptFiles:
    @pytest.mark.parametrize("name", ["bad.ods", "bad.xlsx"])
    def test_corrupt_spreadsheet_raises_data_format_error(self, tmp_path: Path, name):
        path = tmp_path / name
        path.write_bytes(b"this is not a zip archive")
        with pytest.raises(DataFormatError, match="Failed to read"):
            read_input(path)
