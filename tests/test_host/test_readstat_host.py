"""Tests for the pyreadstat-backed dataset host.

Fixture files are written to tmp_path with pyreadstat so every test reads a
real Stata or SPSS file.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyreadstat
import pytest

from varmeta.collector import collect_variable_metadata
from varmeta.host.base import HostLookupError
from varmeta.host.readstat import ReadstatHost


@pytest.fixture
def survey_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "id": [1.0, 2.0, 3.0, 4.0],
            "sex": [1.0, 2.0, 2.0, 1.0],
            "city": ["Oslo", "Lima", "Pune", "Kyiv"],
            "income": [1200.0, 3400.5, 980.0, 2100.0],
        }
    )


@pytest.fixture
def sav_path(tmp_path: Path, survey_df: pd.DataFrame) -> Path:
    path = tmp_path / "survey.sav"
    pyreadstat.write_sav(
        survey_df,
        str(path),
        column_labels=["Respondent ID", "Sex of respondent", "City", "Monthly income"],
        variable_value_labels={"sex": {1: "male", 2: "female"}},
    )
    return path


@pytest.fixture
def dta_path(tmp_path: Path, survey_df: pd.DataFrame) -> Path:
    path = tmp_path / "survey.dta"
    pyreadstat.write_dta(
        survey_df,
        str(path),
        column_labels=["Respondent ID", "Sex of respondent", "City", "Monthly income"],
    )
    return path


class TestReadstatHostSav:
    def test_variable_count(self, sav_path: Path) -> None:
        host = ReadstatHost(sav_path)
        assert host.var_count() == 4
        assert host.parsed_var_count() == 4

    def test_names_and_labels(self, sav_path: Path) -> None:
        host = ReadstatHost(sav_path)
        assert [host.var_name(i) for i in range(1, 5)] == ["id", "sex", "city", "income"]
        assert host.var_label(2) == "Sex of respondent"

    def test_string_flags(self, sav_path: Path) -> None:
        host = ReadstatHost(sav_path)
        assert [host.is_var_type_string(i) for i in range(1, 5)] == [False, False, True, False]

    def test_value_label_set_attached(self, sav_path: Path) -> None:
        host = ReadstatHost(sav_path)
        set_name = host.var_value_label(2)
        assert set_name
        assert host.value_labels(set_name) == {1: "male", 2: "female"}

    def test_metadataonly_keeps_value_labels(self, sav_path: Path) -> None:
        record = collect_variable_metadata(ReadstatHost(sav_path, metadataonly=True))
        assert record.value_label_set_at(1) == {1: "male", 2: "female"}
        assert record.is_string == (False, False, True, False)

    def test_value_label_codes_are_ints(self, sav_path: Path) -> None:
        host = ReadstatHost(sav_path)
        codes = host.value_labels(host.var_value_label(2))
        assert all(type(code) is int for code in codes)

    def test_unlabelled_variable_has_no_set(self, sav_path: Path) -> None:
        host = ReadstatHost(sav_path)
        assert host.var_value_label(1) is None

    def test_collect_full_record(self, sav_path: Path) -> None:
        record = collect_variable_metadata(ReadstatHost(sav_path))
        assert record.indices == (1, 2, 3, 4)
        assert record.names == ("id", "sex", "city", "income")
        assert record.value_label_set_names[0] == ""
        assert record.value_label_sets[0] == {0: ""}
        assert record.value_label_sets[1] == {1: "male", 2: "female"}
        assert record.is_string == (False, False, True, False)

    def test_collect_with_varlist(self, sav_path: Path) -> None:
        record = collect_variable_metadata(ReadstatHost(sav_path, varlist="income sex"))
        assert record.indices == (4, 2)
        assert record.names == ("income", "sex")
        assert record.labels == ("Monthly income", "Sex of respondent")


class TestReadstatHostDta:
    def test_names_labels_and_types(self, dta_path: Path) -> None:
        record = collect_variable_metadata(ReadstatHost(dta_path))
        assert record.names == ("id", "sex", "city", "income")
        assert record.labels == ("Respondent ID", "Sex of respondent", "City", "Monthly income")
        assert record.is_string == (False, False, True, False)

    def test_no_value_labels_gives_placeholders(self, dta_path: Path) -> None:
        record = collect_variable_metadata(ReadstatHost(dta_path))
        assert record.value_label_set_names == ("", "", "", "")
        assert record.value_label_sets == ({0: ""},) * 4

    def test_metadataonly_reads_same_metadata(self, dta_path: Path) -> None:
        full = collect_variable_metadata(ReadstatHost(dta_path))
        meta_only = collect_variable_metadata(ReadstatHost(dta_path, metadataonly=True))
        assert meta_only.names == full.names
        assert meta_only.labels == full.labels
        assert meta_only.is_string == full.is_string


class TestReadstatHostErrors:
    def test_nonexistent_file_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ReadstatHost(tmp_path / "missing.dta")

    def test_unsupported_extension_raises_error(self, tmp_path: Path) -> None:
        bad_file = tmp_path / "survey.csv"
        bad_file.write_text("a,b\n1,2\n")
        with pytest.raises(ValueError, match="Unsupported file type"):
            ReadstatHost(bad_file)

    def test_unknown_varlist_name_raises(self, sav_path: Path) -> None:
        with pytest.raises(HostLookupError, match="'weight' not found"):
            ReadstatHost(sav_path, varlist="weight")

    def test_invalid_index_raises(self, sav_path: Path) -> None:
        with pytest.raises(HostLookupError):
            ReadstatHost(sav_path).var_name(5)

    def test_unknown_value_label_set_raises(self, sav_path: Path) -> None:
        with pytest.raises(HostLookupError, match="not defined in survey.sav"):
            ReadstatHost(sav_path).value_labels("nope")


class TestConvertLabels:
    def test_integral_codes_kept_others_skipped(self) -> None:
        converted = ReadstatHost._convert_labels(
            "mixed", {1.0: "one", 1.5: "one and a half", "x": "letter", 2: "two"}
        )
        assert converted == {1: "one", 2: "two"}

    def test_nan_code_skipped(self) -> None:
        assert ReadstatHost._convert_labels("s", {float("nan"): "missing"}) == {}
