"""Tests for the juvenile filter and recoding step."""

from __future__ import annotations

import pandas as pd
import pytest

from juvenile_hares import config
from juvenile_hares.cleaning import (
    clean_juveniles,
    map_labels,
    parse_date_series,
    parse_numeric_series,
)
from juvenile_hares.errors import DataFormatError, ParseError


class TestCleanJuveniles:
    """Test deriving the juvenile table."""

    def test_keeps_only_juveniles(self, hares_raw: pd.DataFrame) -> None:
        """Subset is no larger than the source and holds juveniles only."""
        df_juv, _ = clean_juveniles(hares_raw)

        assert len(df_juv) <= len(hares_raw)
        assert len(df_juv) == 11
        assert (df_juv["age"].str.strip().str.lower() == "j").all()

    def test_does_not_mutate_source(self, hares_raw: pd.DataFrame) -> None:
        before = hares_raw.copy()
        clean_juveniles(hares_raw)
        pd.testing.assert_frame_equal(hares_raw, before)

    def test_year_extracted(self, juveniles: pd.DataFrame) -> None:
        assert sorted(juveniles["year"].unique().tolist()) == [1999, 2000, 2001]

    def test_site_labels(self, juveniles: pd.DataFrame) -> None:
        assert set(juveniles["site"]) == set(config.SITE_LABELS.values())

    def test_sex_labels_with_unknown(self, juveniles: pd.DataFrame) -> None:
        """'?' and missing sex both become unknown."""
        counts = juveniles["sex"].value_counts().to_dict()
        assert counts == {"Male": 5, "Female": 4, config.UNKNOWN_SEX: 2}

    def test_numeric_columns(self, juveniles: pd.DataFrame) -> None:
        assert juveniles["weight"].dtype == float
        assert juveniles["weight"].isna().sum() == 1
        assert juveniles["hindft"].isna().sum() == 1

    def test_explicit_lookups(self, hares_raw: pd.DataFrame) -> None:
        """Lookup tables passed in are used instead of the defaults."""
        df_juv, _ = clean_juveniles(
            hares_raw,
            site_labels={"bonrip": "Riparian"},
            sex_labels={"f": "F", "m": "M"},
        )
        assert "Riparian" in set(df_juv["site"])
        # unmapped grids keep their code
        assert "bonmat" in set(df_juv["site"])
        assert set(df_juv["sex"]) == {"F", "M", config.UNKNOWN_SEX}

    def test_missing_column_raises(self, hares_raw: pd.DataFrame) -> None:
        """The loader's column check applies, naming what is missing."""
        with pytest.raises(DataFormatError) as excinfo:
            clean_juveniles(hares_raw.drop(columns=["age"]))
        assert excinfo.value.missing_columns == ("age",)

    def test_column_names_normalized(self, hares_raw: pd.DataFrame) -> None:
        df_juv, _ = clean_juveniles(hares_raw.rename(columns={"hindft": " Hindft", "age": "AGE"}))
        assert len(df_juv) == 11
        assert "hindft" in df_juv.columns

    def test_log_messages(self, hares_raw: pd.DataFrame) -> None:
        _, log = clean_juveniles(hares_raw)
        assert log[-1].startswith("✓ Juvenile cleaning complete")


class TestParseErrors:
    """Test handling of malformed dates and numbers."""

    @pytest.fixture
    def malformed(self, hares_raw: pd.DataFrame) -> pd.DataFrame:
        df = hares_raw.copy()
        df.loc[0, "date"] = "not a date"
        df.loc[1, "weight"] = "heavy"
        return df

    def test_malformed_rows_pass_through(self, malformed: pd.DataFrame) -> None:
        """Rows are kept with the bad value missing, and recorded."""
        df_juv, log = clean_juveniles(malformed)

        assert len(df_juv) == 11
        assert pd.isna(df_juv.loc[0, "date"])
        assert pd.isna(df_juv.loc[0, "year"])
        assert pd.isna(df_juv.loc[1, "weight"])
        assert df_juv.attrs["parse_errors"] == [
            (0, "date", "not a date"),
            (1, "weight", "heavy"),
        ]
        assert any("unparseable" in line for line in log)

    def test_missing_values_are_not_parse_errors(self, juveniles: pd.DataFrame) -> None:
        assert juveniles.attrs["parse_errors"] == []

    def test_strict_raises(self, malformed: pd.DataFrame) -> None:
        with pytest.raises(ParseError) as excinfo:
            clean_juveniles(malformed, strict=True)

        assert excinfo.value.row == 0
        assert excinfo.value.column == "date"


class TestParsers:
    """Test the column parsers."""

    def test_two_and_four_digit_years(self) -> None:
        parsed = parse_date_series(pd.Series(["11/26/98", "9/5/2001", None, "13/40/99"]))
        assert parsed[0] == pd.Timestamp("1998-11-26")
        assert parsed[1] == pd.Timestamp("2001-09-05")
        assert pd.isna(parsed[2])
        assert pd.isna(parsed[3])

    def test_numeric_junk_is_missing(self) -> None:
        parsed = parse_numeric_series(pd.Series(["1200", " 950 ", "", "abc", None]))
        assert parsed[0] == 1200.0
        assert parsed[1] == 950.0
        assert parsed[2:].isna().all()

    def test_map_labels_default(self) -> None:
        mapped = map_labels(pd.Series(["F", " m", "pf", None]), {"f": "Female", "m": "Male"}, default="unknown")
        assert mapped.tolist() == ["Female", "Male", "unknown", "unknown"]

    def test_map_labels_keeps_raw_code(self) -> None:
        mapped = map_labels(pd.Series(["bonrip", "other"]), {"bonrip": "Bonanza Riparian"})
        assert mapped.tolist() == ["Bonanza Riparian", "other"]
