"""Tests for yearly counts and weight summaries."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from juvenile_hares import aggregate
from juvenile_hares.cleaning import clean_juveniles


class TestYearlyCounts:
    """Test juvenile counts per year."""

    def test_counts_per_year(self, juveniles: pd.DataFrame) -> None:
        counts = aggregate.yearly_counts(juveniles)
        assert counts.to_dict(orient="list") == {"year": [1999, 2000, 2001], "count": [2, 4, 5]}

    def test_sum_equals_subset(self, juveniles: pd.DataFrame) -> None:
        """Every dated juvenile is counted exactly once."""
        counts = aggregate.yearly_counts(juveniles)
        assert counts["count"].sum() == len(juveniles)

    def test_absent_years_are_absent(self, juveniles: pd.DataFrame) -> None:
        """A gap year gets no zero row."""
        later = juveniles[juveniles["year"] != 2000]
        counts = aggregate.yearly_counts(later)
        assert counts["year"].tolist() == [1999, 2001]

    def test_undated_rows_not_counted(self, hares_raw: pd.DataFrame) -> None:
        df = hares_raw.copy()
        df.loc[0, "date"] = "garbled"
        df_juv, _ = clean_juveniles(df)

        counts = aggregate.yearly_counts(df_juv)

        assert counts["count"].sum() == len(df_juv) - 1

    def test_empty(self, juveniles: pd.DataFrame) -> None:
        counts = aggregate.yearly_counts(juveniles.iloc[0:0])
        assert counts.empty
        assert list(counts.columns) == ["year", "count"]


class TestCountSummary:
    """Test descriptive statistics of the yearly counts."""

    def test_summary(self, juveniles: pd.DataFrame) -> None:
        summary = aggregate.count_summary(aggregate.yearly_counts(juveniles))
        assert summary == {"mean": pytest.approx(11 / 3), "median": 4.0, "min": 2, "max": 5, "n_years": 3}

    def test_empty_summary(self) -> None:
        summary = aggregate.count_summary(pd.DataFrame({"year": [], "count": []}))
        assert summary["n_years"] == 0
        assert np.isnan(summary["mean"])


class TestWeightSummary:
    """Test grouped weight statistics."""

    def test_by_sex(self, juveniles: pd.DataFrame) -> None:
        summary = aggregate.weight_by_sex(juveniles).set_index("sex")

        assert summary.loc["Female", "mean_weight"] == pytest.approx(1050.0)
        assert summary.loc["Female", "n"] == 3
        assert summary.loc["Male", "mean_weight"] == pytest.approx(1210.0)
        assert summary.loc["Male", "sd_weight"] == pytest.approx(np.std([1400, 1000, 1100, 1300, 1250], ddof=1))
        assert summary.loc["unknown", "n"] == 2

    def test_missing_weight_excluded_not_zero(self, juveniles: pd.DataFrame) -> None:
        """The female with no weight does not drag the mean toward zero."""
        summary = aggregate.weight_by_sex(juveniles).set_index("sex")
        assert summary.loc["Female", "min_weight"] == 900.0

    def test_injected_missing_weight_changes_nothing(self, juveniles: pd.DataFrame) -> None:
        extra = juveniles.iloc[[1]].copy()
        extra["weight"] = np.nan
        extra.index = [99]
        injected = pd.concat([juveniles, extra])

        pd.testing.assert_frame_equal(
            aggregate.weight_by_sex_site(injected), aggregate.weight_by_sex_site(juveniles)
        )

    def test_by_sex_and_site(self, juveniles: pd.DataFrame) -> None:
        summary = aggregate.weight_by_sex_site(juveniles)
        row = summary[(summary["sex"] == "Male") & (summary["site"] == "Bonanza Riparian")]
        assert row["n"].iloc[0] == 3
        assert row["mean_weight"].iloc[0] == pytest.approx((1400 + 1300 + 1250) / 3)

    def test_mean_between_min_and_max(self, juveniles: pd.DataFrame) -> None:
        summary = aggregate.weight_by_sex_site(juveniles)
        assert (summary["mean_weight"] >= summary["min_weight"]).all()
        assert (summary["mean_weight"] <= summary["max_weight"]).all()


class TestTwoRecordScenario:
    """One female (1200 g) and one male (1400 g) juvenile at bonrip in 1999."""

    def test_scenario(self, two_hares_raw: pd.DataFrame) -> None:
        df_juv, _ = clean_juveniles(two_hares_raw)

        counts = aggregate.yearly_counts(df_juv)
        summary = aggregate.weight_by_sex(df_juv).set_index("sex")

        assert counts.to_dict(orient="list") == {"year": [1999], "count": [2]}
        assert summary.loc["Female", "mean_weight"] == 1200.0
        assert summary.loc["Male", "mean_weight"] == 1400.0
