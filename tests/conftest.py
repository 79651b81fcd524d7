"""Shared fixtures: small trapping tables shaped like the loader's output."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd
import pytest

if TYPE_CHECKING:
    from pathlib import Path

COLUMNS = ["date", "age", "sex", "grid", "weight", "hindft"]

# 13 records: 11 juveniles (one with upper-case 'J'), 2 adults.
# Juvenile years: 1999 x2, 2000 x4, 2001 x5.
RECORDS = [
    ("6/15/99", "j", "f", "bonrip", "1200", "130"),
    ("6/15/99", "j", "m", "bonrip", "1400", "140"),
    ("7/2/99", "a", "f", "bonrip", "1600", "135"),
    ("8/10/00", "j", "f", "bonmat", "900", "118"),
    ("8/10/00", "j", "m", "bonmat", "1000", "125"),
    ("8/11/00", "J", "m", "bonbs", "1100", "128"),
    ("9/1/00", "j", "f", "bonbs", None, "120"),
    ("9/5/2001", "j", "m", "bonrip", "1300", None),
    ("7/7/01", "j", "?", "bonmat", "800", "110"),
    ("7/7/01", "j", "f", "bonbs", "1050", "127"),
    ("7/9/01", "a", "m", "bonbs", "1700", "141"),
    ("6/6/01", "j", None, "bonrip", "950", "121"),
    ("6/6/01", "j", "m", "bonrip", "1250", "133"),
]

MALE_WEIGHTS = [1400.0, 1000.0, 1100.0, 1300.0, 1250.0]
FEMALE_WEIGHTS = [1200.0, 900.0, 1050.0]


@pytest.fixture
def hares_raw() -> pd.DataFrame:
    """Full observation table as text columns."""
    return pd.DataFrame(RECORDS, columns=COLUMNS)


@pytest.fixture
def two_hares_raw() -> pd.DataFrame:
    """One juvenile female and one juvenile male at bonrip in 1999."""
    return pd.DataFrame(
        [
            ("6/1/99", "j", "f", "bonrip", "1200", "130"),
            ("6/1/99", "j", "m", "bonrip", "1400", "140"),
        ],
        columns=COLUMNS,
    )


@pytest.fixture
def juveniles(hares_raw: pd.DataFrame) -> pd.DataFrame:
    from juvenile_hares.cleaning import clean_juveniles

    df_juv, _ = clean_juveniles(hares_raw)
    return df_juv


@pytest.fixture
def hares_csv(tmp_path: Path, hares_raw: pd.DataFrame) -> Path:
    """The full table written as a CSV file."""
    path = tmp_path / "bonanza_hares.csv"
    hares_raw.to_csv(path, index=False)
    return path
