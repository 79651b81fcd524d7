"""
Cleaning module: juvenile subset, date/numeric parsing, and label recoding.
"""

import pandas as pd
from . import config
from .errors import ParseError
from .io import check_required_columns, normalize_columns


def _normalize_codes(s: pd.Series) -> pd.Series:
    """Lower-case, whitespace-stripped string codes (missing stays <NA>)."""
    return s.astype('string').str.strip().str.lower()


def _stripped_text(s: pd.Series) -> pd.Series:
    """Whitespace-stripped text as plain objects, None where missing."""
    text = s.astype('string').str.strip()
    return text.astype(object).where(text.notna(), None)


def _unparsed_rows(raw: pd.Series, parsed: pd.Series, column):
    """(row, column, value) for every present raw value that failed to parse."""
    present = raw.notna() & (raw.astype('string').str.strip() != '')
    failed = present & parsed.isna()
    failed = failed.fillna(False).to_numpy(dtype=bool)
    return [(idx, column, raw.loc[idx]) for idx in raw.index[failed]]


def parse_date_series(s: pd.Series) -> pd.Series:
    """
    Parse month/day/year trap dates.

    Two-digit years are tried first (e.g. '11/26/98'), then four-digit years
    ('11/26/1998') for whatever is still unparsed.

    Args:
        s: pd.Series of date strings

    Returns:
        pd.Series of datetime64 values (NaT for missing or unparseable)
    """
    text = _stripped_text(s)
    parsed = pd.to_datetime(text, format=config.DATE_FORMAT, errors='coerce')

    retry = parsed.isna() & text.notna()
    if retry.any():
        parsed.loc[retry] = pd.to_datetime(
            text[retry], format=config.DATE_FORMAT_FALLBACK, errors='coerce'
        )

    return parsed


def parse_numeric_series(s: pd.Series) -> pd.Series:
    """Parse a numeric column; blanks and junk become NaN (never zero)."""
    if pd.api.types.is_numeric_dtype(s):
        return s.astype(float)
    return pd.to_numeric(_stripped_text(s), errors='coerce').astype(float)


def map_labels(s: pd.Series, lookup, default=None) -> pd.Series:
    """
    Map category codes to display names.

    Args:
        s: pd.Series of raw codes
        lookup: dict of code -> display name (read only)
        default: value for codes missing from `lookup`; None keeps the raw code

    Returns:
        pd.Series of display names (object dtype)
    """
    codes = _normalize_codes(s)
    mapped = codes.map(dict(lookup)).astype(object)
    unmapped = mapped.isna()
    if default is None:
        mapped[unmapped] = s[unmapped]
    else:
        mapped[unmapped] = default
    return mapped


def clean_juveniles(df_hares, site_labels=None, sex_labels=None, strict=False):
    """
    Derive the juvenile-only table used by every later step.

    Keeps rows whose age class is juvenile, parses dates and extracts the
    year, recodes trap grid and sex to display names, and coerces weight and
    hind foot length to numbers. Rows with an unparseable date or number are
    kept (the value is left missing) and listed in
    ``df.attrs['parse_errors']`` as (row, column, raw value) tuples.

    Args:
        df_hares: Full observation table (not modified)
        site_labels: grid code -> site name (default: config.SITE_LABELS)
        sex_labels: sex code -> sex name (default: config.SEX_LABELS)
        strict: Raise ParseError on the first malformed row instead

    Returns:
        Cleaned DataFrame and log info
    """
    site_labels = config.SITE_LABELS if site_labels is None else site_labels
    sex_labels = config.SEX_LABELS if sex_labels is None else sex_labels

    log = []
    df_clean = df_hares.copy()

    # 1. Normalize column names
    df_clean = normalize_columns(df_clean)
    check_required_columns(df_clean)
    log.append(f"✓ Column names normalized")

    # 2. Keep juveniles only
    is_juvenile = _normalize_codes(df_clean['age']).eq(config.JUVENILE_CODE).fillna(False)
    df_clean = df_clean[is_juvenile.astype(bool)].copy()
    log.append(f"✓ Juveniles kept: {len(df_clean):,} of {len(df_hares):,} records")

    # 3. Parse dates and extract year
    parse_errors = []
    raw_dates = df_clean['date']
    df_clean['date'] = parse_date_series(raw_dates)
    parse_errors += _unparsed_rows(raw_dates, df_clean['date'], 'date')
    df_clean['year'] = df_clean['date'].dt.year.astype('Int64')
    if df_clean['date'].notna().any():
        log.append(f"✓ Date column parsed ({df_clean['date'].min():%Y-%m-%d} to "
                   f"{df_clean['date'].max():%Y-%m-%d})")

    # 4. Recode site and sex
    df_clean['site'] = map_labels(df_clean['grid'], site_labels)
    df_clean['sex'] = map_labels(df_clean['sex'], sex_labels, default=config.UNKNOWN_SEX)
    unknown_sex = (df_clean['sex'] == config.UNKNOWN_SEX).sum()
    log.append(f"✓ Site and sex recoded ({df_clean['site'].nunique()} sites, "
               f"{unknown_sex} {config.UNKNOWN_SEX} sex)")

    # 5. Numeric measurements
    for col in ['weight', 'hindft']:
        raw = df_clean[col]
        df_clean[col] = parse_numeric_series(raw)
        parse_errors += _unparsed_rows(raw, df_clean[col], col)
        log.append(f"✓ {col}: {df_clean[col].notna().sum():,} values, "
                   f"{df_clean[col].isna().sum():,} missing")

    # 6. Malformed rows pass through unless strict
    position = {idx: pos for pos, idx in enumerate(df_clean.index)}
    parse_errors.sort(key=lambda err: position[err[0]])
    if parse_errors:
        if strict:
            row, column, value = parse_errors[0]
            raise ParseError(row, column, value)
        log.append(f"⚠️  {len(parse_errors)} unparseable values kept as missing: " +
                   ", ".join(f"row {row} {col}={value!r}" for row, col, value in parse_errors[:5]))
    df_clean.attrs['parse_errors'] = parse_errors

    log.append(f"✓ Juvenile cleaning complete: {df_hares.shape} → {df_clean.shape}")

    return df_clean, log
