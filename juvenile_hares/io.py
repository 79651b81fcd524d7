"""
I/O module: Load the trapping records and save tables, figures and the report.
"""

import pandas as pd
from pathlib import Path

from . import config
from .errors import DataFormatError


def load_csv(filepath, **kwargs):
    """
    Load CSV file with error handling.

    Args:
        filepath: Path to CSV file
        **kwargs: Additional arguments for pd.read_csv()

    Returns:
        pd.DataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    return pd.read_csv(filepath, **kwargs)


def normalize_columns(df):
    """Return a copy with lower snake_case column names."""
    df = df.copy()
    df.columns = [str(col).strip().lower().replace(' ', '_') for col in df.columns]
    return df


def check_required_columns(df, required=None):
    """Raise DataFormatError if any required column is absent."""
    required = config.REQUIRED_COLUMNS if required is None else required
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise DataFormatError(
            f"Missing required columns: {missing} (found: {df.columns.tolist()})",
            missing_columns=missing,
        )


def load_observations(filepath, required=None):
    """
    Load the full set of hare trap observations.

    Every column is read as text so that codes like sex/age keep their raw
    spelling; numeric parsing happens in the cleaning step.

    Args:
        filepath: Path to the delimited trapping file
        required: Column names that must be present (default: config.REQUIRED_COLUMNS)

    Returns:
        pd.DataFrame with normalized column names

    Raises:
        FileNotFoundError: file does not exist
        DataFormatError: file is empty, not UTF-8, or lacks required columns
    """
    try:
        df = load_csv(filepath, dtype=str, keep_default_na=True, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise DataFormatError(f"No columns to parse in {filepath}") from e
    except pd.errors.ParserError as e:
        raise DataFormatError(f"Malformed delimited file {filepath}: {e}") from e
    except UnicodeDecodeError as e:
        raise DataFormatError(f"{filepath} is not UTF-8 text: {e.reason} at byte {e.start}") from e

    df = normalize_columns(df)
    check_required_columns(df, required)

    return df


def save_csv(df, filepath, **kwargs):
    """
    Save DataFrame to CSV.

    Args:
        df: DataFrame to save
        filepath: Output path
        **kwargs: Additional arguments for df.to_csv()

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(filepath, index=False, **kwargs)

    return filepath


def save_figure(fig, filepath, dpi=None):
    """Save a matplotlib figure as PNG and return the path."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    fig.savefig(filepath, dpi=dpi or config.FIGURE_DPI, bbox_inches='tight')

    return filepath


def save_report(html, filepath):
    """Write the rendered report document."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    filepath.write_text(html, encoding='utf-8')

    return filepath


def file_size_mb(filepath):
    """Get file size in MB."""
    return Path(filepath).stat().st_size / (1024 ** 2)
