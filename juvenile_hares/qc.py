"""
Quality Control (QC) module: Assertions over the juvenile table and its summaries.
"""

import numpy as np
from . import config


def check_juvenile_only(df_juv, df_hares):
    """Assert the subset is no larger than the source and holds juveniles only."""
    assert len(df_juv) <= len(df_hares), (
        f"Juvenile subset ({len(df_juv)}) larger than source ({len(df_hares)})!"
    )
    ages = df_juv['age'].astype('string').str.strip().str.lower()
    assert (ages == config.JUVENILE_CODE).all(), "Non-juvenile rows in juvenile subset!"
    return f"✓ {len(df_juv):,} juveniles of {len(df_hares):,} records"


def check_yearly_total(counts, df_juv):
    """Assert yearly counts add up to the dated juvenile rows."""
    dated = int(df_juv['year'].notna().sum())
    total = int(counts['count'].sum())
    assert total == dated, f"Yearly counts sum {total} != {dated} dated juveniles"
    undated = len(df_juv) - dated
    if undated > 0:
        return f"⚠️  Yearly counts sum to {total:,}; {undated} juveniles have no parseable date"
    return f"✓ Yearly counts sum to {total:,}"


def check_mean_within_range(summary):
    """Assert every group mean lies between the group min and max."""
    inside = (summary['mean_weight'] >= summary['min_weight']) & (
        summary['mean_weight'] <= summary['max_weight']
    )
    assert inside.all(), f"Group mean outside [min, max] in {int((~inside).sum())} groups"
    return f"✓ Group means within range ({len(summary)} groups)"


def check_weight_range(df_juv, weight_col='weight', min_weight=0):
    """Flag non-positive weights (logs, does not fail)."""
    weights = df_juv[weight_col].dropna()
    bad = int((weights <= min_weight).sum())
    if bad > 0:
        return f"⚠️  {bad} non-positive {weight_col} values"
    if weights.empty:
        return f"⚠️  No {weight_col} values"
    return f"✓ {weight_col} range: {weights.min():.0f} to {weights.max():.0f} g"


def check_missing(df_juv, cols=('weight', 'hindft')):
    """Report missing measurement counts."""
    parts = [f"{col}: {int(df_juv[col].isna().sum())}" for col in cols]
    share = np.mean([df_juv[col].isna().mean() for col in cols]) if len(df_juv) else 0
    return f"✓ Missing values ({share:.1%} on average) - " + ", ".join(parts)


def print_qc_report(checks):
    """
    Print formatted QC report.

    Args:
        checks: List of (name, check_func, kwargs) tuples

    Returns:
        Number of failed checks
    """
    failures = 0
    print("\n" + "=" * 80)
    print("QUALITY CONTROL REPORT")
    print("=" * 80)

    for name, check_func, kwargs in checks:
        try:
            result = check_func(**kwargs)
            print(f"\n{name}")
            print(f"  {result}")
        except AssertionError as e:
            failures += 1
            print(f"\n❌ {name}")
            print(f"  ERROR: {e}")
        except (KeyError, TypeError, ValueError) as e:
            failures += 1
            print(f"\n⚠️  {name}")
            print(f"  WARNING: {e}")

    print("\n" + "=" * 80)
    return failures
