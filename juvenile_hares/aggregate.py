"""
Aggregation module: yearly trap counts and grouped weight summaries.
"""

import numpy as np


def yearly_counts(df_juv):
    """
    Count juvenile trappings per year.

    Years that never appear in the data are absent (no zero rows); rows
    without a parsed year are not counted.

    Args:
        df_juv: Cleaned juvenile DataFrame with a 'year' column

    Returns:
        DataFrame with columns year, count (sorted by year)
    """
    years = df_juv['year'].dropna()
    counts = (
        years.astype('int64')
        .value_counts()
        .sort_index()
        .rename_axis('year')
        .reset_index(name='count')
    )
    return counts


def count_summary(counts):
    """Mean, median, min and max of the yearly counts."""
    values = counts['count']
    if values.empty:
        return {'mean': np.nan, 'median': np.nan, 'min': np.nan, 'max': np.nan, 'n_years': 0}
    return {
        'mean': float(values.mean()),
        'median': float(values.median()),
        'min': int(values.min()),
        'max': int(values.max()),
        'n_years': int(len(values)),
    }


def weight_summary(df_juv, by):
    """
    Weight mean, standard deviation and sample size per group.

    Missing weights are dropped before grouping, so `n` is the number of
    weighed hares and no group mean is pulled toward zero.

    Args:
        df_juv: Cleaned juvenile DataFrame
        by: Column name or list of column names to group on

    Returns:
        DataFrame with the group columns plus mean_weight, sd_weight, n,
        min_weight, max_weight, median_weight
    """
    by = [by] if isinstance(by, str) else list(by)
    weighed = df_juv.dropna(subset=['weight'])

    summary = (
        weighed.groupby(by, as_index=False, dropna=False)['weight']
        .agg(
            mean_weight='mean',
            sd_weight='std',
            n='count',
            min_weight='min',
            max_weight='max',
            median_weight='median',
        )
    )
    summary['n'] = summary['n'].astype('int64')
    return summary.sort_values(by).reset_index(drop=True)


def weight_by_sex(df_juv):
    return weight_summary(df_juv, ['sex'])


def weight_by_sex_site(df_juv):
    return weight_summary(df_juv, ['sex', 'site'])
