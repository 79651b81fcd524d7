#!/usr/bin/env python
"""
Export juvenile hare tables
===========================

Writes the derived tables behind the report to outputs/tables/:
- juvenile_yearly_counts.csv
- juvenile_weight_by_sex.csv, juvenile_weight_by_sex_site.csv
- juvenile_weight_ttest.csv (Welch's t-test + Cohen's d, male vs female)
- juvenile_weight_hindft_fit.csv (OLS slope, intercept, R², Pearson's r)
"""

import sys
from pathlib import Path

import pandas as pd

# ensure repo root on path for package imports when running as script
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from juvenile_hares import aggregate, config, stats
from juvenile_hares import io as hare_io
from juvenile_hares.cleaning import clean_juveniles
from juvenile_hares.report import run_section


def ttest_table(result):
    return pd.DataFrame({
        'metric': ['mean_' + result.labels[0].lower(), 'mean_' + result.labels[1].lower(),
                   'mean_difference', 'percent_difference', 't_statistic', 'df',
                   'p_value', 'cohens_d'],
        'value': [result.means[0], result.means[1], result.mean_difference,
                  result.percent_difference, result.t_statistic, result.df,
                  result.p_value, result.cohens_d],
    })


def fit_table(result):
    return pd.DataFrame({
        'metric': ['n', 'slope', 'intercept', 'r_squared', 'pearson_r', 'pearson_p',
                   'residual_std_error'],
        'value': [result.n, result.slope, result.intercept, result.r_squared,
                  result.pearson_r, result.pearson_p, result.residual_std_error],
    })


def main(input_path=None):
    input_path = input_path or config.INPUT_FILES["hares"]

    print("=" * 80)
    print("EXPORTING JUVENILE HARE TABLES")
    print("=" * 80)

    df_hares = hare_io.load_observations(input_path)
    df_juv, log = clean_juveniles(df_hares, config.SITE_LABELS, config.SEX_LABELS)
    for line in log:
        print(f"  {line}")

    tables = {
        "yearly_counts": aggregate.yearly_counts(df_juv),
        "weight_by_sex": aggregate.weight_by_sex(df_juv),
        "weight_by_sex_site": aggregate.weight_by_sex_site(df_juv),
    }

    ttest = run_section(stats.compare_weights_by_sex, df_juv)
    if ttest.ok:
        tables["weight_ttest"] = ttest_table(ttest.result)
    else:
        print(f"  ⚠ Weight comparison skipped: {ttest.error}")

    fit = run_section(stats.fit_weight_hindft, df_juv)
    if fit.ok:
        tables["weight_hindft_fit"] = fit_table(fit.result)
    else:
        print(f"  ⚠ Regression skipped: {fit.error}")

    for name, table in tables.items():
        path = hare_io.save_csv(table, config.OUTPUT_FILES[name])
        print(f"✓ Saved: {path}")

    print("\n" + "=" * 80)
    print("✓ TABLES EXPORTED")
    print("=" * 80)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
