#!/usr/bin/env python
"""
Juvenile snowshoe hare report
=============================

Loads the Bonanza Creek hare trapping file, keeps juveniles, and writes one
HTML report with:
- juvenile trap counts per year (bar chart + count statistics)
- weight by sex and site (faceted chart + table by sex)
- Welch's t-test and Cohen's d for male vs female weight
- OLS of weight on hind foot length, Pearson's r, residual diagnostics

Usage:
    python scripts/run_report.py [--input data/original/bonanza_hares.csv]
                                 [--output reports/juvenile_hares_report.html]
                                 [--strict-dates] [--no-figures]
"""

import argparse
import sys
from pathlib import Path

# ensure repo root on path for package imports when running as script
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from juvenile_hares import __version__, aggregate, config, qc, stats
from juvenile_hares import io as hare_io
from juvenile_hares.cleaning import clean_juveniles
from juvenile_hares.errors import DataFormatError, ParseError
from juvenile_hares.report import build_report_context, render_report, run_section


def create_parser():
    """Create the argument parser for the report run."""
    parser = argparse.ArgumentParser(
        prog="juvenile-hares-report",
        description="Exploratory report on juvenile snowshoe hares in Bonanza Creek",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--input",
        type=Path,
        default=config.INPUT_FILES["hares"],
        help=f"Hare trapping CSV (default: {config.INPUT_FILES['hares']})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=config.OUTPUT_FILES["report"],
        help=f"Report HTML path (default: {config.OUTPUT_FILES['report']})",
    )
    parser.add_argument(
        "--strict-dates",
        action="store_true",
        help="Abort on the first unparseable date or measurement instead of treating it as missing",
    )
    parser.add_argument(
        "--no-figures",
        action="store_true",
        help="Skip figure rendering (text and table only)",
    )
    return parser


def print_log(log):
    if config.VERBOSE:
        for line in log:
            print(f"  {line}")


def build_figures(df_juv, counts, site_summary, fit_section):
    """Render report figures, save PNGs, and return base64 strings by name."""
    # plotting stack is only imported when figures are wanted
    from juvenile_hares import plots

    figures = {
        "yearly_counts": plots.plot_yearly_counts(counts),
        "weight_by_sex_site": plots.plot_weight_by_sex_site(df_juv, site_summary),
    }
    if fit_section.ok:
        figures["weight_hindft"] = plots.plot_weight_hindft(df_juv, fit_section.result)
        figures["residuals"] = plots.plot_residual_diagnostics(fit_section.result)

    encoded = {}
    for name, fig in figures.items():
        path = hare_io.save_figure(fig, config.FIGURE_FILES[name])
        print(f"  ✓ Saved: {path}")
        encoded[name] = plots.figure_to_base64(fig)
    return encoded


def main(argv=None):
    args = create_parser().parse_args(argv)

    print("=" * 80)
    print("JUVENILE SNOWSHOE HARE REPORT")
    print("=" * 80)
    if config.VERBOSE:
        config.print_config()

    # ========================================================================
    # 1. LOAD AND CLEAN
    # ========================================================================
    print("\n[STEP 1] Loading trapping records...")
    try:
        df_hares = hare_io.load_observations(args.input)
        print(f"  → Loaded {len(df_hares):,} records from {args.input}")

        df_juv, log = clean_juveniles(df_hares, config.SITE_LABELS, config.SEX_LABELS,
                                      strict=args.strict_dates)
    except (FileNotFoundError, DataFormatError, ParseError) as e:
        print(f"\n❌ Report not produced: {e}", file=sys.stderr)
        return 1
    print_log(log)

    # ========================================================================
    # 2. AGGREGATE
    # ========================================================================
    print("\n[STEP 2] Aggregating...")
    counts = aggregate.yearly_counts(df_juv)
    count_stats = aggregate.count_summary(counts)
    sex_summary = aggregate.weight_by_sex(df_juv)
    site_summary = aggregate.weight_by_sex_site(df_juv)
    print(f"  → {count_stats['n_years']} years, {len(site_summary)} sex/site groups")
    print(sex_summary.to_string(index=False))

    qc.print_qc_report([
        ("Juvenile subset", qc.check_juvenile_only, {"df_juv": df_juv, "df_hares": df_hares}),
        ("Yearly counts", qc.check_yearly_total, {"counts": counts, "df_juv": df_juv}),
        ("Group means", qc.check_mean_within_range, {"summary": site_summary}),
        ("Weights", qc.check_weight_range, {"df_juv": df_juv}),
        ("Missing values", qc.check_missing, {"df_juv": df_juv}),
    ])

    # ========================================================================
    # 3. STATISTICS (each section may fail on its own)
    # ========================================================================
    print("\n[STEP 3] Comparing male and female weights...")
    ttest = run_section(stats.compare_weights_by_sex, df_juv, alpha=config.SIGNIFICANCE_LEVEL)
    if ttest.ok:
        t = ttest.result
        print(f"  → t({t.df:.2f}) = {t.t_statistic:.2f}, p = {t.p_value:.4f}, d = {t.cohens_d:.2f}")
    else:
        print(f"  ⚠ Weight comparison skipped: {ttest.error}")

    print("\n[STEP 4] Fitting weight ~ hind foot length...")
    fit = run_section(stats.fit_weight_hindft, df_juv)
    if fit.ok:
        f = fit.result
        print(f"  → slope = {f.slope:.2f} g/mm, R² = {f.r_squared:.3f}, r = {f.pearson_r:.3f} (n={f.n})")
    else:
        print(f"  ⚠ Regression skipped: {fit.error}")

    # ========================================================================
    # 4. RENDER
    # ========================================================================
    figures = {}
    if not args.no_figures:
        print("\n[STEP 5] Creating figures...")
        config.ensure_output_dirs()
        figures = build_figures(df_juv, counts, site_summary, fit)

    print("\n[STEP 6] Rendering report...")
    context = build_report_context(
        n_total=len(df_hares),
        n_juvenile=len(df_juv),
        counts=counts,
        count_stats=count_stats,
        sex_summary=sex_summary,
        ttest=ttest,
        fit=fit,
        figures=figures,
        n_parse_errors=len(df_juv.attrs.get("parse_errors", [])),
    )
    path = hare_io.save_report(render_report(context), args.output)
    print(f"\n✓ Saved: {path} ({hare_io.file_size_mb(path):.2f} MB)")

    print("\n" + "=" * 80)
    print("✓ REPORT COMPLETE")
    print("=" * 80)
    return 0


if __name__ == "__main__":
    sys.exit(main())
