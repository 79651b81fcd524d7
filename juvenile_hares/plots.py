"""
Plots module: report figures for juvenile hare counts, weights and the
weight ~ hind foot length fit.

Every function takes already-computed tables/results and returns a
matplotlib Figure; nothing here aggregates or tests.
"""

import base64
from io import BytesIO

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from scipy import stats

from . import config

sns.set_style("whitegrid")

SEX_ORDER = ["Female", "Male", config.UNKNOWN_SEX]


def _sex_order(values):
    present = set(values)
    return [sex for sex in SEX_ORDER if sex in present] + sorted(present - set(SEX_ORDER))


def plot_yearly_counts(counts):
    """
    Bar chart of juvenile trap counts per year with value labels.

    Args:
        counts: DataFrame with columns year, count

    Returns:
        matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=(10, 5))

    bars = ax.bar(counts['year'].astype(str), counts['count'], color='#4c72b0', edgecolor='black')
    ax.bar_label(bars, padding=2, fontsize=9)

    ax.set_xlabel('Year', fontsize=11)
    ax.set_ylabel('Juvenile hares trapped', fontsize=11)
    ax.set_title('Juvenile Snowshoe Hare Trappings per Year', fontsize=12, fontweight='bold')
    ax.tick_params(axis='x', rotation=45)
    ax.grid(axis='x', visible=False)

    fig.tight_layout()
    return fig


def plot_weight_by_sex_site(df_juv, summary):
    """
    Juvenile weight by sex, one panel per site: points, box, and mean ± sd.

    Args:
        df_juv: Cleaned juvenile DataFrame
        summary: Output of aggregate.weight_by_sex_site()

    Returns:
        matplotlib Figure
    """
    weighed = df_juv.dropna(subset=['weight'])
    sites = sorted(weighed['site'].dropna().unique())
    if not sites:
        fig, ax = plt.subplots(figsize=(6, 4))
        ax.text(0.5, 0.5, 'No weighed juveniles', ha='center', va='center')
        ax.set_axis_off()
        return fig

    order = _sex_order(weighed['sex'])
    fig, axes = plt.subplots(1, len(sites), figsize=(4.5 * len(sites), 5), sharey=True, squeeze=False)

    for ax, site in zip(axes[0], sites):
        subset = weighed[weighed['site'] == site]

        sns.boxplot(data=subset, x='sex', y='weight', order=order, ax=ax,
                    width=0.5, showfliers=False, color='white')
        sns.stripplot(data=subset, x='sex', y='weight', order=order, hue='sex',
                      palette=config.SEX_PALETTE, ax=ax, alpha=0.6, size=4,
                      jitter=0.2, legend=False)

        site_summary = summary[summary['site'] == site]
        for i, sex in enumerate(order):
            row = site_summary[site_summary['sex'] == sex]
            if row.empty:
                continue
            ax.errorbar(i, row['mean_weight'].iloc[0], yerr=row['sd_weight'].fillna(0).iloc[0],
                        fmt='o', color='black', markersize=6, capsize=4, zorder=5)

        ax.set_title(site, fontsize=11, fontweight='bold')
        ax.set_xlabel('Sex', fontsize=10)
        ax.set_ylabel('Weight (g)' if ax is axes[0][0] else '', fontsize=10)

    fig.suptitle('Juvenile Hare Weight by Sex and Site', fontsize=12, fontweight='bold')
    fig.tight_layout()
    return fig


def plot_weight_hindft(df_juv, fit=None):
    """
    Scatter of weight vs hind foot length coloured by sex, with the OLS line.

    Args:
        df_juv: Cleaned juvenile DataFrame
        fit: RegressionResult to overlay (optional)

    Returns:
        matplotlib Figure
    """
    paired = df_juv.dropna(subset=['weight', 'hindft'])
    fig, ax = plt.subplots(figsize=(9, 6))

    sns.scatterplot(data=paired, x='hindft', y='weight', hue='sex',
                    hue_order=_sex_order(paired['sex']) or None, palette=config.SEX_PALETTE,
                    ax=ax, alpha=0.7, s=35)

    if fit is not None and not paired.empty:
        x_line = np.array([paired['hindft'].min(), paired['hindft'].max()])
        ax.plot(x_line, fit.intercept + fit.slope * x_line, color='black', linestyle='--',
                linewidth=1.5, label='OLS fit')
        ax.legend(title='Sex')

    ax.set_xlabel('Hind foot length (mm)', fontsize=11)
    ax.set_ylabel('Weight (g)', fontsize=11)
    ax.set_title('Juvenile Hare Weight vs Hind Foot Length', fontsize=12, fontweight='bold')

    fig.tight_layout()
    return fig


def plot_residual_diagnostics(fit):
    """Residuals vs fitted values and a normal Q-Q plot for a RegressionResult."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].scatter(fit.fitted, fit.residuals, alpha=0.5, s=30)
    axes[0].axhline(y=0, color='r', linestyle='--', linewidth=2, label='Zero line')
    axes[0].set_xlabel('Fitted Values', fontsize=11)
    axes[0].set_ylabel('Residuals', fontsize=11)
    axes[0].set_title('Fitted Values vs Residuals', fontsize=12, fontweight='bold')
    axes[0].legend()
    axes[0].grid(alpha=0.3)

    stats.probplot(np.asarray(fit.residuals), dist="norm", plot=axes[1])
    axes[1].set_title('Q-Q Plot (Normal Distribution)', fontsize=12, fontweight='bold')
    axes[1].grid(alpha=0.3)

    fig.tight_layout()
    return fig


def figure_to_base64(fig, dpi=None, close=True):
    """PNG-encode a figure as a base64 string for embedding in HTML."""
    buffer = BytesIO()
    fig.savefig(buffer, format='png', dpi=dpi or config.FIGURE_DPI, bbox_inches='tight')
    if close:
        plt.close(fig)
    return base64.b64encode(buffer.getvalue()).decode('ascii')
