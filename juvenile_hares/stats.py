"""
Statistics module: Welch two-sample t-test, Cohen's d, and the
weight ~ hind foot length OLS fit with Pearson's r.

All routines are deterministic and raise InsufficientDataError when a
required group holds fewer than config.MIN_GROUP_SIZE observations.
"""

from dataclasses import dataclass

import numpy as np
import statsmodels.api as sm
from scipy import stats
from statsmodels.tools.tools import add_constant

from . import config
from .errors import InsufficientDataError


@dataclass(frozen=True)
class TestResult:
    """Outcome of a two-sample mean comparison (first group minus second)."""

    __test__ = False  # not a pytest class

    labels: tuple
    means: tuple
    sds: tuple
    sizes: tuple
    mean_difference: float
    percent_difference: float
    t_statistic: float
    df: float
    p_value: float
    alpha: float
    cohens_d: float

    @property
    def significant(self):
        return self.p_value < self.alpha


@dataclass(frozen=True)
class RegressionResult:
    """Simple linear regression of a response on one predictor."""

    slope: float
    intercept: float
    r_squared: float
    pearson_r: float
    pearson_p: float
    n: int
    residual_std_error: float
    fitted: tuple
    residuals: tuple


def _as_sample(values, group):
    """1-D float array with missing values removed; enforces the minimum size."""
    sample = np.asarray(values, dtype=float).ravel()
    sample = sample[~np.isnan(sample)]
    if sample.size < config.MIN_GROUP_SIZE:
        raise InsufficientDataError(
            f"{group}: need at least {config.MIN_GROUP_SIZE} observations, got {sample.size}",
            group=group,
            n=int(sample.size),
        )
    return sample


def cohens_d(a, b):
    """
    Cohen's d for two independent samples: (mean(a) - mean(b)) / pooled sd.

    The pooled sd weights each group's variance by its degrees of freedom.
    """
    a = _as_sample(a, 'group a')
    b = _as_sample(b, 'group b')
    n_a, n_b = a.size, b.size
    pooled_var = ((n_a - 1) * a.var(ddof=1) + (n_b - 1) * b.var(ddof=1)) / (n_a + n_b - 2)
    if pooled_var == 0:
        raise InsufficientDataError("Cohen's d undefined: both groups have zero variance")
    return float((a.mean() - b.mean()) / np.sqrt(pooled_var))


def welch_df(a, b):
    """Welch-Satterthwaite degrees of freedom."""
    va = a.var(ddof=1) / a.size
    vb = b.var(ddof=1) / b.size
    denom = va ** 2 / (a.size - 1) + vb ** 2 / (b.size - 1)
    if denom == 0:
        return float('nan')
    return float((va + vb) ** 2 / denom)


def welch_ttest(a, b, labels=('a', 'b'), alpha=None):
    """
    Welch's unequal-variance t-test of mean(a) against mean(b).

    Args:
        a, b: Array-likes of observations (NaN dropped)
        labels: Display names for (a, b)
        alpha: Significance level (default: config.SIGNIFICANCE_LEVEL)

    Returns:
        TestResult
    """
    alpha = config.SIGNIFICANCE_LEVEL if alpha is None else alpha
    a = _as_sample(a, labels[0])
    b = _as_sample(b, labels[1])

    t_stat, p_value = stats.ttest_ind(a, b, equal_var=False)

    mean_a, mean_b = float(a.mean()), float(b.mean())
    difference = mean_a - mean_b
    average = (mean_a + mean_b) / 2

    return TestResult(
        labels=tuple(labels),
        means=(mean_a, mean_b),
        sds=(float(a.std(ddof=1)), float(b.std(ddof=1))),
        sizes=(int(a.size), int(b.size)),
        mean_difference=difference,
        percent_difference=100 * difference / average if average else float('nan'),
        t_statistic=float(t_stat),
        df=welch_df(a, b),
        p_value=float(p_value),
        alpha=alpha,
        cohens_d=cohens_d(a, b),
    )


def weight_vectors(df_juv, first=None, second=None):
    """Non-missing weights for two sex groups; other sex values are left out."""
    first = config.SEX_LABELS['m'] if first is None else first
    second = config.SEX_LABELS['f'] if second is None else second
    weighed = df_juv.dropna(subset=['weight'])
    return (
        weighed.loc[weighed['sex'] == first, 'weight'].to_numpy(dtype=float),
        weighed.loc[weighed['sex'] == second, 'weight'].to_numpy(dtype=float),
    )


def compare_weights_by_sex(df_juv, alpha=None, first=None, second=None):
    """Welch t-test and Cohen's d on juvenile weight, male vs female."""
    first = config.SEX_LABELS['m'] if first is None else first
    second = config.SEX_LABELS['f'] if second is None else second
    male, female = weight_vectors(df_juv, first, second)
    return welch_ttest(male, female, labels=(first, second), alpha=alpha)


def pearson_r(x, y):
    """Pearson correlation over pairs where both values are present."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    both = ~(np.isnan(x) | np.isnan(y))
    x, y = _as_sample(x[both], 'pearson pairs'), y[both]
    result = stats.pearsonr(x, y)
    return float(result[0]), float(result[1])


def fit_weight_hindft(df_juv):
    """
    OLS of weight (g) on hind foot length (mm) over juveniles with both measured.

    Returns:
        RegressionResult
    """
    paired = df_juv.dropna(subset=['weight', 'hindft'])
    x = _as_sample(paired['hindft'], 'weight/hind foot pairs')
    y = paired['weight'].to_numpy(dtype=float)

    if np.ptp(x) == 0:
        raise InsufficientDataError(
            "Hind foot length has no variation; slope is undefined",
            group='hindft',
            n=int(x.size),
        )

    model = sm.OLS(y, add_constant(x, has_constant='add')).fit()
    intercept, slope = (float(v) for v in model.params)

    residuals = np.asarray(model.resid, dtype=float)
    n = int(x.size)
    # n == 2 is an exact fit with no residual degrees of freedom
    rse = float(np.sqrt(np.sum(residuals ** 2) / (n - 2))) if n > 2 else float('nan')

    if np.ptp(y) == 0:
        r, r_p = float('nan'), float('nan')
    else:
        r, r_p = pearson_r(x, y)

    return RegressionResult(
        slope=slope,
        intercept=intercept,
        r_squared=float(model.rsquared),
        pearson_r=r,
        pearson_p=r_p,
        n=n,
        residual_std_error=rse,
        fitted=tuple(float(v) for v in model.fittedvalues),
        residuals=tuple(float(v) for v in residuals),
    )
