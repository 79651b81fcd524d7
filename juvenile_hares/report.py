"""
Report module: structured results -> HTML document.

The report is rendered from a Jinja2 template. Numbers reach the template
unrounded; rounding happens in the template through the `fmt` and `pvalue`
filters so the computation layer never formats anything.

A section whose statistics could not be computed is passed as a Section with
`error` set; the template prints the reason in its place and every other
section still renders.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

import jinja2

from . import config
from .errors import InsufficientDataError


@dataclass(frozen=True)
class Section:
    """Result of one analysis section, or the reason it is missing."""

    result: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_section(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Section:
    """Call a statistics routine; insufficient data marks the section as unavailable."""
    try:
        return Section(result=func(*args, **kwargs))
    except InsufficientDataError as e:
        return Section(error=str(e))


def fmt(value: Any, decimals: int = config.DECIMALS) -> str:
    """Fixed-decimal formatting; missing values print as 'NA'."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "NA"
    return f"{value:,.{decimals}f}"


def pvalue(value: float, floor: float = config.P_VALUE_FLOOR) -> str:
    """p-value for prose: '< 0.001' below the floor, otherwise 2 decimals (3 if < 0.01)."""
    if value is None or math.isnan(value):
        return "NA"
    if value < floor:
        return f"< {floor}"
    return f"{value:.3f}" if value < 0.01 else f"{value:.{config.DECIMALS}f}"


# |r| lower bounds for the narrative strength words
CORRELATION_STRENGTHS = ((0.7, "strongly"), (0.3, "moderately"), (0.0, "weakly"))


def describe_correlation(r: float) -> str | None:
    """Strength and sign of a correlation in words, None when r is undefined."""
    if r is None or math.isnan(r):
        return None
    strength = next(word for bound, word in CORRELATION_STRENGTHS if abs(r) >= bound)
    if r == 0:
        return strength
    return f"{strength} {'positively' if r > 0 else 'negatively'}"


_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(config.TEMPLATES_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
_jinja_env.filters["fmt"] = fmt
_jinja_env.filters["pvalue"] = pvalue


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)


def table_rows(summary, columns) -> list[dict[str, Any]]:
    """DataFrame -> list of row dicts restricted to `columns`, for the template."""
    return summary[list(columns)].to_dict(orient="records")


def build_report_context(
    *,
    n_total: int,
    n_juvenile: int,
    counts,
    count_stats: dict[str, Any],
    sex_summary,
    ttest: Section,
    fit: Section,
    figures: dict[str, str] | None = None,
    n_parse_errors: int = 0,
    title: str = "Juvenile Snowshoe Hares in Bonanza Creek: Exploratory Report",
) -> dict[str, Any]:
    """Assemble the template context from already-computed results."""
    years = counts["year"].tolist()
    fit_result = fit.result if fit.ok else None
    return {
        "title": title,
        "generated": date.today().isoformat(),
        "n_total": n_total,
        "n_juvenile": n_juvenile,
        "n_parse_errors": n_parse_errors,
        "first_year": years[0] if years else None,
        "last_year": years[-1] if years else None,
        "count_stats": count_stats,
        "sex_rows": table_rows(sex_summary, ["sex", "mean_weight", "sd_weight", "n"]),
        "ttest": ttest,
        "fit": fit,
        "variance_explained": fit_result.r_squared * 100 if fit_result else None,
        "correlation": describe_correlation(fit_result.pearson_r) if fit_result else None,
        "alpha": config.SIGNIFICANCE_LEVEL,
        "p_floor": config.P_VALUE_FLOOR,
        "fit_decimals": config.FIT_DECIMALS,
        "figures": figures or {},
    }


def render_report(context: dict[str, Any]) -> str:
    """Render the full report document."""
    return render_template("report.html.j2", **context)
