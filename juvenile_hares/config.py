"""
Configuration module: paths, category lookups, and fixed analysis settings.
"""

from pathlib import Path

# ============================================================================
# PROJECT PATHS (all relative to PROJECT_ROOT)
# ============================================================================

PACKAGE_DIR = Path(__file__).resolve().parent


def get_project_root():
    """Auto-detect project root by checking for data/ and juvenile_hares/ folders."""
    cwd = Path.cwd()

    # If already in project root
    if (cwd / "data").exists() and (cwd / "juvenile_hares").exists():
        return cwd

    # If in notebooks/ or scripts/
    if cwd.name in ["notebooks", "scripts"] and (cwd.parent / "data").exists():
        return cwd.parent

    # Last resort: the checkout that holds this package
    return PACKAGE_DIR.parent


PROJECT_ROOT = get_project_root()

# Core data paths
DATA_DIR = PROJECT_ROOT / "data"
ORIGINAL_DIR = DATA_DIR / "original"
OUTPUTS_DIR = PROJECT_ROOT / "outputs"
TABLES_DIR = OUTPUTS_DIR / "tables"
REPORTS_DIR = PROJECT_ROOT / "reports"
FIGURES_DIR = REPORTS_DIR / "figures"
TEMPLATES_DIR = PACKAGE_DIR / "templates"

# Input files (raw data)
INPUT_FILES = {
    "hares": ORIGINAL_DIR / "bonanza_hares.csv",
}

# Output files
OUTPUT_FILES = {
    "report": REPORTS_DIR / "juvenile_hares_report.html",
    "yearly_counts": TABLES_DIR / "juvenile_yearly_counts.csv",
    "weight_by_sex": TABLES_DIR / "juvenile_weight_by_sex.csv",
    "weight_by_sex_site": TABLES_DIR / "juvenile_weight_by_sex_site.csv",
    "weight_ttest": TABLES_DIR / "juvenile_weight_ttest.csv",
    "weight_hindft_fit": TABLES_DIR / "juvenile_weight_hindft_fit.csv",
}

FIGURE_FILES = {
    "yearly_counts": FIGURES_DIR / "fig_juvenile_yearly_counts.png",
    "weight_by_sex_site": FIGURES_DIR / "fig_juvenile_weight_sex_site.png",
    "weight_hindft": FIGURES_DIR / "fig_juvenile_weight_hindft.png",
    "residuals": FIGURES_DIR / "fig_weight_hindft_residuals.png",
}


def ensure_output_dirs():
    """Create output directories if missing."""
    for directory in (TABLES_DIR, FIGURES_DIR, REPORTS_DIR):
        directory.mkdir(parents=True, exist_ok=True)


# ============================================================================
# INPUT SCHEMA & CATEGORY LOOKUPS
# ============================================================================

# Columns the loader insists on (after lower-casing)
REQUIRED_COLUMNS = ["date", "age", "sex", "grid", "weight", "hindft"]

# Age class retained for the whole report
JUVENILE_CODE = "j"

# Trap grid codes -> display names
SITE_LABELS = {
    "bonrip": "Bonanza Riparian",
    "bonmat": "Bonanza Mature",
    "bonbs": "Bonanza Black Spruce",
}

# Sex codes -> display names; anything else (incl. missing) is UNKNOWN_SEX
SEX_LABELS = {
    "f": "Female",
    "m": "Male",
}
UNKNOWN_SEX = "unknown"

# Trap dates are written month/day/two-digit-year
DATE_FORMAT = "%m/%d/%y"
DATE_FORMAT_FALLBACK = "%m/%d/%Y"

# ============================================================================
# ANALYSIS SETTINGS
# ============================================================================

SIGNIFICANCE_LEVEL = 0.05
MIN_GROUP_SIZE = 2

# Rounding used in the narrative and tables
DECIMALS = 2
FIT_DECIMALS = 3  # R-squared and Pearson's r
P_VALUE_FLOOR = 0.001

# Figures
FIGURE_DPI = 150
SEX_PALETTE = {
    "Female": "#d95f02",
    "Male": "#1b9e77",
    UNKNOWN_SEX: "#7f7f7f",
}

# ============================================================================
# LOGGING & VERBOSITY
# ============================================================================

VERBOSE = True


def print_config():
    """Print all configuration settings."""
    print("\n" + "=" * 80)
    print("PIPELINE CONFIGURATION")
    print("=" * 80)
    print(f"\n📁 PROJECT ROOT: {PROJECT_ROOT}")
    print(f"📂 DATA DIR: {DATA_DIR}")
    print(f"📂 OUTPUTS DIR: {OUTPUTS_DIR}")
    print(f"📂 REPORTS DIR: {REPORTS_DIR}")
    print(f"\n🐇 Juvenile code: '{JUVENILE_CODE}'")
    print(f"   Sites: {', '.join(f'{k} → {v}' for k, v in SITE_LABELS.items())}")
    print(f"   Sexes: {', '.join(f'{k} → {v}' for k, v in SEX_LABELS.items())}")
    print(f"\n📐 Significance level: {SIGNIFICANCE_LEVEL}")
    print(f"\n✓ Configuration loaded successfully")
    print("=" * 80 + "\n")
