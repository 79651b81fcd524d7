"""
Juvenile Hare Report
Package for exploring juvenile snowshoe hare trapping records: cleaning,
summaries, weight comparison by sex, and the weight ~ hind foot length fit.
"""

__version__ = "1.0.0"

# Lazy imports to keep plotting backends out of plain data use
# Import as needed in code

__all__ = ["config", "errors", "io", "cleaning", "aggregate", "stats", "qc", "plots", "report"]
