"""Pure analysis logic over normalized observations.

Dependency rule: analysis/ imports models and reference tables only.
It never fetches data; the pipeline hands it observations.

Modules:
  - taxonomy: matcher chain resolving taxa -> species keys, coverage audit
  - geography: rectangle-based county/region assignment
  - patterns: seasonal/regional frequency distributions
  - validation: model predictions vs. empirical frequencies, recommendations
  - cross_validation: user reports vs. external seasonal patterns
"""

from granite_forager.analysis.cross_validation import CrossValidator
from granite_forager.analysis.geography import GeographicAssigner
from granite_forager.analysis.patterns import analyze_regional, analyze_seasonal, summarize_patterns
from granite_forager.analysis.taxonomy import SpeciesGroups, TaxonomyMapper, coverage_report
from granite_forager.analysis.validation import ModelValidator, Predictor

__all__ = [
    "CrossValidator",
    "GeographicAssigner",
    "ModelValidator",
    "Predictor",
    "SpeciesGroups",
    "TaxonomyMapper",
    "analyze_regional",
    "analyze_seasonal",
    "coverage_report",
    "summarize_patterns",
]
