"""Core (UI-agnostic) filter badge logic.

This package contains:
- filter / datasource / chart state models and their normalizers
- scope resolution against the dashboard layout
- indicator selectors (one indicator per in-scope filter column)
- badge summaries and tabular export
"""

from filter_badges.constants import APPLIED, INCOMPATIBLE, UNSET
from filter_badges.selectors import Indicator, select_indicators_for_chart

__all__ = ["APPLIED", "INCOMPATIBLE", "UNSET", "Indicator", "select_indicators_for_chart"]
