"""Status tags and fixed lookup tables shared by the filter badge selectors."""

from __future__ import annotations

from typing import Dict

UNSET = "UNSET"
APPLIED = "APPLIED"
INCOMPATIBLE = "INCOMPATIBLE"

INDICATOR_STATUSES = (APPLIED, INCOMPATIBLE, UNSET)

# Filter box time field -> column key used in the filter's `columns`.
TIME_FILTER_MAP: Dict[str, str] = {
    "time_range": "__time_range",
    "granularity_sqla": "__time_col",
    "time_grain_sqla": "__time_grain",
    "druid_time_origin": "__time_origin",
    "granularity": "__granularity",
}

# Column key -> datasource lookup table holding its display labels.
TIME_GRANULARITY_FIELDS: Dict[str, str] = {
    TIME_FILTER_MAP["time_grain_sqla"]: "time_grain_sqla",
    TIME_FILTER_MAP["granularity"]: "granularity",
    "time_grain_sqla": "time_grain_sqla",
    "granularity": "granularity",
}

NO_FILTER = "No filter"

DASHBOARD_ROOT_ID = "ROOT_ID"
CHART_TYPE = "CHART"
