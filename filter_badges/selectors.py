"""Select the filter indicators shown in a chart's filter badge.

Every cross-filter owned by another chart contributes one indicator per
column whose scope reaches the chart. The status of an indicator comes from
the chart's last query response: columns the query applied are APPLIED,
columns it rejected are INCOMPATIBLE with the chart's datasource, and
everything else (e.g. filters on calculated parameters) stays UNSET.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

from filter_badges.constants import (
    APPLIED,
    INCOMPATIBLE,
    NO_FILTER,
    TIME_GRANULARITY_FIELDS,
    UNSET,
)
from filter_badges.data import Chart, DashboardState, Datasource
from filter_badges.filters import DashboardFilter
from filter_badges.scope import ScopeMembership, is_chart_in_filter_scope, make_scope_membership

logger = logging.getLogger(__name__)

EMPTY_DATASOURCE = Datasource()


@dataclass(frozen=True)
class Indicator:
    id: str
    name: str
    value: List[Any]
    status: str
    path: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def select_indicator_value(
    column_key: str,
    dashboard_filter: DashboardFilter,
    datasource: Datasource,
) -> List[Any]:
    """Resolve the display values of one filter column.

    An empty list means the column has nothing selected.
    """
    values = dashboard_filter.columns.get(column_key)
    arr_values = list(values) if isinstance(values, (list, tuple)) else [values]

    if (
        values is None
        or (dashboard_filter.is_date_filter and values == NO_FILTER)
        or not arr_values
    ):
        return []

    if dashboard_filter.is_date_filter and column_key in TIME_GRANULARITY_FIELDS:
        labels = datasource.lookup(TIME_GRANULARITY_FIELDS[column_key])
        return [labels.get(str(value)) or value for value in arr_values]

    return arr_values


def _is_cleared_date(column: str, dashboard_filter: DashboardFilter) -> bool:
    # Only the date "No filter" sentinel drops the column. None and [] values
    # still emit an indicator with an empty value so the badge lists them as unset.
    return dashboard_filter.is_date_filter and dashboard_filter.columns.get(column) == NO_FILTER


def _status(column: str, applied_columns: Set[str], rejected_columns: Set[str]) -> str:
    if column in applied_columns:
        return APPLIED
    if column in rejected_columns:
        return INCOMPATIBLE
    return UNSET


def select_indicators_for_chart_from_filter(
    chart_id: int,
    dashboard_filter: DashboardFilter,
    filter_datasource: Datasource,
    applied_columns: Set[str],
    rejected_columns: Set[str],
    membership: Optional[ScopeMembership] = None,
) -> List[Indicator]:
    in_scope = membership or is_chart_in_filter_scope
    return [
        Indicator(
            id=column,
            name=dashboard_filter.labels.get(column) or column,
            value=select_indicator_value(column, dashboard_filter, filter_datasource),
            status=_status(column, applied_columns, rejected_columns),
            path=list(dashboard_filter.direct_path_to_filter),
        )
        for column in dashboard_filter.columns
        if not _is_cleared_date(column, dashboard_filter)
        and in_scope(dashboard_filter.scope_for(column), chart_id)
    ]


def select_indicators_for_chart(
    chart_id: int,
    filters: Union[Mapping[Any, DashboardFilter], Iterable[DashboardFilter]],
    datasources: Mapping[str, Datasource],
    charts: Mapping[int, Chart],
    membership: Optional[ScopeMembership] = None,
) -> List[Indicator]:
    chart = charts.get(chart_id)
    # only column compatibility is needed, so the applied/rejected column keys are enough
    applied_columns = chart.applied_columns() if chart is not None else set()
    rejected_columns = chart.rejected_columns() if chart is not None else set()

    values = filters.values() if isinstance(filters, Mapping) else filters
    indicators: List[Indicator] = []
    for dashboard_filter in values:
        if dashboard_filter.chart_id == chart_id:
            logger.debug("Skipping filter owned by chart %s", chart_id)
            continue
        datasource = datasources.get(dashboard_filter.datasource_id)
        if datasource is None:
            logger.debug(
                "Unknown datasource %r for filter on chart %s, values shown unmapped",
                dashboard_filter.datasource_id,
                dashboard_filter.chart_id,
            )
            datasource = EMPTY_DATASOURCE
        indicators.extend(
            select_indicators_for_chart_from_filter(
                chart_id,
                dashboard_filter,
                datasource,
                applied_columns,
                rejected_columns,
                membership,
            )
        )
    return indicators


def select_indicators_for_state(chart_id: int, state: DashboardState) -> List[Indicator]:
    membership = make_scope_membership(state.layout or None)
    return select_indicators_for_chart(
        chart_id,
        state.filters,
        state.datasources,
        state.charts,
        membership=membership,
    )
