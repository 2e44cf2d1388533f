"""Pytest fixtures shared across filter badge tests."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from filter_badges.data import Chart, Datasource, QueryFilterRecord, QueryResponse
from filter_badges.filters import DashboardFilter, ScopeDescriptor


@pytest.fixture
def region_filter() -> DashboardFilter:
    """Return a non-date filter on `region` owned by chart 2, scoped to charts 1 and 2."""

    return DashboardFilter(
        chart_id=2,
        columns={"region": "APAC"},
        scopes={"region": ScopeDescriptor(scope=(1, 2))},
        labels={},
        is_date_filter=False,
        direct_path_to_filter=["p"],
        datasource_id="ds1",
    )


@pytest.fixture
def time_filter() -> DashboardFilter:
    """Return a date filter owned by chart 3 carrying time grain and granularity columns."""

    return DashboardFilter(
        chart_id=3,
        columns={
            "__time_range": "Last week",
            "__time_grain": "P1D",
            "__granularity": ["PT1H", "P1W"],
        },
        scopes={},
        labels={"__time_range": "Time range"},
        is_date_filter=True,
        direct_path_to_filter=["ROOT_ID", "TABS-1", "CHART-3"],
        datasource_id="3__table",
    )


@pytest.fixture
def datasources() -> Dict[str, Datasource]:
    return {
        "ds1": Datasource(),
        "3__table": Datasource(
            time_grain_sqla=(("P1D", "day"), ("P1W", "week")),
            granularity=(("PT1H", "hour"),),
        ),
    }


@pytest.fixture
def make_chart():
    """Return a factory building a Chart whose last query applied/rejected the given columns."""

    def _make(chart_id: int, applied=(), rejected=()) -> Chart:
        return Chart(
            id=chart_id,
            query_response=QueryResponse(
                applied_filters=tuple(QueryFilterRecord(column=c) for c in applied),
                rejected_filters=tuple(QueryFilterRecord(column=c) for c in rejected),
            ),
        )

    return _make


@pytest.fixture
def raw_state() -> Dict[str, Any]:
    """Return a raw dashboard store snapshot as a frontend would post it."""

    return {
        "filters": {
            "2": {
                "chartId": 2,
                "columns": {"region": ["APAC", "EMEA"], "country": None},
                "scopes": {
                    "region": {"scope": ["TAB-1"], "immune": []},
                    "country": {"scope": ["ROOT_ID"], "immune": [4]},
                },
                "labels": {"region": "Region"},
                "isDateFilter": False,
                "directPathToFilter": ["ROOT_ID", "TAB-1", "CHART-2"],
                "datasourceId": "1__table",
            },
            "3": {
                "chartId": 3,
                "columns": {"__time_grain": "P1D"},
                "scopes": {"__time_grain": {"scope": ["ROOT_ID"], "immune": []}},
                "labels": {},
                "isDateFilter": True,
                "directPathToFilter": ["ROOT_ID", "TAB-2", "CHART-3"],
                "datasourceId": "2__table",
            },
        },
        "datasources": {
            "1__table": {},
            "2__table": {"time_grain_sqla": [["P1D", "Day"], ["P1W", "Week"]]},
        },
        "charts": {
            "1": {"queryResponse": {"applied_filters": [{"column": "region"}], "rejected_filters": [{"column": "__time_grain"}]}},
            "4": {"queryResponse": None},
        },
        "layout": {
            "ROOT_ID": {"id": "ROOT_ID", "type": "ROOT", "children": ["TABS-1"]},
            "TABS-1": {"id": "TABS-1", "type": "TABS", "children": ["TAB-1", "TAB-2"]},
            "TAB-1": {"id": "TAB-1", "type": "TAB", "children": ["CHART-1", "CHART-2"]},
            "TAB-2": {"id": "TAB-2", "type": "TAB", "children": ["CHART-3", "CHART-4"]},
            "CHART-1": {"id": "CHART-1", "type": "CHART", "children": [], "meta": {"chartId": 1}},
            "CHART-2": {"id": "CHART-2", "type": "CHART", "children": [], "meta": {"chartId": 2}},
            "CHART-3": {"id": "CHART-3", "type": "CHART", "children": [], "meta": {"chartId": 3}},
            "CHART-4": {"id": "CHART-4", "type": "CHART", "children": [], "meta": {"chartId": 4}},
        },
    }
