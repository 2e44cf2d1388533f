from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from filter_badges.filters import DashboardFilter, normalize_filters
from filter_badges.scope import Layout, normalize_layout

LookupTable = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class Datasource:
    time_grain_sqla: LookupTable = ()
    granularity: LookupTable = ()

    def lookup(self, table: str) -> Dict[str, str]:
        """Map raw time grain / granularity codes to their display labels."""
        return {code: label for code, label in getattr(self, table, ()) or ()}


@dataclass(frozen=True)
class QueryFilterRecord:
    column: str


@dataclass(frozen=True)
class QueryResponse:
    applied_filters: Tuple[QueryFilterRecord, ...] = ()
    rejected_filters: Tuple[QueryFilterRecord, ...] = ()


@dataclass(frozen=True)
class Chart:
    id: int
    query_response: Optional[QueryResponse] = None

    def applied_columns(self) -> Set[str]:
        if self.query_response is None:
            return set()
        return {record.column for record in self.query_response.applied_filters}

    def rejected_columns(self) -> Set[str]:
        if self.query_response is None:
            return set()
        return {record.column for record in self.query_response.rejected_filters}


@dataclass(frozen=True)
class DashboardState:
    filters: List[DashboardFilter] = field(default_factory=list)
    datasources: Dict[str, Datasource] = field(default_factory=dict)
    charts: Dict[int, Chart] = field(default_factory=dict)
    layout: Layout = field(default_factory=dict)


def _lookup_pairs(values: Optional[Iterable[Any]]) -> LookupTable:
    if not values:
        return ()
    out: List[Tuple[str, str]] = []
    for pair in values:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            continue
        code, label = pair
        if code is None:
            continue
        out.append((str(code), "" if label is None else str(label)))
    return tuple(out)


def _filter_records(values: Optional[Iterable[Any]]) -> Tuple[QueryFilterRecord, ...]:
    if not values:
        return ()
    out: List[QueryFilterRecord] = []
    for record in values:
        column = record.get("column") if isinstance(record, Mapping) else None
        if column is None:
            continue
        out.append(QueryFilterRecord(column=str(column)))
    return tuple(out)


def normalize_datasource(raw: Optional[Mapping[str, Any]]) -> Datasource:
    raw = raw or {}
    return Datasource(
        time_grain_sqla=_lookup_pairs(raw.get("time_grain_sqla")),
        granularity=_lookup_pairs(raw.get("granularity")),
    )


def normalize_datasources(raw: Optional[Mapping[str, Any]]) -> Dict[str, Datasource]:
    return {str(key): normalize_datasource(value) for key, value in (raw or {}).items()}


def normalize_query_response(raw: Optional[Mapping[str, Any]]) -> Optional[QueryResponse]:
    if raw is None:
        return None
    return QueryResponse(
        applied_filters=_filter_records(raw.get("applied_filters")),
        rejected_filters=_filter_records(raw.get("rejected_filters")),
    )


def normalize_chart(chart_id: int, raw: Optional[Mapping[str, Any]]) -> Chart:
    raw = raw or {}
    response = raw.get("queryResponse", raw.get("query_response"))
    return Chart(id=chart_id, query_response=normalize_query_response(response))


def normalize_charts(raw: Optional[Mapping[Any, Any]]) -> Dict[int, Chart]:
    """Key charts by integer id; JSON payloads carry the ids as strings."""
    charts: Dict[int, Chart] = {}
    for key, value in (raw or {}).items():
        try:
            chart_id = int(key)
        except (TypeError, ValueError):
            continue
        charts[chart_id] = normalize_chart(chart_id, value)
    return charts


def load_dashboard_state(raw: Mapping[str, Any]) -> DashboardState:
    """Build one DashboardState snapshot from a raw dashboard store dict."""
    return DashboardState(
        filters=normalize_filters(raw.get("filters")),
        datasources=normalize_datasources(raw.get("datasources")),
        charts=normalize_charts(raw.get("charts")),
        layout=normalize_layout(raw.get("layout")),
    )
