from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from filter_badges.constants import DASHBOARD_ROOT_ID

ScopeEntry = Union[int, str]


@dataclass(frozen=True)
class ScopeDescriptor:
    scope: Tuple[ScopeEntry, ...] = (DASHBOARD_ROOT_ID,)
    immune: Tuple[int, ...] = ()


DEFAULT_SCOPE = ScopeDescriptor()


@dataclass(frozen=True)
class DashboardFilter:
    chart_id: int
    columns: Dict[str, Any] = field(default_factory=dict)
    scopes: Dict[str, ScopeDescriptor] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    is_date_filter: bool = False
    direct_path_to_filter: List[str] = field(default_factory=list)
    datasource_id: str = ""

    def scope_for(self, column: str) -> ScopeDescriptor:
        return self.scopes.get(column) or DEFAULT_SCOPE


def _as_int_list(values: Optional[Iterable[object]]) -> List[int]:
    if not values:
        return []
    out: List[int] = []
    for v in values:
        try:
            out.append(int(v))
        except (TypeError, ValueError):
            continue
    return out


def _scope_entry(value: object) -> ScopeEntry:
    if isinstance(value, int):
        return value
    text = str(value)
    return int(text) if text.lstrip("-").isdigit() else text


def _pick(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def normalize_scope(raw: Optional[Mapping[str, Any]]) -> ScopeDescriptor:
    """Build a ScopeDescriptor, defaulting to the whole dashboard."""
    if not raw:
        return DEFAULT_SCOPE
    scope = raw.get("scope")
    if scope is None:
        entries: Tuple[ScopeEntry, ...] = DEFAULT_SCOPE.scope
    elif isinstance(scope, (list, tuple)):
        entries = tuple(_scope_entry(v) for v in scope if v is not None)
    else:
        entries = (_scope_entry(scope),)
    return ScopeDescriptor(scope=entries, immune=tuple(_as_int_list(raw.get("immune"))))


def _normalize_column_value(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


def normalize_filter(raw: Mapping[str, Any]) -> DashboardFilter:
    """Convert one raw dashboard filter (camelCase or snake_case keys)."""
    chart_id = int(_pick(raw, "chartId", "chart_id", default=0))

    raw_columns = _pick(raw, "columns", default={}) or {}
    columns = {str(key): _normalize_column_value(value) for key, value in raw_columns.items()}

    raw_scopes = _pick(raw, "scopes", default={}) or {}
    scopes = {str(key): normalize_scope(value) for key, value in raw_scopes.items()}

    raw_labels = _pick(raw, "labels", default={}) or {}
    labels = {str(key): str(value) for key, value in raw_labels.items() if value is not None}

    path = _pick(raw, "directPathToFilter", "direct_path_to_filter", default=[]) or []
    datasource_id = _pick(raw, "datasourceId", "datasource_id", default="")

    return DashboardFilter(
        chart_id=chart_id,
        columns=columns,
        scopes=scopes,
        labels=labels,
        is_date_filter=bool(_pick(raw, "isDateFilter", "is_date_filter", default=False)),
        direct_path_to_filter=[str(p) for p in path],
        datasource_id=str(datasource_id),
    )


def normalize_filters(
    raw: Union[Mapping[str, Mapping[str, Any]], Iterable[Mapping[str, Any]], None],
) -> List[DashboardFilter]:
    """Accept a list of raw filters or a mapping of filter id -> raw filter."""
    if not raw:
        return []
    values = raw.values() if isinstance(raw, Mapping) else raw
    return [normalize_filter(item) for item in values]
