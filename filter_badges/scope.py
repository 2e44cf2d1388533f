"""Resolve which charts a filter column's scope reaches.

A scope lists dashboard layout component ids (tabs, rows, the dashboard
root) and/or chart ids. With a layout, every CHART component reachable
from a scope root is in scope unless its chart id is immune. Without a
layout the scope is read literally: the dashboard root covers every chart,
anything else must name the chart id directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

from filter_badges.constants import CHART_TYPE, DASHBOARD_ROOT_ID
from filter_badges.filters import ScopeDescriptor, ScopeEntry

ScopeMembership = Callable[[ScopeDescriptor, int], bool]


@dataclass(frozen=True)
class LayoutComponent:
    id: str
    type: str = ""
    children: Tuple[str, ...] = field(default_factory=tuple)
    chart_id: Optional[int] = None


Layout = Dict[str, LayoutComponent]


def normalize_layout(raw: Optional[Mapping[str, Any]]) -> Layout:
    """Convert a dashboard `position` mapping into LayoutComponents."""
    layout: Layout = {}
    if not raw:
        return layout
    for key, item in raw.items():
        if not isinstance(item, Mapping):
            continue
        meta = item.get("meta") or {}
        chart_id = meta.get("chartId", meta.get("chart_id"))
        try:
            chart_id = int(chart_id) if chart_id is not None else None
        except (TypeError, ValueError):
            chart_id = None
        component_id = str(item.get("id") or key)
        layout[component_id] = LayoutComponent(
            id=component_id,
            type=str(item.get("type") or ""),
            children=tuple(str(child) for child in item.get("children") or []),
            chart_id=chart_id,
        )
    return layout


def _traverse(
    component: Optional[LayoutComponent],
    layout: Layout,
    immune: Set[int],
    chart_ids: List[int],
    seen: Set[str],
) -> None:
    if component is None or component.id in seen:
        return
    seen.add(component.id)
    if component.type == CHART_TYPE and component.chart_id is not None:
        if component.chart_id not in immune and component.chart_id not in chart_ids:
            chart_ids.append(component.chart_id)
        return
    for child in component.children:
        _traverse(layout.get(child), layout, immune, chart_ids, seen)


def _entry_chart_id(entry: ScopeEntry) -> Optional[int]:
    if isinstance(entry, int):
        return entry
    return None


def chart_ids_in_filter_scope(filter_scope: ScopeDescriptor, layout: Layout) -> List[int]:
    """List chart ids reachable from the scope roots, immune charts excluded."""
    immune = set(filter_scope.immune)
    chart_ids: List[int] = []
    seen: Set[str] = set()
    for entry in filter_scope.scope:
        component = layout.get(str(entry))
        if component is not None:
            _traverse(component, layout, immune, chart_ids, seen)
            continue
        chart_id = _entry_chart_id(entry)
        if chart_id is not None and chart_id not in immune and chart_id not in chart_ids:
            chart_ids.append(chart_id)
    return chart_ids


def is_chart_in_filter_scope(
    filter_scope: ScopeDescriptor,
    chart_id: int,
    layout: Optional[Layout] = None,
) -> bool:
    if chart_id in filter_scope.immune:
        return False
    if layout:
        return chart_id in chart_ids_in_filter_scope(filter_scope, layout)
    if DASHBOARD_ROOT_ID in filter_scope.scope:
        return True
    return any(_entry_chart_id(entry) == chart_id for entry in filter_scope.scope)


def make_scope_membership(layout: Optional[Layout] = None) -> ScopeMembership:
    """Bind a layout into a `(scope, chart_id) -> bool` membership check."""

    def membership(filter_scope: ScopeDescriptor, chart_id: int) -> bool:
        return is_chart_in_filter_scope(filter_scope, chart_id, layout)

    return membership
