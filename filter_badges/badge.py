from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

import pandas as pd

from filter_badges.constants import APPLIED, INCOMPATIBLE, UNSET
from filter_badges.data import DashboardState
from filter_badges.selectors import Indicator, select_indicators_for_state

FRAME_COLUMNS = ["id", "name", "value", "status", "path"]


@dataclass(frozen=True)
class FilterBadge:
    chart_id: int
    applied: List[Indicator] = field(default_factory=list)
    incompatible: List[Indicator] = field(default_factory=list)
    unset: List[Indicator] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.applied) + len(self.incompatible) + len(self.unset)

    @property
    def is_visible(self) -> bool:
        return self.count > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chart_id": self.chart_id,
            "counts": {
                APPLIED: len(self.applied),
                INCOMPATIBLE: len(self.incompatible),
                UNSET: len(self.unset),
            },
            "is_visible": self.is_visible,
            "indicators": {
                APPLIED: [i.to_dict() for i in self.applied],
                INCOMPATIBLE: [i.to_dict() for i in self.incompatible],
                UNSET: [i.to_dict() for i in self.unset],
            },
        }


def compute_badge(chart_id: int, indicators: Iterable[Indicator]) -> FilterBadge:
    """Group indicators by status, keeping their order within each group."""
    indicators = list(indicators)
    return FilterBadge(
        chart_id=chart_id,
        applied=[i for i in indicators if i.status == APPLIED],
        incompatible=[i for i in indicators if i.status == INCOMPATIBLE],
        unset=[i for i in indicators if i.status == UNSET],
    )


def compute_chart_badge(chart_id: int, state: DashboardState) -> Dict[str, Any]:
    return compute_badge(chart_id, select_indicators_for_state(chart_id, state)).to_dict()


def indicators_frame(indicators: Iterable[Indicator]) -> pd.DataFrame:
    """Flatten indicators into one row each for tabular export."""
    rows = [
        {
            "id": i.id,
            "name": i.name,
            "value": ", ".join(str(v) for v in i.value),
            "status": i.status,
            "path": " > ".join(i.path),
        }
        for i in indicators
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
