from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from filter_badges.constants import DASHBOARD_ROOT_ID


class ScopeModel(BaseModel):
    scope: List[Union[int, str]] = Field(default_factory=lambda: [DASHBOARD_ROOT_ID])
    immune: List[int] = Field(default_factory=list)


class FilterModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chart_id: int = Field(alias="chartId")
    columns: Dict[str, Any] = Field(default_factory=dict)
    scopes: Dict[str, ScopeModel] = Field(default_factory=dict)
    labels: Dict[str, str] = Field(default_factory=dict)
    is_date_filter: bool = Field(default=False, alias="isDateFilter")
    direct_path_to_filter: List[str] = Field(default_factory=list, alias="directPathToFilter")
    datasource_id: str = Field(default="", alias="datasourceId")


class DatasourceModel(BaseModel):
    time_grain_sqla: List[Any] = Field(default_factory=list)
    granularity: List[Any] = Field(default_factory=list)


class QueryFilterModel(BaseModel):
    column: Optional[str] = None


class QueryResponseModel(BaseModel):
    applied_filters: List[QueryFilterModel] = Field(default_factory=list)
    rejected_filters: List[QueryFilterModel] = Field(default_factory=list)


class ChartModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query_response: Optional[QueryResponseModel] = Field(default=None, alias="queryResponse")


class LayoutComponentModel(BaseModel):
    id: Optional[str] = None
    type: str = ""
    children: List[str] = Field(default_factory=list)
    meta: Dict[str, Any] = Field(default_factory=dict)


class DashboardStateModel(BaseModel):
    filters: Union[List[FilterModel], Dict[str, FilterModel]] = Field(default_factory=list)
    datasources: Dict[str, DatasourceModel] = Field(default_factory=dict)
    charts: Dict[str, ChartModel] = Field(default_factory=dict)
    layout: Dict[str, Union[LayoutComponentModel, str]] = Field(default_factory=dict)


class MetaStatusesResponse(BaseModel):
    statuses: List[str]
