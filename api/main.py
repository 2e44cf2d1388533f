from __future__ import annotations

import logging
import math

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response
from fastapi.encoders import jsonable_encoder

from api.schemas import DashboardStateModel, MetaStatusesResponse
from filter_badges.badge import compute_chart_badge, indicators_frame
from filter_badges.constants import INDICATOR_STATUSES
from filter_badges.data import DashboardState, load_dashboard_state
from filter_badges.selectors import select_indicators_for_state


ALLOWED_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

app = FastAPI(title="Filter Badges API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _state_from_model(model: DashboardStateModel) -> DashboardState:
    raw = model.model_dump()
    return load_dashboard_state(raw)


def _json(data: object) -> JSONResponse:
    """Return JSON with non-finite floats encoded as null."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={float: _safe_float},
        )
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/statuses", response_model=MetaStatusesResponse)
def meta_statuses():
    return MetaStatusesResponse(statuses=list(INDICATOR_STATUSES))


@app.post("/charts/{chart_id}/indicators")
def chart_indicators(chart_id: int, state: DashboardStateModel):
    try:
        indicators = select_indicators_for_state(chart_id, _state_from_model(state))
        return _json({"chart_id": chart_id, "indicators": [i.to_dict() for i in indicators]})
    except Exception as exc:
        logger.exception("chart_indicators failed")
        return _error(exc)


@app.post("/charts/{chart_id}/badge")
def chart_badge(chart_id: int, state: DashboardStateModel):
    try:
        return _json(compute_chart_badge(chart_id, _state_from_model(state)))
    except Exception as exc:
        logger.exception("chart_badge failed")
        return _error(exc)


@app.post("/export/{chart_id}")
def export_indicators(chart_id: int, state: DashboardStateModel):
    indicators = select_indicators_for_state(chart_id, _state_from_model(state))
    export_df = indicators_frame(indicators)
    filename = f"indicators_{chart_id}.csv"
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
