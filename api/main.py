from __future__ import annotations

import logging
import math
from dataclasses import asdict
from typing import Any, Callable, Dict

import numpy as np
import pandas as pd
from fastapi import FastAPI, File, Query, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import MarketPricesModel, UploadResponse
from core.errors import MalformedFileError, MissingSheetError, NoDataLoadedError
from core.layout import describe_layout
from core.market import MarketPrices, normalize_market_prices
from core.metrics_assets import compute_assets, property_table
from core.metrics_bitcoin import compute_bitcoin
from core.metrics_debt import compute_debt
from core.metrics_family import compute_family
from core.metrics_liquidity import compute_liquidity
from core.metrics_overview import compute_overview
from core.metrics_stress import compute_stress
from core.models import FamilyData
from core.policy import STRESS_SCENARIOS
from core.session import UploadSession

app = FastAPI(title="Family Financial Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-process only; nothing is persisted.
SESSIONS: Dict[str, UploadSession] = {}

ERROR_STATUS = {
    MissingSheetError.__name__: 422,
    MalformedFileError.__name__: 400,
}


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        ),
    )


def _error(exc: Exception, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _market(model: MarketPricesModel | None) -> MarketPrices:
    return normalize_market_prices(model.model_dump() if model is not None else None)


def _session_data(session_id: str) -> FamilyData:
    session = SESSIONS.get(session_id)
    if session is None:
        raise NoDataLoadedError()
    return session.require_data()


def _page(name: str, session_id: str, compute: Callable[[FamilyData], Any]) -> JSONResponse:
    try:
        return _json(compute(_session_data(session_id)))
    except NoDataLoadedError as exc:
        return _error(exc, 404)
    except Exception as exc:
        logger.exception("%s failed", name)
        return _error(exc, 500)


@app.get("/meta/scenarios")
def meta_scenarios():
    return _json({"scenarios": [asdict(s) for s in STRESS_SCENARIOS]})


@app.get("/meta/layout")
def meta_layout():
    return _json(describe_layout())


@app.post("/sessions/{session_id}/upload")
async def upload(session_id: str, file: UploadFile = File(...)):
    session = SESSIONS.setdefault(session_id, UploadSession())
    try:
        outcome = await session.load(file.read, file.filename or "")
    except Exception as exc:
        logger.exception("upload failed")
        return _error(exc, 500)

    body = UploadResponse(
        session_id=session_id,
        request_id=outcome.request_id,
        accepted=outcome.accepted,
        source_name=file.filename or "",
        error=outcome.error,
    )
    if not outcome.accepted:
        return _json(body.model_dump(), status_code=409)
    if outcome.error is not None:
        return _json({**body.model_dump(), "type": outcome.error_type}, status_code=ERROR_STATUS.get(outcome.error_type or "", 400))

    data = outcome.data
    body.entities = [data.nick.name, data.mom.name, data.poppy.name]
    body.defaulted_fields = list(data.nick.defaulted_fields)
    return _json(body.model_dump())


@app.delete("/sessions/{session_id}")
def reset_session(session_id: str):
    session = SESSIONS.pop(session_id, None)
    if session is not None:
        session.clear()
    return _json({"session_id": session_id, "cleared": session is not None})


@app.post("/sessions/{session_id}/overview")
def overview(session_id: str, prices: MarketPricesModel | None = None):
    market = _market(prices)
    return _page("overview", session_id, lambda data: compute_overview(data, market))


@app.post("/sessions/{session_id}/debt")
def debt(session_id: str, prices: MarketPricesModel | None = None):
    market = _market(prices)
    return _page("debt", session_id, lambda data: compute_debt(data, market))


@app.post("/sessions/{session_id}/liquidity")
def liquidity(session_id: str, prices: MarketPricesModel | None = None):
    market = _market(prices)
    return _page("liquidity", session_id, lambda data: compute_liquidity(data, market))


@app.post("/sessions/{session_id}/assets")
def assets(session_id: str, prices: MarketPricesModel | None = None, top_n: int = Query(default=15)):
    market = _market(prices)
    return _page("assets", session_id, lambda data: compute_assets(data, market, top_n=top_n))


@app.post("/sessions/{session_id}/bitcoin")
def bitcoin(session_id: str, prices: MarketPricesModel | None = None):
    market = _market(prices)
    return _page("bitcoin", session_id, lambda data: compute_bitcoin(data, market))


@app.post("/sessions/{session_id}/stress")
def stress(session_id: str, prices: MarketPricesModel | None = None):
    market = _market(prices)
    return _page("stress", session_id, lambda data: compute_stress(data, market))


@app.post("/sessions/{session_id}/family")
def family(session_id: str):
    return _page("family", session_id, compute_family)


@app.post("/sessions/{session_id}/export/properties")
def export_properties(session_id: str, prices: MarketPricesModel | None = None):
    try:
        data = _session_data(session_id)
    except NoDataLoadedError as exc:
        return _error(exc, 404)
    export_df = property_table(data, _market(prices)).drop(columns=["key"])
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=properties.csv"})
