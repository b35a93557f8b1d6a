"""REST API for the card rankings service."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse, Response

from cardrank.api.schemas import ErrorResponse, RankingsResponse
from cardrank.ingest import UpstreamError
from cardrank.rankings import RankingExportError, RankingService, export_rankings_to_csv


logger = logging.getLogger("uvicorn.error")

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    502: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc) or exc.__class__.__name__})


def create_app(service: RankingService | None = None) -> FastAPI:
    app = FastAPI(title="cardrank")
    app.state.ranking_service = service or RankingService()

    async def _load(*, force: bool, allow_secondaries: bool) -> dict[str, Any] | JSONResponse:
        try:
            return await app.state.ranking_service.rankings(force=force, allow_secondaries=allow_secondaries)
        except UpstreamError as exc:
            logger.warning("Upstream catalog unavailable: %s", exc)
            return _error(502, exc)
        except Exception as exc:
            logger.exception("Ranking computation failed")
            return _error(500, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/rankings", response_model=RankingsResponse, responses=_ERROR_RESPONSES)
    async def rankings(
        force: bool = Query(False),
        allow_secondaries: bool = Query(False),
    ):
        return await _load(force=force, allow_secondaries=allow_secondaries)

    @app.get("/rankings/export.csv", responses=_ERROR_RESPONSES)
    async def rankings_csv(
        allow_secondaries: bool = Query(False),
        limit: int | None = Query(None, ge=0),
    ):
        payload = await _load(force=False, allow_secondaries=allow_secondaries)
        if isinstance(payload, JSONResponse):
            return payload
        try:
            csv_text = export_rankings_to_csv(payload["items"], limit=limit)
        except RankingExportError as exc:
            logger.exception("CSV export failed")
            return _error(500, exc)
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=rankings.csv"},
        )

    return app


__all__ = ["create_app"]
