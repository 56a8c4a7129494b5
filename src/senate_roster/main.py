from __future__ import annotations

import logging
import sys
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from strawberry.fastapi import GraphQLRouter

from .config import Settings, load_settings
from .errors import InvalidDateError
from .schema import schema
from .service import RosterService, count_by_party

SETTINGS = load_settings()

# ── Configure logging ────────────────────────────────────────────────────────
logging.basicConfig(
    level=SETTINGS.log_level,
    format="%(levelname)s:     %(message)s",
    stream=sys.stderr,
    force=True,
)
LOGGER = logging.getLogger(__name__)


def _iso_timestamp(epoch: float | None) -> str | None:
    if epoch is None:
        return None
    return datetime.fromtimestamp(epoch, tz=timezone.utc).isoformat()


def _service(request: Request) -> RosterService:
    return request.app.state.service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    if settings.prefetch:
        t0 = time.perf_counter()
        roster = await app.state.service.get_roster()
        LOGGER.info(
            "Prefetched %d senators in %.2fs.",
            len(roster),
            time.perf_counter() - t0,
        )
    yield


async def _graphql_context(request: Request) -> dict:
    return {"service": _service(request)}


def create_app(
    settings: Settings | None = None,
    service: RosterService | None = None,
) -> FastAPI:
    """Build the API.  Tests pass their own *service* to avoid network access."""
    settings = settings or SETTINGS
    app = FastAPI(title="Senate Roster", lifespan=lifespan)
    app.state.settings = settings
    app.state.service = service or RosterService.from_settings(settings)

    # ── CORS middleware ──
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ──
    @app.middleware("http")
    async def _request_logging_middleware(request: Request, call_next) -> Response:  # type: ignore[no-untyped-def]
        """Log every request with method, path, and response time."""
        t0 = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - t0) * 1000
        LOGGER.info(
            "%s %s %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.exception_handler(InvalidDateError)
    async def _invalid_date_handler(_request: Request, exc: InvalidDateError) -> JSONResponse:
        LOGGER.warning("Rejected invalid date %r", exc.value)
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid date format. Use YYYY-MM-DD"},
        )

    # ── REST routes ──

    @app.get("/api/senators")
    async def senators(request: Request) -> dict:
        """All current senators."""
        service = _service(request)
        snap, from_cache = await service.snapshot()
        stored = service.cache.snapshot
        return {
            "success": True,
            "count": len(snap.records),
            "data": [r.to_dict() for r in snap.records],
            "cached": from_cache,
            "lastUpdated": _iso_timestamp(stored.fetched_at if stored else None),
        }

    @app.get("/api/senators/tenure/{date}")
    async def senators_with_longer_tenure(date: str, request: Request) -> dict:
        """Senators who assumed office before *date*."""
        roster, longer_serving = await _service(request).tenure_split(date)
        return {
            "success": True,
            "date": date,
            "totalSenators": len(roster),
            "senatorsWithLongerTenure": len(longer_serving),
            "data": [r.to_dict() for r in longer_serving],
        }

    @app.get("/api/senators/parties")
    async def party_breakdown(request: Request) -> dict:
        roster = await _service(request).get_roster()
        return {
            "success": True,
            "total": len(roster),
            "breakdown": count_by_party(roster),
        }

    @app.get("/api/senators/diagnostics")
    async def diagnostics(request: Request) -> dict:
        """Outcome of the most recent extraction attempt."""
        report = _service(request).cache.last_report
        return {
            "success": True,
            "report": report.summary() if report is not None else None,
        }

    @app.post("/api/senators/refresh")
    async def refresh(request: Request) -> dict:
        """Drop the cache and re-extract."""
        service = _service(request)
        snap = await service.refresh()
        return {
            "success": True,
            "message": "Cache refreshed successfully",
            "count": len(snap.records),
            "lastUpdated": _iso_timestamp(snap.fetched_at),
        }

    @app.get("/api/health")
    async def health(request: Request) -> dict:
        """Service health check with cache status."""
        cache = _service(request).cache
        age = cache.age_seconds()
        return {
            "success": True,
            "status": "API is running",
            "cacheStatus": "Cached" if cache.snapshot is not None else "No cache",
            "cacheAge": f"{int(age)} seconds" if age is not None else "N/A",
        }

    app.include_router(GraphQLRouter(schema, context_getter=_graphql_context), prefix="/graphql")
    return app


app = create_app()


def serve() -> None:
    """Run the API under uvicorn (``senate-roster-serve``)."""
    uvicorn.run(
        "senate_roster.main:app",
        host=SETTINGS.host,
        port=SETTINGS.port,
        log_level=SETTINGS.log_level.lower(),
    )
