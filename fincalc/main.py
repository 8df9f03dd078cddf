"""FastAPI application entry point.

Serves the calculator engine over HTTP on port 8080 (``/api/*``), the
address the calculator frontend expects.

Usage:
    uvicorn fincalc.main:app --host 0.0.0.0 --port 8080 --reload
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fincalc.config import settings
from fincalc.database import close_db, get_session, init_db, is_db_available
from fincalc.errors import InvalidArgumentError, InvalidInputError
from fincalc.models.db_models import PerformanceLog
from fincalc.routers import calculators, formatting, performance
from fincalc.routers.performance import memory_mb, record_response_time, thread_count

# ── Logging ──────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan (startup + shutdown) ────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Financial Calculator API on port %s …", settings.APP_PORT)
    await init_db()
    yield
    await close_db()
    logger.info("Financial Calculator API stopped.")


app = FastAPI(
    title="Financial Calculator API",
    description=(
        "Deterministic calculators for Indian retail investors: SIP, lumpsum, "
        "FD, RD, PPF, EMI, CAGR, retirement, SWP, step-up SIP, SIP per day, "
        "income tax and portfolio return, plus Indian number formatting and "
        "amount-in-words captions."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    expose_headers=["X-Response-Time-Ms"],
)


# ── Request timing ───────────────────────────────────────────────────────

async def _store_performance_log(request: Request, status_code: int, elapsed_ms: float) -> None:
    async with get_session() as session:
        if session is None:
            return
        session.add(
            PerformanceLog(
                endpoint=str(request.url.path),
                method=request.method,
                status_code=status_code,
                response_time_ms=round(elapsed_ms, 2),
                memory_mb=round(memory_mb(), 2),
                threads=thread_count(),
            )
        )


@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
    record_response_time(elapsed_ms)

    try:
        await _store_performance_log(request, response.status_code, elapsed_ms)
    except Exception as exc:
        logger.warning("Could not store performance log for %s: %s", request.url.path, exc)

    return response


# ── Exception handlers ───────────────────────────────────────────────────

@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    """Rejected calculator inputs: one message per offending field."""
    return JSONResponse(
        status_code=422,
        content={"detail": {"message": str(exc), "errors": exc.errors}},
    )


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. Please check the logs."},
    )


app.include_router(calculators.router)
app.include_router(formatting.router)
app.include_router(performance.router)


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "port": settings.APP_PORT,
        "audit": "enabled" if is_db_available() else "disabled",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fincalc.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
    )
