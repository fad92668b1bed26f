"""HTTP API for the age breakdown.

Routes
------
GET /api/health
    Liveness probe.
GET /api/calculate?birthday=YYYY-MM-DD
    Full breakdown of the birthday relative to the server's local "now".

Input errors map to 400, unexpected failures to 500; both use the
``{"error": message}`` envelope.  The summary report is written after the
response in a background task.
"""

import datetime
import json
import logging
import time
import uuid
from pathlib import Path
from typing import Callable

from fastapi import APIRouter, BackgroundTasks, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from age_diff.config import Settings, settings
from age_diff.dates import local_now
from age_diff.engine import compute_age_breakdown
from age_diff.errors import BirthdayInputError, ComputationError
from age_diff.models import AgeResult
from age_diff.rate_limit import RateLimitMiddleware, SlidingWindowRateLimiter
from age_diff.report import write_summary
from age_diff.validation import parse_birthday

logger: logging.Logger = logging.getLogger(__name__)
audit_logger: logging.Logger = logging.getLogger("audit")

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[no-untyped-def]
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[no-untyped-def]
        start = time.monotonic()
        response = await call_next(request)
        logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            (time.monotonic() - start) * 1000,
        )
        return response


def _write_summary_in_background(result: AgeResult, output_dir: Path) -> None:
    try:
        write_summary(result, output_dir)
    except OSError as exc:
        logger.error("Failed to write summary file: %s", exc)


router = APIRouter(prefix="/api")


@router.get("/health")
def health() -> dict[str, str]:
    return {
        "status": "ok",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }


@router.get("/calculate", response_model=AgeResult)
def calculate(
    request: Request,
    background_tasks: BackgroundTasks,
    birthday: str | None = None,
) -> AgeResult:
    """Validate ``birthday`` and return its breakdown relative to now.

    The reference instant is always the server clock; it is never taken from
    the client.
    """
    now = request.app.state.clock()
    birth = parse_birthday(birthday, now)

    request_id = str(uuid.uuid4())
    start = time.monotonic()
    try:
        result = compute_age_breakdown(birth, now)
    except Exception as exc:  # noqa: BLE001; logged here, surfaced as an opaque 500
        logger.exception("Calculation error")
        raise ComputationError() from exc
    latency_ms = round((time.monotonic() - start) * 1000, 2)

    background_tasks.add_task(
        _write_summary_in_background, result, request.app.state.settings.output_dir
    )

    audit_logger.info(
        json.dumps(
            {
                "request_id": request_id,
                "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
                "compute_latency_ms": latency_ms,
                "is_birthday": result.is_birthday,
            }
        )
    )
    return result


async def _input_error_handler(request: Request, exc: BirthdayInputError) -> JSONResponse:
    logger.info("Rejected birthday input: %s", exc.code)
    return JSONResponse({"error": exc.message}, status_code=400)


async def _computation_error_handler(request: Request, exc: ComputationError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=500)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": exc.detail}, status_code=exc.status_code, headers=exc.headers
    )


def create_app(
    app_settings: Settings | None = None,
    clock: Callable[[], datetime.datetime] = local_now,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_settings: Configuration to use.  Defaults to the module-level
            ``age_diff.config.settings``.
        clock: Source of the reference instant for ``/api/calculate``.

    Returns:
        A ready-to-serve FastAPI application.
    """
    app_settings = app_settings or settings

    app = FastAPI(title="AgeDiff", version="1.0.0")
    app.state.settings = app_settings
    app.state.clock = clock

    limiter = SlidingWindowRateLimiter(
        limit=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
    )
    # Last added runs first: access log and security headers wrap the 429 path too.
    app.add_middleware(RateLimitMiddleware, limiter=limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware)

    app.add_exception_handler(BirthdayInputError, _input_error_handler)
    app.add_exception_handler(ComputationError, _computation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    app.include_router(router)
    logger.debug("AgeDiff application created")
    return app


app = create_app()
