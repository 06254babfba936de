"""
HTTP entry point for the match notifier.

The Supabase database webhook on coincidencias_notificadas POSTs each
inserted row here. Run locally with:

    uv run uvicorn api.main:app --reload
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from notifications.dedupe import RecentDeliveries
from notifications.match_notifier import process_coincidence_event
from shared.db import get_supabase_client
from shared.settings import NotifierSettings, load_settings

logger = logging.getLogger(__name__)


def create_app(
    supabase: Any | None = None, settings: NotifierSettings | None = None
) -> FastAPI:
    """
    Build the FastAPI app.

    The Supabase client and settings are created once at startup unless they
    are passed in, and shared by every request through app.state.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings or load_settings()
        # Raises ValueError when Supabase is not configured, aborting startup
        app.state.supabase = supabase if supabase is not None else get_supabase_client()
        app.state.recent_deliveries = RecentDeliveries(
            app.state.settings.dedupe_ttl_seconds
        )
        logger.info(
            "match notifier started propagate_delivery_errors=%s dedupe_ttl_seconds=%s",
            app.state.settings.propagate_delivery_errors,
            app.state.settings.dedupe_ttl_seconds,
        )
        yield

    app = FastAPI(title="FiruFinds Match Notifier", lifespan=lifespan)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        started_at = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started_at) * 1000.0
        logger.info(
            "http request method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/")
    @app.post("/send-match-notification")
    async def send_match_notification(request: Request) -> JSONResponse:
        body = await request.body()
        status, content = await run_in_threadpool(
            process_coincidence_event,
            body,
            request.app.state.supabase,
            request.app.state.settings,
            request.app.state.recent_deliveries,
        )
        return JSONResponse(status_code=status, content=content)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
