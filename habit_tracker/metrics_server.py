"""
Event counter service.

Counts (event, page) pairs posted by the frontend and exposes the totals in
Prometheus text format for scraping. Counts live in memory only.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CollectorRegistry, Counter, generate_latest, CONTENT_TYPE_LATEST

from habit_tracker.constants import METRICS_PORT

logger = logging.getLogger("habit_tracker.metrics")


def create_metrics_app(registry: Optional[CollectorRegistry] = None) -> FastAPI:
    """
    Build the counter app with its own registry.

    Args:
        registry: Registry to register the counter in (a fresh one if omitted)
    """
    registry = registry or CollectorRegistry()
    event_counter = Counter(
        "frontend_events",
        "Total number of frontend events",
        labelnames=["event", "page"],
        registry=registry,
    )

    app = FastAPI(title="Frontend Event Counter", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.registry = registry
    app.state.event_counter = event_counter

    @app.post("/track")
    async def track(request: Request):
        """Increment the counter for one (event, page) pair"""
        try:
            payload = await request.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        event = payload.get("event")
        page = payload.get("page")
        if not event or not page or not isinstance(event, str) or not isinstance(page, str):
            logger.warning(f"Rejected track request with payload {payload!r}")
            return PlainTextResponse("Missing event or page", status_code=400)

        event_counter.labels(event=event, page=page).inc()
        return PlainTextResponse("Event tracked", status_code=200)

    @app.get("/metrics")
    async def metrics():
        """Prometheus exposition of all counters"""
        return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_metrics_app()


if __name__ == "__main__":
    import uvicorn
    from habit_tracker.logging_config import configure_logging

    configure_logging()
    logger.info(f"Metrics server listening at http://localhost:{METRICS_PORT}")
    uvicorn.run("habit_tracker.metrics_server:app", host="0.0.0.0", port=METRICS_PORT, reload=False)
