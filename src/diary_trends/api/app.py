"""FastAPI application factory."""

import logging
from datetime import date
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from pydantic import BaseModel

from diary_trends.adapters.pedometer_csv import (
    PedometerImportError,
    parse_pedometer_csv,
)
from diary_trends.app_logging import configure_logging
from diary_trends.config import parse_timezone
from diary_trends.containers import AppContainer
from diary_trends.domain.trends import LookbackWindow


class PedometerUpload(BaseModel):
    """Body of a pedometer export upload."""

    csv_content: str
    timezone: str | None = None


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users/{user_id}/trends")
    async def trends(
        user_id: UUID,
        request: Request,
        window: LookbackWindow = LookbackWindow.SEVEN_DAYS,
    ) -> dict[str, object]:
        """Return correlation, flux zones and balance for the window."""
        state_container: AppContainer = request.app.state.container
        analysis = state_container.trends_service.analyze(user_id, window)
        return {
            "trends": analysis,
            "flux_zone_total": analysis.flux_zones.total,
        }

    @app.get("/users/{user_id}/fasting")
    async def fasting(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the fast in progress and its projected end times."""
        state_container: AppContainer = request.app.state.container
        return {"fasting": state_container.trends_service.fasting(user_id)}

    @app.get("/users/{user_id}/daily-summary")
    async def daily_summary(
        user_id: UUID, request: Request, day: date | None = None
    ) -> dict[str, object]:
        """Return macro totals for a day."""
        state_container: AppContainer = request.app.state.container
        return {"summary": state_container.trends_service.daily_summary(user_id, day)}

    @app.get("/users/{user_id}/hourly-calories")
    async def hourly_calories(
        user_id: UUID,
        request: Request,
        window: LookbackWindow = LookbackWindow.THIRTY_DAYS,
    ) -> dict[str, object]:
        """Return the hour-of-day calorie profile."""
        state_container: AppContainer = request.app.state.container
        return {
            "hours": state_container.trends_service.hourly_profile(user_id, window)
        }

    @app.post("/pedometer/parse")
    async def parse_pedometer(
        upload: PedometerUpload, request: Request
    ) -> dict[str, object]:
        """Parse a pedometer export into daily step samples."""
        state_container: AppContainer = request.app.state.container
        tz = parse_timezone(
            upload.timezone, state_container.settings.default_timezone
        )
        try:
            parsed = parse_pedometer_csv(upload.csv_content, tz)
        except PedometerImportError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        if parsed.skipped:
            logger.info("Pedometer import skipped %d lines", len(parsed.skipped))
        return {"samples": parsed.samples, "skipped": len(parsed.skipped)}

    return app
