import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

import rehabreport.models  # noqa: F401  registers all models with Base.metadata
from rehabreport.api.routes.daily_summaries import router as daily_summaries_router
from rehabreport.api.routes.exercise_logs import router as exercise_logs_router
from rehabreport.api.routes.medication_logs import router as medication_logs_router
from rehabreport.api.routes.reports import router as reports_router
from rehabreport.config import get_settings
from rehabreport.database import create_tables, engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await create_tables(engine)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="RehabReport",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(daily_summaries_router)
    app.include_router(exercise_logs_router)
    app.include_router(medication_logs_router)
    app.include_router(reports_router)

    @app.get("/api/system/status")
    async def system_status() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
