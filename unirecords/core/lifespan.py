"""Application lifespan: startup and shutdown.

Composition root for the search service: builds the record source, the
index manager and the search service and stores them on app.state. Routes
reach them through unirecords.api.v1.dependencies; nothing is a module
global.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from unirecords.application.search.index_manager import IndexManager
from unirecords.application.use_cases.search import SearchService
from unirecords.core.config import get_settings
from unirecords.infrastructure.persistence import database
from unirecords.infrastructure.persistence.repositories import SqlRecordSource
from unirecords.shared.telemetry.telemetry import get_telemetry

logger = logging.getLogger(__name__)


async def _refresh_indexes_periodically(
    index_manager: IndexManager, interval_seconds: float
) -> None:
    """Rebuild all indexes every interval_seconds until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        reports = await index_manager.refresh_indexes()
        logger.info(
            "Periodic index refresh: %d/%d types rebuilt",
            sum(1 for r in reports if r.ok),
            len(reports),
        )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: SQL instrumentation (if telemetry active), search
    services, initial index build (if enabled), periodic refresh task (if
    an interval is set). Shutdown order: refresh task cancel, telemetry
    shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    telemetry = get_telemetry()
    engine = database.get_engine()
    if telemetry is not None and engine is not None:
        telemetry.instrument_sqlalchemy(engine)

    index_manager = IndexManager(SqlRecordSource())
    app.state.index_manager = index_manager
    app.state.search_service = SearchService(
        index_manager, suggestion_limit=settings.search_suggestion_limit
    )

    if settings.search_initialize_on_startup:
        reports = await index_manager.initialize_indexes()
        summary = ", ".join(
            f"{r.entity_type.value}={r.record_count if r.ok else 'failed'}"
            for r in reports
        )
        logger.info("Search indexes initialized: %s", summary)

    refresh_task: asyncio.Task[None] | None = None
    if settings.search_index_refresh_interval_seconds > 0:
        refresh_task = asyncio.create_task(
            _refresh_indexes_periodically(
                index_manager, settings.search_index_refresh_interval_seconds
            )
        )
    app.state.index_refresh_task = refresh_task

    yield

    # ---- Shutdown ----
    if refresh_task is not None:
        refresh_task.cancel()
        try:
            await refresh_task
        except asyncio.CancelledError:
            pass
        logger.info("Index refresh task stopped")

    if telemetry is not None:
        telemetry.shutdown()
        logger.info("Telemetry shutdown complete")

    await database.dispose_engine()
    logger.info("Database engine disposed")
