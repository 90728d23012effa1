"""FastAPI application entry point."""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from lottery_optimizer.config import settings
from lottery_optimizer.db.engine import async_session_factory, engine, init_db
from lottery_optimizer.scraper.caixa_client import CaixaClient
from lottery_optimizer.services.performance_service import PerformanceAggregator
from lottery_optimizer.services.result_checker import ResultChecker
from lottery_optimizer.services.ticket_store import TicketStore


def configure_logging():
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if settings.DEBUG else "INFO")
    settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
    logger.add(settings.LOG_DIR / "app.log", rotation="10 MB", retention="7 days", level="INFO")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    configure_logging()
    logger.info("Starting {} ...", settings.APP_NAME)

    await init_db(engine)

    store = TicketStore(async_session_factory)
    draw_source = CaixaClient(settings.DATA_SOURCE_URL, timeout=settings.DRAW_FETCH_TIMEOUT)
    app.state.store = store
    app.state.checker = ResultChecker(
        store,
        draw_source,
        retry_errored=settings.RETRY_ERRORED_ON_SWEEP,
        concurrency=settings.SWEEP_CONCURRENCY,
    )
    app.state.aggregator = PerformanceAggregator(store, streak_order=settings.STREAK_ORDER)

    # Start the recurring result check if enabled
    if settings.RESULT_CHECK_ENABLED:
        from lottery_optimizer.scraper.scheduler import start_scheduler
        start_scheduler(
            app.state.checker,
            interval_hours=settings.RESULT_CHECK_INTERVAL_HOURS,
            jitter_seconds=settings.RESULT_CHECK_JITTER_SECONDS,
        )

    yield

    # Shutdown
    if settings.RESULT_CHECK_ENABLED:
        from lottery_optimizer.scraper.scheduler import stop_scheduler
        stop_scheduler()

    await engine.dispose()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Saved lottery tickets, result checking and performance tracking",
    lifespan=lifespan,
)

# Include API routers
from lottery_optimizer.api.v1.router import api_router  # noqa: E402
app.include_router(api_router, prefix="/api/v1")
