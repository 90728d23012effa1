"""APScheduler job for the recurring result-check sweep."""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from lottery_optimizer.services.result_checker import ResultChecker

SWEEP_JOB_ID = "result_check_sweep"

_scheduler: AsyncIOScheduler | None = None


async def _run_sweep(checker: ResultChecker):
    """Run one sweep; failures are logged so the next run still happens."""
    try:
        await checker.check_all_pending()
    except Exception as e:
        logger.error("Scheduled result check failed: {}", e)


def start_scheduler(
    checker: ResultChecker,
    interval_hours: float = 6.0,
    jitter_seconds: int = 0,
):
    """Start the APScheduler with the sweep on a fixed interval."""
    global _scheduler
    if _scheduler is not None:
        logger.warning("Result check sweep already scheduled, ignoring second start")
        return

    _scheduler = AsyncIOScheduler()

    _scheduler.add_job(
        _run_sweep, "interval",
        args=[checker],
        hours=interval_hours,
        jitter=jitter_seconds or None,
        id=SWEEP_JOB_ID,
        coalesce=True,
        max_instances=1,
    )

    _scheduler.start()
    logger.info(
        "Result check sweep every {}h (retry errored: {}, concurrency: {})",
        interval_hours, checker.retry_errored, checker.concurrency,
    )


def stop_scheduler():
    """Shut down the sweep scheduler without waiting for a running sweep."""
    global _scheduler
    if _scheduler is None:
        return

    _scheduler.shutdown(wait=False)
    _scheduler = None
    logger.info("Result check sweep stopped")


def get_scheduler_status() -> dict:
    """Describe the sweep job: interval, next run and the checker's retry policy."""
    job = _scheduler.get_job(SWEEP_JOB_ID) if _scheduler else None
    if job is None:
        return {"running": False, "job_id": SWEEP_JOB_ID}

    checker = job.args[0]
    return {
        "running": True,
        "job_id": job.id,
        "interval_hours": job.trigger.interval.total_seconds() / 3600,
        "jitter_seconds": job.trigger.jitter or 0,
        "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
        "retry_errored": checker.retry_errored,
        "concurrency": checker.concurrency,
    }
