"""Result checking API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from lottery_optimizer.api.deps import get_checker
from lottery_optimizer.exceptions import DrawFetchError, TicketNotFoundError
from lottery_optimizer.schemas.ticket import SweepReport
from lottery_optimizer.scraper.scheduler import get_scheduler_status
from lottery_optimizer.services.result_checker import ResultChecker

router = APIRouter()

RETRY_LATER = "Could not verify yet, will retry"
RETRY_MANUALLY = "Verification failed, please retry manually"


@router.post("/check-pending", response_model=SweepReport)
async def check_pending(checker: ResultChecker = Depends(get_checker)):
    """Check every pending ticket now."""
    return await checker.check_all_pending()


@router.post("/{ticket_id}/check")
async def check_ticket(ticket_id: str, checker: ResultChecker = Depends(get_checker)):
    """Check one ticket against its contest's official draw."""
    try:
        result = await checker.check_one(ticket_id)
    except TicketNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DrawFetchError as e:
        return {
            "success": False,
            "status": "error",
            "message": RETRY_MANUALLY,
            "error": str(e),
        }

    if result is None:
        return {"success": True, "status": "pending", "message": RETRY_LATER}

    return {
        "success": True,
        "status": "checked",
        "result": result,
        "message": f"Result checked: {result.hit_count} hits",
    }


@router.get("/scheduler")
async def scheduler_status():
    """Recurring sweep job and its policy."""
    return get_scheduler_status()
