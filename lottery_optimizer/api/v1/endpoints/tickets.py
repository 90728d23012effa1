"""Saved ticket API endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from lottery_optimizer.api.deps import get_store
from lottery_optimizer.exceptions import TicketNotFoundError, TicketValidationError
from lottery_optimizer.lottery.rules import LotteryType
from lottery_optimizer.schemas.ticket import (
    Ticket,
    TicketCreate,
    TicketFilter,
    TicketStats,
    TicketStatus,
)
from lottery_optimizer.services.ticket_store import TicketStore

router = APIRouter()


@router.post("", response_model=Ticket, status_code=201)
async def create_ticket(request: TicketCreate, store: TicketStore = Depends(get_store)):
    """Save a ticket for later result checking."""
    try:
        return await store.create(request)
    except TicketValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[Ticket])
async def list_tickets(
    lottery_type: LotteryType | None = None,
    status: TicketStatus | None = None,
    from_date: date | None = Query(None, description="expected draw on or after"),
    to_date: date | None = Query(None, description="expected draw on or before"),
    store: TicketStore = Depends(get_store),
):
    """List saved tickets, newest first."""
    ticket_filter = TicketFilter(
        lottery_type=lottery_type, status=status, from_date=from_date, to_date=to_date,
    )
    return await store.list_tickets(ticket_filter)


@router.get("/pending", response_model=list[Ticket])
async def list_pending(store: TicketStore = Depends(get_store)):
    return await store.list_pending()


@router.get("/stats", response_model=TicketStats)
async def ticket_stats(store: TicketStore = Depends(get_store)):
    """Ticket counts per lottery and status."""
    return await store.stats()


@router.get("/{ticket_id}", response_model=Ticket)
async def get_ticket(ticket_id: str, store: TicketStore = Depends(get_store)):
    try:
        return await store.get(ticket_id)
    except TicketNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{ticket_id}")
async def delete_ticket(ticket_id: str, store: TicketStore = Depends(get_store)):
    try:
        await store.delete(ticket_id)
    except TicketNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Ticket deleted"}
