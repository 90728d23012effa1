"""Aggregate API v1 router."""

from fastapi import APIRouter

from lottery_optimizer.api.v1.endpoints import (
    performance,
    results,
    tickets,
)

api_router = APIRouter()

api_router.include_router(tickets.router, prefix="/tickets", tags=["Tickets"])
api_router.include_router(results.router, prefix="/results", tags=["Results"])
api_router.include_router(performance.router, prefix="/performance", tags=["Performance"])
