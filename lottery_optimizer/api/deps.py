"""Dependency injection for FastAPI."""

from fastapi import Request

from lottery_optimizer.services.performance_service import PerformanceAggregator
from lottery_optimizer.services.result_checker import ResultChecker
from lottery_optimizer.services.ticket_store import TicketStore


def get_store(request: Request) -> TicketStore:
    """Ticket store wired at startup."""
    return request.app.state.store


def get_checker(request: Request) -> ResultChecker:
    return request.app.state.checker


def get_aggregator(request: Request) -> PerformanceAggregator:
    return request.app.state.aggregator
