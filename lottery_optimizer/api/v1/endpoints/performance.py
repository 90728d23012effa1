"""Performance analytics API endpoints."""

from fastapi import APIRouter, Depends

from lottery_optimizer.api.deps import get_aggregator
from lottery_optimizer.lottery.rules import LotteryType
from lottery_optimizer.schemas.performance import NumberFrequency, PerformanceMetrics
from lottery_optimizer.services.performance_service import PerformanceAggregator

router = APIRouter()


@router.get("", response_model=PerformanceMetrics)
async def performance_metrics(aggregator: PerformanceAggregator = Depends(get_aggregator)):
    """ROI, win rate, streaks and trends over all saved tickets."""
    return await aggregator.compute_metrics()


@router.get("/{lottery_type}/numbers", response_model=list[NumberFrequency])
async def number_frequency(
    lottery_type: LotteryType,
    aggregator: PerformanceAggregator = Depends(get_aggregator),
):
    """How often each number was played, with hot/cold flags."""
    return await aggregator.number_frequency_analysis(lottery_type)
