"""Draw source abstract class."""

from abc import ABC, abstractmethod

from lottery_optimizer.lottery.rules import LotteryType
from lottery_optimizer.schemas.lottery import DrawResult


class DrawSource(ABC):
    """Abstract base for anything that can look up an official draw."""

    @abstractmethod
    async def fetch_draw(self, lottery_type: LotteryType, contest_number: int) -> DrawResult:
        """Return the draw for ``contest_number``.

        Raises:
            DrawNotAvailableError: the contest has not been drawn yet.
            DrawFetchError: the source failed or answered with garbage.
        """
        ...
