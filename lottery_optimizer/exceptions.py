"""Exception hierarchy for ticket persistence and result checking."""


class LotteryOptimizerError(Exception):
    """Base class for all application errors."""


class TicketValidationError(LotteryOptimizerError):
    """Ticket numbers violate the lottery's count, range or uniqueness rules."""


class UnsupportedLotteryError(TicketValidationError):
    """Lottery type has no registered rules."""


class TicketNotFoundError(LotteryOptimizerError):
    """No saved ticket exists with the given id."""

    def __init__(self, ticket_id: str):
        super().__init__(f"Ticket {ticket_id} not found")
        self.ticket_id = ticket_id


class DrawFetchError(LotteryOptimizerError):
    """Draw source unreachable, timed out, or returned malformed data."""


class DrawNotAvailableError(LotteryOptimizerError):
    """The requested contest has not been drawn yet (or is unknown to the source)."""

    def __init__(self, lottery_type: str, contest_number: int):
        super().__init__(f"Contest {contest_number} of {lottery_type} not drawn yet")
        self.lottery_type = lottery_type
        self.contest_number = contest_number
