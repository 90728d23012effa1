"""Result checker: resolves saved tickets against official draws.

A ticket whose contest has not been drawn yet stays ``pending`` and is picked
up again by the next sweep. A ticket whose lookup fails is marked ``error``;
whether sweeps retry those is the ``retry_errored`` policy, otherwise only an
explicit ``check_one`` moves them forward.
"""

import asyncio
import weakref

from loguru import logger

from lottery_optimizer.exceptions import DrawFetchError, DrawNotAvailableError
from lottery_optimizer.lottery.rules import LotteryType
from lottery_optimizer.schemas.lottery import DrawResult, GameResult
from lottery_optimizer.schemas.ticket import SweepReport, Ticket, TicketStatus
from lottery_optimizer.scraper.base import DrawSource
from lottery_optimizer.services.result_matcher import match_ticket
from lottery_optimizer.services.ticket_store import TicketStore


class ResultChecker:
    def __init__(
        self,
        store: TicketStore,
        draw_source: DrawSource,
        *,
        retry_errored: bool = False,
        concurrency: int = 1,
    ):
        self.store = store
        self.draw_source = draw_source
        self.retry_errored = retry_errored
        self.concurrency = max(1, concurrency)
        # Entries go away once no check holds or waits on the lock
        self._ticket_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    async def check_one(self, ticket_id: str) -> GameResult | None:
        """Check a single ticket by id, whatever its current status.

        Returns None when the draw has not happened yet.

        Raises:
            TicketNotFoundError: unknown id.
            DrawFetchError: the lookup failed; the ticket is now ``error``.
        """
        ticket = await self.store.get(ticket_id)
        return await self.check_ticket(ticket)

    async def check_ticket(
        self,
        ticket: Ticket,
        draw_cache: dict[tuple[LotteryType, int], asyncio.Future] | None = None,
    ) -> GameResult | None:
        lock = self._ticket_locks.get(ticket.id)
        if lock is None:
            lock = self._ticket_locks[ticket.id] = asyncio.Lock()

        async with lock:
            try:
                draw = await self._get_draw(ticket.lottery_type, ticket.contest_number, draw_cache)
            except DrawFetchError as e:
                logger.error("Could not check ticket {}: {}", ticket.id, e)
                await self.store.update_status(ticket.id, TicketStatus.ERROR)
                raise

            if draw is None:
                logger.debug(
                    "Contest {} of {} not drawn yet, ticket {} stays pending",
                    ticket.contest_number, ticket.lottery_type.value, ticket.id,
                )
                return None

            result = match_ticket(ticket.lottery_type, ticket.numbers, draw)
            await self.store.update_status(ticket.id, TicketStatus.CHECKED, result)

        logger.info(
            "Ticket {} checked: {} hits, {} (R$ {:.2f})",
            ticket.id, result.hit_count, result.prize, result.prize_amount,
        )
        return result

    async def _get_draw(
        self,
        lottery_type: LotteryType,
        contest_number: int,
        draw_cache: dict[tuple[LotteryType, int], asyncio.Future] | None,
    ) -> DrawResult | None:
        """Draw for the contest, or None if it is not drawn yet.

        With a cache, the first caller for a contest starts the lookup and
        every later caller awaits that same lookup, even while it is still
        in flight.
        """
        if draw_cache is None:
            return await self._fetch_draw(lottery_type, contest_number)

        key = (lottery_type, contest_number)
        lookup = draw_cache.get(key)
        if lookup is None:
            lookup = draw_cache[key] = asyncio.ensure_future(
                self._fetch_draw(lottery_type, contest_number)
            )
        # Shielded so one cancelled ticket does not cancel the shared lookup
        return await asyncio.shield(lookup)

    async def _fetch_draw(self, lottery_type: LotteryType, contest_number: int) -> DrawResult | None:
        try:
            return await self.draw_source.fetch_draw(lottery_type, contest_number)
        except DrawNotAvailableError:
            return None
        except DrawFetchError:
            raise
        except Exception as e:
            # Anything else from the source counts as a failed lookup
            raise DrawFetchError(
                f"Draw source failed for contest {contest_number}: {e!r}"
            ) from e

    async def check_all_pending(self) -> SweepReport:
        """Check every pending ticket (and errored ones when retrying is on).

        Per-ticket failures are collected in the report; the sweep never
        stops early.
        """
        statuses = [TicketStatus.PENDING]
        if self.retry_errored:
            statuses.append(TicketStatus.ERROR)
        tickets = await self.store.list_by_status(*statuses)

        logger.info("Checking {} saved tickets...", len(tickets))
        report = SweepReport()
        if not tickets:
            return report

        # One lookup per contest for the whole sweep
        draw_cache: dict = {}
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _check(ticket: Ticket) -> None:
            async with semaphore:
                try:
                    result = await self.check_ticket(ticket, draw_cache)
                except DrawFetchError as e:
                    report.failed += 1
                    report.failed_ids.append(ticket.id)
                    report.errors[ticket.id] = str(e)
                    return
                except Exception as e:
                    logger.exception("Unexpected failure checking ticket {}", ticket.id)
                    report.failed += 1
                    report.failed_ids.append(ticket.id)
                    report.errors[ticket.id] = str(e)
                    return
                if result is None:
                    report.still_pending += 1
                else:
                    report.checked += 1

        await asyncio.gather(*(_check(t) for t in tickets))

        logger.info(
            "Sweep done: {} checked, {} still pending, {} failed",
            report.checked, report.still_pending, report.failed,
        )
        return report
