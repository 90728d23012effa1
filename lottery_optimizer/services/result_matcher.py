"""Match a ticket against an official draw and work out the prize tier."""

from collections.abc import Iterable

from loguru import logger

from lottery_optimizer.lottery.rules import LotteryRules, LotteryType, get_rules
from lottery_optimizer.schemas.lottery import DrawResult, GameResult


def find_matches(ticket_numbers: Iterable[int], drawn_numbers: Iterable[int]) -> list[int]:
    """Numbers present in both lists, ascending."""
    return sorted(set(ticket_numbers) & set(drawn_numbers))


def _prize_table(rules: LotteryRules, draw: DrawResult) -> dict[int, float]:
    """Map hit count -> prize per winner from the draw's tier descriptions."""
    table = {}
    for tier in draw.prize_tiers:
        rule = rules.tier_for_label(tier.description)
        if rule is None:
            logger.debug(
                "Unmapped {} tier description '{}' in contest {}",
                rules.name, tier.description, draw.contest_number,
            )
            continue
        table[rule.hits] = tier.prize
    return table


def match_ticket(
    lottery_type: str | LotteryType,
    ticket_numbers: Iterable[int],
    draw: DrawResult,
) -> GameResult:
    """Compute hits, tier and prize for one ticket. Pure: no I/O, no state."""
    rules = get_rules(lottery_type)
    matches = find_matches(ticket_numbers, draw.numbers)
    hit_count = len(matches)

    result = GameResult(
        contest_number=draw.contest_number,
        draw_date=draw.draw_date,
        drawn_numbers=list(draw.numbers),
        matches=matches,
        hit_count=hit_count,
        prize=f"{hit_count} acertos",
    )

    tier = rules.prize_tiers.get(hit_count)
    if tier is None:
        return result

    prize_table = _prize_table(rules, draw)
    if hit_count not in prize_table:
        logger.warning(
            "Contest {} of {} has no prize entry for {} hits; recording zero prize",
            draw.contest_number, rules.name, hit_count,
        )
        return result

    result.prize = tier.label
    result.prize_amount = prize_table[hit_count]
    result.is_winner = True
    return result
