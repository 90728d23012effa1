"""Lottery rules: number counts, ranges, prices and prize-tier label tables.

Everything lottery-specific lives in ``LOTTERY_RULES``. Supporting a new game,
or a new spelling of a tier label reported by the data source, is a table edit.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from math import comb

from lottery_optimizer.exceptions import TicketValidationError, UnsupportedLotteryError


class LotteryType(str, Enum):
    MEGA_SENA = "megasena"
    LOTOFACIL = "lotofacil"

    @classmethod
    def _missing_(cls, value):
        # Older clients send display names or hyphenated ids
        if isinstance(value, str):
            return _ALIASES.get(value.strip().lower())
        return None


_ALIASES = {
    "mega-sena": LotteryType.MEGA_SENA,
    "mega sena": LotteryType.MEGA_SENA,
    "megasena": LotteryType.MEGA_SENA,
    "lotofácil": LotteryType.LOTOFACIL,
    "lotofacil": LotteryType.LOTOFACIL,
}


@dataclass(frozen=True)
class PrizeTierRule:
    """A prize-eligible hit count and the labels the data source uses for it."""

    hits: int
    label: str
    accepted_labels: frozenset[str]


@dataclass(frozen=True)
class LotteryRules:
    name: str
    min_numbers: int
    max_numbers: int
    number_range: int
    base_price: float
    draw_days: tuple[str, ...]
    result_numbers: int
    prize_tiers: Mapping[int, PrizeTierRule] = field(default_factory=dict)

    @property
    def min_prize_hits(self) -> int | None:
        return min(self.prize_tiers) if self.prize_tiers else None

    def tier_for_label(self, description: str) -> PrizeTierRule | None:
        """Resolve a data-source tier description to its tier, if known."""
        normalized = normalize_label(description)
        for tier in self.prize_tiers.values():
            if normalized in tier.accepted_labels:
                return tier
        return None


def normalize_label(label: str) -> str:
    return " ".join(str(label).split())


def _lotofacil_tiers() -> dict[int, PrizeTierRule]:
    tiers = {}
    for band, hits in enumerate(range(15, 10, -1), start=1):
        tiers[hits] = PrizeTierRule(
            hits=hits,
            label=f"{hits} acertos",
            accepted_labels=frozenset({
                f"{hits} acertos",
                f"{hits} pontos",
                f"Faixa {band} ({hits} pontos)",
            }),
        )
    return tiers


LOTTERY_RULES: dict[LotteryType, LotteryRules] = {
    LotteryType.MEGA_SENA: LotteryRules(
        name="Mega-Sena",
        min_numbers=6,
        max_numbers=15,
        number_range=60,
        base_price=5.00,
        draw_days=("wed", "sat"),
        result_numbers=6,
        prize_tiers={
            6: PrizeTierRule(6, "Sena", frozenset({"Sena"})),
            5: PrizeTierRule(5, "Quina", frozenset({"Quina"})),
            4: PrizeTierRule(4, "Quadra", frozenset({"Quadra"})),
        },
    ),
    LotteryType.LOTOFACIL: LotteryRules(
        name="Lotofácil",
        min_numbers=15,
        max_numbers=20,
        number_range=25,
        base_price=3.00,
        draw_days=("mon", "tue", "wed", "thu", "fri", "sat"),
        result_numbers=15,
        prize_tiers=_lotofacil_tiers(),
    ),
}


def parse_lottery_type(value: str | LotteryType) -> LotteryType:
    try:
        return LotteryType(value)
    except ValueError:
        raise UnsupportedLotteryError(f"Unsupported lottery type: {value!r}") from None


def get_rules(lottery_type: str | LotteryType) -> LotteryRules:
    lottery_type = parse_lottery_type(lottery_type)
    try:
        return LOTTERY_RULES[lottery_type]
    except KeyError:
        raise UnsupportedLotteryError(f"No rules registered for {lottery_type.value}") from None


def validate_numbers(lottery_type: str | LotteryType, numbers: Iterable[int]) -> list[int]:
    """Check count, range and uniqueness. Returns the numbers sorted ascending."""
    rules = get_rules(lottery_type)
    numbers = list(numbers)

    if not rules.min_numbers <= len(numbers) <= rules.max_numbers:
        raise TicketValidationError(
            f"{rules.name} tickets need between {rules.min_numbers} and "
            f"{rules.max_numbers} numbers, got {len(numbers)}"
        )

    seen = set()
    for num in numbers:
        if isinstance(num, bool) or not isinstance(num, int):
            raise TicketValidationError(f"Invalid number {num!r}: must be an integer")
        if not 1 <= num <= rules.number_range:
            raise TicketValidationError(
                f"Number {num} invalid for {rules.name}: must be between 1 and {rules.number_range}"
            )
        if num in seen:
            raise TicketValidationError(f"Number {num} repeated in ticket")
        seen.add(num)

    return sorted(numbers)


def calculate_game_cost(lottery_type: str | LotteryType, num_count: int) -> float:
    """Ticket price: base price times C(num_count, min_numbers)."""
    rules = get_rules(lottery_type)
    return round(rules.base_price * comb(num_count, rules.min_numbers), 2)
