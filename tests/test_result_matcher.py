"""
Tests for matching a ticket against a draw.
"""

import pytest

from lottery_optimizer.lottery.rules import LotteryType
from lottery_optimizer.services.result_matcher import find_matches, match_ticket


class TestFindMatches:
    def test_sorted_intersection(self):
        assert find_matches([9, 3, 1, 7], [7, 2, 1, 9]) == [1, 7, 9]

    def test_no_common_numbers(self):
        assert find_matches([1, 2, 3], [4, 5, 6]) == []


class TestMegaSena:
    """Mega-Sena tiers: Sena, Quina, Quadra."""

    def test_six_hits_is_sena(self, build_mega_sena_draw):
        result = match_ticket(LotteryType.MEGA_SENA, [1, 2, 3, 4, 5, 6], build_mega_sena_draw())

        assert result.hit_count == 6
        assert result.matches == [1, 2, 3, 4, 5, 6]
        assert result.prize == "Sena"
        assert result.prize_amount == 50_000_000.0
        assert result.is_winner is True

    def test_three_hits_wins_nothing(self, build_mega_sena_draw):
        result = match_ticket(LotteryType.MEGA_SENA, [1, 2, 3, 7, 8, 9], build_mega_sena_draw())

        assert result.hit_count == 3
        assert result.matches == [1, 2, 3]
        assert result.prize == "3 acertos"
        assert result.prize_amount == 0.0
        assert result.is_winner is False

    @pytest.mark.parametrize("numbers,label,amount", [
        ([1, 2, 3, 4, 5, 60], "Quina", 50_000.0),
        ([1, 2, 3, 4, 59, 60], "Quadra", 1_000.0),
    ])
    def test_lower_tiers(self, build_mega_sena_draw, numbers, label, amount):
        result = match_ticket(LotteryType.MEGA_SENA, numbers, build_mega_sena_draw())

        assert result.prize == label
        assert result.prize_amount == amount
        assert result.is_winner is True

    def test_order_of_numbers_does_not_matter(self, build_mega_sena_draw):
        draw = build_mega_sena_draw(numbers=(6, 5, 4, 3, 2, 1))
        a = match_ticket(LotteryType.MEGA_SENA, [1, 2, 3, 4, 5, 6], draw)
        b = match_ticket(LotteryType.MEGA_SENA, [6, 4, 2, 5, 3, 1], draw)
        assert a == b

    def test_draw_details_copied(self, build_mega_sena_draw):
        draw = build_mega_sena_draw(contest=2750, numbers=(10, 20, 30, 40, 50, 60))
        result = match_ticket(LotteryType.MEGA_SENA, [10, 11, 12, 13, 14, 15], draw)

        assert result.contest_number == 2750
        assert result.draw_date == draw.draw_date
        assert result.drawn_numbers == [10, 20, 30, 40, 50, 60]

    def test_bigger_ticket(self, build_mega_sena_draw):
        result = match_ticket(LotteryType.MEGA_SENA, list(range(1, 16)), build_mega_sena_draw())
        assert result.hit_count == 6
        assert result.is_winner is True

    def test_missing_tier_entry_pays_nothing(self, build_mega_sena_draw):
        draw = build_mega_sena_draw()
        draw.prize_tiers = [t for t in draw.prize_tiers if t.description != "Quina"]

        result = match_ticket(LotteryType.MEGA_SENA, [1, 2, 3, 4, 5, 60], draw)

        assert result.hit_count == 5
        assert result.prize_amount == 0.0
        assert result.is_winner is False


class TestLotofacil:
    """Lotofacil tiers: 11 to 15 hits."""

    def test_ten_hits_never_wins(self, build_lotofacil_draw):
        ticket = list(range(1, 11)) + [16, 17, 18, 19, 20]
        result = match_ticket(LotteryType.LOTOFACIL, ticket, build_lotofacil_draw())

        assert result.hit_count == 10
        assert result.is_winner is False
        assert result.prize_amount == 0.0

    def test_ten_hits_ignores_tier_list(self, build_lotofacil_draw):
        draw = build_lotofacil_draw(tiers=[("10 acertos", 99.0), ("11 acertos", 6.0)])
        ticket = list(range(1, 11)) + [16, 17, 18, 19, 20]

        result = match_ticket(LotteryType.LOTOFACIL, ticket, draw)
        assert result.is_winner is False

    def test_fourteen_hits(self, build_lotofacil_draw):
        ticket = list(range(1, 15)) + [20]
        result = match_ticket(LotteryType.LOTOFACIL, ticket, build_lotofacil_draw())

        assert result.hit_count == 14
        assert result.prize == "14 acertos"
        assert result.prize_amount == 1_800.0
        assert result.is_winner is True

    @pytest.mark.parametrize("description", ["11 pontos", "Faixa 5 (11 pontos)"])
    def test_alternative_tier_spellings(self, build_lotofacil_draw, description):
        draw = build_lotofacil_draw(tiers=[(description, 7.0)])
        ticket = list(range(1, 12)) + [16, 17, 18, 19]

        result = match_ticket(LotteryType.LOTOFACIL, ticket, draw)

        assert result.hit_count == 11
        assert result.prize_amount == 7.0
        assert result.is_winner is True
