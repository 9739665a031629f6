"""Tests for prize detection."""

import logging
import random

import pytest

from tombola.models.card import CartellaData
from tombola.models.prize import PrizeFlags, PrizeTier, WinningSequence
from tombola.services.card_layout import build_board_cards, generate_player_cards
from tombola.services.prize_engine import (
    check_prize_in_row,
    check_prizes,
    recheck_prizes,
    row_prize_status,
)

NO_ROW_PRIZES = {
    PrizeTier.AMBO: False,
    PrizeTier.TERNO: False,
    PrizeTier.QUATERNA: False,
    PrizeTier.CINQUINA: False,
}


class TestCheckPrizeInRow:
    """Per-row status on the tabellone (cartella 1, row 0 is 1-5)."""

    def test_fewer_than_two_matches(self) -> None:
        assert check_prize_in_row(1, 0, []) == NO_ROW_PRIZES
        assert check_prize_in_row(1, 0, [1]) == NO_ROW_PRIZES
        assert check_prize_in_row(1, 0, [6, 7]) == NO_ROW_PRIZES

    def test_ambo(self) -> None:
        assert check_prize_in_row(1, 0, [1, 3, 6]) == {**NO_ROW_PRIZES, PrizeTier.AMBO: True}

    def test_terno(self) -> None:
        assert check_prize_in_row(1, 0, [1, 3, 5, 7]) == {
            **NO_ROW_PRIZES,
            PrizeTier.AMBO: True,
            PrizeTier.TERNO: True,
        }

    def test_quaterna(self) -> None:
        status = check_prize_in_row(1, 0, [1, 2, 3, 4, 8])

        assert status[PrizeTier.QUATERNA] is True
        assert status[PrizeTier.CINQUINA] is False

    def test_cinquina(self) -> None:
        assert all(check_prize_in_row(1, 0, [1, 2, 3, 4, 5, 9]).values())

    def test_invalid_cartella_or_row(self) -> None:
        assert check_prize_in_row(7, 0, [1, 2]) == NO_ROW_PRIZES
        assert check_prize_in_row(1, 3, [1, 2]) == NO_ROW_PRIZES

    def test_short_row_never_cinquina(self) -> None:
        status = row_prize_status([1, 2, 3, 4], {1, 2, 3, 4})

        assert status[PrizeTier.QUATERNA] is True
        assert status[PrizeTier.CINQUINA] is False


class TestCheckPrizes:
    """Tests for a full prize check pass."""

    def test_no_prizes_below_two_matches_per_row(self, board_cards) -> None:
        # One number from each row of each cartella
        active = [card.numbers[row][0] for card in board_cards for row in range(3)]

        result = check_prizes(active, board_cards)

        assert result.flags == PrizeFlags()
        assert result.new_wins == ()
        assert result.headline is None

    def test_ambo_scenario(self, board_cards) -> None:
        result = check_prizes([1, 3], board_cards)

        assert result.flags == PrizeFlags(ambo=True)
        assert result.new_wins == (
            WinningSequence(card_id=1, row_index=0, numbers=(1, 3), prize=PrizeTier.AMBO),
        )

    def test_terno_scenario(self, board_cards) -> None:
        result = check_prizes([1, 3, 5], board_cards)

        assert result.flags == PrizeFlags(ambo=True, terno=True)

    def test_full_row_wins_all_row_tiers(self, board_cards) -> None:
        result = check_prizes([1, 2, 3, 4, 5], board_cards)

        assert result.flags == PrizeFlags(ambo=True, terno=True, quaterna=True, cinquina=True)
        assert not result.flags.tombola

    def test_most_full_tier_comes_first(self, board_cards) -> None:
        """When several tiers qualify in one pass, they are ordered cinquina first."""
        result = check_prizes([1, 2, 3, 4, 5], board_cards)

        assert [win.prize for win in result.new_wins] == [
            PrizeTier.CINQUINA,
            PrizeTier.QUATERNA,
            PrizeTier.TERNO,
            PrizeTier.AMBO,
        ]
        assert result.headline is not None
        assert result.headline.prize is PrizeTier.CINQUINA

    def test_most_full_tier_comes_first_across_rows(self, board_cards) -> None:
        """An ambo on an earlier row does not outrank a cinquina on a later one."""
        result = check_prizes([1, 2, 11, 12, 13, 14, 15], board_cards)

        assert [win.prize for win in result.new_wins] == [
            PrizeTier.CINQUINA,
            PrizeTier.QUATERNA,
            PrizeTier.TERNO,
            PrizeTier.AMBO,
        ]
        assert result.headline == WinningSequence(
            card_id=1, row_index=1, numbers=(11, 12, 13, 14, 15), prize=PrizeTier.CINQUINA
        )
        assert result.new_wins[-1] == WinningSequence(
            card_id=1, row_index=0, numbers=(1, 2), prize=PrizeTier.AMBO
        )

    def test_tombola_on_full_card(self, board_cards) -> None:
        card_1 = board_cards[0].all_numbers()

        result = check_prizes(card_1, board_cards)

        assert result.flags.all_won()
        assert result.headline == WinningSequence(
            card_id=1, row_index=None, numbers=tuple(card_1), prize=PrizeTier.TOMBOLA
        )

    def test_already_won_tiers_are_not_reported_again(self, board_cards) -> None:
        flags = PrizeFlags(ambo=True)

        result = check_prizes([1, 3, 16, 17], board_cards, flags)

        assert result.flags == flags
        assert result.new_wins == ()

    def test_tiers_are_session_wide(self, board_cards) -> None:
        """Ambo on two cartelle is still one ambo."""
        result = check_prizes([1, 2, 6, 7], board_cards)

        assert [win.prize for win in result.new_wins] == [PrizeTier.AMBO]
        assert result.new_wins[0].card_id == 1

    def test_never_unwins(self, board_cards) -> None:
        flags = PrizeFlags(ambo=True, terno=True, cinquina=True)

        result = check_prizes([], board_cards, flags)

        assert result.flags == flags

    def test_monotonic_as_numbers_accumulate(self, board_cards) -> None:
        rng = random.Random(7)
        order = rng.sample(range(1, 91), 90)
        flags = PrizeFlags()
        won: set[PrizeTier] = set()

        for i in range(1, 91):
            result = check_prizes(order[:i], board_cards, flags)
            assert set(flags.won_tiers()) <= set(result.flags.won_tiers())
            for win in result.new_wins:
                assert win.prize not in won
                won.add(win.prize)
            flags = result.flags

        assert flags.all_won()

    def test_empty_cards_and_rows_are_skipped(self) -> None:
        empty = CartellaData(id=1, numbers=((0, 0, 0), (0, 0, 0), (0, 0, 0)))

        result = check_prizes([1, 2, 3], [empty])

        assert result.flags == PrizeFlags()

    def test_does_not_mutate_inputs(self, board_cards) -> None:
        active = [1, 2, 3]
        flags = PrizeFlags()

        check_prizes(active, board_cards, flags)

        assert active == [1, 2, 3]
        assert flags == PrizeFlags()

    def test_player_cards(self) -> None:
        cards = generate_player_cards(3, random.Random(5))
        target = cards[1]

        result = check_prizes(target.all_numbers(), cards)

        assert result.flags.tombola
        tombola = [win for win in result.new_wins if win.prize is PrizeTier.TOMBOLA]
        assert len(tombola) == 1
        assert set(tombola[0].numbers) == set(target.all_numbers())


class TestRecheckPrizes:
    """Full recheck ignores previous flags."""

    def test_recheck_drops_tiers_no_longer_valid(self, board_cards) -> None:
        result = recheck_prizes([1, 2], board_cards)

        assert result.flags == PrizeFlags(ambo=True)

    def test_recheck_is_idempotent(self, board_cards) -> None:
        active = [1, 2, 3, 17, 18, 19, 20]

        assert recheck_prizes(active, board_cards) == recheck_prizes(active, board_cards)

    def test_recheck_matches_incremental_flags(self) -> None:
        cards = build_board_cards()
        order = random.Random(3).sample(range(1, 91), 40)
        flags = PrizeFlags()
        for i in range(1, len(order) + 1):
            flags = check_prizes(order[:i], cards, flags).flags

        assert recheck_prizes(order, cards).flags == flags

    def test_recheck_logs_below_info(
        self, board_cards, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Tiers awarded again by a recheck are not logged as new wins."""
        with caplog.at_level(logging.INFO, logger="tombola.services.prize_engine"):
            recheck_prizes([1, 2, 3], board_cards)

        assert "won on cartella" not in caplog.text

    def test_incremental_check_logs_wins(
        self, board_cards, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="tombola.services.prize_engine"):
            check_prizes([1, 2], board_cards)

        assert "Prize ambo won on cartella 1" in caplog.text
