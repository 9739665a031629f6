"""
Prize detection.

Given the active numbers and the cartelle in play, decide which prize tiers
are newly won. The engine is pure: inputs are never mutated and the same
inputs always give the same result, so it can be re-run from scratch on any
prefix of the number history (which is how undo and unmark are handled).

Scan order:
1. Cartelle in the order given
2. Per cartella, tombola first, then each row top to bottom
3. Per row, cinquina -> quaterna -> terno -> ambo

Every tier found in one pass is reported, most-full tier first. Wins of
equal weight keep scan order. A tier already won is never reported again
and never un-won here.
"""

import logging
from collections.abc import Collection, Iterable, Sequence

from tombola.models.card import CartellaData
from tombola.models.prize import (
    PRIZE_THRESHOLDS,
    ROW_TIERS_DESCENDING,
    PrizeCheckResult,
    PrizeFlags,
    PrizeTier,
    WinningSequence,
)
from tombola.services.card_layout import get_numbers_in_card_row

logger = logging.getLogger(__name__)


def check_prizes(
    active_numbers: Iterable[int],
    cards: Sequence[CartellaData],
    previous_flags: PrizeFlags | None = None,
) -> PrizeCheckResult:
    """
    Find the prize tiers newly won by the current active numbers.

    Args:
        active_numbers: Numbers drawn (tabellone) or marked (player)
        cards: Cartelle in play
        previous_flags: Tiers already won this session

    Returns:
        Updated flags and the newly won sequences, most-full tier first
    """
    flags = previous_flags if previous_flags is not None else PrizeFlags()
    result = _scan(active_numbers, cards, flags)

    for win in result.new_wins:
        logger.info(
            "Prize %s won on cartella %d (row %s): %s",
            win.prize.value,
            win.card_id,
            win.row_index,
            list(win.numbers),
        )

    return result


def recheck_prizes(
    active_numbers: Iterable[int], cards: Sequence[CartellaData]
) -> PrizeCheckResult:
    """
    Evaluate all prizes from scratch.

    Used after a number is taken back: any tier may have depended on it,
    so every flag starts over and tiers still valid are awarded again.
    """
    result = _scan(active_numbers, cards, PrizeFlags())
    logger.debug("Recheck kept tiers: %s", [tier.value for tier in result.flags.won_tiers()])
    return result


def row_prize_status(
    row_numbers: Sequence[int], active_numbers: Collection[int]
) -> dict[PrizeTier, bool]:
    """Which row tiers a single row currently satisfies."""
    matched_count = sum(1 for number in row_numbers if number in active_numbers)
    return {
        tier: _row_qualifies(tier, len(row_numbers), matched_count)
        for tier in reversed(ROW_TIERS_DESCENDING)
    }


def check_prize_in_row(
    card_id: int, row_index: int, active_numbers: Collection[int]
) -> dict[PrizeTier, bool]:
    """
    Which row tiers a tabellone row currently satisfies.

    Unknown cartelle or rows have no numbers and so satisfy nothing.
    """
    return row_prize_status(get_numbers_in_card_row(card_id, row_index), active_numbers)


def _row_qualifies(tier: PrizeTier, row_size: int, matched_count: int) -> bool:
    threshold = PRIZE_THRESHOLDS[tier]
    # Cinquina needs the whole row, and a row has exactly 5 numbers
    if tier is PrizeTier.CINQUINA:
        return row_size == threshold and matched_count == threshold
    return row_size >= threshold and matched_count >= threshold


def _scan(
    active_numbers: Iterable[int], cards: Sequence[CartellaData], flags: PrizeFlags
) -> PrizeCheckResult:
    active = set(active_numbers)
    new_wins: list[WinningSequence] = []

    for card in cards:
        if flags.all_won():
            break

        all_numbers = card.all_numbers()
        if not all_numbers:
            continue

        if not flags.tombola and all(number in active for number in all_numbers):
            flags = flags.with_won(PrizeTier.TOMBOLA)
            new_wins.append(
                WinningSequence(
                    card_id=card.id,
                    row_index=None,
                    numbers=tuple(all_numbers),
                    prize=PrizeTier.TOMBOLA,
                )
            )

        for row_index in range(len(card.numbers)):
            row_numbers = card.row_numbers(row_index)
            if not row_numbers:
                continue

            matched = tuple(number for number in row_numbers if number in active)
            for tier in ROW_TIERS_DESCENDING:
                if flags.is_won(tier) or not _row_qualifies(tier, len(row_numbers), len(matched)):
                    continue
                flags = flags.with_won(tier)
                new_wins.append(
                    WinningSequence(
                        card_id=card.id, row_index=row_index, numbers=matched, prize=tier
                    )
                )

    # Stable sort: equal tiers keep scan order
    new_wins.sort(key=lambda win: PRIZE_THRESHOLDS[win.prize], reverse=True)
    return PrizeCheckResult(flags=flags, new_wins=tuple(new_wins))
