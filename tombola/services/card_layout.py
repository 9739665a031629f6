"""
Cartella layouts for both game modes.

Tabellone mode uses the traditional board of 90 numbers (9 rows of 10),
split into a 3x2 arrangement of six fixed 3x5 cartelle.

Player mode uses randomly generated 3x9 cartelle. Every column owns a
decade (1-10, 11-20, ..., 81-90) and every number's row is fixed by its
last digit:

    last digit 0-3 -> row 0
    last digit 4-6 -> row 1
    last digit 7-9 -> row 2

Each row holds exactly 5 numbers and each column between 1 and 3, so a
player cartella always carries 15 numbers.
"""

import logging
import random
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType

from tombola.config import BOARD_CARD_COUNT, MAX_PLAYER_CARDS, MIN_PLAYER_CARDS
from tombola.models.card import (
    BOARD_CARD_COLUMNS,
    CARD_ROWS,
    EMPTY_CELL,
    MAX_NUMBER,
    MIN_NUMBER,
    NUMBERS_PER_CARD,
    NUMBERS_PER_ROW,
    PLAYER_CARD_COLUMNS,
    CartellaData,
    NumberPosition,
)
from tombola.models.failure import CardLayoutError

logger = logging.getLogger(__name__)

# Cartelle side by side on each band of the tabellone
BOARD_CARDS_PER_BAND = 2

# Player cartella row mandated by a number's last digit
LAST_DIGIT_ROWS: dict[int, int] = {
    0: 0,
    1: 0,
    2: 0,
    3: 0,
    4: 1,
    5: 1,
    6: 1,
    7: 2,
    8: 2,
    9: 2,
}


# --- Tabellone ---


@lru_cache(maxsize=1)
def build_board_cards() -> tuple[CartellaData, ...]:
    """
    Build the six fixed cartelle of the tabellone.

    Cartella k starts at board row ((k-1) // 2) * 3 and board column
    ((k-1) % 2) * 5. A board cell holds row * 10 + col + 1, which puts 90
    in the last cell of cartella 6.

    Returns:
        Cartelle 1-6 in id order
    """
    cards: list[CartellaData] = []

    for index in range(BOARD_CARD_COUNT):
        start_row = (index // BOARD_CARDS_PER_BAND) * CARD_ROWS
        start_col = (index % BOARD_CARDS_PER_BAND) * BOARD_CARD_COLUMNS

        numbers = tuple(
            tuple(
                (start_row + row) * 10 + (start_col + col) + 1 for col in range(BOARD_CARD_COLUMNS)
            )
            for row in range(CARD_ROWS)
        )
        cards.append(
            CartellaData(id=index + 1, numbers=numbers, start_row=start_row, start_col=start_col)
        )

    return tuple(cards)


@lru_cache(maxsize=1)
def number_position_map() -> Mapping[int, NumberPosition]:
    """Read-only map of every number 1-90 to its tabellone cartella, row and column."""
    positions: dict[int, NumberPosition] = {}

    for card in build_board_cards():
        for row_index, row in enumerate(card.numbers):
            for col_index, number in enumerate(row):
                positions[number] = NumberPosition(card.id, row_index, col_index)

    return MappingProxyType(positions)


def get_numbers_in_card_row(card_id: int, row_index: int) -> list[int]:
    """
    Get the numbers in one row of a tabellone cartella.

    An unknown card id or row index yields an empty list, so callers can
    treat "no such row" and "row without numbers" the same way.
    """
    if not 1 <= card_id <= BOARD_CARD_COUNT:
        return []
    return build_board_cards()[card_id - 1].row_numbers(row_index)


# --- Player cartelle ---


def row_for_number(number: int) -> int:
    """Row a number must occupy on a player cartella."""
    return LAST_DIGIT_ROWS[number % 10]


def decade_range(col: int) -> range:
    """Numbers allowed in a player cartella column (column 8 ends at 90)."""
    return range(col * 10 + 1, col * 10 + 11)


def generate_player_cards(count: int, rng: random.Random | None = None) -> list[CartellaData]:
    """
    Generate random cartelle for player mode.

    Cartelle are independent of each other: two cartelle in the same batch
    may share numbers.

    Args:
        count: Number of cartelle wanted, clamped to 1-10
        rng: Randomness source (a fresh Random if not given)

    Returns:
        Cartelle with ids 1..count
    """
    valid_count = min(max(MIN_PLAYER_CARDS, count), MAX_PLAYER_CARDS)
    if valid_count != count:
        logger.debug("Requested %d cartelle, clamped to %d", count, valid_count)

    rng = rng if rng is not None else random.Random()
    cards = [_build_player_card(card_id, rng) for card_id in range(1, valid_count + 1)]

    logger.info("Generated %d player cartelle", len(cards))
    return cards


def _build_player_card(card_id: int, rng: random.Random) -> CartellaData:
    """
    Build one player cartella.

    The layout is constructed directly rather than sampled and rejected:
    first decide which columns each row uses, then draw one number per
    populated cell from the values whose last digit belongs to that row.
    """
    row_columns = _choose_row_columns(rng)
    grid = [[EMPTY_CELL] * PLAYER_CARD_COLUMNS for _ in range(CARD_ROWS)]

    for col in range(PLAYER_CARD_COLUMNS):
        rows = [row for row in range(CARD_ROWS) if col in row_columns[row]]
        for row in rows:
            grid[row][col] = rng.choice(_cell_candidates(col, row, alone=len(rows) == 1))

    return CartellaData(id=card_id, numbers=tuple(tuple(row) for row in grid))


def _choose_row_columns(rng: random.Random) -> list[set[int]]:
    """
    Pick the 5 columns used by each row so that every column is used.

    Rows are filled in random order. All but the last pick freely; the last
    row takes every column still uncovered and tops up from the rest.
    Two free rows cover at least 5 columns, leaving at most 4 uncovered.
    """
    columns = range(PLAYER_CARD_COLUMNS)
    row_order = rng.sample(range(CARD_ROWS), CARD_ROWS)
    row_columns: list[set[int]] = [set() for _ in range(CARD_ROWS)]
    covered: set[int] = set()

    for row in row_order[:-1]:
        row_columns[row] = set(rng.sample(columns, NUMBERS_PER_ROW))
        covered |= row_columns[row]

    uncovered = [col for col in columns if col not in covered]
    filler = rng.sample(sorted(covered), NUMBERS_PER_ROW - len(uncovered))
    row_columns[row_order[-1]] = set(uncovered) | set(filler)

    return row_columns


def _cell_candidates(col: int, row: int, alone: bool) -> list[int]:
    """
    Numbers that may fill a cell.

    The decade's closing number (10, 20, ..., 90) belongs to row 0 but is
    larger than anything below it, so it is only usable when it is the
    column's single number.
    """
    return [
        number
        for number in decade_range(col)
        if row_for_number(number) == row and (alone or number % 10 != 0)
    ]


def validate_player_card(card: CartellaData) -> None:
    """
    Check every player cartella layout rule.

    Raises:
        CardLayoutError: On the first rule the cartella breaks
    """
    if len(card.numbers) != CARD_ROWS:
        raise CardLayoutError(card.id, f"expected {CARD_ROWS} rows, got {len(card.numbers)}")

    for row_index, row in enumerate(card.numbers):
        if len(row) != PLAYER_CARD_COLUMNS:
            raise CardLayoutError(
                card.id, f"row {row_index} has {len(row)} columns, expected {PLAYER_CARD_COLUMNS}"
            )
        populated = card.row_numbers(row_index)
        if len(populated) != NUMBERS_PER_ROW:
            raise CardLayoutError(
                card.id, f"row {row_index} has {len(populated)} numbers, expected {NUMBERS_PER_ROW}"
            )

    all_numbers = card.all_numbers()
    if len(all_numbers) != NUMBERS_PER_CARD:
        raise CardLayoutError(card.id, f"has {len(all_numbers)} numbers")
    if len(set(all_numbers)) != len(all_numbers):
        raise CardLayoutError(card.id, "contains duplicate numbers")

    for number in all_numbers:
        if not MIN_NUMBER <= number <= MAX_NUMBER:
            raise CardLayoutError(card.id, f"number {number} is outside 1-90")

    for col in range(PLAYER_CARD_COLUMNS):
        column = card.column_numbers(col)
        if not 1 <= len(column) <= CARD_ROWS:
            raise CardLayoutError(card.id, f"column {col} has {len(column)} numbers")
        if any(a >= b for a, b in zip(column, column[1:])):
            raise CardLayoutError(card.id, f"column {col} is not ascending: {column}")

        allowed = decade_range(col)
        for row_index, row in enumerate(card.numbers):
            number = row[col]
            if number == EMPTY_CELL:
                continue
            if number not in allowed:
                raise CardLayoutError(card.id, f"number {number} does not belong in column {col}")
            expected_row = row_for_number(number)
            if expected_row != row_index:
                raise CardLayoutError(card.id, f"number {number} belongs in row {expected_row}")
