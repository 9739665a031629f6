from dataclasses import dataclass
from enum import Enum

MIN_NUMBER = 1
MAX_NUMBER = 90
TOTAL_NUMBERS = MAX_NUMBER - MIN_NUMBER + 1

EMPTY_CELL = 0

CARD_ROWS = 3
BOARD_CARD_COLUMNS = 5
PLAYER_CARD_COLUMNS = 9
NUMBERS_PER_ROW = 5
NUMBERS_PER_CARD = CARD_ROWS * NUMBERS_PER_ROW


class GameMode(str, Enum):
    """How the game is being played."""

    TABELLONE = "tabellone"  # caller draws against the shared board
    PLAYER = "player"  # player marks personal cartelle


@dataclass(frozen=True, slots=True)
class NumberPosition:
    """Where a number sits on the tabellone."""

    card_id: int
    row: int
    col: int


@dataclass(frozen=True)
class CartellaData:
    """
    A single cartella (game card).

    Attributes:
        id: Identifier, unique within one generation batch
        numbers: Grid of rows; 0 marks an empty cell
        start_row: Row offset on the tabellone (0 for player cards)
        start_col: Column offset on the tabellone (0 for player cards)
    """

    id: int
    numbers: tuple[tuple[int, ...], ...]
    start_row: int = 0
    start_col: int = 0

    def row_numbers(self, row_index: int) -> list[int]:
        """Populated numbers in a row, or [] if the row does not exist."""
        if not 0 <= row_index < len(self.numbers):
            return []
        return [n for n in self.numbers[row_index] if n != EMPTY_CELL]

    def all_numbers(self) -> list[int]:
        """Every populated number on the card, row by row."""
        return [n for row in self.numbers for n in row if n != EMPTY_CELL]

    def column_numbers(self, col_index: int) -> list[int]:
        """Populated numbers in a column, top to bottom."""
        return [
            row[col_index]
            for row in self.numbers
            if 0 <= col_index < len(row) and row[col_index] != EMPTY_CELL
        ]
