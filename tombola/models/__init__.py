from tombola.models.card import (
    BOARD_CARD_COLUMNS,
    CARD_ROWS,
    EMPTY_CELL,
    MAX_NUMBER,
    MIN_NUMBER,
    NUMBERS_PER_CARD,
    NUMBERS_PER_ROW,
    PLAYER_CARD_COLUMNS,
    TOTAL_NUMBERS,
    CartellaData,
    GameMode,
    NumberPosition,
)
from tombola.models.failure import CardLayoutError, InvariantViolationError
from tombola.models.prize import (
    PRIZE_THRESHOLDS,
    ROW_TIERS_DESCENDING,
    PrizeCheckResult,
    PrizeFlags,
    PrizeTier,
    WinningSequence,
)

__all__ = [
    "BOARD_CARD_COLUMNS",
    "CARD_ROWS",
    "CardLayoutError",
    "CartellaData",
    "EMPTY_CELL",
    "GameMode",
    "InvariantViolationError",
    "MAX_NUMBER",
    "MIN_NUMBER",
    "NUMBERS_PER_CARD",
    "NUMBERS_PER_ROW",
    "NumberPosition",
    "PLAYER_CARD_COLUMNS",
    "PRIZE_THRESHOLDS",
    "PrizeCheckResult",
    "PrizeFlags",
    "PrizeTier",
    "ROW_TIERS_DESCENDING",
    "TOTAL_NUMBERS",
    "WinningSequence",
]
