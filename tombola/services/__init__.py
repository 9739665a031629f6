"""
Tombola services.

Cartella layouts, prize detection and the game session that ties them to
input events.
"""

from tombola.services.card_layout import (
    build_board_cards,
    decade_range,
    generate_player_cards,
    get_numbers_in_card_row,
    number_position_map,
    row_for_number,
    validate_player_card,
)
from tombola.services.game_session import GameSession, PrizeListener, SessionState
from tombola.services.prize_engine import (
    check_prize_in_row,
    check_prizes,
    recheck_prizes,
    row_prize_status,
)
from tombola.services.prize_names import Language, get_prize_name, prize_message

__all__ = [
    "GameSession",
    "Language",
    "PrizeListener",
    "SessionState",
    "build_board_cards",
    "check_prize_in_row",
    "check_prizes",
    "decade_range",
    "generate_player_cards",
    "get_numbers_in_card_row",
    "get_prize_name",
    "number_position_map",
    "prize_message",
    "recheck_prizes",
    "row_for_number",
    "row_prize_status",
    "validate_player_card",
]
