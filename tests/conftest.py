import random

import pytest

from tombola.models.card import CartellaData
from tombola.services.card_layout import build_board_cards
from tombola.services.game_session import GameSession


@pytest.fixture
def rng() -> random.Random:
    """Seeded randomness source so generated cartelle are reproducible."""
    return random.Random(1234)


@pytest.fixture
def board_cards() -> tuple[CartellaData, ...]:
    return build_board_cards()


@pytest.fixture
def tabellone_session(rng: random.Random) -> GameSession:
    """Session in tabellone mode with the six board cartelle."""
    session = GameSession(rng=rng)
    session.cards_requested("tabellone")
    return session


@pytest.fixture
def player_card() -> CartellaData:
    """A hand-built valid player cartella."""
    return CartellaData(
        id=1,
        numbers=(
            (1, 0, 22, 0, 41, 0, 63, 0, 83),
            (0, 15, 0, 34, 45, 55, 0, 76, 0),
            (8, 0, 28, 0, 0, 57, 69, 0, 89),
        ),
    )
