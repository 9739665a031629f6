"""
Prize tiers and the records produced when one is won.

Won flags are session-wide: once ambo is won on any cartella, no other
cartella can win ambo until the session is reset or rechecked.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum


class PrizeTier(str, Enum):
    """Prize tiers, from the smallest to the full card."""

    AMBO = "ambo"
    TERNO = "terno"
    QUATERNA = "quaterna"
    CINQUINA = "cinquina"
    TOMBOLA = "tombola"


# Matched numbers needed for each tier
PRIZE_THRESHOLDS: dict[PrizeTier, int] = {
    PrizeTier.AMBO: 2,
    PrizeTier.TERNO: 3,
    PrizeTier.QUATERNA: 4,
    PrizeTier.CINQUINA: 5,
    PrizeTier.TOMBOLA: 15,
}

# Row tiers in the order they are tested: most-full first
ROW_TIERS_DESCENDING: tuple[PrizeTier, ...] = (
    PrizeTier.CINQUINA,
    PrizeTier.QUATERNA,
    PrizeTier.TERNO,
    PrizeTier.AMBO,
)


@dataclass(frozen=True)
class PrizeFlags:
    """Which tiers have been won in the current session."""

    ambo: bool = False
    terno: bool = False
    quaterna: bool = False
    cinquina: bool = False
    tombola: bool = False

    def is_won(self, tier: PrizeTier) -> bool:
        return bool(getattr(self, tier.value))

    def with_won(self, tier: PrizeTier) -> "PrizeFlags":
        """Copy of these flags with one more tier won."""
        return replace(self, **{tier.value: True})

    def won_tiers(self) -> list[PrizeTier]:
        return [PrizeTier(f.name) for f in fields(self) if getattr(self, f.name)]

    def all_won(self) -> bool:
        return all(getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class WinningSequence:
    """
    Evidence for a won tier, used for highlighting.

    Attributes:
        card_id: Cartella the tier was won on
        row_index: Row of the winning numbers (None for tombola)
        numbers: The matched numbers that make up the win
        prize: Tier won
    """

    card_id: int
    row_index: int | None
    numbers: tuple[int, ...]
    prize: PrizeTier


@dataclass(frozen=True)
class PrizeCheckResult:
    """Outcome of one prize check pass."""

    flags: PrizeFlags
    new_wins: tuple[WinningSequence, ...] = ()

    @property
    def headline(self) -> WinningSequence | None:
        """The most-full tier won in this pass, if any."""
        return self.new_wins[0] if self.new_wins else None
