"""
Serializable snapshot of a game session.

Only what cannot be derived is kept: the mode, the cartelle and the active
numbers in toggle order. Prize flags and winning sequences are recomputed
when a snapshot is restored.
"""

from pydantic import BaseModel, Field, field_validator

from tombola.models.card import MAX_NUMBER, MIN_NUMBER, CartellaData, GameMode


class CardSnapshot(BaseModel):
    """A cartella in plain lists."""

    id: int = Field(..., ge=1)
    numbers: list[list[int]]
    start_row: int = 0
    start_col: int = 0

    @classmethod
    def from_card(cls, card: CartellaData) -> "CardSnapshot":
        return cls(
            id=card.id,
            numbers=[list(row) for row in card.numbers],
            start_row=card.start_row,
            start_col=card.start_col,
        )

    def to_card(self) -> CartellaData:
        return CartellaData(
            id=self.id,
            numbers=tuple(tuple(row) for row in self.numbers),
            start_row=self.start_row,
            start_col=self.start_col,
        )


class GameSnapshot(BaseModel):
    """Everything needed to rebuild a game session."""

    mode: GameMode | None = None
    cards: list[CardSnapshot] = Field(default_factory=list)
    active_numbers: list[int] = Field(default_factory=list)

    @field_validator("active_numbers")
    @classmethod
    def check_active_numbers(cls, value: list[int]) -> list[int]:
        out_of_range = [n for n in value if not MIN_NUMBER <= n <= MAX_NUMBER]
        if out_of_range:
            raise ValueError(f"Numbers outside {MIN_NUMBER}-{MAX_NUMBER}: {out_of_range}")
        if len(set(value)) != len(value):
            raise ValueError("Active numbers must not repeat")
        return value
