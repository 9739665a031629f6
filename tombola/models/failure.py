"""
Error types for programming-error conditions.

The game core raises nothing user-facing: bad lookups degrade to empty
results and bad toggles are ignored. What remains here are invariant
violations, which are bugs to be caught by tests rather than handled.
"""


class InvariantViolationError(Exception):
    """Base class for broken structural invariants."""


class CardLayoutError(InvariantViolationError):
    """
    Raised when a cartella breaks a layout rule.

    The generator must never expose such a card; seeing this error means
    the generator itself is wrong.
    """

    def __init__(self, card_id: int, reason: str):
        self.card_id = card_id
        self.reason = reason
        super().__init__(f"Cartella {card_id} has an invalid layout: {reason}")
