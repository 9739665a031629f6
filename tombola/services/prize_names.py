"""
Prize names and celebration messages shown when a tier is won.

Tier names are Italian in both languages; only the surrounding message is
translated.
"""

from enum import Enum

from tombola.config import settings
from tombola.models.prize import PrizeTier, WinningSequence


class Language(str, Enum):
    """Languages the presentation layer can show."""

    EN = "en"
    IT = "it"


PRIZE_NAMES: dict[Language, dict[PrizeTier, str]] = {
    Language.EN: {
        PrizeTier.AMBO: "Ambo",
        PrizeTier.TERNO: "Terno",
        PrizeTier.QUATERNA: "Quaterna",
        PrizeTier.CINQUINA: "Cinquina",
        PrizeTier.TOMBOLA: "Tombola",
    },
    Language.IT: {
        PrizeTier.AMBO: "Ambo",
        PrizeTier.TERNO: "Terno",
        PrizeTier.QUATERNA: "Quaterna",
        PrizeTier.CINQUINA: "Cinquina",
        PrizeTier.TOMBOLA: "Tombola",
    },
}

PRIZE_MESSAGES: dict[Language, str] = {
    Language.EN: "{prize} on cartella {card_id}!",
    Language.IT: "{prize} sulla cartella {card_id}!",
}


def get_prize_name(prize: PrizeTier, language: Language | str | None = None) -> str:
    """Display name of a tier; defaults to the configured language."""
    return PRIZE_NAMES[_resolve_language(language)][prize]


def prize_message(sequence: WinningSequence, language: Language | str | None = None) -> str:
    """Celebration message naming the tier and the cartella it was won on."""
    resolved = _resolve_language(language)
    return PRIZE_MESSAGES[resolved].format(
        prize=get_prize_name(sequence.prize, resolved),
        card_id=sequence.card_id,
    )


def _resolve_language(language: Language | str | None) -> Language:
    # Raises ValueError for unsupported language codes
    return Language(language if language is not None else settings.default_language)
