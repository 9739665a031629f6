"""
Game session.

A GameSession is the explicit handle the presentation layer holds for one
game: it owns the cartelle, the active numbers and the prize state, and
turns input events into prize checks and prize notifications.

Lifecycle:

    NO_CARDS --cards_requested--> CARDS_READY
    CARDS_READY --number_toggled / last_toggle_undone / number_unmarked--> CARDS_READY
    CARDS_READY --reset--> CARDS_READY (same cartelle, no numbers)
    CARDS_READY --cards_requested--> CARDS_READY (new cartelle, fresh state)

Adding a number runs one incremental prize check. Taking a number back
(undo or unmark) resets every flag and rechecks from scratch, because any
tier may have depended on the removed number. Tiers awarded again by a
recheck are not announced a second time.
"""

import logging
import random
from collections.abc import Callable
from enum import Enum

from tombola.config import MIN_PLAYER_CARDS
from tombola.models.card import MAX_NUMBER, MIN_NUMBER, TOTAL_NUMBERS, CartellaData, GameMode
from tombola.models.prize import PrizeCheckResult, PrizeFlags, WinningSequence
from tombola.models.snapshot import CardSnapshot, GameSnapshot
from tombola.services.card_layout import build_board_cards, generate_player_cards
from tombola.services.prize_engine import check_prizes, recheck_prizes

logger = logging.getLogger(__name__)

PrizeListener = Callable[[WinningSequence], None]

# Size of the "last draws" panel
DEFAULT_RECENT_LIMIT = 3


class SessionState(str, Enum):
    """Where a session is in its lifecycle."""

    NO_CARDS = "no_cards"
    CARDS_READY = "cards_ready"


class GameSession:
    """
    One game of tombola, in either tabellone or player mode.

    Attributes:
        mode: Current game mode (None until cartelle are requested)
        cards: Cartelle in play
        active_numbers: Drawn or marked numbers, oldest first
        prize_flags: Tiers won so far
        winning_sequences: Evidence for each won tier, for highlighting
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._mode: GameMode | None = None
        self._cards: tuple[CartellaData, ...] = ()
        self._active: list[int] = []
        self._flags = PrizeFlags()
        self._winning_sequences: list[WinningSequence] = []
        self._listeners: list[PrizeListener] = []

    @property
    def mode(self) -> GameMode | None:
        return self._mode

    @property
    def cards(self) -> tuple[CartellaData, ...]:
        return self._cards

    @property
    def active_numbers(self) -> tuple[int, ...]:
        return tuple(self._active)

    @property
    def prize_flags(self) -> PrizeFlags:
        return self._flags

    @property
    def winning_sequences(self) -> tuple[WinningSequence, ...]:
        return tuple(self._winning_sequences)

    @property
    def state(self) -> SessionState:
        return SessionState.CARDS_READY if self._cards else SessionState.NO_CARDS

    def subscribe(self, listener: PrizeListener) -> None:
        """Register a consumer of prize-won notifications."""
        self._listeners.append(listener)

    # --- Input events ---

    def cards_requested(
        self, mode: GameMode | str, count: int = MIN_PLAYER_CARDS
    ) -> tuple[CartellaData, ...]:
        """
        Start a fresh session with new cartelle.

        Tabellone mode always uses the six board cartelle and ignores count.
        Player mode generates count cartelle (clamped to 1-10).
        """
        game_mode = GameMode(mode)

        if game_mode is GameMode.TABELLONE:
            cards = build_board_cards()
        else:
            cards = tuple(generate_player_cards(count, self._rng))

        self._mode = game_mode
        self._cards = cards
        self._clear_progress()

        logger.info("Session started in %s mode with %d cartelle", game_mode.value, len(cards))
        return cards

    def number_toggled(self, number: int) -> tuple[WinningSequence, ...]:
        """
        Make a number active.

        Toggling a number that is already active does nothing.

        Returns:
            Sequences won because of this number
        """
        if not self._cards:
            logger.warning("Ignoring number %d: no cartelle in play", number)
            return ()
        if not MIN_NUMBER <= number <= MAX_NUMBER:
            logger.warning("Ignoring number %d: outside %d-%d", number, MIN_NUMBER, MAX_NUMBER)
            return ()
        if number in self._active:
            return ()

        self._active.append(number)
        result = check_prizes(self._active, self._cards, self._flags)
        self._apply(result)

        for win in result.new_wins:
            self._notify(win)
        return result.new_wins

    def last_toggle_undone(self) -> int | None:
        """
        Take back the most recent number.

        Returns:
            The removed number, or None if nothing was active
        """
        if not self._active:
            return None

        number = self._active.pop()
        self._recheck()
        logger.info("Undid number %d", number)
        return number

    def number_unmarked(self, number: int) -> bool:
        """
        Remove any marked number (player mode only).

        Returns:
            True if the number was active and has been removed
        """
        if self._mode is not GameMode.PLAYER:
            logger.warning("Ignoring unmark of %d: only available in player mode", number)
            return False
        if number not in self._active:
            return False

        self._active.remove(number)
        self._recheck()
        logger.info("Unmarked number %d", number)
        return True

    def draw_number(self) -> int | None:
        """
        Draw a random number from the paniere (tabellone mode only).

        Returns:
            The drawn number, or None once all 90 are out
        """
        if self._mode is not GameMode.TABELLONE:
            logger.warning("Ignoring draw: only available in tabellone mode")
            return None

        drawn = set(self._active)
        available = [n for n in range(MIN_NUMBER, MAX_NUMBER + 1) if n not in drawn]
        if not available:
            return None

        number = self._rng.choice(available)
        self.number_toggled(number)
        return number

    def reset(self) -> None:
        """Clear all numbers and prizes, keeping the same cartelle."""
        self._clear_progress()
        logger.info("Session reset")

    # --- Queries ---

    def remaining_count(self) -> int:
        """Numbers not yet active."""
        return TOTAL_NUMBERS - len(self._active)

    def last_numbers(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[int]:
        """Most recent active numbers, newest first."""
        if limit <= 0:
            return []
        return self._active[::-1][:limit]

    def is_active(self, number: int) -> bool:
        return number in self._active

    def winning_numbers(self) -> set[int]:
        """Numbers belonging to any winning sequence."""
        return {number for seq in self._winning_sequences for number in seq.numbers}

    # --- Snapshots ---

    def to_snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            mode=self._mode,
            cards=[CardSnapshot.from_card(card) for card in self._cards],
            active_numbers=list(self._active),
        )

    @classmethod
    def from_snapshot(
        cls, snapshot: GameSnapshot, rng: random.Random | None = None
    ) -> "GameSession":
        """Rebuild a session; prize state is recomputed from the active numbers."""
        session = cls(rng)
        session._mode = snapshot.mode
        session._cards = tuple(card.to_card() for card in snapshot.cards)
        session._active = list(snapshot.active_numbers)
        session._recheck()
        return session

    # --- Internals ---

    def _apply(self, result: PrizeCheckResult) -> None:
        self._flags = result.flags
        self._winning_sequences.extend(result.new_wins)

    def _recheck(self) -> None:
        """
        Recompute prizes after a number is taken back.

        A tier awarded again keeps its earlier record while every number in
        that record is still active, so highlights do not jump to another row.
        """
        result = recheck_prizes(self._active, self._cards)
        active = set(self._active)
        previous = {seq.prize: seq for seq in self._winning_sequences}

        sequences: list[WinningSequence] = []
        for seq in result.new_wins:
            kept = previous.get(seq.prize)
            if kept is not None and active.issuperset(kept.numbers):
                seq = kept
            sequences.append(seq)

        self._flags = result.flags
        self._winning_sequences = sequences

    def _clear_progress(self) -> None:
        self._active = []
        self._flags = PrizeFlags()
        self._winning_sequences = []

    def _notify(self, win: WinningSequence) -> None:
        for listener in list(self._listeners):
            listener(win)
