"""
Flashcard deck navigation.

The deck is a carousel: ``next()`` past the last card wraps to the first and
``previous()`` before the first wraps to the last.  Moving always shows the
question side again.
"""

from __future__ import annotations

from typing import Optional

from core.models import BLANK_MARKER, Flashcard


def split_blanks(question: str) -> list[tuple[str, bool]]:
    """Split a fill-up question into ``(segment, is_blank)`` pairs.

    Examples:
        >>> split_blanks("The ___ declared independence.")
        [('The ', False), ('___', True), (' declared independence.', False)]
    """
    parts = question.split(BLANK_MARKER)
    segments: list[tuple[str, bool]] = []
    for i, part in enumerate(parts):
        if part:
            segments.append((part, False))
        if i < len(parts) - 1:
            segments.append((BLANK_MARKER, True))
    return segments


def type_label(card: Flashcard) -> str:
    """Human-readable card type, e.g. ``"fill up"`` for ``fill_up``."""
    return card.type.replace("_", " ")


class FlashcardDeck:
    """Current card and flip state for a generated deck."""

    def __init__(self, cards: list[Flashcard]) -> None:
        self.cards = cards
        self.index = 0
        self.flipped = False

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def card(self) -> Optional[Flashcard]:
        """The card on display, or ``None`` for an empty deck."""
        if 0 <= self.index < len(self.cards):
            return self.cards[self.index]
        return None

    def flip(self) -> None:
        self.flipped = not self.flipped

    def next(self) -> None:
        self.flipped = False
        self.index = (self.index + 1) % (len(self.cards) or 1)

    def previous(self) -> None:
        self.flipped = False
        count = len(self.cards) or 1
        self.index = (self.index - 1 + count) % count
