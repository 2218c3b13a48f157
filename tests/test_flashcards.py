"""Tests for core/flashcards.py — deck navigation and blank highlighting."""

from __future__ import annotations

import pytest

from core.flashcards import FlashcardDeck, split_blanks, type_label
from core.models import Flashcard


def make_deck(n: int = 3) -> FlashcardDeck:
    return FlashcardDeck(
        [Flashcard(type="qa", question=f"Question {i}?", answer=f"Answer {i}") for i in range(n)]
    )


class TestNavigation:
    def test_starts_on_first_card_unflipped(self):
        deck = make_deck()
        assert deck.index == 0
        assert deck.flipped is False
        assert deck.card.question == "Question 0?"

    def test_next_from_last_wraps_to_first(self):
        deck = make_deck(3)
        deck.next()
        deck.next()
        assert deck.index == 2
        deck.next()
        assert deck.index == 0

    def test_previous_from_first_wraps_to_last(self):
        deck = make_deck(3)
        deck.previous()
        assert deck.index == 2

    def test_moving_shows_question_side(self):
        deck = make_deck()
        deck.flip()
        assert deck.flipped is True
        deck.next()
        assert deck.flipped is False

    def test_flip_toggles(self):
        deck = make_deck()
        deck.flip()
        deck.flip()
        assert deck.flipped is False

    def test_empty_deck_has_no_card(self):
        deck = FlashcardDeck([])
        deck.next()
        deck.previous()
        assert deck.index == 0
        assert deck.card is None
        assert len(deck) == 0


class TestSplitBlanks:
    def test_single_blank(self):
        assert split_blanks("The ___ declared independence in 1947.") == [
            ("The ", False),
            ("___", True),
            (" declared independence in 1947.", False),
        ]

    def test_leading_and_multiple_blanks(self):
        assert split_blanks("___ and ___") == [("___", True), (" and ", False), ("___", True)]

    def test_no_blank(self):
        assert split_blanks("No blanks here") == [("No blanks here", False)]


class TestTypeLabel:
    @pytest.mark.parametrize(
        "card_type, label",
        [("qa", "qa"), ("true_false", "true false"), ("fill_up", "fill up")],
    )
    def test_underscores_become_spaces(self, card_type, label):
        question = "The ___ fell." if card_type == "fill_up" else "Q?"
        card = Flashcard(type=card_type, question=question, answer="A")
        assert type_label(card) == label
