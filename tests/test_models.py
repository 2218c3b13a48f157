"""Tests for core/models.py — structural checks on generated artifacts."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.models import Flashcard, MindmapNode, Quiz, Summary


class TestFlashcard:
    def test_mcq_with_four_options(self):
        card = Flashcard(
            type="mcq",
            question="Who founded the Maurya empire?",
            answer="Chandragupta",
            options=["Chandragupta", "Ashoka", "Bindusara", "Harsha"],
        )
        assert len(card.options) == 4

    def test_mcq_without_four_options_rejected(self):
        with pytest.raises(ValidationError, match="4 options"):
            Flashcard(type="mcq", question="Q?", answer="A", options=["A", "B", "C"])

    def test_mcq_missing_options_rejected(self):
        with pytest.raises(ValidationError):
            Flashcard(type="mcq", question="Q?", answer="A")

    def test_fill_up_requires_blank_marker(self):
        with pytest.raises(ValidationError, match="___"):
            Flashcard(type="fill_up", question="Gandhi led the Salt March.", answer="Gandhi")

    def test_fill_up_with_blank_accepted(self):
        card = Flashcard(type="fill_up", question="___ led the Salt March.", answer="Gandhi")
        assert card.type == "fill_up"

    def test_options_dropped_for_non_mcq(self):
        card = Flashcard(type="qa", question="Q?", answer="A", options=["x", "y"])
        assert card.options is None

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Flashcard(type="essay", question="Q?", answer="A")


class TestMindmapNode:
    def test_nested_children_parsed(self):
        root = MindmapNode.model_validate(
            {
                "name": "French Revolution",
                "children": [
                    {"name": "Causes", "children": [{"name": "Debt"}, {"name": "Famine"}]},
                    {"name": "Figures"},
                ],
            }
        )
        assert root.children[0].children[1].name == "Famine"
        assert root.children[1].children is None


class TestSummary:
    def test_all_list_fields_required(self):
        with pytest.raises(ValidationError):
            Summary.model_validate({"summary_5_lines": "Text", "key_points": []})

    def test_empty_lists_allowed(self):
        summary = Summary(
            summary_5_lines="Short.",
            key_points=[],
            important_dates=[],
            important_people=[],
            cause_effect=[],
        )
        assert summary.key_points == []


class TestQuiz:
    def test_counts_are_not_enforced(self):
        quiz = Quiz.model_validate(
            {
                "mcqs": [{"question": "Q1", "options": ["a", "b", "c", "d"], "answer": "a"}],
                "short_answers": [],
                "one_word_questions": [],
                "long_answer_question": {"question": "Discuss.", "answer_guideline": "Cover X."},
            }
        )
        assert len(quiz.mcqs) == 1
