"""
Pydantic models shared across the History Lens core.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, model_validator

#: Marker a fill-up flashcard uses for its blank.
BLANK_MARKER = "___"


# ── Summary ────────────────────────────────────────────────────────────────

class DatedEvent(BaseModel):
    date: str
    event: str


class Person(BaseModel):
    name: str
    significance: str


class CauseEffect(BaseModel):
    cause: str
    effect: str


class Summary(BaseModel):
    """Structured digest of a history chapter."""

    summary_5_lines: str
    key_points: list[str]
    important_dates: list[DatedEvent]
    important_people: list[Person]
    cause_effect: list[CauseEffect]


# ── Timeline ───────────────────────────────────────────────────────────────

class TimelineEvent(BaseModel):
    """One chronological entry. ``year`` is free-form ("c. 260 BCE")."""

    year: str
    event: str
    impact: str


# ── Flashcards ─────────────────────────────────────────────────────────────

FlashcardType = Literal["qa", "mcq", "true_false", "fill_up"]


class Flashcard(BaseModel):
    """A single review card.

    Only ``mcq`` cards carry options, and they carry exactly four.
    A ``fill_up`` question contains the blank marker ``___``.
    """

    type: FlashcardType
    question: str
    answer: str
    options: Optional[list[str]] = None

    @model_validator(mode="after")
    def _check_type_rules(self) -> "Flashcard":
        if self.type == "mcq":
            if not self.options or len(self.options) != 4:
                raise ValueError("mcq flashcard needs exactly 4 options")
        elif self.options is not None:
            self.options = None
        if self.type == "fill_up" and BLANK_MARKER not in self.question:
            raise ValueError(f"fill_up flashcard question lacks {BLANK_MARKER!r}")
        return self


# ── Mindmap ────────────────────────────────────────────────────────────────

class MindmapNode(BaseModel):
    """A node of the topic tree; leaves have no ``children``."""

    name: str
    children: Optional[list[MindmapNode]] = None


# ── Quiz ───────────────────────────────────────────────────────────────────

class MCQ(BaseModel):
    question: str
    options: list[str]
    answer: str


class ShortAnswer(BaseModel):
    question: str
    answer_hint: str


class OneWordAnswer(BaseModel):
    question: str
    answer: str


class LongAnswerQuestion(BaseModel):
    question: str
    answer_guideline: str


class Quiz(BaseModel):
    """A generated assessment.

    The prompt asks for 10 MCQs, 5 short answers, 5 one-word questions and a
    single long answer question, but the model may return other counts.
    """

    mcqs: list[MCQ]
    short_answers: list[ShortAnswer]
    one_word_questions: list[OneWordAnswer]
    long_answer_question: LongAnswerQuestion


# ── Chat ───────────────────────────────────────────────────────────────────

class ChatMessage(BaseModel):
    """One message of a persona conversation."""

    sender: Literal["user", "ai"]
    text: str


class HistoricalFigure(BaseModel):
    """A selectable chat persona."""

    name: str
    prompt: str
    image_url: str
