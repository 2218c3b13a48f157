"""
Running a generated quiz.

Questions are asked in a fixed order: MCQs, short answers, one-word
questions, then the long answer question.

Grading policy
──────────────
* MCQ and one-word answers are graded by case-insensitive exact match
  against the model's answer.
* Short and long answers cannot be auto-graded.  They are accepted as
  correct so the student can move on, but they neither add to the score
  nor count in ``graded_total`` (the score denominator).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from core.models import Quiz

logger = logging.getLogger(__name__)

QuestionKind = Literal["mcq", "short", "one_word", "long"]

#: Kinds whose answers are compared against the model's answer.
GRADED_KINDS: frozenset[str] = frozenset(["mcq", "one_word"])


@dataclass
class QuizQuestion:
    """A question of any kind, flattened for sequential display."""

    kind: QuestionKind
    question: str
    answer: str = ""
    options: tuple[str, ...] = ()
    #: Hint for short answers, guideline for the long answer.
    guidance: str = ""

    @property
    def graded(self) -> bool:
        return self.kind in GRADED_KINDS

    def feedback_label(self) -> str:
        """Text shown after the student answers."""
        if self.graded:
            return f"Correct Answer: {self.answer}"
        if self.kind == "short":
            return f"Answer Hint: {self.guidance}"
        return f"Answer Guideline: {self.guidance}"


def flatten(quiz: Quiz) -> list[QuizQuestion]:
    """Return every question of *quiz* in display order."""
    questions = [
        QuizQuestion("mcq", q.question, answer=q.answer, options=tuple(q.options))
        for q in quiz.mcqs
    ]
    questions += [
        QuizQuestion("short", q.question, guidance=q.answer_hint)
        for q in quiz.short_answers
    ]
    questions += [
        QuizQuestion("one_word", q.question, answer=q.answer)
        for q in quiz.one_word_questions
    ]
    long_q = quiz.long_answer_question
    questions.append(QuizQuestion("long", long_q.question, guidance=long_q.answer_guideline))
    return questions


def is_correct(question: QuizQuestion, answer: str) -> bool:
    """Apply the grading policy to one answer."""
    if question.graded:
        return answer.lower() == question.answer.lower()
    return True


class QuizSession:
    """Progress through one quiz: answers, feedback and score."""

    def __init__(self, quiz: Quiz) -> None:
        self.questions = flatten(quiz)
        self.started = False
        self.index = 0
        self.score = 0
        self.answers: dict[int, str] = {}
        self.feedback: dict[int, bool] = {}

    @property
    def graded_total(self) -> int:
        """Number of auto-graded questions (score denominator)."""
        return sum(1 for q in self.questions if q.graded)

    @property
    def finished(self) -> bool:
        return self.index >= len(self.questions)

    @property
    def current(self) -> Optional[QuizQuestion]:
        if self.finished:
            return None
        return self.questions[self.index]

    @property
    def answered(self) -> bool:
        """Whether the current question has been answered."""
        return self.index in self.feedback

    def start(self) -> None:
        self.started = True

    def answer(self, value: str) -> Optional[bool]:
        """Record an answer to the current question.

        Returns:
            Whether it was accepted as correct, or ``None`` if the question
            was already answered or the quiz is over.
        """
        question = self.current
        if question is None or self.answered:
            return None
        correct = is_correct(question, value)
        self.answers[self.index] = value
        self.feedback[self.index] = correct
        if correct and question.graded:
            self.score += 1
        return correct

    def advance(self) -> None:
        """Move past an answered question; past the last one the quiz is finished."""
        if self.finished or not self.answered:
            return
        self.index += 1
        if self.finished:
            logger.info("Quiz finished with score %d/%d", self.score, self.graded_total)

    def restart(self) -> None:
        self.started = True
        self.index = 0
        self.score = 0
        self.answers = {}
        self.feedback = {}
