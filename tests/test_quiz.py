"""Tests for core/quiz.py — question order, grading policy and scoring."""

from __future__ import annotations

import pytest

from core.models import MCQ, LongAnswerQuestion, OneWordAnswer, Quiz, ShortAnswer
from core.quiz import QuizSession, flatten


@pytest.fixture
def quiz() -> Quiz:
    return Quiz(
        mcqs=[
            MCQ(question="Capital of the Mughals under Akbar?", options=["Agra", "Delhi", "Lahore", "Kabul"], answer="Agra"),
            MCQ(question="Year of the Battle of Plassey?", options=["1757", "1764", "1857", "1947"], answer="1757"),
        ],
        short_answers=[ShortAnswer(question="Why did the revolt of 1857 fail?", answer_hint="Lack of unity")],
        one_word_questions=[OneWordAnswer(question="Founder of the Maurya empire?", answer="Chandragupta")],
        long_answer_question=LongAnswerQuestion(
            question="Discuss the impact of British rule.", answer_guideline="Economy, society, politics"
        ),
    )


def answer_all(run: QuizSession, answers: list[str]) -> None:
    run.start()
    for value in answers:
        run.answer(value)
        run.advance()


class TestFlatten:
    def test_question_order(self, quiz):
        kinds = [q.kind for q in flatten(quiz)]
        assert kinds == ["mcq", "mcq", "short", "one_word", "long"]

    def test_empty_sections(self):
        quiz = Quiz(
            mcqs=[],
            short_answers=[],
            one_word_questions=[],
            long_answer_question=LongAnswerQuestion(question="Q", answer_guideline="G"),
        )
        assert [q.kind for q in flatten(quiz)] == ["long"]


class TestGrading:
    def test_all_graded_correct_scores_n_over_graded_total(self, quiz):
        run = QuizSession(quiz)
        answer_all(run, ["Agra", "1757", "anything", "Chandragupta", "an essay"])

        assert run.finished
        assert run.score == 3
        assert run.graded_total == 3

    def test_case_insensitive_match(self, quiz):
        run = QuizSession(quiz)
        run.start()
        assert run.answer("agra") is True

    def test_wrong_mcq(self, quiz):
        run = QuizSession(quiz)
        run.start()
        assert run.answer("Delhi") is False
        assert run.score == 0

    def test_one_word_must_match_exactly(self, quiz):
        run = QuizSession(quiz)
        answer_all(run, ["Agra", "1757", "", "Chandra"])
        assert run.feedback[3] is False

    def test_short_and_long_always_accepted(self, quiz):
        run = QuizSession(quiz)
        answer_all(run, ["x", "x", "", "x", ""])
        assert run.feedback[2] is True
        assert run.feedback[4] is True
        assert run.score == 0

    def test_answer_only_once(self, quiz):
        run = QuizSession(quiz)
        run.start()
        run.answer("Delhi")
        assert run.answer("Agra") is None
        assert run.score == 0


class TestProgress:
    def test_cannot_advance_unanswered(self, quiz):
        run = QuizSession(quiz)
        run.start()
        run.advance()
        assert run.index == 0

    def test_current_is_none_when_finished(self, quiz):
        run = QuizSession(quiz)
        answer_all(run, ["a"] * 5)
        assert run.current is None
        run.advance()
        assert run.index == 5

    def test_restart_clears_progress(self, quiz):
        run = QuizSession(quiz)
        answer_all(run, ["Agra", "1757", "", "Chandragupta", ""])
        run.restart()
        assert run.started
        assert (run.index, run.score, run.answers, run.feedback) == (0, 0, {}, {})

    def test_session_runs_on_its_own_question_list(self, quiz):
        run = QuizSession(quiz)
        quiz.mcqs.clear()
        answer_all(run, ["Agra", "1757", "", "Chandragupta", ""])
        assert run.finished
        assert (run.score, run.graded_total) == (3, 3)

    def test_feedback_labels(self, quiz):
        questions = flatten(quiz)
        assert questions[0].feedback_label() == "Correct Answer: Agra"
        assert questions[2].feedback_label() == "Answer Hint: Lack of unity"
        assert questions[4].feedback_label() == "Answer Guideline: Economy, society, politics"
