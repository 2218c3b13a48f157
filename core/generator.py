"""Artifact generation using the Claude API.

One operation per learning artifact:

* ``generate_summary()``    → ``Summary``
* ``generate_timeline()``   → ``list[TimelineEvent]``
* ``generate_flashcards()`` → ``list[Flashcard]``
* ``generate_mindmap()``    → ``MindmapNode``
* ``generate_quiz()``       → ``Quiz``

Each operation renders a fixed prompt with the chapter text interpolated and
sends it together with a JSON schema (structured output).  The response is
parsed and checked against the matching Pydantic model.  Every failure
(transport, empty response, bad JSON, wrong shape) is logged and reported
as ``None``; nothing is raised to the caller.

The Anthropic client is lazy-initialised so that the class can be
instantiated in tests without requiring a live API key.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from core.chat import ChatSession
from core.models import Flashcard, MindmapNode, Quiz, Summary, TimelineEvent

if TYPE_CHECKING:
    from config.settings import Settings
    from core.models import HistoricalFigure

logger = logging.getLogger(__name__)

T = TypeVar("T")

#: System prompt shared by every artifact call.
BASE_SYSTEM = (
    "You are a history expert for students. Your goal is to make history engaging, "
    "understandable, and accurate. Provide responses in the requested JSON format."
)


# ── Response schemas ───────────────────────────────────────────────────────────


def _object(properties: dict, required: list[str]) -> dict:
    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }


_STRING: dict = {"type": "string"}
_STRING_LIST: dict = {"type": "array", "items": _STRING}

SUMMARY_SCHEMA: dict = _object(
    {
        "summary_5_lines": _STRING,
        "key_points": _STRING_LIST,
        "important_dates": {
            "type": "array",
            "items": _object({"date": _STRING, "event": _STRING}, ["date", "event"]),
        },
        "important_people": {
            "type": "array",
            "items": _object(
                {"name": _STRING, "significance": _STRING}, ["name", "significance"]
            ),
        },
        "cause_effect": {
            "type": "array",
            "items": _object({"cause": _STRING, "effect": _STRING}, ["cause", "effect"]),
        },
    },
    ["summary_5_lines", "key_points", "important_dates", "important_people", "cause_effect"],
)

TIMELINE_SCHEMA: dict = {
    "type": "array",
    "items": _object(
        {"year": _STRING, "event": _STRING, "impact": _STRING},
        ["year", "event", "impact"],
    ),
}

FLASHCARDS_SCHEMA: dict = {
    "type": "array",
    "items": _object(
        {
            "type": {"type": "string", "enum": ["qa", "mcq", "true_false", "fill_up"]},
            "question": _STRING,
            "answer": _STRING,
            "options": _STRING_LIST,
        },
        ["type", "question", "answer"],
    ),
}

#: Nesting levels the mindmap schema describes, root included. Structured
#: outputs do not accept a self-referencing ``$ref``, so the node is unrolled.
MINDMAP_DEPTH = 4


def _mindmap_node(depth: int) -> dict:
    properties: dict = {"name": _STRING}
    if depth > 1:
        properties["children"] = {"type": "array", "items": _mindmap_node(depth - 1)}
    return _object(properties, ["name"])


MINDMAP_SCHEMA: dict = _mindmap_node(MINDMAP_DEPTH)

QUIZ_SCHEMA: dict = _object(
    {
        "mcqs": {
            "type": "array",
            "items": _object(
                {"question": _STRING, "options": _STRING_LIST, "answer": _STRING},
                ["question", "options", "answer"],
            ),
        },
        "short_answers": {
            "type": "array",
            "items": _object(
                {"question": _STRING, "answer_hint": _STRING}, ["question", "answer_hint"]
            ),
        },
        "one_word_questions": {
            "type": "array",
            "items": _object({"question": _STRING, "answer": _STRING}, ["question", "answer"]),
        },
        "long_answer_question": _object(
            {"question": _STRING, "answer_guideline": _STRING},
            ["question", "answer_guideline"],
        ),
    },
    ["mcqs", "short_answers", "one_word_questions", "long_answer_question"],
)


# ── Prompt templates ───────────────────────────────────────────────────────────

SUMMARY_PROMPT = """Based on the following history chapter, generate a detailed summary.

Text: "{text}"

Provide the output in a JSON object with the following structure: {{
  "summary_5_lines": "A concise 5-line summary of the chapter.",
  "key_points": ["Point 1", "Point 2", "Point 3", ...],
  "important_dates": [{{"date": "Year/Date", "event": "What happened"}}, ...],
  "important_people": [{{"name": "Person's Name", "significance": "Their role or impact"}}, ...],
  "cause_effect": [{{"cause": "The cause of an event", "effect": "The resulting effect"}}, ...]
}}"""

TIMELINE_PROMPT = """Convert the following history text into a chronological timeline. \
Each event should have a year, a description of the event, and its impact.

Text: "{text}"

Provide the output as a JSON array of objects, where each object has "year", "event", \
and "impact" fields.
"""

FLASHCARDS_PROMPT = """From the text below, generate a set of 20 flashcards of mixed types \
(Q&A, MCQ, True/False, Fill in the blanks).

Text: "{text}"

Provide the output as a JSON array of objects. Each object must have a "type" field \
('qa', 'mcq', 'true_false', 'fill_up'), a "question", and an "answer". For 'mcq', also \
include an "options" array with 4 choices, one of which is the correct answer. For \
"fill_up", the question should contain "___" for the blank.
"""

MINDMAP_PROMPT = """Convert the provided history text into a hierarchical mindmap \
structure. The top-level node should be the main topic. Create nested child nodes for \
sub-topics, key events, figures, and concepts.

Text: "{text}"

Provide the output as a single JSON object with a "name" for the central idea and a \
"children" array for its branches. Each child can have its own "children" array for \
further nesting.
"""

QUIZ_PROMPT = """Create a comprehensive quiz from the following text. The quiz should \
include exactly 10 multiple-choice questions (MCQs), 5 short answer questions, 5 one-word \
answer questions, and 1 long answer question.

Text: "{text}"

Provide the output as a single JSON object with keys: "mcqs", "short_answers", \
"one_word_questions", and "long_answer_question".
- "mcqs" should be an array of objects, each with "question", an "options" array of 4 \
strings, and the correct "answer".
- "short_answers" should be an array of objects with "question" and an "answer_hint".
- "one_word_questions" should be an array of objects with "question" and "answer".
- "long_answer_question" should be an object with "question" and "answer_guideline".
"""

_SUMMARY = TypeAdapter(Summary)
_TIMELINE = TypeAdapter(list[TimelineEvent])
_CARD_LIST = TypeAdapter(list[dict[str, Any]])
_MINDMAP = TypeAdapter(MindmapNode)
_QUIZ = TypeAdapter(Quiz)


def _parse_flashcards(data: Any) -> list[Flashcard]:
    """Validate a deck card by card, dropping the malformed ones.

    Raises:
        ValidationError: *data* is not a list of objects.
        ValueError: cards were returned but none of them is valid.
    """
    raw_cards = _CARD_LIST.validate_python(data)
    cards = []
    for position, raw in enumerate(raw_cards):
        try:
            cards.append(Flashcard.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Dropping flashcard %d: %s", position, exc.errors()[0]["msg"])
    if raw_cards and not cards:
        raise ValueError(f"all {len(raw_cards)} flashcards were malformed")
    return cards


class Generator:
    """Generates learning artifacts from history text with the Claude API.

    All methods are side-effect-free request/response calls so they are easy
    to unit-test with mocked API responses.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialise the generator.

        Args:
            settings: Application configuration.
        """
        self.settings = settings
        self._client: object = None  # Lazy-initialised anthropic.Anthropic

    @property
    def client(self) -> object:
        """Lazy-initialise and return the Anthropic SDK client."""
        if self._client is None:
            import anthropic
            # Single attempt per invocation: the user re-triggers on failure.
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                max_retries=0,
            )
        return self._client

    # ── Shared request path ────────────────────────────────────────────────

    def _get_response(
        self,
        kind: str,
        prompt: str,
        schema: dict,
        parse: Callable[[Any], T],
    ) -> Optional[T]:
        """Send *prompt* with *schema* and return the validated result.

        Args:
            parse: Turns the decoded JSON into the artifact; raises
                ``ValueError`` (``ValidationError`` included) on bad shape.

        Returns:
            The parsed artifact, or ``None`` on any failure.
        """
        try:
            response = self.client.messages.create(
                model=self.settings.model,
                max_tokens=self.settings.max_output_tokens,
                temperature=self.settings.temperature,
                system=BASE_SYSTEM,
                messages=[{"role": "user", "content": prompt}],
                output_config={"format": {"type": "json_schema", "schema": schema}},
            )
        except Exception:
            logger.exception("Claude request failed for %s", kind)
            return None

        raw = getattr(response.content[0], "text", "") if response.content else ""
        if not raw:
            logger.warning("Empty response from Claude for %s", kind)
            return None

        try:
            data: Any = json.loads(raw)
            return parse(data)
        except json.JSONDecodeError:
            logger.exception("Non-JSON response from Claude for %s", kind)
        except ValidationError:
            logger.exception("Response for %s does not match the expected shape", kind)
        except ValueError as exc:
            logger.warning("Unusable response for %s: %s", kind, exc)
        return None

    def _generate(
        self,
        kind: str,
        template: str,
        text: str,
        schema: dict,
        parse: Callable[[Any], T],
    ) -> Optional[T]:
        if not text or not text.strip():
            logger.warning("Refusing to generate %s from empty text", kind)
            return None
        logger.info("Generating %s from %d characters of text", kind, len(text))
        return self._get_response(kind, template.format(text=text), schema, parse)

    # ── Artifact operations ────────────────────────────────────────────────

    def generate_summary(self, text: str) -> Optional[Summary]:
        """Generate a 5-line summary, key points, dates, people and causes/effects."""
        return self._generate(
            "summary", SUMMARY_PROMPT, text, SUMMARY_SCHEMA, _SUMMARY.validate_python
        )

    def generate_timeline(self, text: str) -> Optional[list[TimelineEvent]]:
        """Generate a chronological timeline, in the order the model returns it."""
        return self._generate(
            "timeline", TIMELINE_PROMPT, text, TIMELINE_SCHEMA, _TIMELINE.validate_python
        )

    def generate_flashcards(self, text: str) -> Optional[list[Flashcard]]:
        """Generate a deck of mixed-type flashcards.

        Malformed cards are dropped; the deck fails only when none is left.
        """
        return self._generate(
            "flashcards", FLASHCARDS_PROMPT, text, FLASHCARDS_SCHEMA, _parse_flashcards
        )

    def generate_mindmap(self, text: str) -> Optional[MindmapNode]:
        """Generate the root node of a topic tree.

        The request schema stops at ``MINDMAP_DEPTH`` levels; the parsed tree
        itself may be deeper.
        """
        return self._generate(
            "mindmap", MINDMAP_PROMPT, text, MINDMAP_SCHEMA, _MINDMAP.validate_python
        )

    def generate_quiz(self, text: str) -> Optional[Quiz]:
        """Generate a quiz. Requested question counts are not guaranteed."""
        return self._generate("quiz", QUIZ_PROMPT, text, QUIZ_SCHEMA, _QUIZ.validate_python)

    # ── Chat ───────────────────────────────────────────────────────────────

    def start_chat(self, figure: HistoricalFigure) -> ChatSession:
        """Open a new conversation with *figure*."""
        return ChatSession(self, figure)
