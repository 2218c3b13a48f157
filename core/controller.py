"""View state for the five generated-artifact tabs.

Every artifact tab follows the same state machine:

    EMPTY ──generate──▶ LOADING ──▶ READY | FAILED
                           ▲            │
                           └─generate───┘

    any state ──reset (input text changed)──▶ EMPTY

``mount()`` is called each time a tab is shown.  It starts generation by
itself only when text is present, nothing is stored and nothing is loading,
and it is evaluated once per mount; after a reset the student regenerates
explicitly.

The differences between tabs live in ``ArtifactKind`` records rather than
in subclasses.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from core.flashcards import FlashcardDeck
from core.quiz import QuizSession

if TYPE_CHECKING:
    from core.generator import Generator

logger = logging.getLogger(__name__)


class ArtifactState(str, Enum):
    """Where a tab's artifact is in its lifecycle."""

    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ArtifactKind:
    """Configuration of one artifact tab."""

    slug: str
    tab: str
    #: Name of the ``Generator`` method producing the artifact.
    operation: str
    loading_message: str
    failure_message: str
    button_label: str
    #: Builds fresh interaction state from a new artifact.
    interaction: Optional[Callable[[Any], Any]] = None


SUMMARY = ArtifactKind(
    slug="summary",
    tab="Summary",
    operation="generate_summary",
    loading_message="Crafting your summary...",
    failure_message="Failed to generate summary. The AI model might be busy. Please try again.",
    button_label="Generate Summary",
)
TIMELINE = ArtifactKind(
    slug="timeline",
    tab="Timeline",
    operation="generate_timeline",
    loading_message="Constructing your timeline...",
    failure_message="Failed to generate timeline. The AI model might be busy. Please try again.",
    button_label="Generate Timeline",
)
FLASHCARDS = ArtifactKind(
    slug="flashcards",
    tab="Flashcards",
    operation="generate_flashcards",
    loading_message="Creating your flashcards...",
    failure_message="Failed to generate flashcards. Please try again.",
    button_label="Generate Flashcards",
    interaction=FlashcardDeck,
)
MINDMAP = ArtifactKind(
    slug="mindmap",
    tab="Mindmap",
    operation="generate_mindmap",
    loading_message="Visualizing your mindmap...",
    failure_message="Failed to generate mindmap. Please try again.",
    button_label="Generate Mindmap",
)
QUIZ = ArtifactKind(
    slug="quiz",
    tab="Quiz",
    operation="generate_quiz",
    loading_message="Preparing your quiz...",
    failure_message="Failed to generate quiz. Please try again.",
    button_label="Generate Quiz",
    interaction=QuizSession,
)

#: All artifact kinds, in tab order.
ARTIFACT_KINDS: tuple[ArtifactKind, ...] = (SUMMARY, TIMELINE, FLASHCARDS, MINDMAP, QUIZ)


class ArtifactController:
    """Owns one artifact slot and its interaction state.

    At most one generation request is in flight; a second ``generate()``
    while loading is ignored.  A response that arrives after ``reset()`` is
    dropped instead of overwriting the newer state.
    """

    def __init__(self, kind: ArtifactKind, generator: Generator) -> None:
        self.kind = kind
        self._generator = generator
        self._lock = threading.Lock()
        self._epoch = 0
        self.state = ArtifactState.EMPTY
        self.artifact: Any = None
        self.interaction: Any = None
        self.error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.state is ArtifactState.LOADING

    def mount(self, text: str) -> bool:
        """Tab shown: generate if there is text but no artifact yet.

        Returns:
            Whether a generation was started.
        """
        if text and self.artifact is None and not self.loading:
            return self.generate(text)
        return False

    def generate(self, text: str) -> bool:
        """Run the kind's generation operation for *text*.

        Returns:
            ``True`` if an artifact was stored.
        """
        if not text:
            return False
        with self._lock:
            if self.loading:
                logger.info("%s generation already in flight", self.kind.slug)
                return False
            self.state = ArtifactState.LOADING
            self.error = None
            epoch = self._epoch

        operation = getattr(self._generator, self.kind.operation)
        result = operation(text)

        with self._lock:
            if epoch != self._epoch:
                logger.info("Dropping stale %s result after reset", self.kind.slug)
                return False
            if result is None:
                self.state = ArtifactState.FAILED
                self.error = self.kind.failure_message
                return False
            self.artifact = result
            self.interaction = self.kind.interaction(result) if self.kind.interaction else None
            self.state = ArtifactState.READY
        logger.info("%s ready", self.kind.slug)
        return True

    def reset(self) -> None:
        """Forget the artifact; the input text it came from has changed."""
        with self._lock:
            self._epoch += 1
            self.state = ArtifactState.EMPTY
            self.artifact = None
            self.interaction = None
            self.error = None
