"""
Persona chat for the "Chat with Figures" tab.

Flow
────
1. start_session(figure)
     → forgets every message and fixes the persona's system instruction

2. send_turn(text)
     → returns None if a turn is already streaming or text is blank
     → otherwise appends the user message and returns an iterator that
       streams the reply, republishing the accumulated text after every
       chunk (the last message is the growing assistant reply)

Only completed turns are replayed to Claude as conversation history.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import TYPE_CHECKING, Optional

from core.models import ChatMessage, HistoricalFigure

if TYPE_CHECKING:
    from core.generator import Generator

logger = logging.getLogger(__name__)

LOST_IN_TIME = "I seem to be lost in time... please try again."


class ChatSession:
    """One persona-scoped conversation with at most one turn in flight."""

    def __init__(self, generator: Generator, figure: HistoricalFigure) -> None:
        self._generator = generator
        self._lock = threading.Lock()
        self.figure = figure
        self.messages: list[ChatMessage] = []
        self.in_flight = False
        self._history: list[dict] = []
        self._cancelled = threading.Event()
        self.start_session(figure)

    def start_session(self, figure: HistoricalFigure) -> None:
        """Switch to *figure* and discard the previous conversation."""
        self.cancel()
        with self._lock:
            self.figure = figure
            self.messages = []
            self._history = []
            self._cancelled = threading.Event()
            self.in_flight = False
        logger.info("Chat session started with %s", figure.name)

    def cancel(self) -> None:
        """Stop the streaming turn, if any, after its current chunk."""
        self._cancelled.set()

    def send_turn(self, user_text: str) -> Optional[ChatTurn]:
        """Post *user_text* and return an iterator over the growing reply.

        Returns:
            ``None`` when the text is blank or a turn is already streaming.
        """
        if not user_text or not user_text.strip():
            return None
        with self._lock:
            if self.in_flight:
                logger.info("Ignoring chat turn while another is streaming")
                return None
            self.in_flight = True
            self._cancelled = threading.Event()
            self.messages.append(ChatMessage(sender="user", text=user_text))
            cancelled = self._cancelled
            replies = self._stream_reply(user_text, self.messages, cancelled)
        return ChatTurn(self, replies, cancelled)

    def _finish_turn(self, cancelled: threading.Event) -> None:
        with self._lock:
            # A newer turn or session owns the flag once the event is replaced.
            if cancelled is self._cancelled:
                self.in_flight = False

    def _stream_reply(
        self,
        user_text: str,
        messages: list[ChatMessage],
        cancelled: threading.Event,
    ) -> Iterator[str]:
        settings = self._generator.settings
        request = self._history + [{"role": "user", "content": user_text}]
        reply = ""
        placeholder = False
        try:
            with self._generator.client.messages.stream(
                model=settings.model,
                max_tokens=settings.max_output_tokens,
                temperature=settings.temperature,
                system=self.figure.prompt,
                messages=request,
            ) as stream:
                messages.append(ChatMessage(sender="ai", text=""))
                placeholder = True
                for chunk in stream.text_stream:
                    if cancelled.is_set():
                        logger.info("Chat turn with %s cancelled", self.figure.name)
                        return
                    reply += chunk
                    messages[-1] = ChatMessage(sender="ai", text=reply)
                    yield reply

            if not cancelled.is_set():
                self._history = request + [{"role": "assistant", "content": reply}]
        except Exception:
            logger.exception("Chat turn with %s failed", self.figure.name)
            if cancelled.is_set():
                return
            if placeholder and not reply:
                messages[-1] = ChatMessage(sender="ai", text=LOST_IN_TIME)
            else:
                messages.append(ChatMessage(sender="ai", text=LOST_IN_TIME))
            yield LOST_IN_TIME
        finally:
            self._finish_turn(cancelled)


class ChatTurn:
    """Iterator over one streaming reply.

    Closing it always frees the session, even if the reply was never read.
    """

    def __init__(
        self,
        session: ChatSession,
        replies: Iterator[str],
        cancelled: threading.Event,
    ) -> None:
        self._session = session
        self._replies = replies
        self._cancelled = cancelled

    def __iter__(self) -> ChatTurn:
        return self

    def __next__(self) -> str:
        return next(self._replies)

    def close(self) -> None:
        self._replies.close()
        self._session._finish_turn(self._cancelled)
