"""
The application shell: one workspace per browser session.

A workspace owns the pasted history text, the selected tab, one controller
per artifact tab and the persona chat.  Changing the text resets all five
artifacts at once; the chat does not depend on the text and is left alone.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from core.controller import ARTIFACT_KINDS, ArtifactController
from core.figures import HISTORICAL_FIGURES, get_figure

if TYPE_CHECKING:
    from core.generator import Generator

logger = logging.getLogger(__name__)

CHAT_TAB = "Chat with Figures"

#: Tab names in display order.
TABS: tuple[str, ...] = tuple(kind.tab for kind in ARTIFACT_KINDS) + (CHAT_TAB,)

#: URL slug → tab name.
TAB_SLUGS: dict[str, str] = {kind.slug: kind.tab for kind in ARTIFACT_KINDS}
TAB_SLUGS["chat"] = CHAT_TAB

DEFAULT_TAB = "Summary"


class Workspace:
    """Shared input text, tab selection and every tab's state."""

    def __init__(self, generator: Generator) -> None:
        self.text = ""
        self.active_tab = DEFAULT_TAB
        self.controllers: dict[str, ArtifactController] = {
            kind.tab: ArtifactController(kind, generator) for kind in ARTIFACT_KINDS
        }
        self.chat = generator.start_chat(HISTORICAL_FIGURES[0])

    def controller(self, tab: str) -> Optional[ArtifactController]:
        """The controller behind *tab*, or ``None`` for the chat tab."""
        return self.controllers.get(tab)

    def set_text(self, text: str) -> None:
        """Replace the input text and invalidate every generated artifact."""
        self.text = text
        for controller in self.controllers.values():
            controller.reset()
        logger.info("Input text changed (%d characters); artifacts reset", len(text))

    def select_tab(self, tab: str) -> None:
        """Change the selected tab without generating anything.

        Raises:
            ValueError: If *tab* is not one of ``TABS``.
        """
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab!r}")
        self.active_tab = tab

    def show_tab(self, tab: str) -> bool:
        """Select *tab* and mount its controller.

        Returns:
            Whether the tab's controller generated its artifact.
        """
        self.select_tab(tab)
        controller = self.controller(tab)
        if controller is None:
            return False
        return controller.mount(self.text)

    def select_persona(self, name: str) -> None:
        """Start a fresh chat with the figure called *name*.

        Raises:
            KeyError: If no figure has that name.
        """
        figure = get_figure(name)
        self.chat.start_session(figure)
