"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError if ANTHROPIC_API_KEY is missing
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── API Keys ────────────────────────────────────────────────────────────
    anthropic_api_key: str = field(
        default_factory=lambda: os.environ.get("ANTHROPIC_API_KEY", "")
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5001"))
    )
    secret_key: str = field(
        default_factory=lambda: os.environ.get("FLASK_SECRET_KEY", "dev-secret-change-me")
    )
    #: Browser workspaces kept in memory; the least recently used is evicted.
    max_workspaces: int = field(
        default_factory=lambda: int(os.environ.get("MAX_WORKSPACES", "200"))
    )

    # ── AI Model ────────────────────────────────────────────────────────────
    #: Model used for every artifact and for persona chat.
    model: str = field(
        default_factory=lambda: os.environ.get("HISTORY_LENS_MODEL", "claude-haiku-4-5")
    )
    #: Upper bound on generated tokens, shared by all calls.
    max_output_tokens: int = 2000
    #: Sampling temperature, shared by all calls.
    temperature: float = 0.7

    def validate(self) -> None:
        """Raise ``ValueError`` if any required setting is missing."""
        if not self.anthropic_api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY environment variable is not set. "
                "Copy .env.example to .env and add your key."
            )
