"""
Flask web server for History Lens.

Routes
──────
GET  /                          Page: input text, tab bar, active tab
GET  /api/state                 Workspace snapshot (JSON)
POST /api/text                  Replace the input text; resets every artifact
GET  /tabs/<slug>               Render a tab as an HTML fragment
POST /tabs/<slug>               Select + mount a tab, render its fragment
POST /tabs/<slug>/generate      Explicitly (re)generate a tab's artifact
POST /flashcards/<action>       next | previous | flip
POST /quiz/<action>             start | answer | advance | restart
POST /api/chat/persona          Start a new chat with another figure
GET  /api/chat/stream?message=  SSE: stream the figure's reply
"""

from __future__ import annotations

import json
import logging
import os
import sys
import threading
import uuid
from collections import OrderedDict

from dotenv import load_dotenv
from flask import (
    Flask,
    Response,
    jsonify,
    render_template,
    request,
    session,
    stream_with_context,
)

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from core.controller import ArtifactState
from core.figures import HISTORICAL_FIGURES
from core.flashcards import split_blanks, type_label
from core.generator import Generator
from core.workspace import CHAT_TAB, TAB_SLUGS, TABS, Workspace

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = Settings()
try:
    settings.validate()
except ValueError as exc:
    # Not fatal: the page still loads and generation fails per request.
    logger.warning("%s", exc)

generator = Generator(settings)

app = Flask(__name__)
app.secret_key = settings.secret_key

#: Browser session id → Workspace, least recently used first.
_workspaces: OrderedDict[str, Workspace] = OrderedDict()
_workspaces_lock = threading.Lock()
MAX_WORKSPACES = settings.max_workspaces

SLUG_BY_TAB = {tab: slug for slug, tab in TAB_SLUGS.items()}


def current_workspace() -> Workspace:
    """Return the caller's workspace, creating one on first visit.

    Once ``MAX_WORKSPACES`` are held, the least recently used one is dropped
    and its chat stream cancelled; that browser starts afresh next time.
    """
    workspace_id = session.get("workspace_id")
    with _workspaces_lock:
        if workspace_id is not None and workspace_id in _workspaces:
            _workspaces.move_to_end(workspace_id)
            return _workspaces[workspace_id]
        workspace_id = uuid.uuid4().hex
        session["workspace_id"] = workspace_id
        workspace = _workspaces[workspace_id] = Workspace(generator)
        logger.info("Created workspace %s", workspace_id)
        while len(_workspaces) > MAX_WORKSPACES:
            evicted_id, evicted = _workspaces.popitem(last=False)
            evicted.chat.cancel()
            logger.info("Evicted workspace %s", evicted_id)
        return workspace


def _payload() -> dict:
    """Request body as a dict, whether sent as JSON or as a form."""
    return request.get_json(silent=True) or request.form.to_dict()


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _render_tab(workspace: Workspace, tab: str) -> str:
    if tab == CHAT_TAB:
        return render_template(
            "partials/chat.html",
            chat=workspace.chat,
            figures=HISTORICAL_FIGURES,
        )
    controller = workspace.controller(tab)
    return render_template(
        "partials/artifact.html",
        controller=controller,
        kind=controller.kind,
        text=workspace.text,
        states=ArtifactState,
        split_blanks=split_blanks,
        type_label=type_label,
    )


# ── UI ─────────────────────────────────────────────────────────────────────

@app.route("/")
def index():
    workspace = current_workspace()
    return render_template(
        "index.html",
        tabs=TABS,
        slugs=SLUG_BY_TAB,
        workspace=workspace,
        content=_render_tab(workspace, workspace.active_tab),
    )


# ── Shell API ──────────────────────────────────────────────────────────────

@app.route("/api/state")
def get_state():
    """Return the active tab, the text and every artifact's state."""
    workspace = current_workspace()
    return jsonify(
        {
            "active_tab": workspace.active_tab,
            "text": workspace.text,
            "artifacts": {
                c.kind.slug: {"state": c.state.value, "error": c.error}
                for c in workspace.controllers.values()
            },
            "persona": workspace.chat.figure.name,
        }
    )


@app.route("/api/text", methods=["POST"])
def set_text():
    """Replace the shared input text."""
    text = _payload().get("text")
    if text is None:
        return _error("text is required", 400)
    current_workspace().set_text(text)
    return get_state()


# ── Tabs ───────────────────────────────────────────────────────────────────

@app.route("/tabs/<slug>", methods=["GET", "POST"])
def tab(slug: str):
    """Render a tab; on POST also select it, which may auto-generate."""
    tab_name = TAB_SLUGS.get(slug)
    if tab_name is None:
        return _error("Unknown tab", 404)
    workspace = current_workspace()
    if request.method == "POST":
        workspace.show_tab(tab_name)
    return _render_tab(workspace, tab_name)


@app.route("/tabs/<slug>/generate", methods=["POST"])
def generate_tab(slug: str):
    """Generate (or regenerate) the artifact behind a tab."""
    tab_name = TAB_SLUGS.get(slug)
    workspace = current_workspace()
    controller = workspace.controller(tab_name) if tab_name else None
    if controller is None:
        return _error("Unknown artifact tab", 404)
    if not workspace.text:
        return _error("Paste some history text first", 400)
    if controller.loading:
        return _error("Generation already in progress", 409)
    controller.generate(workspace.text)
    return _render_tab(workspace, tab_name)


@app.route("/flashcards/<action>", methods=["POST"])
def flashcards_action(action: str):
    """Flip the current card or move through the deck."""
    workspace = current_workspace()
    deck = workspace.controller("Flashcards").interaction
    if deck is None:
        return _error("No flashcards generated yet", 409)
    if action == "next":
        deck.next()
    elif action == "previous":
        deck.previous()
    elif action == "flip":
        deck.flip()
    else:
        return _error("Unknown flashcard action", 404)
    return _render_tab(workspace, "Flashcards")


@app.route("/quiz/<action>", methods=["POST"])
def quiz_action(action: str):
    """Start, answer, advance or restart the quiz."""
    workspace = current_workspace()
    run = workspace.controller("Quiz").interaction
    if run is None:
        return _error("No quiz generated yet", 409)
    if action == "start":
        run.start()
    elif action == "answer":
        run.answer(_payload().get("answer", ""))
    elif action == "advance":
        run.advance()
    elif action == "restart":
        run.restart()
    else:
        return _error("Unknown quiz action", 404)
    return _render_tab(workspace, "Quiz")


# ── Chat ───────────────────────────────────────────────────────────────────

@app.route("/api/chat/persona", methods=["POST"])
def select_persona():
    """Switch figure; the previous conversation is discarded."""
    name = _payload().get("name", "")
    workspace = current_workspace()
    try:
        workspace.select_persona(name)
    except KeyError:
        return _error(f"Unknown figure: {name}", 404)
    return _render_tab(workspace, CHAT_TAB)


@app.route("/api/chat/stream")
def chat_stream():
    """SSE endpoint that streams one chat turn.

    Query params:
      message  (required) — the student's message

    SSE events emitted:
      {"type": "message", "text": "..."}   reply so far, after every chunk
      [DONE]                                 end of the turn
    """
    message = request.args.get("message", "")
    if not message.strip():
        return _error("message query param is required", 400)

    chat = current_workspace().chat
    turn = chat.send_turn(message)
    if turn is None:
        return _error(f"{chat.figure.name} is still answering", 409)

    def generate():
        try:
            for total in turn:
                data = json.dumps({"type": "message", "text": total})
                yield f"data: {data}\n\n"
        finally:
            # Closing the turn also covers a client that disconnected mid-reply.
            turn.close()
        yield "data: [DONE]\n\n"

    return Response(
        stream_with_context(generate()),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
