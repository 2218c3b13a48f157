"""
history-lens core package.

Modules
───────
models      — Pydantic data models (Summary, TimelineEvent, Flashcard, MindmapNode, Quiz, …)
generator   — Claude structured-output calls, one per artifact kind
chat        — Streaming persona chat session
figures     — Historical figures available for chat
flashcards  — Flashcard deck navigation and blank-marker splitting
quiz        — Quiz progress, grading policy and score
controller  — Generic artifact tab state machine + per-kind configuration
workspace   — Per-session shell: input text, active tab, fan-out reset
"""
