"""Main Textual app for the explbot moderation panel."""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Footer, Static

from .constants import TELEGRAM_BLUE
from .entries import EntriesView


class ModerationApp(App):
    """Look up a term's entries and soft-delete or restore them."""

    BINDINGS = [
        ("ctrl+t", "toggle_entry", "Toggle"),
        ("ctrl+r", "reload_entries", "Reload"),
        ("ctrl+c", "quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: #0f1a21;
        color: #e8eef5;
    }

    #header {
        height: 5;
        padding: 1 4;
        border-bottom: solid #2a3a46;
    }

    #title {
        text-style: bold;
    }

    .subtle {
        color: #c6d2dd;
    }

    #entries-panel {
        padding: 1 4;
    }

    ModalScreen {
        align: center middle;
    }

    .modal-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: solid #2a3a46;
        background: #16242e;
    }

    .modal-title {
        text-style: bold;
    }

    .modal-actions {
        height: 3;
    }
    """

    def __init__(self, store, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._store = store

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"{self._store.count()} entries in store", classes="subtle")
        yield EntriesView(self._store, id="entries")
        yield Footer()

    def action_toggle_entry(self) -> None:
        self.query_one(EntriesView).request_toggle()

    def action_reload_entries(self) -> None:
        self.query_one(EntriesView).load_entries()

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("EXPL", TELEGRAM_BLUE),
            ("BOT > Moderation", "bold"),
        )
