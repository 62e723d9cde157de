"""Entries view for looking up a term's full history, disabled rows included."""

from __future__ import annotations

import sqlite3
from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Input, Static

from core.models import Entry
from core.query import rank_history
from core.text import collapse_whitespace, normalize_term

from .constants import EXPLANATION_CLIP
from .modals import ToggleConfirmScreen


class EntriesView(Container):
    """Browse all entries of a term and toggle their enabled flag."""

    def __init__(self, store, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._store = store
        self._term = ""
        self._entries: dict[str, Entry] = {}
        self._table_ready = False

    def compose(self):
        with Vertical(id="entries-panel"):
            yield Input(placeholder="term", id="term-input")
            yield DataTable(id="entries-table", cursor_type="row")
            with Horizontal(id="entries-actions"):
                yield Button("Toggle", id="toggle-entry", variant="warning")
                yield Button("Reload", id="reload-entries")
            yield Static("", id="entries-output")

    def on_mount(self) -> None:
        table = self.query_one("#entries-table", DataTable)
        table.add_column("id", key="id", width=6)
        table.add_column("index", key="index", width=10)
        table.add_column("enabled", key="enabled", width=8)
        table.add_column("author", key="author", width=16)
        table.add_column("created", key="created", width=17)
        table.add_column("explanation", key="explanation", width=EXPLANATION_CLIP)
        table.zebra_stripes = True
        table.styles.height = "1fr"
        self.query_one("#entries-actions").styles.height = 3
        self._table_ready = True

    @on(Input.Submitted, "#term-input")
    def _on_term_submitted(self, event: Input.Submitted) -> None:
        self._term = event.value.strip()
        self.load_entries()

    @on(Button.Pressed, "#reload-entries")
    def _on_reload(self) -> None:
        self.load_entries()

    @on(Button.Pressed, "#toggle-entry")
    def _on_toggle(self) -> None:
        self.request_toggle()

    def load_entries(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#entries-table", DataTable)
        table.clear()
        self._entries = {}
        if not self._term:
            self._set_output("enter a term and press enter")
            return
        try:
            history = list(rank_history(self._store.query_by_key(normalize_term(self._term))))
        except sqlite3.Error as exc:
            self._set_output(f"db error: {exc}")
            return

        for entry, normal_index, permanent_index in history:
            row_key = str(entry.id)
            self._entries[row_key] = entry
            index_label = f"{normal_index}/p{permanent_index}" if normal_index else f"-/p{permanent_index}"
            table.add_row(
                str(entry.id),
                index_label,
                "yes" if entry.enabled else "no",
                entry.author or "",
                entry.created_at.strftime("%Y-%m-%d %H:%M") if entry.created_at else "",
                self._clip_text(collapse_whitespace(entry.explanation)),
                key=row_key,
            )
        self._set_output(f"loaded {len(history)} entries for {self._term}")

    def _selected_entry(self) -> Optional[Entry]:
        table = self.query_one("#entries-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self._entries.get(str(row_key.value))

    def request_toggle(self) -> None:
        entry = self._selected_entry()
        if entry is None:
            self._set_output("No entry selected.")
            return
        enable = not entry.enabled

        def _apply(confirmed: Optional[bool]) -> None:
            if not confirmed:
                return
            try:
                self._store.set_enabled(entry.id, enable)
            except sqlite3.Error as exc:
                self._set_output(f"db error: {exc}")
                return
            self.load_entries()

        label = f"{entry.term} (id {entry.id})"
        self.app.push_screen(ToggleConfirmScreen(label, enable), _apply)

    def _set_output(self, message: str) -> None:
        self.query_one("#entries-output", Static).update(message)

    @staticmethod
    def _clip_text(value: str, limit: int = EXPLANATION_CLIP) -> str:
        if len(value) <= limit:
            return value
        return value[: limit - 3] + "..."
