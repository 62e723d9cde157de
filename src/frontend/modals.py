"""Modal dialogs for the Textual moderation panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ToggleConfirmScreen(ModalScreen[bool]):
    """Ask before changing an entry's visibility."""

    def __init__(self, entry_label: str, enable: bool) -> None:
        super().__init__()
        self._entry_label = entry_label
        self._enable = enable

    def compose(self) -> ComposeResult:
        action = "Enable" if self._enable else "Disable"
        body = (
            "The entry becomes visible again."
            if self._enable
            else "The entry is hidden; permanent numbers of other entries stay."
        )
        yield Container(
            Static(f"{action} {self._entry_label}?", classes="modal-title"),
            Static(body, classes="modal-body"),
            Horizontal(
                Button(action, id="toggle-confirm", variant="warning"),
                Button("Cancel", id="toggle-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "toggle-confirm")
