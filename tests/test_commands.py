from __future__ import annotations

from datetime import datetime, timezone

from adapters.sqlite_store import SQLiteEntryStore
from core.commands import ExplCommands
from core.config import ExplConfig
from core.models import CommandRequest
from core.responses import (
    ADD_SYNTAX,
    EXPL_SYNTAX,
    EXPLANATION_TOO_LONG,
    NO_ENTRY_FOUND,
    TERM_TOO_LONG,
)

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _format(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


class UntouchableStore:
    """Fails the test if the processor reaches storage."""

    def append(self, *args, **kwargs):
        raise AssertionError("storage must not be touched")

    def append_ranked(self, *args, **kwargs):
        raise AssertionError("storage must not be touched")

    def query_by_key(self, *args, **kwargs):
        raise AssertionError("storage must not be touched")


def _setup(tmp_path, config: "ExplConfig | None" = None) -> tuple[ExplCommands, SQLiteEntryStore]:
    store = SQLiteEntryStore(str(tmp_path / "expl.db"), now=lambda: FIXED_NOW)
    return ExplCommands(store=store, format_timestamp=_format, config=config), store


def _add(commands: ExplCommands, text: str, user: str = "alice") -> str:
    response = commands.handle(CommandRequest(text=f"!add {text}", user_name=user))
    assert response is not None
    return response.text or ""


def _expl_lines(commands: ExplCommands, term: str) -> tuple[str, list[str]]:
    response = commands.handle(CommandRequest(text=f"!expl {term}", user_name="bob"))
    assert response is not None
    [attachment] = response.attachments
    header, _, rest = attachment.text.partition("\n```\n")
    return header, rest[: -len("\n```")].split("\n")


def test_add_on_empty_store(tmp_path) -> None:
    commands, store = _setup(tmp_path)
    text = _add(commands, "widget A cool thing")

    assert "widget[1/p1]" in text
    [entry] = list(store.query_by_key("widget"))
    assert entry.id == 1
    assert entry.explanation == "A cool thing"
    assert entry.author == "alice"


def test_expl_on_empty_store(tmp_path) -> None:
    commands, _ = _setup(tmp_path)
    response = commands.handle(CommandRequest(text="!expl widget"))

    assert response is not None
    assert response.text == NO_ENTRY_FOUND
    assert response.attachments == ()


def test_expl_lists_entries_with_metadata(tmp_path) -> None:
    commands, _ = _setup(tmp_path)
    _add(commands, "Café first  one")
    _add(commands, "CAFÉ second", user="carol")

    header, lines = _expl_lines(commands, "café")
    assert header == "I found the following 2 entries:"
    assert lines == [
        "Café[1]: first one (alice, 2024-01-01)",
        "CAFÉ[2]: second (carol, 2024-01-01)",
    ]


def test_add_without_author(tmp_path) -> None:
    commands, _ = _setup(tmp_path)
    commands.add(CommandRequest(text="!add widget anonymous"))
    _, lines = _expl_lines(commands, "widget")
    assert lines == ["widget[1]: anonymous (2024-01-01)"]


def test_explanation_whitespace_is_rendered_flat(tmp_path) -> None:
    commands, _ = _setup(tmp_path)
    _add(commands, "widget a\tb\nc")
    _, lines = _expl_lines(commands, "widget")
    assert "a b c" in lines[0]


def test_overlong_term_is_rejected_without_write(tmp_path) -> None:
    commands, store = _setup(tmp_path)
    _add(commands, "widget fine")
    before = store.count()

    assert _add(commands, "w" * 51 + " too long") == TERM_TOO_LONG
    # 26 emoji are 26 code points but 52 UTF-16 units.
    assert _add(commands, "\U0001f600" * 26 + " too long") == TERM_TOO_LONG
    assert store.count() == before


def test_length_limits_are_inclusive(tmp_path) -> None:
    commands, store = _setup(tmp_path)
    assert "[1/p1]" in _add(commands, "w" * 50 + " " + "x" * 200)
    assert _add(commands, "w " + "x" * 201) == EXPLANATION_TOO_LONG
    assert store.count() == 1


def test_custom_limits(tmp_path) -> None:
    commands, _ = _setup(tmp_path, ExplConfig(max_term_units=3, max_explanation_units=5, max_results=2))
    assert _add(commands, "abcd x") == TERM_TOO_LONG
    assert _add(commands, "abc 123456") == EXPLANATION_TOO_LONG
    for n in range(3):
        _add(commands, f"abc e{n}")
    header, lines = _expl_lines(commands, "abc")
    assert header == "I found 3 entries, showing the last 2:"
    assert lines == ["abc[2]: e1 (alice, 2024-01-01)", "abc[3]: e2 (alice, 2024-01-01)"]


def test_syntax_errors_do_not_touch_storage() -> None:
    commands = ExplCommands(store=UntouchableStore(), format_timestamp=_format)

    for text in ("!add", "!add widget", "!add widget   "):
        response = commands.handle(CommandRequest(text=text))
        assert response is not None and response.text == ADD_SYNTAX
    for text in ("!expl", "!expl two words", "!expl   "):
        response = commands.handle(CommandRequest(text=text))
        assert response is not None and response.text == EXPL_SYNTAX


def test_handle_ignores_other_text() -> None:
    commands = ExplCommands(store=UntouchableStore(), format_timestamp=_format)
    assert commands.handle(CommandRequest(text="hello there")) is None
    assert commands.handle(CommandRequest(text="")) is None
    assert commands.handle(CommandRequest(text="!additional stuff")) is None


def test_command_word_is_case_insensitive(tmp_path) -> None:
    commands, store = _setup(tmp_path)
    response = commands.handle(CommandRequest(text="!ADD widget thing"))
    assert response is not None
    assert store.count() == 1


def test_soft_delete_renumbers_normal_but_not_permanent(tmp_path) -> None:
    commands, store = _setup(tmp_path)
    for n in range(1, 4):
        _add(commands, f"widget entry{n}")
    second = [e for e in store.query_by_key("widget")][1]
    store.set_enabled(second.id, False)

    _, lines = _expl_lines(commands, "widget")
    assert lines == [
        "widget[1]: entry1 (alice, 2024-01-01)",
        "widget[2]: entry3 (alice, 2024-01-01)",
    ]
    assert "widget[3/p4]" in _add(commands, "widget entry4")


def test_more_entries_than_cap(tmp_path) -> None:
    commands, _ = _setup(tmp_path)
    for n in range(1, 52):
        _add(commands, f"widget entry{n}")

    header, lines = _expl_lines(commands, "widget")
    assert header == "I found 51 entries, showing the last 50:"
    assert len(lines) == 50
    assert lines[0].startswith("widget[2]: entry2 ")
    assert lines[-1].startswith("widget[51]: entry51 ")
