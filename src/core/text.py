"""Text helpers for glossary terms (core domain)."""

from __future__ import annotations

import re
import unicodedata

# Default-ignorable code points (Unicode DerivedCoreProperties), as ranges.
_DEFAULT_IGNORABLE = (
    (0x00AD, 0x00AD),
    (0x034F, 0x034F),
    (0x061C, 0x061C),
    (0x115F, 0x1160),
    (0x17B4, 0x17B5),
    (0x180B, 0x180F),
    (0x200B, 0x200F),
    (0x202A, 0x202E),
    (0x2060, 0x206F),
    (0x3164, 0x3164),
    (0xFE00, 0xFE0F),
    (0xFEFF, 0xFEFF),
    (0xFFA0, 0xFFA0),
    (0xFFF0, 0xFFF8),
    (0x1BCA0, 0x1BCA3),
    (0x1D173, 0x1D17A),
    (0xE0000, 0xE0FFF),
)

_WHITESPACE = re.compile(r"\s+")


def _is_default_ignorable(ch: str) -> bool:
    code = ord(ch)
    for low, high in _DEFAULT_IGNORABLE:
        if code < low:
            return False
        if code <= high:
            return True
    return False


def _strip_unwanted(text: str) -> str:
    return "".join(
        ch
        for ch in text
        if unicodedata.category(ch) != "Cc" and not _is_default_ignorable(ch)
    )


def _normalize_once(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    folded = _strip_unwanted(decomposed.casefold())
    return unicodedata.normalize("NFKC", folded)


def normalize_term(term: str) -> str:
    """Return the lookup key for a display term.

    Applies compatibility decomposition, case folding, removal of control and
    default-ignorable characters and canonical composition. A few code points
    only settle after a second pass, so we iterate to a fixed point; this
    keeps normalize_term(normalize_term(x)) == normalize_term(x).
    """

    current = _normalize_once(term)
    while True:
        again = _normalize_once(current)
        if again == current:
            return current
        current = again


def utf16_length(text: str) -> int:
    """Number of 16-bit code units in the UTF-16 encoding of text."""

    return len(text.encode("utf-16-le")) // 2


def collapse_whitespace(text: str) -> str:
    """Replace every run of whitespace (tabs and newlines included) with one space."""

    return _WHITESPACE.sub(" ", text)
