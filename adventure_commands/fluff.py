"""
Fluff Removal
=============

Undoes the decoration that the adventure input modes add to whatever
the player typed, so the dispatcher sees the line the player meant.

The input layer offers three submission styles. Each one wraps the
player's text differently before it ever reaches us:

    Mode    Player types            Host receives
    ----    ------------            -------------
    say     /heal ayla              > You say "/heal ayla"
    do      /heal ayla              > You /heal ayla.
    story   /heal ayla              /heal ayla

The wrapping is lossy. Say mode only appends the closing quote when
the text doesn't already end in one, and do mode only appends the
period when the text doesn't already end in '.' or '"'. A trailing
period typed by the player is therefore indistinguishable from one
the mode added, and we discard both. A closing quote that the mode
omitted is repaired later by the tokenizer (see tokenizer.py).

Mode Precedence
---------------
Detection is a prioritized list of pure extractor functions, each
taking the full text and returning the unwrapped line or None:

    say  →  do  →  story

Say is tried first because every say submission also has the shape
of a do submission ("> You say ..."). Story matches any single line,
so normalize() only returns None for a blank line, for a say/do
submission with nothing inside the wrapper, or for text that spans
more than one line. A command is always a single line.

Matching is lenient about the wrapper itself: any run of whitespace
separates its words, and "you" and "say" match in any case, so
"> YOU SAY ..." is read as say mode too.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class InputMode(Enum):
    """The submission styles offered by the input layer."""
    SAY = "say"
    DO = "do"
    STORY = "story"


_LINE_BREAK = re.compile(r'[\n\r\u2028\u2029]')
# Patterns must match the whole input.
_SAY_PATTERN = re.compile(r'>\s+you\s+say\s+"(.*)', re.IGNORECASE)
_DO_PATTERN = re.compile(r'>\s+you\s+(.+)', re.IGNORECASE)


def _extract_say(text: str) -> Optional[str]:
    match = _SAY_PATTERN.fullmatch(text)
    if match is None:
        return None
    inner = match.group(1)
    return inner[:-1] if inner.endswith('"') else inner


def _extract_do(text: str) -> Optional[str]:
    match = _DO_PATTERN.fullmatch(text)
    if match is None:
        return None
    inner = match.group(1)
    return inner[:-1] if inner.endswith('.') else inner


def _extract_story(text: str) -> Optional[str]:
    return text


@dataclass(frozen=True)
class FluffRemover:
    """One entry in the mode precedence list."""
    mode: InputMode
    extract: Callable[[str], Optional[str]]


FLUFF_REMOVERS: tuple[FluffRemover, ...] = (
    FluffRemover(InputMode.SAY, _extract_say),
    FluffRemover(InputMode.DO, _extract_do),
    FluffRemover(InputMode.STORY, _extract_story),
)


def classify(text: str) -> Optional[tuple[InputMode, str]]:
    """Find the input mode that produced text and unwrap it.

    Parameters
    ----------
    text : str
        The submitted text, already trimmed by the caller.

    Returns
    -------
    tuple[InputMode, str] or None
        The first mode whose pattern matches the entire text, with
        the extracted line. None when the text (or what is left of
        it after unwrapping) is empty or whitespace, and None for any
        text spanning more than one line.
    """
    if not text.strip() or _LINE_BREAK.search(text):
        return None

    for remover in FLUFF_REMOVERS:
        raw_line = remover.extract(text)
        if raw_line is None:
            continue
        if not raw_line.strip():
            return None
        return remover.mode, raw_line

    return None


def normalize(text: str) -> Optional[str]:
    """Return the line the player meant, without mode fluff, or None."""
    found = classify(text)
    if found is None:
        return None
    return found[1]


def apply_fluff(text: str, mode: InputMode) -> str:
    """Decorate text the way the input layer does for the given mode.

    This is the inverse direction of normalize(), used by the demo
    host and the tests to produce realistic submissions.
    """
    if mode is InputMode.SAY:
        closing = "" if text.endswith('"') else '"'
        return f'> You say "{text}{closing}'
    if mode is InputMode.DO:
        period = "" if text.endswith(('.', '"')) else "."
        return f"> You {text}{period}"
    if mode is InputMode.STORY:
        return text
    raise ValueError(f"Unknown input mode: {mode!r}")
