"""
Argument Tokenizer
==================

Splits the text after a command name into argument tokens.

    /heal "north wall" 5   →   ['"north wall"', '5']

Rules
-----
- Whitespace separates tokens.
- A double-quoted span is kept together as one token, quotes
  included, even when it contains whitespace.
- Quoted and unquoted fragments with no whitespace between them
  join into a single token: foo"bar baz"qux is one token.
- An opening quote with no closing quote runs to the end of input.

Truncation Repair
-----------------
Say mode omits its own closing quote when the player's text already
ended with one, and fluff removal then strips that final quote as
if the mode had added it. The result is a last argument like
'"north wall' with its closing quote gone. When the last token
opens a quote it never closes, a synthetic '"' is appended.
Only the last token gets this treatment.
"""

from __future__ import annotations

import re

_TOKEN_PATTERN = re.compile(r'(?:[^\s"]+|"[^"]*"?)+')


def split_args(arg: str) -> list[str]:
    """Split an argument string into tokens.

    Parameters
    ----------
    arg : str
        Everything after the command name. May be empty.

    Returns
    -------
    list[str]
        Tokens in order. Empty for empty or whitespace-only input.
    """
    arg = arg.strip()
    if not arg:
        return []

    tokens = _TOKEN_PATTERN.findall(arg)

    last = tokens[-1]
    if last.startswith('"') and (len(last) == 1 or not last.endswith('"')):
        tokens[-1] = last + '"'

    return tokens
