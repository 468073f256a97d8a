"""
Input Context
=============

The object the host hands to the command system once per player
submission. The dispatcher inspects it, may rewrite it, and then
passes the very same object to the matched command's handler.

Handler Contract
----------------
A handler receives (context, args) and may change only:

    text      The narrative text the host will continue with.
              Usually already "" when hide_command is on.
    message   Out-of-band notice shown to the player. Stored in
              the host's session state as state["message"].
    use_ai    Set False to ask the host to skip the AI model for
              this submission (reported as "stop" by
              finalize_output()).

Everything under info (turn count, characters, memory length,
character budget) is host metadata and read-only. world_entries
and history are carried through for handlers that want to read
them; the command system itself never touches them.

A fresh InputContext is built for every submission and thrown away
after the host reads finalize_output().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class InputContext:
    """Mutable per-submission state shared by host, dispatcher and handlers."""
    text: str
    state: dict = field(default_factory=dict)
    info: dict = field(default_factory=dict)
    world_entries: list = field(default_factory=list)
    history: list = field(default_factory=list)
    use_ai: bool = True

    @property
    def message(self) -> Optional[str]:
        return self.state.get("message")

    @message.setter
    def message(self, value: Optional[str]) -> None:
        self.state["message"] = value

    # Read-only host metadata

    @property
    def action_count(self) -> Optional[int]:
        return self.info.get("action_count")

    @property
    def characters(self) -> Optional[list]:
        return self.info.get("characters")

    @property
    def memory_length(self) -> Optional[int]:
        return self.info.get("memory_length")

    @property
    def max_chars(self) -> Optional[int]:
        return self.info.get("max_chars")

    def finalize_output(self) -> dict[str, Any]:
        """The shape the host consumes at the end of the cycle."""
        return {
            "text": self.text,
            "stop": not self.use_ai,
        }
