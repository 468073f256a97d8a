"""
Command Dispatcher
==================

The registry and router for adventure commands.

Role in the System
------------------
Every player submission passes through CommandRegistry.handle()
before the host hands it to the AI. If the submission turns out to
be a command, the handler runs and the command line is hidden from
the story. Otherwise handle() returns None and the text continues
on as ordinary narrative.

    Player submits (do mode): "/heal "north wall" 5"
                  ↓
    Host receives: > You /heal "north wall" 5.
                  ↓
    fluff.normalize() → /heal "north wall" 5
                  ↓
    Prefix "/" matches → name "heal", remainder "\"north wall\" 5"
                  ↓
    Registry lookup "heal" → found!
                  ↓
    tokenizer.split_args() → ['"north wall"', '5']
                  ↓
    text cleared, message = 'Executed /heal "north wall" 5'
                  ↓
    handler(context, ['"north wall"', '5'])

Design Decisions
----------------
- Names match case-insensitively (/Heal, /HEAL, /heal all work).
- Lookup walks commands in registration order and stops at the
  first hit. Registering a second command whose name differs only
  in case is allowed but it can never be reached; a warning is
  logged.
- Unrecognized commands (e.g., "/foo") return None, not an error,
  so text that happens to start with the prefix still reaches the
  story.
- Handlers are not wrapped. If one raises, the exception reaches
  the host unchanged.
- There is no module-level registry. Build one per game with
  CommandRegistry(...) or adventure_commands.create_registry().

Classes
-------
Command
    Frozen registration record: name, handler, stops_plugins.

CommandRegistry
    Holds the commands and the prefix/hide/declare configuration,
    and dispatches InputContext objects to them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from adventure_commands.context import InputContext
from adventure_commands.fluff import classify
from adventure_commands.tokenizer import split_args

logger = logging.getLogger(__name__)

Handler = Callable[[InputContext, list[str]], Any]


@dataclass(frozen=True)
class Command:
    """A registered command.

    Attributes
    ----------
    name : str
        What the player types after the prefix. Compared
        case-insensitively; must not be empty or contain whitespace.
    handler : callable
        Called as handler(context, args). The return value is
        ignored. See context.py for what it may change.
    stops_plugins : bool
        Tells the host to skip its remaining processing for this
        submission once the command has run. Never read here.
    help_text : str
        One-line usage shown by /help.
    """
    name: str
    handler: Handler
    stops_plugins: bool = True
    help_text: str = ""

    def __post_init__(self):
        if not self.name or re.search(r'\s', self.name):
            raise ValueError(
                f"Command name must be non-empty and contain no whitespace, "
                f"got {self.name!r}"
            )

    def run(self, context: InputContext, args: list[str]) -> None:
        """Invoke the handler with the shared context."""
        self.handler(context, args)


class CommandRegistry:
    """Routes submissions to registered command handlers.

    Usage
    -----
        registry = CommandRegistry(command_prefix="/")
        registry.register(Command("heal", heal_handler))

        # Once per submission:
        context = InputContext(text=submitted_text, state=state, info=info)
        command = registry.handle(context)
        if command is not None and command.stops_plugins:
            return context.finalize_output()
        # else: keep processing as normal narrative

    Registration is expected to be finished before the first call to
    handle(). After that the registry is only read, so one instance
    can serve several contexts.
    """

    def __init__(self, command_prefix: str = "/", hide_command: bool = True,
                 declare_command: bool = True):
        if not command_prefix or re.search(r'\s', command_prefix):
            raise ValueError(
                f"Command prefix must be non-empty and contain no whitespace, "
                f"got {command_prefix!r}"
            )
        self.command_prefix = command_prefix
        self.hide_command = hide_command
        self.declare_command = declare_command
        self._commands: list[Command] = []
        # classify() only hands over single lines
        self._pattern = re.compile(
            rf'{re.escape(command_prefix)}(\S+)(?:\s+(.+))?'
        )

    @property
    def commands(self) -> tuple[Command, ...]:
        """Registered commands, in registration order."""
        return tuple(self._commands)

    def register(self, command: Command) -> None:
        """Append a command to the registry.

        A name that collides (case-insensitively) with an earlier
        registration is kept but shadowed by the earlier command.
        """
        existing = self.find(command.name)
        if existing is not None:
            logger.warning(
                f"Command '{command.name}' is shadowed by already registered "
                f"'{existing.name}' and will never run"
            )
        self._commands.append(command)

    def find(self, name: str) -> Optional[Command]:
        """Return the first command whose name matches, ignoring case."""
        lowered = name.lower()
        for command in self._commands:
            if command.name.lower() == lowered:
                return command
        return None

    def handle(self, context: InputContext) -> Optional[Command]:
        """Recognize and run a command in the submitted text.

        Parameters
        ----------
        context : InputContext
            The submission. On a match, context.text and
            context.message may be rewritten before the handler
            runs, and the handler receives this same object.

        Returns
        -------
        Command or None
            The command that ran, or None when the text is ordinary
            narrative. None always means the context was left as is.
        """
        found = classify(context.text.strip())
        if found is None:
            return None
        mode, raw_line = found

        match = self._pattern.fullmatch(raw_line)
        if match is None:
            return None
        name, arg = match.group(1), match.group(2) or ""

        command = self.find(name)
        if command is None:
            logger.debug(f"Unknown command '{name}' in {mode.value} mode, passing through")
            return None

        args = split_args(arg)
        logger.debug(f"Dispatching {self.command_prefix}{command.name} ({mode.value} mode) with args {args}")

        if self.hide_command:
            context.text = ""
            if self.declare_command and not context.message:
                context.message = self.declaration(command, args)

        command.run(context, args)
        return command

    def declaration(self, command: Command, args: list[str]) -> str:
        """Acknowledgement shown in place of a hidden command line."""
        parts = [command.name] + list(args)
        return f"Executed {self.command_prefix}{' '.join(parts)}"

    def list_commands(self) -> list[tuple[str, str]]:
        """Return (name, help_text) for every reachable command.

        Shadowed duplicates are left out. Sorted alphabetically.
        """
        seen = set()
        result = []
        for command in self._commands:
            key = command.name.lower()
            if key not in seen:
                seen.add(key)
                result.append((command.name, command.help_text))
        return sorted(result, key=lambda x: x[0].lower())
