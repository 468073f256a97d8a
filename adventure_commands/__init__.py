"""
Adventure Command System
========================

Recognizes slash-commands that players type into a text adventure,
whatever input mode they used to submit them, and runs the matching
handler before the text reaches the AI.

Architecture Overview
---------------------
The command system sits between the host's input hook and the story
model. Think of it as a filter in the input pipeline: commands are
consumed locally; everything else passes through to the story.

    ┌──────────────────┐     ┌──────────────┐     ┌──────────────────┐
    │  Player input    │────►│  Command     │────►│  Host / AI       │
    │  (say, do, story)│     │  Registry    │     │  story model     │
    └──────────────────┘     └──────┬───────┘     └──────────────────┘
                                    │
                              ┌─────▼─────┐
                              │ Handler   │──► context.message
                              │ (text is  │    (shown to player,
                              │  hidden)  │     never narrated)
                              └───────────┘

Inside the registry the line goes through three stages:

    fluff.py        strip "> You say \"...\"" / "> You ... ." wrappers
    dispatcher.py   match the prefix and the command name
    tokenizer.py    split arguments, keeping "quoted spans" together

Integration
-----------
The host builds one registry at startup and one InputContext per
submission:

    from adventure_commands import InputContext, create_registry

    registry = create_registry()

    def on_input(text, state, info):
        context = InputContext(text=text, state=state, info=info)
        command = registry.handle(context)
        if command is not None and command.stops_plugins:
            return context.finalize_output()
        # ... other input processing ...
        return context.finalize_output()

Extending the Command System
----------------------------
A command is a name plus a handler taking (context, args):

    from adventure_commands import Command

    def heal(context, args):
        target = args[0] if args else "you"
        context.message = f"{target} feels better."

    registry.register(Command("heal", heal, help_text="/heal [target] — Heal"))

Module Structure
----------------
    adventure_commands/
    ├── __init__.py          ← This file. create_registry() with built-ins.
    ├── context.py           ← InputContext and the handler contract.
    ├── fluff.py             ← Input mode detection and fluff removal.
    ├── tokenizer.py         ← Quote-aware argument splitting.
    ├── dispatcher.py        ← Command, CommandRegistry.
    ├── help.py              ← /help command.
    └── demo.py              ← Interactive loop simulating the host.

License
-------
GPL 3.0
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from adventure_commands.context import InputContext
from adventure_commands.dispatcher import Command, CommandRegistry
from adventure_commands.fluff import InputMode, apply_fluff, classify, normalize
from adventure_commands.help import make_help_command
from adventure_commands.tokenizer import split_args

if TYPE_CHECKING:
    from config_manager import CommandConfig


def create_registry(config: Optional[CommandConfig] = None) -> CommandRegistry:
    """Build a new registry from configuration with /help registered."""
    if config is None:
        registry = CommandRegistry()
    else:
        registry = CommandRegistry(
            command_prefix=config.command_prefix,
            hide_command=config.hide_command,
            declare_command=config.declare_command,
        )
    registry.register(make_help_command(registry))
    return registry


__all__ = [
    'Command',
    'CommandRegistry',
    'InputContext',
    'InputMode',
    'apply_fluff',
    'classify',
    'create_registry',
    'normalize',
    'split_args',
]
