"""The /help command: lists what the registry can run."""

from __future__ import annotations

from adventure_commands.context import InputContext
from adventure_commands.dispatcher import Command, CommandRegistry


def make_help_command(registry: CommandRegistry) -> Command:
    """Build a /help command bound to one registry.

    The listing is read at call time, so commands registered after
    /help still show up.
    """

    def help_command(context: InputContext, args: list[str]) -> None:
        lines = ["Available commands:"]
        for name, help_text in registry.list_commands():
            lines.append(f"  {help_text or registry.command_prefix + name}")
        context.message = "\n".join(lines)
        # Nothing for the AI to continue from
        context.use_ai = False

    return Command(
        name="help",
        handler=help_command,
        help_text=f"{registry.command_prefix}help — List available commands",
    )
