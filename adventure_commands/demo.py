#!/usr/bin/env python3
"""
Adventure Command System — Interactive Demo

This simulates the host's input loop: what you type is decorated the
way the current input mode would decorate it, then handed to the
command registry. Switch modes with :say, :do and :story. Try:

    :do
    /help
    I walk into the cave
    :say
    /HELP
    :story
    /help me "the door
    :quit

"""

from __future__ import annotations

import logging

from adventure_commands import InputContext, InputMode, apply_fluff, create_registry
from config_manager import setup_configuration, setup_logging

logger = logging.getLogger(__name__)

_MODE_SWITCHES = {
    ":say": InputMode.SAY,
    ":do": InputMode.DO,
    ":story": InputMode.STORY,
}


def main(argv=None):
    config, should_exit, _ = setup_configuration(argv)
    if should_exit:
        return 0

    setup_logging(config.console)
    registry = create_registry(config.commands)

    # Session state and metadata normally owned by the host
    state: dict = {}
    info = {"action_count": 0, "characters": [], "memory_length": 0, "max_chars": 3000}
    mode = InputMode.DO

    print("=" * 60)
    print("  Adventure Command System — Demo")
    print(f"  Type {registry.command_prefix}help for commands, :quit to exit")
    print("=" * 60)
    print()

    while True:
        try:
            line = input(f"{mode.value}> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue

        if line.lower() == ":quit":
            break

        if line.lower() in _MODE_SWITCHES:
            mode = _MODE_SWITCHES[line.lower()]
            print(f"  [mode] {mode.value}")
            continue

        submitted = apply_fluff(line, mode)
        logger.debug(f"Submitting {submitted!r}")

        state.pop("message", None)
        context = InputContext(text=submitted, state=state, info=dict(info))
        command = registry.handle(context)
        info["action_count"] += 1

        if context.message:
            print(f"  [message] {context.message}")

        output = context.finalize_output()
        if command is not None and command.stops_plugins:
            print(f"  [stopped by {registry.command_prefix}{command.name}]")
        if output["stop"]:
            print("  [AI skipped]")
        elif output["text"]:
            print(f"  [story] {output['text']}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
