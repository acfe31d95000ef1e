"""Demo application for command_finder.

Shows how to build an Application, register a provider programmatically,
and run one interactive pick-and-run cycle.

Usage:
    uv run python -m examples.demo

    # Run a command directly (no prompt):
    uv run python -m examples.demo save-all
"""

from __future__ import annotations

import asyncio
import sys

from command_finder import Application, Config
from command_finder.providers import register_provider
from examples.demo_provider import DemoProvider


async def main() -> None:
    args = sys.argv[1:]
    app = Application(config=Config(app_name="command_finder_demo"))

    register_provider(DemoProvider(), app.registry)
    app.initialize()

    if args:
        ok = await app.run_command(args[0], " ".join(args[1:]))
        sys.exit(0 if ok else 1)

    # Try typing "save" and pressing Tab, or "buffer" to match by description.
    await app.invoke_interactive()


if __name__ == "__main__":
    asyncio.run(main())
