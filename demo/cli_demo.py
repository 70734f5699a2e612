#!/usr/bin/env python3
"""
Interactive CLI demo for the cinematic filter studio.

A minimal rendering collaborator: it prints every SessionView the session
publishes and maps typed commands onto the session's input events.
"""
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from cinefilter import FilterStudioApp, SessionView
from cinefilter.ingestion import ImageFile
from cinefilter.exceptions import UnreadableFileError

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)


def print_banner():
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  Cinematic Vivid Warm Filter - Interactive CLI Demo")
    print("=" * 60)
    print("\nCommands:")
    print("  load <path>   Upload a photo (PNG, JPG, GIF up to 10MB; first of several)")
    print("  apply         Apply the Vivid Warm filter")
    print("  reset         Start over")
    print("\nType 'quit' or 'exit' to end the session.")
    print("-" * 60 + "\n")


def render(view: SessionView):
    """Print the session as the UI would show it."""
    if view.show_uploader:
        print("📂 No photo loaded.")
    else:
        print(f"🖼️  Photo loaded ({len(view.image)} chars as data URL)")
    if view.pending:
        print("⏳ Applying Filter...")
    elif not view.show_uploader:
        print(f"🎨 filter: {view.css_filter}")
    if view.error:
        print(f"❌ Error: {view.error}")
    print("-" * 60)


async def handle_command(session, command: str) -> None:
    name, _, argument = command.partition(" ")
    name = name.lower()

    if name == "load":
        paths = argument.split()
        if not paths:
            print("Usage: load <path> [<path> ...]")
            return
        try:
            files = [ImageFile.from_path(path) for path in paths]
        except UnreadableFileError as e:
            print(f"❌ {e}")
            return
        # Like the file picker, only the first file is used
        await session.load_selection(files)
    elif name == "apply":
        if not session.view.can_request:
            print("Load a photo first.")
            return
        await session.request_filter()
    elif name == "reset":
        session.reset()
    else:
        print(f"Unknown command: {name}")


async def run_loop(session) -> None:
    """Main CLI loop, on a single event loop."""
    while True:
        try:
            command = (await asyncio.to_thread(input, "> ")).strip()

            if not command:
                continue

            if command.lower() in ['quit', 'exit', 'q']:
                print("\n👋 Goodbye!\n")
                break

            await handle_command(session, command)

        except KeyboardInterrupt:
            print("\n\n👋 Interrupted. Goodbye!\n")
            break
        except EOFError:
            print("\n\n👋 Goodbye!\n")
            break


def main():
    print_banner()

    app = FilterStudioApp()
    ok, error = app.try_initialize()
    if not ok:
        print(f"\n❌ Failed to initialize: {error}")
        return 1

    session = app.create_session()
    session.subscribe(render)

    asyncio.run(run_loop(session))
    return 0


if __name__ == "__main__":
    sys.exit(main())
