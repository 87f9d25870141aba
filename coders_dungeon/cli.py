"""CLI entry point: serve the dungeon API or play it from a terminal."""

from __future__ import annotations

import argparse
from typing import Callable, Optional

from coders_dungeon.core.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coders-dungeon",
        description="Explore codebases as if they were dungeons.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the dungeon API server.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=settings.PORT)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes.")

    play = sub.add_parser("play", help="Start an interactive dungeon console.")
    play.add_argument("repo", nargs="?", default=None, help="Optional owner/repo to enter right away.")
    play.add_argument("--api-url", default=settings.API_BASE_URL, help="Base URL of the dungeon API.")

    return parser


def run_console(
    dispatcher,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    first_command: Optional[str] = None,
) -> None:
    session = dispatcher.session
    shown = 0
    transcript = session.state.messages

    def flush() -> None:
        nonlocal shown, transcript
        if session.state.messages is not transcript:
            # clear/exit replaced the transcript
            transcript = session.state.messages
            shown = 0
        for line in transcript[shown:]:
            write(line)
        shown = len(transcript)

    flush()
    if first_command:
        dispatcher.dispatch(first_command)
        flush()

    while True:
        try:
            line = read_line("$> ")
        except (EOFError, KeyboardInterrupt):
            write("")
            return
        dispatcher.dispatch(line)
        flush()


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("coders_dungeon.main:app", host=args.host, port=args.port, reload=args.reload)
        return

    from coders_dungeon.console.api import DungeonAPI
    from coders_dungeon.console.dispatcher import CommandDispatcher
    from coders_dungeon.console.session import DungeonSession

    api = DungeonAPI(base_url=args.api_url)
    try:
        run_console(CommandDispatcher(DungeonSession(api)), first_command=args.repo)
    finally:
        api.close()


if __name__ == "__main__":
    main()
