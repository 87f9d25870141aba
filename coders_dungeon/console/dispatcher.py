from __future__ import annotations

from typing import Callable, Dict, Tuple

from coders_dungeon.console import messages as msg
from coders_dungeon.console.session import DungeonSession, SessionStatus

SESSION_FREE_VERBS = ("help", "exit", "clear", "load")


def parse_command(line: str) -> Tuple[str, str]:
    """
    Verb is the first word, the rest is one argument.
    The whole line is lower-cased first.
    """
    parts = line.strip().lower().split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


class CommandDispatcher:
    def __init__(self, session: DungeonSession) -> None:
        self.session = session
        s = session
        self._routes: Dict[str, Callable[[str], None]] = {
            "load": s.load,
            "go": s.go,
            "back": lambda _arg: s.back(),
            "examine": s.examine,
            "read": s.read,
            "inventory": lambda _arg: s.show_inventory(),
            "structure": lambda _arg: s.structure(),
            "map": lambda _arg: s.structure(),
            "help": lambda _arg: s.help(),
            "clear": lambda _arg: s.clear(),
            "exit": lambda _arg: s.exit(),
        }

    def dispatch(self, raw: str) -> None:
        if not raw.strip() or self.session.status is SessionStatus.LOADING:
            return

        verb, arg = parse_command(raw)
        self.session.say(f"> {raw.strip()}")

        if self.session.status is SessionStatus.NO_REPO_LOADED and verb not in SESSION_FREE_VERBS:
            self.session.load(raw.strip().lower())
            return

        handler = self._routes.get(verb)
        if handler is None:
            self.session.say(msg.UNKNOWN_COMMAND)
            return
        handler(arg)
