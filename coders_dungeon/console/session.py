"""Navigation state for one console player.

The session walks a repository through the dungeon API. Every transition
that talks to the backend runs inside ``_loading()``: ``is_loading`` is set
for the duration of the call, and a failed call only appends a transcript
line, leaving the navigation fields as they were.
"""

from __future__ import annotations

import random
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Protocol, Union

from loguru import logger

from coders_dungeon.console import messages as msg
from coders_dungeon.console.api import DungeonAPIError
from coders_dungeon.core.errors import InvalidRepoRefError
from coders_dungeon.schemas.repo import DirEntry, FileEntry, FileRecord, RepoEntry
from coders_dungeon.services.describe import FALLBACK_DESCRIPTION
from coders_dungeon.utils.repo_ref import join_path, normalize_path, parse_owner_repo

READ_PREVIEW_CHARS = 500


class DungeonBackend(Protocol):
    def get_root(self, owner: str, repo: str) -> List[RepoEntry]: ...

    def get_path(
        self, owner: str, repo: str, path: str, describe: bool = True
    ) -> Union[FileRecord, List[RepoEntry]]: ...

    def get_structure(self, owner: str, repo: str) -> str: ...

    def describe(self, code: str, type: str = "snippet", file_name: Optional[str] = None) -> str: ...


class SessionStatus(str, Enum):
    NO_REPO_LOADED = "no_repo_loaded"
    REPO_LOADED = "repo_loaded"
    LOADING = "loading"


@dataclass
class NavigationState:
    current_path: str = ""
    current_directory: List[RepoEntry] = field(default_factory=list)
    breadcrumbs: List[str] = field(default_factory=list)
    history: List[str] = field(default_factory=list)
    inventory: List[str] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
    repo_owner: str = ""
    repo_name: str = ""
    is_loading: bool = False


class DungeonSession:
    def __init__(self, api: DungeonBackend, rng: Optional[random.Random] = None) -> None:
        self.api = api
        self.rng = rng or random.Random()
        self.state = NavigationState(messages=list(msg.WELCOME))

    @property
    def status(self) -> SessionStatus:
        if self.state.is_loading:
            return SessionStatus.LOADING
        if self.state.repo_name:
            return SessionStatus.REPO_LOADED
        return SessionStatus.NO_REPO_LOADED

    def say(self, *lines: str) -> None:
        self.state.messages.extend(lines)

    @contextmanager
    def _loading(self, failure: str) -> Iterator[None]:
        self.state.is_loading = True
        try:
            yield
        except (DungeonAPIError, ValueError) as e:
            logger.debug(f"backend call failed: {e}")
            self.say(f"{failure} {e}")
        finally:
            self.state.is_loading = False

    def _find(self, name: str) -> Optional[RepoEntry]:
        wanted = name.lower()
        for item in self.state.current_directory:
            if item.name.lower() == wanted:
                return item
        return None

    def _require_repo(self) -> bool:
        if self.state.repo_name:
            return True
        self.say("🗺️ No dungeon is currently loaded. Enter a repository to begin your adventure.")
        return False

    # transitions

    def load(self, owner_slash_repo: str) -> None:
        if self.state.repo_name:
            self.say(f'🏰 You are already exploring {self.state.repo_name}. Type "exit" to leave it first.')
            return
        try:
            owner, repo = parse_owner_repo(owner_slash_repo)
        except InvalidRepoRefError as e:
            self.say(f"❌ The portal to this repository is sealed. {e}")
            return

        with self._loading("❌ The portal to this repository is sealed."):
            listing = self.api.get_root(owner, repo)
            s = self.state
            s.current_path = ""
            s.current_directory = listing
            s.breadcrumbs = []
            s.repo_owner, s.repo_name = owner, repo
            self.say(*msg.entered_repo(repo))

    def go(self, name: str) -> None:
        if not self._require_repo():
            return
        name = name.strip().strip("/")
        if not name:
            self.say("🗺️ Please specify a direction or chamber name to explore.")
            return
        if name in msg.COMPASS:
            self.say(
                f"🧭 You move {name}, but find yourself in the same chamber. "
                "The dungeon's magic keeps you within the current realm."
            )
            return

        match = self._find(name)

        with self._loading(f"🚫 The path to {name} is blocked by ancient wards."):
            # httpx would collapse dot segments into a different chamber
            child = normalize_path(join_path(self.state.current_path, match.name if match else name))
            result = self.api.get_path(self.state.repo_owner, self.state.repo_name, child)
            if isinstance(result, list):
                s = self.state
                s.breadcrumbs.append(s.current_path)
                s.history.append(child)
                s.current_path = child
                s.current_directory = result
                self.say(
                    self.rng.choice(msg.ROOM_DESCRIPTIONS).format(name=name),
                    f"You see {len(result)} artifacts and chambers to explore.",
                )
            else:
                self.say(
                    f"📜 You examine the {name} artifact.",
                    result.ai_description or FALLBACK_DESCRIPTION,
                )

    def back(self) -> None:
        if not self.state.breadcrumbs:
            self.say(msg.NO_BREADCRUMBS)
            return

        previous = self.state.breadcrumbs[-1]
        with self._loading("❌ The path back is blocked by ancient wards."):
            result = self.api.get_path(self.state.repo_owner, self.state.repo_name, previous)
            if not isinstance(result, list):
                raise DungeonAPIError(f"{previous} is no longer a chamber.")
            s = self.state
            s.breadcrumbs.pop()
            s.current_path = previous
            s.current_directory = result
            self.say(
                self.rng.choice(msg.BACK_DESCRIPTIONS),
                f"You are now in the {previous or 'root'} chamber.",
            )

    def examine(self, name: str) -> None:
        if not self._require_repo():
            return
        if not name:
            self.say("🔍 Please specify an artifact to examine with your arcane sight.")
            return

        item = self._find(name)
        if item is None:
            self.say(f'👁️ You search the chamber but find no artifact named "{name}".')
            return
        if isinstance(item, DirEntry):
            self.say(f'🏛️ {item.name} is a chamber leading to deeper realms. Type "go {item.name}" to enter its depths.')
            return

        with self._loading(f"❌ The {item.name} artifact is protected by powerful magic."):
            record = self._fetch_file(item)
            self.say(f"🔮 Examining {item.name}: {record.ai_description or FALLBACK_DESCRIPTION}")
            label = f"{item.name} ({self.state.current_path or 'root'})"
            if label not in self.state.inventory:
                self.state.inventory.append(label)

    def read(self, name: str) -> None:
        if not self._require_repo():
            return
        if not name:
            self.say("📖 Please specify a spell or scroll to read.")
            return

        item = self._find(name)
        if item is None:
            self.say(f'👁️ You search the chamber but find no scroll named "{name}".')
            return
        if isinstance(item, DirEntry):
            self.say(f"🏛️ {item.name} is a chamber, not a scroll. Its walls bear no runes to read.")
            return

        with self._loading(f"❌ The runes of {item.name} resist your reading."):
            record = self._fetch_file(item, describe=False)
            text = record.decoded_content
            description = self.api.describe(text, "snippet", item.name)
            self.say(
                f"📜 You unroll the {item.name} scroll...",
                f"🔮 {description}",
                text[:READ_PREVIEW_CHARS],
            )

    def _fetch_file(self, item: FileEntry, describe: bool = True) -> FileRecord:
        result = self.api.get_path(self.state.repo_owner, self.state.repo_name, item.path, describe=describe)
        if isinstance(result, list):
            raise DungeonAPIError(f"{item.name} turned out to be a chamber.")
        return result

    def show_inventory(self) -> None:
        if not self.state.inventory:
            self.say(
                "🎒 Your magical satchel is empty.",
                "💡 Explore chambers and examine artifacts to collect knowledge.",
            )
            return
        self.say("🎒 Your magical satchel contains:")
        self.say(*(f"  {i}. {label}" for i, label in enumerate(self.state.inventory, start=1)))

    def structure(self) -> None:
        if not self._require_repo():
            return
        with self._loading("❌ The dungeon map is obscured by magical interference."):
            tree = self.api.get_structure(self.state.repo_owner, self.state.repo_name)
            self.say(
                "🗺️ You unfurl the ancient Dungeon Map. The parchment reveals the repository's structure:",
                tree,
            )

    def help(self) -> None:
        self.say(*msg.HELP)

    def clear(self) -> None:
        self.state.messages = [msg.CLEARED]

    def exit(self) -> None:
        self.state = NavigationState(messages=[msg.FAREWELL])
