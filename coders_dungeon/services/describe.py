from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from loguru import logger

from coders_dungeon.core.config import settings
from coders_dungeon.services.llm.gemini_chat import GeminiChatLLM

FALLBACK_DESCRIPTION = "This artifact's purpose is shrouded in mystery..."

SYSTEM_LINE = "You are a creative dungeon master who describes code in a fantasy adventure style."


class TextLLM(Protocol):
    def generate(self, prompt: str) -> str: ...


class DescriptionKind(str, Enum):
    FILE = "file"
    SNIPPET = "snippet"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "DescriptionKind":
        return cls.FILE if (label or "").lower() == "file" else cls.SNIPPET


@dataclass(frozen=True)
class DescriptionResult:
    text: str
    ok: bool
    error: Optional[str] = None


def truncate_for(kind: DescriptionKind, text: str) -> str:
    limit = settings.DESCRIBE_FILE_CHARS if kind is DescriptionKind.FILE else settings.DESCRIBE_SNIPPET_CHARS
    return (text or "")[:limit]


def build_prompt(text: str, kind: DescriptionKind, file_name: Optional[str] = None) -> str:
    code = truncate_for(kind, text)
    if kind is DescriptionKind.FILE:
        ask = (
            "Describe what this code file does in a creative, fantasy-themed way, "
            "as if it were a magical artifact or location in a dungeon. Keep it under 3 sentences."
        )
    else:
        ask = (
            "Describe what this code function does in a creative, fantasy-themed way, "
            "as if it were a spell or scroll. Keep it under 2 sentences."
        )
    header = f"File: {file_name}\n" if file_name else ""
    return f"{SYSTEM_LINE} {ask}\n\n{header}{code}"


class DescriptionService:
    """
    Themed code descriptions from Gemini.

    describe() never raises: a missing key, an upstream error or an empty
    answer all give FALLBACK_DESCRIPTION, and the cause only goes to the log.
    Use describe_result() to see which one happened.
    """

    def __init__(self, llm_factory: Optional[Callable[[], TextLLM]] = None) -> None:
        self._llm_factory = llm_factory or GeminiChatLLM
        self._llm: Optional[TextLLM] = None

    def _get_llm(self) -> TextLLM:
        if self._llm is None:
            self._llm = self._llm_factory()
        return self._llm

    def _generate(self, prompt: str) -> str:
        return self._get_llm().generate(prompt)

    async def describe_result(
        self, text: str, kind: DescriptionKind = DescriptionKind.FILE, file_name: Optional[str] = None
    ) -> DescriptionResult:
        prompt = build_prompt(text, kind, file_name)
        try:
            answer = await asyncio.to_thread(self._generate, prompt)
        except Exception as e:
            logger.error(f"AI description error: {e}")
            return DescriptionResult(text=FALLBACK_DESCRIPTION, ok=False, error=str(e))

        answer = (answer or "").strip()
        if not answer:
            logger.warning("AI description came back empty")
            return DescriptionResult(text=FALLBACK_DESCRIPTION, ok=False, error="empty response")
        return DescriptionResult(text=answer, ok=True)

    async def describe(
        self, text: str, kind: DescriptionKind = DescriptionKind.FILE, file_name: Optional[str] = None
    ) -> str:
        return (await self.describe_result(text, kind, file_name)).text

    @property
    def configured(self) -> bool:
        return self._llm is not None or bool(settings.GEMINI_API_KEY)
