from __future__ import annotations
from typing import Optional
from google import genai
from google.genai.errors import ClientError

from coders_dungeon.core.config import settings


class LLMRateLimitError(Exception):
    pass


class GeminiChatLLM:
    """Short-form text generation; descriptions are a few sentences at most."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_output_tokens: int = 256,
        temperature: float = 0.9,
    ):
        key = api_key or settings.GEMINI_API_KEY
        if not key:
            raise RuntimeError("GEMINI_API_KEY is not set")
        self.client = genai.Client(api_key=key)
        self.model = model or settings.GEMINI_CHAT_MODEL
        self.config = {"max_output_tokens": max_output_tokens, "temperature": temperature}

    def generate(self, prompt: str) -> str:
        try:
            res = self.client.models.generate_content(model=self.model, contents=prompt, config=self.config)
        except ClientError as e:
            if getattr(e, "code", None) == 429:
                raise LLMRateLimitError(str(e)) from e
            raise
        return (res.text or "").strip()
