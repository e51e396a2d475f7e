"""
Pipeline LLM: OpenAI (primary) or Hugging Face router (fallback).
When OPENAI_API_KEY is set, uses OpenAI chat completions; otherwise uses HF router.
"""

import logging

import httpx
from openai import OpenAI

from app.core.config import (
    HF_API_KEY,
    HF_CHAT_URL,
    HF_LLM_MODEL,
    LLM_API_TIMEOUT,
    LLM_MAX_TOKENS,
    LLM_TEMPERATURE,
    OPENAI_API_KEY,
    OPENAI_LLM_MODEL,
)
from app.core.errors import LLMError, ServiceUnavailableError

logger = logging.getLogger(__name__)


class ChatModel:
    """
    Single-prompt text generation. Clients are created once and reused.

    Errors are raised, not swallowed: the question pipeline decides what the
    user sees when a call fails.
    """

    def __init__(
        self,
        openai_api_key: str = OPENAI_API_KEY,
        openai_model: str = OPENAI_LLM_MODEL,
        hf_api_key: str = HF_API_KEY,
        hf_model: str = HF_LLM_MODEL,
        temperature: float = LLM_TEMPERATURE,
        max_tokens: int = LLM_MAX_TOKENS,
        timeout: float = LLM_API_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not openai_api_key and not hf_api_key:
            raise ServiceUnavailableError("Set OPENAI_API_KEY or HF_API_KEY in .env")
        self._openai = OpenAI(api_key=openai_api_key, timeout=timeout) if openai_api_key else None
        self._openai_model = openai_model
        self._hf_api_key = hf_api_key
        self._hf_model = hf_model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._http = http_client or httpx.Client(timeout=timeout)

    @property
    def provider(self) -> str:
        return "openai" if self._openai is not None else "hf"

    def generate(self, prompt: str) -> str:
        """Send one user prompt and return the generated text (stripped)."""
        logger.info("[llm] IN  provider=%s prompt_len=%d", self.provider, len(prompt))
        logger.debug("[llm] prompt_sample=%r", prompt[:500])
        if self._openai is not None:
            return self._call_openai(prompt)
        return self._call_hf(prompt)

    def _call_openai(self, prompt: str) -> str:
        response = self._openai.chat.completions.create(
            model=self._openai_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        msg = response.choices[0].message if response.choices else None
        out = ((msg.content if msg else None) or "").strip()
        logger.info("[llm:openai] OUT response_len=%d", len(out))
        return out

    def _call_hf(self, prompt: str) -> str:
        headers = {"Authorization": f"Bearer {self._hf_api_key}", "Content-Type": "application/json"}
        payload = {
            "model": self._hf_model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }
        response = self._http.post(HF_CHAT_URL, json=payload, headers=headers)
        if response.status_code != 200:
            raise LLMError(f"HF LLM error {response.status_code}: {response.text[:200]}")
        choices = response.json().get("choices") or []
        if not choices or not isinstance(choices[0], dict):
            raise LLMError("HF LLM returned no choices")
        msg = choices[0].get("message") or {}
        out = (msg.get("content") or "").strip()
        logger.info("[llm:hf] OUT response_len=%d", len(out))
        return out
