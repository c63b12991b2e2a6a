"""Hosted chat-completion provider via LiteLLM."""
from __future__ import annotations

import logging
from typing import Any

from trail_quest.llm.output_parser import OutputParser
from trail_quest.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class LiteLLMProvider(LLMProvider):
    def __init__(self, model: str = "gpt-4o-mini", api_base: str | None = None,
                 timeout: float = 30.0):
        self._model = model
        self.api_base = api_base
        self.timeout = timeout

    def generate(self, prompt: str, system_prompt: str | None = None,
                 temperature: float = 0.3, max_tokens: int = 512) -> str:
        try:
            import litellm
            messages: list[dict[str, str]] = []
            if system_prompt:
                messages.append({"role": "system", "content": system_prompt})
            messages.append({"role": "user", "content": prompt})

            kwargs: dict[str, Any] = {}
            if self.api_base:
                kwargs["api_base"] = self.api_base
            response = litellm.completion(
                model=self._model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=self.timeout,
                **kwargs,
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"LLM generation failed: {e}")
            return ""

    def generate_structured(self, prompt: str, system_prompt: str | None = None,
                            temperature: float = 0.3, max_tokens: int = 512) -> dict[str, Any]:
        json_system = (system_prompt or "") + "\n\nYou MUST respond with valid JSON only. No other text."
        text = self.generate(prompt, json_system, temperature, max_tokens)
        return self._parse_json(text)

    def is_available(self) -> bool:
        try:
            import litellm
            env = litellm.validate_environment(model=self._model)
            return bool(env.get("keys_in_environment"))
        except Exception:
            return False

    @property
    def model_name(self) -> str:
        return self._model

    def _parse_json(self, text: str) -> dict[str, Any]:
        if not text.strip():
            return {}
        parsed = OutputParser.extract_json_from_text(text)
        if parsed is None:
            logger.warning(f"Failed to parse JSON from LLM: {text[:100]}...")
            return {}
        return parsed
