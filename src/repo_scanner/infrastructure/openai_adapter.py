"""OpenAI adapter — implements the LlmGateway port.

Works against any OpenAI-compatible chat-completions endpoint (OpenAI
itself, Groq, a local proxy) through ``base_url``.
"""

from __future__ import annotations

import logging

from openai import APIStatusError, AsyncOpenAI, AuthenticationError, RateLimitError

from repo_scanner.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        base_url: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        timeout: float = 60.0,
    ) -> None:
        self._client = AsyncOpenAI(
            api_key=api_key, base_url=base_url, timeout=timeout, max_retries=2
        )
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system + user prompt and return the completion text."""
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
            content = response.choices[0].message.content if response.choices else None
            if not content:
                raise LlmError("Empty response from API")
            return content

        except AuthenticationError as exc:
            raise LlmError(
                "Invalid LLM API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            logger.error("LLM rate limit: %s", exc)
            raise LlmError("Rate limit exceeded. Please try again in a moment.") from exc

        except APIStatusError as exc:
            logger.error("LLM API error: %s %s", exc.status_code, exc.message)
            if exc.status_code == 413:
                raise LlmError("Request too large. Please try with fewer files.") from exc
            raise LlmError(f"LLM API error: {exc.status_code}") from exc

        except LlmError:
            raise

        except Exception as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
