"""
Gemini Client - Generative text over the generateContent REST endpoint

Single place that talks to the generative text service. Used by the
summarization service, the music source and the /api/ai/generate proxy.

Request:  {"contents": [{"parts": [{"text": ...}]}], "generationConfig": {...}}
Response: {"candidates": [{"content": {"parts": [{"text": ...}]}}]}
"""

from typing import Any, Dict, Optional

import httpx
import logfire

from thinksearch.config import DEFAULT_MAX_OUTPUT_TOKENS, DEFAULT_TEMPERATURE, GEMINI_URL
from thinksearch.errors import GenerationError


class GeminiClient:
    """Thin async client for the generateContent endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        url: str = GEMINI_URL,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.url = url
        self._client = client

    async def generate(
        self,
        prompt: str,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
    ) -> Dict[str, Any]:
        """
        Send one prompt and return the raw response JSON.

        Raises:
            GenerationError: missing key, network failure or non-2xx status
        """
        if not self.api_key:
            raise GenerationError("Gemini API key is not configured.", status_code=500)

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }

        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, body)
        except httpx.HTTPError as exc:
            logfire.warn("Gemini request failed: {error}", error=str(exc))
            raise GenerationError("Failed to generate AI output.", status_code=500) from exc

        if not response.is_success:
            raise GenerationError(_error_message(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise GenerationError("Gemini response was not JSON.", status_code=502) from exc

    async def _post(self, client: httpx.AsyncClient, body: Dict[str, Any]) -> httpx.Response:
        return await client.post(
            self.url,
            params={"key": self.api_key},
            json=body,
            headers={"Content-Type": "application/json"},
        )

    async def generate_text(self, prompt: str, **kwargs) -> str:
        """Generate and return the first text part, raising if there is none."""
        payload = await self.generate(prompt, **kwargs)
        text = first_text(payload)
        if not text:
            raise GenerationError("Gemini response was empty.", status_code=502)
        return text


def first_text(payload: Any) -> str:
    """First text part of the first candidate, or '' when absent."""
    try:
        candidate = payload["candidates"][0]
        text = candidate["content"]["parts"][0].get("text") or ""
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""
    return text.strip() if isinstance(text, str) else ""


def joined_text(payload: Any) -> str:
    """All text parts of all candidates joined by newlines."""
    if not isinstance(payload, dict):
        return ""
    parts = []
    for candidate in payload.get("candidates") or []:
        content = (candidate or {}).get("content") or {}
        for part in content.get("parts") or []:
            text = (part or {}).get("text")
            if text:
                parts.append(text)
    return "\n".join(parts).strip()


def _error_message(response: httpx.Response) -> str:
    try:
        message = response.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    fallback = f"Gemini API error: {response.status_code} {response.reason_phrase}"
    logfire.warn("Gemini returned {status}", status=response.status_code)
    return message or fallback
