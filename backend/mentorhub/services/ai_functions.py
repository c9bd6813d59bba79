"""
Client for the two hosted AI functions.

The console never runs a model itself. It posts a JSON body to a function
endpoint and reads one field back:

    ai-email     {action, occasion, recipient, topic, originalEmail} -> {email}
    ai-research  {ideaId, query}                                     -> {result}

One request per call: no retry, no streaming. Every failure (not configured,
transport error, non-2xx status, malformed body) is raised as
AIFunctionError; the views turn it into a fallback message.
"""

import logging
from typing import Any
from uuid import UUID

import httpx

from mentorhub.config import Settings, get_settings

logger = logging.getLogger(__name__)

EMAIL_FUNCTION = "ai-email"
RESEARCH_FUNCTION = "ai-research"


class AIFunctionError(Exception):
    """An AI function call did not produce a usable result."""

    def __init__(self, function: str, message: str) -> None:
        super().__init__(f"{function}: {message}")
        self.function = function


class AIFunctionsClient:
    """Invokes hosted AI functions over HTTP."""

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "AIFunctionsClient":
        return cls(
            base_url=settings.ai_functions_url,
            api_key=settings.ai_functions_key,
            timeout=settings.ai_request_timeout_seconds,
        )

    async def invoke(self, function: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST body to one function and return its decoded JSON object."""
        if not self.base_url:
            raise AIFunctionError(function, "AI functions URL is not configured")

        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(f"/{function}", json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AIFunctionError(function, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise AIFunctionError(function, f"request failed: {e}") from e
        except ValueError as e:
            raise AIFunctionError(function, "response was not JSON") from e

        if not isinstance(data, dict):
            raise AIFunctionError(function, "response was not a JSON object")
        if data.get("error"):
            raise AIFunctionError(function, str(data["error"]))
        return data

    async def generate_email(
        self,
        action: str,
        occasion: str | None = None,
        recipient: str | None = None,
        topic: str | None = None,
        original_email: str | None = None,
    ) -> str:
        """Compose, reply to, or rewrite an email."""
        data = await self.invoke(
            EMAIL_FUNCTION,
            {
                "action": action,
                "occasion": occasion or "",
                "recipient": recipient or "",
                "topic": topic or "",
                "originalEmail": original_email or "",
            },
        )
        return self._text_field(EMAIL_FUNCTION, data, "email")

    async def research_idea(self, idea_id: UUID, query: str) -> str:
        """Run a research query against one idea."""
        data = await self.invoke(RESEARCH_FUNCTION, {"ideaId": str(idea_id), "query": query})
        return self._text_field(RESEARCH_FUNCTION, data, "result")

    @staticmethod
    def _text_field(function: str, data: dict[str, Any], field: str) -> str:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            raise AIFunctionError(function, f"response has no '{field}' text")
        return value


# Singleton instance
ai_functions = AIFunctionsClient.from_settings(get_settings())
