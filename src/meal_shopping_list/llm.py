from __future__ import annotations
import logging
from typing import Any, Optional, Protocol
import anthropic
import httpx
from meal_shopping_list.config import Config

logger = logging.getLogger(__name__)


class ModelCallError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ModelClient(Protocol):
    async def complete(self, system: str, prompt: str) -> str: ...


class AnthropicModelClient:
    def __init__(self, api_key: str, model: str, max_tokens: int = 4096):
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    async def complete(self, system: str, prompt: str) -> str:
        logger.debug("Calling Anthropic model %s", self.model)
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            raise ModelCallError(
                f"Anthropic API returned HTTP {e.status_code}", status_code=e.status_code, body=e.body
            ) from e
        except anthropic.APIConnectionError as e:
            raise ModelCallError(f"Could not reach the Anthropic API: {e}") from e

        return "".join(block.text for block in response.content if hasattr(block, "text"))


class MistralModelClient:
    def __init__(
        self,
        api_key: str,
        model: str = "mistral-small-latest",
        base_url: str = "https://api.mistral.ai",
        timeout: Optional[float] = 60.0,
    ):
        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def complete(self, system: str, prompt: str) -> str:
        url = f"{self.base_url}/v1/chat/completions"
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
        }
        headers = {"Authorization": f"Bearer {self._api_key}", "Accept": "application/json"}
        logger.debug("Calling Mistral model %s", self.model)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.ConnectError as e:
            raise ModelCallError(f"Could not connect to {self.base_url}. Check your internet connection.") from e
        except httpx.TimeoutException as e:
            raise ModelCallError(f"Request to {url} timed out.") from e

        if response.status_code in (401, 403):
            raise ModelCallError(
                f"Mistral rejected the API key ({response.status_code}). Check MISTRAL_API_KEY.",
                status_code=response.status_code,
                body=_body(response),
            )
        if response.status_code == 429:
            raise ModelCallError("Mistral rate limit exceeded (429).", status_code=429, body=_body(response))
        if response.status_code >= 400:
            raise ModelCallError(
                f"HTTP {response.status_code} error from {url}",
                status_code=response.status_code,
                body=_body(response),
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ModelCallError(f"Unexpected response from Mistral: {e}", body=response.text) from e
        if not isinstance(content, str):
            raise ModelCallError(
                f"Unexpected response from Mistral: message content is {type(content).__name__}, not text",
                body=response.text,
            )
        return content


def _body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or response.reason_phrase


def client_from_config(config: Config) -> ModelClient:
    if config.provider == "mistral":
        return MistralModelClient(
            api_key=config.mistral_api_key,
            model=config.mistral_model,
            base_url=config.mistral_base_url,
            timeout=config.request_timeout,
        )
    return AnthropicModelClient(
        api_key=config.anthropic_api_key, model=config.anthropic_model, max_tokens=config.max_tokens
    )
