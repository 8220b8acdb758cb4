import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch
import anthropic
import httpx
import pytest
from pytest_httpx import HTTPXMock
from meal_shopping_list.config import Config
from meal_shopping_list.llm import (
    AnthropicModelClient,
    MistralModelClient,
    ModelCallError,
    client_from_config,
)

MISTRAL_URL = "https://api.mistral.ai/v1/chat/completions"


def _mistral_reply(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def mock_anthropic():
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock()
    with patch("meal_shopping_list.llm.anthropic.AsyncAnthropic", return_value=mock_client):
        yield mock_client


def test_anthropic_client_joins_text_blocks(mock_anthropic):
    mock_anthropic.messages.create.return_value.content = [
        MagicMock(text="Produce:\n"),
        MagicMock(text="- Kale"),
    ]
    client = AnthropicModelClient(api_key="key", model="claude-test")
    assert asyncio.run(client.complete("system", "prompt")) == "Produce:\n- Kale"


def test_anthropic_client_sends_system_and_prompt(mock_anthropic):
    mock_anthropic.messages.create.return_value.content = [MagicMock(text="- Kale")]
    client = AnthropicModelClient(api_key="key", model="claude-test", max_tokens=100)
    asyncio.run(client.complete("be helpful", "make a list"))

    kwargs = mock_anthropic.messages.create.call_args.kwargs
    assert kwargs["model"] == "claude-test"
    assert kwargs["max_tokens"] == 100
    assert kwargs["system"] == "be helpful"
    assert kwargs["messages"] == [{"role": "user", "content": "make a list"}]


def test_anthropic_connection_error_becomes_model_call_error(mock_anthropic):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    mock_anthropic.messages.create.side_effect = anthropic.APIConnectionError(request=request)
    client = AnthropicModelClient(api_key="key", model="claude-test")
    with pytest.raises(ModelCallError, match="Could not reach"):
        asyncio.run(client.complete("system", "prompt"))


def test_mistral_returns_message_content(httpx_mock: HTTPXMock):
    httpx_mock.add_response(url=MISTRAL_URL, method="POST", json=_mistral_reply("Dairy:\n- Milk - 1 gallon"))
    client = MistralModelClient(api_key="secret")
    assert asyncio.run(client.complete("system", "prompt")) == "Dairy:\n- Milk - 1 gallon"


def test_mistral_sends_bearer_token_and_messages(httpx_mock: HTTPXMock):
    httpx_mock.add_response(url=MISTRAL_URL, method="POST", json=_mistral_reply("- Milk"))
    asyncio.run(MistralModelClient(api_key="secret").complete("sys", "user"))

    request = httpx_mock.get_requests()[0]
    assert request.headers["authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body["model"] == "mistral-small-latest"
    assert body["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "user"},
    ]


def test_mistral_bad_key_raises(httpx_mock: HTTPXMock):
    httpx_mock.add_response(url=MISTRAL_URL, method="POST", status_code=401, json={"message": "Unauthorized"})
    with pytest.raises(ModelCallError, match="API key") as exc_info:
        asyncio.run(MistralModelClient(api_key="bad").complete("s", "p"))
    assert exc_info.value.status_code == 401
    assert exc_info.value.body == {"message": "Unauthorized"}


def test_mistral_rate_limit_raises(httpx_mock: HTTPXMock):
    httpx_mock.add_response(url=MISTRAL_URL, method="POST", status_code=429)
    with pytest.raises(ModelCallError, match="rate limit"):
        asyncio.run(MistralModelClient(api_key="key").complete("s", "p"))


def test_mistral_server_error_raises(httpx_mock: HTTPXMock):
    httpx_mock.add_response(url=MISTRAL_URL, method="POST", status_code=503, text="overloaded")
    with pytest.raises(ModelCallError, match="HTTP 503") as exc_info:
        asyncio.run(MistralModelClient(api_key="key").complete("s", "p"))
    assert exc_info.value.body == "overloaded"


def test_mistral_network_error_raises(httpx_mock: HTTPXMock):
    httpx_mock.add_exception(httpx.ConnectError("failed"))
    with pytest.raises(ModelCallError, match="Could not connect"):
        asyncio.run(MistralModelClient(api_key="key").complete("s", "p"))


def test_mistral_unexpected_body_raises(httpx_mock: HTTPXMock):
    httpx_mock.add_response(url=MISTRAL_URL, method="POST", json={"choices": []})
    with pytest.raises(ModelCallError, match="Unexpected response"):
        asyncio.run(MistralModelClient(api_key="key").complete("s", "p"))


def test_client_from_config_picks_provider(monkeypatch):
    monkeypatch.setenv("MISTRAL_API_KEY", "m-key")
    monkeypatch.setenv("PROVIDER", "mistral")
    assert isinstance(client_from_config(Config()), MistralModelClient)

    monkeypatch.setenv("ANTHROPIC_API_KEY", "a-key")
    monkeypatch.setenv("PROVIDER", "anthropic")
    assert isinstance(client_from_config(Config()), AnthropicModelClient)


def test_mistral_null_content_raises(httpx_mock: HTTPXMock):
    httpx_mock.add_response(url=MISTRAL_URL, method="POST", json=_mistral_reply(None))
    with pytest.raises(ModelCallError, match="not text"):
        asyncio.run(MistralModelClient(api_key="key").complete("s", "p"))
