import pytest
import requests

from clarityworks.agents.chat_client import (
    PARSE_FAILURE_MESSAGE,
    ChatCompletionClient,
    parse_json_content,
    strip_code_fences,
)
from clarityworks.errors import ConfigurationError, ParseError, UpstreamError

from conftest import FakeResponse, FakeSession


def test_missing_key_fails_before_any_request(unconfigured_chat_client, fake_session):
    with pytest.raises(ConfigurationError):
        unconfigured_chat_client.complete("system", "user", 0.7, 100)

    assert fake_session.calls == []


def test_request_shape(chat_client, fake_session):
    content = chat_client.complete("be helpful", "hello", 0.3, 2000)

    assert '"clientSnapshot"' in content
    [call] = fake_session.calls
    assert call["url"] == "https://api.openai.com/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer test-key"
    assert call["json"] == {
        "model": "gpt-4o-mini",
        "messages": [
            {"role": "system", "content": "be helpful"},
            {"role": "user", "content": "hello"},
        ],
        "temperature": 0.3,
        "max_tokens": 2000,
        "response_format": {"type": "json_object"},
    }


def test_provider_error_message_is_surfaced():
    session = FakeSession(FakeResponse(401, {"error": {"message": "Incorrect API key provided"}}))
    client = ChatCompletionClient(api_key="bad", session=session)

    with pytest.raises(UpstreamError) as excinfo:
        client.complete("s", "u", 0.7, 10)

    assert str(excinfo.value) == "Incorrect API key provided"
    assert excinfo.value.status_code == 401


def test_provider_error_without_body():
    session = FakeSession(FakeResponse(503, None, text="Service Unavailable"))
    client = ChatCompletionClient(api_key="key", session=session)

    with pytest.raises(UpstreamError, match="API request failed: 503"):
        client.complete("s", "u", 0.7, 10)


def test_network_failure_is_upstream_error():
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    client = ChatCompletionClient(api_key="key", session=session)

    with pytest.raises(UpstreamError):
        client.complete("s", "u", 0.7, 10)


@pytest.mark.parametrize("payload", [
    {"choices": []},
    {"choices": [{"message": {"content": ""}}]},
    {"choices": [{"message": {"content": 42}}]},
    {"choices": [{"message": {"content": {"clientSnapshot": "nested"}}}]},
    {},
])
def test_envelope_without_content_is_parse_error(payload):
    client = ChatCompletionClient(api_key="key", session=FakeSession(FakeResponse(200, payload)))

    with pytest.raises(ParseError):
        client.complete("s", "u", 0.7, 10)


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


def test_parse_json_content_keeps_raw_out_of_message():
    with pytest.raises(ParseError) as excinfo:
        parse_json_content("Sure! Here is your prep: ...")

    assert str(excinfo.value) == PARSE_FAILURE_MESSAGE
    assert excinfo.value.raw == "Sure! Here is your prep: ..."
