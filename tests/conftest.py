import json

import pytest
from fastapi.testclient import TestClient

from clarityworks.agents.chat_client import ChatCompletionClient
from clarityworks.main import create_app
from clarityworks.services.client_store import ClientStore
from clarityworks.services.interaction_store import InteractionStore
from clarityworks.services.storage import KeyValueStorage
from clarityworks.settings import Settings

MEETING_PREP_REPLY = {
    "clientSnapshot": "Long-time client nearing retirement.",
    "recentContext": "Worried about volatility.",
    "keyTopicsToDiscuss": ["Retirement at 60", "College funding"],
    "openActionItems": ["Run retirement projection for age 60"],
    "questionsToAsk": ["How is Emma's search going?"],
    "potentialConcerns": "Market swings.",
    "relationshipNotes": "Husband James is semi-retired.",
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class FakeSession:
    """Stands in for requests.Session: records posts and answers with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def reply_with(self, content):
        if not isinstance(content, str):
            content = json.dumps(content)
        self.response = FakeResponse(payload={"choices": [{"message": {"role": "assistant", "content": content}}]})

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        storage_dir=str(tmp_path / "data"),
        bucket_name=None,
        s3_access_key=None,
        s3_secret_key=None,
        crm_mock_delay=0,
    )


@pytest.fixture
def storage(settings):
    with KeyValueStorage(settings) as storage:
        yield storage


@pytest.fixture
def client_store(storage):
    return ClientStore(storage)


@pytest.fixture
def interaction_store(storage):
    return InteractionStore(storage)


@pytest.fixture
def fake_session():
    session = FakeSession()
    session.reply_with(MEETING_PREP_REPLY)
    return session


@pytest.fixture
def chat_client(fake_session):
    return ChatCompletionClient(api_key="test-key", session=fake_session)


@pytest.fixture
def unconfigured_chat_client(fake_session):
    return ChatCompletionClient(api_key=None, session=fake_session)


@pytest.fixture
def api(settings, fake_session):
    app = create_app(settings, http_session=fake_session)
    with TestClient(app) as client:
        yield client
