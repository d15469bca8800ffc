import asyncio
import datetime as dt

import pytest

from clarityworks.agents.meeting_prep_agent import MeetingPrepAgent, build_meeting_prep_prompt
from clarityworks.errors import ConfigurationError, ParseError
from clarityworks.models.schemas import Interaction
from clarityworks.services.sample_data import BUILTIN_CLIENTS

MARGARET = BUILTIN_CLIENTS[0]


def history():
    return [
        Interaction(
            id="interaction-1",
            client_id="client-001",
            type="meeting",
            title="Quarterly Portfolio Review",
            date=dt.date(2024, 11, 15),
            notes="Discussed retiring at 60.",
            action_items=["Run retirement projection for age 60"],
            created_at=dt.datetime(2024, 11, 15, tzinfo=dt.timezone.utc),
        ),
    ]


def generate(agent, interactions=None):
    return asyncio.run(agent.generate_meeting_prep(
        MARGARET.name,
        MARGARET.aum,
        MARGARET.risk_profile,
        MARGARET.goals,
        MARGARET.accounts,
        history() if interactions is None else interactions,
    ))


def test_prompt_carries_client_context():
    prompt = build_meeting_prep_prompt(
        MARGARET.name, MARGARET.aum, MARGARET.risk_profile, MARGARET.goals, MARGARET.accounts, history()
    )

    assert "Name: Margaret Chen" in prompt
    assert "Assets Under Management: $2,450,000" in prompt
    assert "- Retirement at 62: 70% complete ($2,100,000 / $3,000,000, target: 2029-06-01)" in prompt
    assert "- Roth IRA (Roth IRA): $310,000" in prompt
    assert "[2024-11-15] MEETING: Quarterly Portfolio Review" in prompt
    assert "Action Items: Run retirement projection for age 60" in prompt


def test_prompt_without_history():
    prompt = build_meeting_prep_prompt("New Client", 0, "Moderate", [], [], [])

    assert "No previous interactions recorded." in prompt


def test_generates_meeting_prep(chat_client, fake_session):
    prep = generate(MeetingPrepAgent(chat_client))

    assert prep.client_snapshot == "Long-time client nearing retirement."
    assert prep.key_topics_to_discuss == ["Retirement at 60", "College funding"]
    call = fake_session.calls[0]["json"]
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 1500


def test_single_string_topic_becomes_a_list(chat_client, fake_session):
    fake_session.reply_with({"keyTopicsToDiscuss": "Retirement timeline", "clientSnapshot": "Hi"})

    prep = generate(MeetingPrepAgent(chat_client))

    assert prep.key_topics_to_discuss == ["Retirement timeline"]


def test_missing_and_odd_fields_are_defaulted(chat_client, fake_session):
    fake_session.reply_with({
        "clientSnapshot": None,
        "recentContext": {"summary": "volatile"},
        "openActionItems": [1, "Call", None],
        "potentialConcerns": 42,
    })

    prep = generate(MeetingPrepAgent(chat_client))

    assert prep.client_snapshot == ""
    assert prep.recent_context == '{"summary": "volatile"}'
    assert prep.open_action_items == ["1", "Call", ""]
    assert prep.potential_concerns == "42"
    assert prep.questions_to_ask == []
    assert prep.relationship_notes == ""


def test_fenced_reply_is_accepted(chat_client, fake_session):
    fake_session.reply_with('```json\n{"clientSnapshot": "Fenced"}\n```')

    assert generate(MeetingPrepAgent(chat_client)).client_snapshot == "Fenced"


@pytest.mark.parametrize("content", ["not json at all", "[1, 2, 3]"])
def test_unusable_reply_is_parse_error(chat_client, fake_session, content):
    fake_session.reply_with(content)

    with pytest.raises(ParseError):
        generate(MeetingPrepAgent(chat_client))


def test_missing_key_is_configuration_error(unconfigured_chat_client, fake_session):
    with pytest.raises(ConfigurationError):
        generate(MeetingPrepAgent(unconfigured_chat_client))

    assert fake_session.calls == []
