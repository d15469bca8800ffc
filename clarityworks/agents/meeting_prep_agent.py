import asyncio
import logging
from typing import Sequence

from ..errors import ParseError
from ..models.schemas import Account, Goal, Interaction, MeetingPrep
from ..models.validation import validate_meeting_prep
from .chat_client import PARSE_FAILURE_MESSAGE, ChatCompletionClient, parse_json_content

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful financial advisor assistant that creates concise, actionable "
    "meeting prep guides. Always respond with valid JSON only."
)


def format_money(amount: float) -> str:
    if float(amount).is_integer():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


def _goal_line(goal: Goal) -> str:
    return (
        f"- {goal.name}: {goal.progress * 100:.0f}% complete "
        f"(${format_money(goal.current_amount)} / ${format_money(goal.target_amount)}, "
        f"target: {goal.target_date})"
    )


def _account_line(account: Account) -> str:
    return f"- {account.name} ({account.type}): ${format_money(account.balance)}"


def _interaction_block(interaction: Interaction) -> str:
    lines = [
        f"[{interaction.date.isoformat()}] {interaction.type.upper()}: {interaction.title}",
        f"Notes: {interaction.notes}",
    ]
    if interaction.action_items:
        lines.append(f"Action Items: {', '.join(interaction.action_items)}")
    return "\n".join(lines)


def build_meeting_prep_prompt(
    client_name: str,
    aum: float,
    risk_profile: str,
    goals: Sequence[Goal],
    accounts: Sequence[Account],
    interactions: Sequence[Interaction],
) -> str:
    goals_text = "\n".join(_goal_line(g) for g in goals) or "No goals recorded."
    accounts_text = "\n".join(_account_line(a) for a in accounts) or "No accounts recorded."
    if interactions:
        interactions_text = "\n---\n".join(_interaction_block(i) for i in interactions)
    else:
        interactions_text = "No previous interactions recorded."

    return f"""You are a financial advisor assistant preparing a quick-reference meeting prep for an upcoming client meeting.

CLIENT PROFILE:
Name: {client_name}
Assets Under Management: ${format_money(aum)}
Risk Profile: {risk_profile}

FINANCIAL GOALS:
{goals_text}

ACCOUNTS:
{accounts_text}

INTERACTION HISTORY (most recent first):
{interactions_text}

Based on this information, create a meeting prep guide. Return a JSON object with:
{{
  "clientSnapshot": "2-3 sentence quick overview of who this client is, their situation, and relationship tenure",
  "recentContext": "What happened in recent interactions? What's top of mind for this client right now?",
  "keyTopicsToDiscuss": ["Array of 4-5 specific topics/agenda items for this meeting based on history"],
  "openActionItems": ["Array of any pending action items from previous meetings that should be addressed"],
  "questionsToAsk": ["Array of 3-4 thoughtful questions to ask the client to deepen the relationship"],
  "potentialConcerns": "Any concerns or sensitive topics to be aware of based on past interactions",
  "relationshipNotes": "Personal details, family info, preferences mentioned that help personalize the conversation"
}}

Be specific and actionable. Reference actual details from the interaction history."""


class MeetingPrepAgent:
    temperature = 0.7
    max_tokens = 1500

    def __init__(self, chat_client: ChatCompletionClient):
        self.chat_client = chat_client

    async def generate_meeting_prep(
        self,
        client_name: str,
        aum: float,
        risk_profile: str,
        goals: Sequence[Goal],
        accounts: Sequence[Account],
        interactions: Sequence[Interaction],
    ) -> MeetingPrep:
        logger.info(f"Generating meeting prep for {client_name} from {len(interactions)} interactions...")

        prompt = build_meeting_prep_prompt(client_name, aum, risk_profile, goals, accounts, interactions)

        # The HTTP call blocks; keep it off the event loop
        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(
            None,
            lambda: self.chat_client.complete(SYSTEM_PROMPT, prompt, self.temperature, self.max_tokens),
        )

        result = validate_meeting_prep(parse_json_content(content))
        if not result.ok:
            logger.error(f"Meeting prep payload failed validation ({result.reason}): {content!r}")
            raise ParseError(PARSE_FAILURE_MESSAGE, raw=content)
        return result.value
