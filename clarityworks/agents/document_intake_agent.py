import asyncio
import logging
from typing import Sequence

from ..errors import ParseError
from ..models.schemas import Client
from ..models.validation import validate_client_payload
from .chat_client import ChatCompletionClient, parse_json_content

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "\n\n----\n\n"
FAILURE_MESSAGE = "Failed to parse client data from documents. Please try again."

SYSTEM_PROMPT = """You are a financial document parser. Extract client information from the provided documents and respond ONLY with valid JSON matching this exact schema:

{
  "id": "string (generate a unique ID like 'client-doc-' followed by timestamp)",
  "name": "string (client's full name or household name)",
  "aum": number (total assets under management in dollars),
  "riskProfile": "Conservative" | "Moderate" | "Moderate-Aggressive" | "Aggressive",
  "advisor": "string (advisor name if mentioned, otherwise 'Unassigned')",
  "lastContact": "string (ISO date, use today's date if not mentioned)",
  "goals": [
    {
      "id": "string (unique goal ID)",
      "name": "string (goal name like 'Retirement', 'College Fund', etc.)",
      "targetAmount": number,
      "currentAmount": number,
      "targetDate": "string (ISO date format YYYY-MM-DD)"
    }
  ],
  "accounts": [
    {
      "id": "string (unique account ID)",
      "name": "string (account name)",
      "type": "IRA" | "Brokerage" | "401k" | "Roth IRA" | "Trust",
      "balance": number
    }
  ]
}

Extract as much information as possible from the documents. If a field is not explicitly mentioned:
- For goals: infer reasonable targets based on context
- For accounts: create entries for any mentioned accounts/holdings
- For riskProfile: infer from investment preferences or age mentioned
- Generate unique IDs with format 'goal-doc-X' or 'acc-doc-X'

Respond ONLY with the JSON object, no additional text or markdown."""


class DocumentIntakeAgent:
    """Turns uploaded plain-text documents into a client record for the advisor to review."""

    temperature = 0.3
    max_tokens = 2000

    def __init__(self, chat_client: ChatCompletionClient):
        self.chat_client = chat_client

    async def parse_client_from_documents(self, documents: Sequence[str]) -> Client:
        logger.info(f"Extracting client from {len(documents)} documents...")

        prompt = (
            "Parse the following financial documents and extract client information:\n\n"
            f"{DOCUMENT_SEPARATOR.join(documents)}\n\n"
            "Return a single JSON object matching the Client schema."
        )

        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(
            None,
            lambda: self.chat_client.complete(SYSTEM_PROMPT, prompt, self.temperature, self.max_tokens),
        )

        try:
            payload = parse_json_content(content)
        except ParseError as e:
            raise ParseError(FAILURE_MESSAGE, raw=content) from e

        result = validate_client_payload(payload)
        if not result.ok:
            logger.error(f"Client payload failed validation ({result.reason}): {content!r}")
            raise ParseError(FAILURE_MESSAGE, raw=content)

        client = result.value
        logger.info(f"Extracted client {client.name} with {len(client.goals)} goals and {len(client.accounts)} accounts")
        return client
