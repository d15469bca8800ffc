"""Fixed sample content: the built-in clients and the history seeded for them."""
from typing import Dict, List

from ..models.schemas import CRMUpdateResult, Client, InteractionFields, Provenance

_BUILTIN_CLIENTS = [
    {
        "id": "client-001",
        "name": "Margaret Chen",
        "aum": 2450000,
        "riskProfile": "Moderate",
        "advisor": "Sarah Mitchell",
        "lastContact": "2024-11-15",
        "goals": [
            {"id": "goal-001", "name": "Retirement at 62", "targetAmount": 3000000,
             "currentAmount": 2100000, "targetDate": "2029-06-01"},
            {"id": "goal-002", "name": "College Fund (Emma)", "targetAmount": 250000,
             "currentAmount": 180000, "targetDate": "2027-09-01"},
            {"id": "goal-003", "name": "Vacation Home Down Payment", "targetAmount": 150000,
             "currentAmount": 95000, "targetDate": "2026-03-01"},
        ],
        "accounts": [
            {"id": "acc-001", "name": "Traditional IRA", "type": "IRA", "balance": 890000},
            {"id": "acc-002", "name": "Joint Brokerage", "type": "Brokerage", "balance": 1250000},
            {"id": "acc-003", "name": "Roth IRA", "type": "Roth IRA", "balance": 310000},
        ],
    },
    {
        "id": "client-002",
        "name": "Robert & Diana Hartwell",
        "aum": 4875000,
        "riskProfile": "Moderate-Aggressive",
        "advisor": "Sarah Mitchell",
        "lastContact": "2024-11-28",
        "goals": [
            {"id": "goal-004", "name": "Legacy Planning", "targetAmount": 5000000,
             "currentAmount": 4200000, "targetDate": "2035-01-01"},
            {"id": "goal-005", "name": "Charitable Foundation", "targetAmount": 1000000,
             "currentAmount": 650000, "targetDate": "2028-12-01"},
        ],
        "accounts": [
            {"id": "acc-004", "name": "Hartwell Family Trust", "type": "Trust", "balance": 2800000},
            {"id": "acc-005", "name": "Robert 401(k)", "type": "401k", "balance": 1450000},
            {"id": "acc-006", "name": "Joint Investment Account", "type": "Brokerage", "balance": 625000},
        ],
    },
]

BUILTIN_CLIENTS: List[Client] = [
    Client.model_validate({**data, "provenance": Provenance.BUILTIN}) for data in _BUILTIN_CLIENTS
]
BUILTIN_CLIENT_IDS = frozenset(client.id for client in BUILTIN_CLIENTS)

_SEED_INTERACTIONS = {
    "client-001": [
        {
            "date": "2024-11-15",
            "type": "meeting",
            "title": "Quarterly Portfolio Review",
            "notes": (
                "Met with Margaret to review Q3 performance. She expressed concerns about market "
                "volatility affecting her retirement timeline. Discussed her daughter Emma's college "
                "plans - now looking at Georgetown. Margaret mentioned possibly retiring at 60 instead "
                "of 62 since James is already semi-retired."
            ),
            "actionItems": [
                "Run retirement projection for age 60",
                "Research Georgetown tuition costs",
                "Review risk allocation",
            ],
        },
        {
            "date": "2024-10-20",
            "type": "call",
            "title": "Market Volatility Check-in",
            "notes": (
                "Quick call after October market swings. Margaret was nervous about the drops. "
                "Reassured her about long-term strategy. She asked about moving some funds to more "
                "conservative positions. Agreed to discuss at next meeting."
            ),
            "actionItems": ["Prepare conservative rebalancing options"],
        },
        {
            "date": "2024-09-05",
            "type": "meeting",
            "title": "Annual Planning Session",
            "notes": (
                "Annual review with Margaret and James. Goals remain: retirement at 62, college fund "
                "for Emma, vacation home. Vacation home timeline pushed back due to interest rates. "
                "All accounts performing well. Discussed tax-loss harvesting opportunities."
            ),
            "actionItems": [
                "Update financial plan document",
                "Schedule tax planning call with accountant",
            ],
        },
    ],
    "client-002": [
        {
            "date": "2024-11-28",
            "type": "meeting",
            "title": "Year-End Planning Session",
            "notes": (
                "Met with Robert and Diana via video call from Scottsdale. Discussed charitable giving "
                "strategy - they want to accelerate DAF contributions and bunch donations. Robert turns "
                "73 next year, need to plan for RMDs. They're considering selling the Boston property. "
                "Also want to set up 529 plans for all four grandchildren."
            ),
            "actionItems": [
                "Model Roth conversion scenarios",
                "Prepare DAF strategy memo",
                "Initiate 529 setup",
                "Analyze Boston property sale tax impact",
            ],
        },
        {
            "date": "2024-10-15",
            "type": "call",
            "title": "Trust Document Update",
            "notes": (
                "Diana called about updating trust beneficiaries. Want to add provisions for "
                "grandchildren. Referred to estate attorney for document updates. Also asked about "
                "increasing charitable foundation contributions."
            ),
            "actionItems": [
                "Connect with estate attorney",
                "Review foundation contribution limits",
            ],
        },
        {
            "date": "2024-08-22",
            "type": "meeting",
            "title": "Mid-Year Review",
            "notes": (
                "Strong first half performance. Tech allocation doing well. Robert happy with returns. "
                "Discussed legacy planning goals - on track. Diana mentioned grandchildren more "
                "frequently, hinting at future education planning."
            ),
            "actionItems": ["Research 529 options for next meeting"],
        },
    ],
}


def seed_interactions(client_id: str) -> List[InteractionFields]:
    """Illustrative history for a built-in client; empty for anyone else."""
    return [
        InteractionFields.model_validate({**data, "clientId": client_id})
        for data in _SEED_INTERACTIONS.get(client_id, [])
    ]


SAMPLE_MEETING_NOTES: Dict[str, str] = {
    "client-001": """Meeting with Margaret Chen - November 29, 2024

Margaret came in today to discuss her retirement timeline and college funding for Emma. Key points from our conversation:

"I've been thinking about maybe retiring a bit earlier, perhaps at 60 instead of 62. My husband James is already semi-retired and I'd love to spend more time traveling together."

We reviewed her current portfolio allocation. She mentioned being uncomfortable with the recent market volatility: "Those October swings really made me nervous. I'm wondering if we should be more conservative."

Discussed Emma's college plans - she's now looking at private universities on the East Coast. Margaret said: "We might need to increase our college savings target. Georgetown is her top choice and tuition keeps going up."

She also mentioned they're putting the vacation home on hold for now: "With the interest rates where they are, we've decided to wait another year or two on the beach house."

Action items discussed:
- Run new retirement projections for age 60
- Review risk tolerance questionnaire
- Update college funding target to $300,000
- Consider tax-loss harvesting before year end

Next meeting scheduled for January 15, 2025.""",
    "client-002": """Quarterly Review with Robert & Diana Hartwell - November 28, 2024

Annual year-end planning session with the Hartwells. Both Robert (68) and Diana (65) attended via video call from their Scottsdale residence.

Robert opened with: "We're very pleased with portfolio performance this year. The tech allocation has done well."

Diana brought up their charitable giving plans: "We'd like to accelerate our donor-advised fund contributions. Can we discuss bunching our donations this year and next?"

Key discussion points:

1. Legacy planning update - They want to increase the amount going to their grandchildren: "We've decided to set up 529 plans for all four grandchildren. About $50,000 each to start."

2. RMD strategy - Robert turns 73 next year. "What's our plan for required minimum distributions? I'd prefer to minimize the tax hit."

3. Diana mentioned potential real estate sale: "We're considering selling the Boston property. It's been appreciating but the management hassle isn't worth it anymore."

Robert requested: "Can you run some scenarios on converting a portion of my 401k to Roth? I keep hearing about the benefits."

The Hartwells confirmed they're comfortable with current risk level: "We have a long time horizon for the trust assets, so we're fine staying aggressive there."

Follow-up items:
- Model Roth conversion scenarios ($200k-$500k tranches)
- DAF contribution strategy memo
- 529 plan setup for grandchildren
- Real estate sale tax implications analysis

Next review: Q1 2025""",
}


def sample_meeting_notes(client_id: str) -> str:
    return SAMPLE_MEETING_NOTES.get(client_id, "")


_CANNED_CRM_RESULTS = {
    "client-001": {
        "fieldUpdates": [
            {"id": "fu-001", "fieldName": "Target Retirement Age", "currentValue": "62",
             "proposedValue": "60", "confidence": 0.92,
             "sourceSnippet": "\"I've been thinking about maybe retiring a bit earlier, perhaps at 60 instead of 62.\""},
            {"id": "fu-002", "fieldName": "Risk Tolerance", "currentValue": "Moderate",
             "proposedValue": "Moderate-Conservative", "confidence": 0.78,
             "sourceSnippet": "\"Those October swings really made me nervous. I'm wondering if we should be more conservative.\""},
            {"id": "fu-003", "fieldName": "College Fund Target", "currentValue": "$250,000",
             "proposedValue": "$300,000", "confidence": 0.95,
             "sourceSnippet": "\"We might need to increase our college savings target. Georgetown is her top choice.\""},
            {"id": "fu-004", "fieldName": "Vacation Home Goal Status", "currentValue": "Active",
             "proposedValue": "On Hold", "confidence": 0.88,
             "sourceSnippet": "\"With the interest rates where they are, we've decided to wait another year or two on the beach house.\""},
        ],
        "tasks": [
            {"id": "task-001", "owner": "Sarah Mitchell",
             "description": "Run retirement projections for age 60 scenario",
             "dueDate": "2024-12-10", "priority": "high"},
            {"id": "task-002", "owner": "Sarah Mitchell",
             "description": "Send updated risk tolerance questionnaire to Margaret",
             "dueDate": "2024-12-05", "priority": "medium"},
            {"id": "task-003", "owner": "Tax Team",
             "description": "Review tax-loss harvesting opportunities before year-end",
             "dueDate": "2024-12-15", "priority": "high"},
        ],
        "auditLog": {
            "summary": (
                "Client expressed interest in earlier retirement (60 vs 62), increased college funding "
                "needs, and temporary pause on vacation home goal. Risk tolerance may need adjustment "
                "following market volatility concerns."
            ),
            "tags": ["retirement-planning", "risk-review", "education-funding", "goal-change"],
        },
    },
    "client-002": {
        "fieldUpdates": [
            {"id": "fu-005", "fieldName": "Charitable Giving Strategy", "currentValue": "Standard annual",
             "proposedValue": "DAF bunching strategy", "confidence": 0.94,
             "sourceSnippet": "\"We'd like to accelerate our donor-advised fund contributions. Can we discuss bunching our donations?\""},
            {"id": "fu-006", "fieldName": "Grandchildren 529 Plans", "currentValue": "None",
             "proposedValue": "4 plans @ $50,000 each", "confidence": 0.97,
             "sourceSnippet": "\"We've decided to set up 529 plans for all four grandchildren. About $50,000 each to start.\""},
            {"id": "fu-007", "fieldName": "RMD Planning Status", "currentValue": "Not started",
             "proposedValue": "Planning required (Robert turns 73 in 2025)", "confidence": 0.91,
             "sourceSnippet": "\"What's our plan for required minimum distributions? I'd prefer to minimize the tax hit.\""},
            {"id": "fu-008", "fieldName": "Boston Property Status", "currentValue": "Hold",
             "proposedValue": "Considering sale", "confidence": 0.85,
             "sourceSnippet": "\"We're considering selling the Boston property. The management hassle isn't worth it anymore.\""},
            {"id": "fu-009", "fieldName": "Roth Conversion Interest", "currentValue": "No",
             "proposedValue": "Yes - modeling $200k-$500k tranches", "confidence": 0.89,
             "sourceSnippet": "\"Can you run some scenarios on converting a portion of my 401k to Roth?\""},
        ],
        "tasks": [
            {"id": "task-004", "owner": "Sarah Mitchell",
             "description": "Model Roth conversion scenarios ($200k, $350k, $500k tranches)",
             "dueDate": "2024-12-12", "priority": "high"},
            {"id": "task-005", "owner": "Sarah Mitchell",
             "description": "Prepare DAF contribution strategy memo",
             "dueDate": "2024-12-08", "priority": "high"},
            {"id": "task-006", "owner": "Operations",
             "description": "Initiate 529 plan setup for 4 grandchildren",
             "dueDate": "2024-12-20", "priority": "medium"},
            {"id": "task-007", "owner": "Tax Team",
             "description": "Analyze tax implications of Boston property sale",
             "dueDate": "2024-12-18", "priority": "medium"},
        ],
        "auditLog": {
            "summary": (
                "Year-end planning session covered charitable giving acceleration via DAF, new 529 plans "
                "for grandchildren ($200k total), upcoming RMD requirements, potential real estate "
                "disposition, and Roth conversion interest. Clients comfortable with current risk allocation."
            ),
            "tags": ["charitable-giving", "education-funding", "rmd-planning", "roth-conversion",
                     "real-estate", "year-end-planning"],
        },
    },
}

CANNED_CRM_RESULTS: Dict[str, CRMUpdateResult] = {
    client_id: CRMUpdateResult.model_validate(data) for client_id, data in _CANNED_CRM_RESULTS.items()
}
