import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..agents.crm_update_agent import CrmUpdateAgent
from ..agents.meeting_prep_agent import MeetingPrepAgent
from ..errors import AdvisorError, StorageError
from ..models.schemas import CamelModel, Client, CRMUpdateResult, Interaction, MeetingPrep, TimelineEntry
from ..services.client_store import ClientStore
from ..services.interaction_store import InteractionStore
from ..services.sample_data import sample_meeting_notes
from ..services.summaries import (
    crm_timeline_entry,
    crm_update_interaction_fields,
    meeting_prep_interaction_fields,
)
from .deps import (
    get_client_store,
    get_crm_update_agent,
    get_interaction_store,
    get_meeting_prep_agent,
    http_error,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients/{client_id}", tags=["insights"])


class CrmUpdateRequest(CamelModel):
    meeting_notes: Optional[str] = None


class CrmNoteResponse(CamelModel):
    interaction: Interaction
    timeline_entry: TimelineEntry


def _require_client(store: ClientStore, client_id: str) -> Client:
    client = store.get(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.post("/meeting-prep", response_model=MeetingPrep)
async def generate_meeting_prep(
    client_id: str,
    clients: ClientStore = Depends(get_client_store),
    interactions: InteractionStore = Depends(get_interaction_store),
    agent: MeetingPrepAgent = Depends(get_meeting_prep_agent),
) -> MeetingPrep:
    client = _require_client(clients, client_id)
    history = interactions.list_for_client(client_id)
    try:
        return await agent.generate_meeting_prep(
            client.name,
            client.aum,
            client.risk_profile,
            client.goals,
            client.accounts,
            history,
        )
    except AdvisorError as e:
        logger.warning(f"Meeting prep failed for {client_id}: {e}")
        raise http_error(e)


@router.post("/meeting-prep/notes", response_model=Interaction, status_code=201)
async def save_meeting_prep(
    client_id: str,
    prep: MeetingPrep,
    clients: ClientStore = Depends(get_client_store),
    interactions: InteractionStore = Depends(get_interaction_store),
) -> Interaction:
    _require_client(clients, client_id)
    try:
        return interactions.create(meeting_prep_interaction_fields(client_id, prep))
    except StorageError as e:
        raise http_error(e)


@router.post("/crm-updates", response_model=CRMUpdateResult)
async def generate_crm_update(
    client_id: str,
    body: Optional[CrmUpdateRequest] = None,
    clients: ClientStore = Depends(get_client_store),
    agent: CrmUpdateAgent = Depends(get_crm_update_agent),
) -> CRMUpdateResult:
    _require_client(clients, client_id)
    notes = body.meeting_notes if body and body.meeting_notes else sample_meeting_notes(client_id)
    return await agent.generate_crm_update(client_id, notes)


@router.post("/crm-updates/notes", response_model=CrmNoteResponse, status_code=201)
async def save_crm_update(
    client_id: str,
    result: CRMUpdateResult,
    clients: ClientStore = Depends(get_client_store),
    interactions: InteractionStore = Depends(get_interaction_store),
) -> CrmNoteResponse:
    _require_client(clients, client_id)
    try:
        interaction = interactions.create(crm_update_interaction_fields(client_id, result))
    except StorageError as e:
        raise http_error(e)
    return CrmNoteResponse(interaction=interaction, timeline_entry=crm_timeline_entry(result))
