import datetime as dt
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException

from ..errors import StorageError
from ..models.schemas import (
    CamelModel,
    Interaction,
    InteractionFields,
    InteractionType,
    InteractionUpdate,
)
from ..services.interaction_store import InteractionStore
from ..services.record_parser import parse_action_items
from ..utils.ids import today
from .deps import get_interaction_store, http_error

router = APIRouter(tags=["interactions"])


class InteractionCreateRequest(CamelModel):
    type: InteractionType = "meeting"
    title: str = ""
    date: Optional[dt.date] = None
    notes: str = ""
    # One item per line when sent as text
    action_items: Union[List[str], str, None] = None


def _action_items(value: Union[List[str], str, None]) -> Optional[List[str]]:
    if isinstance(value, str):
        items = parse_action_items(value)
    else:
        items = [item.strip() for item in value or [] if item.strip()]
    return items or None


@router.get("/clients/{client_id}/interactions", response_model=List[Interaction])
async def list_interactions(
    client_id: str,
    store: InteractionStore = Depends(get_interaction_store),
) -> List[Interaction]:
    try:
        store.seed_if_empty(client_id)
    except StorageError as e:
        raise http_error(e)
    return store.list_for_client(client_id)


@router.post("/clients/{client_id}/interactions", response_model=Interaction, status_code=201)
async def create_interaction(
    client_id: str,
    body: InteractionCreateRequest,
    store: InteractionStore = Depends(get_interaction_store),
) -> Interaction:
    if not body.title.strip() or not body.notes.strip():
        raise HTTPException(status_code=400, detail="Please enter a title and notes")
    fields = InteractionFields(
        client_id=client_id,
        type=body.type,
        title=body.title.strip(),
        date=body.date or today(),
        notes=body.notes,
        action_items=_action_items(body.action_items),
    )
    try:
        return store.create(fields)
    except StorageError as e:
        raise http_error(e)


@router.patch("/interactions/{interaction_id}", response_model=Interaction)
async def update_interaction(
    interaction_id: str,
    body: InteractionUpdate,
    store: InteractionStore = Depends(get_interaction_store),
) -> Interaction:
    try:
        interaction = store.update(interaction_id, body)
    except StorageError as e:
        raise http_error(e)
    if interaction is None:
        raise HTTPException(status_code=404, detail="Interaction not found")
    return interaction


@router.delete("/interactions/{interaction_id}", status_code=204)
async def delete_interaction(
    interaction_id: str,
    store: InteractionStore = Depends(get_interaction_store),
) -> None:
    try:
        removed = store.remove(interaction_id)
    except StorageError as e:
        raise http_error(e)
    if not removed:
        raise HTTPException(status_code=404, detail="Interaction not found")
