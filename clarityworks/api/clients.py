import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..agents.document_intake_agent import DocumentIntakeAgent
from ..errors import AdvisorError, StorageError
from ..models.schemas import (
    Account,
    CamelModel,
    Client,
    ClientFields,
    ClientUpdate,
    Goal,
    RiskProfile,
)
from ..services.client_store import ClientStore
from ..services.documents import check_document_names, decode_documents
from ..services.interaction_store import InteractionStore
from ..services.record_parser import parse_accounts, parse_amount, parse_goals
from ..services.sample_data import BUILTIN_CLIENT_IDS
from ..settings import Settings
from ..utils.coerce import coerce_amount
from ..utils.ids import today_iso
from .deps import (
    get_client_store,
    get_document_intake_agent,
    get_interaction_store,
    get_settings,
    http_error,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


class ClientCreateRequest(CamelModel):
    """The add-client form: goals and accounts may be typed as text or sent as records."""

    name: str = ""
    aum: Union[float, str, None] = None
    risk_profile: RiskProfile = "Moderate"
    advisor: Optional[str] = None
    goals_text: str = ""
    accounts_text: str = ""
    goals: List[Goal] = []
    accounts: List[Account] = []


class DeleteClientResponse(CamelModel):
    client_id: str
    deleted: bool
    interactions_removed: int


def _aum(value: Union[float, str, None]) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, str):
        return parse_amount(value)
    return coerce_amount(value)


def _require_editable(client_id: str, refusal: str) -> None:
    if client_id in BUILTIN_CLIENT_IDS:
        raise HTTPException(status_code=403, detail=refusal)
    if not ClientStore.is_custom(client_id):
        raise HTTPException(status_code=404, detail="Client not found")


@router.get("", response_model=List[Client])
async def list_clients(store: ClientStore = Depends(get_client_store)) -> List[Client]:
    return store.list_all()


@router.post("", response_model=Client, status_code=201)
async def create_client(
    body: ClientCreateRequest,
    store: ClientStore = Depends(get_client_store),
    settings: Settings = Depends(get_settings),
) -> Client:
    aum = _aum(body.aum)
    if not body.name.strip() or aum is None:
        raise HTTPException(status_code=400, detail="Please enter client name and AUM")

    fields = ClientFields(
        name=body.name.strip(),
        aum=aum,
        risk_profile=body.risk_profile,
        advisor=body.advisor or settings.default_advisor,
        last_contact=today_iso(),
        goals=list(body.goals) + parse_goals(body.goals_text),
        accounts=list(body.accounts) + parse_accounts(body.accounts_text),
    )
    try:
        return store.create(fields)
    except StorageError as e:
        raise http_error(e)


@router.post("/documents", response_model=Client)
async def parse_client_documents(
    files: Optional[List[UploadFile]] = File(None),
    agent: DocumentIntakeAgent = Depends(get_document_intake_agent),
    settings: Settings = Depends(get_settings),
) -> Client:
    """Preview a client extracted from up to three .txt files. Nothing is saved."""
    selected = (files or [])[:settings.max_documents]
    try:
        check_document_names([f.filename for f in selected])
        documents = decode_documents([await f.read() for f in selected])
        return await agent.parse_client_from_documents(documents)
    except AdvisorError as e:
        logger.warning(f"Document onboarding failed: {e}")
        raise http_error(e)


@router.get("/{client_id}", response_model=Client)
async def get_client(client_id: str, store: ClientStore = Depends(get_client_store)) -> Client:
    client = store.get(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.patch("/{client_id}", response_model=Client)
async def update_client(
    client_id: str,
    body: ClientUpdate,
    store: ClientStore = Depends(get_client_store),
) -> Client:
    _require_editable(client_id, "Cannot edit sample clients")
    try:
        client = store.update(client_id, body)
    except StorageError as e:
        raise http_error(e)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.delete("/{client_id}", response_model=DeleteClientResponse)
async def delete_client(
    client_id: str,
    store: ClientStore = Depends(get_client_store),
    interactions: InteractionStore = Depends(get_interaction_store),
) -> DeleteClientResponse:
    _require_editable(client_id, "Cannot delete sample clients")
    try:
        if not store.remove(client_id):
            raise HTTPException(status_code=404, detail="Client not found")
        removed = interactions.remove_for_client(client_id)
    except StorageError as e:
        raise http_error(e)
    return DeleteClientResponse(client_id=client_id, deleted=True, interactions_removed=removed)
