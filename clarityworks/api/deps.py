from fastapi import HTTPException, Request

from ..agents.crm_update_agent import CrmUpdateAgent
from ..agents.document_intake_agent import DocumentIntakeAgent
from ..agents.meeting_prep_agent import MeetingPrepAgent
from ..errors import (
    AdvisorError,
    ConfigurationError,
    DocumentError,
    ParseError,
    StorageError,
    UpstreamError,
)
from ..services.client_store import ClientStore
from ..services.interaction_store import InteractionStore
from ..settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_client_store(request: Request) -> ClientStore:
    return request.app.state.client_store


def get_interaction_store(request: Request) -> InteractionStore:
    return request.app.state.interaction_store


def get_meeting_prep_agent(request: Request) -> MeetingPrepAgent:
    return request.app.state.meeting_prep_agent


def get_document_intake_agent(request: Request) -> DocumentIntakeAgent:
    return request.app.state.document_intake_agent


def get_crm_update_agent(request: Request) -> CrmUpdateAgent:
    return request.app.state.crm_update_agent


def http_error(error: AdvisorError) -> HTTPException:
    if isinstance(error, ConfigurationError):
        return HTTPException(status_code=500, detail=str(error))
    if isinstance(error, (UpstreamError, ParseError)):
        return HTTPException(status_code=502, detail=str(error))
    if isinstance(error, DocumentError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, StorageError):
        return HTTPException(status_code=503, detail="Storage is unavailable. Please try again.")
    return HTTPException(status_code=500, detail=str(error))
