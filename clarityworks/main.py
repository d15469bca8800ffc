import logging
from contextlib import asynccontextmanager
from typing import Optional

import requests
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .agents.chat_client import ChatCompletionClient
from .agents.crm_update_agent import CrmUpdateAgent
from .agents.document_intake_agent import DocumentIntakeAgent
from .agents.meeting_prep_agent import MeetingPrepAgent
from .api.clients import router as clients_router
from .api.insights import router as insights_router
from .api.interactions import router as interactions_router
from .services.client_store import ClientStore
from .services.interaction_store import InteractionStore
from .services.storage import KeyValueStorage
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, http_session: Optional[requests.Session] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One storage handle and one set of stores/agents per process
        storage = KeyValueStorage(settings).open()
        chat_client = ChatCompletionClient.from_settings(settings, session=http_session)

        app.state.settings = settings
        app.state.storage = storage
        app.state.client_store = ClientStore(storage)
        app.state.interaction_store = InteractionStore(storage)
        app.state.meeting_prep_agent = MeetingPrepAgent(chat_client)
        app.state.document_intake_agent = DocumentIntakeAgent(chat_client)
        app.state.crm_update_agent = CrmUpdateAgent(delay=settings.crm_mock_delay)
        logger.info("ClarityWorks backend started")
        yield
        chat_client.session.close()
        storage.close()
        logger.info("ClarityWorks backend stopped")

    app = FastAPI(
        title="ClarityWorks Backend",
        version=__version__,
        description="Meeting prep and client intelligence for financial advisors",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(clients_router)
    app.include_router(interactions_router)
    app.include_router(insights_router)
    return app


app = create_app()
