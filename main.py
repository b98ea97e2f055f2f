import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from routes.document_route import router as document_router
from routes.session_route import router as session_router
from services.qa.answer_resolver import AnswerResolver
from services.qa.remote_service import RemoteDocumentService
from services.qa.session_registry import SessionRegistry
from services.qa.upload_registrar import UploadRegistrar
from utils.database_init import AsyncDatabaseInitializer
from utils.settings import Settings

load_dotenv()  # Load environment variables from .env file if present

LOGGER = logging.getLogger(__name__)


def build_lifespan(settings: Optional[Settings] = None):
    """Return a lifespan bound to `settings` (read from the environment when omitted)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan manager to initialize:
          - the SQLite document catalogue (always new on startup)
          - the remote service client, unless running offline
          - the upload registrar, answer resolver and session registry
        and attach them to `app.state`.
        """
        config = settings or Settings.from_env()
        app.state.settings = config

        db_initializer = AsyncDatabaseInitializer()
        await db_initializer.ensure_database()
        app.state.db_initializer = db_initializer

        remote = None
        if not config.offline:
            remote = RemoteDocumentService(config.backend_url, timeout=config.request_timeout)
            LOGGER.info("Using remote document service at %s", config.backend_url)
        else:
            LOGGER.info("No remote document service configured; answering offline")
        app.state.remote_service = remote

        rng = random.Random(config.fallback_seed)
        latency = config.simulated_latency
        app.state.upload_registrar = UploadRegistrar(remote, simulated_latency=latency)
        resolver = AnswerResolver(remote, rng=rng, simulated_latency=latency)
        app.state.session_registry = SessionRegistry(resolver, answer_timeout=config.answer_timeout)

        try:
            yield
        finally:
            if remote is not None:
                await remote.aclose()

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(title="PDF Q&A Session Service", lifespan=build_lifespan(settings))

    @app.get("/health")
    async def health(request: Request):
        """
        Report whether answers come from the remote service or the offline fallback.
        """
        config: Settings = request.app.state.settings
        return {
            "ok": True,
            "remote_configured": request.app.state.remote_service is not None,
            "offline_mode": config.offline,
        }

    app.include_router(session_router)
    app.include_router(document_router)

    return app


app = create_app()
