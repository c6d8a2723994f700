"""
FastAPI application for the travel agency admin proposal service.

Run with: uvicorn travel_admin.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from travel_admin.admin_routes import proposals_router, router as admin_router
from travel_admin.config import ProposalSettings
from travel_admin.database import Database
from travel_admin.services.audit import AuditRecorder
from travel_admin.services.destination_lookup import DestinationLookup
from travel_admin.services.document_store import GeneratedDocumentStore
from travel_admin.services.proposal_pipeline import PdfRenderer, build_pipeline
from travel_admin.services.template_renderer import ProposalTemplateRenderer

logger = logging.getLogger("travel_admin")

SERVICE_NAME = "travel-proposal-service"
VERSION = "1.0.0"


def create_app(settings: Optional[ProposalSettings] = None, pdf_renderer: Optional[PdfRenderer] = None) -> FastAPI:
    settings = settings or ProposalSettings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup: construct the store and pipeline clients; shutdown: dispose the pool."""
        database = Database(settings.database_url)
        database.init_db()
        store = GeneratedDocumentStore(settings.output_dir, settings.url_prefix)

        app.state.settings = settings
        app.state.database = database
        app.state.document_store = store
        app.state.audit_recorder = AuditRecorder(database.session)
        app.state.pipeline = build_pipeline(
            DestinationLookup(database.session),
            ProposalTemplateRenderer(settings.template_dir, settings.template_name),
            store,
            pdf_renderer=pdf_renderer,
            render_timeout_ms=settings.render_timeout_ms,
        )
        logger.info("proposal service ready", extra={"output_dir": str(settings.output_dir)})

        yield

        try:
            database.dispose()
        except Exception as e:
            logger.warning(f"Error disposing database connection pool: {e}")

    app = FastAPI(
        title="Travel Proposal Service",
        description="Admin API for generating customer travel proposal PDFs",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(admin_router)
    app.include_router(proposals_router)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "healthy", "service": SERVICE_NAME, "version": VERSION}

    async def download_generated_pdf(filename: str, request: Request):
        """Serve a previously generated proposal PDF."""
        path = request.app.state.document_store.resolve(filename)
        if path is None:
            return JSONResponse(status_code=404, content={"error": "File not found"})
        return FileResponse(path, media_type="application/pdf", filename=filename)

    app.add_api_route(f"{settings.url_prefix}/{{filename}}", download_generated_pdf, methods=["GET"])

    return app
