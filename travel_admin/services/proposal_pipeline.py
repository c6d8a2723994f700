"""
Proposal generation pipeline: validate, enrich, render HTML, render PDF, persist.

Strictly sequential per request. Auditing is left to the caller so that it
can run detached from the primary result.
"""

from __future__ import annotations

import logging
import time
from datetime import date
from typing import Callable, Optional, Protocol

from fastapi.concurrency import run_in_threadpool

from travel_admin.schemas import ProposalGenerationRequest
from travel_admin.services.destination_lookup import DestinationLookup
from travel_admin.services.document_store import (
    GeneratedDocument,
    GeneratedDocumentStore,
    build_proposal_filename,
)
from travel_admin.services.enrichment import enrich_proposal
from travel_admin.services.template_renderer import ProposalTemplateRenderer
from travel_admin.services.validation import validate_proposal_form

logger = logging.getLogger("travel_admin.proposals")


class PdfRenderer(Protocol):
    async def render(self, html: str) -> bytes: ...


class ProposalPipeline:
    def __init__(
        self,
        lookup: DestinationLookup,
        templates: ProposalTemplateRenderer,
        pdf_renderer: PdfRenderer,
        store: GeneratedDocumentStore,
        today: Callable[[], date] = date.today,
    ):
        self.lookup = lookup
        self.templates = templates
        self.pdf_renderer = pdf_renderer
        self.store = store
        self.today = today

    async def generate(self, request: ProposalGenerationRequest) -> GeneratedDocument:
        form = request.formData
        t0 = time.perf_counter()

        validate_proposal_form(form)

        # Destination lookup is a blocking DB query; keep it off the event loop
        enriched = await run_in_threadpool(
            enrich_proposal, form, self.lookup, fallback_destination_id=request.destinationId
        )

        generated_on = self.today()
        html = self.templates.render(enriched, generated_at=generated_on)

        pdf_bytes = await self.pdf_renderer.render(html)

        filename = build_proposal_filename(form.customerInfo.customerName, generated_on)
        document = self.store.save(filename, pdf_bytes)

        logger.info(
            "proposal generated",
            extra={
                "customer": form.customerInfo.customerName,
                "pdf_filename": document.filename,
                "size_kb": document.file_size_kb,
                "generation_type": request.generationType,
                "latency_ms": int((time.perf_counter() - t0) * 1000),
            },
        )
        return document

    def download_url(self, document: GeneratedDocument) -> str:
        return self.store.download_url(document.filename)


def build_pipeline(
    lookup: DestinationLookup,
    templates: ProposalTemplateRenderer,
    store: GeneratedDocumentStore,
    pdf_renderer: Optional[PdfRenderer] = None,
    render_timeout_ms: int = 30000,
) -> ProposalPipeline:
    if pdf_renderer is None:
        from travel_admin.services.pdf_renderer import PlaywrightPdfRenderer

        pdf_renderer = PlaywrightPdfRenderer(timeout_ms=render_timeout_ms)
    return ProposalPipeline(lookup, templates, pdf_renderer, store)
