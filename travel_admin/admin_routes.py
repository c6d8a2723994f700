"""
Admin routes for proposal generation and the lookups that feed it.
"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from travel_admin.database import get_db
from travel_admin.errors import ProposalError
from travel_admin.models import Destination, TourPackage
from travel_admin.schemas import (
    DestinationDetail,
    DestinationOption,
    DestinationsResponse,
    PackageDetail,
    PackageDetailsResponse,
    PackageOption,
    PackagesResponse,
    ProposalGenerationRequest,
    ProposalGenerationResponse,
)
from travel_admin.services.audit import AuditRecorder
from travel_admin.services.destination_lookup import (
    list_packages_for_destination,
    list_published_destinations,
)
from travel_admin.services.prepopulation import basic_itinerary, prepopulated_form
from travel_admin.services.proposal_pipeline import ProposalPipeline

logger = logging.getLogger("travel_admin.proposals")

router = APIRouter(prefix="/api/admin", tags=["admin"])
proposals_router = APIRouter(tags=["proposals"])


def get_pipeline(request: Request) -> ProposalPipeline:
    return request.app.state.pipeline


def get_audit_recorder(request: Request) -> AuditRecorder:
    return request.app.state.audit_recorder


def get_actor_id(request: Request, x_admin_user: Optional[str] = Header(None)) -> str:
    """Admin identity shim until real sessions exist."""
    uid = (x_admin_user or "").strip()
    return uid or request.app.state.settings.default_actor


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _proposal_error_response(e: ProposalError) -> JSONResponse:
    if e.status_code < 500:
        return _error(e.message, e.status_code)
    content = {"success": False, "error": e.message}
    if e.details:
        content["details"] = e.details
    return JSONResponse(status_code=e.status_code, content=content)


@router.get("/destinations", response_model=DestinationsResponse)
async def list_destinations(db: Session = Depends(get_db)):
    """Published destinations for the proposal destination picker."""
    rows = list_published_destinations(db)
    return DestinationsResponse(destinations=[DestinationOption.model_validate(r) for r in rows])


@router.get("/packages", response_model=PackagesResponse)
async def list_packages(destination_id: Optional[int] = None, db: Session = Depends(get_db)):
    if not destination_id:
        return _error("destination_id parameter is required", 400)
    rows = list_packages_for_destination(db, destination_id)
    return PackagesResponse(packages=[PackageOption.model_validate(r) for r in rows])


@router.get("/package-details", response_model=PackageDetailsResponse)
async def get_package_details(package_id: Optional[int] = None, db: Session = Depends(get_db)):
    """Package, its destination and a pre-filled proposal form."""
    if not package_id:
        return _error("package_id parameter is required", 400)
    package = db.query(TourPackage).filter(TourPackage.id == package_id).first()
    if package is None:
        return _error("Package not found", 404)
    destination: Optional[Destination] = package.destination

    return PackageDetailsResponse(
        package=PackageDetail.model_validate(package),
        destination=DestinationDetail.model_validate(destination) if destination else None,
        itinerary=basic_itinerary(package.duration_days),
        formData=prepopulated_form(package, destination),
    )


@router.post("/generate-pdf", response_model=ProposalGenerationResponse)
@proposals_router.post("/generate-proposal", response_model=ProposalGenerationResponse)
async def generate_proposal(
    body: ProposalGenerationRequest,
    background_tasks: BackgroundTasks,
    pipeline: ProposalPipeline = Depends(get_pipeline),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    actor_id: str = Depends(get_actor_id),
):
    """Generate a proposal PDF and return its download location."""
    logger.info(
        "proposal requested",
        extra={
            "generation_type": body.generationType,
            "destination_id": body.destinationId,
            "package_id": body.packageId,
            "customer": body.formData.customerInfo.customerName,
        },
    )
    try:
        document = await pipeline.generate(body)
    except ProposalError as e:
        if e.status_code < 500:
            logger.info("proposal rejected", extra={"error": e.message})
        return _proposal_error_response(e)
    except Exception as e:
        logger.exception("proposal generation failed")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e) or "Failed to generate PDF", "details": repr(e)},
        )

    background_tasks.add_task(
        recorder.record_safely,
        body.formData,
        actor_id,
        document,
        body.generationType,
        destination_id=body.destinationId or body.formData.tripDetails.destinationId,
        package_id=body.packageId,
    )

    return ProposalGenerationResponse(
        filename=document.filename,
        downloadUrl=pipeline.download_url(document),
        fileSize=document.file_size_kb,
    )
