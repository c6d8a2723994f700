"""
Best-effort destination enrichment for proposal forms.

A proposal is still generated when destination metadata cannot be fetched:
the lookup failure is logged and the form's own destination text is used.
"""

from __future__ import annotations

import logging
from typing import Optional

from travel_admin.schemas import EnrichedProposal, ProposalForm
from travel_admin.services.destination_lookup import DestinationLookup

logger = logging.getLogger("travel_admin.enrichment")


def enrich_proposal(
    form: ProposalForm,
    lookup: DestinationLookup,
    fallback_destination_id: Optional[int] = None,
) -> EnrichedProposal:
    fallback_text = (form.tripDetails.destination or "").strip()
    target_id = form.tripDetails.destinationId or fallback_destination_id
    if not target_id:
        return EnrichedProposal(form=form, destination=fallback_text, heroImage="")

    try:
        summary = lookup.get_summary(target_id)
    except Exception as e:
        logger.warning(
            "destination lookup failed; continuing without destination metadata",
            extra={"destination_id": target_id, "error": str(e)},
        )
        return EnrichedProposal(form=form, destination=fallback_text, heroImage="")

    if summary is None:
        logger.warning("destination not found", extra={"destination_id": target_id})
        return EnrichedProposal(form=form, destination=fallback_text, heroImage="")

    logger.info("destination resolved", extra={"destination_id": target_id, "destination": summary.display_name})
    return EnrichedProposal(
        form=form,
        destination=summary.display_name,
        heroImage=summary.hero_image or "",
    )
