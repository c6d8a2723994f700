"""
Pre-filled proposal forms built from an existing tour package.
"""

from __future__ import annotations

from typing import List, Optional

from travel_admin.models import Destination, TourPackage
from travel_admin.schemas import ItineraryDay, PricingInfo, ProposalForm, TripDetails


def basic_itinerary(duration_days: int) -> List[ItineraryDay]:
    """Placeholder itinerary, one entry per package day."""
    return [
        ItineraryDay(dayNumber=i, dayTitle=f"Day {i}", dayDescription=f"Activities for day {i}")
        for i in range(1, (duration_days or 0) + 1)
    ]


def prepopulated_form(package: TourPackage, destination: Optional[Destination]) -> ProposalForm:
    nights = package.duration_nights if package.duration_nights is not None else max((package.duration_days or 1) - 1, 0)
    trip = TripDetails(
        packageTitle=package.title or "",
        destination=f"{destination.name}, {destination.country}" if destination else None,
        destinationId=destination.id if destination else None,
        duration=f"{package.duration_days} Days, {nights} Nights",
        tripDescription=package.long_description or package.short_description or "",
        maxGroupSize=package.max_group_size,
        packageHighlights=list(package.highlights or []),
    )
    return ProposalForm(
        tripDetails=trip,
        pricing=PricingInfo(totalPackagePrice=package.price_from or 0, currency=package.currency or "USD"),
        inclusions=list(package.inclusions or []),
        exclusions=list(package.exclusions or []),
        itinerary=basic_itinerary(package.duration_days),
    )
