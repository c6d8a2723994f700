"""
Required-field checks for a submitted proposal form.

Rules run in a fixed order and the first failure wins, so a form missing both
the customer name and the price reports the customer name.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from travel_admin.errors import ProposalValidationError
from travel_admin.schemas import ProposalForm


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def _has_destination(form: ProposalForm) -> bool:
    trip = form.tripDetails
    return bool(trip.destinationId) or not _blank(trip.destination)


def _has_positive_price(form: ProposalForm) -> bool:
    price = form.pricing.totalPackagePrice
    return price is not None and price > 0


RULES: List[Tuple[Callable[[ProposalForm], bool], str]] = [
    (lambda f: not _blank(f.customerInfo.customerName), "Customer name is required"),
    (lambda f: not _blank(f.tripDetails.packageTitle), "Package title is required"),
    (_has_destination, "Destination is required"),
    (_has_positive_price, "Valid package price is required"),
]


def first_validation_error(form: ProposalForm) -> Optional[str]:
    for check, message in RULES:
        if not check(form):
            return message
    return None


def validate_proposal_form(form: ProposalForm) -> None:
    """Raise `ProposalValidationError` for the first unmet rule."""
    message = first_validation_error(form)
    if message is not None:
        raise ProposalValidationError(message)
