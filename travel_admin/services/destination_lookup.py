"""
Destination lookups against the admin store.

Read-only: the dashboard owns destinations and packages; this module only
resolves them for proposal enrichment and form pre-population.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from travel_admin.models import Destination, TourPackage


@dataclass(frozen=True)
class DestinationSummary:
    name: str
    country: str
    hero_image: Optional[str]

    @property
    def display_name(self) -> str:
        return f"{self.name}, {self.country}"


class DestinationLookup:
    """Resolves destination ids using a session factory supplied by the caller."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_summary(self, destination_id: int) -> Optional[DestinationSummary]:
        db = self.session_factory()
        try:
            row = db.query(Destination).filter(Destination.id == destination_id).first()
            if row is None:
                return None
            return DestinationSummary(name=row.name, country=row.country, hero_image=row.hero_image)
        finally:
            db.close()


def list_published_destinations(db: Session) -> List[Destination]:
    return (
        db.query(Destination)
        .filter(Destination.status == "published")
        .order_by(Destination.name.asc())
        .all()
    )


def list_packages_for_destination(db: Session, destination_id: int) -> List[TourPackage]:
    return (
        db.query(TourPackage)
        .filter(TourPackage.destination_id == destination_id)
        .order_by(TourPackage.title.asc())
        .all()
    )
