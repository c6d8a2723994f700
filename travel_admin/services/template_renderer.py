"""
HTML rendering of travel proposals using templates.

The template only loops and checks for presence; every display transform
(dates, prices, generated date) happens in `build_template_context`.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from travel_admin.errors import TemplateConfigurationError
from travel_admin.schemas import EnrichedProposal


def _parse_date(value: str) -> Optional[date]:
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def format_long_date(value: Optional[Union[str, date]]) -> str:
    """Format as e.g. "January 5, 2025". Empty input gives "", unparseable input is returned as-is."""
    if not value:
        return ""
    d = value if isinstance(value, date) else _parse_date(value)
    if d is None:
        return str(value)
    return f"{d:%B} {d.day}, {d.year}"


def format_price(value: Optional[float]) -> str:
    """Thousands separators, up to three decimals: 45000 -> "45,000", 1234.5 -> "1,234.5"."""
    if value is None:
        return "0"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def build_template_context(proposal: EnrichedProposal, generated_at: date) -> Dict[str, Any]:
    data = proposal.form.model_dump()
    data["customerInfo"]["travelStartDate"] = format_long_date(proposal.form.customerInfo.travelStartDate)
    data["customerInfo"]["travelEndDate"] = format_long_date(proposal.form.customerInfo.travelEndDate)
    data["tripDetails"]["destination"] = proposal.destination
    data["pricing"]["totalPackagePrice"] = format_price(proposal.form.pricing.totalPackagePrice)
    # Stable sort: duplicate day numbers keep their submitted order
    data["itinerary"] = sorted(data["itinerary"], key=lambda d: d["dayNumber"])
    data["heroImage"] = proposal.heroImage
    data["generatedDate"] = format_long_date(generated_at)
    return data


class ProposalTemplateRenderer:
    """Binds enriched proposals into the HTML proposal template."""

    def __init__(self, template_dir: Path, template_name: str = "proposal.html"):
        self.template_dir = Path(template_dir)
        self.template_name = template_name
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "htm"]),
        )

    @property
    def template_path(self) -> Path:
        return self.template_dir / self.template_name

    def load_template(self):
        if not self.template_path.is_file():
            raise TemplateConfigurationError(f"Template file not found at: {self.template_path}")
        try:
            return self.env.get_template(self.template_name)
        except TemplateError as e:
            raise TemplateConfigurationError(
                f"Template {self.template_name} could not be loaded", details=str(e)
            ) from e

    def render(self, proposal: EnrichedProposal, generated_at: Optional[date] = None) -> str:
        template = self.load_template()
        context = build_template_context(proposal, generated_at or date.today())
        try:
            return template.render(**context)
        except TemplateError as e:
            raise TemplateConfigurationError(
                f"Template {self.template_name} failed to render", details=str(e)
            ) from e
