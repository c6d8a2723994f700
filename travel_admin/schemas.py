"""
Pydantic schemas for the proposal form and the admin API.

Field names are camelCase to match the JSON sent by the dashboard. Required
proposal fields are deliberately optional here: completeness is checked by
`services.validation` so that the caller gets one ordered, human-readable
error instead of a schema dump.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerInfo(BaseModel):
    customerName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    totalTravelers: int = Field(1, ge=0)
    # ISO dates (or full ISO timestamps) as sent by the form
    travelStartDate: Optional[str] = None
    travelEndDate: Optional[str] = None
    specialRequirements: Optional[str] = None


class TripDetails(BaseModel):
    packageTitle: Optional[str] = None
    # Free-text destination, kept for forms that predate the destination picker
    destination: Optional[str] = None
    destinationId: Optional[int] = None
    duration: str = ""
    tripDescription: Optional[str] = None
    maxGroupSize: Optional[int] = None
    packageHighlights: List[str] = Field(default_factory=list)


class PricingInfo(BaseModel):
    totalPackagePrice: Optional[float] = None
    currency: str = "INR"
    priceNotes: Optional[str] = None


class ItineraryDay(BaseModel):
    dayNumber: int
    dayTitle: str = ""
    dayDescription: Optional[str] = None


class AdditionalInfo(BaseModel):
    termsConditions: Optional[str] = None
    additionalNotes: Optional[str] = None


class ProposalForm(BaseModel):
    customerInfo: CustomerInfo = Field(default_factory=CustomerInfo)
    tripDetails: TripDetails = Field(default_factory=TripDetails)
    pricing: PricingInfo = Field(default_factory=PricingInfo)
    inclusions: List[str] = Field(default_factory=list)
    exclusions: List[str] = Field(default_factory=list)
    itinerary: List[ItineraryDay] = Field(default_factory=list)
    additionalInfo: Optional[AdditionalInfo] = None


class EnrichedProposal(BaseModel):
    """Submitted form plus the resolved destination display name and hero image."""
    form: ProposalForm
    destination: str = ""
    heroImage: str = ""


class ProposalGenerationRequest(BaseModel):
    formData: ProposalForm
    generationType: Literal["scratch", "prepopulated"] = "scratch"
    # Legacy top-level destination id, used when the form itself carries none
    destinationId: Optional[int] = None
    packageId: Optional[int] = None


class ProposalGenerationResponse(BaseModel):
    success: bool = True
    filename: str
    downloadUrl: str
    fileSize: int = Field(..., description="File size in KB")
    message: str = "PDF generated successfully"


class DestinationOption(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    country: str
    slug: str


class DestinationDetail(DestinationOption):
    description: Optional[str] = None


class DestinationsResponse(BaseModel):
    destinations: List[DestinationOption]


class PackageOption(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    duration_days: int
    duration_nights: Optional[int] = None
    price_from: Optional[float] = None
    price_to: Optional[float] = None
    currency: Optional[str] = None


class PackageDetail(PackageOption):
    slug: str
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    inclusions: Optional[List[str]] = None
    exclusions: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    max_group_size: Optional[int] = None
    destination_id: Optional[int] = None


class PackagesResponse(BaseModel):
    packages: List[PackageOption]


class PackageDetailsResponse(BaseModel):
    package: PackageDetail
    destination: Optional[DestinationDetail] = None
    itinerary: List[ItineraryDay]
    formData: ProposalForm
