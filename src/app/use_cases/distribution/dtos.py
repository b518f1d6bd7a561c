"""Data Transfer Objects for Region-Gated Distribution Reads"""

from datetime import date as date_type, datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class RoundDTO(BaseModel):
    round_id: int
    project_id: int
    date: date_type
    location: str


class RoundListResponseDTO(BaseModel):
    region: Optional[str] = Field(
        default=None,
        description="Caller region the rounds were filtered by"
    )
    rounds: List[RoundDTO] = Field(default_factory=list)


class AttendeeDTO(BaseModel):
    attendance_id: int
    beneficiary_id: int
    status: str


class RoundAttendeesResponseDTO(BaseModel):
    round_id: int
    attendees: List[AttendeeDTO] = Field(default_factory=list)


class RoundAttendanceDTO(BaseModel):
    round_id: int
    project_id: int
    actual_present: int


class RoundAttendanceResponseDTO(BaseModel):
    rounds: List[RoundAttendanceDTO] = Field(default_factory=list)
    as_of: Optional[datetime] = Field(
        default=None,
        description="Last rebuild time (None if never rebuilt)"
    )


class DistributionSummaryDTO(BaseModel):
    dist_date: date_type
    project_id: int
    location: str
    beneficiaries_served: int
    rounds_count: int


class DistributionSummaryResponseDTO(BaseModel):
    rows: List[DistributionSummaryDTO] = Field(default_factory=list)
    as_of: Optional[datetime] = Field(
        default=None,
        description="Last rebuild time (None if never rebuilt)"
    )


class ProjectBeneficiaryDTO(BaseModel):
    beneficiary_id: int
    name: str


class ProjectBeneficiariesResponseDTO(BaseModel):
    project_id: int
    beneficiaries: List[ProjectBeneficiaryDTO] = Field(default_factory=list)
