"""Region-gated distribution reads"""
from .list_rounds import ListRounds
from .list_round_attendees import ListRoundAttendees
from .list_round_attendance import ListRoundAttendance
from .list_distribution_summary import ListDistributionSummary
from .list_project_beneficiaries import ListProjectBeneficiaries
from .dtos import (
    RoundDTO,
    RoundListResponseDTO,
    AttendeeDTO,
    RoundAttendeesResponseDTO,
    RoundAttendanceDTO,
    RoundAttendanceResponseDTO,
    DistributionSummaryDTO,
    DistributionSummaryResponseDTO,
    ProjectBeneficiaryDTO,
    ProjectBeneficiariesResponseDTO,
)

__all__ = [
    "ListRounds",
    "ListRoundAttendees",
    "ListRoundAttendance",
    "ListDistributionSummary",
    "ListProjectBeneficiaries",
    "RoundDTO",
    "RoundListResponseDTO",
    "AttendeeDTO",
    "RoundAttendeesResponseDTO",
    "RoundAttendanceDTO",
    "RoundAttendanceResponseDTO",
    "DistributionSummaryDTO",
    "DistributionSummaryResponseDTO",
    "ProjectBeneficiaryDTO",
    "ProjectBeneficiariesResponseDTO",
]
