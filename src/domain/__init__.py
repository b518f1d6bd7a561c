from .base import BaseModel
from .project import Project
from .beneficiary import Beneficiary, ProjectBeneficiaryLink
from .distribution_round import DistributionRound, AttendanceRecord, AttendanceStatus
from .complaint import Complaint, ComplaintStatus
from .project_budget import ProjectBudget
from .payment_posting import PaymentPosting, ApprovalStatus
from .audit_entry import AuditEntry, AuditAction
from .aggregates import (
    DailySpendAggregate,
    RoundAttendanceAggregate,
    DailyDistributionSummary,
    AggregateRefresh,
    AggregateName,
)

__all__ = [
    "BaseModel",
    "Project",
    "Beneficiary",
    "ProjectBeneficiaryLink",
    "DistributionRound",
    "AttendanceRecord",
    "AttendanceStatus",
    "Complaint",
    "ComplaintStatus",
    "ProjectBudget",
    "PaymentPosting",
    "ApprovalStatus",
    "AuditEntry",
    "AuditAction",
    "DailySpendAggregate",
    "RoundAttendanceAggregate",
    "DailyDistributionSummary",
    "AggregateRefresh",
    "AggregateName",
]
