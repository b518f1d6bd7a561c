from .project_budget_repository import ProjectBudgetRepository
from .payment_posting_repository import PaymentPostingRepository
from .beneficiary_repository import BeneficiaryRepository
from .audit_entry_repository import AuditEntryRepository
from .distribution_repository import DistributionRepository
from .aggregate_repository import AggregateRepository

__all__ = [
    "ProjectBudgetRepository",
    "PaymentPostingRepository",
    "BeneficiaryRepository",
    "AuditEntryRepository",
    "DistributionRepository",
    "AggregateRepository",
]
