from .project_budget_repository import SqlAlchemyProjectBudgetRepository
from .payment_posting_repository import SqlAlchemyPaymentPostingRepository
from .beneficiary_repository import SqlAlchemyBeneficiaryRepository
from .audit_entry_repository import SqlAlchemyAuditEntryRepository
from .distribution_repository import SqlAlchemyDistributionRepository
from .aggregate_repository import SqlAlchemyAggregateRepository

__all__ = [
    "SqlAlchemyProjectBudgetRepository",
    "SqlAlchemyPaymentPostingRepository",
    "SqlAlchemyBeneficiaryRepository",
    "SqlAlchemyAuditEntryRepository",
    "SqlAlchemyDistributionRepository",
    "SqlAlchemyAggregateRepository",
]
