"""Budget ledger use cases"""
from .post_payment import PostPayment
from .get_remaining_budget import GetRemainingBudget
from .update_payment_status import UpdatePaymentStatus
from .reconcile_budgets import ReconcileBudgets
from .dtos import (
    PostPaymentCommandDTO,
    PaymentPostingResponseDTO,
    UpdatePaymentStatusCommandDTO,
    RemainingBudgetResponseDTO,
    BudgetOverrunDTO,
    BudgetReconciliationResultDTO,
)

__all__ = [
    "PostPayment",
    "GetRemainingBudget",
    "UpdatePaymentStatus",
    "ReconcileBudgets",
    "PostPaymentCommandDTO",
    "PaymentPostingResponseDTO",
    "UpdatePaymentStatusCommandDTO",
    "RemainingBudgetResponseDTO",
    "BudgetOverrunDTO",
    "BudgetReconciliationResultDTO",
]
