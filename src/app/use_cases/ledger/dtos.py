"""Data Transfer Objects for Budget Ledger Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date as date_type, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.payment_posting import ApprovalStatus


class PostPaymentCommandDTO(BaseModel):
    """
    Command DTO for posting a payment

    Used as input to PostPayment use case.
    """

    project_id: int = Field(
        ...,
        description="Project charged"
    )

    invoice_id: Optional[int] = Field(
        default=None,
        description="Invoice reference from the finance workflow"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Payment amount (must be > 0)"
    )

    approval_status: ApprovalStatus = Field(
        default=ApprovalStatus.PENDING,
        description="Only admin_approved postings count toward spend"
    )

    date: Optional[date_type] = Field(
        default=None,
        description="Posting date (defaults to today)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "project_id": 1,
                "invoice_id": 1001,
                "amount": "5000.00",
                "approval_status": "admin_approved",
                "date": "2025-03-01"
            }
        }


class PaymentPostingResponseDTO(BaseModel):
    """Response DTO for a created or transitioned posting"""

    payment_id: int
    invoice_id: Optional[int] = None
    project_id: int
    amount: Decimal
    date: date_type
    approval_status: str
    remaining_budget: Optional[Decimal] = Field(
        default=None,
        description="Allocation minus approved spend after this operation"
    )


class UpdatePaymentStatusCommandDTO(BaseModel):
    """
    Command DTO for an approval status transition

    Only pending postings transition, to admin_approved or rejected.
    """

    payment_id: int = Field(..., description="Posting to transition")

    approval_status: ApprovalStatus = Field(..., description="Target status")


class RemainingBudgetResponseDTO(BaseModel):
    project_id: int
    allocated_amount: Decimal
    approved_total: Decimal
    remaining_budget: Decimal


class BudgetOverrunDTO(BaseModel):
    """A project whose approved spend exceeds its allocation"""

    project_id: int
    allocated_amount: Optional[Decimal] = Field(
        default=None,
        description="None when approved postings exist without any budget"
    )
    approved_total: Decimal
    overrun: Decimal


class BudgetReconciliationResultDTO(BaseModel):
    """Result of a read-only budget reconciliation sweep"""

    total_budgets_checked: int
    overruns_found: int
    overruns: List[BudgetOverrunDTO] = Field(default_factory=list)
    reconciliation_time: datetime
    execution_time_ms: int
