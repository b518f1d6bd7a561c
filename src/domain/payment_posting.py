"""Payment Posting Domain Entity

A payment against a project's budget. Only admin_approved postings count
toward spend. Amount and project never change after creation; only the
approval status transitions (pending -> admin_approved | rejected).
"""

from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric
from src.domain.base import BaseModel, enum_type


class ApprovalStatus(str, Enum):
    """Payment approval states"""
    PENDING = "pending"
    ADMIN_APPROVED = "admin_approved"  # Counts toward project spend
    REJECTED = "rejected"


class PaymentPosting(BaseModel, table=True):
    """
    Payment Posting - Payment recorded against a project budget

    Domain Rules:
    - amount must be strictly positive
    - Only ADMIN_APPROVED postings count toward spend
    - Inserting or approving a posting re-checks the project budget
    """

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint('amount > 0', name='amount_positive'),
        Index('ix_payments_project_status', 'project_id', 'approval_status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
        description="Payment identifier (auto-increment)"
    )

    invoice_id: Optional[int] = Field(
        default=None,
        description="Invoice reference from the finance workflow"
    )

    project_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        description="Project charged"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Payment amount (must be > 0, precision: 12,2)"
    )

    date: date_type = Field(
        default_factory=date_type.today,
        sa_column=Column(Date, nullable=False),
        description="Posting date"
    )

    approval_status: ApprovalStatus = Field(
        default=ApprovalStatus.PENDING,
        sa_column=Column(
            enum_type(ApprovalStatus, "approval_status"),
            nullable=False,
            server_default=ApprovalStatus.PENDING.value,
        ),
        description="pending, admin_approved or rejected"
    )

    @property
    def is_approved(self) -> bool:
        return self.approval_status == ApprovalStatus.ADMIN_APPROVED

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_id": 1001,
                "project_id": 1,
                "amount": "5000.00",
                "date": "2025-03-01",
                "approval_status": "admin_approved"
            }
        }
