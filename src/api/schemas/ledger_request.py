"""Request schemas for Ledger API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.payment_posting import ApprovalStatus


class PostPaymentRequestSchema(BaseModel):
    """
    Request schema for posting a payment

    Used for POST /ledger/payments endpoint.
    """

    project_id: int = Field(
        ...,
        gt=0,
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
        description="pending, admin_approved or rejected"
    )

    date: Optional[date_type] = Field(
        default=None,
        description="Posting date (defaults to today)"
    )

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        """Amounts are stored with two decimal places"""
        if v.as_tuple().exponent < -2:
            raise ValueError("Amount must have at most 2 decimal places")
        return v

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


class UpdatePaymentStatusRequestSchema(BaseModel):
    """
    Request schema for an approval status transition

    Used for PATCH /ledger/payments/{payment_id}/status endpoint.
    """

    approval_status: ApprovalStatus = Field(
        ...,
        description="admin_approved or rejected"
    )

    @field_validator('approval_status')
    @classmethod
    def validate_target(cls, v):
        if v == ApprovalStatus.PENDING:
            raise ValueError("Target status must be admin_approved or rejected")
        return v

    class Config:
        json_schema_extra = {
            "example": {"approval_status": "admin_approved"}
        }
