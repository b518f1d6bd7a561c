"""Project Budget Domain Entity

The allocation a project's approved payments may never exceed.
"""

from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric
from src.domain.base import BaseModel


class ProjectBudget(BaseModel, table=True):
    """
    Project Budget - Allocated spend ceiling for a project

    Domain Rules:
    - One budget per project (project_id is unique)
    - allocated_amount must be non-negative
    - Sum of approved PaymentPostings for the project must stay
      <= allocated_amount; enforced by PostPayment under a row lock
      on this record
    """

    __tablename__ = "project_budgets"
    __table_args__ = (
        CheckConstraint('allocated_amount >= 0', name='allocated_amount_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
        description="Budget identifier (auto-increment)"
    )

    project_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        description="Project (unique - one budget per project)"
    )

    allocated_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Allocated budget (must be >= 0, precision: 12,2)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "project_id": 1,
                "allocated_amount": "50000.00"
            }
        }
