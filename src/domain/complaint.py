"""Complaint Domain Entity

Stored only; the complaint workflow lives outside this service.
"""

from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import ForeignKey, Integer, Text
from src.domain.base import BaseModel, enum_type


class ComplaintStatus(str, Enum):
    PENDING = "pending"
    VALID = "valid"
    INVALID = "invalid"


class Complaint(BaseModel, table=True):
    __tablename__ = "complaints"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
    )

    beneficiary_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("beneficiaries.id", ondelete="CASCADE"), nullable=True),
    )

    project_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True),
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    status: ComplaintStatus = Field(
        default=ComplaintStatus.PENDING,
        sa_column=Column(enum_type(ComplaintStatus, "complaint_status"), nullable=False),
    )
