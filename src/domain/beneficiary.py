"""Beneficiary Domain Entities

Beneficiary is a watched entity: every update is mirrored into the audit
trail inside the same transaction. ProjectBeneficiaryLink is the
many-to-many between beneficiaries and projects.
"""

from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import ForeignKey, Integer, Text
from src.domain.base import BaseModel


class Beneficiary(BaseModel, table=True):
    """
    Beneficiary - Person receiving aid

    Domain Rules:
    - name is required
    - Updates are audited (before/after snapshots)
    """

    __tablename__ = "beneficiaries"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
        description="Beneficiary identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Full name"
    )

    address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    national_id: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    phone: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )


class ProjectBeneficiaryLink(BaseModel, table=True):
    __tablename__ = "beneficiary_projects"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
    )

    beneficiary_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("beneficiaries.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )

    project_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
