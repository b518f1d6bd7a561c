"""Distribution Round and Attendance Domain Entities

A DistributionRound is one aid handout at a location on a date. Reads of
rounds, and of anything derived from them, pass through the region gate.
"""

from datetime import date as date_type
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Date, ForeignKey, Integer, Text
from src.domain.base import BaseModel, enum_type


class AttendanceStatus(str, Enum):
    """Attendance outcome for a beneficiary at a round"""
    PRESENT = "present"
    ABSENT = "absent"


class DistributionRound(BaseModel, table=True):
    __tablename__ = "distribution_rounds"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
        description="Round identifier (auto-increment)"
    )

    project_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )

    date: date_type = Field(
        sa_column=Column(Date, nullable=False),
        description="Distribution date"
    )

    location: str = Field(
        sa_column=Column(Text, nullable=False, index=True),
        description="Distribution location (region used by the access gate)"
    )


class AttendanceRecord(BaseModel, table=True):
    __tablename__ = "attendance"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
    )

    round_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("distribution_rounds.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )

    beneficiary_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("beneficiaries.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )

    status: AttendanceStatus = Field(
        sa_column=Column(enum_type(AttendanceStatus, "attendance_status"), nullable=False),
        description="present or absent"
    )
