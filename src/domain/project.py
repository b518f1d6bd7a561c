"""Project Domain Entity

A donor-funded aid project. Owns at most one ProjectBudget and is the parent
of rounds, payments, complaints and beneficiary links (cascade on delete).
"""

from datetime import date
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Integer, Text
from src.domain.base import BaseModel


class Project(BaseModel, table=True):
    __tablename__ = "projects"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
        description="Project identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Project name"
    )

    donor: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Funding donor"
    )

    start_date: Optional[date] = Field(default=None, description="Project start date")

    end_date: Optional[date] = Field(default=None, description="Project end date")

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Winter Relief",
                "donor": "UNHCR",
                "start_date": "2025-01-01",
                "end_date": "2025-12-31"
            }
        }
