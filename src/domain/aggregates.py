"""Derived Aggregate Tables

Rebuildable projections over payments, rounds and attendance. They hold no
independent state: each table is replaced wholesale on every maintenance
cycle and equals the query that defines it as of its last refresh.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Date, DateTime, Integer, Numeric, String, Text
from src.domain.base import BaseModel, utc_now


class DailySpendAggregate(BaseModel, table=True):
    """Approved spend per project per day"""

    __tablename__ = "financial_daily_aggregates"

    project_id: int = Field(sa_column=Column(Integer, primary_key=True))

    pay_date: date = Field(sa_column=Column(Date, primary_key=True))

    total_spent: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))

    payments_count: int = Field(sa_column=Column(Integer, nullable=False))


class RoundAttendanceAggregate(BaseModel, table=True):
    """Present attendance per round (0 for rounds nobody attended)"""

    __tablename__ = "attendance_aggregates"

    round_id: int = Field(sa_column=Column(Integer, primary_key=True))

    project_id: int = Field(sa_column=Column(Integer, nullable=False))

    actual_present: int = Field(sa_column=Column(Integer, nullable=False))


class DailyDistributionSummary(BaseModel, table=True):
    """Distinct beneficiaries served and rounds held per date/project/location"""

    __tablename__ = "daily_distribution_summary"

    dist_date: date = Field(sa_column=Column(Date, primary_key=True))

    project_id: int = Field(sa_column=Column(Integer, primary_key=True))

    location: str = Field(sa_column=Column(Text, primary_key=True))

    beneficiaries_served: int = Field(sa_column=Column(Integer, nullable=False))

    rounds_count: int = Field(sa_column=Column(Integer, nullable=False))


class AggregateName:
    DAILY_SPEND = "financial_daily_aggregates"
    ROUND_ATTENDANCE = "attendance_aggregates"
    DISTRIBUTION_SUMMARY = "daily_distribution_summary"


class AggregateRefresh(BaseModel, table=True):
    """Last successful rebuild of an aggregate, written in the rebuild's transaction"""

    __tablename__ = "aggregate_refreshes"

    name: str = Field(sa_column=Column(String(100), primary_key=True))

    refreshed_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    row_count: int = Field(default=0)

    duration_ms: Optional[int] = Field(default=None)
