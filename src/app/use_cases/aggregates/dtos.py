"""Data Transfer Objects for Aggregate Use Cases

Aggregate reads carry as_of: the time of the last successful rebuild.
Contents may miss anything committed after that point.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class AggregateRebuildDTO(BaseModel):
    """Outcome of one aggregate rebuild"""

    name: str
    row_count: int
    refreshed_at: datetime
    execution_time_ms: int


class RebuildAggregatesResultDTO(BaseModel):
    rebuilds: List[AggregateRebuildDTO] = Field(default_factory=list)
    execution_time_ms: int


class DailySpendDTO(BaseModel):
    pay_date: date
    total_spent: Decimal
    payments_count: int


class DailySpendResponseDTO(BaseModel):
    project_id: int
    days: List[DailySpendDTO] = Field(default_factory=list)
    as_of: Optional[datetime] = Field(
        default=None,
        description="Last rebuild time (None if never rebuilt)"
    )
