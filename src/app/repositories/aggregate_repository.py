"""Aggregate Repository Interface

Defines the contract for rebuilding and reading derived aggregate tables.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from src.domain.aggregates import (
    AggregateRefresh,
    DailySpendAggregate,
    DailyDistributionSummary,
    RoundAttendanceAggregate,
)


class AggregateRepository(ABC):
    """
    Repository interface for derived aggregates

    replace_* methods delete and re-insert the whole table inside the
    caller's transaction and do not commit. Until the caller commits,
    concurrent readers keep seeing the previous contents.
    """

    @abstractmethod
    async def lock_for_rebuild(self, name: str) -> None:
        """
        Block other rebuilds of the named aggregate until the caller's
        transaction ends. Plain readers are not blocked.
        """
        pass

    @abstractmethod
    async def replace_daily_spend(self) -> int:
        """
        Replace financial_daily_aggregates from approved payments

        Returns:
            Number of aggregate rows written
        """
        pass

    @abstractmethod
    async def replace_round_attendance(self) -> int:
        """
        Replace attendance_aggregates from rounds LEFT JOIN attendance

        Returns:
            Number of aggregate rows written (one per round)
        """
        pass

    @abstractmethod
    async def replace_distribution_summary(self) -> int:
        """
        Replace daily_distribution_summary from rounds LEFT JOIN present attendance

        Returns:
            Number of summary rows written
        """
        pass

    @abstractmethod
    async def record_refresh(self, name: str, row_count: int, duration_ms: int) -> AggregateRefresh:
        """Upsert the refresh marker for an aggregate (same transaction as the rebuild)"""
        pass

    @abstractmethod
    async def get_refresh(self, name: str) -> Optional[AggregateRefresh]:
        pass

    @abstractmethod
    async def list_daily_spend(
        self,
        project_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[DailySpendAggregate]:
        pass

    @abstractmethod
    async def list_round_attendance(
        self, caller_region: Optional[str], project_id: Optional[int] = None
    ) -> List[RoundAttendanceAggregate]:
        """Attendance aggregates for rounds visible in the caller's region"""
        pass

    @abstractmethod
    async def list_distribution_summary(
        self,
        caller_region: Optional[str],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[DailyDistributionSummary]:
        """Summary rows whose location is the caller's region"""
        pass
