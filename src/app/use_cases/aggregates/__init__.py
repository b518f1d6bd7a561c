"""Aggregate maintenance use cases"""
from .rebuild_aggregate import (
    RebuildAggregate,
    RebuildDailySpend,
    RebuildRoundAttendance,
    RebuildDistributionSummary,
)
from .rebuild_aggregates import RebuildAggregates
from .list_daily_spend import ListDailySpend
from .dtos import (
    AggregateRebuildDTO,
    RebuildAggregatesResultDTO,
    DailySpendDTO,
    DailySpendResponseDTO,
)

__all__ = [
    "RebuildAggregate",
    "RebuildDailySpend",
    "RebuildRoundAttendance",
    "RebuildDistributionSummary",
    "RebuildAggregates",
    "ListDailySpend",
    "AggregateRebuildDTO",
    "RebuildAggregatesResultDTO",
    "DailySpendDTO",
    "DailySpendResponseDTO",
]
