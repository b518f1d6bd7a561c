"""Aggregate API Routes

Rebuild trigger and reads of the precomputed reporting tables.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.aggregates import (
    RebuildAggregates,
    ListDailySpend,
    RebuildAggregatesResultDTO,
    DailySpendResponseDTO,
)
from src.adapter.repositories import SqlAlchemyAggregateRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/aggregates", tags=["Aggregates"])


@router.post(
    "/rebuild",
    response_model=RebuildAggregatesResultDTO,
    status_code=status.HTTP_200_OK,
    responses={
        500: {
            "description": "One or more rebuilds rolled back",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "AGGREGATE_REBUILD_FAILED",
                            "message": "1 of 3 aggregate rebuilds failed"
                        }
                    }
                }
            }
        }
    }
)
async def rebuild_aggregates(
    session: AsyncSession = Depends(get_session),
):
    """
    Recompute every aggregate from committed source rows.

    Each aggregate is replaced atomically; a failed rebuild keeps its
    previous contents.
    """
    uow = SqlAlchemyUnitOfWork(session)
    aggregate_repo = SqlAlchemyAggregateRepository(session)

    use_case = RebuildAggregates(uow, aggregate_repo)
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/daily-spend/{project_id}",
    response_model=DailySpendResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_daily_spend(
    project_id: int,
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """
    Approved spend per day for a project, as of the last rebuild.
    """
    aggregate_repo = SqlAlchemyAggregateRepository(session)

    use_case = ListDailySpend(aggregate_repo)
    result = await use_case.execute(project_id, start_date, end_date)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
