"""Distribution API Routes

Region-scoped reads. The caller's region comes from the request context;
callers without a region see nothing.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.distribution import (
    ListRounds,
    ListRoundAttendees,
    ListRoundAttendance,
    ListDistributionSummary,
    ListProjectBeneficiaries,
    RoundListResponseDTO,
    RoundAttendeesResponseDTO,
    RoundAttendanceResponseDTO,
    DistributionSummaryResponseDTO,
    ProjectBeneficiariesResponseDTO,
)
from src.app.services.region_gate import RegionGate
from src.adapter.repositories import (
    SqlAlchemyDistributionRepository,
    SqlAlchemyAggregateRepository,
)
from src.depends import get_session, get_region_gate, get_caller_region
from src.api.error import ClientError

router = APIRouter(prefix="/distribution", tags=["Distribution"])


@router.get(
    "/rounds",
    response_model=RoundListResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_rounds(
    project_id: Optional[int] = Query(default=None),
    caller_region: Optional[str] = Depends(get_caller_region),
    region_gate: RegionGate = Depends(get_region_gate),
    session: AsyncSession = Depends(get_session),
):
    """Distribution rounds held in the caller's region."""
    distribution_repo = SqlAlchemyDistributionRepository(session, region_gate)

    use_case = ListRounds(distribution_repo)
    result = await use_case.execute(caller_region, project_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/rounds/attendance",
    response_model=RoundAttendanceResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_round_attendance(
    project_id: Optional[int] = Query(default=None),
    caller_region: Optional[str] = Depends(get_caller_region),
    region_gate: RegionGate = Depends(get_region_gate),
    session: AsyncSession = Depends(get_session),
):
    """Present-attendee counts per round, as of the last rebuild."""
    aggregate_repo = SqlAlchemyAggregateRepository(session, region_gate)

    use_case = ListRoundAttendance(aggregate_repo)
    result = await use_case.execute(caller_region, project_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/rounds/{round_id}/attendees",
    response_model=RoundAttendeesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_round_attendees(
    round_id: int,
    caller_region: Optional[str] = Depends(get_caller_region),
    region_gate: RegionGate = Depends(get_region_gate),
    session: AsyncSession = Depends(get_session),
):
    """
    Attendance records of one round.

    Rounds outside the caller's region answer 404, the same as a round that
    does not exist.
    """
    distribution_repo = SqlAlchemyDistributionRepository(session, region_gate)

    use_case = ListRoundAttendees(distribution_repo, region_gate)
    result = await use_case.execute(round_id, caller_region)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/summary",
    response_model=DistributionSummaryResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_distribution_summary(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    caller_region: Optional[str] = Depends(get_caller_region),
    region_gate: RegionGate = Depends(get_region_gate),
    session: AsyncSession = Depends(get_session),
):
    """Beneficiaries served per day, project and location."""
    aggregate_repo = SqlAlchemyAggregateRepository(session, region_gate)

    use_case = ListDistributionSummary(aggregate_repo)
    result = await use_case.execute(caller_region, start_date, end_date)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/projects/{project_id}/beneficiaries",
    response_model=ProjectBeneficiariesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_project_beneficiaries(
    project_id: int,
    caller_region: Optional[str] = Depends(get_caller_region),
    region_gate: RegionGate = Depends(get_region_gate),
    session: AsyncSession = Depends(get_session),
):
    """Beneficiaries of a project with at least one round in the caller's region."""
    distribution_repo = SqlAlchemyDistributionRepository(session, region_gate)

    use_case = ListProjectBeneficiaries(distribution_repo)
    result = await use_case.execute(project_id, caller_region)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
