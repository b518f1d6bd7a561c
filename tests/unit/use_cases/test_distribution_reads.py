"""Unit tests for region-gated distribution use cases"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from src.app.services.region_gate import RegionGate
from src.app.use_cases.distribution import ListRounds, ListRoundAttendees
from src.domain.distribution_round import (
    AttendanceRecord,
    AttendanceStatus,
    DistributionRound,
)


@pytest.fixture
def latakia_round():
    return DistributionRound(id=1, project_id=1, date=date(2025, 3, 1), location="Latakia")


@pytest.fixture
def mock_distribution_repo(latakia_round):
    repo = MagicMock()
    repo.get_round = AsyncMock(return_value=latakia_round)
    repo.list_attendance = AsyncMock(return_value=[
        AttendanceRecord(id=10, round_id=1, beneficiary_id=3, status=AttendanceStatus.PRESENT),
        AttendanceRecord(id=11, round_id=1, beneficiary_id=4, status=AttendanceStatus.ABSENT),
    ])
    return repo


@pytest.mark.asyncio
class TestListRoundAttendees:

    async def test_visible_round(self, mock_distribution_repo):
        use_case = ListRoundAttendees(mock_distribution_repo, RegionGate())

        result = await use_case.execute(1, "Latakia")

        assert result.is_ok()
        assert [a.beneficiary_id for a in result.value.attendees] == [3, 4]
        assert result.value.attendees[0].status == "present"

    async def test_round_in_other_region_looks_missing(self, mock_distribution_repo):
        use_case = ListRoundAttendees(mock_distribution_repo, RegionGate())

        result = await use_case.execute(1, "Jableh")

        assert result.is_err()
        assert result.error.code == "ROUND_NOT_FOUND"
        mock_distribution_repo.list_attendance.assert_not_called()

    async def test_no_region_sees_nothing(self, mock_distribution_repo):
        use_case = ListRoundAttendees(mock_distribution_repo, RegionGate())

        result = await use_case.execute(1, None)

        assert result.is_err()
        assert result.error.code == "ROUND_NOT_FOUND"

    async def test_missing_round(self, mock_distribution_repo):
        mock_distribution_repo.get_round = AsyncMock(return_value=None)
        use_case = ListRoundAttendees(mock_distribution_repo, RegionGate())

        result = await use_case.execute(404, "Latakia")

        assert result.is_err()
        assert result.error.code == "ROUND_NOT_FOUND"


@pytest.mark.asyncio
class TestListRounds:

    async def test_region_is_normalized_in_response(self, mock_distribution_repo, latakia_round):
        mock_distribution_repo.list_rounds = AsyncMock(return_value=[latakia_round])

        result = await ListRounds(mock_distribution_repo).execute("  Latakia ", project_id=1)

        assert result.is_ok()
        assert result.value.region == "Latakia"
        assert result.value.rounds[0].location == "Latakia"
        mock_distribution_repo.list_rounds.assert_called_once_with("  Latakia ", project_id=1)
