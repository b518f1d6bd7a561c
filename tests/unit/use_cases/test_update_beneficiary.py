"""Unit tests for UpdateBeneficiary use case

Tests cover:
- One audit entry recorded with before/after snapshots
- Unresolved actor recorded as null
- Missing beneficiary
- Failure rolls back update and audit entry together
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.audit_trail import AuditTrail
from src.adapter.services.actor_resolver import RequestActorResolver
from src.app.use_cases.beneficiaries import UpdateBeneficiary, UpdateBeneficiaryCommandDTO
from src.domain.audit_entry import AuditAction, AuditEntry
from src.domain.beneficiary import Beneficiary

ACTOR_ID = "3f1c2a9e-8d4b-4c1e-9a7f-0b5d6e2c1a44"


@pytest.fixture
def sample_beneficiary():
    return Beneficiary(
        id=12,
        name="Rania Haddad",
        address="Latakia, Al-Ziraa",
        national_id="0801234567",
        phone=None,
    )


@pytest.fixture
def mock_beneficiary_repo(sample_beneficiary):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_beneficiary)
    repo.update = AsyncMock(side_effect=lambda b: b)
    return repo


@pytest.fixture
def mock_audit_repo():
    repo = MagicMock()

    async def _create(entry):
        entry.id = 900
        return entry

    repo.create = AsyncMock(side_effect=_create)
    return repo


def build_use_case(mock_uow, beneficiary_repo, audit_repo, actor=ACTOR_ID):
    audit_trail = AuditTrail(audit_repo, RequestActorResolver(actor))
    return UpdateBeneficiary(mock_uow, beneficiary_repo, audit_trail)


@pytest.mark.asyncio
class TestUpdateBeneficiary:

    async def test_update_records_one_audit_entry(
        self, mock_uow, mock_beneficiary_repo, mock_audit_repo
    ):
        use_case = build_use_case(mock_uow, mock_beneficiary_repo, mock_audit_repo)
        command = UpdateBeneficiaryCommandDTO(
            beneficiary_id=12, address="Jableh, Al-Fayd", client_origin="10.0.0.7"
        )

        result = await use_case.execute(command)

        assert result.is_ok()
        assert result.value.address == "Jableh, Al-Fayd"
        assert result.value.audit_entry_id == 900

        mock_audit_repo.create.assert_called_once()
        entry = mock_audit_repo.create.call_args[0][0]
        assert isinstance(entry, AuditEntry)
        assert entry.action == AuditAction.UPDATE
        assert entry.table_name == "beneficiaries"
        assert entry.row_id == "12"
        assert entry.user_id == ACTOR_ID
        assert entry.client_origin == "10.0.0.7"
        assert entry.old_values["address"] == "Latakia, Al-Ziraa"
        assert entry.new_values["address"] == "Jableh, Al-Fayd"
        assert entry.new_values["name"] == "Rania Haddad"
        mock_uow.commit.assert_called_once()

    async def test_unset_fields_are_untouched(
        self, mock_uow, mock_beneficiary_repo, mock_audit_repo, sample_beneficiary
    ):
        use_case = build_use_case(mock_uow, mock_beneficiary_repo, mock_audit_repo)

        await use_case.execute(UpdateBeneficiaryCommandDTO(beneficiary_id=12, phone="0999"))

        assert sample_beneficiary.phone == "0999"
        assert sample_beneficiary.national_id == "0801234567"

    async def test_no_op_update_still_audited(
        self, mock_uow, mock_beneficiary_repo, mock_audit_repo
    ):
        use_case = build_use_case(mock_uow, mock_beneficiary_repo, mock_audit_repo)

        result = await use_case.execute(UpdateBeneficiaryCommandDTO(beneficiary_id=12))

        assert result.is_ok()
        entry = mock_audit_repo.create.call_args[0][0]
        assert entry.old_values == entry.new_values

    async def test_unresolved_actor_recorded_as_null(
        self, mock_uow, mock_beneficiary_repo, mock_audit_repo
    ):
        use_case = build_use_case(mock_uow, mock_beneficiary_repo, mock_audit_repo, actor=None)

        result = await use_case.execute(
            UpdateBeneficiaryCommandDTO(beneficiary_id=12, name="Rania H.")
        )

        assert result.is_ok()
        entry = mock_audit_repo.create.call_args[0][0]
        assert entry.user_id is None
        mock_uow.commit.assert_called_once()

    async def test_beneficiary_not_found(
        self, mock_uow, mock_beneficiary_repo, mock_audit_repo
    ):
        mock_beneficiary_repo.get_by_id = AsyncMock(return_value=None)
        use_case = build_use_case(mock_uow, mock_beneficiary_repo, mock_audit_repo)

        result = await use_case.execute(UpdateBeneficiaryCommandDTO(beneficiary_id=99, name="X"))

        assert result.is_err()
        assert result.error.code == "BENEFICIARY_NOT_FOUND"
        mock_audit_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_commit_failure_rolls_back_everything(
        self, mock_uow, mock_beneficiary_repo, mock_audit_repo
    ):
        mock_uow.commit = AsyncMock(side_effect=Exception("disk full"))
        use_case = build_use_case(mock_uow, mock_beneficiary_repo, mock_audit_repo)

        result = await use_case.execute(UpdateBeneficiaryCommandDTO(beneficiary_id=12, name="X"))

        assert result.is_err()
        assert result.error.code == "UPDATE_BENEFICIARY_FAILED"
        mock_uow.rollback.assert_called_once()
