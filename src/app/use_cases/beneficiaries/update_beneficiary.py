"""UpdateBeneficiary Use Case

Applies changes to a beneficiary and records exactly one audit entry in
the same transaction. The update and its audit entry commit together or
not at all.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.audit_trail import AuditTrail, snapshot
from src.app.repositories.beneficiary_repository import BeneficiaryRepository
from src.app.use_cases import error_codes
from src.domain.audit_entry import AuditAction
from src.domain.beneficiary import Beneficiary
from .dtos import UpdateBeneficiaryCommandDTO, BeneficiaryResponseDTO

logger = logging.getLogger(__name__)


class UpdateBeneficiary:
    """
    Use Case: Audited beneficiary update

    Business Rules:
    1. Every committed update produces exactly one UPDATE audit entry,
       even when no field actually changed
    2. An unresolved actor is recorded as null, never a failure
    3. Any failure rolls back both the update and the audit entry

    Flow:
    1. Load beneficiary and snapshot it
    2. Apply changes and flush
    3. Snapshot again and record the audit entry
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        beneficiary_repo: BeneficiaryRepository,
        audit_trail: AuditTrail,
    ):
        self.uow = uow
        self.beneficiary_repo = beneficiary_repo
        self.audit_trail = audit_trail

    async def execute(self, command: UpdateBeneficiaryCommandDTO) -> Result[BeneficiaryResponseDTO]:
        try:
            beneficiary = await self.beneficiary_repo.get_by_id(command.beneficiary_id)

            if not beneficiary:
                return Return.err(
                    Error(
                        code=error_codes.BENEFICIARY_NOT_FOUND,
                        message=f"Beneficiary {command.beneficiary_id} not found",
                    )
                )

            before = snapshot(beneficiary)

            for field, value in command.changes().items():
                setattr(beneficiary, field, value)

            updated = await self.beneficiary_repo.update(beneficiary)
            after = snapshot(updated)

            entry = await self.audit_trail.record_mutation(
                entity_name=Beneficiary.__tablename__,
                entity_id=updated.id,
                action=AuditAction.UPDATE,
                before=before,
                after=after,
                origin=command.client_origin,
            )

            await self.uow.commit()

            return Return.ok(
                BeneficiaryResponseDTO(
                    beneficiary_id=updated.id,
                    name=updated.name,
                    address=updated.address,
                    national_id=updated.national_id,
                    phone=updated.phone,
                    audit_entry_id=entry.id,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Update of beneficiary {command.beneficiary_id} failed, nothing audited: {e}")
            return Return.err(
                Error(
                    code=error_codes.UPDATE_BENEFICIARY_FAILED,
                    message="Failed to update beneficiary",
                    reason=str(e),
                )
            )
