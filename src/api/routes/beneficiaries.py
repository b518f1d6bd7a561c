"""Beneficiary API Routes

Audited beneficiary updates and the audit history of a beneficiary.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.beneficiary_request import UpdateBeneficiaryRequestSchema
from src.app.use_cases.beneficiaries import (
    UpdateBeneficiary,
    ListAuditEntries,
    UpdateBeneficiaryCommandDTO,
    BeneficiaryResponseDTO,
    ListAuditEntriesResponseDTO,
)
from src.app.services.audit_trail import AuditTrail
from src.adapter.repositories import (
    SqlAlchemyBeneficiaryRepository,
    SqlAlchemyAuditEntryRepository,
)
from src.adapter.services.actor_resolver import RequestActorResolver
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_caller_actor, get_client_origin
from src.domain.beneficiary import Beneficiary
from src.api.error import ClientError

router = APIRouter(prefix="/beneficiaries", tags=["Beneficiaries"])


@router.patch(
    "/{beneficiary_id}",
    response_model=BeneficiaryResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Beneficiary not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "BENEFICIARY_NOT_FOUND",
                            "message": "Beneficiary 42 not found"
                        }
                    }
                }
            }
        }
    }
)
async def update_beneficiary(
    beneficiary_id: int,
    request: UpdateBeneficiaryRequestSchema,
    actor: Optional[str] = Depends(get_caller_actor),
    client_origin: Optional[str] = Depends(get_client_origin),
    session: AsyncSession = Depends(get_session),
):
    """
    Update a beneficiary and record one audit entry in the same transaction.

    The acting user is taken from the request context; when it cannot be
    resolved the entry is recorded with a null user.
    """
    uow = SqlAlchemyUnitOfWork(session)
    beneficiary_repo = SqlAlchemyBeneficiaryRepository(session)
    audit_trail = AuditTrail(
        SqlAlchemyAuditEntryRepository(session),
        RequestActorResolver(actor),
    )

    command = UpdateBeneficiaryCommandDTO(
        beneficiary_id=beneficiary_id,
        client_origin=client_origin,
        **request.model_dump(exclude_unset=True),
    )

    use_case = UpdateBeneficiary(uow, beneficiary_repo, audit_trail)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{beneficiary_id}/audit",
    response_model=ListAuditEntriesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_beneficiary_audit(
    beneficiary_id: int,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    """Audit entries of one beneficiary, newest first."""
    audit_repo = SqlAlchemyAuditEntryRepository(session)

    use_case = ListAuditEntries(audit_repo)
    result = await use_case.execute(
        table_name=Beneficiary.__tablename__,
        row_id=str(beneficiary_id),
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
