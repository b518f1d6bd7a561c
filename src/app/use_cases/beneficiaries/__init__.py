"""Audited beneficiary use cases"""
from .update_beneficiary import UpdateBeneficiary
from .list_audit_entries import ListAuditEntries
from .dtos import (
    UpdateBeneficiaryCommandDTO,
    BeneficiaryResponseDTO,
    AuditEntryDTO,
    ListAuditEntriesResponseDTO,
)

__all__ = [
    "UpdateBeneficiary",
    "ListAuditEntries",
    "UpdateBeneficiaryCommandDTO",
    "BeneficiaryResponseDTO",
    "AuditEntryDTO",
    "ListAuditEntriesResponseDTO",
]
