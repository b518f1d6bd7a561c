"""Data Transfer Objects for Audited Beneficiary Use Cases"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class UpdateBeneficiaryCommandDTO(BaseModel):
    """
    Command DTO for updating a beneficiary

    Only fields explicitly set are applied. client_origin is the network
    origin of the request and goes into the audit entry.
    """

    beneficiary_id: int

    name: Optional[str] = None
    address: Optional[str] = None
    national_id: Optional[str] = None
    phone: Optional[str] = None

    client_origin: Optional[str] = Field(
        default=None,
        description="Network origin of the request"
    )

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(
            exclude_unset=True,
            include={"name", "address", "national_id", "phone"},
        )


class BeneficiaryResponseDTO(BaseModel):
    beneficiary_id: int
    name: str
    address: Optional[str] = None
    national_id: Optional[str] = None
    phone: Optional[str] = None
    audit_entry_id: Optional[int] = Field(
        default=None,
        description="Audit entry recorded with this update"
    )


class AuditEntryDTO(BaseModel):
    audit_id: int
    user_id: Optional[str] = None
    action: str
    table_name: str
    row_id: str
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    timestamp: datetime
    client_origin: Optional[str] = None


class ListAuditEntriesResponseDTO(BaseModel):
    entries: List[AuditEntryDTO] = Field(default_factory=list)
    total: int
    limit: int
    offset: int
