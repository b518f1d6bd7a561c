"""Request schemas for Beneficiary API"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class UpdateBeneficiaryRequestSchema(BaseModel):
    """
    Request schema for updating a beneficiary

    Used for PATCH /beneficiaries/{beneficiary_id}. Omitted fields are left
    untouched.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    national_id: Optional[str] = None
    phone: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        # Only runs when name is sent; null or blank is rejected
        if v is None or not v.strip():
            raise ValueError("Name must not be blank")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "address": "Jableh, Al-Fayd street",
                "phone": "+963 41 000 000"
            }
        }
