"""Shared base for all table models"""

from datetime import datetime, timezone
from enum import Enum
from typing import Type
from sqlalchemy import Enum as SAEnum
from sqlmodel import SQLModel


def utc_now() -> datetime:
    """Timezone-aware current time; timestamp columns are DateTime(timezone=True)"""
    return datetime.now(timezone.utc)


def enum_type(enum_cls: Type[Enum], name: str) -> SAEnum:
    """Column type storing enum values ('admin_approved'), not member names"""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


class BaseModel(SQLModel):
    """Base class for domain entities persisted through SQLModel"""
    pass
