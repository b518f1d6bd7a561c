"""Audit Entry Domain Entity

Immutable append-only record of a mutation to a watched entity.
Written in the same transaction as the mutation it describes.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, Integer, JSON, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from src.domain.base import BaseModel, enum_type, utc_now


class AuditAction(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


SnapshotType = JSON().with_variant(JSONB(), "postgresql")


class AuditEntry(BaseModel, table=True):
    """
    Audit Entry - Before/after snapshot of a watched-entity mutation

    Domain Rules:
    - Entries are never updated or deleted
    - user_id is None when the actor could not be resolved
    - old_values is None for inserts, new_values is None for deletes
    """

    __tablename__ = "audit_log"
    __table_args__ = (
        Index('ix_audit_log_target', 'table_name', 'row_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
        description="Audit entry identifier (auto-increment)"
    )

    user_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="Acting user (None when unresolved)"
    )

    action: AuditAction = Field(
        sa_column=Column(enum_type(AuditAction, "audit_action"), nullable=False),
        description="INSERT, UPDATE or DELETE"
    )

    table_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Table of the mutated row"
    )

    row_id: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Identifier of the mutated row"
    )

    old_values: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column(SnapshotType, nullable=True),
        description="Row snapshot before the mutation"
    )

    new_values: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column(SnapshotType, nullable=True),
        description="Row snapshot after the mutation"
    )

    timestamp: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="When the mutation was recorded"
    )

    client_origin: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Network origin of the request"
    )
