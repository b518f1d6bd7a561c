"""Unit tests for AuditTrail and RequestActorResolver"""

import logging
import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.actor_resolver import RequestActorResolver
from src.app.services.actor_resolver import ActorUnresolved
from src.app.services.audit_trail import AuditTrail, snapshot
from src.domain.audit_entry import AuditAction
from src.domain.beneficiary import Beneficiary

ACTOR_ID = "3f1c2a9e-8d4b-4c1e-9a7f-0b5d6e2c1a44"


class TestRequestActorResolver:

    def test_uuid_actor(self):
        assert RequestActorResolver(ACTOR_ID.upper()).resolve() == ACTOR_ID

    @pytest.mark.parametrize("raw", [None, "", "   ", "admin", "12345"])
    def test_unresolvable_actor(self, raw):
        with pytest.raises(ActorUnresolved):
            RequestActorResolver(raw).resolve()


class TestSnapshot:

    def test_snapshot_is_plain_dict(self):
        beneficiary = Beneficiary(id=1, name="Omar", address=None, national_id="1", phone=None)
        data = snapshot(beneficiary)
        assert data["id"] == 1
        assert data["name"] == "Omar"
        assert data["address"] is None


@pytest.mark.asyncio
class TestAuditTrail:

    async def test_record_mutation_flushes_entry(self):
        audit_repo = MagicMock()
        audit_repo.create = AsyncMock(side_effect=lambda entry: entry)
        trail = AuditTrail(audit_repo, RequestActorResolver(ACTOR_ID))

        entry = await trail.record_mutation(
            entity_name="beneficiaries",
            entity_id=7,
            action=AuditAction.UPDATE,
            before={"name": "a"},
            after={"name": "b"},
            origin="192.168.1.4",
        )

        assert entry.user_id == ACTOR_ID
        assert entry.row_id == "7"
        assert entry.old_values == {"name": "a"}
        assert entry.new_values == {"name": "b"}
        audit_repo.create.assert_called_once_with(entry)

    async def test_unresolved_actor_logs_warning(self, caplog):
        audit_repo = MagicMock()
        audit_repo.create = AsyncMock(side_effect=lambda entry: entry)
        trail = AuditTrail(audit_repo, RequestActorResolver("not-a-user"))

        with caplog.at_level(logging.WARNING):
            entry = await trail.record_mutation(
                entity_name="beneficiaries",
                entity_id=7,
                action=AuditAction.UPDATE,
                before={},
                after={},
                origin=None,
            )

        assert entry.user_id is None
        assert "ACTOR_UNRESOLVED" in caplog.text

    async def test_explicit_actor_wins(self):
        audit_repo = MagicMock()
        audit_repo.create = AsyncMock(side_effect=lambda entry: entry)
        resolver = MagicMock()
        trail = AuditTrail(audit_repo, resolver)

        entry = await trail.record_mutation(
            entity_name="beneficiaries",
            entity_id=7,
            action=AuditAction.INSERT,
            before=None,
            after={"name": "b"},
            origin=None,
            actor="system",
        )

        assert entry.user_id == "system"
        resolver.resolve.assert_not_called()
