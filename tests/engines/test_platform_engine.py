"""
Citizen Platform Engine — Registry Initialization & Issuer Allow-List
======================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.commands.rejection import ReasonCode
from core.config.limits import PlatformLimits
from core.ledger.errors import AuthorizationError, CapacityError, DuplicateRecordError, StateError
from core.runtime.ids import SequentialIdProvider
from core.runtime.platform_runtime import PlatformRuntime
from core.time.clock import FixedClock
from engines.platform.commands import (
    ISSUER_AUTHORIZE_REQUEST,
    PLATFORM_INITIALIZE_REQUEST,
    AuthorizeIssuerRequest,
    InitializePlatformRequest,
)
from engines.platform.events import ISSUER_AUTHORIZED_V1, PLATFORM_INITIALIZED_V1
from engines.platform.services import PlatformProjectionStore

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
AUTHORITY = "authority-wallet"


def _runtime(**limit_overrides) -> PlatformRuntime:
    return PlatformRuntime.in_memory(
        limits=PlatformLimits(**limit_overrides),
        clock=FixedClock(NOW),
        id_provider=SequentialIdProvider(),
    )


# ══════════════════════════════════════════════════════════════
# REQUESTS
# ══════════════════════════════════════════════════════════════

class TestPlatformRequests:
    def test_initialize_to_command(self):
        cmd = InitializePlatformRequest(actor_id=AUTHORITY, issued_at=NOW).to_command()
        assert cmd["command_type"] == PLATFORM_INITIALIZE_REQUEST
        assert cmd["payload"]["authority"] == AUTHORITY

    def test_authorize_to_command(self):
        cmd = AuthorizeIssuerRequest(issuer="issuer-1", actor_id=AUTHORITY, issued_at=NOW).to_command()
        assert cmd["command_type"] == ISSUER_AUTHORIZE_REQUEST
        assert cmd["payload"]["issuer"] == "issuer-1"

    def test_empty_issuer_rejected(self):
        with pytest.raises(ValueError):
            AuthorizeIssuerRequest(issuer="", actor_id=AUTHORITY, issued_at=NOW)

    def test_empty_signer_rejected(self):
        with pytest.raises(ValueError):
            InitializePlatformRequest(actor_id="", issued_at=NOW)


# ══════════════════════════════════════════════════════════════
# INITIALIZATION
# ══════════════════════════════════════════════════════════════

class TestInitializePlatform:
    def test_creates_registry_with_zero_counters(self):
        runtime = _runtime()
        result = runtime.init_platform(AUTHORITY)

        assert result.payload["authority"] == AUTHORITY
        registry = runtime.context.registry()
        assert registry.authority == AUTHORITY
        assert registry.total_properties == 0
        assert registry.total_certificates == 0
        assert registry.authorized_issuers == []
        assert registry.mint_authority.holder == runtime.context.address

    def test_second_initialize_fails_and_keeps_authority(self):
        runtime = _runtime()
        runtime.init_platform(AUTHORITY)

        with pytest.raises(DuplicateRecordError):
            runtime.init_platform("someone-else")

        assert runtime.context.registry().authority == AUTHORITY
        assert runtime.journal.all_events()[-1]["status"] == "REJECTED"

    def test_operations_before_initialize_rejected(self):
        runtime = _runtime()
        with pytest.raises(StateError) as exc_info:
            runtime.add_issuer(AUTHORITY, "issuer-1")
        assert exc_info.value.code == ReasonCode.PLATFORM_NOT_INITIALIZED

    def test_platform_info(self):
        runtime = _runtime()
        assert runtime.platform_info()["initialized"] is False
        runtime.init_platform(AUTHORITY)
        info = runtime.platform_info()
        assert info["initialized"] is True
        assert info["authority"] == AUTHORITY
        assert info["max_issuers"] == 10
        assert info["initialized_at"] == str(NOW)


# ══════════════════════════════════════════════════════════════
# ISSUER ALLOW-LIST
# ══════════════════════════════════════════════════════════════

class TestAuthorizeIssuer:
    def test_authority_appends_issuer(self):
        runtime = _runtime()
        runtime.init_platform(AUTHORITY)
        result = runtime.add_issuer(AUTHORITY, "issuer-1")

        assert result.payload["issuer_count"] == 1
        assert runtime.is_authorized_issuer("issuer-1")
        assert runtime.context.registry().authorized_issuers == ["issuer-1"]

    def test_insertion_order_preserved(self):
        runtime = _runtime()
        runtime.init_platform(AUTHORITY)
        for issuer in ("b", "a", "c"):
            runtime.add_issuer(AUTHORITY, issuer)
        assert runtime.context.registry().authorized_issuers == ["b", "a", "c"]
        assert [e["issuer"] for e in runtime.list_issuers()] == ["b", "a", "c"]

    def test_non_authority_rejected(self):
        runtime = _runtime()
        runtime.init_platform(AUTHORITY)
        with pytest.raises(AuthorizationError) as exc_info:
            runtime.add_issuer("intruder", "issuer-1")
        assert exc_info.value.code == ReasonCode.AUTHORITY_REQUIRED
        assert runtime.context.registry().authorized_issuers == []

    def test_duplicate_issuer_rejected(self):
        runtime = _runtime()
        runtime.init_platform(AUTHORITY)
        runtime.add_issuer(AUTHORITY, "issuer-1")
        with pytest.raises(StateError) as exc_info:
            runtime.add_issuer(AUTHORITY, "issuer-1")
        assert exc_info.value.code == ReasonCode.ISSUER_ALREADY_AUTHORIZED
        assert runtime.context.registry().authorized_issuers == ["issuer-1"]

    def test_capacity_enforced(self):
        runtime = _runtime(max_issuers=2)
        runtime.init_platform(AUTHORITY)
        runtime.add_issuer(AUTHORITY, "issuer-1")
        runtime.add_issuer(AUTHORITY, "issuer-2")
        with pytest.raises(CapacityError) as exc_info:
            runtime.add_issuer(AUTHORITY, "issuer-3")
        assert exc_info.value.code == ReasonCode.ISSUER_CAPACITY_EXCEEDED
        assert len(runtime.context.registry().authorized_issuers) == 2

    def test_duplicate_check_precedes_capacity(self):
        runtime = _runtime(max_issuers=1)
        runtime.init_platform(AUTHORITY)
        runtime.add_issuer(AUTHORITY, "issuer-1")
        with pytest.raises(StateError):
            runtime.add_issuer(AUTHORITY, "issuer-1")


# ══════════════════════════════════════════════════════════════
# PROJECTION
# ══════════════════════════════════════════════════════════════

class TestPlatformProjection:
    def test_apply_events(self):
        projection = PlatformProjectionStore()
        projection.apply(PLATFORM_INITIALIZED_V1, {
            "authority": AUTHORITY, "initialized_at": "t0",
        })
        projection.apply(ISSUER_AUTHORIZED_V1, {
            "issuer": "issuer-1", "actor_id": AUTHORITY, "authorized_at": "t1",
        })
        assert projection.authority == AUTHORITY
        assert projection.get_issuer("issuer-1")["authorized_by"] == AUTHORITY
        assert projection.event_count == 2

    def test_ignores_foreign_events(self):
        projection = PlatformProjectionStore()
        projection.apply("rent.yield.claimed.v1", {"claimant": "x"})
        assert projection.event_count == 0

    def test_truncate(self):
        projection = PlatformProjectionStore()
        projection.apply(PLATFORM_INITIALIZED_V1, {"authority": AUTHORITY})
        projection.truncate()
        assert projection.authority is None
        assert projection.list_issuers() == []
